"""
storage
~~~~~~~
Everything the app keeps on disk between runs:

* local_db / local_storage – SQLite-backed key/value "localStorage"
* watchlist                – the user's saved titles
* auth                     – toy local sign-up / sign-in
"""

from plotTwist.storage.local_storage import LocalStorage
from plotTwist.storage.watchlist import Watchlist
from plotTwist.storage.auth import AuthService, AuthError, User

__all__ = ["LocalStorage", "Watchlist", "AuthService", "AuthError", "User"]
