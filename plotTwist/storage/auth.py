"""storage.auth
Toy, local-only account flow.

Accounts live in local storage exactly as entered (no hashing, no
validation beyond "every field filled"). It gates nothing; it only gives
the toolbar a name to show.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from plotTwist import settings
from plotTwist.utils import log_debug
from plotTwist.storage.local_storage import LocalStorage

ACCOUNT_CREATED = "Account created! You can now sign in."
SIGNED_IN       = "Signed in successfully!"


class AuthError(Exception):
    """Login / sign-up failure; the message is shown to the user as-is."""


@dataclass(slots=True)
class User:
    id: str
    email: str
    password: str
    username: str
    token: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            email=data["email"],
            password=data.get("password", ""),
            username=data.get("username", ""),
            token=data.get("token", ""),
            created_at=data.get("created_at", ""),
        )


def _now_ms() -> int:
    return int(time.time() * 1000)


class AuthService:
    """Sign up / sign in / sign out against the local user registry."""

    _PROFILE_FIELDS = {"email", "password", "username"}

    def __init__(self, store: type[LocalStorage] | LocalStorage = LocalStorage):
        self._store = store
        self.current_user: Optional[User] = self._restore_session()

    # ── session ──────────────────────────────────────────────────────────
    def _restore_session(self) -> Optional[User]:
        data = self._store.get_json(settings.SESSION_KEY)
        if data is None:
            return None
        try:
            return User.from_dict(data)
        except (KeyError, TypeError) as exc:
            log_debug(f"auth: discarding unreadable session: {exc}")
            self._store.remove_item(settings.SESSION_KEY)
            return None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def token(self) -> Optional[str]:
        return self._store.get_item(settings.TOKEN_KEY)

    # ── registry ─────────────────────────────────────────────────────────
    def users(self) -> List[User]:
        data = self._store.get_json(settings.USERS_KEY, [])
        users: List[User] = []
        for entry in data if isinstance(data, list) else []:
            try:
                users.append(User.from_dict(entry))
            except (KeyError, TypeError) as exc:
                log_debug(f"auth: skipping bad user record: {exc}")
        return users

    def _save_users(self, users: List[User]) -> None:
        self._store.set_json(settings.USERS_KEY, [u.to_dict() for u in users])

    def _find(self, email: str) -> Optional[User]:
        return next((u for u in self.users() if u.email == email), None)

    # ── flows ────────────────────────────────────────────────────────────
    def sign_up(self, email: str, password: str, username: str) -> User:
        """Register a new account. Does *not* sign in."""
        email, username = email.strip(), username.strip()
        if not email or not password or not username:
            raise AuthError("Please fill all fields")
        if self._find(email):
            raise AuthError("User with this email already exists")

        users = self.users()
        taken = {u.id for u in users}
        stamp = _now_ms()
        while str(stamp) in taken:          # same-millisecond sign-ups
            stamp += 1
        user = User(
            id=str(stamp),
            email=email,
            password=password,
            username=username,
            token=f"user-token-{stamp}",
            created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        )
        self._save_users(users + [user])
        log_debug(f"auth: account created for {email}")
        return user

    def sign_in(self, email: str, password: str) -> User:
        email = email.strip()
        if not email or not password:
            raise AuthError("Please fill all fields")
        user = self._find(email)
        if user is None:
            raise AuthError("No account found. Please sign up first.")
        if user.password != password:
            log_debug(f"auth: wrong password for {email}")
            raise AuthError("Wrong email or password")

        self._store.set_json(settings.SESSION_KEY, user.to_dict())
        self._store.set_item(settings.TOKEN_KEY, user.token)
        self.current_user = user
        log_debug(f"auth: {email} signed in")
        return user

    def sign_out(self) -> None:
        self._store.remove_item(settings.SESSION_KEY)
        self._store.remove_item(settings.TOKEN_KEY)
        if self.current_user:
            log_debug(f"auth: {self.current_user.email} signed out")
        self.current_user = None

    def update_profile(self, **changes: str) -> User:
        """Merge *changes* (email / password / username) into the signed-in user."""
        if self.current_user is None:
            raise AuthError("No user logged in")
        unknown = set(changes) - self._PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        changes = {k: v.strip() if k != "password" else v for k, v in changes.items()}
        if not all(changes.values()):
            raise AuthError("Please fill all fields")
        email = changes.get("email")
        if email and any(u.email == email and u.id != self.current_user.id for u in self.users()):
            raise AuthError("User with this email already exists")

        updated = replace(self.current_user, **changes)
        users = [updated if u.id == updated.id else u for u in self.users()]
        self._save_users(users)
        self._store.set_json(settings.SESSION_KEY, updated.to_dict())
        self.current_user = updated
        return updated
