"""
catalog.api_clients
~~~~~~~~~~~~~~~~~~~
Thin wrappers around external REST APIs.
Import the *client* singleton if you only need one global instance.
"""

from plotTwist.catalog.api_clients.tmdb_client import TMDBClient, client as tmdb_client

__all__ = ["TMDBClient", "tmdb_client"]
