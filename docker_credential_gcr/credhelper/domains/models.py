"""Domain models for registry credentials."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from .errors import TokenSourceConfigError

# Username docker must send alongside a GCR access token
GCR_USERNAME = "oauth2accesstoken"

# Tokens this close to expiry are treated as already expired
EXPIRY_DELTA = timedelta(seconds=10)


@dataclass
class Credential:
    """Username/secret pair for a registry server."""
    server_url: str
    username: str
    secret: str = field(repr=False)


class TokenSource(str, Enum):
    """Named providers of GCR access tokens."""
    ENV = "env"
    GCLOUD_SDK = "gcloud_sdk"
    STORE = "store"

    @classmethod
    def parse(cls, name: str) -> "TokenSource":
        """
        Convert a configured token source name.

        Raises:
            TokenSourceConfigError: If the name is not a known token source
        """
        try:
            return cls(name)
        except ValueError:
            raise TokenSourceConfigError(name) from None


DEFAULT_TOKEN_SOURCES = (TokenSource.ENV, TokenSource.GCLOUD_SDK, TokenSource.STORE)


@dataclass
class GCRAuth:
    """OAuth2 grant for GCR cached in the credential store."""
    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    token_expiry: Optional[datetime] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)
    token_uri: str = "https://oauth2.googleapis.com/token"

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.token_expiry is None:
            return False
        now = now or datetime.now(timezone.utc)
        expiry = self.token_expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return now >= expiry - EXPIRY_DELTA
