"""Providers of GCR access tokens."""
import os
import json
import shutil
import logging
import subprocess
from abc import ABC, abstractmethod
from datetime import timezone
from typing import Optional

import google.auth
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from .errors import CredentialsNotFoundError, TokenSourceError
from .models import GCRAuth
from .store import CredStore

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

# Upper bound for a single gcloud invocation, in seconds
GCLOUD_TIMEOUT = 30


class TokenSourceProvider(ABC):
    """Capability interface exposing one fetch operation per token source."""

    @abstractmethod
    def env_token(self) -> str:
        """Token from Application Default Credentials."""
        pass

    @abstractmethod
    def gcloud_sdk_token(self) -> str:
        """Token from the locally installed Cloud SDK."""
        pass

    @abstractmethod
    def cred_store_token(self, store: CredStore) -> str:
        """Token from the grant cached in the credential store."""
        pass


class GoogleTokenSourceProvider(TokenSourceProvider):
    """Token sources backed by google-auth and the gcloud CLI."""

    def __init__(self, gcloud_timeout: float = GCLOUD_TIMEOUT):
        self.gcloud_timeout = gcloud_timeout
        self._request = None

    @property
    def request(self) -> Request:
        """Lazy-initialize HTTP transport."""
        if self._request is None:
            self._request = Request()
        return self._request

    def env_token(self) -> str:
        try:
            credentials, _project = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
            credentials.refresh(self.request)
        except GoogleAuthError as e:
            raise TokenSourceError(f"application default credentials unavailable: {e}") from e

        if not credentials.token:
            raise TokenSourceError("application default credentials returned no token")
        return credentials.token

    def _gcloud_binary(self) -> Optional[str]:
        return shutil.which(os.getenv("CLOUDSDK_GCLOUD_BINARY", "gcloud"))

    def gcloud_sdk_token(self) -> str:
        binary = self._gcloud_binary()
        if not binary:
            raise TokenSourceError("gcloud not found on PATH")

        try:
            result = subprocess.run(
                [binary, "config", "config-helper", "--force-auth-refresh", "--format=json"],
                capture_output=True, text=True, check=True, timeout=self.gcloud_timeout
            )
        except subprocess.TimeoutExpired as e:
            raise TokenSourceError(f"gcloud timed out after {self.gcloud_timeout}s") from e
        except (subprocess.CalledProcessError, OSError) as e:
            raise TokenSourceError(f"gcloud config config-helper failed: {e}") from e

        try:
            helper_output = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise TokenSourceError(f"failed to parse gcloud output: {e}") from e

        credential = helper_output.get("credential") if isinstance(helper_output, dict) else None
        token = credential.get("access_token") if isinstance(credential, dict) else None
        if not token:
            raise TokenSourceError("gcloud returned no access token")

        logger.debug("Obtained access token from gcloud")
        return token

    def cred_store_token(self, store: CredStore) -> str:
        try:
            auth = store.get_gcr_auth()
        except CredentialsNotFoundError as e:
            raise TokenSourceError("no GCR credentials in the credential store") from e

        if auth.access_token and not auth.is_expired():
            return auth.access_token

        if not auth.refresh_token:
            raise TokenSourceError("cached GCR access token expired and cannot be refreshed")

        return self._refresh(store, auth)

    def _refresh(self, store: CredStore, auth: GCRAuth) -> str:
        credentials = Credentials(
            token=None,
            refresh_token=auth.refresh_token,
            token_uri=auth.token_uri,
            client_id=auth.client_id,
            client_secret=auth.client_secret,
        )
        try:
            credentials.refresh(self.request)
        except GoogleAuthError as e:
            raise TokenSourceError(f"failed to refresh cached GCR credentials: {e}") from e

        if not credentials.token:
            raise TokenSourceError("refreshing cached GCR credentials returned no token")

        # google-auth reports expiry as naive UTC
        expiry = credentials.expiry
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)

        try:
            store.set_gcr_auth(GCRAuth(
                access_token=credentials.token,
                refresh_token=credentials.refresh_token or auth.refresh_token,
                token_expiry=expiry,
                client_id=auth.client_id,
                client_secret=auth.client_secret,
                token_uri=auth.token_uri,
            ))
        except Exception as e:
            logger.warning(f"Refreshed GCR access token but failed to cache it: {e}")
        else:
            logger.info("Refreshed GCR access token cached in the credential store")
        return credentials.token
