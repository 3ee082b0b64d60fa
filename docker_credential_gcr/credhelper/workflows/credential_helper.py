"""Credential helper routing GCR hosts to access tokens and others to the store."""
import logging
from typing import Optional, Tuple

from ..domains.config_loader import UserConfig
from ..domains.errors import CredentialsNotFoundError, UnsupportedOperationError
from ..domains.hostnames import is_managed_hostname
from ..domains.models import GCR_USERNAME, Credential
from ..domains.store import CredStore
from ..domains.token_sources import GoogleTokenSourceProvider, TokenSourceProvider
from .access_token import AccessTokenResolver

logger = logging.getLogger(__name__)


class GCRCredentialHelper:
    """
    Docker credential helper for Google Container Registry.

    GCR hosts are read-only: lookups return a freshly resolved access token,
    while add and delete are rejected. Every other host is stored in and
    served from the credential store.
    """

    def __init__(self, store: CredStore, user_config: UserConfig,
                 token_sources: Optional[TokenSourceProvider] = None):
        self.store = store
        self.user_config = user_config
        self.resolver = AccessTokenResolver(store, user_config, token_sources or GoogleTokenSourceProvider())

    def add(self, credential: Credential) -> None:
        if is_managed_hostname(credential.server_url):
            raise UnsupportedOperationError(
                f"add is unsupported for GCR host {credential.server_url}; "
                f"GCR credentials come from the configured token sources"
            )
        return self.store.set(credential)

    def get(self, server_url: str) -> Tuple[str, str]:
        """
        Look up credentials for a registry.

        Args:
            server_url: Registry hostname, optionally with scheme

        Returns:
            (username, secret) tuple

        Raises:
            CredentialsNotFoundError: If a non-GCR host has no stored credentials
                and falling back to a GCR access token is disabled
            TokenSourceConfigError: If the token source configuration is invalid
            NoTokenSourceError: If no token source produced a GCR access token
        """
        if is_managed_hostname(server_url):
            return self._gcr_credentials()

        try:
            credential = self.store.get(server_url)
        except CredentialsNotFoundError:
            if not self.user_config.default_to_gcr_access_token():
                raise
            logger.debug(f"No stored credentials for {server_url}, defaulting to GCR access token")
            return self._gcr_credentials()

        return credential.username, credential.secret

    def delete(self, server_url: str) -> None:
        if is_managed_hostname(server_url):
            raise UnsupportedOperationError(
                f"delete is unsupported for GCR host {server_url}; GCR access tokens are not stored"
            )
        return self.store.delete(server_url)

    def _gcr_credentials(self) -> Tuple[str, str]:
        return GCR_USERNAME, self.resolver.resolve()
