"""Workflow resolving a GCR access token from the configured sources."""
import logging
from typing import Callable, Dict

from ..domains.config_loader import UserConfig, parse_token_sources
from ..domains.errors import NoTokenSourceError
from ..domains.models import TokenSource
from ..domains.store import CredStore
from ..domains.token_sources import TokenSourceProvider

logger = logging.getLogger(__name__)


class AccessTokenResolver:
    """Tries the user's token sources in order until one yields a token."""

    def __init__(self, store: CredStore, user_config: UserConfig, token_sources: TokenSourceProvider):
        self.store = store
        self.user_config = user_config
        self.token_sources = token_sources

    def _fetcher(self, source: TokenSource) -> Callable[[], str]:
        if source is TokenSource.ENV:
            return self.token_sources.env_token
        if source is TokenSource.GCLOUD_SDK:
            return self.token_sources.gcloud_sdk_token
        return lambda: self.token_sources.cred_store_token(self.store)

    def resolve(self) -> str:
        """
        Fetch a GCR access token.

        Returns:
            Token from the first configured source that produces one

        Raises:
            TokenSourceConfigError: If any configured source name is unknown;
                raised before any source is consulted
            NoTokenSourceError: If every configured source failed
        """
        sources = parse_token_sources(self.user_config.token_sources())

        failures: Dict[str, str] = {}
        for source in sources:
            try:
                token = self._fetcher(source)()
            except Exception as e:
                logger.debug(f"Token source '{source.value}' failed: {e}")
                failures[source.value] = str(e) or type(e).__name__
                continue

            if token:
                logger.debug(f"Using GCR access token from '{source.value}'")
                return token

            logger.debug(f"Token source '{source.value}' returned an empty token")
            failures[source.value] = "empty token"

        raise NoTokenSourceError(failures)
