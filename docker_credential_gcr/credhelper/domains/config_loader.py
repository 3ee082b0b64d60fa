"""User configuration for docker-credential-gcr."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence

from .errors import ConfigError
from .models import DEFAULT_TOKEN_SOURCES, TokenSource
from .preferences import (
    clear_all_preferences,
    clear_preference,
    get_config_path,
    load_preferences,
    set_preference,
)

logger = logging.getLogger(__name__)

TOKEN_SOURCES_KEY = "TokenSources"
DEFAULT_TO_GCR_KEY = "DefaultToGCRAccessToken"


class UserConfig(ABC):
    """Read-only view of the user's helper configuration."""

    @abstractmethod
    def token_sources(self) -> List[str]:
        """Token source names in order of preference."""
        pass

    @abstractmethod
    def default_to_gcr_access_token(self) -> bool:
        """Whether a credential store miss falls back to a GCR access token."""
        pass


class FileUserConfig(UserConfig):
    """Immutable snapshot of the on-disk configuration."""

    def __init__(self, token_sources: Sequence[TokenSource] = DEFAULT_TOKEN_SOURCES,
                 default_to_gcr_access_token: bool = False):
        self._token_sources = tuple(token_sources)
        self._default_to_gcr_access_token = default_to_gcr_access_token

    def token_sources(self) -> List[str]:
        return [source.value for source in self._token_sources]

    def default_to_gcr_access_token(self) -> bool:
        return self._default_to_gcr_access_token

    def __repr__(self) -> str:
        return (f"FileUserConfig(token_sources={self.token_sources()!r}, "
                f"default_to_gcr_access_token={self._default_to_gcr_access_token!r})")


def parse_token_sources(names: Iterable[Any]) -> List[TokenSource]:
    """
    Validate token source names.

    Raises:
        TokenSourceConfigError: If any name is not a known token source
    """
    return [TokenSource.parse(name) for name in names]


def load_user_config() -> FileUserConfig:
    """
    Load and validate the user configuration.

    Missing keys take their defaults: token sources env, gcloud_sdk, store
    and no fallback to GCR access tokens.

    Raises:
        ConfigError: If the config file is malformed or names an unknown token source
    """
    config_path = get_config_path()
    preferences: Dict[str, Any] = load_preferences()

    token_sources = DEFAULT_TOKEN_SOURCES
    if TOKEN_SOURCES_KEY in preferences:
        configured = preferences[TOKEN_SOURCES_KEY]
        if not isinstance(configured, list):
            raise ConfigError(
                f"'{TOKEN_SOURCES_KEY}' in config at {config_path} must be a list\n"
                f"Example: {{\"{TOKEN_SOURCES_KEY}\": [\"env\", \"gcloud_sdk\", \"store\"]}}"
            )
        token_sources = parse_token_sources(configured)
        if not token_sources:
            logger.warning(f"No token sources configured in {config_path}; GCR lookups will fail")

    default_to_gcr = preferences.get(DEFAULT_TO_GCR_KEY, False)
    if not isinstance(default_to_gcr, bool):
        raise ConfigError(f"'{DEFAULT_TO_GCR_KEY}' in config at {config_path} must be true or false")

    config = FileUserConfig(token_sources, default_to_gcr)
    logger.debug(f"Loaded {config!r} from {config_path}")
    return config


def set_token_sources(names: Iterable[str]) -> None:
    """
    Persist the preferred token source order.

    Names are validated before anything is written.
    """
    sources = parse_token_sources(names)
    set_preference(TOKEN_SOURCES_KEY, [source.value for source in sources])


def set_default_to_gcr_access_token(enabled: bool) -> None:
    set_preference(DEFAULT_TO_GCR_KEY, bool(enabled))


def unset_token_sources() -> None:
    """Restore the default token source order."""
    clear_preference(TOKEN_SOURCES_KEY)


def unset_default_to_gcr_access_token() -> None:
    clear_preference(DEFAULT_TO_GCR_KEY)


def reset_user_config() -> None:
    """Restore every setting to its default."""
    clear_all_preferences()
