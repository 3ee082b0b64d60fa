"""Error kinds raised by the credential helper."""
from typing import Dict, Optional


class CredHelperError(Exception):
    """Base class for credential helper errors."""
    pass


class CredentialsNotFoundError(CredHelperError):
    """No credentials are stored for the requested server URL."""

    def __init__(self, server_url: Optional[str] = None):
        self.server_url = server_url
        if server_url:
            super().__init__(f"credentials not found in native keychain for {server_url}")
        else:
            super().__init__("credentials not found in native keychain")


class UnsupportedOperationError(CredHelperError):
    """Operation is not permitted for managed registry hosts."""
    pass


class ConfigError(CredHelperError):
    """Configuration error exception."""
    pass


class TokenSourceConfigError(ConfigError):
    """A configured token source name is not recognized."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unsupported token source: {name!r}\n"
            f"Supported token sources: env, gcloud_sdk, store"
        )


class TokenSourceError(CredHelperError):
    """A single token source failed to produce a token."""
    pass


class NoTokenSourceError(CredHelperError):
    """Every configured token source failed."""

    def __init__(self, failures: Dict[str, str]):
        self.failures = dict(failures)
        if failures:
            details = "; ".join(f"{name}: {reason}" for name, reason in failures.items())
        else:
            details = "no token sources configured"
        super().__init__(f"no managed token source produced a token ({details})")


def is_credentials_not_found(err: BaseException) -> bool:
    """Return True if ``err`` reports missing credentials."""
    return isinstance(err, CredentialsNotFoundError)
