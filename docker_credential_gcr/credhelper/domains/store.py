"""Credential store interface used by the helper."""
from abc import ABC, abstractmethod

from .models import Credential, GCRAuth


class CredStore(ABC):
    """
    Storage backend for non-GCR credentials and the cached GCR grant.

    Lookups of missing entries raise CredentialsNotFoundError.
    """

    @abstractmethod
    def get(self, server_url: str) -> Credential:
        pass

    @abstractmethod
    def set(self, credential: Credential) -> None:
        pass

    @abstractmethod
    def delete(self, server_url: str) -> None:
        pass

    @abstractmethod
    def get_gcr_auth(self) -> GCRAuth:
        """Return the GCR grant cached by a previous login."""
        pass

    @abstractmethod
    def set_gcr_auth(self, auth: GCRAuth) -> None:
        """Replace the cached GCR grant."""
        pass
