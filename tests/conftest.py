"""Shared fixtures for credential helper tests."""
from unittest import mock

import pytest

from docker_credential_gcr.credhelper.domains.config_loader import UserConfig
from docker_credential_gcr.credhelper.domains.errors import TokenSourceError
from docker_credential_gcr.credhelper.domains.store import CredStore
from docker_credential_gcr.credhelper.domains.token_sources import TokenSourceProvider


class StubTokenSources(TokenSourceProvider):
    """Token sources returning canned tokens; an Exception value is raised instead."""

    def __init__(self, env=None, gcloud_sdk=None, store=None):
        self.results = {"env": env, "gcloud_sdk": gcloud_sdk, "store": store}
        self.calls = []

    def _fetch(self, name):
        self.calls.append(name)
        result = self.results[name]
        if result is None:
            raise TokenSourceError(f"No token here! ({name})")
        if isinstance(result, Exception):
            raise result
        return result

    def env_token(self):
        return self._fetch("env")

    def gcloud_sdk_token(self):
        return self._fetch("gcloud_sdk")

    def cred_store_token(self, store):
        return self._fetch("store")


@pytest.fixture
def mock_store():
    """Autospec mock of the credential store interface."""
    return mock.create_autospec(CredStore, instance=True)


@pytest.fixture
def mock_user_config():
    """Autospec mock of the user config with default settings."""
    user_config = mock.create_autospec(UserConfig, instance=True)
    user_config.token_sources.return_value = ["env", "gcloud_sdk", "store"]
    user_config.default_to_gcr_access_token.return_value = False
    return user_config


@pytest.fixture
def token_sources_factory():
    """Build StubTokenSources with the given per-source results."""
    return StubTokenSources
