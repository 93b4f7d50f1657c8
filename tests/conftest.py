"""Shared fixtures: offline HTTP clients and a clean translator environment."""

import httpx
import pytest

TRANSLATOR_ENV_VARS = [
    "TRANSLATOR_PROVIDER",
    "TRANSLATOR_SOURCE",
    "TRANSLATOR_TARGET",
    "TRANSLATOR_PROXY",
    "TRANSLATOR_TIMEOUT",
    "TRANSLATOR_LOG_LEVEL",
    "DEEPL_API_KEY",
    "DEEPL_FREE_API",
    "AZURE_TRANSLATOR_KEY",
    "AZURE_TRANSLATOR_REGION",
    "LIBRE_API_KEY",
]


@pytest.fixture
def mock_client():
    """
    Build an httpx.Client whose requests are answered by ``handler``.

    Usage:
        client = mock_client(lambda request: httpx.Response(200, html="..."))
    """
    clients = []

    def factory(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def clean_env(monkeypatch):
    """
    Remove every translator variable for the test, restoring them afterwards.

    setenv first so monkeypatch records an undo even for unset variables;
    values loaded from a .env file during the test are then removed too.
    """
    for name in TRANSLATOR_ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch
