"""Shared pytest fixtures and configuration for the clikit test suite.

Guidelines
----------
* No network or filesystem access in any test.
* Clients are small hand-written fakes so capability checks behave as
  they would for real clients (``MagicMock`` satisfies every protocol).
* Runner tests assert on captured stdout/stderr, never on log output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pytest

from clikit.cli.logs import ROOT_LOGGER_NAME


class FakeClient:
    """Client implementing both optional runner capabilities."""

    def __init__(self) -> None:
        self.cache_disabled: bool = False
        self.disconnect_calls: int = 0

    def disable_cache(self) -> None:
        self.cache_disabled = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1


class ClientFactory:
    """Zero-argument factory that records every client it builds."""

    def __init__(self, client_class: type[Any] = FakeClient) -> None:
        self._client_class = client_class
        self.created: list[Any] = []

    def __call__(self) -> Any:
        client = self._client_class()
        self.created.append(client)
        return client

    @property
    def client(self) -> Any:
        assert len(self.created) == 1, f"expected one client, got {len(self.created)}"
        return self.created[0]


@pytest.fixture
def factory() -> ClientFactory:
    return ClientFactory()


@pytest.fixture(autouse=True)
def _reset_clikit_logger() -> Iterator[None]:
    """Drop handlers installed by ``configure_logging`` between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
