"""Shared fixtures for linkspan unit tests.

Provides a ClickContext wired to MagicMock ports, so tests can assert on
clipboard writes, opened URLs and directory requests, plus a factory for
peer handles.
"""

from unittest.mock import MagicMock

import pytest

from linkspan.context import ClickContext, _reset_click_context, set_click_context
from linkspan.ports import (
    Clipboard,
    PeerDirectory,
    PeerRef,
    RevealPrompt,
    UrlOpener,
)


def make_mock_context() -> ClickContext:
    """Build a ClickContext whose ports are all MagicMocks."""
    directory = MagicMock(spec=PeerDirectory)
    directory.user_name.return_value = None
    return ClickContext(
        clipboard=MagicMock(spec=Clipboard),
        opener=MagicMock(spec=UrlOpener),
        directory=directory,
        reveal=MagicMock(spec=RevealPrompt),
    )


@pytest.fixture(autouse=True)
def _isolated_click_context():
    """Never let a test touch the real clipboard or browser."""
    set_click_context(make_mock_context())
    yield
    _reset_click_context()


@pytest.fixture
def click_ctx() -> ClickContext:
    return make_mock_context()


@pytest.fixture
def make_peer():
    """Factory: build a PeerRef."""

    def _make(
        peer_id: int = 100,
        name: str = "chat",
        *,
        is_user: bool = False,
    ) -> PeerRef:
        return PeerRef(id=peer_id, name=name, is_user=is_user)

    return _make
