"""Click context — the current chat plus the services handlers act through.

Bot-command links need to know which chat (and which bot in a group) a bare
``/cmd`` belongs to. That state lives in one process-wide ``ClickContext``,
together with the platform ports (clipboard, URL opener, directory, reveal
prompt) every side-effecting handler operation uses.

Single-writer discipline: the chat view calls ``set_peer()`` / ``set_bot()``
on chat switches, on the UI thread, never while a click is being resolved.
Handlers read the fields fresh on each click and never cache them.

Every handler operation also takes an explicit ``context`` argument; when
it is None the process-wide context from ``get_click_context()`` is used.
"""

import logging
from dataclasses import dataclass

from .ports import (
    BrowserOpener,
    Clipboard,
    LoggingDirectory,
    LoggingRevealPrompt,
    PeerDirectory,
    PeerRef,
    RevealPrompt,
    SystemClipboard,
    UrlOpener,
)

logger = logging.getLogger(__name__)


@dataclass
class ClickContext:
    """Services and current-chat state consulted when a link is activated."""

    clipboard: Clipboard
    opener: UrlOpener
    directory: PeerDirectory
    reveal: RevealPrompt
    peer: PeerRef | None = None  # chat the user is looking at
    bot: PeerRef | None = None  # bot addressed by bare commands in that chat

    def set_peer(self, peer: PeerRef | None) -> None:
        self.peer = peer
        logger.debug("Command peer set to %s", peer.id if peer else None)

    def set_bot(self, bot: PeerRef | None) -> None:
        self.bot = bot
        logger.debug("Command bot set to %s", bot.id if bot else None)


def default_context() -> ClickContext:
    """Build a context wired to the default platform adapters."""
    from .config import config

    return ClickContext(
        clipboard=SystemClipboard(config.clipboard_command),
        opener=BrowserOpener(config.browser),
        directory=LoggingDirectory(),
        reveal=LoggingRevealPrompt(),
    )


# Singleton cache
_active: ClickContext | None = None


def get_click_context() -> ClickContext:
    """Return the process-wide click context (lazy singleton)."""
    global _active
    if _active is None:
        _active = default_context()
    return _active


def set_click_context(context: ClickContext) -> None:
    """Install *context* as the process-wide click context."""
    global _active
    _active = context


def resolve_context(context: ClickContext | None) -> ClickContext:
    """Return *context*, or the process-wide one when None."""
    return context if context is not None else get_click_context()


def _reset_click_context() -> None:
    """Reset the cached context singleton (for tests only)."""
    global _active
    _active = None
