"""Narrow interfaces to the platform and the rest of the chat client.

Handlers never talk to the OS or to application state directly; they go
through the protocols below. Each protocol has a default adapter:

  - Clipboard: SystemClipboard (pipes text into pbcopy / wl-copy / xclip / xsel)
  - UrlOpener: BrowserOpener (stdlib ``webbrowser``)
  - UrlParser: HttpxUrlParser (``httpx.URL`` validation and encoding)
  - PeerDirectory: LoggingDirectory (logs lookups, resolves nothing)
  - RevealPrompt: LoggingRevealPrompt (logs, never confirms)

Platform adapters are fire-and-forget: failures are logged, not raised.
"""

import logging
import shutil
import subprocess
import webbrowser
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import unquote

import httpx

logger = logging.getLogger(__name__)


# ── Value types ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PeerRef:
    """Opaque handle for a chat peer (user, bot, group or channel).

    Owned by the surrounding client; linkspan only compares and forwards it.
    """

    id: int
    name: str = ""
    is_user: bool = False  # private chat with a user (bots are users too)


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """Result of the URL parse primitive.

    ``encoded`` is the canonical percent-encoded form used for navigation,
    ``display`` the same URL decoded for people to read. Both are empty
    when ``valid`` is False.
    """

    valid: bool
    encoded: str = ""
    display: str = ""


# ── Protocols ────────────────────────────────────────────────────────────


@runtime_checkable
class Clipboard(Protocol):
    def write(self, text: str) -> None: ...


@runtime_checkable
class UrlOpener(Protocol):
    def open(self, url: str) -> None: ...


@runtime_checkable
class UrlParser(Protocol):
    def parse(self, text: str) -> ParsedUrl:
        """Validate and canonicalize *text*. Must never raise."""
        ...


@runtime_checkable
class RevealPrompt(Protocol):
    def ask(self, url: str, on_confirm: Callable[[], None]) -> None:
        """Show *url* to the user; call *on_confirm* only if they accept."""
        ...


@runtime_checkable
class PeerDirectory(Protocol):
    """Lookups and navigation owned by the rest of the client."""

    def open_username(self, username: str) -> None:
        """Resolve a public username (without ``@``) and open that chat."""
        ...

    def open_user(self, user_id: int, access_hash: int) -> None:
        """Open the profile of an already-known user."""
        ...

    def user_name(self, user_id: int) -> str | None:
        """Return the current display name of a loaded user, or None."""
        ...

    def search_hashtag(self, tag: str, peer: PeerRef | None) -> None:
        """Start a search for *tag*, scoped to *peer* when given."""
        ...

    def send_bot_command(
        self, peer: PeerRef, bot: PeerRef | None, command: str
    ) -> None:
        """Send *command* to *peer*, addressed to *bot* when known."""
        ...

    def open_local_url(self, url: str) -> None:
        """Handle a ``tg://`` deep link inside the client."""
        ...


# ── Default adapters ─────────────────────────────────────────────────────

# Tried in order when no clipboard command is configured
_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)

_CLIPBOARD_TIMEOUT = 5.0


class SystemClipboard:
    """Clipboard writer that pipes text into a platform clipboard tool."""

    def __init__(self, command: Sequence[str] | None = None) -> None:
        self._command = list(command) if command else None

    def _resolve_command(self) -> list[str] | None:
        if self._command:
            return self._command
        for candidate in _CLIPBOARD_COMMANDS:
            if shutil.which(candidate[0]):
                return list(candidate)
        return None

    def write(self, text: str) -> None:
        command = self._resolve_command()
        if command is None:
            logger.warning(
                "No clipboard tool found (tried %s)",
                ", ".join(c[0] for c in _CLIPBOARD_COMMANDS),
            )
            return
        try:
            subprocess.run(
                command,
                input=text.encode("utf-8"),
                check=True,
                timeout=_CLIPBOARD_TIMEOUT,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Clipboard write via %s failed: %s", command[0], e)
            return
        logger.debug("Copied %d chars to clipboard", len(text))


class BrowserOpener:
    """Opens URLs in a web browser through the stdlib ``webbrowser`` module."""

    def __init__(self, browser: str | None = None) -> None:
        self._browser = browser

    def open(self, url: str) -> None:
        try:
            controller = webbrowser.get(self._browser)
            opened = controller.open(url)
        except webbrowser.Error as e:
            logger.warning("Could not open %s: %s", url, e)
            return
        if not opened:
            logger.warning("Browser refused to open %s", url)


class HttpxUrlParser:
    """URL parse primitive backed by ``httpx.URL``.

    httpx lowercases the scheme and host, IDNA-encodes unicode hosts and
    percent-encodes unsafe characters, which gives the canonical encoded
    form. The display form undoes the percent-encoding and the IDNA host.
    """

    def parse(self, text: str) -> ParsedUrl:
        # idna.IDNAError (bad punycode host) is a UnicodeError subclass
        try:
            url = httpx.URL(text)
            encoded = str(url)
            display = unquote(encoded)
            raw_host = url.raw_host.decode("ascii")
            if raw_host and url.host != raw_host:
                display = display.replace(raw_host, url.host, 1)
        except (httpx.InvalidURL, UnicodeError):
            return ParsedUrl(valid=False)
        return ParsedUrl(valid=True, encoded=encoded, display=display)


class LoggingDirectory:
    """Directory stand-in for running without a client: logs every request."""

    def open_username(self, username: str) -> None:
        logger.info("Open username @%s", username)

    def open_user(self, user_id: int, access_hash: int) -> None:
        logger.info("Open user %d", user_id)

    def user_name(self, user_id: int) -> str | None:
        return None

    def search_hashtag(self, tag: str, peer: PeerRef | None) -> None:
        logger.info("Search %s in %s", tag, peer.name if peer else "all chats")

    def send_bot_command(
        self, peer: PeerRef, bot: PeerRef | None, command: str
    ) -> None:
        logger.info(
            "Send %s to %s (bot=%s)", command, peer.name, bot.name if bot else None
        )

    def open_local_url(self, url: str) -> None:
        logger.info("Open local url %s", url)


class LoggingRevealPrompt:
    """Reveal prompt that never confirms: hidden links stay unopened."""

    def ask(self, url: str, on_confirm: Callable[[], None]) -> None:
        logger.info("Hidden link needs confirmation before opening: %s", url)
