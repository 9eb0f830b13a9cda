"""Tests for the default platform adapters in linkspan.ports."""

import dataclasses
import logging
import subprocess
import webbrowser
from unittest.mock import MagicMock, patch

import pytest

from linkspan.ports import (
    BrowserOpener,
    Clipboard,
    HttpxUrlParser,
    LoggingDirectory,
    LoggingRevealPrompt,
    PeerDirectory,
    PeerRef,
    RevealPrompt,
    SystemClipboard,
    UrlOpener,
    UrlParser,
)


class TestProtocolConformance:
    @pytest.mark.parametrize(
        "adapter,protocol",
        [
            (SystemClipboard(), Clipboard),
            (BrowserOpener(), UrlOpener),
            (HttpxUrlParser(), UrlParser),
            (LoggingDirectory(), PeerDirectory),
            (LoggingRevealPrompt(), RevealPrompt),
        ],
        ids=["clipboard", "opener", "parser", "directory", "reveal"],
    )
    def test_default_adapter_satisfies_protocol(self, adapter, protocol) -> None:
        assert isinstance(adapter, protocol)


class TestHttpxUrlParser:
    def test_valid_url(self) -> None:
        parsed = HttpxUrlParser().parse("https://example.com/path")
        assert parsed.valid is True
        assert parsed.encoded == "https://example.com/path"
        assert parsed.display == "https://example.com/path"

    def test_space_is_encoded_but_displayed(self) -> None:
        parsed = HttpxUrlParser().parse("https://example.com/a b")
        assert parsed.encoded == "https://example.com/a%20b"
        assert parsed.display == "https://example.com/a b"

    def test_unicode_host(self) -> None:
        parsed = HttpxUrlParser().parse("https://пример.рф/")
        assert parsed.valid is True
        assert parsed.encoded.startswith("https://xn--")
        assert parsed.display == "https://пример.рф/"

    def test_invalid_port(self) -> None:
        parsed = HttpxUrlParser().parse("https://example.com:notaport/")
        assert parsed.valid is False
        assert parsed.encoded == ""
        assert parsed.display == ""

    @pytest.mark.parametrize(
        "text",
        ["http://xn--zz.com", "http://a.com/\ud800"],
        ids=["bad-punycode-host", "lone-surrogate"],
    )
    def test_unencodable_input_is_invalid(self, text: str) -> None:
        parsed = HttpxUrlParser().parse(text)
        assert parsed.valid is False
        assert parsed.encoded == ""


class TestSystemClipboard:
    def test_configured_command(self) -> None:
        with patch("linkspan.ports.subprocess.run") as run:
            SystemClipboard(["my-copy", "--in"]).write("hello")
        run.assert_called_once()
        assert run.call_args.args[0] == ["my-copy", "--in"]
        assert run.call_args.kwargs["input"] == b"hello"

    def test_autodetects_first_available_tool(self) -> None:
        def which(name: str) -> str | None:
            return "/usr/bin/xclip" if name == "xclip" else None

        with (
            patch("linkspan.ports.shutil.which", side_effect=which),
            patch("linkspan.ports.subprocess.run") as run,
        ):
            SystemClipboard().write("hi")
        assert run.call_args.args[0] == ["xclip", "-selection", "clipboard"]

    def test_no_tool_logs_warning(self, caplog) -> None:
        with (
            patch("linkspan.ports.shutil.which", return_value=None),
            patch("linkspan.ports.subprocess.run") as run,
            caplog.at_level(logging.WARNING, logger="linkspan.ports"),
        ):
            SystemClipboard().write("hi")
        run.assert_not_called()
        assert "No clipboard tool found" in caplog.text

    @pytest.mark.parametrize(
        "error",
        [
            FileNotFoundError("missing"),
            subprocess.CalledProcessError(1, ["xsel"]),
            subprocess.TimeoutExpired(["xsel"], 5),
        ],
        ids=["missing-binary", "non-zero-exit", "timeout"],
    )
    def test_failure_is_logged_not_raised(self, caplog, error) -> None:
        with (
            patch("linkspan.ports.subprocess.run", side_effect=error),
            caplog.at_level(logging.WARNING, logger="linkspan.ports"),
        ):
            SystemClipboard(["xsel"]).write("hi")
        assert "Clipboard write via xsel failed" in caplog.text


class TestBrowserOpener:
    def test_opens_with_named_browser(self) -> None:
        controller = MagicMock()
        controller.open.return_value = True
        with patch("linkspan.ports.webbrowser.get", return_value=controller) as get:
            BrowserOpener("firefox").open("https://example.com/")
        get.assert_called_once_with("firefox")
        controller.open.assert_called_once_with("https://example.com/")

    def test_missing_browser_logged(self, caplog) -> None:
        with (
            patch("linkspan.ports.webbrowser.get", side_effect=webbrowser.Error("none")),
            caplog.at_level(logging.WARNING, logger="linkspan.ports"),
        ):
            BrowserOpener().open("https://example.com/")
        assert "Could not open https://example.com/" in caplog.text

    def test_refused_open_logged(self, caplog) -> None:
        controller = MagicMock()
        controller.open.return_value = False
        with (
            patch("linkspan.ports.webbrowser.get", return_value=controller),
            caplog.at_level(logging.WARNING, logger="linkspan.ports"),
        ):
            BrowserOpener().open("https://example.com/")
        assert "Browser refused" in caplog.text


class TestLoggingAdapters:
    def test_reveal_prompt_never_confirms(self) -> None:
        confirm = MagicMock()
        LoggingRevealPrompt().ask("https://example.com/", confirm)
        confirm.assert_not_called()

    def test_directory_knows_no_names(self) -> None:
        assert LoggingDirectory().user_name(42) is None

    def test_directory_logs_bot_command(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="linkspan.ports"):
            LoggingDirectory().send_bot_command(
                PeerRef(1, "group"), PeerRef(2, "MyBot", is_user=True), "/start"
            )
        assert "Send /start to group (bot=MyBot)" in caplog.text


class TestPeerRef:
    def test_fields(self) -> None:
        assert [f.name for f in dataclasses.fields(PeerRef)] == ["id", "name", "is_user"]

    def test_defaults_to_non_user_chat(self) -> None:
        assert PeerRef(5).is_user is False
