"""Tests for HiddenUrlClickHandler — links behind custom text need confirmation."""

import pytest
from telegram.constants import MessageEntityType

from linkspan.handlers import HiddenUrlClickHandler, LinkKind, MouseButton
from linkspan.text_entities import EntityInText, ExpandLinksMode


class TestHiddenUrlClick:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "example.com", "user@example.com", "https://t.me/durov"],
        ids=["https", "no-scheme", "email", "local-link"],
    )
    def test_click_never_navigates_directly(self, click_ctx, url: str) -> None:
        HiddenUrlClickHandler(url).on_click(MouseButton.LEFT, click_ctx)
        click_ctx.opener.open.assert_not_called()
        click_ctx.directory.open_local_url.assert_not_called()
        click_ctx.reveal.ask.assert_called_once()

    def test_prompt_receives_navigation_url(self, click_ctx) -> None:
        HiddenUrlClickHandler("example.com").on_click(MouseButton.LEFT, click_ctx)
        url, _ = click_ctx.reveal.ask.call_args.args
        assert url == "http://example.com"

    def test_confirm_opens(self, click_ctx) -> None:
        HiddenUrlClickHandler("example.com").on_click(MouseButton.MIDDLE, click_ctx)
        _, on_confirm = click_ctx.reveal.ask.call_args.args
        on_confirm()
        click_ctx.opener.open.assert_called_once_with("http://example.com")

    def test_confirm_routes_local_links(self, click_ctx) -> None:
        HiddenUrlClickHandler("https://t.me/durov").on_click(MouseButton.LEFT, click_ctx)
        _, on_confirm = click_ctx.reveal.ask.call_args.args
        on_confirm()
        click_ctx.directory.open_local_url.assert_called_once_with(
            "tg://resolve?domain=durov"
        )

    def test_right_click_does_not_prompt(self, click_ctx) -> None:
        HiddenUrlClickHandler("example.com").on_click(MouseButton.RIGHT, click_ctx)
        click_ctx.reveal.ask.assert_not_called()


class TestHiddenUrlDisplay:
    def test_never_fully_displayed(self) -> None:
        handler = HiddenUrlClickHandler("https://example.com/a b")
        assert handler.full_displayed is False
        assert handler.tooltip() == "https://example.com/a b"

    def test_kind(self) -> None:
        assert HiddenUrlClickHandler("example.com").kind is LinkKind.HIDDEN_URL

    def test_copy_uses_url(self, click_ctx) -> None:
        HiddenUrlClickHandler("example.com").copy_to_clipboard(click_ctx)
        click_ctx.clipboard.write.assert_called_once_with("http://example.com")


class TestHiddenUrlExpansion:
    @pytest.mark.parametrize("mode", [ExpandLinksMode.NONE, ExpandLinksMode.SHORTENED])
    def test_text_kept_unless_all(self, mode: ExpandLinksMode) -> None:
        handler = HiddenUrlClickHandler("example.com")
        assert handler.get_expanded_link_text(mode, "click here") == ""

    def test_all_spells_out_target(self) -> None:
        handler = HiddenUrlClickHandler("example.com")
        assert (
            handler.get_expanded_link_text(ExpandLinksMode.ALL, "click here")
            == "click here (http://example.com)"
        )

    def test_entities_always_carry_target(self) -> None:
        handler = HiddenUrlClickHandler("example.com")
        expected = [
            EntityInText(MessageEntityType.TEXT_LINK, 4, 10, "http://example.com")
        ]
        kept = handler.get_expanded_link_text_with_entities(
            ExpandLinksMode.SHORTENED, 4, "click here"
        )
        assert kept.text == ""
        assert kept.entities == expected

        spelled = handler.get_expanded_link_text_with_entities(
            ExpandLinksMode.ALL, 4, "click here"
        )
        assert spelled.text == "click here (http://example.com)"
        assert spelled.entities == expected
