"""URL and email links, plain and hidden.

UrlClickHandler keeps two forms of its target:
  - ``readable()``: display form, computed once at construction.
  - ``url()``: navigation form, recomputed on every call, with ``http://``
    prepended when no ``scheme:`` prefix is present.
For malformed input both fall back to the original text, so what is shown
and what is opened can differ.

HiddenUrlClickHandler is the same link behind custom text: clicking only
asks the RevealPrompt, and navigation happens from its confirm callback.
"""

import functools
import logging
import re

from telegram.constants import MessageEntityType

from ..config import config
from ..context import ClickContext, resolve_context
from ..ports import HttpxUrlParser, UrlParser
from ..text_entities import EntityInText, ExpandLinksMode, TextWithEntities
from .base import LinkKind, MouseButton, TextClickHandler, is_activating

logger = logging.getLogger(__name__)

# Any run of letters before a colon counts as a scheme ("a:b" included)
_SCHEME_RE = re.compile(r"^[a-zA-Z]+:")

_DEFAULT_SCHEME = "http://"
_LOCAL_SCHEME = "tg://"

default_url_parser = HttpxUrlParser()


def is_email(url: str) -> bool:
    """True if the first ``@`` comes after position 0 and before any ``/``."""
    at = url.find("@")
    slash = url.find("/")
    return at > 0 and (slash < 0 or slash > at)


@functools.lru_cache(maxsize=8)
def _username_link_re(domains: tuple[str, ...]) -> re.Pattern[str] | None:
    if not domains:
        return None
    hosts = "|".join(re.escape(d) for d in domains)
    return re.compile(
        rf"^https?://(?:www\.)?(?:{hosts})/([a-zA-Z0-9._]+)/?(?:\?|$)",
        re.IGNORECASE,
    )


def try_convert_url_to_local(url: str) -> str:
    """Rewrite ``https://t.me/<name>`` style links to ``tg://resolve?domain=<name>``."""
    pattern = _username_link_re(config.local_domains)
    if pattern is None:
        return url
    match = pattern.match(url)
    if match is None:
        return url
    return f"{_LOCAL_SCHEME}resolve?domain={match.group(1)}"


class UrlClickHandler(TextClickHandler):
    kind = LinkKind.URL

    def __init__(
        self,
        url: str,
        full_displayed: bool = True,
        parser: UrlParser | None = None,
    ) -> None:
        super().__init__(full_displayed)
        self._original_url = url
        self._parser = parser if parser is not None else default_url_parser
        if self.is_email():
            self._readable = url
        else:
            parsed = self._parser.parse(url)
            self._readable = parsed.display if parsed.valid else url

    @property
    def original_url(self) -> str:
        return self._original_url

    def is_email(self) -> bool:
        return is_email(self._original_url)

    def url(self) -> str:
        if self.is_email():
            return self._original_url

        parsed = self._parser.parse(self._original_url)
        result = parsed.encoded if parsed.valid else self._original_url
        if not _SCHEME_RE.match(result):
            return _DEFAULT_SCHEME + result
        return result

    def readable(self) -> str:
        return self._readable

    def drag_text(self) -> str:
        return self.url()

    def copy_to_clipboard_context_item_text(self) -> str:
        return "Copy email" if self.is_email() else "Copy link"

    def get_expanded_link_text(self, mode: ExpandLinksMode, text_part: str) -> str:
        if mode is ExpandLinksMode.NONE:
            return ""
        return self._original_url

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        entity_type = (
            MessageEntityType.EMAIL if self.is_email() else MessageEntityType.URL
        )
        if mode is ExpandLinksMode.NONE:
            return TextWithEntities(
                entities=[EntityInText(entity_type, entity_offset, len(text_part))]
            )
        return TextWithEntities(
            self._original_url,
            [EntityInText(entity_type, entity_offset, len(self._original_url))],
        )

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if is_activating(button):
            self.open_url(self.url(), context)

    @staticmethod
    def open_url(url: str, context: ClickContext | None = None) -> None:
        """Navigate to *url*: mail client, in-client deep link, or browser."""
        ctx = resolve_context(context)
        if is_email(url):
            ctx.opener.open(f"mailto:{url}")
            return

        target = try_convert_url_to_local(url)
        if target.lower().startswith(_LOCAL_SCHEME):
            ctx.directory.open_local_url(target)
        else:
            ctx.opener.open(target)


class HiddenUrlClickHandler(UrlClickHandler):
    """Link shown under custom text; the target must be confirmed first."""

    kind = LinkKind.HIDDEN_URL

    def __init__(self, url: str, parser: UrlParser | None = None) -> None:
        super().__init__(url, full_displayed=False, parser=parser)

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if not is_activating(button):
            return
        ctx = resolve_context(context)
        url = self.url()
        logger.debug("Asking before opening hidden link %s", url)
        ctx.reveal.ask(url, lambda: UrlClickHandler.open_url(url, ctx))

    def get_expanded_link_text(self, mode: ExpandLinksMode, text_part: str) -> str:
        if mode is ExpandLinksMode.ALL:
            return f"{text_part} ({self.url()})"
        return ""

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        url = self.url()
        return TextWithEntities(
            f"{text_part} ({url})" if mode is ExpandLinksMode.ALL else "",
            [
                EntityInText(
                    MessageEntityType.TEXT_LINK, entity_offset, len(text_part), url
                )
            ],
        )
