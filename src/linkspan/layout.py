"""Text layout — turns message text + entities into fragments with shared handlers.

The layout is the handlers' owner on the rendering side:
  - create_handler(): entity → handler factory (formatting entities get none)
  - TextLayout: splits each link at line breaks into fragments that all
    hold one pool handle, forwards clicks, toggles "fully displayed" on
    "show more", and rebuilds the original text for copy/export through
    the handlers' link-expansion queries.

Hit-testing pixels to positions is the renderer's job; the layout works on
character positions.
"""

import itertools
import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from telegram import MessageEntity
from telegram.constants import MessageEntityType

from .context import ClickContext
from .handlers import (
    BotCommandClickHandler,
    ClickHandler,
    HashtagClickHandler,
    HiddenUrlClickHandler,
    LinkKind,
    MentionClickHandler,
    MentionNameClickHandler,
    MouseButton,
    TextClickHandler,
    UrlClickHandler,
)
from .handles import HandlerPool
from .ports import UrlParser
from .text_entities import (
    EntityInText,
    ExpandLinksMode,
    TextWithEntities,
    parse_mention_name_data,
)

logger = logging.getLogger(__name__)

# One fragment per line of a link; the newline stays with its line
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def create_handler(
    entity: EntityInText, text: str, parser: UrlParser | None = None
) -> ClickHandler | None:
    """Build the handler for *entity* over *text*, or None if it is not a link."""
    part = text[entity.offset : entity.end]
    entity_type = entity.type
    if entity_type in (MessageEntityType.URL, MessageEntityType.EMAIL):
        return UrlClickHandler(part, parser=parser)
    if entity_type == MessageEntityType.TEXT_LINK:
        return HiddenUrlClickHandler(entity.data or part, parser=parser)
    if entity_type == MessageEntityType.MENTION:
        return MentionClickHandler(part)
    if entity_type == MessageEntityType.HASHTAG:
        return HashtagClickHandler(part)
    if entity_type == MessageEntityType.BOT_COMMAND:
        return BotCommandClickHandler(part)
    if entity_type == MessageEntityType.TEXT_MENTION:
        identity = parse_mention_name_data(entity.data)
        if identity is None:
            logger.warning("Skipping mention with bad identity %r", entity.data)
            return None
        return MentionNameClickHandler(part, *identity)
    return None


@dataclass(frozen=True, slots=True)
class LinkFragment:
    """A run of text; ``handle`` points into the pool for link fragments."""

    start: int
    end: int
    handle: int | None = None


@dataclass(frozen=True, slots=True)
class LinkSpan:
    """All fragments of one link merged back together."""

    start: int
    end: int
    handle: int
    handler: ClickHandler


class TextLayout:
    """Fragments of one rendered text and the link handlers they share."""

    def __init__(
        self,
        text: str,
        entities: Sequence[EntityInText] = (),
        pool: HandlerPool | None = None,
        parser: UrlParser | None = None,
    ) -> None:
        self.text = text
        self.pool = pool if pool is not None else HandlerPool()
        self._parser = parser
        self._fragments: list[LinkFragment] = []
        self._build(entities)

    @classmethod
    def from_message(
        cls,
        text: str,
        entities: Sequence[MessageEntity],
        pool: HandlerPool | None = None,
        parser: UrlParser | None = None,
    ) -> "TextLayout":
        """Lay out a Bot API message (entities in UTF-16 offsets)."""
        converted = TextWithEntities.from_message_entities(text, entities)
        return cls(text, converted.entities, pool=pool, parser=parser)

    def _build(self, entities: Sequence[EntityInText]) -> None:
        position = 0
        for entity in sorted(entities, key=lambda e: e.offset):
            if entity.length <= 0 or entity.end > len(self.text):
                continue
            if entity.offset < position:
                # links never nest; the first one wins
                continue
            handler = create_handler(entity, self.text, self._parser)
            if handler is None:
                continue

            if entity.offset > position:
                self._fragments.append(LinkFragment(position, entity.offset))
            handle = self.pool.add(handler)
            lines = list(_LINE_RE.finditer(self.text, entity.offset, entity.end))
            for i, line in enumerate(lines):
                if i > 0:
                    self.pool.acquire(handle)
                self._fragments.append(LinkFragment(line.start(), line.end(), handle))
            position = entity.end

        if position < len(self.text):
            self._fragments.append(LinkFragment(position, len(self.text)))

    @property
    def fragments(self) -> list[LinkFragment]:
        return list(self._fragments)

    def links(self) -> Iterator[LinkSpan]:
        """Yield each link once, spanning all of its fragments."""
        for handle, group in itertools.groupby(self._fragments, key=lambda f: f.handle):
            if handle is None:
                continue
            frags = list(group)
            yield LinkSpan(frags[0].start, frags[-1].end, handle, self.pool.get(handle))

    def handler_at(self, position: int) -> ClickHandler | None:
        for fragment in self._fragments:
            if fragment.start <= position < fragment.end:
                if fragment.handle is None:
                    return None
                return self.pool.get(fragment.handle)
        return None

    def click(
        self,
        position: int,
        button: MouseButton,
        context: ClickContext | None = None,
    ) -> bool:
        """Forward a click at *position*. Returns False outside any link."""
        handler = self.handler_at(position)
        if handler is None:
            return False
        handler.on_click(button, context)
        return True

    def set_full_displayed(self, full: bool) -> None:
        """Mark every visible link as fully shown or not ("show more")."""
        for link in self.links():
            handler = link.handler
            # hidden links never show their target, whatever the layout does
            if handler.kind is LinkKind.HIDDEN_URL:
                continue
            if isinstance(handler, TextClickHandler):
                handler.set_full_displayed(full)

    def _runs(self) -> Iterator[tuple[str, ClickHandler | None]]:
        for handle, group in itertools.groupby(self._fragments, key=lambda f: f.handle):
            frags = list(group)
            part = self.text[frags[0].start : frags[-1].end]
            yield part, (self.pool.get(handle) if handle is not None else None)

    def original_text(self, mode: ExpandLinksMode = ExpandLinksMode.SHORTENED) -> str:
        """Plain text for copy/export, links expanded according to *mode*."""
        parts: list[str] = []
        for part, handler in self._runs():
            expanded = handler.get_expanded_link_text(mode, part) if handler else ""
            parts.append(expanded or part)
        return "".join(parts)

    def original_text_with_entities(
        self, mode: ExpandLinksMode = ExpandLinksMode.SHORTENED
    ) -> TextWithEntities:
        """Like ``original_text`` plus the link entities.

        Only links are kept: formatting entities (bold, italic, code, ...)
        never become fragments, so they are not part of the result.
        """
        result = TextWithEntities()
        for part, handler in self._runs():
            if handler is None:
                result.text += part
                continue
            expanded = handler.get_expanded_link_text_with_entities(
                mode, len(result.text), part
            )
            result.entities.extend(expanded.entities)
            result.text += expanded.text or part
        return result

    def release(self) -> None:
        """Release every fragment's handle; the layout is empty afterwards."""
        for fragment in self._fragments:
            if fragment.handle is not None:
                self.pool.release(fragment.handle)
        self._fragments = []
