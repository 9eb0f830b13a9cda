"""@mention, #hashtag and /command links.

Each wraps the literal tag text (``@durov``, ``#news``, ``/start@MyBot``)
and hands it to the peer directory on click. Bot commands additionally
resolve the target chat and bot from the click context at click time, so
switching chats between two clicks on the same link changes where the
command goes.
"""

import logging
from typing import ClassVar

from telegram.constants import MessageEntityType

from ..context import ClickContext, resolve_context
from ..ports import PeerRef
from ..text_entities import EntityInText, ExpandLinksMode, TextWithEntities
from .base import LinkKind, MouseButton, TextClickHandler, is_activating

logger = logging.getLogger(__name__)


class _TagClickHandler(TextClickHandler):
    """Shared state for the tag-string handlers: one immutable string."""

    entity_type: ClassVar[MessageEntityType]

    def __init__(self, tag: str) -> None:
        super().__init__()
        self._tag = tag

    def url(self) -> str:
        return self._tag

    def drag_text(self) -> str:
        return self._tag

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        return TextWithEntities(
            entities=[EntityInText(self.entity_type, entity_offset, len(text_part))]
        )


class MentionClickHandler(_TagClickHandler):
    kind = LinkKind.MENTION
    entity_type = MessageEntityType.MENTION

    @property
    def tag(self) -> str:
        return self._tag

    def copy_to_clipboard_context_item_text(self) -> str:
        return "Copy username"

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if is_activating(button):
            resolve_context(context).directory.open_username(
                self._tag.removeprefix("@")
            )


class HashtagClickHandler(_TagClickHandler):
    kind = LinkKind.HASHTAG
    entity_type = MessageEntityType.HASHTAG

    @property
    def tag(self) -> str:
        return self._tag

    def copy_to_clipboard_context_item_text(self) -> str:
        return "Copy hashtag"

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if is_activating(button):
            ctx = resolve_context(context)
            ctx.directory.search_hashtag(self._tag, ctx.peer)


class BotCommandClickHandler(_TagClickHandler):
    """Bot command link; the chat and bot come from the click context.

    Resolution on click:
      - no current chat: nothing to send to, the click is ignored
      - chat is a user (private chat): that user is the addressed bot
      - otherwise: the context's current bot, which may be None
    """

    kind = LinkKind.BOT_COMMAND
    entity_type = MessageEntityType.BOT_COMMAND

    @property
    def cmd(self) -> str:
        return self._tag

    @staticmethod
    def set_peer_for_command(
        peer: PeerRef | None, context: ClickContext | None = None
    ) -> None:
        resolve_context(context).set_peer(peer)

    @staticmethod
    def set_bot_for_command(
        bot: PeerRef | None, context: ClickContext | None = None
    ) -> None:
        resolve_context(context).set_bot(bot)

    @staticmethod
    def peer_for_command(context: ClickContext | None = None) -> PeerRef | None:
        return resolve_context(context).peer

    @staticmethod
    def bot_for_command(context: ClickContext | None = None) -> PeerRef | None:
        return resolve_context(context).bot

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if not is_activating(button):
            return
        ctx = resolve_context(context)
        peer = self.peer_for_command(ctx)
        if peer is None:
            logger.debug("No chat for command %s, ignoring click", self._tag)
            return
        bot = peer if peer.is_user else self.bot_for_command(ctx)
        ctx.directory.send_bot_command(peer, bot, self._tag)
