"""Mention of a user by identity (user id + access hash) rather than @username."""

from telegram.constants import MessageEntityType

from ..context import ClickContext, resolve_context
from ..text_entities import (
    EntityInText,
    ExpandLinksMode,
    TextWithEntities,
    mention_name_data,
)
from .base import LinkKind, MouseButton, is_activating


class MentionNameClickHandler:
    """Link to a known user, shown under arbitrary text.

    There is no string target: nothing to copy, nothing to drag. The tooltip
    shows the user's current name when it differs from the displayed text.
    """

    kind = LinkKind.MENTION_NAME

    def __init__(self, text: str, user_id: int, access_hash: int) -> None:
        self._text = text
        self._user_id = user_id
        self._access_hash = access_hash

    @property
    def text(self) -> str:
        return self._text

    @property
    def user_id(self) -> int:
        return self._user_id

    @property
    def access_hash(self) -> int:
        return self._access_hash

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        if is_activating(button):
            resolve_context(context).directory.open_user(
                self._user_id, self._access_hash
            )

    def copy_to_clipboard(self, context: ClickContext | None = None) -> None:
        return None

    def copy_to_clipboard_context_item_text(self) -> str:
        return ""

    def tooltip(self, context: ClickContext | None = None) -> str:
        name = resolve_context(context).directory.user_name(self._user_id)
        if name and name != self._text:
            return name
        return ""

    def drag_text(self) -> str:
        return ""

    def get_expanded_link_text(self, mode: ExpandLinksMode, text_part: str) -> str:
        return ""

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        return TextWithEntities(
            entities=[
                EntityInText(
                    MessageEntityType.TEXT_MENTION,
                    entity_offset,
                    len(text_part),
                    mention_name_data(self._user_id, self._access_hash),
                )
            ]
        )
