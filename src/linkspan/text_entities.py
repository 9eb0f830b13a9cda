"""Formatted-text model: text plus entity ranges.

Entity types reuse python-telegram-bot's ``MessageEntityType`` so the model
converts losslessly to and from Bot API ``MessageEntity`` lists. Inside
linkspan, offsets and lengths are Python string indices; the conversion
helpers translate to and from the Bot API's UTF-16 offsets.

Key types: ExpandLinksMode, EntityInText, TextWithEntities.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from telegram import MessageEntity, User
from telegram.constants import MessageEntityType

from .utils import utf16_len, utf16_to_index


class ExpandLinksMode(Enum):
    """How links are written back out when exporting displayed text."""

    NONE = "none"  # keep text exactly as displayed
    SHORTENED = "shortened"  # restore links whose display form was shortened
    ALL = "all"  # also spell out hidden link targets


@dataclass(frozen=True, slots=True)
class EntityInText:
    """One formatted range of a text.

    ``data`` holds the target URL for ``text_link`` and
    ``"<user_id>.<access_hash>"`` for ``text_mention``.
    """

    type: MessageEntityType | str
    offset: int
    length: int
    data: str = ""

    @property
    def end(self) -> int:
        return self.offset + self.length

    def shifted(self, delta: int) -> "EntityInText":
        return replace(self, offset=self.offset + delta)


def mention_name_data(user_id: int, access_hash: int) -> str:
    return f"{user_id}.{access_hash}"


def parse_mention_name_data(data: str) -> tuple[int, int] | None:
    """Split ``"<user_id>.<access_hash>"``; None if malformed."""
    user_id, _, access_hash = data.partition(".")
    if not user_id.isdigit() or (access_hash and not access_hash.isdigit()):
        return None
    return int(user_id), int(access_hash or 0)


@dataclass(slots=True)
class TextWithEntities:
    """Text together with its entity ranges."""

    text: str = ""
    entities: list[EntityInText] = field(default_factory=list)

    def append(self, other: "TextWithEntities") -> None:
        """Append *other*, shifting its entities past the current text."""
        shift = len(self.text)
        self.text += other.text
        self.entities.extend(entity.shifted(shift) for entity in other.entities)

    def to_message_entities(self) -> list[MessageEntity]:
        """Convert to Bot API entities (UTF-16 offsets)."""
        result: list[MessageEntity] = []
        for entity in self.entities:
            part = self.text[entity.offset : entity.end]
            url: str | None = None
            user: User | None = None
            if entity.type == MessageEntityType.TEXT_LINK:
                url = entity.data
            elif entity.type == MessageEntityType.TEXT_MENTION:
                parsed = parse_mention_name_data(entity.data)
                if parsed is None:
                    continue
                user = User(id=parsed[0], first_name=part or str(parsed[0]), is_bot=False)
            result.append(
                MessageEntity(
                    type=entity.type,
                    offset=utf16_len(self.text[: entity.offset]),
                    length=utf16_len(part),
                    url=url,
                    user=user,
                )
            )
        return result

    @classmethod
    def from_message_entities(
        cls, text: str, entities: Sequence[MessageEntity]
    ) -> "TextWithEntities":
        """Build from Bot API entities, translating UTF-16 offsets.

        The Bot API does not expose access hashes, so ``text_mention``
        entities carry an access hash of 0.
        """
        converted: list[EntityInText] = []
        for entity in entities:
            start = utf16_to_index(text, entity.offset)
            end = utf16_to_index(text, entity.offset + entity.length)
            data = ""
            if entity.type == MessageEntityType.TEXT_LINK and entity.url:
                data = entity.url
            elif entity.type == MessageEntityType.TEXT_MENTION and entity.user:
                data = mention_name_data(entity.user.id, 0)
            converted.append(EntityInText(entity.type, start, end - start, data))
        return cls(text, converted)
