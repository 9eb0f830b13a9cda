"""TextWithEntities → Telegram MarkdownV2 export.

Plain text is escaped for MarkdownV2; links whose target is not visible in
the text (``text_link``, ``text_mention``) are written as ``[text](target)``
so the target survives the export. Visible links (urls, mentions, hashtags,
commands) are plain text that Telegram re-detects on its own.

Key function: to_markdown_v2(value) → MarkdownV2 string.
"""

import re

from telegram.constants import MessageEntityType

from .text_entities import TextWithEntities, parse_mention_name_data

# Characters that must be escaped in Telegram MarkdownV2 plain text
_MDV2_ESCAPE_RE = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")

# Inside the (...) part of an inline link only ")" and "\" are special
_MDV2_LINK_ESCAPE_RE = re.compile(r"([)\\])")


def _escape_mdv2(text: str) -> str:
    """Escape special characters for Telegram MarkdownV2."""
    return _MDV2_ESCAPE_RE.sub(r"\\\1", text)


def _escape_link_target(url: str) -> str:
    return _MDV2_LINK_ESCAPE_RE.sub(r"\\\1", url)


def _link_target(entity_type: str, data: str) -> str | None:
    if entity_type == MessageEntityType.TEXT_LINK:
        return data or None
    if entity_type == MessageEntityType.TEXT_MENTION:
        identity = parse_mention_name_data(data)
        return f"tg://user?id={identity[0]}" if identity else None
    return None


def to_markdown_v2(value: TextWithEntities) -> str:
    """Render *value* as MarkdownV2.

    Only entities with a hidden target are rendered; formatting and visible
    links become escaped text. Overlapping links after the first are ignored.
    """
    parts: list[str] = []
    position = 0
    for entity in sorted(value.entities, key=lambda e: e.offset):
        target = _link_target(entity.type, entity.data)
        if target is None:
            continue
        if entity.offset < position or entity.end > len(value.text):
            continue
        parts.append(_escape_mdv2(value.text[position : entity.offset]))
        inner = _escape_mdv2(value.text[entity.offset : entity.end])
        parts.append(f"[{inner}]({_escape_link_target(target)})")
        position = entity.end
    parts.append(_escape_mdv2(value.text[position:]))
    return "".join(parts)
