"""Clickable span handlers.

Re-exports the protocol, kind tags and every concrete handler so consumers
can do ``from linkspan.handlers import UrlClickHandler, ...``.
"""

from linkspan.handlers.base import (
    ACTIVATING_BUTTONS,
    ClickHandler,
    LinkKind,
    MouseButton,
    TextClickHandler,
)
from linkspan.handlers.mention_name import MentionNameClickHandler
from linkspan.handlers.tags import (
    BotCommandClickHandler,
    HashtagClickHandler,
    MentionClickHandler,
)
from linkspan.handlers.url import (
    HiddenUrlClickHandler,
    UrlClickHandler,
    is_email,
    try_convert_url_to_local,
)

__all__ = [
    "ACTIVATING_BUTTONS",
    "BotCommandClickHandler",
    "ClickHandler",
    "HashtagClickHandler",
    "HiddenUrlClickHandler",
    "LinkKind",
    "MentionClickHandler",
    "MentionNameClickHandler",
    "MouseButton",
    "TextClickHandler",
    "UrlClickHandler",
    "is_email",
    "try_convert_url_to_local",
]
