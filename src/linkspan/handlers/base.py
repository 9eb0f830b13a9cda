"""Click handler protocol, link kinds and shared text-handler behavior.

Pure definitions plus ``TextClickHandler``. Every clickable span satisfies
the ``ClickHandler`` protocol and carries a ``kind`` tag from the closed
``LinkKind`` set:

  - URL / HIDDEN_URL: handlers.url
  - MENTION / HASHTAG / BOT_COMMAND: handlers.tags
  - MENTION_NAME: handlers.mention_name

Text-derived handlers share ``TextClickHandler``: a "fully displayed" flag
and a default tooltip and clipboard text derived from ``url()``.
Only ``on_click`` and ``copy_to_clipboard`` have side effects; all other
operations are pure and may be called any number of times.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Protocol, runtime_checkable

from ..context import ClickContext, resolve_context
from ..text_entities import ExpandLinksMode, TextWithEntities


class MouseButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    BACK = "back"
    FORWARD = "forward"


class LinkKind(Enum):
    URL = "url"
    HIDDEN_URL = "hidden_url"
    MENTION = "mention"
    MENTION_NAME = "mention_name"
    HASHTAG = "hashtag"
    BOT_COMMAND = "bot_command"


# Buttons that activate a link; everything else is left to the context menu
ACTIVATING_BUTTONS = frozenset({MouseButton.LEFT, MouseButton.MIDDLE})


def is_activating(button: MouseButton) -> bool:
    return button in ACTIVATING_BUTTONS


def copy_text(text: str, context: ClickContext | None = None) -> None:
    """Write *text* to the clipboard; empty text writes nothing."""
    if text:
        resolve_context(context).clipboard.write(text)


@runtime_checkable
class ClickHandler(Protocol):
    """Protocol that every clickable span handler must satisfy.

    Handlers are shared by every layout fragment showing the same link, so
    apart from ``TextClickHandler.full_displayed`` they are immutable after
    construction.
    """

    @property
    def kind(self) -> LinkKind: ...

    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None:
        """Activate the link. Only left and middle buttons do anything."""
        ...

    def copy_to_clipboard(self, context: ClickContext | None = None) -> None:
        """Copy the link's representative text; no-op when it is empty."""
        ...

    def copy_to_clipboard_context_item_text(self) -> str:
        """Label for the "copy" context-menu entry; empty hides the entry."""
        ...

    def tooltip(self, context: ClickContext | None = None) -> str: ...

    def drag_text(self) -> str: ...

    def get_expanded_link_text(self, mode: ExpandLinksMode, text_part: str) -> str:
        """Text to export in place of *text_part*; empty keeps *text_part*."""
        ...

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        """Like ``get_expanded_link_text`` plus entities starting at *entity_offset*."""
        ...


class TextClickHandler(ABC):
    """Base for handlers whose target is a plain string (``url()``).

    ``full_displayed`` tells whether the rendered text already shows the
    whole target; when it does not, the tooltip shows ``readable()``.
    The owning layout may flip it (e.g. on "show more").
    """

    kind: LinkKind

    def __init__(self, full_displayed: bool = True) -> None:
        self.full_displayed = full_displayed

    def set_full_displayed(self, full: bool) -> None:
        self.full_displayed = full

    @abstractmethod
    def url(self) -> str: ...

    def readable(self) -> str:
        return self.url()

    @abstractmethod
    def on_click(
        self, button: MouseButton, context: ClickContext | None = None
    ) -> None: ...

    def copy_to_clipboard(self, context: ClickContext | None = None) -> None:
        copy_text(self.url(), context)

    def copy_to_clipboard_context_item_text(self) -> str:
        return ""

    def tooltip(self, context: ClickContext | None = None) -> str:
        return "" if self.full_displayed else self.readable()

    def drag_text(self) -> str:
        return ""

    def get_expanded_link_text(self, mode: ExpandLinksMode, text_part: str) -> str:
        return ""

    def get_expanded_link_text_with_entities(
        self, mode: ExpandLinksMode, entity_offset: int, text_part: str
    ) -> TextWithEntities:
        return TextWithEntities()
