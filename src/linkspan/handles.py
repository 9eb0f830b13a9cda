"""Handler pool — shared, reference-counted handler handles.

One logical link may be drawn as several layout fragments (e.g. a URL that
wraps across lines). Fragments hold an integer handle into a ``HandlerPool``
instead of their own handler, so all of them share one instance. Handles are
stable and never reused; a handler is dropped when the last fragment
releases it.
"""

import logging
from dataclasses import dataclass

from .handlers.base import ClickHandler

logger = logging.getLogger(__name__)


class UnknownHandleError(KeyError):
    """Raised when using a handle that was never issued or was already dropped."""


@dataclass(slots=True)
class _Slot:
    handler: ClickHandler
    refs: int


class HandlerPool:
    """Arena of handlers addressed by stable integer handles."""

    def __init__(self) -> None:
        self._slots: dict[int, _Slot] = {}
        self._next_handle = 0

    def add(self, handler: ClickHandler) -> int:
        """Store *handler* and return its handle, already holding one reference."""
        handle = self._next_handle
        self._next_handle += 1
        self._slots[handle] = _Slot(handler, refs=1)
        logger.debug("Added %s handler as #%d", handler.kind.value, handle)
        return handle

    def _slot(self, handle: int) -> _Slot:
        slot = self._slots.get(handle)
        if slot is None:
            raise UnknownHandleError(f"Unknown handler handle {handle}")
        return slot

    def acquire(self, handle: int) -> ClickHandler:
        """Take one more reference to *handle* and return its handler."""
        slot = self._slot(handle)
        slot.refs += 1
        return slot.handler

    def release(self, handle: int) -> None:
        """Drop one reference; the handler is removed with the last one."""
        slot = self._slot(handle)
        slot.refs -= 1
        if slot.refs == 0:
            del self._slots[handle]
            logger.debug("Dropped handler #%d", handle)

    def get(self, handle: int) -> ClickHandler:
        return self._slot(handle).handler

    def refcount(self, handle: int) -> int:
        """Current reference count; 0 for dropped or unknown handles."""
        slot = self._slots.get(handle)
        return slot.refs if slot is not None else 0

    def __contains__(self, handle: object) -> bool:
        return handle in self._slots

    def __len__(self) -> int:
        return len(self._slots)
