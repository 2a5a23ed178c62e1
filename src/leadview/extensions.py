"""Deferred fragment extensions.

Fragment sets that live in separately imported modules cannot assume a
registry exists when they are imported. They push a callback onto an
extension queue instead; the first registry constructed with that queue
drains it, calling every callback in push order with the registry.

A queue is drained exactly once. After that it is closed: pushing raises
``ExtensionQueueClosedError`` and draining again installs nothing.

Usage:
    from leadview.extensions import extension

    @extension
    def add_deep_fragments(registry):
        registry.register("deepSummary", ...)
"""

import logging
from typing import Callable, List, TYPE_CHECKING

from .exceptions import ExtensionQueueClosedError

if TYPE_CHECKING:
    from .fragments import FragmentRegistry

logger = logging.getLogger(__name__)

ExtensionFn = Callable[["FragmentRegistry"], None]


class ExtensionQueue:
    """FIFO buffer of fragment-registration callbacks."""

    def __init__(self, name: str = "default"):
        self.name = name
        self._pending: List[ExtensionFn] = []
        self._drained = False

    def push(self, callback: ExtensionFn) -> ExtensionFn:
        if self._drained:
            raise ExtensionQueueClosedError(
                f"Extension queue '{self.name}' was already drained",
                details={"queue": self.name, "extension": getattr(callback, "__qualname__", repr(callback))},
            )
        self._pending.append(callback)
        logger.debug("Queued fragment extension: %s", getattr(callback, "__qualname__", callback))
        return callback

    def drain(self, registry: "FragmentRegistry") -> int:
        """Apply all pending callbacks to ``registry`` and close the queue.

        Returns the number of callbacks applied. A closed queue applies none.
        """
        if self._drained:
            return 0

        self._drained = True
        pending, self._pending = self._pending, []
        for callback in pending:
            callback(registry)
        return len(pending)

    @property
    def drained(self) -> bool:
        return self._drained

    def __len__(self) -> int:
        return len(self._pending)

    def __repr__(self) -> str:
        state = "drained" if self._drained else f"{len(self._pending)} pending"
        return f"ExtensionQueue({self.name!r}, {state})"


# Process-wide queue used by the @extension decorator
extension_queue = ExtensionQueue()


def extension(callback: ExtensionFn) -> ExtensionFn:
    """Push ``callback`` onto the process-wide extension queue."""
    return extension_queue.push(callback)
