"""Modal build notifications.

The builder emits one ``ModalBuiltEvent`` per successful build. Observers
are plain callables; an observer that raises is logged and skipped so it
can never fail the build.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass
class ModalBuiltEvent:
    """Emitted once when a modal build completes."""

    type: str = "modal:built"
    analysis_type: str = ""
    lead_handle: str = ""
    is_high_tier_score: bool = False
    rendered: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


Observer = Callable[[ModalBuiltEvent], None]


class EventBus:
    """Ordered list of build observers."""

    def __init__(self, observers: List[Observer] = None):
        self._observers: List[Observer] = list(observers or [])

    def subscribe(self, observer: Observer) -> Observer:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, event: ModalBuiltEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.warning(
                    "Modal observer %s failed", getattr(observer, "__qualname__", observer), exc_info=True
                )

    def __len__(self) -> int:
        return len(self._observers)
