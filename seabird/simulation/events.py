"""Named game events for presentation and audio hooks.

The core never draws or plays anything itself.  It announces what
happened through an :class:`EventBus`, and the presentation layer decides
how to show it.  Each notification carries at most a short human-readable
message.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

EventHandler = Callable[["GameEvent", "str | None"], None]


class GameEvent(Enum):
    """Notifications emitted by a session."""

    FISH_CAUGHT = "fish-caught"
    EGG_LAID = "egg-laid"
    EGG_HATCHED = "egg-hatched"
    FEEDING_COMPLETE = "feeding-complete"
    GAME_WON = "game-won"
    GAME_LOST = "game-lost"
    PATH_INVALID = "path-invalid"


@dataclass
class EventBus:
    """Synchronous publish/subscribe hub.

    Attributes:
        history: Most recent ``(event, message)`` pairs, oldest first.
    """

    history_size: int = 32
    history: deque[tuple[GameEvent, str | None]] = field(init=False)
    _handlers: dict[GameEvent, list[EventHandler]] = field(
        default_factory=dict,
        repr=False,
    )

    def __post_init__(self) -> None:
        self.history = deque(maxlen=self.history_size)

    def subscribe(self, event: GameEvent, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: GameEvent, handler: EventHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent, message: str | None = None) -> None:
        """Record ``event`` and call every handler subscribed to it."""
        self.history.append((event, message))
        for handler in list(self._handlers.get(event, [])):
            handler(event, message)

    def events(self) -> list[GameEvent]:
        """Return the recorded events without their messages."""
        return [event for event, _ in self.history]
