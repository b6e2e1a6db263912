"""Phase state machine — foraging, incubation and chick care.

The session moves one way through three phases:

1. **Foraging** (no timer): deliver ``fish_needed_foraging`` fish to lay
   the egg.
2. **Incubation** (countdown): wait for the egg to hatch.  There is no way
   to fail here; expiry always moves on to chick care.
3. **Chick care** (countdown per feeding): deliver
   ``fish_needed_per_feeding`` fish before the countdown runs out.  Each
   completed feeding resets the counter and the countdown; after
   ``feedings_to_win`` feedings the game is won.  If the countdown runs
   out first the chick starves.

Winning or starving ends the session and cancels every timer on the
scheduler, which is what stops the boats and any flight in progress.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from seabird.simulation.events import GameEvent

if TYPE_CHECKING:
    from seabird.simulation.config import GameConfig
    from seabird.simulation.events import EventBus
    from seabird.simulation.scheduler import Scheduler

logger = logging.getLogger(__name__)

PHASE_TIMER = "phase"

WIN_MESSAGE = "You successfully raised a healthy seabird chick!"
STARVED_MESSAGE = "Your chick starved! Feed it within the time limit."


class Phase(Enum):
    """Top-level stage of a session."""

    FORAGING = auto()
    INCUBATION = auto()
    CHICK_CARE = auto()


class Outcome(Enum):
    """How a finished session ended."""

    WON = auto()
    STARVED = auto()


@dataclass
class PhaseMachine:
    """Tracks phase progress and drives the phase countdown.

    Attributes:
        config: Targets and timer lengths.
        scheduler: Timer registry; the countdown runs under ``"phase"``.
        events: Bus for egg/feeding/outcome notifications.
        phase: Current phase.
        outcome: Set once the session has ended.
        fish_collected: Deliveries counted in the current phase (or the
            current feeding during chick care).
        feedings_completed: Feedings finished during chick care.
        timer_value: Seconds left on the running countdown.
    """

    config: GameConfig
    scheduler: Scheduler
    events: EventBus
    phase: Phase = Phase.FORAGING
    outcome: Outcome | None = None
    fish_collected: int = 0
    feedings_completed: int = 0
    timer_value: int = 0

    @property
    def ended(self) -> bool:
        return self.outcome is not None

    @property
    def fish_target(self) -> int:
        """Deliveries needed to finish the current goal."""
        if self.phase is Phase.CHICK_CARE:
            return self.config.fish_needed_per_feeding
        return self.config.fish_needed_foraging

    @property
    def timer_running(self) -> bool:
        return self.scheduler.is_active(PHASE_TIMER)

    def record_delivery(self) -> None:
        """Count one delivered fish and evaluate progression."""
        if self.ended:
            return
        self.fish_collected += 1
        self.evaluate()

    def evaluate(self) -> None:
        """Advance the phase if the current goal has been met."""
        if self.ended:
            return
        if self.phase is Phase.FORAGING:
            if self.fish_collected >= self.config.fish_needed_foraging:
                self.start_incubation()
        elif self.phase is Phase.CHICK_CARE:
            self._check_feeding()

    def start_incubation(self) -> None:
        """Lay the egg and start the incubation countdown."""
        self.phase = Phase.INCUBATION
        self.timer_value = self.config.incubation_time
        logger.info("Egg laid; incubating for %ds", self.timer_value)
        self.events.emit(GameEvent.EGG_LAID)
        self._start_timer(self.start_chick_care)

    def start_chick_care(self) -> None:
        """Hatch the chick and start the first feeding countdown."""
        self.phase = Phase.CHICK_CARE
        self.feedings_completed = 0
        self.fish_collected = 0
        logger.info("Egg hatched; chick care begins")
        self.events.emit(GameEvent.EGG_HATCHED)
        self._start_feeding_timer()

    # -- Private helpers --

    def _check_feeding(self) -> None:
        if self.fish_collected < self.config.fish_needed_per_feeding:
            return
        self.feedings_completed += 1
        self.fish_collected = 0
        if self.feedings_completed >= self.config.feedings_to_win:
            self._end(Outcome.WON)
            return
        message = f"Feeding {self.feedings_completed}/{self.config.feedings_to_win} complete!"
        logger.info("%s", message)
        self.events.emit(GameEvent.FEEDING_COMPLETE, message)
        self._start_feeding_timer()

    def _start_feeding_timer(self) -> None:
        self.timer_value = self.config.feeding_time
        self._start_timer(lambda: self._end(Outcome.STARVED))

    def _start_timer(self, on_complete: Callable[[], None]) -> None:
        """(Re)start the countdown; ``on_complete`` runs when it hits 0."""

        def tick() -> None:
            self.timer_value -= 1
            if self.timer_value <= 0:
                self.scheduler.cancel(PHASE_TIMER)
                on_complete()

        self.scheduler.every(PHASE_TIMER, self.config.countdown_interval_ms, tick)

    def _end(self, outcome: Outcome) -> None:
        """Finish the session and cancel every outstanding timer."""
        self.outcome = outcome
        self.scheduler.cancel_all()
        if outcome is Outcome.WON:
            logger.info("Chick raised; game won")
            self.events.emit(GameEvent.GAME_WON, WIN_MESSAGE)
        else:
            logger.info("Chick starved; game lost")
            self.events.emit(GameEvent.GAME_LOST, STARVED_MESSAGE)
