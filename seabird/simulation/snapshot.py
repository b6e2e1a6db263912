"""Read-only session snapshots and status text for the presentation layer.

A snapshot is a frozen copy of everything a renderer needs after a
mutation: the board, the seabird and boat positions, and the phase,
timer and fish-count values.  The helpers below turn those values into
the status strings shown next to the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from seabird.simulation.phases import Outcome, Phase

if TYPE_CHECKING:
    from seabird.simulation.engine import GameSession
    from seabird.world.cell import Cell
    from seabird.world.grid import Position

REFLECTION_QUESTIONS: tuple[str, ...] = (
    "How did the fishing boats change where you decided to forage?",
    "How does increasing fishing boats affect your foraging?",
    "How does moving the port closer to your nest affect your foraging?",
    "What might be some impacts of climate change on seabirds and their food sources?",
)

_PHASE_LABELS: dict[Phase, str] = {
    Phase.FORAGING: "Phase 1: Foraging",
    Phase.INCUBATION: "Phase 2: Incubation",
    Phase.CHICK_CARE: "Phase 3: Chick Care",
}

_INSTRUCTIONS: dict[Phase, str] = {
    Phase.FORAGING: "Tap arrows to rotate them, then tap a fish to start foraging!",
    Phase.INCUBATION: "Your egg is incubating... wait for it to hatch!",
    Phase.CHICK_CARE: "Feed your chick! Collect fish before time runs out!",
}


class NestStage(Enum):
    """What sits in the nest, shown on the nest tile."""

    EMPTY = "empty"
    EGG = "egg"
    CHICK = "chick"

    @classmethod
    def for_phase(cls, phase: Phase) -> NestStage:
        if phase is Phase.INCUBATION:
            return cls.EGG
        if phase is Phase.CHICK_CARE:
            return cls.CHICK
        return cls.EMPTY


@dataclass(frozen=True)
class BoatView:
    """Immutable view of one boat."""

    boat_id: int
    position: Position
    fish_held: int
    returning: bool


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything needed to draw one frame.

    Attributes:
        cells: Board contents indexed as ``cells[y][x]``.
        seabird: Seabird position.
        boats: Boats on the water.
        phase: Current phase.
        outcome: Final result, or None while running.
        fish_collected: Deliveries toward the current goal.
        fish_target: Deliveries the current goal needs.
        feedings_completed: Chick feedings finished.
        feedings_to_win: Feedings needed to win.
        timer_value: Seconds left on the phase countdown.
        in_transit: Whether the seabird is mid-flight.
        flight_path: Route being flown, highlighted while in transit.
        time_ms: Logical clock at the time of the snapshot.
    """

    cells: tuple[tuple[Cell, ...], ...]
    seabird: Position
    boats: tuple[BoatView, ...]
    phase: Phase
    outcome: Outcome | None
    fish_collected: int
    fish_target: int
    feedings_completed: int
    feedings_to_win: int
    timer_value: int
    in_transit: bool
    flight_path: tuple[Position, ...]
    time_ms: int

    @property
    def running(self) -> bool:
        return self.outcome is None

    @property
    def nest_stage(self) -> NestStage:
        return NestStage.for_phase(self.phase)

    @property
    def timer_visible(self) -> bool:
        """Only the incubation and chick-care phases show a countdown."""
        return self.phase in (Phase.INCUBATION, Phase.CHICK_CARE)

    def boat_at(self, x: int, y: int) -> BoatView | None:
        for boat in self.boats:
            if boat.position == (x, y):
                return boat
        return None


def build_snapshot(session: GameSession) -> SessionSnapshot:
    """Copy the current state of ``session`` into a SessionSnapshot."""
    phases = session.phases
    return SessionSnapshot(
        cells=session.grid.rows(),
        seabird=session.seabird.position,
        boats=tuple(
            BoatView(
                boat_id=boat.boat_id,
                position=boat.position,
                fish_held=boat.fish_held,
                returning=boat.returning,
            )
            for boat in session.boats
        ),
        phase=phases.phase,
        outcome=phases.outcome,
        fish_collected=phases.fish_collected,
        fish_target=phases.fish_target,
        feedings_completed=phases.feedings_completed,
        feedings_to_win=session.config.feedings_to_win,
        timer_value=phases.timer_value,
        in_transit=session.seabird.in_transit,
        flight_path=session.flight_path,
        time_ms=session.scheduler.now_ms,
    )


def phase_label(phase: Phase) -> str:
    return _PHASE_LABELS[phase]


def instruction_text(phase: Phase) -> str:
    """Hint line shown under the board for ``phase``."""
    return _INSTRUCTIONS[phase]


def fish_progress(snapshot: SessionSnapshot) -> str:
    """Return the fish counter as ``"collected/target"``."""
    return f"{snapshot.fish_collected}/{snapshot.fish_target}"


def nest_status(snapshot: SessionSnapshot) -> str:
    """Describe the nest, including feeding progress during chick care."""
    stage = snapshot.nest_stage
    if stage is NestStage.EGG:
        return "Incubating Egg"
    if stage is NestStage.CHICK:
        return f"Chick (Fed {snapshot.feedings_completed}/{snapshot.feedings_to_win})"
    return "Empty Nest"
