"""Pygame 2D presentation for a seabird session.

Draws the board, the seabird, the boats and a status panel, and turns
mouse clicks into arrow rotations and fish selections.  The session's
logical clock is paced by the Pygame frame clock, so the seabird's
step-by-step flight and the boat traffic play out in real time while the
core itself never sleeps.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pygame

from seabird.simulation.events import GameEvent
from seabird.simulation.phases import Outcome
from seabird.simulation.snapshot import (
    REFLECTION_QUESTIONS,
    NestStage,
    fish_progress,
    instruction_text,
    nest_status,
    phase_label,
)
from seabird.world.cell import CellKind

if TYPE_CHECKING:
    from seabird.simulation.engine import GameSession
    from seabird.simulation.snapshot import SessionSnapshot
    from seabird.world.cell import Cell

# Colour palette
_BG = (12, 40, 70)
_WATER = (24, 78, 119)
_ROUTE = (40, 120, 160)
_GRID_LINE = (18, 58, 92)
_ARROW = (230, 236, 240)
_FISH = (250, 170, 60)
_PORT = (150, 110, 80)
_BOAT = (220, 60, 60)
_SEABIRD = (255, 255, 255)
_TEXT = (220, 225, 230)
_SUCCESS = (120, 220, 120)
_ERROR = (240, 110, 110)
_NEST_COLOURS: dict[NestStage, tuple[int, int, int]] = {
    NestStage.EMPTY: (110, 160, 80),
    NestStage.EGG: (235, 225, 190),
    NestStage.CHICK: (250, 220, 90),
}

_FEEDBACK_MS = 2000

_CONTROLS = (
    "--- Controls ---",
    "Click arrow: rotate",
    "Click fish: fly",
    "R: restart",
    "SPACE: pause",
    "ESC: quit",
)

_FEEDBACK_EVENTS: dict[GameEvent, bool] = {
    GameEvent.FISH_CAUGHT: True,
    GameEvent.FEEDING_COMPLETE: True,
    GameEvent.PATH_INVALID: False,
}


class PygameRenderer:
    """Renders a GameSession into a Pygame window.

    Attributes:
        session: The session to visualise and control.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    def __init__(self, session: GameSession, cell_size: int = 80) -> None:
        """Initialise the renderer and subscribe to feedback events.

        Args:
            session: The session to render.
            cell_size: Pixel width/height per grid cell.
        """
        self.session = session
        self.cell_size = cell_size
        self._feedback: tuple[str, bool] | None = None
        self._feedback_left_ms = 0
        self._end_message = ""
        for event in _FEEDBACK_EVENTS:
            session.events.subscribe(event, self._on_feedback)
        session.events.subscribe(GameEvent.GAME_WON, self._on_end)
        session.events.subscribe(GameEvent.GAME_LOST, self._on_end)

        w = session.grid.width * cell_size
        h = session.grid.height * cell_size
        self._panel_width = 320
        self._win_w = w + self._panel_width
        self._win_h = max(h, 360)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Seabird")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.big_font = pygame.font.SysFont("monospace", 28, bold=True)
        self.running = True
        self.paused = False

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, advance the session clock, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt_ms = self.clock.tick(fps)
            self._handle_events()
            if not self.paused:
                self.session.advance(dt_ms)
            if self._feedback is not None:
                self._feedback_left_ms -= dt_ms
                if self._feedback_left_ms <= 0:
                    self._feedback = None
            self._draw()

        pygame.quit()

    def cell_from_pixel(self, px: int, py: int) -> tuple[int, int] | None:
        """Translate a window coordinate into a grid cell (None off-board)."""
        x, y = px // self.cell_size, py // self.cell_size
        if self.session.grid.in_bounds(x, y):
            return x, y
        return None

    def _on_feedback(self, event: GameEvent, message: str | None) -> None:
        if message:
            self._feedback = (message, _FEEDBACK_EVENTS[event])
            self._feedback_left_ms = _FEEDBACK_MS

    def _on_end(self, event: GameEvent, message: str | None) -> None:
        self._end_message = message or ""

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_r:
                    self.session.restart()
                    self._feedback = None
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(*event.pos)

    def _handle_click(self, px: int, py: int) -> None:
        session = self.session
        if self.paused or not session.running or session.in_transit:
            return
        cell = self.cell_from_pixel(px, py)
        if cell is None:
            return
        content = session.grid.get(*cell)
        if content.is_arrow:
            session.rotate_arrow(*cell)
        elif content.is_fish:
            session.move_to_fish(*cell)

    def _draw(self) -> None:
        """Render one frame."""
        snap = self.session.snapshot()
        self.screen.fill(_BG)
        for y, row in enumerate(snap.cells):
            for x, cell in enumerate(row):
                self._draw_cell(x, y, cell, snap)
        self._draw_boats(snap)
        self._draw_seabird(snap)
        self._draw_info_panel(snap)
        if not snap.running:
            self._draw_overlay(snap)
        pygame.display.flip()

    def _draw_cell(self, x: int, y: int, cell: Cell, snap: SessionSnapshot) -> None:
        cs = self.cell_size
        rect = pygame.Rect(x * cs, y * cs, cs, cs)
        on_route = snap.in_transit and (x, y) in snap.flight_path
        pygame.draw.rect(self.screen, _ROUTE if on_route else _WATER, rect)
        pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)
        cx, cy = rect.center

        if cell.kind is CellKind.ARROW and cell.direction is not None:
            length = cs * 0.32
            angle = math.atan2(cell.direction.dy, cell.direction.dx)
            tip = (cx + length * math.cos(angle), cy + length * math.sin(angle))
            tail = (cx - length * math.cos(angle), cy - length * math.sin(angle))
            pygame.draw.line(self.screen, _ARROW, tail, tip, 3)
            for side in (2.5, -2.5):
                head = (
                    tip[0] + cs * 0.15 * math.cos(angle + side),
                    tip[1] + cs * 0.15 * math.sin(angle + side),
                )
                pygame.draw.line(self.screen, _ARROW, tip, head, 3)
        elif cell.kind is CellKind.FISH:
            body = pygame.Rect(0, 0, cs // 2, cs // 4)
            body.center = (cx, cy)
            pygame.draw.ellipse(self.screen, _FISH, body)
            pygame.draw.polygon(
                self.screen,
                _FISH,
                [
                    (body.right, cy),
                    (body.right + cs // 8, cy - cs // 8),
                    (body.right + cs // 8, cy + cs // 8),
                ],
            )
        elif cell.kind is CellKind.NEST:
            colour = _NEST_COLOURS[snap.nest_stage]
            pygame.draw.circle(self.screen, colour, (cx, cy), cs // 3)
        elif cell.kind is CellKind.PORT:
            pygame.draw.rect(self.screen, _PORT, rect.inflate(-cs // 4, -cs // 4))

    def _draw_boats(self, snap: SessionSnapshot) -> None:
        cs = self.cell_size
        for boat in snap.boats:
            bx, by = boat.position
            hull = pygame.Rect(bx * cs + cs // 6, by * cs + cs // 2, cs * 2 // 3, cs // 4)
            pygame.draw.rect(self.screen, _BOAT, hull, border_radius=4)

    def _draw_seabird(self, snap: SessionSnapshot) -> None:
        cs = self.cell_size
        sx, sy = snap.seabird
        cx, cy = sx * cs + cs // 2, sy * cs + cs // 4
        wing = cs // 4
        pygame.draw.lines(
            self.screen,
            _SEABIRD,
            False,
            [(cx - wing, cy - wing // 2), (cx, cy), (cx + wing, cy - wing // 2)],
            3,
        )

    def _draw_info_panel(self, snap: SessionSnapshot) -> None:
        """Draw phase, fish, timer and nest status on the right side."""
        panel_x = self.session.grid.width * self.cell_size + 10
        y = 10

        lines = [
            phase_label(snap.phase),
            f"Fish: {fish_progress(snap)}",
            f"Nest: {nest_status(snap)}",
        ]
        if snap.timer_visible:
            lines.append(f"Time left: {snap.timer_value}s")
        lines += [
            f"Boats: {len(snap.boats)}",
            f"{'PAUSED' if self.paused else ''}",
            "",
        ]
        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

        if self._feedback is not None:
            message, ok = self._feedback
            surf = self.font.render(message, True, _SUCCESS if ok else _ERROR)
        else:
            surf = self.font.render(instruction_text(snap.phase), True, _TEXT)
        self.screen.blit(surf, (10, self._win_h - 24))

        for line in _CONTROLS:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

    def _draw_overlay(self, snap: SessionSnapshot) -> None:
        overlay = pygame.Surface((self._win_w, self._win_h), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 190))
        self.screen.blit(overlay, (0, 0))

        won = snap.outcome is Outcome.WON
        title = "Victory!" if won else "Game Over"
        y = 30
        surf = self.big_font.render(title, True, _SUCCESS if won else _ERROR)
        self.screen.blit(surf, (30, y))
        y += 50
        surf = self.font.render(self._end_message, True, _TEXT)
        self.screen.blit(surf, (30, y))
        y += 34
        for question in REFLECTION_QUESTIONS:
            surf = self.font.render(f"- {question}", True, _TEXT)
            self.screen.blit(surf, (30, y))
            y += 22
        surf = self.font.render("Press R to play again", True, _TEXT)
        self.screen.blit(surf, (30, y + 10))
