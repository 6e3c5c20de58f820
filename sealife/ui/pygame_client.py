"""Pygame 2D visualization for the Sealife simulation.

Renders the current field snapshot in a window.  The renderer is a
``FieldView``: the simulator hands it ``(step, field)`` after every
tick and the renderer only reads from it.  The simulation steps at a
configurable tick rate while the display refreshes at the Pygame frame
rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from sealife.simulation.engine import Simulator
    from sealife.world.field import Field

# Colour palette
_BG = (10, 30, 60)
_INFECTED_RING = (220, 40, 40)
_UNKNOWN = (200, 200, 200)

_SPECIES_COLOURS: dict[str, tuple[int, int, int]] = {
    "Shark": (90, 90, 110),
    "Barracuda": (160, 160, 60),
    "Tuna": (60, 120, 220),
    "Goldfish": (255, 165, 0),
    "Parrotfish": (230, 80, 160),
    "Algae": (40, 140, 60),
    "Seaweed": (20, 90, 40),
}

# Background tint by hour: night blue -> noon blue
_NIGHT = np.array([5, 10, 30], dtype=np.float64)
_NOON = np.array([20, 60, 110], dtype=np.float64)


class PygameRenderer:
    """Renders Simulator snapshots into a Pygame window.

    Attributes:
        engine: The simulator to drive and visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per second at 30 fps
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        3.0,
        5.0,
        10.0,
        15.0,
        30.0,
        60.0,
    ]

    def __init__(
        self,
        engine: Simulator,
        cell_size: int = 6,
        ticks_per_second: float = 10.0,
    ) -> None:
        """Initialise the renderer and register it as a view.

        Args:
            engine: The simulator to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self._step = engine.step
        self._field = engine.field
        engine.views.append(self)

        w = engine.field.width * cell_size
        h = engine.field.depth * cell_size
        self._panel_width = 220
        self._win_w = w + self._panel_width
        self._win_h = max(h, 360)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Sealife")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def show_status(self, step: int, field: Field) -> None:
        """Remember the latest snapshot for the next frame."""
        self._step = step
        self._field = field

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        best = 0
        best_diff = abs(self._SPEED_STEPS[0] - tps)
        for i, s in enumerate(self._SPEED_STEPS):
            diff = abs(s - tps)
            if diff < best_diff:
                best, best_diff = i, diff
        return best

    def run(self, fps: int = 30, max_steps: int | None = None) -> None:
        """Main loop: handle events, step sim, render.

        Stepping halts once the field is no longer viable or
        ``max_steps`` ticks have run; the window stays open until closed.

        Args:
            fps: Target frames per second.
            max_steps: Optional cap on the number of ticks.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    if max_steps is not None and self.engine.step >= max_steps:
                        break
                    if not self.engine.field.is_viable():
                        break
                    self.engine.simulate_one_step()
            self._draw()

        pygame.quit()

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
                    self.engine.reset()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_water()
        self._draw_organisms()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_water(self) -> None:
        """Tint the field by time of day (darkest at midnight)."""
        hour = self.engine.time_of_day
        t = 1.0 - abs(hour - 12) / 12.0
        colour = _NIGHT + t * (_NOON - _NIGHT)
        cs = self.cell_size
        pygame.draw.rect(
            self.screen,
            colour.astype(int).tolist(),
            (0, 0, self._field.width * cs, self._field.depth * cs),
        )

    def _draw_organisms(self) -> None:
        """Draw plants as squares and animals as dots."""
        cs = self.cell_size
        radius = max(2, cs // 2)
        for org in self._field.organisms:
            if not org.alive or org.location is None:
                continue
            colour = _SPECIES_COLOURS.get(org.species.name, _UNKNOWN)
            x = org.location.col * cs
            y = org.location.row * cs
            if org.species.is_producer:
                pygame.draw.rect(self.screen, colour, (x, y, cs, cs))
                continue
            centre = (x + cs // 2, y + cs // 2)
            pygame.draw.circle(self.screen, colour, centre, radius)
            if org.infectable and org.infected:
                pygame.draw.circle(self.screen, _INFECTED_RING, centre, radius, 1)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self._field.width * self.cell_size + 10
        y = 10

        lines = [
            f"Step: {self._step}",
            f"Hour: {self.engine.time_of_day:02d}:00",
            f"Weather: {self.engine.weather.condition.name}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            "--- Population ---",
        ]
        for name, count in self._field.field_stats().items():
            lines.append(f"  {name}: {count}")
        if not self._field.is_viable():
            lines += ["", "Extinction - halted"]

        lines += [
            "",
            "--- Controls ---",
            "SPACE: pause",
            "R: reset",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
