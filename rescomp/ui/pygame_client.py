"""Pygame 2D visualization for the rescomp simulation.

Renders cell resource levels and living agents in a window.  The
simulation steps at a configurable tick rate while the display refreshes
at the Pygame frame rate.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

from rescomp.core.errors import ConfigError
from rescomp.simulation.config import WorldConfig

if TYPE_CHECKING:
    from rescomp.simulation.engine import SimulationEngine

# Colour palette
_BG = (20, 20, 24)
_GRID_LINE = (64, 64, 64)
_TEXT = (200, 200, 200)

# Cell colour range (empty: dark blue -> full: green)
_CELL_LO = np.array([30, 80, 120], dtype=np.float64)
_CELL_HI = np.array([110, 220, 60], dtype=np.float64)

_MIN_CELL_SIZE = 5
_MAX_CELL_SIZE = 100


def cell_colour(fill: float) -> tuple[int, int, int]:
    """Return the colour for a cell at the given fill ratio (0.0-1.0)."""
    t = min(max(fill, 0.0), 1.0)
    colour = _CELL_LO + t * (_CELL_HI - _CELL_LO)
    r, g, b = colour.astype(int).tolist()
    return r, g, b


def agent_colour(health: int, max_health: int) -> tuple[int, int, int]:
    """Return the agent colour: white at full health, red when nearly dead."""
    t = min(max(health / max(max_health, 1), 0.0), 1.0)
    shade = int(255 * t)
    return 255, shade, shade


@dataclass
class ConfigEditor:
    """Working copy of a ``WorldConfig`` edited from the keyboard.

    Edits never touch the engine's config; the draft is only applied when
    the world is reset.

    Attributes:
        draft: The config being edited.
        selected: Index of the highlighted field in ``FIELDS``.
    """

    FIELDS: ClassVar[tuple[str, ...]] = tuple(f.name for f in fields(WorldConfig))

    draft: WorldConfig
    selected: int = 0

    @property
    def selected_field(self) -> str:
        """Return the name of the highlighted field."""
        return self.FIELDS[self.selected]

    def select(self, delta: int) -> None:
        """Move the highlight up or down, wrapping around."""
        self.selected = (self.selected + delta) % len(self.FIELDS)

    def adjust(self, delta: int) -> None:
        """Change the highlighted field by ``delta``, never below zero."""
        name = self.selected_field
        value = max(0, getattr(self.draft, name) + delta)
        self.draft = replace(self.draft, **{name: value})

    def lines(self) -> list[str]:
        """Return one panel line per field, marking the highlighted one."""
        return [
            f"{'>' if i == self.selected else ' '} {name}: "
            f"{getattr(self.draft, name)}"
            for i, name in enumerate(self.FIELDS)
        ]


def edit_config_key(editor: ConfigEditor, key: int, *, shift: bool = False) -> bool:
    """Apply a config-editing key press.

    UP/DOWN move the highlight, LEFT/RIGHT change the value by 1 (by 10
    with shift held).

    Returns:
        True if the key was an editing key.
    """
    step = 10 if shift else 1
    if key == pygame.K_UP:
        editor.select(-1)
    elif key == pygame.K_DOWN:
        editor.select(1)
    elif key == pygame.K_RIGHT:
        editor.adjust(step)
    elif key == pygame.K_LEFT:
        editor.adjust(-step)
    else:
        return False
    return True


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        2.0,
        5.0,
        10.0,
        20.0,
        50.0,
        100.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 25,
        ticks_per_second: float = 5.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self._panel_width = 280
        self.editor = ConfigEditor(draft=replace(engine.config.world))
        self.config_error: str | None = None

        pygame.init()
        self._resize()
        pygame.display.set_caption("2D Resource Competition")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    def _resize(self) -> None:
        """(Re)create the window to fit the world at the current cell size."""
        width, height = self.engine.world.size
        win_w = width * self.cell_size + self._panel_width
        win_h = max(height * self.cell_size, 720)
        self.screen = pygame.display.set_mode((win_w, win_h))

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                shift = bool(event.mod & pygame.KMOD_SHIFT)
                self._handle_key(event.key, shift=shift)

    def _handle_key(self, key: int, *, shift: bool = False) -> None:
        """Apply a single key press."""
        if edit_config_key(self.editor, key, shift=shift):
            return
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_n:
            self.engine.step()
        elif key == pygame.K_r:
            self._reset_world()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._speed_index = min(
                len(self._SPEED_STEPS) - 1,
                self._speed_index + 1,
            )
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_MINUS:
            self._speed_index = max(0, self._speed_index - 1)
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_RIGHTBRACKET:
            self.cell_size = min(_MAX_CELL_SIZE, self.cell_size + 5)
            self._resize()
        elif key == pygame.K_LEFTBRACKET:
            self.cell_size = max(_MIN_CELL_SIZE, self.cell_size - 5)
            self._resize()

    def _reset_world(self) -> None:
        """Rebuild the world from the edited config, reporting bad drafts."""
        try:
            self.engine.reset(replace(self.editor.draft))
        except ConfigError as exc:
            self.config_error = str(exc)
            return
        self.config_error = None
        self._tick_accumulator = 0.0
        self._resize()

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_agents()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw each cell shaded by how full its resource pool is."""
        cs = self.cell_size
        world = self.engine.world
        for cell in world.cells:
            x, y = world.coords(cell.id)
            rect = (x * cs, y * cs, cs, cs)
            pygame.draw.rect(self.screen, cell_colour(cell.fill_ratio), rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, width=1)

    def _draw_agents(self) -> None:
        """Draw each living agent as a dot tinted by its health."""
        cs = self.cell_size
        radius = max(2, int(cs * 0.35))
        world = self.engine.world
        max_hp = self.engine.config.world.agent_hp
        for agent in world.alive_agents():
            x, y = world.coords(agent.cid)
            centre = (x * cs + cs // 2, y * cs + cs // 2)
            colour = agent_colour(agent.health_point, max_hp)
            pygame.draw.circle(self.screen, colour, centre, radius)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        world = self.engine.world
        panel_x = world.width * self.cell_size + 10
        y = 10

        lines = [
            f"Tick: {self.engine.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            "--- World ---",
            f"Size: {world.width}x{world.height}",
            f"Alive: {world.alive_count()}/{len(world.agents)}",
            f"Resource: {world.total_resource()}",
            "",
            "--- World Config (on reset) ---",
            *self.editor.lines(),
        ]
        if self.config_error:
            lines.append(f"! {self.config_error}")
        lines += [
            "",
            "--- Controls ---",
            "SPACE: pause",
            "N: step",
            "R: reset with config",
            "UP/DOWN: pick field",
            "LEFT/RIGHT: edit (+SHIFT x10)",
            "+/-: speed",
            "[/]: cell size",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
