"""
Desktop window for the RODA wheel using pygame.

The wheel is rendered once per entrant-list change into a numpy buffer,
converted to a surface and rotated each frame by the spin engine's angle.
"""

from dataclasses import dataclass
from typing import Optional
import asyncio
import logging

import numpy as np
import pygame

from roda.animation.scheduler import FrameScheduler, monotonic_ms
from roda.audio.engine import AudioEngine
from roda.core.events import Event, EventBus, EventType
from roda.entrants import Entrant, EntrantList
from roda.graphics.renderer import WheelRenderer
from roda.storage import EntrantStore
from roda.wheel.engine import SpinEngine

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 1100
    height: int = 720
    title: str = "RODA"
    fullscreen: bool = False
    fps: int = 60

    panel_width: int = 300
    margin: int = 24

    # Colors
    bg_color: tuple[int, int, int] = (2, 6, 23)
    panel_color: tuple[int, int, int] = (15, 23, 42)
    text_color: tuple[int, int, int] = (226, 232, 240)
    muted_color: tuple[int, int, int] = (100, 116, 139)
    accent_color: tuple[int, int, int] = (34, 211, 238)
    winner_color: tuple[int, int, int] = (250, 204, 21)


class SpinWindow:
    """
    Interactive wheel window.

    Keyboard Mapping:
        SPACE / RETURN: Spin
        A: Type new entrants (RETURN adds, ESC closes the entry line)
        UP / DOWN: Select an entrant in the panel
        DELETE / BACKSPACE: Remove the selected entrant
        M: Toggle sound
        S: Log a share link for the current list
        ESC / Q: Exit

    The list can only be edited while the wheel is idle.
    """

    def __init__(
        self,
        entrants: EntrantList,
        engine: SpinEngine,
        scheduler: FrameScheduler,
        renderer: WheelRenderer,
        store: Optional[EntrantStore] = None,
        audio: Optional[AudioEngine] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[WindowConfig] = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.entrants = entrants
        self.engine = engine
        self.scheduler = scheduler
        self.renderer = renderer
        self.store = store
        self.audio = audio
        self.event_bus = event_bus or engine.event_bus

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False

        self._font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

        # Cached unrotated wheel and the names it was drawn for
        self._wheel_surface: Optional[pygame.Surface] = None
        self._wheel_names: Optional[tuple] = None
        self._winner: Optional[Entrant] = None

        # None while the entry line is closed
        self._entry_text: Optional[str] = None
        self._selected: Optional[int] = None

        self.event_bus.subscribe(EventType.BUTTON_PRESS, self._on_button_press)
        self.event_bus.subscribe(EventType.ENTRANTS_CHANGED, self._on_entrants_changed)
        self.event_bus.subscribe(EventType.SPIN_STARTED, self._on_spin_started)
        self.event_bus.subscribe(EventType.SPIN_COMPLETE, self._on_spin_complete)

        logger.info("SpinWindow created")

    @property
    def wheel_diameter(self) -> int:
        cfg = self.config
        return max(100, min(cfg.height - 2 * cfg.margin, cfg.width - cfg.panel_width - 3 * cfg.margin))

    @property
    def winner(self) -> Optional[Entrant]:
        return self._winner

    @property
    def entering(self) -> bool:
        return self._entry_text is not None

    @property
    def entry_text(self) -> str:
        return self._entry_text or ""

    @property
    def selected(self) -> Optional[Entrant]:
        if self._selected is None or self._selected >= len(self.entrants):
            return None
        return self.entrants.snapshot()[self._selected]

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont("DejaVu Sans", 20)
        self._small_font = pygame.font.SysFont("DejaVu Sans", 15)
        self._big_font = pygame.font.SysFont("DejaVu Sans", 40, bold=True)

        # Text input only runs while the entry line is open
        pygame.key.stop_text_input()

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    # ===== INPUT =====

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if self.entering:
                self._handle_entry_key(event)
            else:
                self._handle_keydown(event)
        elif event.type == pygame.TEXTINPUT and self.entering:
            self._entry_text += event.text

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.emit(Event(EventType.BUTTON_PRESS, source="keyboard"))
        elif key == pygame.K_a:
            self.open_entry()
        elif key == pygame.K_UP:
            self.move_selection(-1)
        elif key == pygame.K_DOWN:
            self.move_selection(1)
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            self.remove_selected()
        elif key == pygame.K_m:
            self.toggle_audio()
        elif key == pygame.K_s:
            self.log_share_url()

    def _handle_entry_key(self, event: pygame.event.Event) -> None:
        """Keys while the entry line is open; characters arrive as TEXTINPUT."""
        key = event.key

        if key == pygame.K_ESCAPE:
            self.close_entry()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self.add_names(self._entry_text):
                self._entry_text = ""
        elif key == pygame.K_BACKSPACE:
            self._entry_text = self._entry_text[:-1]

    def _on_button_press(self, event: Event) -> None:
        self.spin()

    # ===== ACTIONS =====

    def spin(self) -> bool:
        """Spin the current list. Returns False if the request was ignored."""
        future = self.engine.spin(self.entrants.snapshot())
        return future is not None

    def open_entry(self) -> None:
        if self.entering:
            return
        self._entry_text = ""
        if self._screen is not None:
            pygame.key.start_text_input()

    def close_entry(self) -> None:
        if not self.entering:
            return
        self._entry_text = None
        if self._screen is not None:
            pygame.key.stop_text_input()

    def add_names(self, text: str) -> list[Entrant]:
        """Add one entrant per line of ``text``; refused while spinning."""
        if self.engine.is_spinning():
            logger.debug("Ignoring new entrants while the wheel is spinning")
            return []
        added = self.entrants.add_from_text(text)
        if added:
            self._entrants_changed()
        return added

    def move_selection(self, step: int) -> Optional[Entrant]:
        """Move the panel selection by ``step`` rows, clamped to the list."""
        if not self.entrants:
            self._selected = None
            return None
        if self._selected is None:
            self._selected = 0 if step > 0 else len(self.entrants) - 1
        else:
            self._selected = min(max(self._selected + step, 0), len(self.entrants) - 1)
        return self.selected

    def remove_selected(self) -> bool:
        selected = self.selected
        if selected is None:
            return False
        return self.remove_entrant(selected.id)

    def remove_entrant(self, entrant_id: str) -> bool:
        """Remove an entrant by id; refused while a spin is in flight."""
        if self.engine.is_spinning():
            logger.debug("Ignoring removal while the wheel is spinning")
            return False
        if not self.entrants.remove(entrant_id):
            return False
        self._entrants_changed()
        return True

    def toggle_audio(self) -> Optional[bool]:
        if self.audio is None:
            return None
        enabled = self.audio.toggle_audio()
        logger.info(f"Sound {'on' if enabled else 'off'}")
        return enabled

    def log_share_url(self) -> Optional[str]:
        if self.store is None:
            return None
        url = self.store.share_url(self.entrants)
        logger.info(f"Share link: {url}")
        return url

    def _entrants_changed(self) -> None:
        self.event_bus.emit(Event(
            EventType.ENTRANTS_CHANGED, data={"count": len(self.entrants)}, source="window"
        ))

    def _on_entrants_changed(self, event: Event) -> None:
        self._winner = None
        if self._selected is not None:
            if self.entrants:
                self._selected = min(self._selected, len(self.entrants) - 1)
            else:
                self._selected = None
        if self.store is not None:
            self.store.save(self.entrants)

    def _on_spin_started(self, event: Event) -> None:
        self._winner = None

    def _on_spin_complete(self, event: Event) -> None:
        self._winner = event.data.get("winner")
        if self._winner is not None:
            logger.info(f"Winner: {self._winner.name}")

    # ===== RENDERING =====

    def _wheel(self) -> pygame.Surface:
        """Unrotated wheel surface, redrawn only when the names change."""
        names = tuple(self.entrants.names())
        if self._wheel_surface is None or names != self._wheel_names:
            size = self.wheel_diameter
            buffer = np.zeros((size, size, 3), dtype=np.uint8)
            self.renderer.render(buffer, self.entrants.snapshot())
            self._wheel_surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
            self._wheel_names = names
            logger.debug(f"Wheel redrawn for {len(names)} entrants")
        return self._wheel_surface

    def _render(self) -> None:
        if not self._screen:
            return

        cfg = self.config
        self._screen.fill(cfg.bg_color)

        size = self.wheel_diameter
        center = (cfg.margin + size // 2, cfg.height // 2)

        # pygame rotates counter-clockwise; wheel rotation is clockwise on
        # screen. Rotation padding takes the corner color, i.e. the background.
        rotated = pygame.transform.rotate(self._wheel(), -self.engine.rotation)
        self._screen.blit(rotated, rotated.get_rect(center=center))

        self._render_pointer(center, size)
        self._render_panel()
        if self._winner is not None and not self.engine.is_spinning():
            self._render_winner(center)

        pygame.display.flip()

    def _render_pointer(self, center: tuple[int, int], size: int) -> None:
        """Fixed pointer at the top of the wheel, pointing down."""
        cx, cy = center
        top = cy - size // 2
        points = [(cx - 18, top - 6), (cx + 18, top - 6), (cx, top + 30)]
        pygame.draw.polygon(self._screen, (255, 255, 255), points)
        pygame.draw.polygon(self._screen, self.config.accent_color, points, 3)

    def _render_panel(self) -> None:
        cfg = self.config
        x = cfg.width - cfg.panel_width
        pygame.draw.rect(self._screen, cfg.panel_color, (x, 0, cfg.panel_width, cfg.height))

        y = cfg.margin
        title = self._font.render(f"Entrants ({len(self.entrants)})", True, cfg.accent_color)
        self._screen.blit(title, (x + 16, y))
        y += 36

        line_height = self._small_font.get_linesize()
        if self.entering:
            entry = self._small_font.render(f"> {self._entry_text}_", True, cfg.accent_color)
            pygame.draw.rect(
                self._screen, cfg.accent_color,
                (x + 10, y - 4, cfg.panel_width - 20, line_height + 8), 1,
            )
            self._screen.blit(entry, (x + 16, y))
            y += line_height + 12

        max_lines = max(1, (cfg.height - y - 110) // line_height)
        names = self.entrants.names()

        # Scroll so the selected row stays visible
        first = 0
        if self._selected is not None and self._selected >= max_lines:
            first = self._selected - max_lines + 1

        for index in range(first, min(len(names), first + max_lines)):
            color = cfg.text_color
            if index == self._selected:
                pygame.draw.rect(
                    self._screen, cfg.accent_color,
                    (x + 10, y, cfg.panel_width - 20, line_height),
                )
                color = cfg.panel_color
            self._screen.blit(self._small_font.render(names[index], True, color), (x + 16, y))
            y += line_height
        hidden = len(names) - min(len(names), first + max_lines) + first
        if hidden > 0:
            more = self._small_font.render(f"+{hidden} more", True, cfg.muted_color)
            self._screen.blit(more, (x + 16, y))

        sound = "on" if self.audio is not None and self.audio.is_enabled() else "off"
        if self.entering:
            help_lines = ["RETURN add name", "ESC done"]
        else:
            help_lines = [
                "SPACE spin   M sound: " + sound,
                "A add   UP/DOWN select   DEL remove",
                "S share link   ESC quit",
            ]
        y = cfg.height - cfg.margin - line_height * len(help_lines)
        for line in help_lines:
            self._screen.blit(self._small_font.render(line, True, cfg.muted_color), (x + 16, y))
            y += line_height

    def _render_winner(self, center: tuple[int, int]) -> None:
        text = self._big_font.render(self._winner.name, True, self.config.winner_color)
        rect = text.get_rect(center=center)
        backdrop = rect.inflate(40, 24)
        pygame.draw.rect(self._screen, self.config.panel_color, backdrop, border_radius=12)
        pygame.draw.rect(self._screen, self.config.winner_color, backdrop, 3, border_radius=12)
        self._screen.blit(text, rect)

    # ===== LOOP =====

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Window started")

        while self._running:
            self._handle_events()
            self.scheduler.tick(monotonic_ms())
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        pygame.quit()
        logger.info("Window stopped")

    def stop(self) -> None:
        self._running = False
