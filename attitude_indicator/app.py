"""Pygame host for the attitude indicator.

The host owns the window, the pitch and roll sliders and the text readouts.
It feeds slider values into an :class:`AttitudeIndicator` and redraws the
instrument whenever the indicator reports a change or the window is resized.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

import pygame

from .config import InstrumentConfig, load_config
from .geometry import normalize_roll
from .indicator import AttitudeIndicator, AttitudeSnapshot

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Aircraft Attitude Indicator"
WINDOW_SIZE = (500, 600)
TARGET_FPS = 60
CONTROL_STRIP_H = 120

_TEXT = (235, 235, 245)
_TEXT_DIM = (170, 176, 190)
_TRACK = (70, 76, 92)
_KNOB = (220, 226, 240)
_STRIP_BG = (24, 26, 34)


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if event.type == pygame.VIDEORESIZE:
            # SDL2 resizes the display surface in place; keep our reference current.
            resized = pygame.display.get_surface()
            if resized is not None:
                self._surface = resized
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


class Slider:
    """Horizontal integer slider with major and minor tick marks."""

    def __init__(
        self,
        *,
        lo: int,
        hi: int,
        major: int,
        minor: int,
        on_change: Callable[[int], None],
    ) -> None:
        self.lo = int(lo)
        self.hi = int(hi)
        self.major = int(major)
        self.minor = int(minor)
        self.rect = pygame.Rect(0, 0, 0, 0)
        self._value = 0
        self._on_change = on_change
        self._dragging = False

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, value: float, *, notify: bool = True) -> bool:
        clamped = max(self.lo, min(self.hi, int(round(value))))
        if clamped == self._value:
            return False
        self._value = clamped
        if notify:
            self._on_change(clamped)
        return True

    def step(self, delta: int) -> bool:
        return self.set_value(self._value + delta)

    def x_for(self, value: int) -> int:
        span = max(1, self.hi - self.lo)
        t = (value - self.lo) / span
        return self.rect.x + int(round(t * self.rect.w))

    def value_at(self, x: int) -> int:
        if self.rect.w <= 0:
            return self._value
        t = (x - self.rect.x) / self.rect.w
        return int(round(self.lo + t * (self.hi - self.lo)))

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 16).collidepoint(event.pos):
                self._dragging = True
                self.set_value(self.value_at(event.pos[0]))
                return True
        elif event.type == pygame.MOUSEMOTION and self._dragging:
            self.set_value(self.value_at(event.pos[0]))
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._dragging:
            self._dragging = False
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        track = self.rect
        pygame.draw.rect(surface, _TRACK, track, border_radius=3)

        for v in range(self.lo, self.hi + 1, self.minor):
            x = self.x_for(v)
            is_major = (v - self.lo) % self.major == 0
            tick_h = 8 if is_major else 4
            pygame.draw.line(surface, _TEXT_DIM, (x, track.bottom + 2), (x, track.bottom + 2 + tick_h), 1)
            if is_major:
                label = font.render(str(v), True, _TEXT_DIM)
                surface.blit(label, label.get_rect(midtop=(x, track.bottom + 12)))

        knob_x = self.x_for(self._value)
        pygame.draw.circle(surface, _KNOB, (knob_x, track.centery), max(6, track.h))


class AttitudeScreen:
    def __init__(self, app: App, indicator: AttitudeIndicator) -> None:
        self._app = app
        self._indicator = indicator
        self._small_font = pygame.font.Font(None, 20)
        self._pitch = Slider(lo=-90, hi=90, major=30, minor=10, on_change=indicator.set_pitch)
        self._roll = Slider(lo=-180, hi=180, major=60, minor=15, on_change=indicator.set_roll)
        self._instrument: pygame.Surface | None = None
        indicator.add_listener(self._on_attitude_changed)

    def _on_attitude_changed(self, state: AttitudeSnapshot) -> None:
        # Keep the sliders in step when the attitude changes from elsewhere (reset, large roll).
        self._pitch.set_value(state.pitch, notify=False)
        self._roll.set_value(normalize_roll(state.roll), notify=False)
        self._instrument = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self._instrument = None
            return
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._app.quit()
            elif event.key == pygame.K_UP:
                self._pitch.step(1)
            elif event.key == pygame.K_DOWN:
                self._pitch.step(-1)
            elif event.key == pygame.K_RIGHT:
                self._roll.step(1)
            elif event.key == pygame.K_LEFT:
                self._roll.step(-1)
            elif event.key == pygame.K_r:
                self._indicator.reset()
            return
        for slider in (self._pitch, self._roll):
            if slider.handle_event(event):
                return

    def render(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        strip_h = min(CONTROL_STRIP_H, height)
        view_size = (width, max(1, height - strip_h))

        if self._instrument is None or self._instrument.get_size() != view_size:
            self._instrument = self._indicator.render(*view_size)
        surface.blit(self._instrument, (0, 0))

        strip = pygame.Rect(0, height - strip_h, width, strip_h)
        pygame.draw.rect(surface, _STRIP_BG, strip)
        self._layout_sliders(strip)

        font = self._app.font
        col_w = strip.w // 2
        readouts = (
            (f"Pitch: {self._pitch.value}°", self._pitch),
            (f"Roll: {self._roll.value}°", self._roll),
        )
        for col, (text, slider) in enumerate(readouts):
            label = font.render(text, True, _TEXT)
            surface.blit(label, label.get_rect(midtop=(strip.x + col * col_w + col_w // 2, strip.y + 10)))
            slider.draw(surface, self._small_font)

    def _layout_sliders(self, strip: pygame.Rect) -> None:
        col_w = strip.w // 2
        pad = 24
        for col, slider in enumerate((self._pitch, self._roll)):
            slider.rect = pygame.Rect(
                strip.x + col * col_w + pad,
                strip.y + 52,
                max(1, col_w - 2 * pad),
                6,
            )


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: InstrumentConfig | None = None,
) -> int:
    pygame.init()

    pygame.display.set_caption(WINDOW_TITLE)
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 28)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    indicator = AttitudeIndicator(config=config or load_config())
    app.push(AttitudeScreen(app, indicator))
    logger.info("Attitude indicator started at %dx%d", *WINDOW_SIZE)

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()
        logger.info("Attitude indicator stopped after %d frames", frame)

    return 0
