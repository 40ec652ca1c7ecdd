from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pygame

from .config import InstrumentConfig
from .geometry import clamp_pitch
from .renderer import InstrumentRenderer

RedrawListener = Callable[["AttitudeSnapshot"], None]


@dataclass(frozen=True, slots=True)
class AttitudeSnapshot:
    """Pitch and roll as read together by one render."""

    pitch: float
    roll: float


class AttitudeIndicator:
    """Holds the two attitude scalars and asks listeners to redraw when they change.

    The stored snapshot is replaced as a whole on every update, so a reader
    never observes a pitch from one update paired with a roll from another.
    """

    def __init__(
        self,
        *,
        config: InstrumentConfig | None = None,
        renderer: InstrumentRenderer | None = None,
    ) -> None:
        self._renderer = renderer or InstrumentRenderer(config)
        self._state = AttitudeSnapshot(pitch=0.0, roll=0.0)
        self._listeners: list[RedrawListener] = []

    @property
    def pitch(self) -> float:
        return self._state.pitch

    @property
    def roll(self) -> float:
        return self._state.roll

    @property
    def renderer(self) -> InstrumentRenderer:
        return self._renderer

    def snapshot(self) -> AttitudeSnapshot:
        return self._state

    def add_listener(self, listener: RedrawListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RedrawListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_pitch(self, value: float) -> None:
        self._update(AttitudeSnapshot(pitch=clamp_pitch(value), roll=self._state.roll))

    def set_roll(self, value: float) -> None:
        self._update(AttitudeSnapshot(pitch=self._state.pitch, roll=float(value)))

    def reset(self) -> None:
        """Return to level flight."""
        self._update(AttitudeSnapshot(pitch=0.0, roll=0.0))

    def render(self, width: int, height: int) -> pygame.Surface:
        state = self._state
        return self._renderer.render(state.pitch, state.roll, width, height)

    def draw(self, surface: pygame.Surface) -> None:
        state = self._state
        self._renderer.draw(surface, pitch=state.pitch, roll=state.roll)

    def _update(self, state: AttitudeSnapshot) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
