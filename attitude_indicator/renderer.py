from __future__ import annotations

import pygame

from .config import InstrumentConfig
from .geometry import Frame, Point
from .layout import (
    BezelLayout,
    HorizonLayout,
    InstrumentLayout,
    LabelSide,
    Segment,
    SymbolLayout,
    layout_instrument,
)


def _px(point: Point) -> tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))


class InstrumentRenderer:
    """Draws the attitude indicator with pygame.

    Pass order is horizon, bezel (both inside the circular clip), then the
    aircraft symbol on top with no clip.
    """

    def __init__(self, config: InstrumentConfig | None = None) -> None:
        self._config = config or InstrumentConfig()
        self._font: pygame.font.Font | None = None
        self._text_cache: dict[tuple[str, tuple[int, int, int]], pygame.Surface] = {}

    @property
    def config(self) -> InstrumentConfig:
        return self._config

    def render(self, pitch: float, roll: float, width: int, height: int) -> pygame.Surface:
        surface = pygame.Surface((max(1, int(width)), max(1, int(height))))
        self.draw(surface, pitch=pitch, roll=roll)
        return surface

    def draw(self, surface: pygame.Surface, *, pitch: float, roll: float) -> InstrumentLayout:
        """Paint a full instrument onto ``surface``, sized to fill it."""
        width, height = surface.get_size()
        layout = layout_instrument(pitch, roll, width, height, self._config)
        surface.fill(self._config.background)

        face = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._draw_horizon(face, layout.horizon)
        self._draw_bezel(face, layout.bezel)
        self._apply_circular_clip(face, layout)
        surface.blit(face, (0, 0))

        self._draw_symbol(surface, layout.symbol)
        return layout

    def _apply_circular_clip(self, face: pygame.Surface, layout: InstrumentLayout) -> None:
        mask = pygame.Surface(face.get_size(), pygame.SRCALPHA)
        center = _px(layout.viewport.center)
        pygame.draw.circle(mask, (255, 255, 255, 255), center, max(1, layout.viewport.radius))
        face.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)

    def _draw_horizon(self, face: pygame.Surface, horizon: HorizonLayout) -> None:
        cfg = self._config
        frame = horizon.frame

        pygame.draw.polygon(face, cfg.sky, [_px(frame.to_screen(p)) for p in horizon.sky.corners()])
        pygame.draw.polygon(face, cfg.ground, [_px(frame.to_screen(p)) for p in horizon.ground.corners()])
        self._draw_segment(face, horizon.horizon_line, cfg.markings, frame)

        for rung in horizon.rungs:
            self._draw_segment(face, rung.segment, cfg.markings, frame)
            for label in rung.labels:
                text = self._text(label.text, cfg.markings)
                half_w = text.get_width() / 2.0
                ax, ay = label.anchor
                center = (ax - half_w, ay) if label.side is LabelSide.LEFT else (ax + half_w, ay)
                rotated = pygame.transform.rotozoom(text, -frame.angle_deg, 1.0)
                face.blit(rotated, rotated.get_rect(center=_px(frame.to_screen(center))))

    def _draw_bezel(self, face: pygame.Surface, bezel: BezelLayout) -> None:
        cfg = self._config
        center = _px(bezel.center)
        if bezel.radius > 0:
            # pygame strokes circles inward from the radius, so the ring survives the clip.
            pygame.draw.circle(face, cfg.bezel, center, bezel.radius, min(bezel.ring_width, bezel.radius))

        pygame.draw.polygon(face, cfg.markings, [_px(p) for p in bezel.triangle])

        ascent = self._get_font().get_ascent()
        for marker in bezel.markers:
            self._draw_segment(face, marker.tick, cfg.markings)
            if marker.label is None or marker.label_center is None:
                continue
            text = self._text(marker.label, cfg.markings)
            lx, ly = marker.label_center
            face.blit(text, _px((lx - text.get_width() / 2.0, ly - ascent / 2.0)))

    def _draw_symbol(self, surface: pygame.Surface, symbol: SymbolLayout) -> None:
        color = self._config.symbol
        self._draw_segment(surface, symbol.wings, color)
        pygame.draw.circle(surface, color, _px(symbol.dot_center), symbol.dot_radius)
        self._draw_segment(surface, symbol.fin, color)

    def _draw_segment(
        self,
        surface: pygame.Surface,
        segment: Segment,
        color: tuple[int, int, int],
        frame: Frame | None = None,
    ) -> None:
        start, end = segment.start, segment.end
        if frame is not None:
            start = frame.to_screen(start)
            end = frame.to_screen(end)
        pygame.draw.line(surface, color, _px(start), _px(end), segment.width)

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self._config.label_font_size)
            self._font.set_bold(True)
        return self._font

    def _text(self, text: str, color: tuple[int, int, int]) -> pygame.Surface:
        key = (text, color)
        cached = self._text_cache.get(key)
        if cached is not None:
            return cached
        built = self._get_font().render(text, True, color)
        self._text_cache[key] = built
        return built
