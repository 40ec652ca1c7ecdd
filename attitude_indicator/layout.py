"""Pure geometry of one instrument frame.

Everything the renderer draws is computed here as plain data, without pygame,
so the placement rules can be tested directly. Horizon primitives are stored
in the rolled local frame (origin at the instrument centre); bezel and symbol
primitives are stored in screen coordinates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .config import InstrumentConfig
from .geometry import (
    Frame,
    Point,
    bezel_label,
    clamp_pitch,
    pitch_pixels,
    point_on_circle,
    rotation_angle,
)

logger = logging.getLogger(__name__)

# Extra pixels on every fill edge so rotated polygon edges never show a seam.
_FILL_GUARD_PX = 2


class LabelSide(StrEnum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class Segment:
    start: Point
    end: Point
    width: int


@dataclass(frozen=True, slots=True)
class LocalRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        )


@dataclass(frozen=True, slots=True)
class Viewport:
    width: int
    height: int
    center: Point
    diameter: int
    radius: int

    @classmethod
    def from_size(cls, width: int, height: int, config: InstrumentConfig) -> "Viewport":
        w = max(1, int(width))
        h = max(1, int(height))
        raw_diameter = min(w, h) - config.margin
        diameter = max(config.min_diameter, raw_diameter)
        if diameter != raw_diameter:
            logger.debug("Viewport %dx%d too small; diameter clamped to %d", w, h, diameter)
        return cls(
            width=w,
            height=h,
            center=(w / 2.0, h / 2.0),
            diameter=diameter,
            radius=diameter // 2,
        )


@dataclass(frozen=True, slots=True)
class RungLabel:
    text: str
    anchor: Point
    side: LabelSide


@dataclass(frozen=True, slots=True)
class LadderRung:
    index: int
    pitch_deg: int
    y: float
    half_length: int
    segment: Segment
    labels: tuple[RungLabel, RungLabel]


@dataclass(frozen=True, slots=True)
class HorizonLayout:
    frame: Frame
    pitch_px: int
    sky: LocalRect
    ground: LocalRect
    horizon_line: Segment
    rungs: tuple[LadderRung, ...]


@dataclass(frozen=True, slots=True)
class BezelMarker:
    angle_deg: int
    length: int
    emphasis: bool
    tick: Segment
    label: str | None
    label_center: Point | None


@dataclass(frozen=True, slots=True)
class BezelLayout:
    center: Point
    radius: int
    ring_width: int
    triangle: tuple[Point, Point, Point]
    markers: tuple[BezelMarker, ...]


@dataclass(frozen=True, slots=True)
class SymbolLayout:
    wings: Segment
    fin: Segment
    dot_center: Point
    dot_radius: int


@dataclass(frozen=True, slots=True)
class InstrumentLayout:
    viewport: Viewport
    horizon: HorizonLayout
    bezel: BezelLayout
    symbol: SymbolLayout


def ladder_indices(config: InstrumentConfig) -> tuple[int, ...]:
    steps = config.ladder_limit_deg // config.ladder_step_deg
    return tuple(i for i in range(-steps, steps + 1) if i != 0)


def rung_half_length(pitch_deg: int, config: InstrumentConfig) -> int:
    if pitch_deg % config.ladder_major_deg == 0:
        return config.rung_major_half
    return config.rung_minor_half


def marker_length(angle_deg: int, config: InstrumentConfig) -> int:
    if angle_deg % 90 == 0:
        return config.marker_major_length
    return config.marker_minor_length


def layout_horizon(pitch: float, roll: float, viewport: Viewport, config: InstrumentConfig) -> HorizonLayout:
    frame = Frame().translated(*viewport.center).rotated(rotation_angle(roll))
    pp = pitch_pixels(pitch, config.px_per_degree)
    r = viewport.radius
    horizon_y = float(-pp)

    # The clip disc is centred on the frame origin in local space too, so the
    # fills only need to reach |x| <= r and the far side of the disc.
    reach = r + abs(pp) + _FILL_GUARD_PX
    half_w = r + _FILL_GUARD_PX
    sky = LocalRect(-half_w, horizon_y - reach, 2 * half_w, reach)
    ground = LocalRect(-half_w, horizon_y, 2 * half_w, reach)

    horizon_line = Segment((-r, horizon_y), (r, horizon_y), config.horizon_width)

    rungs: list[LadderRung] = []
    for index in ladder_indices(config):
        deg = index * config.ladder_step_deg
        y = horizon_y - index * config.rung_spacing
        half = rung_half_length(deg, config)
        text = f"{abs(deg)}°"
        gap = half + config.rung_label_gap
        rungs.append(
            LadderRung(
                index=index,
                pitch_deg=deg,
                y=y,
                half_length=half,
                segment=Segment((-half, y), (half, y), config.rung_width),
                labels=(
                    RungLabel(text, (-gap, y), LabelSide.LEFT),
                    RungLabel(text, (gap, y), LabelSide.RIGHT),
                ),
            )
        )

    return HorizonLayout(
        frame=frame,
        pitch_px=pp,
        sky=sky,
        ground=ground,
        horizon_line=horizon_line,
        rungs=tuple(rungs),
    )


def layout_bezel(viewport: Viewport, config: InstrumentConfig) -> BezelLayout:
    cx, cy = viewport.center
    r = viewport.radius

    # Base along the top of the dial, apex pointing down at the centre.
    base_y = cy - r + config.triangle_inset
    tip_y = base_y + config.triangle_half
    triangle = (
        (cx, tip_y),
        (cx - config.triangle_half, base_y),
        (cx + config.triangle_half, base_y),
    )

    markers: list[BezelMarker] = []
    for angle in range(0, 360, config.roll_marker_step_deg):
        length = marker_length(angle, config)
        emphasis = angle == 0
        outer = point_on_circle(viewport.center, r - config.marker_inset, angle)
        inner = point_on_circle(viewport.center, r - length, angle)
        width = config.marker_emphasis_width if emphasis else config.marker_width
        label = bezel_label(angle)
        label_center = None
        if label is not None:
            label_center = point_on_circle(viewport.center, r - length - config.marker_label_gap, angle)
        markers.append(
            BezelMarker(
                angle_deg=angle,
                length=length,
                emphasis=emphasis,
                tick=Segment(outer, inner, width),
                label=label,
                label_center=label_center,
            )
        )

    return BezelLayout(
        center=viewport.center,
        radius=r,
        ring_width=config.ring_width,
        triangle=triangle,
        markers=tuple(markers),
    )


def layout_symbol(viewport: Viewport, config: InstrumentConfig) -> SymbolLayout:
    cx, cy = viewport.center
    return SymbolLayout(
        wings=Segment((cx - config.wing_half, cy), (cx + config.wing_half, cy), config.symbol_width),
        fin=Segment((cx, cy - config.fin_half), (cx, cy + config.fin_half), config.symbol_width),
        dot_center=viewport.center,
        dot_radius=config.dot_radius,
    )


def layout_instrument(
    pitch: float,
    roll: float,
    width: int,
    height: int,
    config: InstrumentConfig | None = None,
) -> InstrumentLayout:
    cfg = config or InstrumentConfig()
    viewport = Viewport.from_size(width, height, cfg)
    return InstrumentLayout(
        viewport=viewport,
        horizon=layout_horizon(clamp_pitch(pitch), roll, viewport, cfg),
        bezel=layout_bezel(viewport, cfg),
        symbol=layout_symbol(viewport, cfg),
    )
