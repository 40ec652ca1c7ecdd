from __future__ import annotations

import math
from dataclasses import dataclass

PITCH_LIMIT_DEG = 90.0

Point = tuple[float, float]


def clamp_pitch(pitch: float) -> float:
    value = float(pitch)
    if math.isnan(value):
        return 0.0
    return max(-PITCH_LIMIT_DEG, min(PITCH_LIMIT_DEG, value))


def pitch_pixels(pitch: float, px_per_degree: float = 4.0) -> int:
    """Vertical horizon shift for ``pitch``, in whole pixels."""
    return int(round(clamp_pitch(pitch) * px_per_degree))


def rotation_angle(roll: float) -> float:
    """Rotation applied to the horizon frame; one full turn is indistinguishable from none."""
    value = float(roll)
    if not math.isfinite(value):
        return 0.0
    return value % 360.0


def normalize_roll(roll: float) -> float:
    """Reduce ``roll`` into the display range (-180, 180]."""
    angle = rotation_angle(roll)
    if angle > 180.0:
        angle -= 360.0
    return angle


def point_on_circle(center: Point, radius: float, angle_deg: float) -> Point:
    # Instrument convention: 0 deg is straight up, increasing clockwise.
    rad = math.radians(float(angle_deg) - 90.0)
    return (center[0] + radius * math.cos(rad), center[1] + radius * math.sin(rad))


def bezel_label(angle_deg: int) -> str | None:
    angle = int(angle_deg) % 360
    if 0 < angle < 180:
        return str(angle)
    if angle > 180:
        return str(angle - 360)
    return None


@dataclass(frozen=True, slots=True)
class Frame:
    """Immutable 2D coordinate frame: a translation followed by a clockwise rotation.

    Deriving a frame never mutates the parent, so drawing in a local frame cannot
    leak its transform into later passes.
    """

    origin_x: float = 0.0
    origin_y: float = 0.0
    angle_deg: float = 0.0

    def translated(self, dx: float, dy: float) -> "Frame":
        ox, oy = self.to_screen((dx, dy))
        return Frame(ox, oy, self.angle_deg)

    def rotated(self, angle_deg: float) -> "Frame":
        return Frame(self.origin_x, self.origin_y, (self.angle_deg + float(angle_deg)) % 360.0)

    def to_screen(self, point: Point) -> Point:
        rad = math.radians(self.angle_deg)
        cos_a = math.cos(rad)
        sin_a = math.sin(rad)
        x, y = point
        return (
            self.origin_x + x * cos_a - y * sin_a,
            self.origin_y + x * sin_a + y * cos_a,
        )
