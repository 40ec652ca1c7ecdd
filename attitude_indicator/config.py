from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ATTITUDE_INDICATOR_CONFIG"

Color = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class InstrumentConfig:
    """Tunable design parameters of the instrument face.

    Lengths are in device pixels, angles in degrees.
    """

    # Pitch scale and viewport.
    px_per_degree: float = 4.0
    margin: int = 40
    min_diameter: int = 1

    # Pitch ladder.
    ladder_step_deg: int = 10
    ladder_limit_deg: int = 90
    ladder_major_deg: int = 30
    rung_major_half: int = 60
    rung_minor_half: int = 30
    rung_label_gap: int = 5
    horizon_width: int = 3
    rung_width: int = 2

    # Bezel.
    ring_width: int = 4
    roll_marker_step_deg: int = 30
    marker_inset: int = 5
    marker_major_length: int = 15
    marker_minor_length: int = 10
    marker_emphasis_width: int = 3
    marker_width: int = 2
    marker_label_gap: int = 20
    triangle_half: int = 10
    triangle_inset: int = 5

    # Aircraft symbol.
    wing_half: int = 60
    symbol_width: int = 3
    dot_radius: int = 5
    fin_half: int = 10

    label_font_size: int = 16

    background: Color = (0, 0, 0)
    sky: Color = (0, 153, 255)
    ground: Color = (153, 102, 51)
    markings: Color = (255, 255, 255)
    bezel: Color = (64, 64, 64)
    symbol: Color = (255, 255, 0)

    @property
    def rung_spacing(self) -> float:
        return self.px_per_degree * self.ladder_step_deg

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: object) -> "InstrumentConfig":
        if not isinstance(data, dict):
            return cls()

        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            fallback = getattr(defaults, f.name)
            raw = data.get(f.name)
            if raw is None:
                continue
            if isinstance(fallback, tuple):
                values[f.name] = _as_color(raw, fallback)
            elif isinstance(fallback, float):
                values[f.name] = _clamp(_as_float(raw, fallback), 0.1, 50.0)
            else:
                lo, hi = _INT_BOUNDS.get(f.name, (0, 1000))
                values[f.name] = int(_clamp(_as_float(raw, fallback), lo, hi))

        # Step angles must divide evenly into their ranges to keep the scales symmetric.
        step = values.get("roll_marker_step_deg", defaults.roll_marker_step_deg)
        if 360 % step != 0:
            values["roll_marker_step_deg"] = defaults.roll_marker_step_deg
        ladder_step = values.get("ladder_step_deg", defaults.ladder_step_deg)
        if values.get("ladder_limit_deg", defaults.ladder_limit_deg) % ladder_step != 0:
            values["ladder_step_deg"] = defaults.ladder_step_deg
            values["ladder_limit_deg"] = defaults.ladder_limit_deg
        return cls(**values)


_INT_BOUNDS: dict[str, tuple[int, int]] = {
    "min_diameter": (1, 1000),
    "ladder_step_deg": (1, 90),
    "ladder_limit_deg": (1, 90),
    "ladder_major_deg": (1, 90),
    "roll_marker_step_deg": (1, 180),
    "horizon_width": (1, 20),
    "rung_width": (1, 20),
    "ring_width": (1, 20),
    "marker_emphasis_width": (1, 20),
    "marker_width": (1, 20),
    "symbol_width": (1, 20),
    "label_font_size": (6, 72),
}


def _as_float(value: object, fallback: float) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except Exception:
        return fallback


def _clamp(value: float, lo: float, hi: float) -> float:
    if value <= lo:
        return lo
    if value >= hi:
        return hi
    return float(value)


def _as_color(value: object, fallback: Color) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return fallback
    channels: list[int] = []
    for channel in value:
        if isinstance(channel, bool):
            return fallback
        try:
            channels.append(int(_clamp(float(channel), 0, 255)))
        except Exception:
            return fallback
    return (channels[0], channels[1], channels[2])


def default_config_path() -> Path:
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit).expanduser()
    return Path.home() / ".attitude_indicator.json"


def load_config(path: Path | None = None) -> InstrumentConfig:
    """Read an instrument skin from JSON, falling back to defaults on any problem."""
    config_path = default_config_path() if path is None else path
    if not config_path.exists():
        return InstrumentConfig()
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except Exception as exc:
        logger.warning("Ignoring unreadable instrument config %s: %s", config_path, exc)
        return InstrumentConfig()
    if not isinstance(payload, dict):
        logger.warning("Ignoring instrument config %s: expected a JSON object", config_path)
        return InstrumentConfig()
    return InstrumentConfig.from_dict(payload)
