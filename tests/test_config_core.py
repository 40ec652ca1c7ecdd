from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from attitude_indicator.config import (
    CONFIG_PATH_ENV,
    InstrumentConfig,
    default_config_path,
    load_config,
)


def test_defaults_match_reference_instrument() -> None:
    cfg = InstrumentConfig()

    assert cfg.px_per_degree == 4.0
    assert cfg.margin == 40
    assert cfg.rung_spacing == 40.0
    assert (cfg.rung_major_half, cfg.rung_minor_half) == (60, 30)
    assert (cfg.marker_major_length, cfg.marker_minor_length) == (15, 10)
    assert cfg.marker_inset == 5
    assert cfg.sky == (0, 153, 255)
    assert cfg.ground == (153, 102, 51)
    assert cfg.symbol == (255, 255, 0)


def test_from_dict_ignores_garbage_and_clamps_values() -> None:
    cfg = InstrumentConfig.from_dict(
        {
            "px_per_degree": 3,
            "margin": "wide",
            "ring_width": 999,
            "sky": [1, 2, 3],
            "ground": [300, -5, 10],
            "symbol": [1, 2],
            "markings": [True, 0, 0],
            "unknown_key": 12,
        }
    )

    assert cfg.px_per_degree == 3.0
    assert cfg.margin == 40
    assert cfg.ring_width == 20
    assert cfg.sky == (1, 2, 3)
    assert cfg.ground == (255, 0, 10)
    assert cfg.symbol == InstrumentConfig().symbol
    assert cfg.markings == InstrumentConfig().markings


@pytest.mark.parametrize("payload", [None, [], "text", 5])
def test_from_dict_non_mapping_gives_defaults(payload: object) -> None:
    assert InstrumentConfig.from_dict(payload) == InstrumentConfig()


def test_from_dict_rejects_uneven_scale_steps() -> None:
    assert InstrumentConfig.from_dict({"roll_marker_step_deg": 7}).roll_marker_step_deg == 30
    assert InstrumentConfig.from_dict({"roll_marker_step_deg": 45}).roll_marker_step_deg == 45

    ladder = InstrumentConfig.from_dict({"ladder_step_deg": 20})
    assert (ladder.ladder_step_deg, ladder.ladder_limit_deg) == (10, 90)
    ladder = InstrumentConfig.from_dict({"ladder_step_deg": 15})
    assert (ladder.ladder_step_deg, ladder.ladder_limit_deg) == (15, 90)


def test_to_dict_is_json_friendly_and_reloads() -> None:
    cfg = InstrumentConfig(px_per_degree=5.0, sky=(10, 20, 30), wing_half=80)
    data = json.loads(json.dumps(cfg.to_dict()))

    assert data["sky"] == [10, 20, 30]
    assert InstrumentConfig.from_dict(data) == cfg


def test_default_path_honours_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "skin.json"
    monkeypatch.setenv(CONFIG_PATH_ENV, str(target))
    assert default_config_path() == target

    monkeypatch.delenv(CONFIG_PATH_ENV)
    assert default_config_path() == Path.home() / ".attitude_indicator.json"


def test_load_config_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "absent.json") == InstrumentConfig()


def test_load_config_reads_skin(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "skin.json"
    path.write_text(json.dumps({"ground": [90, 60, 30], "wing_half": 45}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

    cfg = load_config()
    assert cfg.ground == (90, 60, 30)
    assert cfg.wing_half == 45


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_load_config_bad_file_warns_and_falls_back(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
    content: str,
) -> None:
    path = tmp_path / "skin.json"
    path.write_text(content, encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="attitude_indicator.config"):
        cfg = load_config(path)

    assert cfg == InstrumentConfig()
    assert any("skin.json" in record.getMessage() for record in caplog.records)
