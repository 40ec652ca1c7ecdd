from __future__ import annotations

from attitude_indicator.indicator import AttitudeIndicator, AttitudeSnapshot


def test_set_pitch_clamps_and_set_roll_stores_raw_value() -> None:
    indicator = AttitudeIndicator()

    indicator.set_pitch(120)
    assert indicator.pitch == 90.0
    indicator.set_pitch(-200)
    assert indicator.pitch == -90.0
    indicator.set_pitch(12.5)
    assert indicator.pitch == 12.5

    indicator.set_roll(450)
    assert indicator.roll == 450.0
    indicator.set_roll(-725.5)
    assert indicator.roll == -725.5


def test_every_change_requests_a_redraw() -> None:
    indicator = AttitudeIndicator()
    seen: list[AttitudeSnapshot] = []
    indicator.add_listener(seen.append)

    indicator.set_pitch(200)
    indicator.set_roll(30)
    indicator.reset()

    assert seen == [
        AttitudeSnapshot(pitch=90.0, roll=0.0),
        AttitudeSnapshot(pitch=90.0, roll=30.0),
        AttitudeSnapshot(pitch=0.0, roll=0.0),
    ]


def test_removed_listener_is_not_called() -> None:
    indicator = AttitudeIndicator()
    seen: list[AttitudeSnapshot] = []
    indicator.add_listener(seen.append)
    indicator.remove_listener(seen.append)
    indicator.remove_listener(seen.append)

    indicator.set_roll(10)
    assert seen == []


def test_snapshot_is_a_consistent_pair() -> None:
    indicator = AttitudeIndicator()
    indicator.set_pitch(5)
    indicator.set_roll(15)
    before = indicator.snapshot()

    indicator.set_roll(25)

    assert before == AttitudeSnapshot(pitch=5.0, roll=15.0)
    assert indicator.snapshot() == AttitudeSnapshot(pitch=5.0, roll=25.0)
