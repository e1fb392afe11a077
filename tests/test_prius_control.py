import pytest

from pursuit.pid import PIDController
from pursuit.prius_control import (
    Gear,
    PriusControl,
    fail_proof_control_command,
    gear_for_speed,
    translate_commands,
)


def _pid():
    return PIDController(1.0, 1.0)


def test_default_control_is_neutral_and_idle():
    control = PriusControl()
    assert (control.brake, control.throttle, control.steer) == (0.0, 0.0, 0.0)
    assert control.gear is Gear.NEUTRAL


def test_fail_proof_command():
    control = fail_proof_control_command()
    assert control.brake == 0.5
    assert control.throttle == 0.0
    assert control.steer == 0.0
    assert control.gear is Gear.NEUTRAL


@pytest.mark.parametrize(
    "speed, gear",
    [(1.5, Gear.FORWARD), (0.0, Gear.NEUTRAL), (-2.0, Gear.REVERSE)],
)
def test_gear_for_speed(speed, gear):
    assert gear_for_speed(speed) is gear


def test_full_lock_steering_is_normalised():
    left = translate_commands(1.0, 0.7, _pid(), 1.0, 0.02)
    right = translate_commands(1.0, -0.7, _pid(), 1.0, 0.02)
    assert left.steer == pytest.approx(1.0)
    assert right.steer == pytest.approx(-1.0)


def test_accelerating_gives_throttle():
    control = translate_commands(2.0, 0.0, _pid(), 1.5, 0.02)
    assert control.gear is Gear.FORWARD
    assert control.brake == 0.0
    assert control.throttle == pytest.approx(2.0 - 1.5)


def test_slowing_down_gives_brake():
    control = translate_commands(1.0, 0.0, _pid(), 1.5, 0.02)
    assert control.throttle == 0.0
    assert control.brake == pytest.approx(1.5 - 1.0)


def test_matching_speed_gives_no_pedal():
    control = translate_commands(1.0, 0.0, _pid(), 1.0, 0.02)
    assert (control.brake, control.throttle) == (0.0, 0.0)


def test_reverse_uses_speed_magnitudes():
    forward = translate_commands(2.0, 0.1, _pid(), 1.0, 0.02)
    reverse = translate_commands(-2.0, 0.1, _pid(), -1.0, 0.02)
    assert reverse.gear is Gear.REVERSE
    assert reverse.throttle == pytest.approx(forward.throttle)
    assert reverse.brake == pytest.approx(forward.brake)


def test_pedal_values_stay_in_unit_range():
    for desired in (-5.0, -0.5, 0.0, 0.5, 5.0):
        control = translate_commands(desired, 0.0, _pid(), 0.3, 0.02)
        assert 0.0 <= control.throttle <= 1.0
        assert 0.0 <= control.brake <= 1.0
        assert control.throttle == 0.0 or control.brake == 0.0