"""Vehicle control command and its derivation from speed and steering targets."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pursuit.filters import sgn
from pursuit.pid import PIDController

MAX_STEERING_ANGLE = 0.7  # rad, full steering lock of the vehicle


class Gear(enum.Enum):
    NO_COMMAND = 0
    NEUTRAL = 1
    FORWARD = 2
    REVERSE = 3


@dataclass
class PriusControl:
    """Brake and throttle in ``[0, 1]``, normalised steering and gear."""

    brake: float = 0.0
    throttle: float = 0.0
    steer: float = 0.0
    gear: Gear = Gear.NEUTRAL


def fail_proof_control_command() -> PriusControl:
    """Safe command: neutral gear with half brake."""
    return PriusControl(brake=0.5)


def gear_for_speed(longitudinal_speed: float) -> Gear:
    """Gear matching the sign of a signed longitudinal speed."""
    sign = sgn(longitudinal_speed)
    if sign > 0:
        return Gear.FORWARD
    if sign < 0:
        return Gear.REVERSE
    return Gear.NEUTRAL


def translate_commands(
    longitudinal_speed: float,
    steering_angle: float,
    pid_controller: PIDController,
    measured_speed: float,
    dt: float,
) -> PriusControl:
    """Turn a signed speed and steering angle into a vehicle command.

    The PID controller tracks the speed magnitude; positive effort becomes
    throttle and negative effort becomes brake.
    """
    control = PriusControl(
        gear=gear_for_speed(longitudinal_speed),
        steer=steering_angle / MAX_STEERING_ANGLE,
    )
    cmd = pid_controller.update(dt, abs(longitudinal_speed), abs(measured_speed))
    sign = sgn(cmd)
    if sign > 0:
        control.brake, control.throttle = 0.0, cmd
    elif sign < 0:
        control.brake, control.throttle = abs(cmd), 0.0
    else:
        control.brake, control.throttle = 0.0, 0.0
    return control