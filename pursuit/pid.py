"""PID controller with output clamping and integrator anti-windup."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

import yaml


@dataclass
class PIDControllerParameters:
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    max_effort: float = 10.0
    max_integrator_input: float = sys.float_info.max
    integrator_saturation: float = math.inf


class PIDController:
    """PID controller whose output is clamped to ``[-max_effort, max_effort]``.

    The integrator only accumulates while the error magnitude is below
    ``max_integrator_input`` and is held within ``[-integrator_saturation,
    integrator_saturation]``. An infinite saturation defaults to ``max_effort``.
    """

    def __init__(
        self,
        max_effort: float = 10.0,
        kp: float = 1.0,
        ki: float = 0.0,
        kd: float = 0.0,
        max_integrator_input: float = sys.float_info.max,
        integrator_saturation: float = math.inf,
    ) -> None:
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)
        self.max_effort = float(max_effort)
        self.max_integrator_input = float(max_integrator_input)
        if integrator_saturation == math.inf:
            integrator_saturation = max_effort
        self.integrator_saturation = float(integrator_saturation)
        self._previous_measured = 0.0
        self._integral = 0.0

    def set_gains(self, kp: float, ki: float = 0.0, kd: float = 0.0) -> None:
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)

    def reset(self) -> None:
        """Clear the integrator and the remembered measurement."""
        self._previous_measured = 0.0
        self._integral = 0.0

    def update(
        self,
        dt: float,
        desired: float,
        measured: float,
        desired_derivative: float = 0.0,
        measured_derivative: float | None = None,
    ) -> float:
        """Return the control effort for one step of length ``dt``.

        Without ``measured_derivative`` it is estimated by finite differences
        from the previous measurement.
        """
        if measured_derivative is None:
            measured_derivative = (measured - self._previous_measured) / dt

        error = desired - measured
        derivative = desired_derivative - measured_derivative
        if abs(error) < self.max_integrator_input:
            new_integral = self._integral + error * dt
            saturation = self.integrator_saturation
            self._integral = max(-saturation, min(new_integral, saturation))

        out = self.kp * error + self.ki * self._integral + self.kd * derivative
        out = max(min(out, self.max_effort), -self.max_effort)
        self._previous_measured = measured
        return out


def load_parameters(filename) -> PIDControllerParameters:
    """Read gains from the ``PIDparameters`` section of a YAML file."""
    with open(filename, encoding="utf-8") as stream:
        document = yaml.safe_load(stream)
    if document is None:
        raise ValueError("PID controller::loadParameters loading failed")
    node = document["PIDparameters"]
    return PIDControllerParameters(
        kp=float(node["kp"]),
        ki=float(node["ki"]),
        kd=float(node["kd"]),
    )