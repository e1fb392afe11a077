"""Longitudinal velocity controllers: constant and goal-adaptive."""

from __future__ import annotations

import abc
import copy
import logging
from dataclasses import dataclass

import numpy as np

from pursuit.common import DrivingDirection, PathSegment, RobotState
from pursuit.filters import RateLimiter, sgn

logger = logging.getLogger(__name__)


class LongitudinalVelocityController(abc.ABC):
    """Computes the desired signed longitudinal velocity."""

    def __init__(self) -> None:
        self._desired_longitudinal_velocity = 0.0
        self.current_robot_state = RobotState()
        self.driving_direction = DrivingDirection.FWD
        self.current_path_segment = PathSegment()

    @property
    def velocity(self) -> float:
        return self._desired_longitudinal_velocity

    def advance(self) -> bool:
        return self._compute_velocity()

    def initialize(self) -> bool:
        return True

    def update_driving_direction(self, driving_direction: DrivingDirection) -> None:
        self.driving_direction = driving_direction

    def update_current_state(self, robot_state: RobotState) -> None:
        self.current_robot_state = robot_state

    def update_current_path_segment(self, path_segment: PathSegment) -> None:
        self.current_path_segment = copy.deepcopy(path_segment)

    @abc.abstractmethod
    def _compute_velocity(self) -> bool:
        """Update the desired velocity; return whether it succeeded."""


def _configure_limiter(limiter: RateLimiter, max_rate: float, timestep: float) -> None:
    limiter.min_falling_rate = -max_rate
    limiter.max_rising_rate = max_rate
    limiter.dt = timestep


def _signed_reference(direction: DrivingDirection, magnitude: float) -> float:
    return magnitude if direction is DrivingDirection.FWD else -magnitude


@dataclass
class ConstantVelocityControllerParameters:
    constant_desired_velocity: float = 0.0
    timestep: float = 0.01
    max_velocity_rate_of_change: float = 0.3


class ConstantVelocityController(LongitudinalVelocityController):
    """Drives at a constant speed, ramped by a rate limiter."""

    def __init__(self) -> None:
        super().__init__()
        self._parameters = ConstantVelocityControllerParameters()
        self._rate_limiter = RateLimiter()

    @property
    def parameters(self) -> ConstantVelocityControllerParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, parameters: ConstantVelocityControllerParameters) -> None:
        if parameters.max_velocity_rate_of_change < 0:
            raise ValueError("max_velocity_rate_of_change is less than 0.")
        if parameters.timestep < 0:
            raise ValueError("timestep is less than 0.")
        self._parameters = copy.copy(parameters)
        _configure_limiter(self._rate_limiter, parameters.max_velocity_rate_of_change, parameters.timestep)

    def update_driving_direction(self, driving_direction: DrivingDirection) -> None:
        """Set the direction; a change restarts the ramp from standstill."""
        if driving_direction is not self.driving_direction:
            self._rate_limiter.reset(0.0)
            logger.info("reseting the velocity rate limiter")
        self.driving_direction = driving_direction

    def _compute_velocity(self) -> bool:
        reference = _signed_reference(self.driving_direction, self._parameters.constant_desired_velocity)
        self._desired_longitudinal_velocity = self._rate_limiter.limit_rate_of_change(reference)
        return True


@dataclass
class AdaptiveVelocityControllerParameters:
    desired_velocity: float = 0.0
    timestep: float = 0.01
    max_velocity_rate_of_change: float = 0.3
    distance_to_goal_when_braking_starts: float = 4.0  # meters

    def __str__(self) -> str:
        return (
            f"desired velocity (m/s): {self.desired_velocity:.6f}\n"
            "distance to goal when braking starts (m): "
            f"{self.distance_to_goal_when_braking_starts:.6f}\n"
            f"max velocity rate of change (m/s2): {self.max_velocity_rate_of_change:.6f}\n"
            f"timestep (sec): {self.timestep:.6f}"
        )


class AdaptiveVelocityController(LongitudinalVelocityController):
    """Drives at the desired speed and slows linearly when near the goal."""

    def __init__(self) -> None:
        super().__init__()
        self._parameters = AdaptiveVelocityControllerParameters()
        self._rate_limiter = RateLimiter()

    @property
    def parameters(self) -> AdaptiveVelocityControllerParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, parameters: AdaptiveVelocityControllerParameters) -> None:
        if parameters.max_velocity_rate_of_change < 0:
            raise ValueError("max_velocity_rate_of_change is less than 0.")
        if parameters.timestep < 0:
            raise ValueError("timestep is less than 0.")
        if parameters.distance_to_goal_when_braking_starts < 0:
            raise ValueError("distance_to_goal_when_braking_starts is less than 0.")
        self._parameters = copy.copy(parameters)
        _configure_limiter(self._rate_limiter, parameters.max_velocity_rate_of_change, parameters.timestep)

    def update_current_path_segment(self, path_segment: PathSegment) -> None:
        super().update_current_path_segment(path_segment)
        self._rate_limiter.reset(0.0)

    def _compute_velocity(self) -> bool:
        params = self._parameters
        reference = _signed_reference(self.driving_direction, params.desired_velocity)

        goal = self.current_path_segment.points[-1].position
        distance_to_goal = float(np.linalg.norm(self.current_robot_state.pose.position - goal))
        braking_distance = params.distance_to_goal_when_braking_starts
        if distance_to_goal <= braking_distance:
            with np.errstate(divide="ignore", invalid="ignore"):
                slope = np.float64(params.desired_velocity) / braking_distance
                magnitude = float(slope * distance_to_goal)
            reference = sgn(reference) * magnitude

        self._desired_longitudinal_velocity = self._rate_limiter.limit_rate_of_change(reference)
        return True


def create_constant_velocity_controller(
    parameters: ConstantVelocityControllerParameters,
) -> ConstantVelocityController:
    controller = ConstantVelocityController()
    controller.parameters = parameters
    return controller


def create_adaptive_velocity_controller(
    parameters: AdaptiveVelocityControllerParameters,
) -> AdaptiveVelocityController:
    controller = AdaptiveVelocityController()
    controller.parameters = parameters
    return controller