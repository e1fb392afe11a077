"""Base class for controllers that steer the robot along a path segment."""

from __future__ import annotations

import abc
import copy
from dataclasses import dataclass

import numpy as np

from pursuit.common import DrivingDirection, PathSegment, RobotState


@dataclass
class HeadingControllerParameters:
    lookahead_distance_fwd: float = 4.0
    lookahead_distance_bck: float = 4.0
    anchor_distance_fwd: float = 0.2
    anchor_distance_bck: float = 0.2
    dead_zone_width: float = 0.0
    avg_filter_current_sample_weight: float = 1.0

    def __str__(self) -> str:
        return (
            f"Lookahead distance fwd: {self.lookahead_distance_fwd:.6f}\n"
            f"Lookahead distance bck: {self.lookahead_distance_bck:.6f}\n"
            f"Anchor distance fwd: {self.anchor_distance_fwd:.6f}\n"
            f"Anchor distance bck: {self.anchor_distance_bck:.6f}\n"
            f"dead zone width: {self.dead_zone_width:.6f}\n"
            f"avg filter current sample weight: {self.avg_filter_current_sample_weight:.6f}"
        )


class HeadingController(abc.ABC):
    """Computes steering angle, yaw rate and turning radius for a path segment."""

    def __init__(self) -> None:
        self.current_robot_state = RobotState()
        self.current_path_segment = PathSegment()
        self.desired_linear_velocity = np.zeros(2)
        self.last_closest_point_id = 0
        self.active_anchor_distance = 0.2
        self.active_lookahead_distance = 0.2
        self._turning_radius = 0.0
        self._yaw_rate = 0.0
        self._steering_angle = 0.0

    @property
    @abc.abstractmethod
    def parameters(self) -> HeadingControllerParameters:
        """Parameters the controller runs with."""

    @property
    def turning_radius(self) -> float:
        return self._turning_radius

    @property
    def yaw_rate(self) -> float:
        return self._yaw_rate

    @property
    def steering_angle(self) -> float:
        return self._steering_angle

    def initialize(self) -> bool:
        return True

    def advance(self) -> bool:
        """Run one control step; return whether every stage succeeded."""
        return (
            self._advance_impl()
            and self._compute_steering_angle()
            and self._compute_turning_radius()
            and self._compute_yaw_rate()
        )

    def update_current_path_segment(self, path_segment: PathSegment) -> None:
        self.last_closest_point_id = 0
        self.current_path_segment = copy.deepcopy(path_segment)
        self.initialize()

    def update_current_state(self, robot_state: RobotState) -> None:
        self.current_robot_state = robot_state

    def update_desired_velocity(self, velocity) -> None:
        self.desired_linear_velocity = np.array(velocity, dtype=float).reshape(2)

    def _choose_active_anchor_and_lookahead_distance(
        self, parameters: HeadingControllerParameters
    ) -> None:
        direction = self.current_path_segment.driving_direction
        if direction is DrivingDirection.FWD:
            self.active_lookahead_distance = parameters.lookahead_distance_fwd
            self.active_anchor_distance = parameters.anchor_distance_fwd
        elif direction is DrivingDirection.BCK:
            self.active_lookahead_distance = parameters.lookahead_distance_bck
            self.active_anchor_distance = parameters.anchor_distance_bck
        else:
            raise ValueError(
                "Unknown direction of driving. Cannot set the active lookahead distance"
            )

    @abc.abstractmethod
    def _advance_impl(self) -> bool:
        """Controller-specific part of a control step."""

    def _compute_steering_angle(self) -> bool:
        return True

    def _compute_yaw_rate(self) -> bool:
        return True

    def _compute_turning_radius(self) -> bool:
        return True