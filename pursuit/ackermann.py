"""Pure pursuit heading controller for Ackermann-steered vehicles."""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass

import numpy as np

from pursuit.common import PathSegment
from pursuit.filters import AverageFilter, RateLimiter, bind_to_range, dead_zone, sgn
from pursuit.geometry import (
    LookaheadError,
    append_point_along_final_approach_direction,
    compute_anchor_point,
    compute_desired_heading_vector,
    compute_lookahead_angle,
    compute_lookahead_point,
    compute_steering_angle_cmd,
    get_id_of_the_closest_point_on_the_path,
)
from pursuit.heading_controller import HeadingController, HeadingControllerParameters

logger = logging.getLogger(__name__)

_RAD_TO_DEG = 180.0 / math.pi


@dataclass
class AckermannSteeringCtrlParameters(HeadingControllerParameters):
    wheel_base: float = 4.0
    max_steering_angle_magnitude: float = 0.5  # rad
    max_steering_rate_of_change: float = 0.2  # rad/s
    dt: float = 0.01  # seconds

    def __str__(self) -> str:
        return (
            super().__str__()
            + "\n"
            + f"wheel base (m): {self.wheel_base:.6f}\n"
            + "max steering angle magnitued (deg): "
            + f"{_RAD_TO_DEG * self.max_steering_angle_magnitude:.6f}\n"
            + "max steering rate of change (deg/s): "
            + f"{_RAD_TO_DEG * self.max_steering_rate_of_change:.6f}\n"
            + f"dt (sec): {self.dt:.6f}\n"
        )


_NON_NEGATIVE_FIELDS = (
    "anchor_distance_bck",
    "anchor_distance_fwd",
    "lookahead_distance_bck",
    "lookahead_distance_fwd",
    "wheel_base",
    "max_steering_angle_magnitude",
    "max_steering_rate_of_change",
    "dead_zone_width",
)


class AckermannSteeringController(HeadingController):
    """Steers towards a lookahead point using the Ackermann bicycle model."""

    def __init__(self) -> None:
        super().__init__()
        self._parameters = AckermannSteeringCtrlParameters()
        self._rate_limiter = RateLimiter()
        self._avg_filter = AverageFilter()
        self.current_anchor_point = np.zeros(2)
        self.current_lookahead_point = np.zeros(2)

    @property
    def parameters(self) -> AckermannSteeringCtrlParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, parameters: AckermannSteeringCtrlParameters) -> None:
        for name in _NON_NEGATIVE_FIELDS:
            if getattr(parameters, name) < 0:
                raise ValueError(f"{name} is less than 0.")
        self._parameters = copy.copy(parameters)
        self._rate_limiter.dt = parameters.dt
        self._rate_limiter.min_falling_rate = -parameters.max_steering_rate_of_change
        self._rate_limiter.max_rising_rate = parameters.max_steering_rate_of_change
        self._avg_filter.weight = parameters.avg_filter_current_sample_weight

    def initialize(self) -> bool:
        self.last_closest_point_id = 0
        return True

    def update_current_path_segment(self, path_segment: PathSegment) -> None:
        """Take a copy of the segment and extend it past its final point."""
        self.last_closest_point_id = 0
        self.current_path_segment = copy.deepcopy(path_segment)
        params = self._parameters
        extending_length = 10.0 * max(params.lookahead_distance_fwd, params.lookahead_distance_bck)
        append_point_along_final_approach_direction(extending_length, self.current_path_segment)

    def _advance_impl(self) -> bool:
        params = self._parameters
        self._choose_active_anchor_and_lookahead_distance(params)
        direction = self.current_path_segment.driving_direction
        pose = self.current_robot_state.pose
        anchor_point = compute_anchor_point(pose, self.active_anchor_distance, direction)
        self.current_anchor_point = anchor_point
        closest_id = get_id_of_the_closest_point_on_the_path(
            self.current_path_segment, pose.position, self.last_closest_point_id
        )

        try:
            lookahead_point = compute_lookahead_point(
                closest_id,
                self.active_lookahead_distance,
                self.current_robot_state,
                direction,
                self.current_path_segment,
                self.active_anchor_distance,
            )
        except LookaheadError:
            logger.error("AckermannSteeringController: Failed to compute lookahead point.")
            return False
        self.current_lookahead_point = lookahead_point

        heading = compute_desired_heading_vector(pose.yaw, direction)
        try:
            lookahead_angle = compute_lookahead_angle(lookahead_point, anchor_point, heading, direction)
        except LookaheadError:
            logger.error("AckermannSteeringController: Failed to compute lookahead angle")
            return False

        steering = compute_steering_angle_cmd(
            lookahead_angle,
            self.active_lookahead_distance,
            self.active_anchor_distance,
            params.wheel_base,
        )
        if not math.isfinite(steering):
            logger.error("AckermannSteeringController: Computed steering angle is nan")
            return False

        filtered = self._avg_filter.filter_input_value(steering)
        dead_zoned = dead_zone(filtered, params.dead_zone_width)
        rate_limited = self._rate_limiter.limit_rate_of_change(dead_zoned)
        limit = params.max_steering_angle_magnitude
        self._steering_angle = bind_to_range(rate_limited, -limit, limit)
        self.last_closest_point_id = closest_id
        return True

    def _raw_yaw_rate(self) -> float:
        speed = float(np.linalg.norm(self.desired_linear_velocity))
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(speed) / self._parameters.wheel_base * math.tan(self._steering_angle))

    def _compute_steering_angle(self) -> bool:
        return True

    def _compute_yaw_rate(self) -> bool:
        self._yaw_rate = self._raw_yaw_rate()
        return True

    def _compute_turning_radius(self) -> bool:
        speed = float(np.linalg.norm(self.desired_linear_velocity))
        yaw_rate = self._raw_yaw_rate()
        self._turning_radius = speed / (abs(yaw_rate) + 1e-4) * sgn(yaw_rate)
        return True


def create_ackermann_steering_controller(
    parameters: AckermannSteeringCtrlParameters,
) -> AckermannSteeringController:
    controller = AckermannSteeringController()
    controller.parameters = parameters
    return controller