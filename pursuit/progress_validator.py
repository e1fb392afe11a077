"""Decides when a path segment or a whole path has been tracked to its end."""

from __future__ import annotations

import copy
from dataclasses import dataclass

import numpy as np

from pursuit.common import Path, PathSegment, RobotState
from pursuit.geometry import is_past_last_point


@dataclass
class ProgressValidatorParameters:
    goal_distance_tolerance: float = 0.05


class ProgressValidator:
    """Checks whether the robot has reached the goal of a segment or a path."""

    def __init__(self, parameters: ProgressValidatorParameters | None = None) -> None:
        self.parameters = (
            copy.copy(parameters) if parameters is not None else ProgressValidatorParameters()
        )

    def is_path_segment_tracking_finished(
        self, path_segment: PathSegment, current_state: RobotState
    ) -> bool:
        """True when the robot is near the segment's goal or has driven past it."""
        position = current_state.pose.position
        goal = path_segment.points[-1].position
        is_close_enough = float(np.linalg.norm(position - goal)) < self.parameters.goal_distance_tolerance
        return is_close_enough or is_past_last_point(path_segment, position)

    def is_path_tracking_finished(
        self, path: Path, current_state: RobotState, current_segment: int
    ) -> bool:
        """True when the last segment is being tracked and it is finished."""
        is_tracking_last_segment = len(path.segments) - 1 == current_segment
        return is_tracking_last_segment and self.is_path_segment_tracking_finished(
            path.segments[current_segment], current_state
        )


def create_progress_validator(parameters: ProgressValidatorParameters) -> ProgressValidator:
    return ProgressValidator(parameters)