"""Path trackers: run the state machine and the controllers along a path."""

from __future__ import annotations

import abc
import copy
import enum
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from pursuit.common import DrivingDirection, Path, RobotState
from pursuit.filters import bind_index_to_range
from pursuit.geometry import euclidean_distance
from pursuit.heading_controller import HeadingController
from pursuit.path_preprocessor import PathPreprocessor
from pursuit.progress_validator import ProgressValidator
from pursuit.stopwatch import Stopwatch
from pursuit.velocity_control import LongitudinalVelocityController

logger = logging.getLogger(__name__)


class PathTracker(abc.ABC):
    """Combines a heading and a velocity controller to follow a path."""

    def __init__(self) -> None:
        self.velocity_controller: LongitudinalVelocityController | None = None
        self.heading_controller: HeadingController | None = None
        self.progress_validator: ProgressValidator | None = None
        self.path_preprocessor: PathPreprocessor | None = None
        self.current_path = Path()
        self.current_robot_state = RobotState()
        self.current_path_segment_id = 0
        self.current_driving_direction = DrivingDirection.FWD
        self._longitudinal_velocity = 0.0
        self._turning_radius = 0.0
        self._yaw_rate = 0.0
        self._steering_angle = 0.0

    @property
    def turning_radius(self) -> float:
        return self._turning_radius

    @property
    def yaw_rate(self) -> float:
        return self._yaw_rate

    @property
    def steering_angle(self) -> float:
        return self._steering_angle

    @property
    def longitudinal_velocity(self) -> float:
        return self._longitudinal_velocity

    def initialize(self) -> bool:
        return True

    def advance(self) -> bool:
        """Run one tracking step; return whether the controllers succeeded."""
        if not self.current_path.segments:
            logger.error("PathTracker:: trying to track empty path")
            return False
        self._advance_state_machine()
        return self._advance_controllers()

    def import_current_path(self, path: Path) -> None:
        if not path.segments:
            raise ValueError("Trying to import an empty path")
        self.current_path = copy.deepcopy(path)

    def update_current_path(self, path: Path) -> None:
        if not path.segments:
            raise ValueError("Update attempt with empty path")
        self.current_path = copy.deepcopy(path)

    def update_robot_state(self, robot_state: RobotState) -> None:
        self.current_robot_state = robot_state

    def is_tracking_finished(self) -> bool:
        return self.progress_validator.is_path_tracking_finished(
            self.current_path, self.current_robot_state, self.current_path_segment_id
        )

    @abc.abstractmethod
    def stop_tracking(self) -> None:
        """Stop following the current path."""

    @abc.abstractmethod
    def _advance_state_machine(self) -> None:
        """Update the tracking state from progress along the path."""

    @abc.abstractmethod
    def _advance_controllers(self) -> bool:
        """Run the controllers for the current state."""


@dataclass
class SimplePathTrackerParameters:
    waiting_time_between_direction_switches: float = 1.0


class _State(enum.Enum):
    NO_OPERATION = enum.auto()
    WAITING = enum.auto()
    DRIVING = enum.auto()


class SimplePathTracker(PathTracker):
    """Drives segment by segment, pausing between segments."""

    def __init__(
        self,
        parameters: SimplePathTrackerParameters | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.parameters = (
            copy.copy(parameters) if parameters is not None else SimplePathTrackerParameters()
        )
        self._state = _State.NO_OPERATION
        self._is_path_received = False
        self._is_path_updated = False
        self._stopwatch = Stopwatch(clock)

    def _is_path_within_radius(self, path: Path, radius: float) -> bool:
        first_points = path.segments[0].points
        if not first_points:
            raise ValueError("First segment of the path has no points!")
        return euclidean_distance(self.current_robot_state, first_points[0]) <= radius

    def import_current_path(self, path: Path) -> None:
        """Start tracking ``path`` from its first segment."""
        if not path.segments:
            raise ValueError("Trying to import an empty path")
        if not self._is_path_within_radius(path, self.heading_controller.active_lookahead_distance):
            logger.warning(
                "path imported is more than one lookahead distance away from the current state"
            )
        self.current_path = copy.deepcopy(path)
        self._is_path_received = True
        self._is_path_updated = False
        self.current_path_segment_id = 0
        self._state = _State.NO_OPERATION

    def update_current_path(self, path: Path) -> None:
        """Replace the path, replanned from the current position, keeping the state."""
        if not path.segments:
            raise ValueError("Update attempt with empty path")
        if not self._is_path_within_radius(path, self.heading_controller.active_lookahead_distance):
            logger.warning(
                "updated path is more than one lookahead distance away from the current state"
            )
        self.current_path = copy.deepcopy(path)
        self._is_path_received = True
        self._is_path_updated = True
        self.current_path_segment_id = 0

    def stop_tracking(self) -> None:
        self._state = _State.NO_OPERATION

    def _load_current_segment_into_controllers(self) -> None:
        segment = self.current_path.segments[self.current_path_segment_id]
        self.heading_controller.update_current_path_segment(segment)
        self.heading_controller.initialize()
        self.velocity_controller.update_current_path_segment(segment)

    def _advance_state_machine(self) -> None:
        segments = self.current_path.segments
        segment_finished = self.progress_validator.is_path_segment_tracking_finished(
            segments[self.current_path_segment_id], self.current_robot_state
        )
        path_finished = self.progress_validator.is_path_tracking_finished(
            self.current_path, self.current_robot_state, self.current_path_segment_id
        )

        if path_finished:
            self._state = _State.NO_OPERATION
            logger.info("Going to nop state (tracking done)")

        if self._state is _State.DRIVING and segment_finished:
            self._state = _State.WAITING
            self._stopwatch.start()
            self.current_path_segment_id = bind_index_to_range(
                self.current_path_segment_id + 1, 0, len(segments) - 1
            )
            self._load_current_segment_into_controllers()
            logger.info("Going to waiting state")

        if self._state is _State.WAITING:
            waited = self._stopwatch.elapsed_seconds()
            if waited > self.parameters.waiting_time_between_direction_switches:
                self._state = _State.DRIVING
                logger.info("Going to driving state (done waiting)")

        if self._is_path_updated:
            self._load_current_segment_into_controllers()
            logger.info("Update plan (no state change)")

        if self._state is _State.NO_OPERATION and self._is_path_received:
            self._state = _State.DRIVING
            self._load_current_segment_into_controllers()
            logger.info("Going to driving state (received plan)")

        if segments:
            self.current_driving_direction = segments[self.current_path_segment_id].driving_direction

        self._is_path_received = False
        self._is_path_updated = False

    def _advance_controllers(self) -> bool:
        velocity_controller = self.velocity_controller
        heading_controller = self.heading_controller
        velocity_controller.update_current_state(self.current_robot_state)
        velocity_controller.update_driving_direction(self.current_driving_direction)
        heading_controller.update_current_state(self.current_robot_state)
        heading_controller.update_desired_velocity((self._longitudinal_velocity, 0.0))

        result = True
        if self._state is _State.DRIVING:
            velocity_ok = velocity_controller.advance()
            heading_ok = heading_controller.advance()
            result = velocity_ok and heading_ok
            self._longitudinal_velocity = velocity_controller.velocity
        elif self._state is _State.NO_OPERATION:
            self._longitudinal_velocity = 0.0
        else:
            self._longitudinal_velocity = 0.0
            result = heading_controller.advance()

        self._turning_radius = heading_controller.turning_radius
        self._yaw_rate = heading_controller.yaw_rate
        self._steering_angle = heading_controller.steering_angle

        return (
            result
            and math.isfinite(self._turning_radius)
            and math.isfinite(self._yaw_rate)
            and math.isfinite(self._steering_angle)
        )


def create_simple_path_tracker(
    parameters: SimplePathTrackerParameters,
    velocity_controller: LongitudinalVelocityController,
    heading_controller: HeadingController,
    validator: ProgressValidator,
    path_preprocessor: PathPreprocessor,
) -> SimplePathTracker:
    tracker = SimplePathTracker(parameters)
    tracker.heading_controller = heading_controller
    tracker.velocity_controller = velocity_controller
    tracker.progress_validator = validator
    tracker.path_preprocessor = path_preprocessor
    return tracker