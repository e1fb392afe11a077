"""Pure pursuit geometry: line/circle intersection and lookahead computation."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from pursuit.common import DrivingDirection, PathPoint, PathSegment, RobotPose, RobotState
from pursuit.filters import bind_index_to_range, is_almost_zero


class LookaheadError(RuntimeError):
    """Raised when a lookahead point or angle cannot be computed."""


def _point(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(2)


def _normalized(v: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(v))
    return v / norm if norm > 0 else v.copy()


@dataclass(eq=False)
class Line:
    """Line through two points."""

    p1: np.ndarray = field(default_factory=lambda: np.zeros(2))
    p2: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.p1 = _point(self.p1)
        self.p2 = _point(self.p2)


@dataclass(eq=False)
class Circle:
    center: np.ndarray = field(default_factory=lambda: np.zeros(2))
    r: float = 1.0

    def __post_init__(self) -> None:
        self.center = _point(self.center)
        self.r = float(self.r)


class SolutionCase(enum.Enum):
    NO_SOLUTION = 0
    ONE_SOLUTION = 1
    TWO_SOLUTIONS = 2


@dataclass(eq=False)
class Intersection:
    solution_case: SolutionCase
    p1: np.ndarray | None = None
    p2: np.ndarray | None = None


def _position(obj) -> np.ndarray:
    if isinstance(obj, RobotState):
        return obj.pose.position
    if isinstance(obj, (RobotPose, PathPoint)):
        return obj.position
    return _point(obj)


def euclidean_distance(a, b) -> float:
    """Distance between two states, poses, path points or raw points."""
    return float(np.linalg.norm(_position(a) - _position(b)))


def compute_intersection(line: Line, circle: Circle) -> Intersection:
    """Intersect an infinite line with a circle."""

    def sign(x: float) -> float:
        return -1.0 if x < 0 else 1.0

    cx, cy = circle.center
    x1 = float(line.p1[0] - cx)
    x2 = float(line.p2[0] - cx)
    y1 = float(line.p1[1] - cy)
    y2 = float(line.p2[1] - cy)

    dx = x2 - x1
    dy = y2 - y1
    dr2 = dx * dx + dy * dy
    d = x1 * y2 - x2 * y1
    discriminant = circle.r * circle.r * dr2 - d * d

    if discriminant < -1e-5:
        return Intersection(SolutionCase.NO_SOLUTION)

    with np.errstate(divide="ignore", invalid="ignore"):
        root = float(np.sqrt(np.float64(discriminant)))
        p1 = np.array([d * dy + sign(dy) * dx * root, -d * dx + abs(dy) * root]) / dr2
        p2 = np.array([d * dy - sign(dy) * dx * root, -d * dx - abs(dy) * root]) / dr2

    case = SolutionCase.ONE_SOLUTION if is_almost_zero(discriminant) else SolutionCase.TWO_SOLUTIONS
    return Intersection(case, p1 + circle.center, p2 + circle.center)


def compute_normalized_final_approach_direction(path_segment: PathSegment) -> np.ndarray:
    points = path_segment.points
    if len(points) < 2:
        raise ValueError("Path segment should have at lest two points")
    return _normalized(points[-1].position - points[-2].position)


def append_point_along_final_approach_direction(
    extending_distance: float, path_segment: PathSegment
) -> None:
    """Extend the segment in place by one point past its end."""
    direction = compute_normalized_final_approach_direction(path_segment)
    last = path_segment.points[-1].position
    path_segment.points.append(PathPoint(last + extending_distance * direction))


def compute_desired_heading_vector(
    yaw_angle: float, desired_driving_direction: DrivingDirection
) -> np.ndarray:
    heading = yaw_angle
    if desired_driving_direction is DrivingDirection.BCK:
        heading += math.pi
    return np.array([math.cos(heading), math.sin(heading)])


def rotation_matrix(angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s], [s, c]])


def get_id_of_the_closest_point_on_the_path(
    path_segment: PathSegment, robot_position, last_closest_id: int = 0
) -> int:
    """Index of the closest point, searching from ``last_closest_id`` onwards."""
    points = path_segment.points
    if not 0 <= last_closest_id < len(points):
        raise IndexError("last closest point id is outside the path segment")
    position = _point(robot_position)
    best = min(
        range(last_closest_id, len(points)),
        key=lambda i: float(np.linalg.norm(position - points[i].position)),
    )
    return bind_index_to_range(best, 0, len(points) - 1)


def is_past_last_point(path_segment: PathSegment, rob_pos) -> bool:
    final_approach = compute_normalized_final_approach_direction(path_segment)
    to_last = path_segment.points[-1].position - _point(rob_pos)
    return float(final_approach @ to_last) <= 0


def find_ids_of_two_points_defining_a_line(
    robot_state: RobotState,
    path_segment: PathSegment,
    anchor_point,
    starting_point: int,
    lookahead_distance: float,
) -> tuple[int, int]:
    """Return ``(closer_id, farther_id)`` of points bracketing the lookahead circle."""
    heading = compute_desired_heading_vector(robot_state.pose.yaw, path_segment.driving_direction)
    anchor = _point(anchor_point)
    points = path_segment.points
    n = len(points)

    def far_enough_and_ahead(i: int) -> bool:
        offset = points[i].position - anchor
        return float(np.linalg.norm(offset)) > lookahead_distance and float(heading @ offset) > 0.0

    farther = next((i for i in range(starting_point, n) if far_enough_and_ahead(i)), n)
    farther = bind_index_to_range(farther, 0, n - 1)

    start_back = bind_index_to_range(farther - 1, 0, n - 1)
    closer = next(
        (
            i
            for i in range(start_back, -1, -1)
            if float(np.linalg.norm(points[i].position - anchor)) < lookahead_distance
        ),
        None,
    )
    if closer is None:
        closer = start_back
    closer = bind_index_to_range(closer, 0, n - 1)

    is_last = farther == n - 1
    is_first = closer == 0
    identical = farther == closer
    if identical and is_last:
        farther = n - 1
        closer = farther - 1
    if identical and is_first:
        farther = 1
        closer = 0

    return bind_index_to_range(closer, 0, n - 1), bind_index_to_range(farther, 0, n - 1)


def choose_correct_lookahead_point(intersection: Intersection, desired_heading, origin) -> np.ndarray:
    """Pick the intersection point lying in front along ``desired_heading``."""
    heading = _point(desired_heading)
    start = _point(origin)
    vote1 = float(heading @ (intersection.p1 - start))
    vote2 = float(heading @ (intersection.p2 - start))
    return intersection.p1 if vote1 >= vote2 else intersection.p2


def compute_lookahead_angle(
    lookahead_point, anchor_point, heading, driving_direction: DrivingDirection
) -> float:
    """Signed angle to the lookahead point; turning left is negative."""
    heading_vec = _point(heading)
    lookahead_vec = _normalized(_point(lookahead_point) - _point(anchor_point))
    cos_angle = float(_normalized(heading_vec) @ lookahead_vec)

    if cos_angle < 0:
        raise LookaheadError("Error when computing lookahead angle. cos angle is negative")

    with np.errstate(invalid="ignore"):
        angle = abs(float(np.arccos(cos_angle)))
    rot = rotation_matrix(angle)

    vote_left = float(lookahead_vec @ (rot @ heading_vec))
    vote_right = float(lookahead_vec @ (rot.T @ heading_vec))
    if vote_left > vote_right:
        angle = -angle
    if driving_direction is DrivingDirection.BCK:
        angle = -angle

    if not math.isfinite(angle):
        raise LookaheadError("Error when computing lookahead angle. angle not finite")
    return angle


def compute_steering_angle_cmd(
    lookahead_angle: float, lookahead_distance: float, anchor_distance: float, wheel_base: float
) -> float:
    numerator = np.float64(wheel_base * math.sin(lookahead_angle))
    denominator = lookahead_distance * 0.5 + anchor_distance * math.cos(lookahead_angle)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(-np.arctan(numerator / denominator))


def compute_anchor_point(
    robot_pose: RobotPose, anchor_distance: float, driving_direction: DrivingDirection
) -> np.ndarray:
    heading = compute_desired_heading_vector(robot_pose.yaw, driving_direction)
    return robot_pose.position + anchor_distance * heading


def compute_lookahead_point(
    closest_point_id: int,
    lookahead_distance: float,
    robot_state: RobotState,
    driving_direction: DrivingDirection,
    path_segment: PathSegment,
    anchor_distance: float,
) -> np.ndarray:
    """Point on the path at the lookahead distance from the anchor point."""
    anchor = compute_anchor_point(robot_state.pose, anchor_distance, driving_direction)
    closer, farther = find_ids_of_two_points_defining_a_line(
        robot_state, path_segment, anchor, closest_point_id, lookahead_distance
    )
    line = Line(path_segment.points[closer].position, path_segment.points[farther].position)
    intersection = compute_intersection(line, Circle(anchor, lookahead_distance))

    if intersection.solution_case is SolutionCase.NO_SOLUTION:
        raise LookaheadError("The path does not intersect the lookahead circle")
    if intersection.solution_case is SolutionCase.ONE_SOLUTION:
        return intersection.p1
    heading = compute_desired_heading_vector(robot_state.pose.yaw, driving_direction)
    return choose_correct_lookahead_point(intersection, heading, robot_state.pose.position)