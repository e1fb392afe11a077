"""Core data types: driving direction, robot pose and state, and paths."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np


def _as_point(value) -> np.ndarray:
    """Return a fresh float array of shape (2,) built from ``value``."""
    return np.array(value, dtype=float).reshape(2)


def _fmt(value: float) -> str:
    return f"{value:g}"


class DrivingDirection(enum.Enum):
    """Direction in which a path segment is driven."""

    FWD = 0
    BCK = 1

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class RobotPose:
    """Planar pose: position in the plane and yaw angle in radians."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    yaw: float = 0.0

    def __post_init__(self) -> None:
        self.position = _as_point(self.position)
        self.yaw = float(self.yaw)

    def __str__(self) -> str:
        x, y = self.position
        return f"x ={_fmt(x)}, y={_fmt(y)}, yaw={_fmt(self.yaw)}"


@dataclass(eq=False)
class RobotTwist:
    """Linear velocity in the plane and angular velocity."""

    linear: np.ndarray = field(default_factory=lambda: np.zeros(2))
    angular: float = 0.0

    def __post_init__(self) -> None:
        self.linear = _as_point(self.linear)
        self.angular = float(self.angular)


@dataclass(eq=False)
class RobotState:
    """Pose and twist of the robot."""

    pose: RobotPose = field(default_factory=RobotPose)
    twist: RobotTwist = field(default_factory=RobotTwist)
    desired_longitudinal_velocity: float = 0.0

    def __str__(self) -> str:
        return str(self.pose)


@dataclass(eq=False)
class PathPoint:
    """A single waypoint of a path segment."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.position = _as_point(self.position)

    def __str__(self) -> str:
        x, y = self.position
        return f"x={_fmt(x)}, y={_fmt(y)}"


@dataclass(eq=False)
class PathSegment:
    """Waypoints driven in one direction."""

    driving_direction: DrivingDirection = DrivingDirection.FWD
    points: list[PathPoint] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            f"direction={self.driving_direction}, numPoints: {len(self.points)}\n",
            "Points: \n",
        ]
        lines.extend(f"{point}\n" for point in self.points)
        return "".join(lines)


@dataclass(eq=False)
class Path:
    """A sequence of path segments."""

    segments: list[PathSegment] = field(default_factory=list)

    def __str__(self) -> str:
        parts = [f"num segments: {len(self.segments)}\n"]
        for index, segment in enumerate(self.segments):
            parts.append(f"segment: {index}\n")
            parts.append(str(segment))
        return "".join(parts)