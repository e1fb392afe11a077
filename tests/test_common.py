import numpy as np
import pytest

from pursuit.common import (
    DrivingDirection,
    Path,
    PathPoint,
    PathSegment,
    RobotPose,
    RobotState,
    RobotTwist,
)


@pytest.mark.parametrize(
    "direction, name", [(DrivingDirection.FWD, "FWD"), (DrivingDirection.BCK, "BCK")]
)
def test_driving_direction_names(direction, name):
    segment = PathSegment(direction, [])
    assert str(direction) == name
    assert str(segment).startswith(f"direction={name}, ")


def test_robot_pose_str():
    pose = RobotPose((1.5, -2.0), 0.25)
    assert str(pose) == "x =1.5, y=-2, yaw=0.25"


def test_robot_state_str_is_pose_str():
    pose = RobotPose((3.0, 4.5), -1.25)
    state = RobotState(pose=pose)
    assert str(state) == str(pose)


def test_path_point_str():
    assert str(PathPoint((0.5, 7.0))) == "x=0.5, y=7"


def test_path_segment_str():
    segment = PathSegment(
        DrivingDirection.BCK, [PathPoint((0.0, 1.0)), PathPoint((2.0, 3.0))]
    )
    assert str(segment) == "direction=BCK, numPoints: 2\nPoints: \nx=0, y=1\nx=2, y=3\n"


def test_path_str_lists_segments_in_order():
    first = PathSegment(DrivingDirection.FWD, [PathPoint((1.0, 1.0))])
    second = PathSegment(DrivingDirection.BCK, [])
    path = Path([first, second])
    expected = (
        "num segments: 2\n"
        "segment: 0\n" + str(first) + "segment: 1\n" + str(second)
    )
    assert str(path) == expected


def test_positions_are_copied_float_arrays():
    source = [1, 2]
    point = PathPoint(source)
    source[0] = 100
    assert point.position.dtype == np.float64
    np.testing.assert_array_equal(point.position, [1.0, 2.0])


def test_defaults_are_at_origin():
    state = RobotState()
    np.testing.assert_array_equal(state.pose.position, [0.0, 0.0])
    assert state.pose.yaw == 0.0
    np.testing.assert_array_equal(RobotTwist().linear, [0.0, 0.0])
    assert PathSegment().points == []
    assert Path().segments == []


def test_default_positions_are_independent():
    a = PathPoint()
    b = PathPoint()
    a.position[0] = 5.0
    assert b.position[0] == 0.0


def test_wrong_shape_rejected():
    with pytest.raises(ValueError):
        PathPoint((1.0, 2.0, 3.0))