# pursuit

Pure pursuit path tracking for car-like (Ackermann-steered) robots.

A path is made of segments, each driven either forward or in reverse. At every
control step the tracker takes the robot's current pose and produces a
steering angle, a yaw rate, a turning radius and a signed longitudinal
velocity.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `pursuit.common`: `DrivingDirection` (`FWD`, `BCK`), `RobotPose`,
  `RobotTwist`, `RobotState`, `PathPoint`, `PathSegment` and `Path`. Positions
  are numpy arrays of shape `(2,)`. `str()` of each gives a readable summary.
- `pursuit.filters`: `RateLimiter`, `AverageFilter`, `sgn`, `dead_zone`,
  `bind_to_range`, `bind_index_to_range`, `is_almost_zero` and `is_close`.
- `pursuit.geometry`: `Line`, `Circle`, `Intersection` and `SolutionCase`,
  `compute_intersection`, `compute_lookahead_point`,
  `compute_lookahead_angle`, `compute_steering_angle_cmd` and the helpers they
  use. A lookahead point or angle that cannot be found raises
  `LookaheadError`.
- `pursuit.stopwatch`: `Stopwatch`, measuring seconds since `start()`.
- `pursuit.heading_controller`: the `HeadingController` base class and
  `HeadingControllerParameters`.
- `pursuit.ackermann`: `AckermannSteeringController` and
  `AckermannSteeringCtrlParameters`, made with
  `create_ackermann_steering_controller`. Negative distances, wheel base or
  limits raise `ValueError`.
- `pursuit.velocity_control`: `ConstantVelocityController` and
  `AdaptiveVelocityController` (which slows down linearly once the goal is
  within `distance_to_goal_when_braking_starts`), made with
  `create_constant_velocity_controller` and
  `create_adaptive_velocity_controller`.
- `pursuit.progress_validator`: `ProgressValidator`, which decides when a
  segment or the whole path has been driven to its end.
- `pursuit.path_preprocessor`: `PathPreprocessor`, which drops segments that
  are too short or have fewer than two points and merges neighbouring segments
  that share a driving direction. `preprocess_path` works in place and returns
  `(segments_removed, segments_merged)`; it raises `ValueError` if no segment
  is left.
- `pursuit.path_tracker`: `SimplePathTracker`, a state machine that drives a
  segment, waits `waiting_time_between_direction_switches` seconds, moves on
  to the next segment and stops at the goal. Made with
  `create_simple_path_tracker`.
- `pursuit.pid`: `PIDController` with output clamping and integrator limits,
  and `load_parameters`, which reads `kp`, `ki` and `kd` from the
  `PIDparameters` section of a YAML file.
- `pursuit.prius_control`: `PriusControl` and `Gear`, plus
  `translate_commands`, which turns a signed speed and a steering angle into
  throttle, brake, normalised steering and gear, using a `PIDController` on
  the speed magnitude; `fail_proof_control_command` gives neutral gear with
  half brake.

## Example

```python
from pursuit.common import DrivingDirection, Path, PathPoint, PathSegment, RobotPose, RobotState
from pursuit.ackermann import AckermannSteeringCtrlParameters, create_ackermann_steering_controller
from pursuit.velocity_control import AdaptiveVelocityControllerParameters, create_adaptive_velocity_controller
from pursuit.progress_validator import ProgressValidatorParameters, create_progress_validator
from pursuit.path_preprocessor import PathPreprocessorParameters, create_path_preprocessor
from pursuit.path_tracker import SimplePathTrackerParameters, create_simple_path_tracker

heading = create_ackermann_steering_controller(AckermannSteeringCtrlParameters(wheel_base=2.0))
velocity = create_adaptive_velocity_controller(AdaptiveVelocityControllerParameters(desired_velocity=1.0))
validator = create_progress_validator(ProgressValidatorParameters())
preprocessor = create_path_preprocessor(PathPreprocessorParameters())

tracker = create_simple_path_tracker(
    SimplePathTrackerParameters(), velocity, heading, validator, preprocessor
)

segment = PathSegment(
    driving_direction=DrivingDirection.FWD,
    points=[PathPoint((float(x), 0.0)) for x in range(20)],
)
path = Path(segments=[segment])
preprocessor.preprocess_path(path)

tracker.update_robot_state(RobotState(pose=RobotPose(position=(0.0, 0.0), yaw=0.0)))
tracker.import_current_path(path)

if tracker.advance():
    print(tracker.steering_angle, tracker.longitudinal_velocity)
```

Call `update_robot_state` and `advance` once per control step, and
`is_tracking_finished` to see whether the goal has been reached. `advance`
returns `False` when no usable command could be computed; keep the vehicle
stopped in that case. The tracker does not run the preprocessor itself; call
`preprocess_path` on a path before importing it if it needs cleaning.

## What the package does not do

It is a library of control computations only. It has no command-line
program, no messaging or networking layer for receiving paths or poses and
sending commands, and no vehicle simulation: the caller supplies the robot
state and passes the resulting commands on to the vehicle.