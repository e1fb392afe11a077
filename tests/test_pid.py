import pytest

from pursuit.pid import PIDController, PIDControllerParameters, load_parameters


def test_default_controller_gains():
    pid = PIDController()
    assert pid.max_effort == 10.0
    assert (pid.kp, pid.ki, pid.kd) == (1.0, 0.0, 0.0)


def test_infinite_saturation_defaults_to_max_effort():
    pid = PIDController(3.0, 1.0)
    assert pid.integrator_saturation == 3.0


def test_explicit_saturation_is_kept():
    pid = PIDController(3.0, 1.0, integrator_saturation=0.5)
    assert pid.integrator_saturation == 0.5


def test_proportional_only_output():
    pid = PIDController(100.0, 2.0)
    desired, measured = 5.0, 2.0
    assert pid.update(0.1, desired, measured) == pytest.approx(2.0 * (desired - measured))


def test_output_is_clamped_to_max_effort():
    pid = PIDController(1.0, 10.0)
    assert pid.update(0.1, 100.0, 0.0) == 1.0
    pid.reset()
    assert pid.update(0.1, -100.0, 0.0) == -1.0


def test_integral_saturates():
    pid = PIDController(100.0, 0.0, ki=1.0, integrator_saturation=0.25)
    outputs = [pid.update(1.0, 1.0, 0.0, 0.0, 0.0) for _ in range(10)]
    assert outputs[-1] == pytest.approx(0.25)
    assert all(out <= 0.25 for out in outputs)


def test_integrator_ignores_large_errors():
    pid = PIDController(100.0, 0.0, ki=1.0, max_integrator_input=0.5)
    for _ in range(5):
        assert pid.update(1.0, 2.0, 0.0, 0.0, 0.0) == 0.0


def test_finite_difference_derivative():
    pid = PIDController(100.0, 0.0, kd=1.0)
    assert pid.update(0.5, 1.0, 1.0) == pytest.approx(-2.0)
    # Same measurement again: no change, derivative vanishes.
    assert pid.update(0.5, 1.0, 1.0) == pytest.approx(0.0)


def test_explicit_derivatives():
    pid = PIDController(100.0, 0.0, kd=1.0)
    assert pid.update(0.1, 0.0, 0.0, 3.0, 1.0) == pytest.approx(3.0 - 1.0)


def test_reset_restores_fresh_behaviour():
    pid = PIDController(100.0, 1.0, ki=1.0, kd=0.5)
    first = pid.update(0.1, 2.0, 0.5)
    pid.update(0.1, 3.0, 1.5)
    pid.reset()
    assert pid.update(0.1, 2.0, 0.5) == pytest.approx(first)


def test_set_gains():
    pid = PIDController()
    pid.set_gains(4.0, 5.0, 6.0)
    assert (pid.kp, pid.ki, pid.kd) == (4.0, 5.0, 6.0)
    pid.set_gains(7.0)
    assert (pid.kp, pid.ki, pid.kd) == (7.0, 0.0, 0.0)


def test_load_parameters(tmp_path):
    path = tmp_path / "pid.yaml"
    path.write_text("PIDparameters:\n  kp: 2.5\n  ki: 0.25\n  kd: 0.125\n", encoding="utf-8")
    params = load_parameters(path)
    assert isinstance(params, PIDControllerParameters)
    assert (params.kp, params.ki, params.kd) == (2.5, 0.25, 0.125)


def test_load_parameters_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_parameters(path)


def test_load_parameters_missing_key(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("PIDparameters:\n  kp: 1.0\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_parameters(path)