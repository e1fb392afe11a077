import pytest

from pursuit.filters import (
    AverageFilter,
    RateLimiter,
    bind_index_to_range,
    bind_to_range,
    dead_zone,
    is_almost_zero,
    is_close,
    sgn,
)


def test_rate_limiter_passes_small_changes():
    limiter = RateLimiter(dt=0.1, max_rising_rate=1.0, min_falling_rate=-1.0)
    assert limiter.limit_rate_of_change(0.05) == pytest.approx(0.05)


def test_rate_limiter_limits_rising():
    dt, rate = 0.1, 2.0
    limiter = RateLimiter(dt=dt, max_rising_rate=rate, min_falling_rate=-rate)
    assert limiter.limit_rate_of_change(50.0) == pytest.approx(dt * rate)


def test_rate_limiter_limits_falling():
    dt, rate = 0.2, 3.0
    limiter = RateLimiter(dt=dt, max_rising_rate=rate, min_falling_rate=-rate)
    assert limiter.limit_rate_of_change(-50.0) == pytest.approx(-dt * rate)


def test_rate_limiter_steps_are_bounded():
    dt, rate = 0.05, 1.5
    limiter = RateLimiter(dt=dt, max_rising_rate=rate, min_falling_rate=-rate)
    targets = [10.0] * 30 + [-10.0] * 60
    previous = 0.0
    for target in targets:
        current = limiter.limit_rate_of_change(target)
        assert abs(current - previous) <= dt * rate + 1e-12
        previous = current


def test_rate_limiter_reset():
    limiter = RateLimiter(dt=0.01, max_rising_rate=1.0, min_falling_rate=-1.0)
    limiter.reset(7.5)
    assert limiter.limit_rate_of_change(7.5) == pytest.approx(7.5)


def test_rate_limiter_validation():
    with pytest.raises(ValueError):
        RateLimiter(dt=-0.1)
    with pytest.raises(ValueError):
        RateLimiter(max_rising_rate=-1.0)
    with pytest.raises(ValueError):
        RateLimiter(min_falling_rate=1.0)
    limiter = RateLimiter()
    with pytest.raises(ValueError):
        limiter.max_rising_rate = -0.5


def test_average_filter_passes_first_sample():
    avg = AverageFilter(0.3)
    assert avg.filter_input_value(4.2) == 4.2


def test_average_filter_weight_validation():
    with pytest.raises(ValueError):
        AverageFilter(1.5)
    avg = AverageFilter()
    with pytest.raises(ValueError):
        avg.weight = -0.1


def test_sgn():
    assert sgn(3.2) == 1
    assert sgn(-0.1) == -1
    assert sgn(0.0) == 0


def test_dead_zone():
    width = 2.0
    assert dead_zone(5.0, width) == pytest.approx(5.0 - width / 2)
    assert dead_zone(-3.0, width) == pytest.approx(-3.0 + width / 2)
    assert dead_zone(width / 2, width) == 0.0


def test_bind_to_range():
    assert bind_to_range(-5.0, -1.0, 1.0) == -1.0
    assert bind_to_range(5.0, -1.0, 1.0) == 1.0
    assert bind_to_range(0.3, -1.0, 1.0) == 0.3


def test_bind_index_to_range():
    assert bind_index_to_range(-3, 0, 9) == 0
    assert bind_index_to_range(12, 0, 9) == 9
    assert bind_index_to_range(4, 0, 9) == 4
    with pytest.raises(ValueError):
        bind_index_to_range(1, 5, 2)


def test_closeness_threshold():
    assert is_almost_zero(1e-6)
    assert not is_almost_zero(1e-4)
    assert is_close(1.0, 1.0 + 1e-6)
    assert not is_close(1.0, 1.0 + 1e-4)