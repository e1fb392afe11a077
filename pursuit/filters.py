"""Scalar signal helpers: rate limiting, averaging, clamping and dead zones."""

from __future__ import annotations

_ZERO_THRESHOLD = 1e-5


class RateLimiter:
    """Limits how fast a signal may rise or fall per time step."""

    def __init__(
        self,
        dt: float = 0.01,
        max_rising_rate: float = 1.0,
        min_falling_rate: float = -1.0,
    ) -> None:
        self.dt = dt
        self.max_rising_rate = max_rising_rate
        self.min_falling_rate = min_falling_rate
        self._value_prev = 0.0

    @property
    def dt(self) -> float:
        return self._dt

    @dt.setter
    def dt(self, value: float) -> None:
        if value < 0:
            raise ValueError("Time step cannot be negative")
        self._dt = float(value)

    @property
    def max_rising_rate(self) -> float:
        return self._max_rising_rate

    @max_rising_rate.setter
    def max_rising_rate(self, value: float) -> None:
        if value < 0:
            raise ValueError("Rising rate cannot be negative.")
        self._max_rising_rate = float(value)

    @property
    def min_falling_rate(self) -> float:
        return self._min_falling_rate

    @min_falling_rate.setter
    def min_falling_rate(self, value: float) -> None:
        if value > 0:
            raise ValueError("Falling rate cannot be positive")
        self._min_falling_rate = float(value)

    def limit_rate_of_change(self, value: float) -> float:
        """Return ``value`` clipped to what the rates allow since the last call."""
        result = value
        upper = self._value_prev + self._dt * self._max_rising_rate
        lower = self._value_prev + self._dt * self._min_falling_rate
        if value > upper:
            result = upper
        if value < lower:
            result = lower
        self._value_prev = result
        return result

    def reset(self, starting_value: float = 0.0) -> None:
        """Restart limiting from ``starting_value``."""
        self._value_prev = float(starting_value)


class AverageFilter:
    """Exponential moving average seeded by the first sample."""

    def __init__(self, weight: float = 1.0) -> None:
        self.weight = weight
        self._filtered_prev = 0.0
        self._first_time = True

    @property
    def weight(self) -> float:
        """Weight given to the most recent measurement."""
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        if value < 0.0 or value > 1.0:
            raise ValueError("Average filter value must be between 0.0 and 1.0")
        self._weight = float(value)

    def filter_input_value(self, value: float) -> float:
        if self._first_time:
            self._filtered_prev = value
            return value
        result = self._weight * value + (1.0 - self._weight) * self._filtered_prev
        self._filtered_prev = result
        return result


def sgn(val: float) -> int:
    """Sign of ``val`` as -1, 0 or 1."""
    return int(0 < val) - int(val < 0)


def dead_zone(x: float, deadzone_width: float) -> float:
    half_width = deadzone_width / 2.0
    if x > half_width:
        return x - half_width
    if x < half_width:
        return x + half_width
    return 0.0


def bind_to_range(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def bind_index_to_range(id_req: int, lo: int, hi: int) -> int:
    """Clamp an index into ``[lo, hi]``."""
    if hi < lo:
        raise ValueError("Upper bound of the index range is below the lower bound")
    if id_req < lo:
        return lo
    if id_req > hi:
        return hi
    return int(id_req)


def is_almost_zero(val: float) -> bool:
    return abs(val) < _ZERO_THRESHOLD


def is_close(val1: float, val2: float) -> bool:
    return abs(val1 - val2) < _ZERO_THRESHOLD