"""Pure pursuit path tracking for car-like robots, with velocity and PID speed control."""

__version__ = "0.1.0"