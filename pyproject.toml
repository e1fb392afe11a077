[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pursuit"
version = "0.1.0"
description = "Pure pursuit path tracking for car-like robots: steering, velocity control, progress checks and PID speed control."
requires-python = ">=3.10"
keywords = ["pure pursuit", "path tracking", "robotics", "ackermann", "control", "pid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pursuit"]

[tool.pytest.ini_options]
addopts = "-ra"
