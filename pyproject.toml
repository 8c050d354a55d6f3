[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cvtoolkit"
version = "0.1.0"
description = "Computer vision helpers: object tracking, 2D geometry and shape fitting, stroke recognition, Kalman smoothing and NumPy image utilities"
requires-python = ">=3.10"
keywords = ["computer vision", "tracking", "kalman", "geometry", "ellipse fitting", "gesture"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["cvtoolkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
