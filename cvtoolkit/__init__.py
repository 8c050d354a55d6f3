"""Computer vision helpers: object tracking, 2D geometry and shape fitting, gesture recognition and Kalman smoothing."""

__version__ = "0.1.0"