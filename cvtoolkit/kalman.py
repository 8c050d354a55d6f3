"""Kalman filter smoothing of a moving 3D position."""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = ["KalmanPosition"]

Vec3 = tuple[float, float, float]


def _vec3(v: np.ndarray) -> Vec3:
    return float(v[0]), float(v[1]), float(v[2])


class KalmanPosition:
    """Constant-velocity (or constant-acceleration) Kalman filter on a position.

    ``smoothness`` is the process noise and ``rapidness`` the measurement
    noise; smaller values make the output smoother or quicker respectively.
    With ``use_accel`` the state also carries acceleration, which smooths the
    velocity.
    """

    def __init__(
        self, smoothness: float = 0.1, rapidness: float = 0.1, use_accel: bool = False
    ) -> None:
        n = 9 if use_accel else 6
        eye3 = np.eye(3)
        transition = np.eye(n)
        transition[0:3, 3:6] += eye3
        if use_accel:
            transition[0:3, 6:9] += 0.5 * eye3
            transition[3:6, 6:9] += eye3
        self._transition = transition
        self._measurement_matrix = np.eye(3, n)
        self._process_noise = smoothness * np.eye(n)
        self._measurement_noise = rapidness * np.eye(3)
        self._state = np.zeros(n)
        self._error_cov = 0.1 * np.eye(n)
        self._prediction = np.zeros(n)
        self._estimated = np.zeros(n)

    def update(self, point: Sequence[float]) -> None:
        """Predict the next state, then correct it with the measured ``point``.

        A 2D point is taken to lie at z = 0.
        """
        z = np.asarray(point, dtype=np.float64).ravel()
        if z.shape == (2,):
            z = np.append(z, 0.0)
        if z.shape != (3,):
            raise ValueError("a measurement must be a 2D or 3D point")

        a, h = self._transition, self._measurement_matrix
        state_pre = a @ self._state
        cov_pre = a @ self._error_cov @ a.T + self._process_noise
        self._prediction = state_pre

        hp = h @ cov_pre
        innovation_cov = hp @ h.T + self._measurement_noise
        gain = np.linalg.solve(innovation_cov, hp).T
        self._state = state_pre + gain @ (z - h @ state_pre)
        self._error_cov = cov_pre - gain @ hp
        self._estimated = self._state

    def prediction(self) -> Vec3:
        """Position predicted before the last measurement was applied."""
        return _vec3(self._prediction[0:3])

    def estimation(self) -> Vec3:
        """Position estimated after the last measurement was applied."""
        return _vec3(self._estimated[0:3])

    def velocity(self) -> Vec3:
        """Velocity estimated after the last measurement, per update."""
        return _vec3(self._estimated[3:6])