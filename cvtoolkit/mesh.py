"""A triangulated grid mesh that can be displaced by a motion field."""

from __future__ import annotations

import numpy as np

__all__ = ["GridMesh", "duplicate_first_channel", "accumulate_weighted"]


class GridMesh:
    """Grid of vertices every ``step_size`` pixels of an image rescaled by ``rescale``.

    Vertex positions are in the coordinates of the full-size image, ordered
    row by row. ``vertices`` holds the rest positions, shape ``(n, 2)``.
    """

    def __init__(self, width: int, height: int, step_size: int, rescale: float = 1.0) -> None:
        if step_size <= 0:
            raise ValueError("step size must be positive")
        if rescale <= 0:
            raise ValueError("rescale must be positive")
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        self.step_size = step_size
        self.rescale = rescale
        self.x_steps = 1 + int(rescale * width / step_size)
        self.y_steps = 1 + int(rescale * height / step_size)
        ys, xs = np.mgrid[0 : self.y_steps, 0 : self.x_steps]
        grid = np.column_stack([xs.ravel(), ys.ravel()]).astype(np.float64)
        self.vertices = grid * step_size / rescale

    def triangles(self) -> np.ndarray:
        """Vertex indices of two triangles per grid cell, shape ``(m, 3)``.

        Each cell gives ``(nw, ne, se)`` then ``(nw, se, sw)``, cells row by row.
        """
        ys, xs = np.mgrid[0 : self.y_steps - 1, 0 : self.x_steps - 1]
        nw = (ys * self.x_steps + xs).ravel()
        ne = nw + 1
        sw = nw + self.x_steps
        se = sw + 1
        cells = np.stack(
            [np.column_stack([nw, ne, se]), np.column_stack([nw, se, sw])], axis=1
        )
        return cells.reshape(-1, 3).astype(np.int64)

    def distort(self, offsets, strength: float = 1.0) -> np.ndarray:
        """Vertex positions moved by ``strength`` times the per-vertex ``offsets``.

        ``offsets`` has shape ``(y_steps, x_steps, 2)``. Vertices on the border
        of the grid stay at rest.
        """
        off = np.asarray(offsets, dtype=np.float64)
        if off.shape != (self.y_steps, self.x_steps, 2):
            raise ValueError(
                f"offsets must have shape {(self.y_steps, self.x_steps, 2)}, not {off.shape}"
            )
        moved = self.vertices.reshape(self.y_steps, self.x_steps, 2).copy()
        moved[1:-1, 1:-1] += strength * off[1:-1, 1:-1]
        return moved.reshape(-1, 2)


def duplicate_first_channel(two_channel) -> np.ndarray:
    """Append a copy of the first channel, turning ``(h, w, c)`` into ``(h, w, c + 1)``."""
    arr = np.asarray(two_channel)
    if arr.ndim != 3 or arr.shape[2] < 1:
        raise ValueError("expected an image of shape (height, width, channels)")
    return np.concatenate([arr, arr[:, :, :1]], axis=2)


def accumulate_weighted(src, accumulator, alpha: float) -> np.ndarray:
    """Running average: ``(1 - alpha) * accumulator + alpha * src`` as floats."""
    s = np.asarray(src, dtype=np.float64)
    acc = np.asarray(accumulator, dtype=np.float64)
    if s.shape != acc.shape:
        raise ValueError("source and accumulator must have the same shape")
    return (1.0 - alpha) * acc + alpha * s