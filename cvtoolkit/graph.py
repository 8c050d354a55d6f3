"""A running line graph of values, scaled to fit a drawing area."""

from __future__ import annotations

__all__ = ["LineGraph"]

Point = tuple[float, float]

_FLT_EPSILON = 1.1920929e-07


class LineGraph:
    """Records values against their sample number and tracks their extent.

    ``reset`` restarts the sample count and the extent; values already
    recorded stay in ``points``.
    """

    def __init__(self) -> None:
        self.points: list[Point] = []
        self.minimum: Point = (0.0, 0.0)
        self.maximum: Point = (0.0, 0.0)
        self._count = 0

    def add(self, y: float) -> None:
        """Record the next value."""
        cur = (float(self._count), float(y))
        self.points.append(cur)
        if self._count == 0:
            self.minimum = cur
            self.maximum = cur
        else:
            self.minimum = (min(self.minimum[0], cur[0]), min(self.minimum[1], cur[1]))
            self.maximum = (max(self.maximum[0], cur[0]), max(self.maximum[1], cur[1]))
        self._count += 1

    def reset(self) -> None:
        """Restart the sample count and forget the extent."""
        self._count = 0
        self.minimum = (0.0, 0.0)
        self.maximum = (0.0, 0.0)

    def normalized(self, y: float) -> float:
        """``y`` mapped from the value range to [0, 1], clamped; 0 for a flat range."""
        low, high = self.minimum[1], self.maximum[1]
        if abs(low - high) < _FLT_EPSILON:
            return 0.0
        return min(max((y - low) / (high - low), 0.0), 1.0)

    def transform(self, width: float, height: float) -> list[Point]:
        """Recorded points scaled into a ``width`` by ``height`` area, y pointing down.

        Returns no points until more than two values have been added since the
        last reset. A flat range lies along the bottom edge.
        """
        if self._count <= 2:
            return []
        (min_x, min_y), (max_x, max_y) = self.minimum, self.maximum
        sx = width / (max_x - min_x)
        sy = height / (max_y - min_y) if max_y != min_y else 0.0
        return [((x - min_x) * sx, height - (y - min_y) * sy) for x, y in self.points]