"""A follower that leaves a smoothed trail and fades out after it is lost."""

from __future__ import annotations

import random
import time
from typing import Callable

from cvtoolkit.tracker import Follower, Rect

__all__ = ["Glow"]

_FULL_SIZE = 16.0


class Glow(Follower[Rect]):
    """Follows a tracked rectangle, recording a smoothed path of its centre.

    Once the rectangle is lost, the glow shrinks over ``dying_time`` seconds
    and then reports itself dead.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        dying_time: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._clock = clock
        self.dying_time = dying_time
        self._rng = rng if rng is not None else random.Random()
        self.hue = 0.0
        self.cur: tuple[float, float] = (0.0, 0.0)
        self.smooth: tuple[float, float] = (0.0, 0.0)
        self.path: list[tuple[float, float]] = []
        self.started_dying: float | None = None

    def setup(self, track: Rect) -> None:
        self.hue = self._rng.uniform(0, 255)
        self.cur = track.center()
        self.smooth = self.cur

    def update(self, track: Rect) -> None:
        self.cur = track.center()
        sx, sy = self.smooth
        cx, cy = self.cur
        self.smooth = (sx + (cx - sx) * 0.5, sy + (cy - sy) * 0.5)
        self.path.append(self.smooth)

    def kill(self) -> None:
        now = self._clock()
        if self.started_dying is None:
            self.started_dying = now
        elif now - self.started_dying > self.dying_time:
            self.dead = True

    def size(self) -> float:
        """Radius of the marker: full while alive, shrinking to zero while dying."""
        if self.started_dying is None:
            return _FULL_SIZE
        elapsed = self._clock() - self.started_dying
        if self.dying_time <= 0:
            return 0.0
        fraction = min(max(elapsed / self.dying_time, 0.0), 1.0)
        return _FULL_SIZE * (1.0 - fraction)