"""Identity tracking for collections of objects that move a little between frames.

A tracker pairs each object seen in a frame with the closest object of the
previous frame, greedily from the smallest distance up, and keeps a stable
label for each pairing. ``persistence`` sets how many frames an object may go
unseen before it is forgotten. ``maximum_distance`` sets how far an object may
move and still be recognised as the same one.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Sequence, TypeVar

__all__ = [
    "Rect",
    "rect_distance",
    "point_distance",
    "TrackedObject",
    "Tracker",
    "RectTracker",
    "PointTracker",
    "Follower",
    "TrackerFollower",
]

T = TypeVar("T")
F = TypeVar("F", bound="Follower")

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle."""

    x: int
    y: int
    width: int
    height: int

    def center(self) -> Point:
        """Centre of the rectangle as floats."""
        return (self.x + self.width / 2, self.y + self.height / 2)


def rect_distance(a: Rect, b: Rect) -> float:
    """Distance between the centres of two rectangles plus the difference in their sizes."""
    (ax, ay), (bx, by) = a.center(), b.center()
    position = math.hypot(ax - bx, ay - by)
    size = math.hypot(a.width - b.width, a.height - b.height)
    return position + size


def point_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass
class TrackedObject(Generic[T]):
    """An object paired with its label, index in the frame, age and frames unseen."""

    object: T
    label: int
    index: int
    age: int = 0
    last_seen: int = 0

    def time_step(self, visible: bool) -> None:
        """Advance one frame; an unseen object counts one more frame since it was seen."""
        self.age += 1
        if not visible:
            self.last_seen += 1


class Tracker(Generic[T]):
    """Greedy nearest-match tracker assigning persistent labels to objects."""

    def __init__(
        self,
        distance: Callable[[T, T], float],
        persistence: int = 15,
        maximum_distance: float = 64,
    ) -> None:
        self._distance = distance
        self.persistence = persistence
        self.maximum_distance = maximum_distance
        self._next_label = 0
        self._previous: list[TrackedObject[T]] = []
        self._current: list[TrackedObject[T]] = []
        self._previous_by_label: dict[int, TrackedObject[T]] = {}
        self._current_by_label: dict[int, TrackedObject[T]] = {}
        self.current_labels: list[int] = []
        self.previous_labels: list[int] = []
        self.new_labels: list[int] = []
        self.dead_labels: list[int] = []

    def _new_label(self) -> int:
        self._next_label += 1
        return self._next_label

    def track(self, objects: Iterable[T]) -> list[int]:
        """Match ``objects`` against the previous frame and return their labels, in order."""
        objects = list(objects)
        self._previous = self._current
        previous = self._previous

        candidates = []
        for i, obj in enumerate(objects):
            for j, old in enumerate(previous):
                d = self._distance(obj, old.object)
                if d < self.maximum_distance:
                    candidates.append((d, i, j))
        candidates.sort(key=lambda candidate: candidate[0])

        self.previous_labels = self.current_labels
        labels = [0] * len(objects)
        current: list[TrackedObject[T]] = []
        matched_objects: set[int] = set()
        matched_previous: set[int] = set()

        for _, i, j in candidates:
            if i in matched_objects or j in matched_previous:
                continue
            matched_objects.add(i)
            matched_previous.add(j)
            old = previous[j]
            tracked = TrackedObject(objects[i], old.label, len(current), age=old.age)
            tracked.time_step(True)
            current.append(tracked)
            labels[i] = tracked.label

        self.new_labels = []
        for i, obj in enumerate(objects):
            if i in matched_objects:
                continue
            label = self._new_label()
            tracked = TrackedObject(obj, label, len(current))
            tracked.time_step(True)
            current.append(tracked)
            labels[i] = label
            self.new_labels.append(label)

        self.dead_labels = []
        for j, old in enumerate(previous):
            if j in matched_previous:
                continue
            if old.last_seen < self.persistence:
                kept = dataclasses.replace(old)
                kept.time_step(False)
                current.append(kept)
            self.dead_labels.append(old.label)

        self._current = current
        self.current_labels = labels
        self._current_by_label = {tracked.label: tracked for tracked in current}
        self._previous_by_label = {tracked.label: tracked for tracked in previous}
        return labels

    def label_from_index(self, i: int) -> int:
        """Label of the ``i``-th object handed to the last ``track`` call."""
        return self.current_labels[i]

    def index_from_label(self, label: int) -> int:
        """Index recorded for the current object with this label."""
        return self._current_by_label[label].index

    def get_previous(self, label: int) -> T:
        """The object with this label in the previous frame."""
        return self._previous_by_label[label].object

    def get_current(self, label: int) -> T:
        """The object with this label in the current frame."""
        return self._current_by_label[label].object

    def exists_current(self, label: int) -> bool:
        return label in self._current_by_label

    def exists_previous(self, label: int) -> bool:
        return label in self._previous_by_label

    def age(self, label: int) -> int:
        """Number of frames the label has been tracked."""
        return self._current_by_label[label].age

    def last_seen(self, label: int) -> int:
        """Number of frames since the label was last seen."""
        return self._current_by_label[label].last_seen


def _lerp(start: float, stop: float, amount: float) -> float:
    return start + (stop - start) * amount


class RectTracker(Tracker[Rect]):
    """Tracker of rectangles that also keeps a smoothed rectangle for each label."""

    def __init__(
        self,
        persistence: int = 15,
        maximum_distance: float = 64,
        smoothing_rate: float = 0.5,
    ) -> None:
        super().__init__(rect_distance, persistence, maximum_distance)
        self.smoothing_rate = smoothing_rate
        self._smoothed: dict[int, Rect] = {}

    def track(self, objects: Iterable[Rect]) -> list[int]:
        labels = super().track(objects)
        rate = self.smoothing_rate
        for label in labels:
            cur = self.get_current(label)
            smooth = self._smoothed.get(label)
            if smooth is None:
                self._smoothed[label] = cur
            else:
                self._smoothed[label] = Rect(
                    int(_lerp(smooth.x, cur.x, rate)),
                    int(_lerp(smooth.y, cur.y, rate)),
                    int(_lerp(smooth.width, cur.width, rate)),
                    int(_lerp(smooth.height, cur.height, rate)),
                )
        self._smoothed = {
            label: rect for label, rect in self._smoothed.items() if self.exists_current(label)
        }
        return labels

    def smoothed(self, label: int) -> Rect:
        """The smoothed rectangle for a current label."""
        return self._smoothed[label]

    def velocity(self, i: int) -> Point:
        """Movement of the centre of the ``i``-th object since the previous frame."""
        label = self.label_from_index(i)
        if not self.exists_previous(label):
            return (0.0, 0.0)
        prev = self.get_previous(label)
        cur = self.get_current(label)
        dx = (cur.x + cur.width // 2) - (prev.x + prev.width // 2)
        dy = (cur.y + cur.height // 2) - (prev.y + prev.height // 2)
        return (float(dx), float(dy))


class PointTracker(Tracker[Point]):
    """Tracker of 2D points."""

    def __init__(self, persistence: int = 15, maximum_distance: float = 64) -> None:
        super().__init__(point_distance, persistence, maximum_distance)


class Follower(Generic[T]):
    """Object paired with a tracked label; subclass to react to its life cycle."""

    def __init__(self) -> None:
        self.dead = False
        self.label = 0

    def setup(self, track: T) -> None:
        """Called once when a new label appears."""

    def update(self, track: T) -> None:
        """Called on every frame the label is still present."""

    def kill(self) -> None:
        """Called on every frame the label is missing; marks the follower dead."""
        self.dead = True


class TrackerFollower(Tracker[T], Generic[T, F]):
    """Tracker that keeps one follower, made by ``factory``, per tracked label."""

    def __init__(
        self,
        distance: Callable[[T, T], float],
        factory: Callable[[], F],
        persistence: int = 15,
        maximum_distance: float = 64,
    ) -> None:
        super().__init__(distance, persistence, maximum_distance)
        self._factory = factory
        self._labels: list[int] = []
        self._followers: list[F] = []

    def track(self, objects: Iterable[T]) -> list[int]:
        """Track ``objects`` and return the labels of the living followers."""
        super().track(objects)
        for label, follower in zip(self._labels, self._followers):
            if self.exists_current(label):
                follower.update(self.get_current(label))
            else:
                follower.kill()
        for label in self.new_labels:
            follower = self._factory()
            follower.setup(self.get_current(label))
            follower.label = label
            self._labels.append(label)
            self._followers.append(follower)
        alive = [
            (label, follower)
            for label, follower in zip(self._labels, self._followers)
            if not follower.dead
        ]
        self._labels = [label for label, _ in alive]
        self._followers = [follower for _, follower in alive]
        return self._labels

    def followers(self) -> list[F]:
        """The living followers, in the order they were created."""
        return self._followers