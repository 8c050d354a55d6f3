import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cvtoolkit.tracker import (
    Follower,
    PointTracker,
    Rect,
    RectTracker,
    Tracker,
    TrackerFollower,
    point_distance,
    rect_distance,
)

rects = st.builds(
    Rect,
    st.integers(-1000, 1000),
    st.integers(-1000, 1000),
    st.integers(0, 500),
    st.integers(0, 500),
)


def test_rect_center():
    assert Rect(0, 0, 10, 4).center() == (5.0, 2.0)


@given(rects, rects)
def test_rect_distance_symmetric_and_nonnegative(a, b):
    assert rect_distance(a, b) == pytest.approx(rect_distance(b, a))
    assert rect_distance(a, b) >= 0


@given(rects)
def test_rect_distance_to_itself_is_zero(a):
    assert rect_distance(a, a) == 0


def test_point_distance():
    assert point_distance((0, 0), (3, 4)) == pytest.approx(5.0)


def test_first_frame_labels_start_at_one():
    tracker = PointTracker()
    labels = tracker.track([(0.0, 0.0), (100.0, 100.0)])
    assert labels == [1, 2]
    assert tracker.new_labels == [1, 2]
    assert tracker.dead_labels == []
    assert tracker.current_labels == labels


def test_small_move_keeps_label():
    tracker = PointTracker()
    tracker.track([(0.0, 0.0)])
    labels = tracker.track([(2.0, 1.0)])
    assert labels == [1]
    assert tracker.new_labels == []
    assert tracker.previous_labels == [1]
    assert tracker.get_current(1) == (2.0, 1.0)
    assert tracker.get_previous(1) == (0.0, 0.0)


def test_large_move_creates_new_label():
    tracker = PointTracker(maximum_distance=10)
    tracker.track([(0.0, 0.0)])
    labels = tracker.track([(50.0, 0.0)])
    assert labels == [2]
    assert tracker.new_labels == [2]
    assert tracker.dead_labels == [1]
    # the lost object persists for a while
    assert tracker.exists_current(1)


def test_greedy_matching_picks_closest_pairs():
    tracker = PointTracker()
    tracker.track([(0.0, 0.0), (20.0, 0.0)])
    labels = tracker.track([(19.0, 0.0), (1.0, 0.0)])
    assert labels == [2, 1]


def test_age_grows_with_each_frame():
    tracker = PointTracker()
    tracker.track([(0.0, 0.0)])
    first_age = tracker.age(1)
    tracker.track([(1.0, 0.0)])
    assert tracker.age(1) == first_age + 1
    assert tracker.last_seen(1) == 0


def test_persistence_forgets_after_limit():
    tracker = PointTracker(persistence=2)
    tracker.track([(0.0, 0.0)])
    tracker.track([])
    assert tracker.exists_current(1)
    assert tracker.last_seen(1) == 1
    tracker.track([])
    assert tracker.exists_current(1)
    assert tracker.last_seen(1) == 2
    tracker.track([])
    assert not tracker.exists_current(1)
    assert tracker.exists_previous(1)


def test_lost_object_can_be_found_again():
    tracker = PointTracker(persistence=5)
    tracker.track([(0.0, 0.0)])
    tracker.track([])
    labels = tracker.track([(1.0, 1.0)])
    assert labels == [1]
    assert tracker.last_seen(1) == 0


def test_index_and_label_lookups():
    tracker = PointTracker()
    tracker.track([(0.0, 0.0), (100.0, 0.0)])
    for i in range(2):
        label = tracker.label_from_index(i)
        assert tracker.index_from_label(label) == i


def test_unknown_label_raises():
    tracker = PointTracker()
    tracker.track([(0.0, 0.0)])
    with pytest.raises(KeyError):
        tracker.get_current(99)
    with pytest.raises(KeyError):
        tracker.age(99)


def test_generic_tracker_with_custom_distance():
    tracker = Tracker(lambda a, b: abs(a - b), maximum_distance=3)
    tracker.track([10, 100])
    labels = tracker.track([101, 11])
    assert labels == [2, 1]


def test_rect_tracker_smoothing_and_velocity():
    tracker = RectTracker(maximum_distance=100)
    tracker.track([Rect(0, 0, 10, 10)])
    assert tracker.smoothed(1) == Rect(0, 0, 10, 10)
    assert tracker.velocity(0) == (0.0, 0.0)
    tracker.track([Rect(10, 0, 10, 10)])
    assert tracker.smoothed(1) == Rect(5, 0, 10, 10)
    assert tracker.velocity(0) == (10.0, 0.0)


def test_rect_tracker_drops_smoothed_for_forgotten_labels():
    tracker = RectTracker(persistence=0)
    tracker.track([Rect(0, 0, 10, 10)])
    tracker.track([])
    assert not tracker.exists_current(1)
    with pytest.raises(KeyError):
        tracker.smoothed(1)


@given(st.lists(st.tuples(st.floats(-500, 500), st.floats(-500, 500)), max_size=8))
def test_labels_in_frame_are_unique(points):
    tracker = PointTracker()
    tracker.track(points)
    labels = tracker.track(points)
    assert len(set(labels)) == len(labels)
    assert len(labels) == len(points)


class _Recorder(Follower):
    def __init__(self):
        super().__init__()
        self.seen = []

    def setup(self, track):
        self.seen.append(track)

    def update(self, track):
        self.seen.append(track)


def test_tracker_follower_lifecycle():
    tracker = TrackerFollower(point_distance, _Recorder)
    labels = tracker.track([(0.0, 0.0), (100.0, 0.0)])
    assert labels == [1, 2]
    followers = tracker.followers()
    assert [f.label for f in followers] == [1, 2]

    tracker.track([(1.0, 0.0)])
    followers = tracker.followers()
    assert [f.label for f in followers] == [1]
    assert followers[0].seen == [(0.0, 0.0), (1.0, 0.0)]


def test_tracker_follower_default_follower_dies_on_kill():
    tracker = TrackerFollower(point_distance, Follower)
    tracker.track([(0.0, 0.0)])
    assert tracker.track([]) == []
    assert tracker.followers() == []