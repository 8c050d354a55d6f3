# cvtoolkit

Computer vision helpers in plain Python and NumPy: keeping the identities of
moving objects stable across frames, closest points and distances to simple
2D shapes, fitting hulls, rectangles, ellipses and lines to point sets,
telling a drawn line from a drawn arc, and Kalman smoothing of a moving
point. Images are plain `numpy.ndarray` values.

## Modules

- `cvtoolkit.tracker`: `Tracker` matches each new frame's objects to the
  previous frame's greedily by distance and keeps a stable integer label for
  each. `RectTracker` works on `Rect` values, keeps a smoothed rectangle per
  label (`smoothed`) and reports centre movement (`velocity`). `PointTracker`
  works on `(x, y)` points. `TrackerFollower` keeps one `Follower` per label,
  calling `setup`, `update` and `kill` as labels appear, persist and vanish,
  and drops followers once they are dead. `rect_distance` and
  `point_distance` are the distance functions used.
- `cvtoolkit.glow`: `Glow`, a `Follower` of rectangles that records a
  smoothed path of the centre and, once lost, shrinks its `size()` to zero
  over `dying_time` seconds before marking itself dead.
- `cvtoolkit.geometry`: `RotatedRect`, and closest points on / distances to
  rays, segments, circles, rotated rectangles and ellipses
  (`closest_point_on_*`, `distance_to_*`, `distance_point_ellipse`).
- `cvtoolkit.shapes`: `convex_hull`, `convexity_defects`, `min_area_rect`,
  `fit_ellipse` (at least five points), `fit_line` and `perimeter`.
- `cvtoolkit.gesture`: `Recognizer.update` classifies a stroke as
  `GestureType.LINE` or `GestureType.ARC`, and sets `fit_error` and an
  `idealized` version of the stroke.
- `cvtoolkit.kalman`: `KalmanPosition`, a constant-velocity (or, with
  `use_accel`, constant-acceleration) Kalman filter on a 2D or 3D point, with
  `prediction`, `estimation` and `velocity`.
- `cvtoolkit.mesh`: `GridMesh`, a triangulated grid whose inner vertices can
  be displaced by per-vertex offsets (`distort`); also
  `duplicate_first_channel` and `accumulate_weighted`.
- `cvtoolkit.graph`: `LineGraph`, which records values, tracks their range,
  normalises values to [0, 1] and scales the recorded points into an area.
- `cvtoolkit.distance`: `edit_distance` (Levenshtein) and
  `most_representative`.
- `cvtoolkit.utilities`: `ImageType`, `max_val`, `channels`, `image_type`,
  `of_image_type`, `target_channels_from_code`, `allocate` and `imitate`
  (return the given array when it already has the wanted shape and dtype,
  otherwise a new zeroed one), `copy` (with value rescaling between dtypes)
  and `to_polyline`.

## What it does not do

The package contains no pixel filters: there is no thresholding, blurring,
erosion or dilation, colour conversion, histogram equalisation, thinning,
background subtraction, optical flow, object detection or camera
calibration. It reads no images or video and draws nothing; the results it
returns (labels, points, rectangles, meshes) are for the caller to render.
It has no command-line program.

## Installation

```
pip install .
```

## Example: tracking rectangles

```python
from cvtoolkit.tracker import Rect, RectTracker

tracker = RectTracker(persistence=15, maximum_distance=50, smoothing_rate=0.5)
tracker.track([Rect(10, 10, 20, 20)])       # [1]
tracker.track([Rect(14, 12, 20, 20)])       # [1]
tracker.velocity(0)                         # (4.0, 2.0)
```

## Example: line or arc

```python
import math
from cvtoolkit.gesture import Recognizer

stroke = [(100 + 50 * math.cos(t / 10), 100 + 30 * math.sin(t / 10)) for t in range(40)]
recognizer = Recognizer()
print(recognizer.update(stroke), recognizer.fit_error)
```

## Example: string consensus

```python
from cvtoolkit.distance import edit_distance, most_representative

edit_distance("kitten", "sitting")                    # 3
most_representative(["apple", "apply", "ample"])      # "apple"
```

## Running the tests

```
pip install ".[test]"
pytest
```