import math

import pytest

from roda.wheel.layout import (
    arc_width_degrees,
    compute_layout,
    segment_under_pointer,
)


@pytest.mark.parametrize("count", [1, 2, 3, 7, 12, 50])
def test_segments_partition_the_full_circle(count):
    segments = compute_layout(count)
    assert len(segments) == count
    assert math.isclose(sum(s.angular_width for s in segments), 2 * math.pi)
    assert segments[0].start_angle == 0
    for prev, cur in zip(segments, segments[1:]):
        assert math.isclose(prev.end_angle, cur.start_angle)
    assert math.isclose(segments[-1].end_angle, 2 * math.pi)


def test_empty_wheel_has_no_segments():
    assert compute_layout(0) == []
    assert arc_width_degrees(0) == 0.0


def test_mid_angle_bisects_segment():
    seg = compute_layout(4)[1]
    assert math.isclose(seg.mid_angle, 3 * math.pi / 4)


@pytest.mark.parametrize("rotation", [-1000.0, -360.0, -0.0001, 0.0, 359.9999, 360.0, 725.5, 1e6])
@pytest.mark.parametrize("count", [1, 3, 8])
def test_pointer_index_always_in_range(rotation, count):
    index = segment_under_pointer(rotation, count)
    assert 0 <= index < count


def test_pointer_at_rest_three_entrants():
    # 270 deg in the wheel frame falls in the third 120 deg slice
    assert segment_under_pointer(0, 3) == 2
    assert segment_under_pointer(720, 3) == 2
    # Rotating clockwise by 60 deg brings wheel angle 210 under the pointer
    assert segment_under_pointer(60, 3) == 1


def test_single_segment_always_wins():
    for rotation in (-45.0, 0.0, 123.4, 9999.0):
        assert segment_under_pointer(rotation, 1) == 0


def test_pointer_rejects_empty_wheel():
    with pytest.raises(ValueError):
        segment_under_pointer(0, 0)
