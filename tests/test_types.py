"""Tests for stamps, durations and transform value types."""

import numpy as np
import pytest

from transform_cache.common.stamp import (
    LATEST,
    Duration,
    Latest,
    Stamp,
    is_latest,
    stamp_now,
)
from transform_cache.common.transform_types import Transform, TransformSample
from transform_cache.common.utils import get_quat_to_R, get_R_to_q, quat_to_yaw


def test_stamp_normalises_nanoseconds() -> None:
    """Ensure nanosecond overflow carries into seconds."""
    stamp = Stamp(1, 1_500_000_000)
    assert (stamp.sec, stamp.nanosec) == (2, 500_000_000)
    assert stamp.to_nsec() == 2_500_000_000


def test_stamp_ordering_matches_total_nanoseconds() -> None:
    """Ensure ordering compares seconds then nanoseconds."""
    assert Stamp(1, 999_999_999) < Stamp(2, 0)
    assert Stamp(2, 1) > Stamp(2)
    assert Stamp(3, 5) == Stamp.from_nsec(3_000_000_005)


def test_stamp_arithmetic() -> None:
    """Ensure stamp differences and offsets produce the expected types."""
    delta = Stamp(2) - Stamp(1, 500_000_000)
    assert delta == Duration(0, 500_000_000)
    assert delta.to_sec() == pytest.approx(0.5)
    assert Stamp(1) + Duration(2, 5) == Stamp(3, 5)
    assert Stamp(10) - Duration(3) == Stamp(7)


def test_negative_duration() -> None:
    """Ensure negative spans keep nanoseconds in range."""
    duration = Duration.from_sec(-0.25)
    assert (duration.sec, duration.nanosec) == (-1, 750_000_000)
    assert duration.to_sec() == pytest.approx(-0.25)
    assert -duration == Duration(0, 250_000_000)


def test_latest_query_mode() -> None:
    """Ensure LATEST and the zero stamp both select the newest sample."""
    assert Latest() is LATEST
    assert is_latest(LATEST)
    assert is_latest(Stamp(0, 0))
    assert not is_latest(Stamp(0, 1))


def test_stamp_str_and_now() -> None:
    """Ensure stamps print with nanosecond precision and now() is after 2020."""
    assert str(Stamp(3, 5)) == "3.000000005"
    assert stamp_now() > Stamp(1_577_836_800)


def test_transform_is_read_only() -> None:
    """Ensure transform arrays cannot be changed in place."""
    source = np.array([1.0, 2.0, 3.0])
    transform = Transform(translation=source)
    source[0] = 99.0
    assert transform.translation[0] == 1.0
    with pytest.raises(ValueError):
        transform.translation[0] = 5.0


def test_transform_normalises_quaternion() -> None:
    """Ensure rotations are stored as unit quaternions."""
    transform = Transform(rotation=[0.0, 0.0, 0.0, 2.0])
    np.testing.assert_allclose(transform.rotation, [0.0, 0.0, 0.0, 1.0])
    with pytest.raises(ValueError):
        Transform(rotation=[0.0, 0.0, 0.0, 0.0])


def test_transform_inverse_composes_to_identity() -> None:
    """Ensure T @ T^-1 is the identity matrix."""
    s = np.sin(np.pi / 6)
    c = np.cos(np.pi / 6)
    transform = Transform(translation=[1.0, -2.0, 0.5], rotation=[0.0, s, 0.0, c])
    np.testing.assert_allclose(transform.to_H() @ transform.inverse().to_H(), np.eye(4), atol=1e-12)


def test_transform_from_H() -> None:
    """Ensure a homogeneous matrix maps back to translation and quaternion."""
    H = np.eye(4)
    H[:3, :3] = get_quat_to_R(0.0, 0.0, 1.0, 0.0)
    H[:3, 3] = [4.0, 5.0, 6.0]
    transform = Transform.from_H(H)
    np.testing.assert_allclose(transform.translation, [4.0, 5.0, 6.0])
    assert transform.allclose(Transform(translation=[4.0, 5.0, 6.0], rotation=[0.0, 0.0, -1.0, 0.0]))


def test_quaternion_helpers() -> None:
    """Ensure a 90 degree yaw survives R -> q and reports its heading."""
    s = np.sqrt(0.5)
    q = get_R_to_q(get_quat_to_R(0.0, 0.0, s, s))
    np.testing.assert_allclose(q, [0.0, 0.0, s, s], atol=1e-12)
    assert quat_to_yaw(0.0, 0.0, s, s) == pytest.approx(np.pi / 2)


def test_sample_frame_pair() -> None:
    """Ensure samples expose their (parent, child) key."""
    sample = TransformSample("map", "base_link", Stamp(1))
    assert sample.frame_pair == ("map", "base_link")
    assert sample.transform.allclose(Transform.identity())


@pytest.mark.parametrize("cls", [Stamp, Duration])
def test_fractional_fields_rejected(cls) -> None:
    """Ensure float fields are refused instead of truncated."""
    with pytest.raises(TypeError, match="from_sec"):
        cls(2.5)
    with pytest.raises(TypeError):
        cls(1, 0.5)
    with pytest.raises(TypeError):
        cls(True)
    assert cls(np.int64(2)).to_nsec() == 2_000_000_000
    assert cls.from_sec(2.5).to_nsec() == 2_500_000_000


def test_stamp_before_zero_rejected() -> None:
    """Ensure stamps cannot be negative while durations can."""
    with pytest.raises(ValueError):
        Stamp(-5)
    with pytest.raises(ValueError):
        Stamp(0, -1)
    with pytest.raises(ValueError):
        Stamp(1) - Duration(2)
    assert Duration(-5).to_sec() == pytest.approx(-5.0)
