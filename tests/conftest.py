"""Shared helpers for the transform cache tests."""

import pytest

from transform_cache.common.stamp import Stamp
from transform_cache.common.transform_types import Transform, TransformSample


def make_sample(
    sec: int,
    x: float = 0.0,
    nanosec: int = 0,
    parent: str = "map",
    child: str = "base_link",
    rotation=(0.0, 0.0, 0.0, 1.0),
) -> TransformSample:
    """Sample translated along x by ``x``."""
    return TransformSample(
        parent_frame_id=parent,
        child_frame_id=child,
        stamp=Stamp(sec, nanosec),
        transform=Transform(translation=[x, 0.0, 0.0], rotation=rotation),
    )


@pytest.fixture
def sample_factory():
    return make_sample
