#!/usr/bin/env python
"""
Transform Types Module

Value types stored in the transform cache:

- Transform: a rigid transform as translation + unit quaternion [qx, qy, qz, qw]
- TransformSample: a Transform between two named frames at a given Stamp

Both are immutable. The numpy arrays held by a Transform are private copies
flagged read-only, so a sample can be handed to any number of readers.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from dataclasses import dataclass, field

import numpy as np

from .stamp import Stamp
from .utils import (
    get_7d_array_pose_to_H,
    get_H_to_7d_array_pose,
    get_invert_H,
    get_normalized_quat,
)


def _frozen_array(values, size: int) -> np.ndarray:
    arr = np.array(values, dtype=np.float64).reshape(size)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Transform:
    """
    Rigid transform mapping child-frame coordinates into the parent frame.
    """

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))

    def __post_init__(self):
        object.__setattr__(self, "translation", _frozen_array(self.translation, 3))
        object.__setattr__(
            self, "rotation", _frozen_array(get_normalized_quat(self.rotation), 4)
        )

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def from_7d(cls, pose: np.ndarray) -> "Transform":
        """Build from [x, y, z, qx, qy, qz, qw]."""
        pose = np.asarray(pose, dtype=np.float64).reshape(7)
        return cls(translation=pose[:3], rotation=pose[3:])

    @classmethod
    def from_H(cls, H: np.ndarray) -> "Transform":
        """Build from a 4x4 homogeneous transformation matrix."""
        return cls.from_7d(get_H_to_7d_array_pose(np.asarray(H, dtype=np.float64)))

    def to_7d(self) -> np.ndarray:
        return np.concatenate([self.translation, self.rotation])

    def to_H(self) -> np.ndarray:
        return get_7d_array_pose_to_H(self.to_7d())

    def inverse(self) -> "Transform":
        return Transform.from_H(get_invert_H(self.to_H()))

    def allclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        """
        Compare with another transform. q and -q describe the same rotation,
        so the quaternion comparison accepts either sign.
        """
        if not np.allclose(self.translation, other.translation, atol=atol):
            return False
        return np.allclose(self.rotation, other.rotation, atol=atol) or np.allclose(
            self.rotation, -other.rotation, atol=atol
        )

    def __repr__(self) -> str:
        return (
            f"Transform(translation={self.translation.tolist()}, "
            f"rotation={self.rotation.tolist()})"
        )


@dataclass(frozen=True)
class TransformSample:
    """
    A timestamped transform from ``parent_frame_id`` to ``child_frame_id``.

    Frame ids are provenance only; ordering inside a chain uses ``stamp``.
    """

    parent_frame_id: str
    child_frame_id: str
    stamp: Stamp
    transform: Transform = field(default_factory=Transform.identity, compare=False)

    @property
    def frame_pair(self) -> tuple:
        return (self.parent_frame_id, self.child_frame_id)
