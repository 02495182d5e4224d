#!/usr/bin/env python
"""
Transform Interpolation

Blends two rigid transforms: translation linearly, rotation along the
shortest great-circle arc.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from scipy.spatial.transform import Rotation

from .transform_types import Transform


def interpolate(t1: Transform, t2: Transform, weight: float) -> Transform:
    """
    Interpolate between two transforms.

    Args:
        t1: Transform at the older stamp
        t2: Transform at the newer stamp
        weight: Share of t1 in the result (1.0 -> t1, 0.0 -> t2). Values
            outside [0, 1] extrapolate along the same line and arc.

    Returns:
        Transform: the blended transform
    """
    weight = float(weight)
    fraction = 1.0 - weight

    translation = weight * t1.translation + fraction * t2.translation

    # scipy's Slerp refuses times outside its key range, so slerp through the
    # relative rotation vector instead. as_rotvec() keeps the angle in [0, pi],
    # which is the shortest arc.
    r1 = Rotation.from_quat(t1.rotation)
    r2 = Rotation.from_quat(t2.rotation)
    delta = (r1.inv() * r2).as_rotvec()
    rotation = r1 * Rotation.from_rotvec(delta * fraction)

    return Transform(translation=translation, rotation=rotation.as_quat())
