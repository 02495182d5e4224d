#!/usr/bin/env python
"""
Common Utility Functions

This module provides the small set of geometry helpers shared by the
transform cache: quaternion <-> rotation matrix conversion, homogeneous
matrix construction and rigid inversion.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from typing import Tuple

import numpy as np


def get_7d_array_pose_to_H(pose: np.ndarray) -> np.ndarray:
    """
    Convert a 7D pose array [x, y, z, qx, qy, qz, qw] to a 4x4 transformation matrix.
    """
    x, y, z, qx, qy, qz, qw = pose
    T = np.eye(4)
    T[:3, :3] = get_quat_to_R(qx, qy, qz, qw)
    T[:3, 3] = [x, y, z]
    return T


def get_H_to_7d_array_pose(H: np.ndarray) -> np.ndarray:
    """Convert a 4x4 transformation matrix to a 7D pose [x, y, z, qx, qy, qz, qw]."""
    translation = H[:3, 3]
    quaternion = get_R_to_q(H[:3, :3])
    return np.concatenate([translation, quaternion]).astype(np.float64)


def get_quat_to_R(qx, qy, qz, qw) -> np.ndarray:
    """Convert a quaternion to a 3x3 rotation matrix."""
    norm = np.sqrt(qx**2 + qy**2 + qz**2 + qw**2)
    qx, qy, qz, qw = qx / norm, qy / norm, qz / norm, qw / norm

    return np.array(
        [
            [
                1 - 2 * qy**2 - 2 * qz**2,
                2 * qx * qy - 2 * qz * qw,
                2 * qx * qz + 2 * qy * qw,
            ],
            [
                2 * qx * qy + 2 * qz * qw,
                1 - 2 * qx**2 - 2 * qz**2,
                2 * qy * qz - 2 * qx * qw,
            ],
            [
                2 * qx * qz - 2 * qy * qw,
                2 * qy * qz + 2 * qx * qw,
                1 - 2 * qx**2 - 2 * qy**2,
            ],
        ]
    )


def get_invert_H(T):
    """
    Compute the inverse of a 4x4 transformation matrix.
    """
    assert T.shape == (4, 4)
    R = T[:3, :3]  # Rotation part
    t = T[:3, 3]  # Translation part

    T_inv = np.eye(4)
    T_inv[:3, :3] = R.T
    T_inv[:3, 3] = -R.T @ t
    return T_inv


def get_R_to_q(matrix) -> Tuple[float, float, float, float]:
    """
    Convert a 3x3 rotation matrix to a quaternion [qx, qy, qz, qw].

    Args:
        matrix (numpy.ndarray): 3x3 rotation matrix.

    Returns:
        tuple: A quaternion (qx, qy, qz, qw).
    """
    m00, m01, m02 = matrix[0, 0], matrix[0, 1], matrix[0, 2]
    m10, m11, m12 = matrix[1, 0], matrix[1, 1], matrix[1, 2]
    m20, m21, m22 = matrix[2, 0], matrix[2, 1], matrix[2, 2]

    trace = m00 + m11 + m22

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        qw = 0.25 / s
        qx = (m21 - m12) * s
        qy = (m02 - m20) * s
        qz = (m10 - m01) * s
    elif m00 > m11 and m00 > m22:
        s = 2.0 * np.sqrt(1.0 + m00 - m11 - m22)
        qw = (m21 - m12) / s
        qx = 0.25 * s
        qy = (m01 + m10) / s
        qz = (m02 + m20) / s
    elif m11 > m22:
        s = 2.0 * np.sqrt(1.0 + m11 - m00 - m22)
        qw = (m02 - m20) / s
        qx = (m01 + m10) / s
        qy = 0.25 * s
        qz = (m12 + m21) / s
    else:
        s = 2.0 * np.sqrt(1.0 + m22 - m00 - m11)
        qw = (m10 - m01) / s
        qx = (m02 + m20) / s
        qy = (m12 + m21) / s
        qz = 0.25 * s

    return qx, qy, qz, qw


def get_normalized_quat(q) -> np.ndarray:
    """Return q as a unit quaternion [qx, qy, qz, qw]."""
    q = np.asarray(q, dtype=np.float64).reshape(4)
    norm = np.linalg.norm(q)
    if norm < 1e-12:
        raise ValueError(f"Quaternion has zero norm: {q.tolist()}")
    return q / norm


def quat_to_yaw(qx: float, qy: float, qz: float, qw: float) -> float:
    """Heading about +z of the quaternion, in radians."""
    return np.arctan2(2.0 * (qw * qz + qx * qy), 1.0 - 2.0 * (qy * qy + qz * qz))
