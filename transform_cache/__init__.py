#!/usr/bin/env python
"""
Transform Cache

A time-indexed cache of rigid transforms between coordinate frame pairs.
Each pair keeps a bounded, sorted history of timestamped samples and answers
point-in-time queries by exact match, interpolation between the bracketing
samples, or "latest".

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

__version__ = "0.1.0"
__author__ = "Xiangyu Fu"
__email__ = "xiangyu.fu@tum.de"
__license__ = "MIT"

from .common.errors import (
    AttemptedLookupInFuture,
    AttemptedLookupInPast,
    EmptyTransformChainError,
    FrameNotFoundError,
    TransformLookupError,
)
from .common.interpolation import interpolate
from .common.stamp import LATEST, Duration, Stamp, stamp_now
from .common.transform_chain import TimeBufferedTransformChain
from .common.transform_types import Transform, TransformSample
from .common.transformbuffer import TransformBuffer
from .config_model import EchoConfig
from .reader import TransformFileReader

__all__ = [
    "AttemptedLookupInFuture",
    "AttemptedLookupInPast",
    "Duration",
    "EchoConfig",
    "EmptyTransformChainError",
    "FrameNotFoundError",
    "LATEST",
    "Stamp",
    "TimeBufferedTransformChain",
    "Transform",
    "TransformBuffer",
    "TransformFileReader",
    "TransformLookupError",
    "TransformSample",
    "interpolate",
    "stamp_now",
]
