"""Core types and the per-frame-pair transform chain."""

from .errors import (
    AttemptedLookupInFuture,
    AttemptedLookupInPast,
    EmptyTransformChainError,
    FrameNotFoundError,
    TransformLookupError,
    TransformRecordError,
)
from .interpolation import interpolate
from .stamp import LATEST, Duration, Latest, Stamp, stamp_now
from .transform_chain import TimeBufferedTransformChain
from .transform_types import Transform, TransformSample
from .transformbuffer import TransformBuffer
