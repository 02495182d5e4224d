#!/usr/bin/env python
"""
Transform Cache Errors

Recoverable lookup failures derive from TransformLookupError and carry the
boundary sample that caused them, so callers can log or retry without
querying again. Looking up a chain that never received a sample is a caller
bug and raises EmptyTransformChainError instead.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""


class TransformLookupError(Exception):
    """Base class for recoverable transform lookup failures."""


class AttemptedLookupInPast(TransformLookupError):
    """The requested time is older than every retained sample."""

    def __init__(self, requested_time, oldest_sample):
        self.requested_time = requested_time
        self.oldest_sample = oldest_sample
        super().__init__(
            f"Lookup at {requested_time} for '{oldest_sample.parent_frame_id}' -> "
            f"'{oldest_sample.child_frame_id}' is before the oldest retained "
            f"sample at {oldest_sample.stamp}"
        )


class AttemptedLookupInFuture(TransformLookupError):
    """The requested time is newer than every retained sample."""

    def __init__(self, newest_sample, requested_time):
        self.newest_sample = newest_sample
        self.requested_time = requested_time
        super().__init__(
            f"Lookup at {requested_time} for '{newest_sample.parent_frame_id}' -> "
            f"'{newest_sample.child_frame_id}' is after the newest retained "
            f"sample at {newest_sample.stamp}"
        )


class FrameNotFoundError(TransformLookupError):
    """No chain is stored for the pair, in either direction."""

    def __init__(self, parent_frame: str, child_frame: str):
        self.parent_frame = parent_frame
        self.child_frame = child_frame
        super().__init__(
            f"No transform found between '{parent_frame}' and '{child_frame}'"
        )


class EmptyTransformChainError(RuntimeError):
    """Lookup on a chain that has never received a sample."""


class TransformRecordError(ValueError):
    """A recorded transform entry could not be decoded."""
