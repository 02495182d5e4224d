#!/usr/bin/env python
"""
Time Buffered Transform Chain

This module keeps the time history of one (parent frame, child frame) pair
and answers point-in-time queries against it. Samples are kept sorted by
stamp; lookups return an exact sample, an interpolation between the two
samples bracketing the requested time, or the newest sample.

The chain holds no lock. Owners that read and write from different threads
must guard each chain themselves (see TransformBuffer).

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import bisect
import logging
from typing import List, Optional

from .errors import (
    AttemptedLookupInFuture,
    AttemptedLookupInPast,
    EmptyTransformChainError,
)
from .interpolation import interpolate
from .stamp import ZERO_STAMP, Duration, QueryTime, Stamp, is_latest
from .transform_types import TransformSample

logger = logging.getLogger(__name__)


class TimeBufferedTransformChain:
    """
    Sorted, time-bounded buffer of TransformSamples for a single frame pair.

    - Non-static chains drop samples older than ``cache_duration`` measured
      back from the newest stamp.
    - Static chains keep everything and always answer with the newest sample.
    - Samples sharing a stamp are kept side by side in arrival order, so the
      newest sample is also the last one inserted among its stamp.
    """

    def __init__(self, is_static: bool = False, cache_duration: Duration = Duration(10)):
        """
        Initialize an empty chain.

        Args:
            is_static: Whether the pair is a fixed relation that never changes over time
            cache_duration: How far back from the newest sample history is retained
        """
        if cache_duration.to_nsec() < 0:
            raise ValueError(f"cache_duration must be non-negative, got {cache_duration}")
        self.is_static = is_static
        self.cache_duration = cache_duration
        self._samples: List[TransformSample] = []
        # Parallel list of stamps for bisect lookups
        self._stamps: List[Stamp] = []

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def samples(self) -> List[TransformSample]:
        """Retained samples, oldest first."""
        return list(self._samples)

    @property
    def oldest_stamp(self) -> Optional[Stamp]:
        return self._stamps[0] if self._stamps else None

    @property
    def newest_stamp(self) -> Optional[Stamp]:
        return self._stamps[-1] if self._stamps else None

    def add_to_buffer(self, sample: TransformSample) -> None:
        """
        Insert a sample at its ordered position and evict expired history.

        A sample whose stamp equals existing ones goes after them.
        """
        index = bisect.bisect_right(self._stamps, sample.stamp)
        self._samples.insert(index, sample)
        self._stamps.insert(index, sample.stamp)

        if self.is_static:
            return

        newest_stamp = self._stamps[-1]
        if newest_stamp > ZERO_STAMP + self.cache_duration:
            time_to_keep = newest_stamp - self.cache_duration
            cut = bisect.bisect_left(self._stamps, time_to_keep)
            if cut:
                del self._samples[:cut]
                del self._stamps[:cut]
                logger.debug(
                    "Evicted %d samples older than %s for '%s' -> '%s'",
                    cut,
                    time_to_keep,
                    sample.parent_frame_id,
                    sample.child_frame_id,
                )

    def get_closest_transform(self, time: QueryTime) -> TransformSample:
        """
        Return the transform at ``time``.

        Args:
            time: A Stamp, or LATEST (a zero Stamp means the same) for the newest sample

        Returns:
            TransformSample: the stored sample on an exact hit, otherwise a new
            sample interpolated between the two bracketing samples and stamped
            with ``time``.

        Raises:
            AttemptedLookupInPast: ``time`` precedes every retained sample
            AttemptedLookupInFuture: ``time`` follows every retained sample
            EmptyTransformChainError: the chain has never been populated
        """
        if not self._samples:
            raise EmptyTransformChainError(
                "get_closest_transform called on an empty chain; check has_valid_transform first"
            )

        if is_latest(time) or self.is_static:
            return self._samples[-1]

        index = bisect.bisect_left(self._stamps, time)
        if index < len(self._stamps) and self._stamps[index] == time:
            # Newest of any equal-stamp run
            return self._samples[bisect.bisect_right(self._stamps, time) - 1]

        if index == 0:
            raise AttemptedLookupInPast(time, self._samples[0])
        if index >= len(self._samples):
            raise AttemptedLookupInFuture(self._samples[-1], time)

        older = self._samples[index - 1]
        newer = self._samples[index]
        # older.stamp < time < newer.stamp, so the bracket is never zero length
        total_duration = newer.stamp - older.stamp
        desired_duration = time - older.stamp
        weight = 1.0 - desired_duration.to_sec() / total_duration.to_sec()

        return TransformSample(
            parent_frame_id=newer.parent_frame_id,
            child_frame_id=newer.child_frame_id,
            stamp=time,
            transform=interpolate(older.transform, newer.transform, weight),
        )

    def has_valid_transform(self, time: QueryTime) -> bool:
        """True when get_closest_transform(time) would return a sample."""
        if not self._samples:
            return False

        if self.is_static:
            return True

        return is_latest(time) or self._stamps[0] <= time <= self._stamps[-1]
