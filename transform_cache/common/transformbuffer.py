#!/usr/bin/env python
"""
Transform Buffer Module

This module owns one TimeBufferedTransformChain per (parent, child) frame
pair and serves direct-edge lookups from them. Each chain has its own lock,
so producers and consumers of different frame pairs never contend.

Only single edges are resolved here: a stored pair, or its reverse with the
result inverted. Composing multi-hop paths is left to callers.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from .errors import FrameNotFoundError
from .stamp import LATEST, Duration, QueryTime, Stamp, is_latest
from .transform_chain import TimeBufferedTransformChain
from .transform_types import Transform, TransformSample

logger = logging.getLogger(__name__)


class _GuardedChain:
    """A chain paired with the lock that serialises access to it."""

    __slots__ = ("chain", "lock")

    def __init__(self, chain: TimeBufferedTransformChain):
        self.chain = chain
        self.lock = threading.RLock()


class TransformBuffer:
    """
    A buffer storing the time history of transforms between frame pairs.

    Samples are routed to a chain keyed by (parent_frame_id, child_frame_id).
    Chains are created on first use with the buffer's cache duration and
    the static flag given with that first sample.
    """

    def __init__(self, cache_duration: Duration = Duration(10)):
        """
        Initialize the transform buffer.

        Args:
            cache_duration: History retained by every non-static chain
        """
        self.cache_duration = cache_duration
        # Maps (parent_frame, child_frame) -> guarded chain
        self._chains: Dict[Tuple[str, str], _GuardedChain] = {}
        # Only guards creation and removal of entries in self._chains
        self._registry_lock = threading.Lock()

    def _get_or_create(self, key: Tuple[str, str], is_static: bool) -> _GuardedChain:
        with self._registry_lock:
            guarded = self._chains.get(key)
            if guarded is None:
                guarded = _GuardedChain(
                    TimeBufferedTransformChain(is_static, self.cache_duration)
                )
                self._chains[key] = guarded
                logger.debug(
                    "Created %s chain '%s' -> '%s'",
                    "static" if is_static else "dynamic",
                    key[0],
                    key[1],
                )
            elif guarded.chain.is_static != is_static:
                logger.warning(
                    "Transform '%s' -> '%s' received as %s but chain is %s; keeping the chain as is",
                    key[0],
                    key[1],
                    "static" if is_static else "dynamic",
                    "static" if guarded.chain.is_static else "dynamic",
                )
            return guarded

    def _find(self, key: Tuple[str, str]) -> Optional[_GuardedChain]:
        with self._registry_lock:
            return self._chains.get(key)

    def add_transform(self, sample: TransformSample, is_static: bool = False) -> None:
        """
        Add a TransformSample into the buffer.

        Args:
            sample: Decoded transform record
            is_static: Whether the pair is a fixed relation (e.g. from /tf_static)
        """
        guarded = self._get_or_create(sample.frame_pair, is_static)
        with guarded.lock:
            guarded.chain.add_to_buffer(sample)

    def add_transforms(self, samples: Iterable[TransformSample], is_static: bool = False) -> None:
        """Add every sample of one decoded transform message."""
        for sample in samples:
            self.add_transform(sample, is_static=is_static)

    def lookup_transform(
        self, parent_frame: str, child_frame: str, time: QueryTime = LATEST
    ) -> TransformSample:
        """
        Transform from parent_frame -> child_frame at ``time``.

        The direct pair is preferred. When only (child_frame, parent_frame) is
        stored, that chain is queried and its result inverted.

        Raises:
            FrameNotFoundError: neither direction is stored
            AttemptedLookupInPast / AttemptedLookupInFuture: from the chain
        """
        # Short-circuit same-frame
        if parent_frame == child_frame:
            stamp = Stamp() if is_latest(time) else time
            return TransformSample(parent_frame, child_frame, stamp, Transform.identity())

        direct = self._find((parent_frame, child_frame))
        if direct is not None:
            with direct.lock:
                return direct.chain.get_closest_transform(time)

        reverse = self._find((child_frame, parent_frame))
        if reverse is None:
            raise FrameNotFoundError(parent_frame, child_frame)
        with reverse.lock:
            sample = reverse.chain.get_closest_transform(time)
        return TransformSample(
            parent_frame_id=parent_frame,
            child_frame_id=child_frame,
            stamp=sample.stamp,
            transform=sample.transform.inverse(),
        )

    def can_transform(
        self, parent_frame: str, child_frame: str, time: QueryTime = LATEST
    ) -> bool:
        """True when lookup_transform would return a sample for the same arguments."""
        if parent_frame == child_frame:
            return True
        guarded = self._find((parent_frame, child_frame)) or self._find(
            (child_frame, parent_frame)
        )
        if guarded is None:
            return False
        with guarded.lock:
            return guarded.chain.has_valid_transform(time)

    def lookup_transform_7d(
        self, parent_frame: str, child_frame: str, time: QueryTime = LATEST
    ) -> np.ndarray:
        """
        Compute the transform from parent_frame -> child_frame as a 7D vector
        [x, y, z, qx, qy, qz, qw].
        """
        return self.lookup_transform(parent_frame, child_frame, time).transform.to_7d()

    def lookup_transform_H(
        self, parent_frame: str, child_frame: str, time: QueryTime = LATEST
    ) -> np.ndarray:
        """Compute the transform from parent_frame -> child_frame as a 4x4 matrix."""
        return self.lookup_transform(parent_frame, child_frame, time).transform.to_H()

    def get_chain(self, parent_frame: str, child_frame: str) -> Optional[TimeBufferedTransformChain]:
        """The chain stored for exactly this pair, if any. Callers must not mutate it."""
        guarded = self._find((parent_frame, child_frame))
        return guarded.chain if guarded is not None else None

    def list_pairs(self) -> List[Tuple[str, str]]:
        """List all stored (parent, child) pairs."""
        with self._registry_lock:
            return sorted(self._chains.keys())

    def list_frames(self) -> Set[str]:
        """
        List all frames in the buffer.
        Returns a set of frame names.
        """
        frames = set()
        for parent, child in self.list_pairs():
            frames.add(parent)
            frames.add(child)
        return frames

    def clear(self) -> None:
        """Drop every chain."""
        with self._registry_lock:
            self._chains.clear()
