#!/usr/bin/env python
"""
Recorded Transform Reader Module

This module decodes transform records stored in a YAML file into
TransformSample objects. The file has two optional lists:

    transforms:          # dynamic, time-varying relations
      - parent_frame_id: map
        child_frame_id: base_link
        stamp: {sec: 5, nanosec: 0}     # or a float number of seconds
        translation: [1.0, 0.0, 0.0]
        rotation: [0.0, 0.0, 0.0, 1.0]  # qx, qy, qz, qw
    static_transforms:   # fixed relations, same entry layout
      - ...

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .common.errors import TransformRecordError
from .common.stamp import Stamp
from .common.transform_types import Transform, TransformSample

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("parent_frame_id", "child_frame_id", "stamp", "translation", "rotation")


def parse_stamp(value: Any) -> Stamp:
    """
    Decode ``{sec, nanosec}`` (``nsec``/``nsecs``/``secs`` also accepted) or float seconds.

    Both fields of the mapping form must be integers; fractional seconds go in
    the plain number form.
    """
    if isinstance(value, dict):
        sec = value.get("sec", value.get("secs", 0))
        nanosec = value.get("nanosec", value.get("nsec", value.get("nsecs", 0)))
        return Stamp(sec, nanosec)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Stamp.from_sec(float(value))
    raise TypeError(f"unsupported stamp {value!r}")


def parse_record(record: Dict[str, Any]) -> TransformSample:
    """Decode a single transform record."""
    missing = [key for key in _REQUIRED_KEYS if key not in record]
    if missing:
        raise KeyError(f"missing keys {missing}")
    return TransformSample(
        parent_frame_id=str(record["parent_frame_id"]),
        child_frame_id=str(record["child_frame_id"]),
        stamp=parse_stamp(record["stamp"]),
        transform=Transform(
            translation=record["translation"],
            rotation=record["rotation"],
        ),
    )


class TransformFileReader:
    """
    Reads recorded transforms from a YAML file.

    The reader only decodes; feeding samples into a TransformBuffer is up to
    the caller.
    """

    def __init__(self, path: Path):
        """
        Args:
            path: YAML file with 'transforms' and/or 'static_transforms'
        """
        self.path = Path(path)
        self._raw = None

    def _load(self) -> Dict[str, Any]:
        if self._raw is None:
            with open(self.path, "r") as f:
                try:
                    raw = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise TransformRecordError(f"{self.path}: malformed YAML: {e}") from e
            if not isinstance(raw, dict):
                raise TransformRecordError(
                    f"{self.path}: expected a mapping at the top level, got {type(raw).__name__}"
                )
            self._raw = raw
        return self._raw

    def _read_list(self, key: str) -> List[TransformSample]:
        records = self._load().get(key) or []
        samples = []
        for index, record in enumerate(records):
            try:
                samples.append(parse_record(record))
            except (KeyError, TypeError, ValueError) as e:
                raise TransformRecordError(f"{self.path}: {key}[{index}]: {e}") from e
        logger.info("Read %d %s from %s", len(samples), key, self.path)
        return samples

    def read_transforms(self) -> List[TransformSample]:
        """Dynamic samples in file order."""
        return self._read_list("transforms")

    def read_static_transforms(self) -> List[TransformSample]:
        """Static samples in file order."""
        return self._read_list("static_transforms")
