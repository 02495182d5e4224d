#!/usr/bin/env python
"""
Example Usage of Transform Cache

This script demonstrates how to use the transform cache programmatically:
feeding timestamped transforms for a frame pair and querying them at exact,
interpolated, out-of-range and latest times.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging

import numpy as np

from transform_cache import (
    LATEST,
    Duration,
    Stamp,
    Transform,
    TransformBuffer,
    TransformLookupError,
    TransformSample,
)


def setup_logging():
    """Setup logging for the example."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def main():
    """
    Example usage of the transform cache.

    This demonstrates:
    1. Creating a buffer with a 10 s retention window
    2. Adding a static mount and a moving robot pose
    3. Exact, interpolated and latest lookups
    4. Handling lookups outside the retained window
    """
    setup_logging()
    logger = logging.getLogger(__name__)

    buffer = TransformBuffer(cache_duration=Duration(10))

    # Fixed sensor mount
    buffer.add_transform(
        TransformSample("base_link", "laser", Stamp(0), Transform(translation=[0.2, 0.0, 0.3])),
        is_static=True,
    )

    # Robot driving along x while turning 90 degrees about z
    half_turn = np.sin(np.pi / 4)
    buffer.add_transforms(
        [
            TransformSample("map", "base_link", Stamp(5), Transform.identity()),
            TransformSample(
                "map",
                "base_link",
                Stamp(10),
                Transform(translation=[10.0, 0.0, 0.0], rotation=[0.0, 0.0, half_turn, half_turn]),
            ),
        ]
    )

    for time in (Stamp(5), Stamp(7, 500_000_000), LATEST, Stamp(1), Stamp(20)):
        try:
            sample = buffer.lookup_transform("map", "base_link", time)
        except TransformLookupError as e:
            logger.warning("Lookup at %s failed: %s", time, e)
            continue
        logger.info("map -> base_link at %s: %s", time, sample.transform)

    logger.info("laser in base_link: %s", buffer.lookup_transform("base_link", "laser", Stamp(123)).transform)
    logger.info("base_link in laser: %s", buffer.lookup_transform("laser", "base_link").transform)


if __name__ == "__main__":
    main()
