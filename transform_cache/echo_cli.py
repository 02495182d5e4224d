#!/usr/bin/env python
"""
Transform Echo Command Line Interface

Loads recorded transforms into a TransformBuffer and prints the transform
between two frames at the configured lookup times.

The steps are:
1. Read static and dynamic transform records from the input file
2. Feed them into a TransformBuffer in file order
3. Look up parent_frame -> child_frame at every lookup time (latest if none)

Usage:
    echo-transform [config.yaml]

The configuration is read from config/config.yaml by default.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import argparse
import logging
from pathlib import Path

import numpy as np
import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import ValidationError
from tqdm import tqdm

from transform_cache.common.errors import TransformLookupError, TransformRecordError
from transform_cache.common.stamp import LATEST, Stamp
from transform_cache.common.transformbuffer import TransformBuffer
from transform_cache.common.utils import quat_to_yaw
from transform_cache.config_model import EchoConfig
from transform_cache.reader import TransformFileReader

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"


def setup_logging(level: int = logging.INFO):
    """
    Configure root logger with appropriate formatting.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config(config_path: Path) -> EchoConfig:
    plain_cfg = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    return EchoConfig.model_validate(plain_cfg)


def build_buffer(cfg: EchoConfig) -> TransformBuffer:
    """Read the recorded transforms named by cfg into a fresh buffer."""
    reader = TransformFileReader(cfg.input_file)
    buffer = TransformBuffer(cache_duration=cfg.cache_duration)

    buffer.add_transforms(reader.read_static_transforms(), is_static=True)
    for sample in tqdm(reader.read_transforms(), desc="Loading transforms", unit="tf"):
        buffer.add_transform(sample)
    return buffer


def format_result(sample, output_format: str) -> str:
    if output_format == "H":
        return np.array2string(sample.transform.to_H(), precision=6, suppress_small=True)
    x, y, z = sample.transform.translation
    qx, qy, qz, qw = sample.transform.rotation
    return (
        f"[{x:.6f}, {y:.6f}, {z:.6f}, {qx:.6f}, {qy:.6f}, {qz:.6f}, {qw:.6f}]"
        f" yaw={np.degrees(quat_to_yaw(qx, qy, qz, qw)):.3f}deg"
    )


def echo(cfg: EchoConfig, buffer: TransformBuffer) -> int:
    """
    Print parent_frame -> child_frame for every configured lookup time.

    Returns:
        int: number of lookups that failed
    """
    times = [Stamp.from_sec(t) for t in cfg.lookup_times] or [LATEST]
    failures = 0
    for time in times:
        try:
            sample = buffer.lookup_transform(cfg.parent_frame, cfg.child_frame, time)
        except TransformLookupError as e:
            logger.warning("Lookup at %s failed: %s", time, e)
            failures += 1
            continue
        print(
            f"{sample.stamp} {sample.parent_frame_id} -> {sample.child_frame_id} "
            f"{format_result(sample, cfg.output_format)}"
        )
    return failures


def main(argv=None) -> int:
    """
    Main entry point for the echo tool.

    This function:
    1. Sets up logging
    2. Loads and validates configuration from YAML
    3. Builds the transform buffer from the recorded input
    4. Prints the requested lookups
    """
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0].strip())
    parser.add_argument(
        "config", nargs="?", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML configuration file"
    )
    args = parser.parse_args(argv)

    setup_logging()

    # Load and validate config
    try:
        cfg = load_config(args.config)
    except (ValidationError, FileNotFoundError, yaml.YAMLError, OmegaConfBaseException) as e:
        logging.error("Configuration validation failed:\n%s", e)
        return 2

    if cfg.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        buffer = build_buffer(cfg)
    except TransformRecordError as e:
        logging.error("Failed to read transforms: %s", e)
        return 2

    logger.info("Frames available: %s", sorted(buffer.list_frames()))
    return 1 if echo(cfg, buffer) else 0


if __name__ == "__main__":
    raise SystemExit(main())
