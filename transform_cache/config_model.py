#!/usr/bin/env python
"""
Transform Cache Configuration Model

This module defines the configuration schema for the echo-transform tool using
Pydantic. It validates the recorded input path, the cache retention window and
the frame pair and times to look up.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common.stamp import Duration


class EchoConfig(BaseModel):
    """
    Configuration model for the echo-transform tool.

    All paths are automatically converted to Path objects and validated.
    """

    verbose: bool = Field(False, description="Enable verbose logging for debugging")

    model_config = ConfigDict(validate_default=True)

    # === Input ===
    input_file: Path = Field(
        ..., description="YAML file holding recorded 'transforms' and 'static_transforms'"
    )

    # === Cache ===
    cache_duration_sec: float = Field(
        10.0,
        ge=0.0,
        description="History retained per dynamic frame pair, in seconds, measured back from the newest sample",
    )

    # === Lookup ===
    parent_frame: str = Field("map", description="Frame the transform is expressed in")
    child_frame: str = Field("base_link", description="Frame whose pose is looked up")
    lookup_times: List[float] = Field(
        default_factory=list,
        description="Times to look up, in seconds. Empty or 0 means the latest transform",
    )
    output_format: Literal["7d", "H"] = Field(
        "7d", description="Print [x, y, z, qx, qy, qz, qw] ('7d') or a 4x4 matrix ('H')"
    )

    @field_validator("input_file", mode="before")
    @classmethod
    def _validate_input_file(cls, v: str) -> Path:
        """
        Convert the input path to a Path object and make sure it exists.

        Raises:
            ValueError: If the file does not exist
        """
        p = Path(v)
        if not p.is_file():
            raise ValueError(f"Input file does not exist: {p}")
        return p

    @field_validator("lookup_times")
    @classmethod
    def _validate_lookup_times(cls, v: List[float]) -> List[float]:
        if any(t < 0 for t in v):
            raise ValueError(f"Lookup times must be non-negative, got {v}")
        return v

    @property
    def cache_duration(self) -> Duration:
        return Duration.from_sec(self.cache_duration_sec)

    @classmethod
    def load_from_yaml(cls, path: Path) -> "EchoConfig":
        """
        Load configuration from a YAML file and validate it.

        Args:
            path: Path to the YAML configuration file

        Returns:
            EchoConfig: Validated configuration instance

        Raises:
            ValidationError: If the configuration is invalid
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML file is malformed
        """
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
        return cls(**raw)
