#!/usr/bin/env python
"""
Stamp and Duration Module

Logical timestamps used to order and interpolate transform samples. A stamp
is a (sec, nanosec) pair kept normalised so that ordering the pairs is the
same as ordering total nanoseconds.

Lookups select a point in time with either a Stamp or the LATEST query
mode. A zero Stamp is treated as LATEST.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import numbers
import time
from dataclasses import dataclass
from typing import Union

NSEC_PER_SEC = 1_000_000_000


def _split_nsec(total_nsec: int) -> tuple:
    sec, nanosec = divmod(int(total_nsec), NSEC_PER_SEC)
    return sec, nanosec


def _total_nsec(cls_name: str, sec, nanosec) -> int:
    for name, value in (("sec", sec), ("nanosec", nanosec)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(
                f"{cls_name}.{name} must be an integer, got {value!r}; use {cls_name}.from_sec for fractional seconds"
            )
    return int(sec) * NSEC_PER_SEC + int(nanosec)


@dataclass(frozen=True, order=True)
class Duration:
    """
    Signed time span. Negative spans carry the sign in ``sec`` while
    ``nanosec`` stays in [0, 1e9).
    """

    sec: int = 0
    nanosec: int = 0

    def __post_init__(self):
        sec, nanosec = _split_nsec(_total_nsec("Duration", self.sec, self.nanosec))
        object.__setattr__(self, "sec", sec)
        object.__setattr__(self, "nanosec", nanosec)

    @classmethod
    def from_sec(cls, seconds: float) -> "Duration":
        return cls(0, round(seconds * NSEC_PER_SEC))

    @classmethod
    def from_nsec(cls, nsec: int) -> "Duration":
        return cls(0, nsec)

    def to_nsec(self) -> int:
        return self.sec * NSEC_PER_SEC + self.nanosec

    def to_sec(self) -> float:
        return self.sec + self.nanosec / 1e9

    def __neg__(self) -> "Duration":
        return Duration.from_nsec(-self.to_nsec())


@dataclass(frozen=True, order=True)
class Stamp:
    """
    Point on the logical time axis of a transform stream, never before zero.

    Arithmetic:
        Stamp - Stamp    -> Duration
        Stamp +/- Duration -> Stamp
    """

    sec: int = 0
    nanosec: int = 0

    def __post_init__(self):
        total_nsec = _total_nsec("Stamp", self.sec, self.nanosec)
        if total_nsec < 0:
            raise ValueError(f"Stamp must not be before zero, got {total_nsec} ns")
        sec, nanosec = _split_nsec(total_nsec)
        object.__setattr__(self, "sec", sec)
        object.__setattr__(self, "nanosec", nanosec)

    @classmethod
    def from_sec(cls, seconds: float) -> "Stamp":
        return cls(0, round(seconds * NSEC_PER_SEC))

    @classmethod
    def from_nsec(cls, nsec: int) -> "Stamp":
        return cls(0, nsec)

    def to_nsec(self) -> int:
        return self.sec * NSEC_PER_SEC + self.nanosec

    def to_sec(self) -> float:
        return self.sec + self.nanosec / 1e9

    def is_zero(self) -> bool:
        return self.sec == 0 and self.nanosec == 0

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Stamp.from_nsec(self.to_nsec() + other.to_nsec())

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Stamp):
            return Duration.from_nsec(self.to_nsec() - other.to_nsec())
        if isinstance(other, Duration):
            return Stamp.from_nsec(self.to_nsec() - other.to_nsec())
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.sec}.{self.nanosec:09d}"


ZERO_STAMP = Stamp(0, 0)


class Latest:
    """Query mode selecting the most recently inserted sample."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LATEST"


LATEST = Latest()

QueryTime = Union[Stamp, Latest]


def is_latest(time: QueryTime) -> bool:
    """True when ``time`` asks for the most recent sample (LATEST or a zero stamp)."""
    if isinstance(time, Latest):
        return True
    return time.is_zero()


def stamp_now() -> Stamp:
    """Current wall-clock time as a Stamp."""
    return Stamp.from_nsec(time.time_ns())
