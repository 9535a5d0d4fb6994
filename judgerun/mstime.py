"""Durations held in whole milliseconds."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


@dataclass(frozen=True, order=True)
class MsTime:
    """A non-negative duration in milliseconds."""

    ms: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.ms, bool) or not isinstance(self.ms, int):
            raise TypeError("time must be an integer number of milliseconds")
        if not 0 <= self.ms <= _U64_MAX:
            raise ValueError(f"time out of range: {self.ms}")

    @classmethod
    def new(cls, seconds: int, ms: int) -> MsTime:
        return cls(seconds * 1000 + ms)

    @classmethod
    def from_ms(cls, ms: int) -> MsTime:
        return cls(ms)

    @classmethod
    def from_seconds(cls, seconds: int) -> MsTime:
        return cls(seconds * 1000)

    def as_ms(self) -> int:
        return self.ms

    def as_seconds(self) -> float:
        return self.ms / 1000.0

    def as_seconds_ceil(self) -> int:
        return -(-self.ms // 1000)

    def add_seconds(self, seconds: int) -> MsTime:
        return MsTime(self.ms + seconds * 1000)

    def add_ms(self, ms: int) -> MsTime:
        return MsTime(self.ms + ms)

    @classmethod
    def parse_mm_ss_ms(cls, text: str) -> MsTime | None:
        """Parse ``minutes:seconds.millis``; return None when malformed."""
        parts = text.split(":")
        minutes = _parse_u64(parts[0])
        if minutes is None or len(parts) < 2:
            return None
        ss_ms = parts[1].split(".")
        if len(ss_ms) != 2:
            return None
        seconds = _parse_u64(ss_ms[0])
        ms = _parse_u64(ss_ms[1])
        if seconds is None or ms is None or ms > 999:
            return None
        return cls.new(minutes * 60 + seconds, ms)

    def __repr__(self) -> str:
        return f"MsTime('{self.as_seconds():.3f}')"


assert math  # keeps the import explicit for readers of as_seconds