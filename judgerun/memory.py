"""Memory amounts with a compact B/K/M text form."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

_U64_MAX = 2**64 - 1
_KIB = 1024
_MIB = 1024 * 1024
_UNSIGNED = re.compile(r"\+?[0-9]+")


class MemoryParseError(ValueError):
    """Raised when a memory string cannot be parsed."""


class InvalidSuffixError(MemoryParseError):
    """The unit suffix is not B, K or M."""

    def __init__(self, suffix: str) -> None:
        self.suffix = suffix
        super().__init__(f"invalid suffix: {suffix} is not a valid suffix")


class InvalidNumberError(MemoryParseError):
    """The numeric part is not an unsigned 64-bit integer."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"invalid number: {reason}")


class ShortLengthError(MemoryParseError):
    """The string is shorter than two characters."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"invalid string: {text} is too short. Must be at least 2 characters"
        )


def _parse_u64(text: str) -> int:
    if not text:
        raise InvalidNumberError(text, "cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise InvalidNumberError(text, "invalid digit found in string")
    value = int(text)
    if value > _U64_MAX:
        raise InvalidNumberError(text, "number too large to fit in target type")
    return value


@dataclass(frozen=True, order=True)
class Memory:
    """An amount of memory, held in bytes."""

    value: int = field(default=0)

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("memory must be an integer number of bytes")
        if not 0 <= self.value <= _U64_MAX:
            raise ValueError(f"memory out of range: {self.value}")

    @classmethod
    def from_bytes(cls, value: int) -> Memory:
        return cls(value)

    @classmethod
    def from_kilobytes(cls, value: int) -> Memory:
        return cls(value * _KIB)

    @classmethod
    def from_megabytes(cls, value: int) -> Memory:
        return cls(value * _MIB)

    def as_bytes(self) -> int:
        return self.value

    def as_kilobytes(self) -> int:
        return self.value // _KIB

    def as_megabytes(self) -> int:
        return self.value // _MIB

    def add_bytes(self, value: int) -> Memory:
        return Memory(self.value + value)

    def add_kilobytes(self, value: int) -> Memory:
        return Memory(self.value + value * _KIB)

    def add_megabytes(self, value: int) -> Memory:
        return Memory(self.value + value * _MIB)

    @classmethod
    def parse(cls, text: str) -> Memory:
        """Parse strings such as ``10M``, ``512K`` or ``64B``."""
        if len(text) < 2:
            raise ShortLengthError(text)
        number, suffix = text[:-1], text[-1]
        amount = _parse_u64(number)
        if suffix == "B":
            return cls.from_bytes(amount)
        if suffix == "K":
            return cls.from_kilobytes(amount)
        if suffix == "M":
            return cls.from_megabytes(amount)
        raise InvalidSuffixError(suffix)

    def to_json(self) -> str:
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, text: str) -> Memory:
        value = json.loads(text)
        if not isinstance(value, str):
            raise ValueError(f"expected a memory string, got {value!r}")
        return cls.parse(value)

    def __str__(self) -> str:
        if self.as_megabytes() > 0:
            return f"{self.as_megabytes()}M"
        if self.as_kilobytes() > 0:
            return f"{self.as_kilobytes()}K"
        return f"{self.as_bytes()}B"

    def __repr__(self) -> str:
        return f"Memory({str(self)!r})"