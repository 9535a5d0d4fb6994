"""Outcomes of a run, with their externally tagged JSON form."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

from .memory import Memory
from .mstime import MsTime

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class RunnerState:
    """Base class of every run outcome."""

    tag: ClassVar[str]

    def to_dict(self) -> Any:
        """Return the JSON value; a state without fields is a bare string."""
        fields = dataclasses.fields(self)  # type: ignore[arg-type]
        if not fields:
            return self.tag
        return {self.tag: {f.name: _encode(getattr(self, f.name)) for f in fields}}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class Success(RunnerState):
    tag: ClassVar[str] = "Success"
    stdout: str
    max_memory_usage: Memory
    ms_time_elapsed: MsTime


@dataclass(frozen=True)
class RuntimeFailure(RunnerState):
    tag: ClassVar[str] = "RuntimeError"
    stderr: str
    exit_code: int
    max_memory_usage: Memory
    ms_time_elapsed: MsTime


@dataclass(frozen=True)
class Timeout(RunnerState):
    tag: ClassVar[str] = "Timeout"
    ms_time_elapsed: MsTime


@dataclass(frozen=True)
class MemoryLimit(RunnerState):
    tag: ClassVar[str] = "MemoryLimit"
    max_memory_usage: Memory


@dataclass(frozen=True)
class CompileError(RunnerState):
    tag: ClassVar[str] = "CompileError"
    stderr: str


@dataclass(frozen=True)
class InternalError(RunnerState):
    tag: ClassVar[str] = "InternalError"


_VARIANTS: dict[str, type[RunnerState]] = {
    cls.tag: cls
    for cls in (Success, RuntimeFailure, Timeout, MemoryLimit, CompileError, InternalError)
}


def _encode(value: Any) -> Any:
    if isinstance(value, Memory):
        return str(value)
    if isinstance(value, MsTime):
        return value.as_ms()
    return value


def _decode_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _decode_i32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"integer out of range: {value}")
    return value


def _decode_memory(value: Any) -> Memory:
    return Memory.parse(_decode_str(value))


def _decode_mstime(value: Any) -> MsTime:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected milliseconds as an integer, got {value!r}")
    return MsTime.from_ms(value)


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "stdout": _decode_str,
    "stderr": _decode_str,
    "exit_code": _decode_i32,
    "max_memory_usage": _decode_memory,
    "ms_time_elapsed": _decode_mstime,
}


def state_from_dict(data: Any) -> RunnerState:
    """Build a state from its externally tagged JSON value."""
    if isinstance(data, str):
        tag, payload = data, None
    elif isinstance(data, dict) and len(data) == 1:
        ((tag, payload),) = data.items()
    else:
        raise ValueError(f"expected a tagged runner state, got {data!r}")

    cls = _VARIANTS.get(tag)
    if cls is None:
        raise ValueError(f"unknown runner state variant: {tag!r}")

    fields = dataclasses.fields(cls)  # type: ignore[arg-type]
    if not fields:
        if payload is not None:
            raise ValueError(f"variant {tag} takes no fields")
        return cls()
    if not isinstance(payload, dict):
        raise ValueError(f"variant {tag} expects an object of fields")

    values = {}
    for f in fields:
        if f.name not in payload:
            raise ValueError(f"missing field `{f.name}` in variant {tag}")
        values[f.name] = _DECODERS[f.name](payload[f.name])
    return cls(**values)


def state_from_json(text: str) -> RunnerState:
    return state_from_dict(json.loads(text))