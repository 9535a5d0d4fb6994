"""Runner configuration and the fixed paths of the runner image."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from .memory import Memory
from .mstime import MsTime

RUNNER_PATH = "/runner"
RUNNING_PATH = "/running"
NIX_STORE_PATH = "/nix/store"
NIX_BIN = "/global/bin"
SH_CMD = f"{NIX_BIN}/sh"
NSJAIL_CMD = f"{NIX_BIN}/nsjail"
TIME_CMD = f"{NIX_BIN}/time"

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_u64(name: str, text: str) -> int:
    if not _UNSIGNED.fullmatch(text) or int(text) > _U64_MAX:
        raise ValueError(f"invalid value for {name}: {text!r}")
    return int(text)


def _require(environ: Mapping[str, str], name: str) -> str:
    try:
        return environ[name]
    except KeyError:
        raise ValueError(f"missing environment variable {name}") from None


@dataclass(frozen=True)
class RunnerOption:
    """Limits applied to the compile step."""

    compile_time_limit_seconds: MsTime
    compile_memory_limit_megabytes: Memory

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> RunnerOption:
        """Read the options from environment variables."""
        env = os.environ if environ is None else environ
        time_name = "COMPILE_TIME_LIMIT_SECONDS"
        memory_name = "COMPILE_MEMORY_LIMIT_MEGABYTES"
        seconds = _parse_u64(time_name, _require(env, time_name))
        megabytes = _parse_u64(memory_name, _require(env, memory_name))
        return cls(
            compile_time_limit_seconds=MsTime.from_seconds(seconds),
            compile_memory_limit_megabytes=Memory.from_megabytes(megabytes),
        )