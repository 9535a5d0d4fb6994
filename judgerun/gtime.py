"""Measuring memory and wall time with GNU time."""

from __future__ import annotations

import os
import re
from pathlib import Path

from .env import TIME_CMD
from .memory import Memory
from .mstime import MsTime
from .nsjail import Command

TIME_TXT = "time.txt"

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _write_args(command: Command) -> None:
    command.arg("--quiet").arg("--format").arg("%M\n%E").arg("--output").arg(TIME_TXT)


def time_command() -> Command:
    """Return a fresh command that starts with the timer."""
    command = Command(TIME_CMD)
    _write_args(command)
    return command


def append_time(command: Command) -> None:
    """Append the timer and its options to an existing command."""
    command.arg(TIME_CMD)
    _write_args(command)


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def read_usage(parent_dir: str | os.PathLike) -> tuple[Memory, MsTime]:
    """Read peak memory and elapsed time from the timer's output file."""
    text = (Path(parent_dir) / TIME_TXT).read_text()
    lines = _lines(text)
    if not lines:
        raise ValueError("Missing memory line")
    if not _UNSIGNED.fullmatch(lines[0]) or int(lines[0]) > _U64_MAX:
        raise ValueError("Invalid memory line")
    memory = Memory.from_kilobytes(int(lines[0]))
    if len(lines) < 2:
        raise ValueError("Missing time line")
    elapsed = MsTime.parse_mm_ss_ms(lines[1])
    if elapsed is None:
        raise ValueError("Invalid time line")
    return memory, elapsed