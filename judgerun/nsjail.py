"""Building sandboxed command lines for nsjail."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .env import NIX_BIN, NIX_STORE_PATH, NSJAIL_CMD
from .memory import Memory
from .mstime import MsTime


@dataclass
class Command:
    """A program with its arguments and working directory."""

    program: str
    args: list[str] = field(default_factory=list)
    cwd: Path | None = None

    def arg(self, value: Any) -> Command:
        """Append one argument and return the command."""
        if isinstance(value, os.PathLike):
            value = os.fspath(value)
        self.args.append(str(value))
        return self

    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def run(
        self, stdin: bytes | None = None, capture_stdout: bool = False
    ) -> subprocess.CompletedProcess:
        """Run to completion; stderr is always captured."""
        return subprocess.run(
            self.argv(),
            input=stdin,
            stdout=subprocess.PIPE if capture_stdout else None,
            stderr=subprocess.PIPE,
            cwd=self.cwd,
            check=False,
        )


def _write_default_args(command: Command) -> None:
    command.arg("-Mo")
    command.arg("--user").arg("99999")
    command.arg("--group").arg("99999")
    command.arg("--detect_cgroupv2")
    command.arg("--bindmount_ro").arg("/dev/null")
    for flag in (
        "--disable_clone_newnet",
        "--disable_clone_newuser",
        "--disable_clone_newipc",
        "--disable_clone_newuts",
        "--disable_clone_newcgroup",
    ):
        command.arg(flag)
    # virtual memory limit in MB
    command.arg("--rlimit_as").arg("9192")
    command.arg("-R").arg(NIX_STORE_PATH)
    command.arg("-R").arg(NIX_BIN)
    command.arg("--log").arg("nsjail.txt")


class NsJailBuilder:
    """Accumulates nsjail options onto a command."""

    def __init__(self, command: Command) -> None:
        self._command = command
        self._proc_writable: bool | None = None

    @classmethod
    def new(cls) -> NsJailBuilder:
        command = Command(NSJAIL_CMD)
        _write_default_args(command)
        return cls(command)

    @classmethod
    def new_with(cls, command: Command) -> NsJailBuilder:
        """Run nsjail under an existing command, such as a timer."""
        command.arg(NSJAIL_CMD)
        _write_default_args(command)
        return cls(command)

    def time_limit(self, time_limit: MsTime) -> NsJailBuilder:
        self._command.arg("--time_limit").arg(time_limit.as_seconds_ceil())
        return self

    def memory_limit(self, memory_limit: Memory) -> NsJailBuilder:
        self._command.arg("--cgroup_mem_max").arg(memory_limit.as_bytes())
        return self

    def env(self, key: str, value: str) -> NsJailBuilder:
        self._command.arg("--env").arg(f"{key}={value}")
        return self

    def cwd(self, cwd: str | os.PathLike) -> NsJailBuilder:
        self._command.arg("--chroot").arg(cwd)
        self._command.cwd = Path(cwd)
        self.env("HOME", "/")
        return self

    def tmpfsmount(self, mount_point: str, memory: Memory) -> NsJailBuilder:
        self._command.arg("-m").arg(
            f"none:{mount_point}:tmpfs:size={memory.as_bytes()}"
        )
        self._command.arg("--env").arg(f"TMPDIR={mount_point}")
        return self

    def mount_read_only(self, path: str) -> NsJailBuilder:
        self._command.arg("-R").arg(path)
        return self

    def writable(self) -> NsJailBuilder:
        self._command.arg("--rw")
        return self

    def arg(self, value: Any) -> NsJailBuilder:
        self._command.arg(value)
        return self

    def proc_writable(self, is_writable: bool) -> NsJailBuilder:
        self._proc_writable = is_writable
        return self

    def build(self) -> Command:
        """Finish the options; the sandboxed program follows ``--``."""
        command = self._command
        if self._proc_writable is None:
            command.arg("--disable_proc")
        elif self._proc_writable:
            command.arg("--proc_rw")
        command.arg("--")
        return command