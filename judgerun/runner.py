"""Compiling and running a submission inside the sandbox."""

from __future__ import annotations

import logging
import os
import secrets
import time
from pathlib import Path

from .env import RUNNING_PATH, SH_CMD, RunnerOption
from .errors import RunnerError
from .gtime import read_usage, time_command
from .lang_runner import bin_path, runner_for, runner_path
from .memory import Memory
from .mstime import MsTime
from .state import (
    CompileError,
    MemoryLimit,
    RuntimeFailure,
    Success,
    Timeout,
)
from .nsjail import NsJailBuilder
from .web import RunnerRequest, RunnerResponse

_log = logging.getLogger(__name__)

SANDBOX_ID = 99999
_SIGNAL_EXIT_CODE = 137
_CROCKFORD = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


def _new_ulid() -> str:
    """Return a new ULID: 48 bits of milliseconds then 80 random bits."""
    timestamp = (time.time_ns() // 1_000_000) & ((1 << 48) - 1)
    value = (timestamp << 80) | int.from_bytes(secrets.token_bytes(10), "big")
    chars = []
    for _ in range(26):
        chars.append(_CROCKFORD[value & 31])
        value >>= 5
    return "".join(reversed(chars))


def _create_dir(uid: str) -> Path:
    current_dir = Path(RUNNING_PATH) / uid
    current_dir.mkdir()
    os.chown(current_dir, SANDBOX_ID, SANDBOX_ID)
    return current_dir


def _usage(current_dir: Path) -> tuple[Memory, MsTime]:
    try:
        return read_usage(current_dir)
    except ValueError as exc:
        raise OSError(str(exc)) from exc


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def run(request: RunnerRequest, option: RunnerOption) -> RunnerResponse:
    """Compile and run the request's code; raise RunnerError on I/O failure."""
    try:
        return _run(request, option)
    except OSError as exc:
        raise RunnerError(exc) from exc


def _run(request: RunnerRequest, option: RunnerOption) -> RunnerResponse:
    _log.debug("Started runner: %r", request)
    lang_runner = runner_for(request.lang)
    current_dir = _create_dir(_new_ulid())
    _log.debug("Starting runner in directory: %s", current_dir)

    if lang_runner.file_name is not None:
        path = current_dir / lang_runner.file_name
        _log.debug("Writing to File: %s", path)
        path.write_text(request.code, encoding="utf-8")

    lang_runner_path = runner_path(request.lang)
    lang_bin_path = bin_path(request.lang)

    if lang_runner.compile_cmd is not None:
        _log.debug("Compile command: %s", lang_runner.compile_cmd)
        builder = (
            NsJailBuilder.new_with(time_command())
            .time_limit(option.compile_time_limit_seconds)
            .memory_limit(option.compile_memory_limit_megabytes)
            .proc_writable(True)
            .arg("--rlimit_fsize")
            .arg("100")
            .arg("--rlimit_nofile")
            .arg("128")
            .cwd(current_dir)
            .env("PATH", lang_bin_path)
            .mount_read_only(lang_runner_path)
            .tmpfsmount("/tmp", Memory.from_megabytes(512))
            .writable()
        )
        if lang_runner.option is not None:
            for key, value in lang_runner.option.compile_env:
                builder.env(key, value)

        command = builder.build()
        command.arg(SH_CMD).arg("-c").arg(lang_runner.compile_cmd)
        _log.debug("Compile Command: %r", command)
        output = command.run()
        memory, elapsed = _usage(current_dir)
        _log.debug("Compile Memory: %r, Time: %r", memory, elapsed)
        if output.returncode != 0:
            return RunnerResponse(CompileError(stderr=_decode(output.stderr)))

    run_cmd = lang_runner.command_for(request.code)

    command = (
        NsJailBuilder.new_with(time_command())
        .env("PATH", lang_bin_path)
        .mount_read_only(lang_runner_path)
        .time_limit(request.ms_time_limit.add_seconds(1))
        .memory_limit(request.memory_limit.add_megabytes(1))
        .cwd(current_dir)
        .build()
    )
    command.arg(SH_CMD).arg("-c").arg(run_cmd)
    _log.debug("Run command: %r", command)
    output = command.run(stdin=request.stdin.encode("utf-8"), capture_stdout=True)
    memory, elapsed = _usage(current_dir)
    _log.debug("Run Memory: %r, Time: %r", memory, elapsed)

    if elapsed > request.ms_time_limit:
        return RunnerResponse(Timeout(ms_time_elapsed=elapsed))

    if memory > request.memory_limit:
        return RunnerResponse(MemoryLimit(max_memory_usage=memory))

    if output.returncode != 0:
        exit_code = output.returncode if output.returncode > 0 else _SIGNAL_EXIT_CODE
        return RunnerResponse(
            RuntimeFailure(
                stderr=_decode(output.stderr),
                exit_code=exit_code,
                max_memory_usage=memory,
                ms_time_elapsed=elapsed,
            )
        )

    return RunnerResponse(
        Success(
            stdout=_decode(output.stdout),
            max_memory_usage=memory,
            ms_time_elapsed=elapsed,
        )
    )