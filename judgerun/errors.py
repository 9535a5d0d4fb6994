"""Errors raised while preparing or running a submission."""

from __future__ import annotations


class RunnerError(Exception):
    """An I/O operation needed for a run failed."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"failed io operation: {cause}")