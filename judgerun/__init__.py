"""Sandboxed code runner: run requests, verdicts, limits and an HTTP service."""

__version__ = "0.1.0"