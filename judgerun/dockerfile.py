"""Generating the Dockerfile fragment that builds every toolchain."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from .env import RUNNER_PATH, RUNNING_PATH
from .language import Language

DEFAULT_PATH = "Dockerfile.build"


def render_dockerfile() -> str:
    """Return the text of the generated build fragment."""
    builds = [
        f"nix-build /default.nix -A {name} --out-link {RUNNER_PATH}/{name}"
        for name in (language.variant_name() for language in Language)
    ]
    build = " && \\ \n  ".join(builds)
    mkdirs = (
        f"mkdir -p {RUNNING_PATH} && "
        f"mkdir -p {RUNNER_PATH} && "
        f"chown -R 99999:99999 {RUNNING_PATH}"
    )
    return (
        "# This file is auto-generated. Do not edit it directly.\n"
        f"RUN {mkdirs} && \\\n  {build}\n"
    )


def write_dockerfile(path: str | os.PathLike = DEFAULT_PATH) -> bool:
    """Write the fragment unless it is already current; return whether it was written."""
    target = Path(path)
    text = render_dockerfile().encode()
    try:
        if target.read_bytes() == text:
            return False
    except OSError:
        pass
    target.write_bytes(text)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate the toolchain build fragment.")
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH)
    args = parser.parse_args(argv)
    write_dockerfile(args.path)
    return 0