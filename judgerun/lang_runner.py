"""How each language is compiled and started."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from .env import RUNNER_PATH
from .language import Language

RunCmd = Union[str, Callable[[str], str]]


@dataclass(frozen=True)
class LangRunnerOption:
    """Extra settings for a language's compile step."""

    compile_env: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class LangRunner:
    """Source file, optional compile command and run command of a language.

    A callable ``run_cmd`` builds the command from the code itself; such a
    runner writes no source file.
    """

    run_cmd: RunCmd
    file_name: str | None = None
    compile_cmd: str | None = None
    option: LangRunnerOption | None = None

    def __post_init__(self) -> None:
        if callable(self.run_cmd):
            if self.file_name is not None or self.compile_cmd is not None:
                raise ValueError("an inline runner has no source file or compile step")
        elif self.file_name is None:
            raise ValueError("a runner with a fixed command needs a source file")

    def command_for(self, code: str) -> str:
        """Return the shell command that runs ``code``."""
        if callable(self.run_cmd):
            return self.run_cmd(code)
        return self.run_cmd


_RUNNERS: dict[Language, LangRunner] = {
    Language.RUST1_82: LangRunner(
        file_name="main.rs",
        compile_cmd="rustc -O main.rs -o main",
        run_cmd="./main",
    ),
    Language.GO1_23: LangRunner(
        file_name="main.go",
        compile_cmd="go build -o main main.go",
        run_cmd="./main",
    ),
    Language.PYTHON3_13: LangRunner(
        file_name="main.py",
        run_cmd="python main.py",
    ),
}


def runner_for(language: Language) -> LangRunner:
    return _RUNNERS[Language(language)]


def runner_path(language: Language) -> str:
    """Directory holding the language's toolchain."""
    return f"{RUNNER_PATH}/{Language(language).variant_name()}"


def bin_path(language: Language) -> str:
    return f"{runner_path(language)}/bin"