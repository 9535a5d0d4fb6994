"""Request and response bodies of the run endpoint."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .language import Language
from .memory import Memory
from .mstime import MsTime
from .state import RunnerState, state_from_dict


def _field(data: dict, name: str) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _str_field(data: dict, name: str) -> str:
    value = _field(data, name)
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


@dataclass(frozen=True)
class RunnerRequest:
    """Code to run, with its input and limits."""

    lang: Language
    code: str
    ms_time_limit: MsTime
    memory_limit: Memory
    stdin: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "lang": int(self.lang),
            "code": self.code,
            "ms_time_limit": self.ms_time_limit.as_ms(),
            "memory_limit": str(self.memory_limit),
            "stdin": self.stdin,
        }

    @classmethod
    def from_dict(cls, data: Any) -> RunnerRequest:
        if not isinstance(data, dict):
            raise ValueError("runner request must be an object")
        lang = _field(data, "lang")
        if isinstance(lang, bool) or not isinstance(lang, int):
            raise ValueError("field `lang` must be an integer")
        ms_limit = _field(data, "ms_time_limit")
        if isinstance(ms_limit, bool) or not isinstance(ms_limit, int):
            raise ValueError("field `ms_time_limit` must be an integer")
        return cls(
            lang=Language(lang),
            code=_str_field(data, "code"),
            ms_time_limit=MsTime.from_ms(ms_limit),
            memory_limit=Memory.parse(_str_field(data, "memory_limit")),
            stdin=_str_field(data, "stdin"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> RunnerRequest:
        return cls.from_dict(json.loads(text))


@dataclass(frozen=True)
class RunnerResponse:
    """The outcome reported for a request."""

    state: RunnerState

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> RunnerResponse:
        if not isinstance(data, dict):
            raise ValueError("runner response must be an object")
        return cls(state=state_from_dict(_field(data, "state")))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> RunnerResponse:
        return cls.from_dict(json.loads(text))