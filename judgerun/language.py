"""Languages that the runner can execute."""

from __future__ import annotations

from enum import IntEnum


class Language(IntEnum):
    """A supported language; its wire form is the integer value."""

    RUST1_82 = 1
    GO1_23 = 2
    PYTHON3_13 = 3

    def variant_name(self) -> str:
        """Return the camelCase name used for build attributes and paths."""
        return _VARIANT_NAMES[self]

    @classmethod
    def from_variant_name(cls, name: str) -> Language:
        """Look a language up by its variant name."""
        for language, variant in _VARIANT_NAMES.items():
            if variant == name:
                return language
        raise ValueError(f"unknown language variant name: {name!r}")


_VARIANT_NAMES: dict[Language, str] = {
    Language.RUST1_82: "rust1_82",
    Language.GO1_23: "go1_23",
    Language.PYTHON3_13: "python3_13",
}