"""Rule options: spacing mode, exception categories and their validation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from parenspace.errors import ConfigError


class Mode(Enum):
    ALWAYS = "always"  # require a space inside parens
    NEVER = "never"  # forbid a space inside parens


# Exception category names accepted in the "exceptions" option
BRACE = "{}"
BRACKET = "[]"
PAREN = "()"
EMPTY = "empty"
PAREN_STRING = "(STRING)"

EXCEPTION_NAMES: tuple[str, ...] = (BRACE, BRACKET, PAREN, EMPTY, PAREN_STRING)


@dataclass(frozen=True, slots=True)
class ExceptionSet:
    """Which adjacent-token categories are exempt from the global mode."""

    brace: bool = False
    bracket: bool = False
    paren: bool = False
    empty: bool = False
    paren_string: bool = False

    @classmethod
    def from_names(cls, names: Sequence[str]) -> ExceptionSet:
        return cls(
            brace=BRACE in names,
            bracket=BRACKET in names,
            paren=PAREN in names,
            empty=EMPTY in names,
            paren_string=PAREN_STRING in names,
        )

    def openers(self) -> frozenset[str]:
        """Values that exempt an opening paren when they follow it."""
        values = []
        if self.brace:
            values.append("{")
        if self.bracket:
            values.append("[")
        if self.paren:
            values.append("(")
        if self.empty:
            values.append(")")
        return frozenset(values)

    def closers(self) -> frozenset[str]:
        """Values that exempt a closing paren when they precede it."""
        values = []
        if self.brace:
            values.append("}")
        if self.bracket:
            values.append("]")
        if self.paren:
            values.append(")")
        if self.empty:
            values.append("(")
        return frozenset(values)


@dataclass(frozen=True, slots=True)
class RuleOptions:
    """Immutable per-scan configuration with the derived exception sets."""

    mode: Mode = Mode.NEVER
    exceptions: ExceptionSet = field(default_factory=ExceptionSet)
    openers: frozenset[str] = field(init=False)
    closers: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "openers", self.exceptions.openers())
        object.__setattr__(self, "closers", self.exceptions.closers())

    @property
    def always(self) -> bool:
        return self.mode is Mode.ALWAYS

    @classmethod
    def from_options(cls, options: Sequence[Any] = ()) -> RuleOptions:
        """Build from the host option list ``[mode, {"exceptions": [...]}]``.

        The list is assumed to have passed ``validate_options``. A missing
        or non-"always" mode means never.
        """
        mode = Mode.ALWAYS if len(options) > 0 and options[0] == "always" else Mode.NEVER
        names: Sequence[str] = []
        if len(options) == 2:
            names = options[1].get("exceptions", [])
        return cls(mode=mode, exceptions=ExceptionSet.from_names(names))


def validate_options(options: Sequence[Any]) -> None:
    """Check a host option list against the rule's option schema.

    Raises ConfigError on the first problem found.
    """
    if isinstance(options, (str, bytes)) or not isinstance(options, Sequence):
        raise ConfigError("expected a list of at most two items")
    if len(options) > 2:
        raise ConfigError(f"expected at most 2 items, got {len(options)}")

    if len(options) >= 1:
        mode = options[0]
        if mode not in ("always", "never"):
            raise ConfigError(f"mode must be 'always' or 'never', got {mode!r}", "options[0]")

    if len(options) == 2:
        extra = options[1]
        if not isinstance(extra, Mapping):
            raise ConfigError("expected an object", "options[1]")
        for key in extra:
            if key != "exceptions":
                raise ConfigError(f"unexpected property {key!r}", "options[1]")
        names = extra.get("exceptions", [])
        if isinstance(names, (str, bytes)) or not isinstance(names, Sequence):
            raise ConfigError("expected an array", "options[1].exceptions")
        seen: set[str] = set()
        for i, name in enumerate(names):
            if name not in EXCEPTION_NAMES:
                allowed = ", ".join(repr(n) for n in EXCEPTION_NAMES)
                raise ConfigError(
                    f"{name!r} is not one of {allowed}", f"options[1].exceptions[{i}]"
                )
            if name in seen:
                raise ConfigError(f"duplicate item {name!r}", f"options[1].exceptions[{i}]")
            seen.add(name)
