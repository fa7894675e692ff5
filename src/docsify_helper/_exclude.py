"""Exclusion rules, compiled once per scan."""

from __future__ import annotations

import abc
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_WILDCARDS = ("*", "?")


class ExclusionRule(abc.ABC):
    """A single compiled exclusion pattern.

    :param pattern: The pattern as written in the configuration.
    """

    __slots__ = ("pattern",)

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern

    @abc.abstractmethod
    def matches(self, relative_path: str, name: str) -> bool:
        """Return ``True`` if the entry with this path and name is excluded."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pattern!r})"


class LiteralRule(ExclusionRule):
    """Pattern without wildcards.

    Excludes on exact equality with the path or the name, and also when the
    relative path merely contains the pattern. A rule ``"api"`` therefore
    excludes ``docs/rapid.md`` as well.
    """

    __slots__ = ()

    def matches(self, relative_path: str, name: str) -> bool:
        p = self.pattern
        return relative_path == p or name == p or p in relative_path


class WildcardRule(ExclusionRule):
    """Anchored, case-insensitive pattern where ``*`` is any run and ``?`` one character."""

    __slots__ = ("_regex",)

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern)
        self._regex: re.Pattern[str] | None
        try:
            self._regex = re.compile(_translate(pattern), re.IGNORECASE | re.DOTALL)
        except re.error:
            self._regex = None

    def matches(self, relative_path: str, name: str) -> bool:
        if self._regex is None:
            return relative_path == self.pattern or name == self.pattern
        return self._regex.fullmatch(relative_path) is not None or self._regex.fullmatch(name) is not None


def _translate(pattern: str) -> str:
    out: list[str] = []
    for ch in pattern:
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def compile_rule(pattern: str) -> ExclusionRule:
    """Compile a configuration pattern into its matcher."""
    if any(w in pattern for w in _WILDCARDS):
        return WildcardRule(pattern)
    return LiteralRule(pattern)


class ExclusionSet:
    """Immutable collection of compiled exclusion rules.

    :param patterns: Raw patterns from ``sidebar.exclude``.
    """

    __slots__ = ("_rules",)
    _rules: tuple[ExclusionRule, ...]

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        object.__setattr__(self, "_rules", tuple(compile_rule(p) for p in patterns if p))

    def excludes(self, relative_path: str, name: str) -> bool:
        """Return ``True`` if any rule matches the path or the bare name."""
        return any(rule.matches(relative_path, name) for rule in self._rules)

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(r.pattern for r in self._rules)

    def __iter__(self) -> Iterator[ExclusionRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __repr__(self) -> str:
        return f"ExclusionSet({list(self.patterns)!r})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ExclusionSet is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ExclusionSet is immutable")
