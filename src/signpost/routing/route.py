"""Route, Target, MatchResult and router state dataclasses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from signpost.routing.pattern import Pattern


@dataclass(frozen=True, slots=True)
class Target:
    """An explicit ``controller#action`` destination.

    ``action`` is ``None`` when the target string names no action; the
    router then falls back to its default action.
    """

    controller: str
    action: str | None = None

    @classmethod
    def parse(cls, value: str) -> Target:
        """Parse ``"posts#show"`` (or just ``"posts"``) into a Target.

        Anything after a second ``#`` is ignored.
        """
        parts = value.split("#")
        action = parts[1] if len(parts) > 1 else ""
        return cls(controller=parts[0], action=action or None)

    def __str__(self) -> str:
        if self.action is None:
            return self.controller
        return f"{self.controller}#{self.action}"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered routing rule.

    ``methods`` empty means any method is accepted. ``target`` ``None``
    means controller and action are derived from the matched path.
    """

    pattern: Pattern
    methods: frozenset[str] = frozenset()
    name: str | None = None
    target: Target | None = None

    @property
    def path(self) -> str:
        """The pattern as it was registered."""
        return self.pattern.source

    @property
    def constraints(self) -> dict[str, str]:
        return self.pattern.constraints

    def accepts(self, method: str) -> bool:
        return not self.methods or method in self.methods


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of a successful route match.

    ``params`` is copied into a read-only mapping, so a result handed
    out by the router cannot be altered through it.
    """

    controller: str
    action: str
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dataclass(frozen=True, slots=True)
class Searching:
    """No route has matched yet; registrations are still evaluated."""


@dataclass(frozen=True, slots=True)
class Resolved:
    """A route has matched. Later registrations only record names."""

    result: MatchResult


RouterState: TypeAlias = Searching | Resolved
