"""Signpost exception hierarchy.

Shared across the pattern tokenizer, Router and request helpers so every
module raises and catches the same types. Ordinary match failures are
not exceptions: ``Router.match`` returns ``False`` and ``Router.reverse``
returns ``None``.
"""

from dataclasses import dataclass


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when router configuration is invalid.

    Typically raised while routes are being registered.
    """


class InvalidPattern(ConfigurationError):  # noqa: N818
    """A route pattern could not be parsed or compiled.

    Attributes:
        pattern: The offending pattern string.
        reason: Human-readable description of what is wrong with it.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(SignpostError):
    """An error that maps directly to an HTTP status code.

    Raised by ``Router.resolve()`` so the dispatcher can turn a failed
    lookup into a response without re-deriving 404 vs 405.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no registered route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — a route matched the path but not the HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )

    @property
    def allowed(self) -> frozenset[str]:
        """The methods accepted by the routes whose path matched."""
        _, allow_value = self.headers[0]
        return frozenset(m for m in allow_value.split(", ") if m)
