"""Route pattern tokenizer and compiler.

A pattern such as ``/posts/:year/:slug`` is parsed once, at registration
time, into ``Literal`` and ``Placeholder`` tokens. Matching compiles the
tokens into a single anchored regular expression with one named group
per placeholder, so parameter values are read back by group name rather
than by counting capture groups.

Examples::

    "/posts"          -> (Literal("/posts"),)
    "/posts/:id"      -> (Literal("/posts/"), Placeholder("id"))
    "/posts/:id/edit" -> (Literal("/posts/"), Placeholder("id"), Literal("/edit"))
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias

from signpost.errors import InvalidPattern

MARKER = ":"
SEPARATOR = "/"

# ASCII word characters, like PCRE without the u modifier
DEFAULT_CONSTRAINT = r"(?a:\w+)"

_NAME = re.compile(r"\w+", re.ASCII)


@dataclass(frozen=True, slots=True)
class Literal:
    """Fixed text that must appear verbatim in the path."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A named dynamic segment.

    ``constraint`` is the regular expression the captured text must match;
    ``None`` means the router's default rule applies.
    """

    name: str
    constraint: str | None = None

    @property
    def source(self) -> str:
        return f"{MARKER}{self.name}"


Token: TypeAlias = Literal | Placeholder


@dataclass(frozen=True, slots=True)
class Pattern:
    """A parsed route pattern."""

    source: str
    tokens: tuple[Token, ...]

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """Placeholders in left-to-right order."""
        return tuple(t for t in self.tokens if isinstance(t, Placeholder))

    @property
    def constraints(self) -> dict[str, str]:
        """Explicit constraints keyed by placeholder name."""
        return {p.name: p.constraint for p in self.placeholders if p.constraint is not None}

    def to_regex(self, prefix: str = "", default_constraint: str = DEFAULT_CONSTRAINT) -> str:
        """Build the regular expression source for this pattern.

        *prefix* is treated as literal text. A trailing separator is
        dropped so ``/posts/`` and ``/posts`` compile identically; request
        paths are compared with their trailing separators stripped too.
        """
        parts: list[Token] = [Literal(prefix), *self.tokens]
        if isinstance(parts[-1], Literal):
            parts[-1] = Literal(parts[-1].text.rstrip(SEPARATOR))

        regex: list[str] = []
        index = 0
        for token in parts:
            if isinstance(token, Literal):
                regex.append(re.escape(token.text))
            else:
                rule = token.constraint if token.constraint is not None else default_constraint
                regex.append(f"(?P<{_group_name(index)}>{rule})")
                index += 1
        return "".join(regex)

    def compile(
        self,
        prefix: str = "",
        default_constraint: str = DEFAULT_CONSTRAINT,
        *,
        case_sensitive: bool = False,
    ) -> re.Pattern[str]:
        """Compile into a regex meant for ``fullmatch`` against a path."""
        flags = 0 if case_sensitive else re.IGNORECASE
        source = self.to_regex(prefix, default_constraint)
        try:
            return re.compile(source, flags)
        except re.error as exc:
            raise InvalidPattern(self.source, f"does not compile ({exc})") from exc

    def extract(self, match: re.Match[str]) -> dict[str, str]:
        """Pair each placeholder with the text its group captured.

        Groups that did not participate are skipped. When a name repeats,
        the right-most value wins.
        """
        params: dict[str, str] = {}
        for index, placeholder in enumerate(self.placeholders):
            value = match.group(_group_name(index))
            if value is not None:
                params[placeholder.name] = value
        return params

    def expand(self, params: Mapping[str, object]) -> str:
        """Substitute *params* into the pattern, left to right.

        Placeholders without a value stay as their literal ``:name`` text.
        Substituted values are never scanned for markers.
        """
        out: list[str] = []
        for token in self.tokens:
            if isinstance(token, Literal):
                out.append(token.text)
            elif token.name in params:
                out.append(str(params[token.name]))
            else:
                out.append(token.source)
        return "".join(out)


def parse_pattern(source: str, filters: Mapping[str, str] | None = None) -> Pattern:
    """Parse a route pattern string into tokens.

    *filters* maps placeholder names to custom constraint expressions.
    Filters for names the pattern does not use are ignored.

    Raises ``InvalidPattern`` if the pattern does not start with a
    separator, has a marker with no name after it, or has a filter that
    is not a valid regular expression.
    """
    if not source.startswith(SEPARATOR):
        raise InvalidPattern(source, f"must start with {SEPARATOR!r}")

    filters = filters or {}
    tokens: list[Token] = []
    pos = 0
    while True:
        marker = source.find(MARKER, pos)
        if marker == -1:
            break
        name_match = _NAME.match(source, marker + 1)
        if name_match is None:
            raise InvalidPattern(source, f"{MARKER!r} at position {marker} is not followed by a name")
        if marker > pos:
            tokens.append(Literal(source[pos:marker]))
        name = name_match.group()
        tokens.append(Placeholder(name, _check_constraint(source, name, filters.get(name))))
        pos = name_match.end()
    if pos < len(source):
        tokens.append(Literal(source[pos:]))

    return Pattern(source=source, tokens=tuple(tokens))


def _check_constraint(source: str, name: str, constraint: str | None) -> str | None:
    if constraint is None:
        return None
    try:
        re.compile(constraint)
    except re.error as exc:
        raise InvalidPattern(source, f"filter for {name!r} is not a valid expression ({exc})") from exc
    return constraint


def _group_name(index: int) -> str:
    return f"_p{index}"
