"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from signpost.routing.pattern import DEFAULT_CONSTRAINT


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_path="/blog", case_sensitive=True)
    """

    # Prefix prepended to every registered pattern at match time
    base_path: str = ""

    # Action used when neither the target nor the path names one
    default_action: str = "index"

    # Rule for placeholders without an explicit filter (ASCII word characters)
    default_constraint: str = DEFAULT_CONSTRAINT

    # Paths are compared case-insensitively unless this is set
    case_sensitive: bool = False

    # HTML forms can only send GET/POST; this field simulates the rest
    method_override_field: str = "_method"
    overridable_methods: frozenset[str] = frozenset({"PUT", "DELETE"})
