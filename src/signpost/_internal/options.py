"""Helpers for the comma-separated option strings routing calls accept."""

from collections.abc import Iterable


def split_options(value: str | Iterable[str] | None, *, upper: bool = False) -> tuple[str, ...]:
    """Split ``"get, post"`` (or an iterable of strings) into clean items.

    Whitespace around items is dropped, as are empty items.
    """
    if value is None:
        return ()
    items = value.split(",") if isinstance(value, str) else value
    cleaned = (item.strip() for item in items)
    return tuple(item.upper() if upper else item for item in cleaned if item)
