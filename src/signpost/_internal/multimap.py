"""The read-only interface ``Request`` needs from its form and query carriers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FieldCarrier(Protocol):
    """Request data the ``_method`` override can be read from.

    Both ``FormData`` and ``QueryParams`` keep every submitted value but
    expose only the first one per field; that is all routing looks at.
    """

    def __contains__(self, key: object) -> bool: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
