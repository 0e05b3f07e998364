"""Form data parsing — URL-encoded and multipart.

The router only ever reads one field from a form (the ``_method``
override). Undecodable bytes are replaced rather than rejected, so a
mangled body can still be routed.

``python-multipart`` is an optional dependency (``pip install signpost[forms]``).
URL-encoded forms use stdlib ``urllib.parse`` with no extra dependency.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from signpost.errors import ConfigurationError


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key.
    File parts of a multipart body are not kept; only their field
    names would be of interest to routing, and they never carry
    ``_method``.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> FormData:
        """Build form data from a plain single-valued mapping."""
        return cls({key: [value] for key, value in mapping.items()})


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Parsed FormData instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If content type is not a supported form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def is_form_content_type(content_type: str | None) -> bool:
    """True if *content_type* is one ``parse_form_data`` understands."""
    if not content_type:
        return False
    ct_lower = content_type.lower().split(";")[0].strip()
    return ct_lower in ("application/x-www-form-urlencoded", "multipart/form-data")


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data using stdlib."""
    from urllib.parse import parse_qs

    parsed = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    return FormData(parsed)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data using python-multipart.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    """
    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install signpost[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}

    # Track current part state
    pending_header = ""
    current_data = bytearray()
    current_field_name: str | None = None
    current_is_file = False

    def on_part_begin() -> None:
        nonlocal current_data, current_field_name, current_is_file
        current_data = bytearray()
        current_field_name = None
        current_is_file = False

    def on_part_data(data_chunk: bytes, start: int, end: int) -> None:
        current_data.extend(data_chunk[start:end])

    def on_part_end() -> None:
        if current_field_name is None or current_is_file:
            return
        value = current_data.decode("utf-8", errors="replace")
        data.setdefault(current_field_name, []).append(value)

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal current_field_name, current_is_file
        if pending_header != "content-disposition":
            return
        _, params = parse_options_header(hdata[start:end])
        name = params.get(b"name")
        if name is not None:
            current_field_name = name.decode("utf-8")
        current_is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data)
