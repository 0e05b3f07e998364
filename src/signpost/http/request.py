"""Immutable request value consumed by the router.

The router never reads ambient globals: every registration call is
handed a ``Request`` carrying the transport method, the path and the two
carriers a ``_method`` override can arrive in (form body and query
string). Build one directly, from a URI, or from an ASGI scope.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from signpost._internal.multimap import FieldCarrier
from signpost.http.forms import FormData, is_form_content_type, parse_form_data
from signpost.http.query import QueryParams

Receive = Callable[[], Awaitable[dict[str, Any]]]

DEFAULT_OVERRIDABLE: frozenset[str] = frozenset({"PUT", "DELETE"})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable view of the parts of an HTTP request routing needs.

    ``path`` is the path component only; use ``from_uri`` when holding a
    full request target with a query string.
    """

    method: str
    path: str
    form: FieldCarrier = field(default_factory=FormData)
    query: FieldCarrier = field(default_factory=QueryParams)

    def method_override(
        self,
        field_name: str = "_method",
        overridable: frozenset[str] = DEFAULT_OVERRIDABLE,
    ) -> str | None:
        """Return the simulated method, if the request carries a usable one.

        The form carrier is consulted first; the query string only when the
        form has no non-empty override. The value is uppercased and only
        honoured when it is one of *overridable*.
        """
        value = self.form.get(field_name) or self.query.get(field_name)
        if not value:
            return None
        value = value.upper()
        if value in overridable:
            return value
        return None

    def effective_method(
        self,
        field_name: str = "_method",
        overridable: frozenset[str] = DEFAULT_OVERRIDABLE,
    ) -> str:
        """The method routes are checked against: override, else transport."""
        return self.method_override(field_name, overridable) or self.method.upper()

    # -- Factories --

    @classmethod
    def from_uri(
        cls,
        method: str,
        uri: str,
        form: Mapping[str, str] | FormData | None = None,
    ) -> Request:
        """Create a Request from a request target such as ``/posts/1?_method=delete``."""
        parts = urlsplit(uri)
        if form is None:
            form_data = FormData()
        elif isinstance(form, FormData):
            form_data = form
        else:
            form_data = FormData.from_mapping(form)
        return cls(
            method=method,
            path=parts.path or "/",
            form=form_data,
            query=QueryParams(parts.query),
        )

    @classmethod
    async def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable.

        The body is only consumed for POST requests with a form content
        type, since those are the only ones that can carry an override.
        """
        method = scope["method"]
        content_type = _content_type(scope)

        form: FieldCarrier = FormData()
        if method.upper() == "POST" and is_form_content_type(content_type):
            body = await _read_body(receive)
            form = parse_form_data(body, content_type or "")

        return cls(
            method=method,
            path=scope["path"],
            form=form,
            query=QueryParams(scope.get("query_string", b"")),
        )


async def _read_body(receive: Receive) -> bytes:
    chunks: list[bytes] = []
    while True:
        message = await receive()
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _content_type(scope: dict[str, Any]) -> str | None:
    for name, value in scope.get("headers", ()):
        if name.lower() == b"content-type":
            return value.decode("latin-1")
    return None
