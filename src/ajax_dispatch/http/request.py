"""Immutable HTTP request.

The explicit request object handed to ``Dispatcher.dispatch()``. Hosts
build one per inbound request; nothing in the dispatcher reads ambient
request state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ajax_dispatch._internal.asgi import Receive, Scope
from ajax_dispatch.errors import BodyReadError, BodyTooLargeError
from ajax_dispatch.http.headers import Headers
from ajax_dispatch.http.params import QueryParams

BodySource = bytes | str | Callable[[], bytes | str | None] | None


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``headers`` is ``None`` when the host cannot provide request headers at
    all, which is distinct from a header being absent. The body is read at
    most once through ``read_body()``.
    """

    method: str
    headers: Headers | None
    query: QueryParams

    # Private: raw body bytes, or a zero-argument reader called once
    _body: BodySource = field(default=None, repr=False, compare=False)

    # Private: mutable cache for the body once read
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def read_body(self) -> bytes:
        """Read the full raw request body.

        Result is cached — a reader callable is consumed once, then the same
        bytes are returned on subsequent calls.

        Raises:
            BodyReadError: If the body reader fails.
        """
        if "_body" in self._cache:
            return self._cache["_body"]

        source = self._body
        if callable(source):
            try:
                source = source()
            except OSError as exc:
                raise BodyReadError(
                    f"Unable to read the raw data from the HTTP request: {exc}"
                ) from exc

        if source is None:
            result = b""
        elif isinstance(source, str):
            result = source.encode("utf-8")
        else:
            result = bytes(source)

        self._cache["_body"] = result
        return result

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | Headers | None = (),
        query: str | bytes | Mapping[str, str] = b"",
        body: BodySource = None,
    ) -> Request:
        """Create a Request from plain Python values.

        Usage::

            request = Request.build(
                "POST",
                headers={"X-Requested-With": "XMLHttpRequest"},
                body=b"handler=save&title=Hello",
            )

        Pass ``headers=None`` to model a host that cannot retrieve headers.
        """
        if headers is None or isinstance(headers, Headers):
            parsed_headers = headers
        else:
            parsed_headers = Headers.from_pairs(headers)

        if isinstance(query, Mapping):
            parsed_query = QueryParams.from_mapping(query)
        else:
            parsed_query = QueryParams(query)

        return cls(method=method, headers=parsed_headers, query=parsed_query, _body=body)

    @classmethod
    async def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        *,
        max_body_size: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope, reading the body eagerly.

        Handlers run synchronously, so the body is pulled off the ASGI
        receive channel before dispatch begins.

        Raises:
            BodyTooLargeError: If the body exceeds *max_body_size* bytes.
        """
        chunks: list[bytes] = []
        size = 0
        if scope.get("method", "GET") != "GET":
            while True:
                message = await receive()
                chunk = message.get("body", b"")
                if chunk:
                    size += len(chunk)
                    if max_body_size is not None and size > max_body_size:
                        raise BodyTooLargeError(max_body_size)
                    chunks.append(chunk)
                if not message.get("more_body", False):
                    break

        return cls(
            method=scope["method"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            _body=b"".join(chunks),
        )
