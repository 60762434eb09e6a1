"""Per-dispatch request context.

``RequestContext`` is the flat set of request parameters the dispatcher
works from: the query string for GET, the url-encoded body otherwise.
Created fresh by each ``dispatch()`` and discarded when the handler returns.

The pre-dispatch hook sees the same parameters through ``ContextParams``,
an attribute view with no attributes of its own.
"""

from collections.abc import Iterator, Mapping

from ajax_dispatch.errors import BodyReadError
from ajax_dispatch.http.methods import ensure_supported_method
from ajax_dispatch.http.params import parse_params
from ajax_dispatch.http.request import Request


class ContextParams:
    """Read-only attribute view over request parameters.

    Every public attribute is a request parameter, so a parameter named
    ``method`` or ``get`` is never shadowed::

        params.token
        params["token"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str]) -> None:
        object.__setattr__(self, "_data", dict(data))

    def __getattr__(self, name: str) -> str:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            msg = f"request context has no parameter {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "ContextParams is read-only"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = "ContextParams is read-only"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"ContextParams({self._data!r})"


class RequestContext(Mapping[str, str]):
    """Immutable request parameters.

    Key order is the order in which parameters appeared in the request.
    """

    __slots__ = ("_data", "method")

    def __init__(self, method: str, data: Mapping[str, str]) -> None:
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "_data", dict(data))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RequestContext is read-only"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = "RequestContext is read-only"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"RequestContext({self.method}, {self._data!r})"

    def params(self) -> ContextParams:
        """Attribute view of the parameters, as handed to the before hook."""
        return ContextParams(self._data)

    def values_except(self, key: str) -> list[str]:
        """Return every value in key order, leaving out the entry named *key*."""
        return [value for name, value in self._data.items() if name != key]


def build_context(request: Request) -> RequestContext:
    """Build the ``RequestContext`` for *request*.

    GET reads the query string. Every other supported method reads the raw
    body and parses it as ``application/x-www-form-urlencoded``.

    Raises:
        UnsupportedMethodError: If the request method is not supported.
        BodyReadError: If a non-GET body cannot be read or is empty.
    """
    method = ensure_supported_method(request.method)

    if method == "GET":
        return RequestContext(method, request.query)

    raw = request.read_body()
    if not raw:
        msg = "Unable to read the raw data from the HTTP request."
        raise BodyReadError(msg)

    return RequestContext(method, parse_params(raw))
