"""URL-encoded parameter parsing.

Query strings and ``application/x-www-form-urlencoded`` bodies share one
parser. The result is flat: one string value per name, names kept in the
order they first appear, and a repeated name keeps its last value.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


def parse_params(raw: bytes | str) -> dict[str, str]:
    """Parse a url-encoded string into a flat ``name -> value`` dict.

    Blank values are kept (``a=&b=1`` → ``{"a": "", "b": "1"}``). Raw bytes
    are decoded as UTF-8; invalid sequences become U+FFFD.

    Examples::

        parse_params(b"action=greet&name=Ann")  -> {"action": "greet", "name": "Ann"}
        parse_params("a=1&a=2")                 -> {"a": "2"}
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    params: dict[str, str] = {}
    for name, value in parse_qsl(text, keep_blank_values=True):
        params[name] = value
    return params


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> value.
    """

    _data: dict[str, str]

    __slots__ = ("_data",)

    def __init__(self, query_string: bytes | str = b"") -> None:
        # ASGI delivers the query string as latin-1 bytes; a str is parsed as given
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        object.__setattr__(self, "_data", parse_params(query_string))

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "QueryParams":
        """Build from an already-parsed mapping, preserving its key order."""
        params = cls()
        object.__setattr__(params, "_data", {str(k): str(v) for k, v in values.items()})
        return params

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"
