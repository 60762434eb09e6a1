"""HTTP response sent by the ASGI adapter.

The dispatcher itself writes raw handler output and never builds a
response; only the hosting layer wraps that output with a status line.
"""

from dataclasses import dataclass
from typing import Any


def render_output(value: Any) -> bytes:
    """Turn a handler result into response bytes without serializing it.

    ``bytes`` pass through, ``str`` is UTF-8 encoded, ``None`` is empty,
    booleans become ``true``/``false`` and anything else goes through ``str()``.
    """
    if value is None:
        return b""
    if isinstance(value, bytes):
        return value
    if isinstance(value, bool):
        return b"true" if value else b"false"
    return str(value).encode("utf-8")


@dataclass(frozen=True, slots=True)
class Response:
    """A plain HTTP response. Immutable."""

    body: str | bytes = b""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as bytes (UTF-8 for strings)."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")
