"""Supported HTTP methods.

The same check guards both the registry's top-level keys (at validation
time) and the live request method (at dispatch time).
"""

from ajax_dispatch.errors import UnsupportedMethodError

SUPPORTED_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH")


def is_supported_method(method: object) -> bool:
    """True if *method* is one of the supported methods (exact, case-sensitive)."""
    return isinstance(method, str) and method in SUPPORTED_METHODS


def ensure_supported_method(method: object) -> str:
    """Return *method* unchanged, or raise ``UnsupportedMethodError``."""
    if not is_supported_method(method):
        raise UnsupportedMethodError(method)
    return method  # type: ignore[return-value]
