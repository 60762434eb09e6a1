"""Dispatch outcomes.

A guarded call either produced a value (``Ok``) or raised an error that the
exception interceptor absorbed (``Suppressed``). A dispatch can also stop
before any handler runs (``Aborted``). Keeping these distinct means a handler
that genuinely returns ``False`` is never mistaken for a handled error.

Each outcome exposes ``value``, the thing written to the output channel:
the handler result for ``Ok``, the literal ``False`` for ``Suppressed``.
"""

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias


@dataclass(frozen=True, slots=True)
class Ok:
    """The guarded call returned normally."""

    value: Any


@dataclass(frozen=True, slots=True)
class Suppressed:
    """The guarded call raised and the exception interceptor handled it."""

    error: Exception

    @property
    def value(self) -> Literal[False]:
        return False


@dataclass(frozen=True, slots=True)
class Aborted:
    """The pre-dispatch hook stopped the dispatch; nothing was written."""

    reason: str = "before hook returned False"
    error: Exception | None = None

    @property
    def value(self) -> None:
        return None


GuardResult: TypeAlias = Ok | Suppressed
DispatchResult: TypeAlias = Ok | Suppressed | Aborted
