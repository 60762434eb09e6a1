"""Shared type aliases used across ajax_dispatch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Pre-dispatch hook: receives the request parameters as attributes; ``False`` aborts dispatch
BeforeHook: TypeAlias = Callable[[Any], Any]

# Exception interceptor: receives the raised exception
ExceptionHook: TypeAlias = Callable[[Exception], Any]

# Output channel: receives the handler result (or ``False``) exactly once
Writer: TypeAlias = Callable[[Any], Any]
