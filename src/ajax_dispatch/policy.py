"""Exception policy for user code.

Wraps exactly two call sites — the pre-dispatch hook and the handler — so
that both share one failure path. Dispatch-infrastructure errors raised
outside a guarded call never reach the interceptor.
"""

import logging
from collections.abc import Callable
from typing import Any

from ajax_dispatch._internal.types import ExceptionHook
from ajax_dispatch.outcome import GuardResult, Ok, Suppressed

logger = logging.getLogger("ajax_dispatch.policy")


class ExceptionPolicy:
    """Run user callbacks, handing failures to an optional interceptor.

    Usage::

        policy = ExceptionPolicy(interceptor=report)
        result = policy.guard(lambda: controller.save())
        if isinstance(result, Suppressed):
            ...

    Without an interceptor the original exception propagates unchanged.
    If the interceptor itself raises, that error propagates.
    """

    __slots__ = ("interceptor",)

    def __init__(self, interceptor: ExceptionHook | None = None) -> None:
        self.interceptor = interceptor

    def guard(self, callback: Callable[[], Any]) -> GuardResult:
        """Call *callback* and wrap its result, or its handled failure."""
        try:
            return Ok(callback())
        except Exception as exc:
            if self.interceptor is None:
                raise
            logger.warning(
                "Suppressed %s raised by user code: %s", type(exc).__name__, exc
            )
            self.interceptor(exc)
            return Suppressed(exc)
