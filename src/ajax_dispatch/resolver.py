"""Handler resolution — turn a descriptor into a guarded, zero-argument call.

Resolution happens before anything runs: unknown controllers, missing
methods, and missing forwarded arguments all fail here and propagate
directly. Only the returned ``Invocation`` runs user code, and it does so
under the ``ExceptionPolicy``.
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from ajax_dispatch.context import RequestContext
from ajax_dispatch.controllers import ControllerSet
from ajax_dispatch.errors import (
    ControllerMethodNotFoundError,
    ControllerNotFoundError,
    MissingArgumentError,
)
from ajax_dispatch.outcome import GuardResult
from ajax_dispatch.policy import ExceptionPolicy
from ajax_dispatch.registry import (
    DirectCallable,
    HandlerDescriptor,
    MethodRef,
    MethodRefWithArgs,
)

Invocation: TypeAlias = Callable[[], GuardResult]


class HandlerResolver:
    """Resolve handler descriptors against registered controllers.

    Each shape gets its arguments from a different place:

    - ``MethodRef``: no arguments.
    - ``MethodRefWithArgs``: the named request parameters, in declared order.
    - ``DirectCallable``: every request value except the discriminator's.
    """

    __slots__ = ("controllers", "discriminator", "policy")

    def __init__(
        self,
        controllers: ControllerSet,
        policy: ExceptionPolicy,
        discriminator: str,
    ) -> None:
        self.controllers = controllers
        self.policy = policy
        self.discriminator = discriminator

    def resolve(self, descriptor: HandlerDescriptor, context: RequestContext) -> Invocation:
        """Build the invocation for *descriptor* in *context*.

        Raises:
            ControllerNotFoundError: No controller has the referenced name.
            ControllerMethodNotFoundError: The controller lacks the method.
            MissingArgumentError: A forwarded parameter is absent.
        """
        match descriptor:
            case MethodRefWithArgs(controller=name, method=method, args=arg_names):
                bound = self.bound_method(name, method)
                args = bind_arguments(arg_names, context)
            case MethodRef(controller=name, method=method):
                bound = self.bound_method(name, method)
                args = []
            case DirectCallable(fn=fn):
                bound = fn
                args = context.values_except(self.discriminator)
            case _:
                msg = f"unknown handler descriptor {descriptor!r}"
                raise TypeError(msg)

        return self._guarded(bound, args)

    def bound_method(self, controller_name: str, method_name: str) -> Callable[..., Any]:
        """Return ``controller.method`` for a ``"Name@method"`` reference."""
        controller = self.controllers.resolve(controller_name)
        if controller is None:
            raise ControllerNotFoundError(controller_name)

        if method_name.startswith("_"):
            raise ControllerMethodNotFoundError(controller_name, method_name)
        method = getattr(controller, method_name, None)
        if method is None or not callable(method):
            raise ControllerMethodNotFoundError(controller_name, method_name)
        return method

    def _guarded(self, fn: Callable[..., Any], args: list[str]) -> Invocation:
        def invoke() -> GuardResult:
            return self.policy.guard(lambda: fn(*args))

        return invoke


def bind_arguments(names: tuple[str, ...], context: RequestContext) -> list[str]:
    """Collect the values of *names* from *context*, preserving order.

    Raises:
        MissingArgumentError: Naming the first parameter that is absent.
    """
    values: list[str] = []
    for name in names:
        if name not in context:
            raise MissingArgumentError(name)
        values.append(context[name])
    return values
