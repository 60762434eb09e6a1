"""The dispatcher — one request in, one handler called, one result out.

Mutable during setup (controllers, hooks). Frozen on the first
``dispatch()``, when the handler registry is validated and compiled.

Control flow of a dispatch::

    transport check -> method check -> registry (first dispatch only)
    -> RequestContext -> before hook -> discriminator -> registry lookup
    -> resolve handler -> guarded call -> write output
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import Any

from ajax_dispatch._internal.types import BeforeHook, ExceptionHook, Writer
from ajax_dispatch.config import DispatcherConfig
from ajax_dispatch.context import RequestContext, build_context
from ajax_dispatch.controllers import ControllerSet
from ajax_dispatch.errors import (
    DispatchError,
    MissingDiscriminatorError,
    TransportContextError,
)
from ajax_dispatch.http.methods import ensure_supported_method
from ajax_dispatch.http.request import Request
from ajax_dispatch.outcome import Aborted, DispatchResult, Ok, Suppressed
from ajax_dispatch.policy import ExceptionPolicy
from ajax_dispatch.registry import HandlerRegistry, MethodRef, MethodRefWithArgs
from ajax_dispatch.resolver import HandlerResolver

logger = logging.getLogger("ajax_dispatch.dispatcher")


class Dispatcher:
    """Route AJAX requests to handlers by HTTP method and a discriminator field.

    Usage::

        dispatcher = (
            Dispatcher(
                {"GET": {"greet": ["Greeter@greet", "name"]}},
                discriminator="action",
            )
            .register_controllers([Greeter()])
            .before(check_token)
            .on_exception(report)
        )

        result = dispatcher.dispatch(request, write=response_body.append)

    Thread safety:
        Registration is single-threaded setup. The freeze on first dispatch
        uses a Lock + double-check so concurrent first requests compile the
        registry exactly once. After that, dispatches share only read-only
        state; each builds its own ``RequestContext``.
    """

    __slots__ = (
        "_before",
        "_controllers",
        "_freeze_lock",
        "_frozen",
        "_handlers",
        "_on_exception",
        # Compiled state (populated by _freeze)
        "_registry",
        "_resolver",
        "config",
    )

    def __init__(
        self,
        handlers: Mapping[str, Any],
        config: DispatcherConfig | None = None,
        *,
        discriminator: str | None = None,
        factories: Mapping[str, Callable[[], Any]] | None = None,
    ) -> None:
        config = config or DispatcherConfig()
        if discriminator is not None:
            config = replace(config, discriminator=discriminator)
        self.config: DispatcherConfig = config
        self._handlers = handlers
        self._controllers = ControllerSet(factories)
        self._before: BeforeHook | None = None
        self._on_exception: ExceptionHook | None = None
        self._registry: HandlerRegistry | None = None
        self._resolver: HandlerResolver | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def register_controllers(self, controllers: Iterable[Any]) -> "Dispatcher":
        """Register controller instances, classes, or factory names, in order.

        Classes are instantiated with no arguments. A reference
        ``"Name@method"`` reaches the first registered controller whose class
        is named ``Name``.
        """
        self._check_not_frozen()
        self._controllers.extend(controllers)
        return self

    def before(self, callback: BeforeHook) -> "Dispatcher":
        """Run *callback* before every dispatch.

        It receives a ``ContextParams`` view. Returning ``False`` stops the
        dispatch silently: no handler runs and nothing is written.
        """
        self._check_not_frozen()
        self._before = callback
        return self

    def on_exception(self, callback: ExceptionHook) -> "Dispatcher":
        """Hand exceptions raised by the before hook or a handler to *callback*.

        With an interceptor registered, such a failure is absorbed and the
        dispatch writes ``False`` instead of a result.
        """
        self._check_not_frozen()
        self._on_exception = callback
        return self

    @property
    def controllers(self) -> ControllerSet:
        return self._controllers

    @property
    def registry(self) -> HandlerRegistry:
        """The compiled registry. Freezes the dispatcher on first access."""
        self._ensure_frozen()
        assert self._registry is not None
        return self._registry

    # -- Dispatch --

    def dispatch(self, request: Request, write: Writer | None = None) -> DispatchResult:
        """Dispatch *request* to its handler.

        Writes the handler result (or ``False`` when the interceptor absorbed
        a failure) to *write* exactly once, unless the before hook aborted.

        Returns:
            ``Ok`` with the handler result, ``Suppressed`` with the absorbed
            exception, or ``Aborted`` when the before hook stopped dispatch.

        Raises:
            DispatchError: Any validation, lookup, or binding failure. These
                never reach the exception interceptor.
        """
        self._check_transport(request)
        method = ensure_supported_method(request.method)

        self._ensure_frozen()
        assert self._registry is not None
        assert self._resolver is not None

        context = build_context(request)
        logger.debug("Dispatching %s with %d parameter(s)", method, len(context))

        if self._before is not None:
            hook = self._before
            outcome = self._resolver.policy.guard(lambda: hook(context.params()))
            if isinstance(outcome, Suppressed):
                logger.debug("Before hook failed and was intercepted; dispatch aborted")
                return Aborted("before hook raised", error=outcome.error)
            if outcome.value is False:
                logger.debug("Before hook returned False; dispatch aborted")
                return Aborted()

        value = self._discriminator_value(context)
        descriptor = self._registry.lookup(method, value)
        logger.info("Matched %s %r to %s", method, value, descriptor.reference)

        invocation = self._resolver.resolve(descriptor, context)
        result: Ok | Suppressed = invocation()

        if write is not None:
            write(result.value)
        return result

    def _check_transport(self, request: Request) -> None:
        """Reject requests that were not issued by an XMLHttpRequest client."""
        headers = request.headers
        if headers is None:
            msg = (
                "ajax_dispatch works only within an HTTP request context "
                "(request that issued by a HTTP client like a browser)."
            )
            raise TransportContextError(msg)

        name = self.config.ajax_header
        expected = self.config.ajax_header_value
        if headers.get(name) != expected:
            msg = f"ajax_dispatch accepts only AJAX requests ({name}: {expected})."
            raise TransportContextError(msg)

    def _discriminator_value(self, context: RequestContext) -> str:
        key = self.config.discriminator
        if key not in context:
            raise MissingDiscriminatorError(key)
        return context[key]

    # -- Tooling --

    def check(self) -> list[str]:
        """Resolve every symbolic reference now and report what would fail.

        Dispatch only checks the handler it selects; this walks the whole
        registry. Returns a list of problem descriptions, empty when every
        ``"Name@method"`` reference reaches a registered controller method.

        Raises:
            ConfigurationError: If the registry itself is malformed.
        """
        self._ensure_frozen()
        assert self._registry is not None
        assert self._resolver is not None

        problems: list[str] = []
        for method, value, descriptor in self._registry.entries():
            if not isinstance(descriptor, (MethodRef, MethodRefWithArgs)):
                continue
            try:
                self._resolver.bound_method(descriptor.controller, descriptor.method)
            except DispatchError as exc:
                problems.append(f"{method} {value!r}: {exc}")
        return problems

    # -- Freeze --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the registry and resolver.

        MUST only be called while holding _freeze_lock.
        """
        self._registry = HandlerRegistry.validate(self._handlers)
        self._resolver = HandlerResolver(
            self._controllers,
            ExceptionPolicy(self._on_exception),
            self.config.discriminator,
        )
        self._frozen = True
        logger.debug(
            "Dispatcher frozen: %r, %d controller(s)", self._registry, len(self._controllers)
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the dispatcher after it has started dispatching. "
                "Register controllers and hooks before the first dispatch()."
            )
            raise RuntimeError(msg)
