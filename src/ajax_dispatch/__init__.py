"""ajax_dispatch — route AJAX requests to handlers by HTTP method and a request field.

One endpoint, many actions: the value of a discriminator parameter picks
the handler within the request method's handler set.

Basic usage::

    from ajax_dispatch import Dispatcher, Request

    class Greeter:
        def greet(self, name):
            return f"hi {name}"

    dispatcher = Dispatcher(
        {"GET": {"greet": ["Greeter@greet", "name"]}},
        discriminator="action",
    ).register_controllers([Greeter()])

    request = Request.build(
        "GET",
        headers={"X-Requested-With": "XMLHttpRequest"},
        query="action=greet&name=Ann",
    )
    dispatcher.dispatch(request, write=print)  # prints "hi Ann"

ASGI hosting::

    from ajax_dispatch import AjaxApp
    app = AjaxApp(dispatcher)
"""

__version__ = "0.1.0"
__all__ = [
    "Aborted",
    "AjaxApp",
    "BodyReadError",
    "ConfigurationError",
    "ControllerMethodNotFoundError",
    "ControllerNotFoundError",
    "DispatchError",
    "Dispatcher",
    "DispatcherConfig",
    "HandlerNotFoundError",
    "HandlerRegistry",
    "MissingArgumentError",
    "MissingDiscriminatorError",
    "Ok",
    "Request",
    "RequestContext",
    "Suppressed",
    "TransportContextError",
    "UnsupportedMethodError",
]

_ERRORS = (
    "BodyReadError",
    "ConfigurationError",
    "ControllerMethodNotFoundError",
    "ControllerNotFoundError",
    "DispatchError",
    "HandlerNotFoundError",
    "MissingArgumentError",
    "MissingDiscriminatorError",
    "TransportContextError",
    "UnsupportedMethodError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import ajax_dispatch`` fast and keeps anyio out of hosts that
    never use the ASGI adapter.
    """
    if name == "Dispatcher":
        from ajax_dispatch.dispatcher import Dispatcher

        return Dispatcher

    if name == "DispatcherConfig":
        from ajax_dispatch.config import DispatcherConfig

        return DispatcherConfig

    if name == "Request":
        from ajax_dispatch.http.request import Request

        return Request

    if name == "RequestContext":
        from ajax_dispatch.context import RequestContext

        return RequestContext

    if name == "HandlerRegistry":
        from ajax_dispatch.registry import HandlerRegistry

        return HandlerRegistry

    if name in ("Ok", "Suppressed", "Aborted"):
        from ajax_dispatch import outcome as _outcome

        return getattr(_outcome, name)

    if name == "AjaxApp":
        from ajax_dispatch.server.handler import AjaxApp

        return AjaxApp

    if name in _ERRORS:
        from ajax_dispatch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
