"""Dispatch exception hierarchy.

Shared across the registry, resolver, dispatcher, and ASGI adapter so every
module raises and catches the same types. Every error is a ``DispatchError``;
subclasses distinguish the cause.
"""


class DispatchError(Exception):
    """Base for all dispatch errors."""


class TransportContextError(DispatchError):
    """The request was not issued by an XMLHttpRequest-style client.

    Also raised when the host cannot provide request headers at all.
    """


class UnsupportedMethodError(DispatchError):
    """HTTP method outside GET, POST, PUT, DELETE, PATCH."""

    def __init__(self, method: object, detail: str = "") -> None:
        self.method = method
        super().__init__(detail or f"HTTP request method {method!r} not supported.")


class ConfigurationError(DispatchError):
    """Raised when the handler registry or dispatcher setup is malformed.

    Typically caught during ``Dispatcher._freeze()`` on the first dispatch.
    """


class RegistryMethodError(UnsupportedMethodError, ConfigurationError):
    """A handler registry declares a top-level key that is not a supported method."""


class BodyReadError(DispatchError):
    """The raw body of a non-GET request could not be read or was empty."""


class MissingDiscriminatorError(DispatchError):
    """The discriminator field is absent from the request parameters."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"the key {key!r} not found in request variables.")


class HandlerNotFoundError(DispatchError):
    """No handler is registered for the request method and discriminator value."""

    def __init__(self, method: str = "", value: str = "", detail: str = "") -> None:
        self.method = method
        self.value = value
        default = f"No handler was found for {method} {value!r}."
        super().__init__(detail or default)


class ControllerNotFoundError(HandlerNotFoundError):
    """A ``Name@method`` reference names a controller that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(detail=f"Controller class {name!r} not found.")


class ControllerMethodNotFoundError(DispatchError):
    """The controller exists but has no public callable with the referenced name."""

    def __init__(self, controller: str, method: str) -> None:
        self.controller = controller
        self.method = method
        super().__init__(
            f"Controller method {method!r} not exist in controller {controller!r}."
        )


class MissingArgumentError(DispatchError):
    """A forwarded argument named by the handler is absent from the request parameters."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"{key!r} is not exist in the request variables.")


class BodyTooLargeError(BodyReadError):
    """The request body exceeded the configured ``max_body_size``."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Request body exceeds {limit} bytes.")
