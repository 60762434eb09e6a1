"""Handler registry — method → discriminator value → handler descriptor.

The caller supplies a plain nested mapping::

    {
        "GET": {
            "list": "PostController@index",
            "show": ["PostController@show", "id"],
            "ping": lambda: "pong",
        },
        "POST": {"save": ["PostController@save", "title", "body"]},
    }

``HandlerRegistry.validate()`` decides the shape of every entry once and
freezes the result. Validation is structural: controller and method names
are only checked when a handler is resolved, because controllers are
registered separately.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

from ajax_dispatch.errors import ConfigurationError, HandlerNotFoundError, RegistryMethodError
from ajax_dispatch.http.methods import is_supported_method


@dataclass(frozen=True, slots=True)
class MethodRef:
    """``"Name@method"`` — call a controller method with no arguments."""

    controller: str
    method: str

    @property
    def reference(self) -> str:
        return f"{self.controller}@{self.method}"


@dataclass(frozen=True, slots=True)
class MethodRefWithArgs:
    """``["Name@method", "arg", ...]`` — forward request parameters positionally."""

    controller: str
    method: str
    args: tuple[str, ...]

    @property
    def reference(self) -> str:
        return f"{self.controller}@{self.method}"


@dataclass(frozen=True, slots=True)
class DirectCallable:
    """A plain function, called with every request value except the discriminator."""

    fn: Callable[..., Any]

    @property
    def reference(self) -> str:
        return getattr(self.fn, "__qualname__", repr(self.fn))


HandlerDescriptor: TypeAlias = MethodRef | MethodRefWithArgs | DirectCallable


def parse_reference(name: str, value: str) -> tuple[str, str]:
    """Split ``"Controller@method"`` into its two parts.

    Raises ``ConfigurationError`` unless there is exactly one ``@`` with a
    non-empty name on each side.
    """
    controller, sep, method = value.partition("@")
    if not sep or not controller or not method or "@" in method:
        msg = (
            f"the {name!r} handler reference {value!r} must have the form "
            "'Controller@method'."
        )
        raise ConfigurationError(msg)
    return controller, method


def parse_descriptor(name: str, value: object) -> HandlerDescriptor:
    """Decide the shape of one registry entry.

    Examples::

        parse_descriptor("show", "Posts@show")        -> MethodRef("Posts", "show")
        parse_descriptor("show", ["Posts@show", "id"]) -> MethodRefWithArgs("Posts", "show", ("id",))
        parse_descriptor("ping", ping)                 -> DirectCallable(ping)
    """
    if isinstance(value, str):
        return MethodRef(*parse_reference(name, value))

    if isinstance(value, (list, tuple)):
        if not value or not isinstance(value[0], str):
            msg = f"the {name!r} handler list must start with a 'Controller@method' string."
            raise ConfigurationError(msg)
        controller, method = parse_reference(name, value[0])
        args = value[1:]
        for arg in args:
            if not isinstance(arg, str):
                msg = f"the {name!r} handler argument {arg!r} must be a parameter name string."
                raise ConfigurationError(msg)
        return MethodRefWithArgs(controller, method, tuple(args))

    if callable(value):
        return DirectCallable(value)

    msg = f"the type of {name!r} handler value must be either a string/array/callable."
    raise ConfigurationError(msg)


class HandlerRegistry:
    """A validated, immutable handler table.

    Usage::

        registry = HandlerRegistry.validate({"GET": {"ping": "Health@ping"}})
        descriptor = registry.lookup("GET", "ping")
    """

    __slots__ = ("_tables",)

    def __init__(self, tables: Mapping[str, Mapping[str, HandlerDescriptor]]) -> None:
        self._tables = MappingProxyType(
            {method: MappingProxyType(dict(table)) for method, table in tables.items()}
        )

    @classmethod
    def validate(cls, raw: Mapping[str, Any]) -> "HandlerRegistry":
        """Validate a raw nested mapping and build the registry from it.

        Raises:
            RegistryMethodError: If a top-level key is not a supported method
                (also a ``ConfigurationError``).
            ConfigurationError: If the registry or any entry is malformed.
        """
        if not isinstance(raw, Mapping):
            msg = f"handlers must be a mapping of HTTP method to handlers, got {type(raw).__name__}."
            raise ConfigurationError(msg)

        tables: dict[str, dict[str, HandlerDescriptor]] = {}
        for method, handlers in raw.items():
            if not is_supported_method(method):
                raise RegistryMethodError(method)
            if not isinstance(handlers, Mapping):
                msg = f"the handlers declared for {method} must be a mapping."
                raise ConfigurationError(msg)
            tables[method] = {
                str(name): parse_descriptor(str(name), value) for name, value in handlers.items()
            }
        return cls(tables)

    def lookup(self, method: str, value: str) -> HandlerDescriptor:
        """Return the descriptor for *value* under *method*.

        Only the sub-mapping for *method* is consulted.

        Raises:
            HandlerNotFoundError: If nothing is registered for the pair.
        """
        table = self._tables.get(method)
        if table is None or value not in table:
            raise HandlerNotFoundError(method, value)
        return table[value]

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def entries(self) -> Iterator[tuple[str, str, HandlerDescriptor]]:
        """Yield ``(method, value, descriptor)`` for every registered handler."""
        for method, table in self._tables.items():
            for value, descriptor in table.items():
                yield method, value, descriptor

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def __repr__(self) -> str:
        return f"HandlerRegistry({len(self)} handlers across {', '.join(self._tables) or 'no methods'})"
