"""Controller registration and lookup by short name.

Controllers are plain objects. A ``"Name@method"`` reference names a
controller by the unqualified name of its class, so ``app.posts.PostController``
is reached as ``"PostController"``.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from ajax_dispatch.errors import ConfigurationError


def controller_name(controller: object) -> str:
    """The unqualified class name a reference uses to reach *controller*."""
    return type(controller).__name__


class ControllerSet:
    """An append-only, ordered set of controller instances.

    Lookup returns the *first* registered instance with a matching name;
    later instances sharing that name are unreachable.

    Strings are only accepted when the host supplies an explicit
    ``factories`` table mapping names to zero-argument constructors::

        controllers = ControllerSet(factories={"Posts": PostController})
        controllers.register("Posts", UserController, AdminController())
    """

    __slots__ = ("_controllers", "_factories")

    def __init__(self, factories: Mapping[str, Callable[[], Any]] | None = None) -> None:
        self._controllers: list[object] = []
        self._factories: Mapping[str, Callable[[], Any]] = dict(factories or {})

    def register(self, *controllers: object) -> None:
        """Append controllers in order.

        Each item is an instance, a class (instantiated with no arguments),
        or a name from the ``factories`` table.

        Raises:
            ConfigurationError: If a string is not in the factories table.
        """
        for controller in controllers:
            if isinstance(controller, str):
                factory = self._factories.get(controller)
                if factory is None:
                    msg = f"Controller {controller!r} has no registered factory."
                    raise ConfigurationError(msg)
                controller = factory()
            elif isinstance(controller, type):
                controller = controller()
            self._controllers.append(controller)

    def extend(self, controllers: Iterable[object]) -> None:
        self.register(*controllers)

    def resolve(self, name: str) -> object | None:
        """Return the first controller whose class name is *name*, or ``None``."""
        for controller in self._controllers:
            if controller_name(controller) == name:
                return controller
        return None

    def __iter__(self) -> Iterator[object]:
        return iter(self._controllers)

    def __len__(self) -> int:
        return len(self._controllers)

    def __repr__(self) -> str:
        names = ", ".join(controller_name(c) for c in self._controllers)
        return f"ControllerSet([{names}])"
