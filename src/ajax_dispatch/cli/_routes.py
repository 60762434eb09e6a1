"""``ajax-dispatch routes`` — list registered handlers."""

import argparse
import sys

from ajax_dispatch.cli._resolve import resolve_dispatcher
from ajax_dispatch.errors import ConfigurationError
from ajax_dispatch.registry import DirectCallable, MethodRefWithArgs


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, VALUE, and HANDLER for a dispatcher.

    VALUE is the discriminator value that selects the handler.
    """
    try:
        dispatcher = resolve_dispatcher(args.dispatcher)
        registry = dispatcher.registry
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str]] = []
    for method, value, descriptor in registry.entries():
        handler = descriptor.reference
        if isinstance(descriptor, MethodRefWithArgs) and descriptor.args:
            handler = f"{handler}({', '.join(descriptor.args)})"
        elif isinstance(descriptor, DirectCallable):
            handler = f"{handler} (callable)"
        rows.append((method, value, handler))

    if not rows:
        print("No handlers registered.")
        return

    key = dispatcher.config.discriminator
    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_value = max(max(len(r[1]) for r in rows), len(key))

    fmt = f"{{:<{max_method}}}  {{:<{max_value}}}  {{}}"
    print(fmt.format("METHOD", key, "HANDLER"))
    sep_len = max_method + max_value + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, value, handler in rows:
        print(fmt.format(method, value, handler))
