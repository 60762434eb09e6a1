"""``ajax-dispatch check`` — validate a dispatcher before deploying it."""

import argparse
import sys

from ajax_dispatch.cli._resolve import resolve_dispatcher
from ajax_dispatch.errors import ConfigurationError


def run_check(args: argparse.Namespace) -> None:
    """Validate the registry and resolve every ``Name@method`` reference.

    Exits 1 when the registry is malformed or any reference is unresolved.
    """
    try:
        dispatcher = resolve_dispatcher(args.dispatcher)
        problems = dispatcher.check()
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except ConfigurationError as exc:
        print(f"Invalid registry: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if problems:
        for problem in problems:
            print(f"  {problem}", file=sys.stderr)
        print(f"{len(problems)} problem(s) found.", file=sys.stderr)
        raise SystemExit(1)

    print(f"OK: {len(dispatcher.registry)} handler(s), {len(dispatcher.controllers)} controller(s).")
