"""ASGI handler — translates ASGI scope/messages to dispatcher calls.

The only component that touches raw ASGI directly. Reads the request body,
runs the synchronous dispatcher in a worker thread, and sends whatever the
dispatcher wrote back through ASGI ``send()``.
"""

import logging
from typing import Any

import anyio.to_thread

from ajax_dispatch._internal.asgi import Receive, Scope, Send
from ajax_dispatch.dispatcher import Dispatcher
from ajax_dispatch.errors import (
    BodyTooLargeError,
    ConfigurationError,
    DispatchError,
    HandlerNotFoundError,
    UnsupportedMethodError,
)
from ajax_dispatch.http.request import Request
from ajax_dispatch.http.response import Response, render_output
from ajax_dispatch.outcome import Aborted
from ajax_dispatch.server.sender import send_response

logger = logging.getLogger("ajax_dispatch.server")


def status_for(exc: DispatchError) -> int:
    """HTTP status for a dispatch error that propagated out of ``dispatch()``."""
    match exc:
        case BodyTooLargeError():
            return 413
        case ConfigurationError():
            return 500
        case UnsupportedMethodError():
            return 405
        case HandlerNotFoundError():
            return 404
        case _:
            # client-side request errors
            return 400


class AjaxApp:
    """ASGI 3.0 application serving a single ``Dispatcher``.

    Usage::

        app = AjaxApp(dispatcher)
        # uvicorn mymodule:app

    Every HTTP request, whatever its path, goes to ``dispatcher.dispatch()``.
    A completed dispatch answers 200 with the written output, an aborted one
    answers 204, and propagated errors map through ``status_for()``.
    """

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        response = await self.handle(scope, receive)
        await send_response(response, send)

    async def handle(self, scope: Scope, receive: Receive) -> Response:
        """Run one HTTP request through the dispatcher and build the response."""
        method = scope.get("method", "")
        path = scope.get("path", "")
        try:
            request = await Request.from_asgi(
                scope, receive, max_body_size=self.dispatcher.config.max_body_size
            )
            written: list[Any] = []
            result = await anyio.to_thread.run_sync(
                self.dispatcher.dispatch, request, written.append
            )
        except DispatchError as exc:
            status = status_for(exc)
            if status >= 500:
                logger.error("%d %s %s — %s", status, method, path, exc)
            else:
                logger.debug("%d %s %s — %s", status, method, path, exc)
            return Response(body=str(exc), status=status)
        except Exception:
            logger.exception("500 %s %s", method, path)
            return Response(body="Internal Server Error", status=500)

        if isinstance(result, Aborted):
            return Response(status=204)
        return Response(body=b"".join(render_output(value) for value in written))

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Validates the handler registry at startup so a malformed registry
        fails the server boot instead of the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    registry = self.dispatcher.registry
                except ConfigurationError as exc:
                    logger.error("Invalid handler registry: %s", exc)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                logger.info("Serving %r", registry)
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
