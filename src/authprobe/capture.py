# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Local listener that gives a browser authorization redirect somewhere to land.

The listener serves one static document for a small set of path aliases (root,
``/callback`` and the document's own name) because the redirect URI used by an
authorization server is not always under the caller's control. Every other path
gets ``404 Not found``. Requests are handled independently; nothing is kept
between them.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Callable, Iterable

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from .errors import BindError, ConfigurationError
from .models.capture import CaptureRequest, StaticDocument

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "Not found"
DISPATCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

RequestObserver = Callable[[CaptureRequest], None]


class CallbackCapture:
    """ASGI dispatcher: accepted path -> 200 with the document, anything else -> 404."""

    def __init__(
        self,
        document: StaticDocument,
        accepted_paths: Iterable[str] | None = None,
        *,
        on_request: RequestObserver | None = None,
    ):
        paths = tuple(accepted_paths) if accepted_paths is not None else document.default_paths()
        for path in paths:
            if not isinstance(path, str) or not path.startswith("/"):
                raise ConfigurationError(f"accepted path must start with '/': {path!r}")
        self.document = document
        self.accepted_paths = frozenset(paths)
        self.on_request = on_request
        self.app = Starlette(routes=[Route("/{path:path}", self.dispatch, methods=DISPATCH_METHODS)])

    async def dispatch(self, request: Request) -> Response:
        captured = CaptureRequest(
            method=request.method,
            path=request.url.path,
            query=request.url.query,
            headers=tuple(request.headers.items()),
        )
        logger.info("[capture] %s %s", captured.method, captured.path)
        if self.on_request is not None:
            self.on_request(captured)

        if captured.path in self.accepted_paths:
            return Response(self.document.content, status_code=200, media_type=self.document.content_type)
        return PlainTextResponse(NOT_FOUND_BODY, status_code=404)


def _validate_port(port: int) -> int:
    try:
        value = int(port)
    except (TypeError, ValueError):
        raise ConfigurationError(f"port must be an integer, got {port!r}") from None
    if not 0 <= value <= 65535:
        raise ConfigurationError(f"port out of range: {value}")
    return value


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind and listen on ``host:port``. Raises ``BindError`` on a bad host or a taken port."""
    port = _validate_port(port)
    if not host:
        raise ConfigurationError("host is empty")
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except (socket.gaierror, UnicodeError) as exc:
        raise BindError(f"invalid host address ({exc})", host=host, port=port) from exc

    family, socktype, proto, _, sockaddr = infos[0]
    sock = socket.socket(family, socktype, proto)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(sockaddr)
        sock.listen(128)
        sock.setblocking(False)
    except OSError as exc:
        sock.close()
        raise BindError(exc.strerror or str(exc), host=host, port=port) from exc
    return sock


class CaptureHandle:
    """Running capture listener. Owned by whoever called ``start_capture``."""

    def __init__(self, capture: CallbackCapture, server: uvicorn.Server, sock: socket.socket, task: asyncio.Task):
        self.capture = capture
        self._server = server
        self._sock = sock
        self._task = task
        self.host, self.port = sock.getsockname()[:2]
        self._stopped = False

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"

    @property
    def callback_url(self) -> str:
        return f"{self.url}/callback"

    @property
    def running(self) -> bool:
        return not self._stopped and not self._task.done()

    async def stop(self) -> None:
        """Stop accepting connections and release the socket. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        # uvicorn closes the listener first, then lets open connections finish their response.
        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._sock.close()
        logger.info("Capture listener on %s stopped", self.url)

    async def wait_closed(self) -> None:
        """Block until the listener exits (``stop()`` or a signal handled by uvicorn)."""
        try:
            await asyncio.shield(self._task)
        finally:
            if self._task.done():
                self._stopped = True
                self._sock.close()

    async def __aenter__(self) -> CaptureHandle:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.stop()


async def start_capture(
    host: str,
    port: int,
    document: StaticDocument,
    accepted_paths: Iterable[str] | None = None,
    *,
    on_request: RequestObserver | None = None,
) -> CaptureHandle:
    """
    Bind ``host:port`` and start serving ``document``.

    Port 0 picks a free port; read it back from ``handle.port``. There is no retry
    and no port hunting: a taken port raises ``BindError``.
    """
    capture = CallbackCapture(document, accepted_paths, on_request=on_request)
    sock = bind_socket(host, port)

    config = uvicorn.Config(capture.app, lifespan="off", log_config=None, access_log=False)
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))

    while not server.started:
        if task.done():
            sock.close()
            exc = task.exception()
            raise BindError(f"listener exited during startup ({exc})", host=host, port=port) from exc
        await asyncio.sleep(0.01)

    handle = CaptureHandle(capture, server, sock, task)
    logger.info("Capture listener running at %s (paths: %s)", handle.url, ", ".join(sorted(capture.accepted_paths)))
    return handle


__all__ = [
    "NOT_FOUND_BODY",
    "CallbackCapture",
    "CaptureHandle",
    "bind_socket",
    "start_capture",
]
