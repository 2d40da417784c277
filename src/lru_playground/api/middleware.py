from __future__ import annotations

import logging
import time
import typing as t

from ..monitoring.metrics import http_request_latency_seconds

Scope = t.Dict[str, t.Any]
Receive = t.Callable[[], t.Awaitable[t.Dict[str, t.Any]]]
Send = t.Callable[[t.Dict[str, t.Any]], t.Awaitable[None]]
ASGIApp = t.Callable[[Scope, Receive, Send], t.Awaitable[None]]


class AccessLogMiddleware:
    """Pure ASGI middleware that logs one line per HTTP request.

    The response status is captured from the ``http.response.start`` message
    on its way out; latency is recorded in ``http_request_latency_seconds``.
    Non-HTTP scopes (lifespan) pass through untouched.
    """

    def __init__(self, app: ASGIApp, *, logger: t.Optional[logging.Logger] = None) -> None:
        self._app = app
        self._logger = logger or logging.getLogger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self._app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = scope.get("path", "")
        status_code = 500
        started = time.perf_counter()

        async def wrapped_send(message: t.Dict[str, t.Any]) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
            await send(message)

        try:
            await self._app(scope, receive, wrapped_send)
        finally:
            elapsed = time.perf_counter() - started
            http_request_latency_seconds.observe(elapsed, method=method)
            self._logger.info("%s %s -> %d (%.2f ms)", method, path, status_code, elapsed * 1000.0)
