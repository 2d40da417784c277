from __future__ import annotations

import json
import logging
import typing as t

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from ..core.errors import CacheError, InvalidRequest, NotConfigured
from ..core.models import MISS, CacheVariant
from ..core.session import CacheSession
from ..monitoring.metrics import cache_requests_total
from ..utils.config import AppConfig
from .middleware import AccessLogMiddleware

_logger = logging.getLogger(__name__)

STATUS_BY_ERROR: t.Dict[t.Type[CacheError], int] = {
    NotConfigured: 409,
}

_ORDERS = {"oldest": False, "newest": True}


def _error_response(exc: CacheError, status_code: int, **extra: t.Any) -> JSONResponse:
    return JSONResponse({"error": str(exc), "code": exc.code, **extra}, status_code=status_code)


def _record(request: Request, outcome: str) -> None:
    variant, operation = getattr(request.state, "cache_op", ("unknown", "unknown"))
    cache_requests_total.inc(variant=variant, operation=operation, outcome=outcome)


async def _json_object(request: Request) -> t.Dict[str, t.Any]:
    body = await request.body()
    try:
        payload = json.loads(body or b"null")
    except ValueError:
        raise InvalidRequest("request body must be JSON") from None
    if not isinstance(payload, dict):
        raise InvalidRequest("request body must be a JSON object")
    return payload


def _required_string(payload: t.Dict[str, t.Any], name: str) -> str:
    value = payload.get(name)
    if value is None:
        raise InvalidRequest(f"{name} is required")
    if not isinstance(value, str):
        raise InvalidRequest(f"{name} must be a string")
    return value


async def handle_cache_error(request: Request, exc: CacheError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc), 400)
    _record(request, exc.code)
    _logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error_response(exc, status_code)


def variant_routes(variant: CacheVariant) -> t.List[Route]:
    """Build the init/put/get/cache/stats routes for one cache variant."""

    def session_of(request: Request, operation: str) -> CacheSession:
        request.state.cache_op = (variant.value, operation)
        return request.app.state.session

    async def init(request: Request) -> JSONResponse:
        session = session_of(request, "init")
        payload = await _json_object(request)
        session.configure(variant, payload.get("capacity"))
        _record(request, "ok")
        return JSONResponse({"status": "ok"})

    async def put(request: Request) -> JSONResponse:
        session = session_of(request, "put")
        payload = await _json_object(request)
        key = _required_string(payload, "key")
        value = _required_string(payload, "value")
        store = session.store(variant)
        if variant is CacheVariant.LRU_TTL:
            store.put(key, value, payload.get("ttlInSeconds"))  # type: ignore[call-arg]
        else:
            store.put(key, value)
        _record(request, "ok")
        return JSONResponse({"status": "ok"})

    async def get(request: Request) -> JSONResponse:
        session = session_of(request, "get")
        key = request.path_params["key"]
        value = session.store(variant).get(key)
        if value is MISS:
            _record(request, "miss")
            return JSONResponse({"error": f"key {key!r} not found", "code": "miss"}, status_code=404)
        _record(request, "hit")
        return JSONResponse({"value": value})

    async def dump(request: Request) -> JSONResponse:
        session = session_of(request, "cache")
        order = request.query_params.get("order", "oldest")
        if order not in _ORDERS:
            raise InvalidRequest(f"order must be one of {sorted(_ORDERS)}")
        try:
            entries = session.store(variant).snapshot(newest_first=_ORDERS[order])
        except NotConfigured as exc:
            # the UI fetches the dump on load and expects a list either way
            _record(request, exc.code)
            return _error_response(exc, STATUS_BY_ERROR[NotConfigured], cache=[])
        _record(request, "ok")
        return JSONResponse({"cache": [entry.to_dict() for entry in entries]})

    async def stats(request: Request) -> JSONResponse:
        session = session_of(request, "stats")
        result = session.store(variant).stats()
        _record(request, "ok")
        return JSONResponse(result.to_dict())

    return [
        Route("/init", init, methods=["POST"]),
        Route("/put", put, methods=["POST"]),
        Route("/get/{key:path}", get, methods=["GET"]),
        Route("/cache", dump, methods=["GET"]),
        Route("/stats", stats, methods=["GET"]),
    ]


def create_app(config: t.Optional[AppConfig] = None, session: t.Optional[CacheSession] = None) -> Starlette:
    config = config or AppConfig()
    session = session or CacheSession(default_ttl_seconds=config.cache.default_ttl_seconds)

    middleware = [
        Middleware(AccessLogMiddleware),
        Middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        ),
    ]
    app = Starlette(
        debug=config.server.debug,
        routes=[Mount(f"/api/{variant.value}", routes=variant_routes(variant)) for variant in CacheVariant],
        middleware=middleware,
        exception_handlers={CacheError: handle_cache_error},
    )
    app.state.session = session
    app.state.config = config
    return app
