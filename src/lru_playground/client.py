from __future__ import annotations

import logging
import typing as t
from urllib.parse import quote

import httpx

from .core.errors import ERRORS_BY_CODE, CacheError
from .core.models import MISS, CacheVariant, Entry, StoreStats

_logger = logging.getLogger(__name__)


class AsyncCacheClient:
    """Async client for one cache variant of the playground HTTP API.

    Error responses are raised as the matching ``CacheError`` subclass; a
    404 from ``get`` whose body carries ``code: "miss"`` comes back as ``MISS``;
    any other 404 (wrong base URL, unknown route) raises ``CacheError``.

    Usage:
        async with AsyncCacheClient("http://127.0.0.1:9090", "lru-ttl") as client:
            await client.configure(3)
            await client.put("a", "1", ttl_seconds=30)
            value = await client.get("a")
    """

    def __init__(
        self,
        base_url: str,
        variant: t.Union[CacheVariant, str] = CacheVariant.LRU,
        *,
        http_client: t.Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._variant = CacheVariant(variant)
        self._prefix = f"{base_url.rstrip('/')}/api/{self._variant.value}"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def variant(self) -> CacheVariant:
        return self._variant

    async def __aenter__(self) -> "AsyncCacheClient":
        return self

    async def __aexit__(self, *exc_info: t.Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def configure(self, capacity: int) -> None:
        await self._request("POST", "/init", json={"capacity": capacity})

    async def put(self, key: str, value: str, ttl_seconds: t.Optional[float] = None) -> None:
        body: t.Dict[str, t.Any] = {"key": key, "value": value}
        if ttl_seconds is not None:
            if self._variant is not CacheVariant.LRU_TTL:
                raise ValueError("ttl_seconds is only supported by the lru-ttl variant")
            body["ttlInSeconds"] = ttl_seconds
        await self._request("POST", "/put", json=body)

    async def get(self, key: str) -> t.Any:
        response = await self._client.get(f"{self._prefix}/get/{quote(key, safe='')}")
        if response.status_code == 404 and self._error_code(response) == "miss":
            return MISS
        self._raise_for_error(response)
        return response.json()["value"]

    async def snapshot(self, newest_first: bool = False) -> t.List[Entry]:
        order = "newest" if newest_first else "oldest"
        data = await self._request("GET", "/cache", params={"order": order})
        return [Entry(key=item["key"], value=item["value"]) for item in data.get("cache", [])]

    async def stats(self) -> StoreStats:
        data = await self._request("GET", "/stats")
        return StoreStats(
            variant=CacheVariant(data["variant"]),
            capacity=data["capacity"],
            size=data["size"],
            evictions=data["evictions"],
            expirations=data.get("expirations", 0),
        )

    async def _request(self, method: str, path: str, **kwargs: t.Any) -> t.Dict[str, t.Any]:
        response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)
        self._raise_for_error(response)
        return response.json()

    @staticmethod
    def _error_body(response: httpx.Response) -> t.Dict[str, t.Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    @classmethod
    def _error_code(cls, response: httpx.Response) -> t.Optional[str]:
        return cls._error_body(response).get("code")

    @classmethod
    def _raise_for_error(cls, response: httpx.Response) -> None:
        if response.is_success:
            return
        data = cls._error_body(response)
        error_cls = ERRORS_BY_CODE.get(data.get("code", ""))
        message = data.get("error") or f"HTTP {response.status_code}"
        _logger.debug("Cache API error status=%d code=%s", response.status_code, data.get("code"))
        if error_cls is not None:
            raise error_cls(message)
        if response.status_code >= 500:
            response.raise_for_status()
        raise CacheError(message)
