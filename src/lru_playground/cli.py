from __future__ import annotations

import json
import logging
import typing as t

import anyio
import click
import httpx

from .client import AsyncCacheClient
from .core.errors import CacheError
from .core.models import MISS, CacheVariant
from .utils.config import AppConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

variant_option = click.option(
    "--variant",
    type=click.Choice([v.value for v in CacheVariant], case_sensitive=False),
    default=CacheVariant.LRU.value,
    show_default=True,
    help="Cache variant to address",
)
url_option = click.option("--url", default="http://127.0.0.1:9090", show_default=True, help="Base URL of the cache API")


def _setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def _run_client(url: str, variant: str, action: t.Callable[[AsyncCacheClient], t.Awaitable[t.Any]]) -> t.Any:
    async def _main() -> t.Any:
        async with AsyncCacheClient(url, variant) as client:
            return await action(client)

    try:
        return anyio.run(_main)
    except CacheError as exc:
        raise click.ClickException(str(exc)) from exc
    except httpx.HTTPError as exc:
        raise click.ClickException(f"cannot reach {url}: {exc}") from exc


@click.group()
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
@click.pass_context
def main(ctx: click.Context, log_level: t.Optional[str]) -> None:
    """LRU playground cache service and client."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="JSON config file")
@click.option("--host", default=None, help="Interface to bind (default 127.0.0.1)")
@click.option("--port", type=int, default=None, help="Port to listen on for HTTP (default 9090)")
@click.option("--cors-origin", "cors_origins", multiple=True, help="Allowed browser origin; repeatable")
@click.option("--default-ttl", type=float, default=None, help="TTL in seconds when a put omits ttlInSeconds")
@click.pass_context
def serve(
    ctx: click.Context,
    config_path: t.Optional[str],
    host: t.Optional[str],
    port: t.Optional[int],
    cors_origins: t.Tuple[str, ...],
    default_ttl: t.Optional[float],
) -> None:
    """Serve the cache API over HTTP."""
    config = AppConfig.from_file(config_path) if config_path else AppConfig()
    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port
    if cors_origins:
        config.server.cors_origins = list(cors_origins)
    if default_ttl is not None:
        config.cache.default_ttl_seconds = default_ttl
    if ctx.obj.get("log_level"):
        config.server.log_level = ctx.obj["log_level"]
    _setup_logging(config.server.log_level)

    from .api.app import create_app

    app = create_app(config)
    logger.info("Serving cache API on http://%s:%d", config.server.host, config.server.port)

    import uvicorn

    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level=config.server.log_level.lower())


@main.command()
@url_option
@variant_option
@click.argument("capacity", type=int)
@click.pass_context
def init(ctx: click.Context, url: str, variant: str, capacity: int) -> None:
    """Reset the cache to an empty store of CAPACITY entries."""
    _setup_logging(ctx.obj.get("log_level") or "WARNING")
    _run_client(url, variant, lambda client: client.configure(capacity))
    click.echo(f"{variant} cache initialized with capacity {capacity}")


@main.command()
@url_option
@variant_option
@click.option("--ttl", type=float, default=None, help="TTL in seconds (lru-ttl only)")
@click.argument("key")
@click.argument("value")
@click.pass_context
def put(ctx: click.Context, url: str, variant: str, ttl: t.Optional[float], key: str, value: str) -> None:
    """Insert or update KEY with VALUE."""
    _setup_logging(ctx.obj.get("log_level") or "WARNING")
    if ttl is not None and variant != CacheVariant.LRU_TTL.value:
        raise click.UsageError("--ttl requires --variant lru-ttl")
    _run_client(url, variant, lambda client: client.put(key, value, ttl_seconds=ttl))
    click.echo(f"stored {key!r}")


@main.command()
@url_option
@variant_option
@click.argument("key")
@click.pass_context
def get(ctx: click.Context, url: str, variant: str, key: str) -> None:
    """Fetch KEY, marking it most recently used."""
    _setup_logging(ctx.obj.get("log_level") or "WARNING")
    value = _run_client(url, variant, lambda client: client.get(key))
    if value is MISS:
        raise click.ClickException(f"key {key!r} not found")
    click.echo(value)


@main.command()
@url_option
@variant_option
@click.option("--newest-first", is_flag=True, default=False, help="List most recently used first")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw JSON list")
@click.pass_context
def dump(ctx: click.Context, url: str, variant: str, newest_first: bool, as_json: bool) -> None:
    """Print the cache contents in recency order."""
    _setup_logging(ctx.obj.get("log_level") or "WARNING")
    entries = _run_client(url, variant, lambda client: client.snapshot(newest_first=newest_first))
    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in entries]))
        return
    click.echo(" -> ".join(f"{entry.key}={entry.value}" for entry in entries) or "(empty)")


@main.command()
@url_option
@variant_option
@click.pass_context
def stats(ctx: click.Context, url: str, variant: str) -> None:
    """Print capacity, size and eviction counters."""
    _setup_logging(ctx.obj.get("log_level") or "WARNING")
    result = _run_client(url, variant, lambda client: client.stats())
    click.echo(json.dumps(result.to_dict()))


if __name__ == "__main__":
    main()
