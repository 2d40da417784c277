from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union


@dataclass
class CacheConfig:
    default_ttl_seconds: float = 60.0


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 9090
    log_level: str = "INFO"
    cors_origins: List[str] = dataclasses.field(default_factory=lambda: ["http://localhost:3000"])
    debug: bool = False


@dataclass
class AppConfig:
    server: ServerConfig = dataclasses.field(default_factory=ServerConfig)
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        def build(dc_cls, key):
            values = data.get(key, {})
            return dc_cls(**values)

        return cls(
            server=build(ServerConfig, "server"),
            cache=build(CacheConfig, "cache"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))
