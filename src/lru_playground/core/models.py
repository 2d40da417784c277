from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass


class CacheVariant(str, enum.Enum):
    LRU = "lru"
    LRU_TTL = "lru-ttl"


class _Miss:
    """Result of a lookup on an absent or expired key."""

    _instance: t.Optional["_Miss"] = None

    def __new__(cls) -> "_Miss":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS = _Miss()
Miss = _Miss


@dataclass(frozen=True)
class Entry:
    key: str
    value: t.Any
    expires_at: t.Optional[float] = None

    def to_dict(self) -> t.Dict[str, t.Any]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class StoreStats:
    variant: CacheVariant
    capacity: int
    size: int
    evictions: int
    expirations: int = 0

    def to_dict(self) -> t.Dict[str, t.Any]:
        return {
            "variant": self.variant.value,
            "capacity": self.capacity,
            "size": self.size,
            "evictions": self.evictions,
            "expirations": self.expirations,
        }
