from .expiring_store import ExpiringRecencyStore
from .linked import Node, RecencyList
from .recency_store import RecencyStore

__all__ = ["RecencyStore", "ExpiringRecencyStore", "RecencyList", "Node"]
