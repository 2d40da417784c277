from __future__ import annotations

import typing as t
from dataclasses import dataclass, field


@dataclass(eq=False)
class Node:
    key: str
    value: t.Any
    expires_at: float = 0.0
    prev: t.Optional["Node"] = field(default=None, repr=False)
    next: t.Optional["Node"] = field(default=None, repr=False)


class RecencyList:
    """Intrusive doubly-linked list of nodes, least recent at the front.

    The list only owns ordering links; the store's index owns the nodes.
    All operations are O(1) except iteration.
    """

    def __init__(self) -> None:
        # sentinel: root.next is the front (LRU), root.prev is the back (MRU)
        self._root = Node(key="", value=None)
        self._root.prev = self._root
        self._root.next = self._root
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> t.Iterator[Node]:
        node = self._root.next
        while node is not self._root:
            # capture before yield so callers may unlink the current node
            following = node.next
            yield node
            node = following

    def __reversed__(self) -> t.Iterator[Node]:
        node = self._root.prev
        while node is not self._root:
            preceding = node.prev
            yield node
            node = preceding

    def front(self) -> t.Optional[Node]:
        return None if self._len == 0 else self._root.next

    def push_back(self, node: Node) -> None:
        last = self._root.prev
        node.prev = last
        node.next = self._root
        last.next = node
        self._root.prev = node
        self._len += 1

    def unlink(self, node: Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = None
        node.next = None
        self._len -= 1

    def move_to_back(self, node: Node) -> None:
        if self._root.prev is node:
            return
        self.unlink(node)
        self.push_back(node)

    def pop_front(self) -> t.Optional[Node]:
        node = self.front()
        if node is not None:
            self.unlink(node)
        return node
