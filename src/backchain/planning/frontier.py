"""Define the frontier (i.e., open list) of backward A* search.

The frontier is a binary min-heap (via `heapq`) of nodes ordered by f-value, ties broken
by node ID. Nodes can also be looked up by state equality, using an index from state
fingerprints to node IDs, so that a better path to a queued state can replace it.
"""

from __future__ import annotations

import heapq
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from backchain.planning.search_node import SearchNode
    from backchain.states import WorldState

_RETIRED = None
"""Placeholder for the node of a heap entry that has been superseded by a better node."""


class Frontier:
    """A priority queue of search nodes supporting lookup and improvement by state."""

    def __init__(self) -> None:
        """Initialize an empty frontier."""
        self._heap: list[list[Any]] = []
        """Heap of [f, id, node] entries; `node` is retired when an entry is superseded."""

        self._entries: dict[int, list[Any]] = {}
        """Map from IDs of nodes in the frontier to their live heap entries."""

        self._by_fingerprint: dict[int, set[int]] = defaultdict(set)
        """Map from state fingerprints to the IDs of frontier nodes with that fingerprint."""

    def __len__(self) -> int:
        """Retrieve the number of nodes in the frontier."""
        return len(self._entries)

    def __iter__(self) -> Iterator[SearchNode]:
        """Iterate over the nodes in the frontier (in no particular order)."""
        return (entry[-1] for entry in self._entries.values())

    def push(self, node: SearchNode) -> None:
        """Insert a node into the frontier."""
        entry = [node.f, node.id, node]
        self._entries[node.id] = entry
        self._by_fingerprint[node.state.fingerprint].add(node.id)
        heapq.heappush(self._heap, entry)

    def pop(self) -> SearchNode:
        """Remove and return the node with the lowest f-value.

        :raises KeyError: If the frontier is empty
        """
        while self._heap:
            *_, node = heapq.heappop(self._heap)
            if node is _RETIRED:
                continue
            del self._entries[node.id]
            self._discard_fingerprint(node)
            return node
        raise KeyError("Cannot pop from an empty frontier.")

    def find(self, state: WorldState) -> SearchNode | None:
        """Find the frontier node whose state equals the given state, if there is one."""
        for node_id in self._by_fingerprint.get(state.fingerprint, ()):
            node = self._entries[node_id][-1]
            if node.state == state:
                return node
        return None

    def replace(self, old_node: SearchNode, new_node: SearchNode) -> None:
        """Replace a frontier node with a better node for the same state.

        The new node takes over the ID of the node it replaces.
        """
        self._entries[old_node.id][-1] = _RETIRED
        self._discard_fingerprint(old_node)
        new_node.id = old_node.id
        self.push(new_node)

    def clear(self) -> None:
        """Remove all nodes from the frontier."""
        self._heap.clear()
        self._entries.clear()
        self._by_fingerprint.clear()

    def _discard_fingerprint(self, node: SearchNode) -> None:
        """Remove a node's ID from the fingerprint index."""
        ids = self._by_fingerprint[node.state.fingerprint]
        ids.discard(node.id)
        if not ids:
            del self._by_fingerprint[node.state.fingerprint]
