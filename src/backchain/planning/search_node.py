"""Define the nodes of backward A* search and the store of already-visited nodes."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from backchain.actions import ActionTemplate
    from backchain.facts import Binding
    from backchain.states import WorldState


@dataclass
class SearchNode:
    """A world state reached during search, along with the move that produced it.

    Because search proceeds backward, `action` is the action that leads *from* this node's
    state *to* its predecessor's state when the plan is executed.
    """

    state: WorldState
    id: int
    """Unique identifier, allocated in increasing order as nodes are created."""

    g: float = 0.0
    """Accumulated (preference-weighted) cost of the actions between the goal and this node."""

    h: float = 0.0
    """Heuristic estimate of the remaining distance from this node to the start."""

    action: Optional[ActionTemplate] = None
    binding: Binding = ()

    prev: Optional[int] = None
    """Index of the predecessor node among the visited nodes (None for the root)."""

    @property
    def f(self) -> float:
        """Retrieve the estimated total cost of a plan passing through this node."""
        return self.g + self.h

    def __lt__(self, other: SearchNode) -> bool:
        """Order nodes by total estimated cost, breaking ties by creation order."""
        return (self.f, self.id) < (other.f, other.id)

    def describe_move(self) -> str:
        """Describe the action and binding that produced this node."""
        return "(root)" if self.action is None else self.action.format(self.binding)


class VisitedNodes:
    """An append-only store of the nodes removed from the frontier (i.e., the closed list).

    Nodes refer to their predecessors by index into this store.
    """

    def __init__(self) -> None:
        """Initialize an empty store of visited nodes."""
        self._nodes: list[SearchNode] = []
        self._by_fingerprint: dict[int, list[int]] = defaultdict(list)
        """Map from state fingerprints to the indices of visited nodes with that fingerprint."""

    def __len__(self) -> int:
        """Retrieve the number of visited nodes."""
        return len(self._nodes)

    def __getitem__(self, index: int) -> SearchNode:
        """Retrieve the visited node at the given index."""
        return self._nodes[index]

    def __iter__(self) -> Iterator[SearchNode]:
        """Iterate over the visited nodes in the order they were visited."""
        return iter(self._nodes)

    def append(self, node: SearchNode) -> int:
        """Store a newly visited node and return its index."""
        index = len(self._nodes)
        self._nodes.append(node)
        self._by_fingerprint[node.state.fingerprint].append(index)
        return index

    def contains_state(self, state: WorldState) -> bool:
        """Evaluate whether any visited node has a state equal to the given state."""
        candidates = self._by_fingerprint.get(state.fingerprint, ())
        return any(self._nodes[i].state == state for i in candidates)

    def clear(self) -> None:
        """Remove all visited nodes."""
        self._nodes.clear()
        self._by_fingerprint.clear()
