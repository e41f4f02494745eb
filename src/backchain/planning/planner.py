"""Define a planner that searches backward from a goal state using A* search.

The search can be run to completion with `plan()`, or driven one step at a time using
`init_search()`, `step()`, and `finalize()` so that a host can interleave planning with
other work (e.g., bounding the number of steps taken per frame).

Reference: Section 3.5.2 (pg. 85-86) of AIMA (4th Ed.) by Russell and Norvig.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import TYPE_CHECKING, Iterable, Iterator, List

from backchain.io.logging import Context, LoggingContext, console
from backchain.planning.frontier import Frontier
from backchain.planning.heuristics import Heuristic
from backchain.planning.search_node import SearchNode, VisitedNodes
from backchain.states import WorldState

if TYPE_CHECKING:
    from backchain.actions import ActionSet, ActionTemplate
    from backchain.facts import Binding


@dataclass(frozen=True)
class PlanEntry:
    """One step of a plan: an action together with the objects bound to its parameters."""

    action: ActionTemplate
    binding: Binding = ()

    def __str__(self) -> str:
        """Create a readable string representation of the plan step."""
        return self.action.format(self.binding)


Plan = List[PlanEntry]
"""An ordered sequence of plan steps, in the order they should be executed."""


def enumerate_bindings(objects: tuple, num_params: int) -> Iterator[Binding]:
    """Enumerate every binding of the given objects to a number of parameters.

    An action without parameters has exactly one (empty) binding.
    """
    return product(objects, repeat=num_params)


class Planner:
    """Searches backward from a goal state for a plan that is consistent with a start state."""

    def __init__(
        self,
        start: WorldState | None = None,
        goal: WorldState | None = None,
        actions: ActionSet | None = None,
        objects: Iterable = (),
        heuristic: Heuristic = Heuristic.COARSE,
        context: Context | None = None,
    ) -> None:
        """Initialize the planner with a (possibly incomplete) planning problem.

        :param start: Current state of the world
        :param goal: Desired state of the world
        :param actions: Library of weighted actions used to transform the world
        :param objects: Pool of objects bound to action parameters
        :param heuristic: Estimates the distance from a candidate state to the start
        :param context: Diagnostics sink for planning events (defaults to a LoggingContext)
        """
        self.start = start
        self.goal = goal
        self.actions = actions
        self.objects = tuple(objects)
        self.heuristic = heuristic
        self.context: Context = context or LoggingContext()

        self.result: Plan = []
        """Plan found by the most recently finalized search (empty if it failed)."""

        self.frontier = Frontier()
        self.visited = VisitedNodes()

        self._next_id = 0
        self._success = False
        self._num_step_calls = 0
        self._nodes_expanded = 0

    @property
    def success(self) -> bool:
        """Check whether the current (or most recent) search found a plan."""
        return self._success

    @property
    def steps_taken(self) -> int:
        """Retrieve the number of search steps taken during the current search."""
        return self._num_step_calls

    @property
    def nodes_expanded(self) -> int:
        """Retrieve the number of nodes whose predecessors have been generated."""
        return self._nodes_expanded

    @property
    def frontier_size(self) -> int:
        """Retrieve the number of nodes awaiting a visit in the current search."""
        return len(self.frontier)

    @property
    def visited_count(self) -> int:
        """Retrieve the number of nodes visited during the current search."""
        return len(self.visited)

    def plan(self) -> bool:
        """Run a complete search for a plan, which is afterward stored in `result`.

        :return: True if a plan was found, otherwise False
        """
        if not self.init_search():
            self.result = []
            return False

        while self.step():
            pass

        self.finalize()
        return self.success

    def init_search(self) -> bool:
        """Reset all search data and seed the frontier with the goal state.

        :return: False if the start state, goal state, or action set is unset, else True
        """
        if self.start is None or self.goal is None or self.actions is None:
            self.context.log_event("Planning failed due to unset start, goal or action set!")
            return False

        self.context.log_event("Starting new plan.")

        self._success = False
        self.frontier.clear()
        self.visited.clear()
        self._next_id = 0
        self._num_step_calls = 0
        self._nodes_expanded = 0

        root = SearchNode(state=self.goal.copy(), id=self._allocate_id())
        root.h = self.heuristic(root.state, self.start)
        self.frontier.push(root)
        return True

    def step(self) -> bool:
        """Visit the best node in the frontier and generate its predecessors.

        :return: True if the search has more work to do, otherwise False
        """
        if self._success or not self.frontier:
            return False

        self._num_step_calls += 1

        node = self.frontier.pop()
        self.context.log_event("Moving state %d from open to closed.", node.id)
        node_index = self.visited.append(node)

        if WorldState.comp_start(node.state, self.start) == 0:
            self._success = True
            return False

        for action, preference in self.actions or ():
            for binding in enumerate_bindings(self.objects, action.num_params):
                self._attempt_predecessor(node, node_index, action, preference, binding)

        self._nodes_expanded += 1
        return True

    def finalize(self) -> None:
        """Extract the plan found by a successful search, then discard all search data."""
        self.context.log_event("Finalising plan!")

        self.result = []
        if self._success:
            # Walk from the node consistent with the start back up to the goal
            node = self.visited[len(self.visited) - 1]
            while node.prev is not None:
                self.result.append(PlanEntry(node.action, node.binding))
                node = self.visited[node.prev]

        self.frontier.clear()
        self.visited.clear()

    def log_info(self) -> None:
        """Log the current state of the search to the console."""
        console.print(f"Current frontier size: {self.frontier_size}.")
        console.print(f"Current number of visited nodes: {self.visited_count}.")
        console.print(f"Search steps taken: {self._num_step_calls}.")
        console.print(f"Nodes expanded: {self._nodes_expanded}.")

    def _allocate_id(self) -> int:
        """Allocate a new, unique node ID."""
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def _attempt_predecessor(
        self,
        node: SearchNode,
        node_index: int,
        action: ActionTemplate,
        preference: float,
        binding: Binding,
    ) -> None:
        """Try to undo an action from a visited node, updating the frontier if worthwhile.

        :param node: Node being expanded
        :param node_index: Index of the expanded node among the visited nodes
        :param action: Action that may have produced the node's state
        :param preference: Multiplier applied to the action's cost
        :param binding: Objects bound to the action's parameters
        """
        if not node.state.post_match(action, binding):
            return

        state = node.state.copy()
        state.apply_reverse(action, binding)

        if self.visited.contains_state(state):
            return

        candidate = SearchNode(
            state=state,
            id=-1,
            g=node.g + action.cost * preference,
            h=self.heuristic(state, self.start),
            action=action,
            binding=tuple(binding),
            prev=node_index,
        )

        existing = self.frontier.find(state)
        if existing is not None:
            if candidate.f < existing.f:
                self.frontier.replace(existing, candidate)
                self.context.log_event("Updating state %d to F=%f", candidate.id, candidate.f)
            return

        candidate.id = self._allocate_id()
        self.frontier.push(candidate)
        self.context.log_event(
            "Pushing new state %d %s via action %s onto open list with score F=%.3f.",
            candidate.id,
            candidate.state,
            candidate.describe_move(),
            candidate.f,
        )
