"""Define the heuristics available to estimate the distance from a state to the start."""

from __future__ import annotations

from enum import Enum

from backchain.states import WorldState


class Heuristic(Enum):
    """Selects how the planner estimates the remaining distance of a candidate state.

    COARSE scores 0 for a state equal to the start and 1 otherwise. GRADUATED counts every
    fact that differs in value or is defined in only one of the two states; it is more
    informative, but can overestimate the cost of reaching the start.
    """

    COARSE = "coarse"
    GRADUATED = "graduated"

    def __call__(self, state: WorldState, start: WorldState) -> float:
        """Estimate the distance from the given state to the start state."""
        if self is Heuristic.GRADUATED:
            return float(WorldState.comp_graduated(state, start))
        return float(WorldState.comp(state, start))
