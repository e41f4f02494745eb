"""Define a weighted collection of actions available to the planner."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from backchain.actions.action import ActionTemplate


class ActionSet:
    """A library of action templates, each paired with a preference multiplier.

    The planner scales each action's cost by its preference, so that a host can make an
    agent favor or avoid particular actions without editing the templates themselves.
    """

    def __init__(self, actions: Iterable[tuple[ActionTemplate, float]] = ()) -> None:
        """Initialize the action set from (action, preference) pairs."""
        self._preferences: dict[ActionTemplate, float] = {}
        """Map from actions to their preference multipliers, in insertion order."""

        for action, preference in actions:
            self.add(action, preference)

    def __len__(self) -> int:
        """Retrieve the number of actions in the set."""
        return len(self._preferences)

    def __contains__(self, action: object) -> bool:
        """Evaluate whether the given action is in the set."""
        return action in self._preferences

    def __iter__(self) -> Iterator[tuple[ActionTemplate, float]]:
        """Iterate over the (action, preference) pairs of the set."""
        return iter(self._preferences.items())

    def add(self, action: ActionTemplate, preference: float = 1.0) -> None:
        """Add an action to the set, replacing its preference if it is already present.

        :raises ValueError: If the preference multiplier is negative
        """
        if preference < 0:
            raise ValueError(f"Cannot add {action.name} with negative preference {preference}.")
        self._preferences[action] = preference

    def remove(self, action: ActionTemplate) -> None:
        """Remove an action from the set.

        :raises KeyError: If the action is not in the set
        """
        if action not in self._preferences:
            raise KeyError(f"Cannot remove unknown action: '{action.name}'.")
        del self._preferences[action]

    def preference_of(self, action: ActionTemplate) -> float:
        """Retrieve the preference multiplier of an action in the set."""
        return self._preferences[action]
