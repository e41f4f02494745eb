"""Define a sparse snapshot of symbolic knowledge about the world.

A world state maps facts to integer values. A fact missing from the mapping is unknown,
which is distinct from being false. Besides lookup and mutation, world states can be
compared against each other and matched against the (fact, operation) entries of actions,
which is how the planner chains backward from a goal toward the start.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Mapping

from backchain.facts import ConditionType, EffectType

if TYPE_CHECKING:
    from backchain.actions import ActionTemplate
    from backchain.facts import Binding, Fact, FactValue, Operation


def _bound_entries(action: ActionTemplate, binding: Binding) -> Iterator[tuple[Fact, Operation]]:
    """Yield the action's (fact, operation) entries with the binding substituted in."""
    for fact, op in action:
        yield fact.bind(binding), op.bind(binding)


class WorldState:
    """A sparse mapping from facts to integer values, with a cheap derived fingerprint."""

    def __init__(self, facts: Mapping[Fact, FactValue] | None = None) -> None:
        """Initialize the world state, optionally from an existing fact-to-value mapping."""
        self._facts: dict[Fact, FactValue] = dict(facts) if facts else {}
        self._fingerprint = 0
        self._update_fingerprint()

    def __contains__(self, fact: object) -> bool:
        """Evaluate whether the world state has a value for the given fact."""
        return fact in self._facts

    def __len__(self) -> int:
        """Retrieve the number of facts with known values."""
        return len(self._facts)

    def __eq__(self, other: object) -> bool:
        """Evaluate whether two world states hold identical facts with identical values."""
        if not isinstance(other, WorldState):
            return NotImplemented
        if self._fingerprint != other._fingerprint:  # noqa: SLF001
            return False
        return self._facts == other._facts  # noqa: SLF001

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Create an unambiguous string representation of the world state."""
        return f"WorldState({dict(self.items())!r})"

    def __str__(self) -> str:
        """Create a deterministic, human-readable rendering of the world state."""
        lines = [f"    {fact} -> {value}" for fact, value in self.items()]
        return "{\n" + "".join(line + "\n" for line in lines) + "}"

    @property
    def fingerprint(self) -> int:
        """Retrieve a hash of the state's contents (equal states have equal fingerprints)."""
        return self._fingerprint

    def items(self) -> list[tuple[Fact, FactValue]]:
        """Retrieve the state's (fact, value) pairs, sorted by fact."""
        return sorted(self._facts.items())

    def copy(self) -> WorldState:
        """Create an independent copy of the world state."""
        return WorldState(self._facts)

    def set(self, fact: Fact, value: FactValue) -> None:
        """Map the given fact to a value, overwriting any previous value."""
        self._facts[fact] = value
        self._update_fingerprint()

    def unset(self, fact: Fact) -> None:
        """Remove the given fact from the state, making its value unknown."""
        self._facts.pop(fact, None)
        self._update_fingerprint()

    def get(self, fact: Fact, default: FactValue = 0) -> tuple[FactValue, bool]:
        """Look up the value of a fact.

        :param fact: Fact to be looked up
        :param default: Value reported if the fact is absent (defaults to 0)
        :return: Tuple of the fact's value (or the default) and whether the fact was found
        """
        if fact not in self._facts:
            return default, False
        return self._facts[fact], True

    def pre_match(self, action: ActionTemplate, binding: Binding) -> bool:
        """Evaluate whether the action's conditions are all satisfied in this state.

        An absent fact only satisfies an UNSET condition.

        :param action: Action whose conditions are checked
        :param binding: Objects bound to the action's parameters
        :return: True if the action could be performed in this state, else False
        """
        if not action.check_special_conditions(binding):
            return False

        for fact, op in _bound_entries(action, binding):
            if not op.has_condition:
                continue
            value, found = self.get(fact)
            if found and not op.condition_holds(value):
                return False
            if not found and op.condition is not ConditionType.UNSET:
                return False
        return True

    def post_match(self, action: ActionTemplate, binding: Binding) -> bool:
        """Evaluate whether this state is a plausible result of performing the action.

        Each stored value touched by the action must be consistent with the entry's effect
        (or, for an entry without an effect, with its condition). Facts the action touches
        that are absent here are not contradictions. At least one entry must match.

        :param action: Action that may have produced this state
        :param binding: Objects bound to the action's parameters
        :return: True if undoing the action from this state is plausible, else False
        """
        if not action.check_special_conditions(binding):
            return False

        consistencies = 0
        for fact, op in _bound_entries(action, binding):
            if not op.has_effect and not op.has_condition:
                continue
            value, found = self.get(fact)
            if not found:
                continue

            if op.has_effect:
                consistent = op.consistent_with_effect(value)
            else:
                consistent = op.condition_holds(value)

            if not consistent:
                return False
            consistencies += 1

        return consistencies > 0

    def apply_reverse(self, action: ActionTemplate, binding: Binding) -> None:
        """Transform this state into the state from which the action produces it.

        Effects are undone first. Then each condition is imposed on the predecessor, because
        it must have held for the action to be performed: EQUALS sets its value, UNSET
        removes the fact, and any other condition keeps the stored value if it satisfies the
        condition, or else stores a value that does. A SET effect on a fact with a condition
        is undone by that step rather than by removing the fact.

        :param action: Action being undone
        :param binding: Objects bound to the action's parameters
        """
        for fact, op in _bound_entries(action, binding):
            if op.effect is EffectType.SET and not op.has_condition:
                self._facts.pop(fact, None)
            elif op.effect is EffectType.UNSET:
                self._facts[fact] = op.effect_value
            elif op.effect in (EffectType.INCREMENT, EffectType.DECREMENT) and fact in self:
                self._facts[fact] = op.revert(self._facts[fact])

            if op.condition is ConditionType.EQUALS:
                self._facts[fact] = op.condition_value
            elif op.condition is ConditionType.UNSET:
                self._facts.pop(fact, None)
            elif op.has_condition:
                value, found = self.get(fact)
                if not found or not op.condition_holds(value):
                    self._facts[fact] = op.satisfying_value()

        self._update_fingerprint()

    def apply_forward(self, action: ActionTemplate, binding: Binding) -> None:
        """Apply the action's effects to this state.

        Incrementing or decrementing an unknown fact leaves it unknown.

        :param action: Action being performed
        :param binding: Objects bound to the action's parameters
        """
        for fact, op in _bound_entries(action, binding):
            if op.effect is EffectType.SET:
                self._facts[fact] = op.effect_value
            elif op.effect is EffectType.UNSET:
                self._facts.pop(fact, None)
            elif op.effect in (EffectType.INCREMENT, EffectType.DECREMENT) and fact in self:
                self._facts[fact] = op.advance(self._facts[fact])

        self._update_fingerprint()

    @staticmethod
    def comp_start(ws1: WorldState, ws2: WorldState) -> int:
        """Count the facts defined in both states but mapped to different values.

        Facts defined in only one of the states are ignored.
        """
        smaller, larger = sorted((ws1._facts, ws2._facts), key=len)  # noqa: SLF001
        return sum(
            1 for fact, value in smaller.items() if fact in larger and larger[fact] != value
        )

    @staticmethod
    def comp(ws1: WorldState, ws2: WorldState) -> int:
        """Estimate the distance between two states: 0 if they are equal, else 1."""
        return 0 if ws1 == ws2 else 1

    @staticmethod
    def comp_graduated(ws1: WorldState, ws2: WorldState) -> int:
        """Count the facts that differ in value or are defined in only one of the states."""
        all_facts = ws1._facts.keys() | ws2._facts.keys()  # noqa: SLF001
        return sum(1 for fact in all_facts if ws1.get(fact) != ws2.get(fact))

    def _update_fingerprint(self) -> None:
        """Recompute the fingerprint from the state's (fact, value) pairs."""
        self._fingerprint = hash(frozenset(self._facts.items()))
