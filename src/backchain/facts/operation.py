"""Define the condition and effect attached to a fact inside an action template."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Union

from backchain.facts.fact import Param, resolve_value

if TYPE_CHECKING:
    from backchain.facts.fact import Binding, FactValue


class ConditionType(Enum):
    """Enumerates the tests an operation can require of a fact's value."""

    NONE = "none"
    UNSET = "unset"
    EQUALS = "equals"
    NOT_EQUAL = "not_equal"
    LESS = "less"
    GREATER = "greater"
    LESS_EQUAL = "less_equal"
    GREATER_EQUAL = "greater_equal"


class EffectType(Enum):
    """Enumerates the changes an operation can make to a fact's value."""

    NONE = "none"
    SET = "set"
    UNSET = "unset"
    INCREMENT = "increment"
    DECREMENT = "decrement"


OperationValue = Union[int, Param]
"""An operation value is either a literal fact value or a reference to a parameter slot."""


@dataclass(frozen=True)
class Operation:
    """A condition and effect pair bound to one fact of an action template.

    For INCREMENT and DECREMENT effects, the effect value is the delta applied to the fact.
    For an UNSET effect, the effect value is the value restored when the effect is undone.
    """

    condition: ConditionType = ConditionType.NONE
    condition_value: OperationValue = 0
    effect: EffectType = EffectType.NONE
    effect_value: OperationValue = 0

    def __str__(self) -> str:
        """Create a readable string representation of the operation."""
        parts = []
        if self.has_condition:
            parts.append(f"{self.condition.value} {self.condition_value}")
        if self.has_effect:
            parts.append(f"-> {self.effect.value} {self.effect_value}")
        return " ".join(parts) or "noop"

    @property
    def has_condition(self) -> bool:
        """Check whether the operation requires anything of its fact."""
        return self.condition is not ConditionType.NONE

    @property
    def has_effect(self) -> bool:
        """Check whether the operation changes its fact."""
        return self.effect is not EffectType.NONE

    @property
    def params(self) -> tuple[Param, ...]:
        """Retrieve the placeholders used as the operation's values."""
        values = (self.condition_value, self.effect_value)
        return tuple(v for v in values if isinstance(v, Param))

    def bind(self, binding: Binding) -> Operation:
        """Create a copy of the operation with its values resolved by the given binding."""
        if not binding or not self.params:
            return self
        return replace(
            self,
            condition_value=resolve_value(self.condition_value, binding),
            effect_value=resolve_value(self.effect_value, binding),
        )

    def condition_holds(self, value: FactValue) -> bool:
        """Evaluate whether a stored (present) fact value satisfies the condition.

        :param value: Value currently mapped to the operation's fact
        :return: True if the condition accepts the value, else False
        """
        c = self.condition_value
        if self.condition is ConditionType.NONE:
            return True
        if self.condition is ConditionType.UNSET:
            return False  # The fact is present, but is required to be absent
        if self.condition is ConditionType.EQUALS:
            return value == c
        if self.condition is ConditionType.NOT_EQUAL:
            return value != c
        if self.condition is ConditionType.LESS:
            return value < c
        if self.condition is ConditionType.GREATER:
            return value > c
        if self.condition is ConditionType.LESS_EQUAL:
            return value <= c
        return value >= c

    def satisfying_value(self) -> FactValue:
        """Choose a fact value that satisfies the operation's (present-fact) condition.

        :raises ValueError: If the condition is NONE or UNSET, which no stored value selects
        """
        c = self.condition_value
        if self.condition in (
            ConditionType.EQUALS,
            ConditionType.LESS_EQUAL,
            ConditionType.GREATER_EQUAL,
        ):
            return c
        if self.condition is ConditionType.LESS:
            return c - 1
        if self.condition in (ConditionType.GREATER, ConditionType.NOT_EQUAL):
            return c + 1
        raise ValueError(f"No stored value is selected by the condition {self.condition}.")

    def revert(self, value: FactValue) -> FactValue:
        """Compute the value a fact held before the operation's effect produced `value`."""
        if self.effect is EffectType.INCREMENT:
            return value - self.effect_value
        if self.effect is EffectType.DECREMENT:
            return value + self.effect_value
        return value

    def advance(self, value: FactValue) -> FactValue:
        """Compute the value a fact holds after the operation's effect is applied to it."""
        if self.effect is EffectType.SET:
            return self.effect_value
        if self.effect is EffectType.INCREMENT:
            return value + self.effect_value
        if self.effect is EffectType.DECREMENT:
            return value - self.effect_value
        return value

    def consistent_with_effect(self, value: FactValue) -> bool:
        """Evaluate whether a stored (present) value could have just resulted from the effect.

        :param value: Value currently mapped to the operation's fact
        :return: True if applying the effect could have produced the value, else False
        """
        if self.effect is EffectType.NONE:
            return True
        if self.effect is EffectType.SET:
            return value == self.effect_value
        if self.effect is EffectType.UNSET:
            return False  # The effect removes the fact, yet it is present
        if self.condition is ConditionType.UNSET:
            return False  # Cannot increment or decrement an absent fact
        return self.condition_holds(self.revert(value))
