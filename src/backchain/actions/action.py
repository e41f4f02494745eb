"""Define the capability that planner actions expose, and a stock implementation of it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from backchain.facts import Binding, Fact, Operation

SpecialCondition = Callable[["Binding"], bool]
"""A predicate over a parameter binding that may veto an action regardless of facts."""


class ActionTemplate(Protocol):
    """A parameterized action whose (fact, operation) entries the planner can match against.

    The planner only reads from action templates; it never mutates them.
    """

    @property
    def name(self) -> str:
        """Retrieve the name of the action."""
        ...

    @property
    def num_params(self) -> int:
        """Retrieve the number of parameters the action binds from the object pool."""
        ...

    @property
    def cost(self) -> float:
        """Retrieve the (non-negative) cost of performing the action."""
        ...

    def check_special_conditions(self, binding: Binding) -> bool:
        """Evaluate whether the action accepts the given parameter binding."""
        ...

    def format(self, binding: Binding) -> str:
        """Create a readable description of the action under the given binding."""
        ...

    def __iter__(self) -> Iterator[tuple[Fact, Operation]]:
        """Iterate over the action's (fact, operation) entries."""
        ...


def all_distinct(binding: Binding) -> bool:
    """Accept only bindings in which no object is bound to more than one parameter."""
    return len(set(binding)) == len(binding)


@dataclass(frozen=True, eq=False)
class Action:
    """An action template defined by a mapping from facts to operations.

    Actions compare and hash by identity, so that equal-looking templates remain separate
    entries of an action library.
    """

    name: str
    operations: Mapping[Fact, Operation] = field(default_factory=dict)
    num_params: int = 0
    cost: float = 1.0
    special_condition: Optional[SpecialCondition] = None

    def __post_init__(self) -> None:
        """Validate the parameter count, cost, and placeholder indices of the action."""
        if self.num_params < 0:
            raise ValueError(f"Action '{self.name}' cannot have {self.num_params} parameters.")
        if self.cost < 0:
            raise ValueError(f"Action '{self.name}' cannot have negative cost {self.cost}.")

        for fact, op in self.operations.items():
            for p in fact.params + op.params:
                if not 0 <= p.index < self.num_params:
                    raise ValueError(
                        f"Action '{self.name}' refers to parameter {p} in '{fact}', "
                        f"but has only {self.num_params} parameters.",
                    )

    def __str__(self) -> str:
        """Create a readable string representation of the lifted action."""
        return self.format(tuple(f"?{i}" for i in range(self.num_params)))

    def __iter__(self) -> Iterator[tuple[Fact, Operation]]:
        """Iterate over the action's (fact, operation) entries."""
        return iter(self.operations.items())

    def check_special_conditions(self, binding: Binding) -> bool:
        """Evaluate whether the action's special condition (if any) accepts the binding."""
        return self.special_condition is None or self.special_condition(binding)

    def format(self, binding: Binding) -> str:
        """Create a readable description of the action under the given binding."""
        return f"{self.name}({', '.join(map(str, binding))})"
