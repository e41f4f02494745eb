"""Define classes to represent facts (i.e., predicate keys) about the state of the world."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from numbers import Real
from typing import Any, Tuple

FactValue = int
"""An integer payload stored for a fact (e.g., a Boolean flag, a count, or an enumerant)."""

Binding = Tuple[Any, ...]
"""A tuple of concrete objects bound (in order) to the parameters of an action."""


@dataclass(frozen=True)
class Param:
    """A placeholder referring to a slot of an action's parameter binding."""

    index: int

    def __str__(self) -> str:
        """Create a readable string representation of the placeholder."""
        return f"?{self.index}"

    def resolve(self, binding: Binding) -> Any:
        """Retrieve the object bound to this placeholder's slot."""
        return binding[self.index]


def resolve_value(value: Any, binding: Binding) -> Any:
    """Resolve a value that may be a parameter placeholder using the given binding."""
    return value.resolve(binding) if isinstance(value, Param) else value


def _argument_key(arg: Any) -> tuple:
    """Define a sort key for a fact argument that agrees with argument equality.

    Numbers sort by value (so `1`, `1.0`, and `True` are equivalent, as they are equal), then
    other objects by their string form, then placeholders by index. Fact arguments are meant
    to be numbers, strings, or placeholders; other objects sort by `str()`, which must then
    be distinct for unequal objects.
    """
    if isinstance(arg, Param):
        return (2, arg.index)
    if isinstance(arg, Real):
        return (0, arg)
    return (1, str(arg))


@total_ordering
@dataclass(frozen=True)
class Fact:
    """A predicate name together with an ordered tuple of arguments.

    Argument slots may hold `Param` placeholders, which are filled in from an action's
    parameter binding when the action is matched against a world state.
    """

    name: str
    args: tuple[Any, ...] = ()

    def _key(self) -> tuple:
        """Define a sort key that orders facts consistently with fact equality."""
        return (self.name, tuple(_argument_key(arg) for arg in self.args))

    def __lt__(self, other: object) -> bool:
        """Evaluate whether this fact sorts before another."""
        if not isinstance(other, Fact):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        """Create a readable string representation of the fact."""
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(map(str, self.args))})"

    @property
    def is_ground(self) -> bool:
        """Check whether no argument of the fact is an unresolved placeholder."""
        return not any(isinstance(arg, Param) for arg in self.args)

    @property
    def params(self) -> tuple[Param, ...]:
        """Retrieve the placeholders appearing in the fact's arguments."""
        return tuple(arg for arg in self.args if isinstance(arg, Param))

    def bind(self, binding: Binding) -> Fact:
        """Create a copy of the fact with its placeholders resolved by the given binding.

        :param binding: Objects bound to an action's parameters (may be empty)
        :return: Fact with resolved arguments, or this fact if there's nothing to resolve
        """
        if not binding or self.is_ground:
            return self
        return Fact(self.name, tuple(resolve_value(arg, binding) for arg in self.args))
