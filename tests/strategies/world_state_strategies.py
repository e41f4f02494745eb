"""Define strategies for generating facts, world states, and actions for property-based testing."""

from __future__ import annotations

import hypothesis.strategies as st

from backchain.actions import Action
from backchain.facts import ConditionType, EffectType, Fact, Operation
from backchain.states import WorldState

small_values = st.integers(min_value=-3, max_value=3)
"""Fact values drawn from a narrow range, so that independently drawn values often collide."""


@st.composite
def facts(draw: st.DrawFn) -> Fact:
    """Generate random facts from a small vocabulary of predicates and objects."""
    name = draw(st.sampled_from(["at", "has", "open", "count"]))
    args = draw(st.lists(st.sampled_from(["a", "b", "c"]), max_size=2))
    return Fact(name, tuple(args))


@st.composite
def fact_mappings(draw: st.DrawFn) -> dict[Fact, int]:
    """Generate random mappings from facts to values."""
    return draw(st.dictionaries(facts(), small_values, max_size=6))


@st.composite
def world_states(draw: st.DrawFn) -> WorldState:
    """Generate random sparse world states."""
    return WorldState(draw(fact_mappings()))


@st.composite
def operations(draw: st.DrawFn) -> Operation:
    """Generate random operations with literal (i.e., non-parameter) values."""
    return Operation(
        condition=draw(st.sampled_from(list(ConditionType))),
        condition_value=draw(small_values),
        effect=draw(st.sampled_from(list(EffectType))),
        effect_value=draw(small_values),
    )


@st.composite
def post_matched_pairs(draw: st.DrawFn) -> tuple[Action, WorldState]:
    """Generate a parameterless action and a state that could have resulted from it.

    The first entry of the action always sets its fact, and the state always holds that
    fact, so at least one entry is guaranteed to match. Every other fact the action
    touches is only present in the state if its value is consistent with the action.
    """
    first_op = Operation(
        condition=draw(st.sampled_from(list(ConditionType))),
        condition_value=draw(small_values),
        effect=EffectType.SET,
        effect_value=draw(small_values),
    )
    ops = [first_op] + draw(st.lists(operations(), max_size=3))
    action = Action("Generated", {Fact(f"p{i}"): op for i, op in enumerate(ops)})

    state = WorldState({Fact("p0"): first_op.effect_value})
    for i, op in enumerate(ops[1:], start=1):
        value = draw(small_values)
        check = op.consistent_with_effect if op.has_effect else op.condition_holds
        if check(value) and draw(st.booleans()):
            state.set(Fact(f"p{i}"), value)

    # Facts the action doesn't touch may hold arbitrary values
    for fact, value in draw(fact_mappings()).items():
        state.set(fact, value)

    return action, state
