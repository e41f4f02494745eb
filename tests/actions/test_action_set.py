"""Unit tests for the Action and ActionSet classes."""

from __future__ import annotations

import pytest

from backchain.actions import Action, ActionSet, all_distinct
from backchain.facts import EffectType, Fact, Operation, Param

from ..fixtures.planning_fixtures import move_action, unlock_action  # noqa: F401


def test_action_rejects_out_of_range_parameter() -> None:
    """Verify that an action cannot refer to more parameters than it declares."""
    with pytest.raises(ValueError, match="parameter"):
        Action(
            name="Broken",
            operations={Fact("at", (Param(1),)): Operation(effect=EffectType.SET)},
            num_params=1,
        )


def test_action_rejects_negative_cost() -> None:
    """Verify that an action cannot have a negative cost."""
    with pytest.raises(ValueError, match="negative cost"):
        Action(name="Refund", cost=-1.0)


def test_action_formatting(move_action: Action) -> None:
    """Verify that actions render with their bound arguments."""
    assert move_action.format(("kitchen", "hall")) == "Move(kitchen, hall)"
    assert str(move_action) == "Move(?0, ?1)"


def test_special_conditions(move_action: Action, unlock_action: Action) -> None:
    """Verify that special conditions veto only the bindings they reject."""
    assert move_action.check_special_conditions(("kitchen", "hall"))
    assert not move_action.check_special_conditions(("hall", "hall"))
    assert unlock_action.check_special_conditions(())
    assert all_distinct(())


def test_action_set_iteration_order(unlock_action: Action, move_action: Action) -> None:
    """Verify that an action set yields (action, preference) pairs in insertion order."""
    # Arrange/Act
    action_set = ActionSet([(move_action, 2.0)])
    action_set.add(unlock_action)

    # Assert
    assert list(action_set) == [(move_action, 2.0), (unlock_action, 1.0)]
    assert len(action_set) == 2
    assert unlock_action in action_set
    assert action_set.preference_of(move_action) == 2.0


def test_action_set_add_and_remove(unlock_action: Action) -> None:
    """Verify that actions can be re-weighted and removed, but not given negative weight."""
    action_set = ActionSet()
    action_set.add(unlock_action, 3.0)
    action_set.add(unlock_action, 0.5)
    assert list(action_set) == [(unlock_action, 0.5)]

    with pytest.raises(ValueError, match="negative preference"):
        action_set.add(unlock_action, -1.0)

    action_set.remove(unlock_action)
    assert len(action_set) == 0
    with pytest.raises(KeyError):
        action_set.remove(unlock_action)
