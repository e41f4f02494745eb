"""Unit tests for importing planning problems from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from backchain.facts import ConditionType, EffectType, Fact, Operation, Param
from backchain.io.domain_loader import load_planning_problem, planning_problem_from_data
from backchain.planning import Heuristic
from backchain.states import WorldState


def problems_path() -> Path:
    """Retrieve the path to the folder of example planning problems."""
    path = Path(__file__).parent.parent / "test_data" / "problems"
    assert path.exists()
    return path


def test_load_unlock_door_problem() -> None:
    """Verify that a YAML planning problem is imported into actions and world states."""
    # Arrange/Act
    problem = load_planning_problem(problems_path() / "unlock_door.yaml")

    # Assert - Expect the start and goal states and the two actions from the file
    assert problem.start == WorldState({Fact("hasKey"): 0, Fact("doorOpen"): 0})
    assert problem.goal == WorldState({Fact("doorOpen"): 1})
    assert problem.heuristic is Heuristic.COARSE
    assert problem.objects == ()

    open_door = problem.action_by_name["OpenDoor"]
    assert open_door.cost == 2.0
    assert open_door.operations[Fact("hasKey")].condition is ConditionType.EQUALS
    assert not open_door.operations[Fact("hasKey")].has_effect
    assert open_door.operations[Fact("doorOpen")].effect is EffectType.SET
    assert [a.name for a, _ in problem.actions] == ["Unlock", "OpenDoor"]


def test_solve_loaded_problems() -> None:
    """Verify that planners created from loaded problems find the expected plans."""
    unlock_door = load_planning_problem(problems_path() / "unlock_door.yaml")
    planner = unlock_door.make_planner()
    assert planner.plan()
    assert [str(entry) for entry in planner.result] == ["Unlock()", "OpenDoor()"]

    rooms = load_planning_problem(problems_path() / "move_between_rooms.yaml")
    planner = rooms.make_planner()
    assert planner.plan()
    expected = ["Move(kitchen, hall)", "Move(hall, office)"]
    assert [str(entry) for entry in planner.result] == expected


def test_parameter_references_and_special_condition() -> None:
    """Verify that parameter references become placeholders and distinctness is enforced."""
    problem = load_planning_problem(problems_path() / "move_between_rooms.yaml")
    move = problem.action_by_name["Move"]

    assert move.num_params == 2
    assert Fact("connected", (Param(0), Param(1))) in move.operations
    assert move.check_special_conditions(("kitchen", "hall"))
    assert not move.check_special_conditions(("hall", "hall"))
    assert problem.objects == ("kitchen", "hall", "office")


def test_invalid_parameter_reference_is_rejected() -> None:
    """Verify that an out-of-range parameter reference fails schema validation."""
    with pytest.raises(ValidationError, match="refers to parameter 2"):
        load_planning_problem(problems_path() / "invalid_param.yaml")


def test_missing_required_keys(tmp_path: Path) -> None:
    """Verify that a problem file lacking required sections is rejected."""
    # Arrange - Write a problem without any goal
    yaml_path = tmp_path / "no_goal.yaml"
    yaml_path.write_text("actions: []\nstart: []\n")

    # Act/Assert
    with pytest.raises(KeyError, match="goal"):
        load_planning_problem(yaml_path)


def test_malformed_yaml(tmp_path: Path) -> None:
    """Verify that a file which isn't valid YAML raises a RuntimeError."""
    yaml_path = tmp_path / "broken.yaml"
    yaml_path.write_text("actions: [unclosed\n")

    with pytest.raises(RuntimeError):
        load_planning_problem(yaml_path)


def noop_action_data(**operation: Any) -> dict[str, Any]:
    """Construct the YAML data for a single-operation action named Noop."""
    return {"name": "Noop", "operations": [{"fact": {"name": "x"}, **operation}]}


def test_duplicate_facts_are_rejected() -> None:
    """Verify that a state giving one fact two values is rejected."""
    data = {
        "actions": [noop_action_data(effect={"type": "set"})],
        "start": [{"fact": {"name": "x"}, "value": 0}, {"fact": {"name": "x"}, "value": 1}],
        "goal": [],
    }
    with pytest.raises(ValueError, match="multiple values"):
        planning_problem_from_data(data)


def test_unknown_fields_are_forbidden() -> None:
    """Verify that misspelled fields in a problem are reported rather than ignored."""
    data = {"actions": [noop_action_data(efect={"type": "set"})], "start": [], "goal": []}
    with pytest.raises(ValidationError):
        planning_problem_from_data(data)


def test_missing_file() -> None:
    """Verify that loading a nonexistent problem file raises a FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_planning_problem(problems_path() / "does_not_exist.yaml")


def test_operations_combine_condition_and_effect() -> None:
    """Verify that each operation keeps its condition and effect, with defaults elsewhere."""
    # Arrange/Act
    problem = load_planning_problem(problems_path() / "unlock_door.yaml")
    open_door = problem.action_by_name["OpenDoor"]

    # Assert - Expect the fields given in YAML, and NONE for anything omitted
    assert open_door.operations[Fact("doorOpen")] == Operation(
        condition=ConditionType.EQUALS,
        condition_value=0,
        effect=EffectType.SET,
        effect_value=1,
    )
    assert open_door.operations[Fact("hasKey")] == Operation(
        condition=ConditionType.EQUALS,
        condition_value=1,
    )


def test_effect_only_operation_with_parameter_value() -> None:
    """Verify that an effect-only operation can take its value from an action parameter."""
    data = {
        "objects": [3],
        "actions": [
            {
                "name": "Refill",
                "parameters": 1,
                "operations": [
                    {"fact": {"name": "fuel"}, "effect": {"type": "set", "value": {"param": 0}}},
                ],
            },
        ],
        "start": [],
        "goal": [],
    }

    problem = planning_problem_from_data(data)

    refill = problem.action_by_name["Refill"]
    expected = Operation(effect=EffectType.SET, effect_value=Param(0))
    assert refill.operations[Fact("fuel")] == expected
