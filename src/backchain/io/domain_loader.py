"""Define functions to import planning problems from YAML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from backchain.actions import Action, ActionSet, all_distinct
from backchain.facts import ConditionType, EffectType, Fact, Operation, Param
from backchain.io.domain_schema import ParamRefSchema, PlanningProblemSchema
from backchain.io.logging import Context
from backchain.io.yaml_utils import load_yaml_data
from backchain.planning import Heuristic, Planner
from backchain.states import WorldState

if TYPE_CHECKING:
    from backchain.io.domain_schema import (
        ActionSchema,
        FactSchema,
        FactValueSchema,
        OperationSchema,
    )


@dataclass
class PlanningProblem:
    """A start state, goal state, object pool, and action library to plan with."""

    start: WorldState
    goal: WorldState
    actions: ActionSet
    objects: tuple[Any, ...] = ()
    heuristic: Heuristic = Heuristic.COARSE
    action_by_name: dict[str, Action] = field(default_factory=dict)

    def make_planner(self, context: Context | None = None) -> Planner:
        """Create a planner configured to solve this problem."""
        return Planner(
            start=self.start,
            goal=self.goal,
            actions=self.actions,
            objects=self.objects,
            heuristic=self.heuristic,
            context=context,
        )


def _to_value(value: ParamRefSchema | Any) -> Any:
    """Convert a validated argument or value into a literal or a parameter placeholder."""
    return Param(value.param) if isinstance(value, ParamRefSchema) else value


def fact_from_schema(schema: FactSchema) -> Fact:
    """Construct a Fact from its validated YAML description."""
    return Fact(schema.name, tuple(_to_value(arg) for arg in schema.args))


def operation_from_schema(schema: OperationSchema) -> Operation:
    """Construct an Operation from its validated YAML description."""
    fields: dict[str, Any] = {}
    if schema.condition is not None:
        fields["condition"] = ConditionType(schema.condition.type)
        fields["condition_value"] = _to_value(schema.condition.value)
    if schema.effect is not None:
        fields["effect"] = EffectType(schema.effect.type)
        fields["effect_value"] = _to_value(schema.effect.value)
    return Operation(**fields)


def action_from_schema(schema: ActionSchema) -> Action:
    """Construct an Action from its validated YAML description.

    :raises ValueError: If two operations of the action act on the same fact
    """
    operations: dict[Fact, Operation] = {}
    for op_schema in schema.operations:
        fact = fact_from_schema(op_schema.fact)
        if fact in operations:
            raise ValueError(f"Action '{schema.name}' has multiple operations on '{fact}'.")
        operations[fact] = operation_from_schema(op_schema)

    return Action(
        name=schema.name,
        operations=operations,
        num_params=schema.parameters,
        cost=schema.cost,
        special_condition=all_distinct if schema.distinct_parameters else None,
    )


def world_state_from_schema(entries: list[FactValueSchema]) -> WorldState:
    """Construct a WorldState from its validated YAML description.

    :raises ValueError: If a fact is given more than one value, or refers to a parameter
    """
    state = WorldState()
    for entry in entries:
        fact = fact_from_schema(entry.fact)
        if not fact.is_ground:
            raise ValueError(f"World state facts cannot refer to parameters: '{fact}'.")
        if fact in state:
            raise ValueError(f"Fact '{fact}' is given multiple values.")
        state.set(fact, entry.value)
    return state


def planning_problem_from_data(yaml_data: dict[str, Any]) -> PlanningProblem:
    """Construct a PlanningProblem from a dictionary of data imported from YAML.

    :raises pydantic.ValidationError: If the data doesn't match the planning problem schema
    """
    schema = PlanningProblemSchema.model_validate(yaml_data)

    action_set = ActionSet()
    action_by_name: dict[str, Action] = {}
    for action_schema in schema.actions:
        action = action_from_schema(action_schema)
        action_set.add(action, action_schema.preference)
        action_by_name[action.name] = action

    return PlanningProblem(
        start=world_state_from_schema(schema.start),
        goal=world_state_from_schema(schema.goal),
        actions=action_set,
        objects=tuple(schema.objects),
        heuristic=Heuristic(schema.heuristic),
        action_by_name=action_by_name,
    )


def load_planning_problem(yaml_path: Path | str) -> PlanningProblem:
    """Load a planning problem from a YAML file."""
    yaml_data = load_yaml_data(Path(yaml_path), required_keys={"actions", "start", "goal"})
    return planning_problem_from_data(yaml_data)
