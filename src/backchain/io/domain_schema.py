"""Define Pydantic models for validating planning problem YAML files.

Example usage:
    from backchain.io.domain_schema import PlanningProblemSchema

    yaml_data = load_yaml_data("problem.yaml")
    schema = PlanningProblemSchema.model_validate(yaml_data)  # Raises ValidationError on issues
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Fact Schemata
# =============================================================================


class ParamRefSchema(BaseModel):
    """Schema for a reference to a slot of an action's parameter binding."""

    param: int = Field(ge=0, description="Index of the referenced action parameter")

    model_config = ConfigDict(extra="forbid")


ArgumentSchema = Union[ParamRefSchema, int, str]
"""A fact argument is a literal object (name or number) or a parameter reference."""

ValueSchema = Union[ParamRefSchema, int]
"""An operation value is a literal integer or a parameter reference."""


class FactSchema(BaseModel):
    """Schema for a fact: a predicate name and its arguments."""

    name: str = Field(min_length=1)
    args: List[ArgumentSchema] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class FactValueSchema(BaseModel):
    """Schema for one (fact, value) entry of a world state."""

    fact: FactSchema
    value: int = 1

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Action Schemata
# =============================================================================

ConditionName = Literal[
    "unset", "equals", "not_equal", "less", "greater", "less_equal", "greater_equal"
]
EffectName = Literal["set", "unset", "increment", "decrement"]


class ConditionSchema(BaseModel):
    """Schema for the condition an action requires of a fact."""

    type: ConditionName
    value: ValueSchema = 0

    model_config = ConfigDict(extra="forbid")


class EffectSchema(BaseModel):
    """Schema for the effect an action has on a fact."""

    type: EffectName
    value: ValueSchema = 1

    model_config = ConfigDict(extra="forbid")


class OperationSchema(BaseModel):
    """Schema for the operation an action performs on one fact."""

    fact: FactSchema
    condition: Optional[ConditionSchema] = None
    effect: Optional[EffectSchema] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_not_empty(self) -> OperationSchema:
        """Ensure that the operation has a condition, an effect, or both."""
        if self.condition is None and self.effect is None:
            raise ValueError(f"Operation on fact '{self.fact.name}' has no condition or effect.")
        return self


class ActionSchema(BaseModel):
    """Schema for an action template and its preference in the action library."""

    name: str = Field(min_length=1)
    parameters: int = Field(default=0, ge=0, description="Number of action parameters")
    cost: float = Field(default=1.0, ge=0)
    preference: float = Field(default=1.0, ge=0, description="Multiplier of the action's cost")
    distinct_parameters: bool = Field(
        default=False,
        description="Reject bindings that assign one object to several parameters",
    )
    operations: List[OperationSchema] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_param_refs(self) -> ActionSchema:
        """Ensure that all parameter references are within the action's parameter count."""
        for op in self.operations:
            refs = [a for a in op.fact.args if isinstance(a, ParamRefSchema)]
            refs += [
                s.value
                for s in (op.condition, op.effect)
                if s is not None and isinstance(s.value, ParamRefSchema)
            ]
            for ref in refs:
                if ref.param >= self.parameters:
                    raise ValueError(
                        f"Action '{self.name}' refers to parameter {ref.param}, "
                        f"but has only {self.parameters} parameters.",
                    )
        return self


# =============================================================================
# Planning Problem Schema
# =============================================================================


class PlanningProblemSchema(BaseModel):
    """Schema for a complete planning problem."""

    objects: List[Union[int, str]] = Field(default_factory=list)
    heuristic: Literal["coarse", "graduated"] = "coarse"
    actions: List[ActionSchema] = Field(min_length=1)
    start: List[FactValueSchema]
    goal: List[FactValueSchema]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_unique_action_names(self) -> PlanningProblemSchema:
        """Ensure that no two actions share a name."""
        names = [a.name for a in self.actions]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate action names: {', '.join(duplicates)}.")
        return self
