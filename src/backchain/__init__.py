"""A goal-directed planner that chains backward from a desired world state using A* search."""

from .actions import Action as Action
from .actions import ActionSet as ActionSet
from .facts import ConditionType as ConditionType
from .facts import EffectType as EffectType
from .facts import Fact as Fact
from .facts import Operation as Operation
from .facts import Param as Param
from .planning import Heuristic as Heuristic
from .planning import PlanEntry as PlanEntry
from .planning import Planner as Planner
from .states import WorldState as WorldState
