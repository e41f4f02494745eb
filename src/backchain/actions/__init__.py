"""Import classes used to define the actions available to the planner."""

from .action import Action as Action
from .action import ActionTemplate as ActionTemplate
from .action import SpecialCondition as SpecialCondition
from .action import all_distinct as all_distinct
from .action_set import ActionSet as ActionSet
