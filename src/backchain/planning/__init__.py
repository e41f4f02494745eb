"""Import classes used to search for plans."""

from .frontier import Frontier as Frontier
from .heuristics import Heuristic as Heuristic
from .planner import Plan as Plan
from .planner import PlanEntry as PlanEntry
from .planner import Planner as Planner
from .search_node import SearchNode as SearchNode
from .search_node import VisitedNodes as VisitedNodes
