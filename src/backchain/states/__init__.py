"""Import the class representing sparse symbolic world states."""

from .world_state import WorldState as WorldState
