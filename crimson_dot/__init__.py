"""Order of the Crimson Dot: virtual cat behaviour simulation."""
from crimson_dot.config import SimulationConfig, Viewport, EvolutionAccrual
from crimson_dot.models import CatState, Pet, Couch, FoodBowl, Snapshot
from crimson_dot.behavior import BehaviorStateMachine
from crimson_dot.session import GameSession

__version__ = "0.1.0"
