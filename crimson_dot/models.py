from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

from crimson_dot.constants import CAT_SIZE, COUCH_SIZE, FOOD_SIZE


class CatState(Enum):
    """
    The behavioural states of the cat. Exactly one is active at a time.
    Values double as the animation base names used by the sprite sheets.
    """
    AWAKE = "awake"
    IDLE = "idle"
    EXHAUSTED = "exhausted"
    ASLEEP = "asleep"
    EATING = "eating"
    SEEKING_COUCH = "seekingCouch"

    @classmethod
    def _missing_(cls, value):
        """
        Flexible lookup so names like 'SEEKING_COUCH', 'seeking-couch' or
        'seekingcouch' all resolve to the same member.
        """
        if isinstance(value, str):
            normalized = value.replace('-', '').replace('_', '').lower()
            for member in cls:
                if member.value.lower() == normalized or member.name.replace('_', '').lower() == normalized:
                    return member
        return super()._missing_(value)


@dataclass
class Pet:
    """The cat. Plain record; all behaviour lives in the simulation components."""
    x: float = 0.0
    y: float = 0.0
    width: float = CAT_SIZE[0]
    height: float = CAT_SIZE[1]
    state: CatState = CatState.AWAKE
    facing_right: bool = False

    # Meters
    happiness: float = 0.0
    exhaustion: float = 0.0

    # Timers (seconds)
    idle_timer: float = 0.0
    outside_range_timer: float = 0.0
    sleep_timer: float = 0.0
    eating_timer: float = 0.0
    eating_sound_timer: float = 0.0
    evolution_timer: float = 0.0

    evolution_level: int = 0
    evolution_target_time: float = 0.0
    bored: bool = False

    last_pointer_x: float = 0.0
    last_pointer_y: float = 0.0

    def reset_timers(self):
        """Re-engagement clears the inactivity and activity timers."""
        self.idle_timer = 0.0
        self.outside_range_timer = 0.0
        self.sleep_timer = 0.0
        self.eating_timer = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Couch:
    x: float = 0.0
    y: float = 0.0
    width: float = COUCH_SIZE[0]
    height: float = COUCH_SIZE[1]


@dataclass
class FoodBowl:
    x: float = 0.0
    y: float = 0.0
    width: float = FOOD_SIZE[0]
    height: float = FOOD_SIZE[1]
    visible: bool = False  # Start hidden until the cat gets hungry


@dataclass(frozen=True)
class Snapshot:
    """Read-only status produced once per tick for rendering and UI collaborators."""
    state: CatState
    x: float
    y: float
    facing_right: bool
    happiness: float
    exhaustion: float
    stamina_percent: float
    evolution_percent: int
    evolving: bool
    level: int
    stage: str
    animation: str
    couch: Tuple[float, float]
    food: Tuple[float, float]
    food_visible: bool
    idle_time: float = 0.0
    sleep_time: float = 0.0
    game_time: float = 0.0
    lightning: bool = False
    ascended: bool = False
    events: Tuple[str, ...] = field(default_factory=tuple)
    scene: Optional[str] = None
