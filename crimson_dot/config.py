import os
import math
import logging
from enum import Enum
from dataclasses import dataclass, fields, replace

from crimson_dot import constants as C

logger = logging.getLogger(__name__)

ENV_PREFIX = "CRIMSON_DOT_"


class EvolutionAccrual(Enum):
    """How the evolution timer reacts to happiness dropping below 100."""
    OPPORTUNISTIC = "opportunistic"  # keeps the accrued time
    CONTINUOUS = "continuous"        # starts over


@dataclass(frozen=True)
class SimulationConfig:
    """Tunables of the behaviour simulation. Distances in tiles scale with zoom."""
    tile_size: float = C.TILE_SIZE
    level_width: int = C.LEVEL_WIDTH
    level_height: int = C.LEVEL_HEIGHT
    min_zoom: int = C.MIN_ZOOM

    # Distance band (tiles)
    activation_distance: float = C.ACTIVATION_DISTANCE_TILES
    max_follow_distance: float = C.MAX_FOLLOW_DISTANCE_TILES
    min_distance: float = C.MIN_DISTANCE_TILES
    reengagement_distance: float = C.REENGAGEMENT_DISTANCE_TILES
    pointer_scale: float = 0.5
    pointer_tolerance: float = 0.5

    # Speeds (pixels per tick)
    min_speed: float = C.MIN_SPEED
    max_speed: float = C.MAX_SPEED
    evolution_speed_step: float = 0.1
    seek_speed_fraction: float = 0.25

    # Thresholds (pixels, unscaled)
    couch_threshold: float = C.COUCH_THRESHOLD
    food_threshold: float = C.FOOD_THRESHOLD
    food_min_separation: float = C.FOOD_MIN_SEPARATION
    food_placement_attempts: int = C.FOOD_PLACEMENT_ATTEMPTS

    # Exhaustion
    exhaust_factor: float = C.EXHAUST_FACTOR
    exhaust_threshold: float = C.EXHAUST_THRESHOLD
    hunger_threshold: float = C.HUNGER_THRESHOLD
    sleep_threshold: float = C.SLEEP_THRESHOLD
    recovery_rate: float = C.RECOVERY_RATE
    idle_recovery_multiplier: float = 1.5
    wake_exhaustion_step: float = 50.0
    bored_penalty: bool = True

    # Happiness (per second unless noted)
    happiness_max: float = 100.0
    chase_happiness_gain: float = 6.0
    eating_happiness_gain: float = 5.0
    seeking_happiness_decay: float = 1.0
    sleep_happiness_decay: float = 1.0
    idle_happiness_decay: float = 2.0
    exhausted_happiness_decay: float = 4.0
    wake_happiness_factor: float = 0.9
    evolution_happiness_penalty: float = 25.0

    # Timers (seconds)
    idle_timeout: float = C.IDLE_TIMEOUT
    idle_to_sleep_timeout: float = C.IDLE_TO_SLEEP_TIMEOUT
    sleep_duration: float = C.SLEEP_DURATION
    eating_duration: float = C.EATING_DURATION
    eating_sound_interval: float = 1.0

    # Evolution
    evolution_base_time: float = C.EVOLUTION_BASE_TIME
    evolution_accrual: EvolutionAccrual = EvolutionAccrual.OPPORTUNISTIC
    final_level: int = C.FINAL_LEVEL

    def __post_init__(self):
        if self.tile_size <= 0 or self.level_width <= 0 or self.level_height <= 0:
            raise ValueError("level geometry must be positive")
        if self.min_zoom < 1:
            raise ValueError("min_zoom must be at least 1")
        if not 0 <= self.min_speed <= self.max_speed:
            raise ValueError(f"speeds out of order: min={self.min_speed} max={self.max_speed}")
        if not self.min_distance < self.activation_distance <= self.max_follow_distance:
            raise ValueError("distance band must satisfy min < activation <= max_follow")
        if not 0 < self.exhaust_threshold <= self.hunger_threshold <= self.sleep_threshold:
            raise ValueError("exhaustion thresholds must satisfy exhaust <= hunger <= sleep")
        for name in ("idle_timeout", "idle_to_sleep_timeout", "sleep_duration",
                     "eating_duration", "evolution_base_time", "eating_sound_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.food_placement_attempts < 1:
            raise ValueError("food_placement_attempts must be at least 1")
        if self.final_level >= len(C.LEVELS) - 1 or self.final_level < 0:
            raise ValueError(f"final_level must index a stage before {C.LEVELS[-1]!r}")

    @classmethod
    def from_env(cls, environ=None, **overrides):
        """Build a config, letting CRIMSON_DOT_<FIELD> environment variables override defaults.

        Unparsable values are logged and ignored so a typo never stops the game.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            # Parse by the declared type; several float fields have whole-number defaults
            kind = f.type
            try:
                if kind is bool:
                    values[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
                elif isinstance(kind, type) and issubclass(kind, Enum):
                    values[f.name] = kind(raw.strip().lower())
                elif kind is int:
                    values[f.name] = int(raw)
                else:
                    values[f.name] = float(raw)
            except ValueError:
                logger.warning("Ignoring %s%s=%r: not a valid %s",
                               ENV_PREFIX, f.name.upper(), raw, getattr(kind, "__name__", kind))
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **changes):
        return replace(self, **changes)


@dataclass(frozen=True)
class Viewport:
    """World size and zoom, owned by the resize handler and passed into the core."""
    zoom: int = 1
    width: float = C.LEVEL_WIDTH * C.TILE_SIZE
    height: float = C.LEVEL_HEIGHT * C.TILE_SIZE

    @classmethod
    def for_window(cls, window_width, window_height, config=None):
        """Pick the largest integer zoom that fits the level into the window."""
        config = config or SimulationConfig()
        level_w = config.level_width * config.tile_size
        level_h = config.level_height * config.tile_size
        horizontal = math.floor(window_width / level_w)
        vertical = math.floor((window_height * C.VERTICAL_FILL) / level_h)
        zoom = max(min(horizontal, vertical), config.min_zoom)
        return cls(zoom=zoom, width=level_w * zoom, height=level_h * zoom)

    def scale(self, value: float) -> float:
        return value * self.zoom

    def bounds_for(self, width: float, height: float):
        """Largest top-left coordinate keeping a sprite of the given unscaled size on screen."""
        return (max(0.0, self.width - width * self.zoom),
                max(0.0, self.height - height * self.zoom))

    def centered(self, width: float, height: float):
        return ((self.width - width * self.zoom) / 2,
                (self.height - height * self.zoom) / 2)
