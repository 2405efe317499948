import random
import logging
from dataclasses import replace

from crimson_dot.config import SimulationConfig, Viewport
from crimson_dot.constants import STORM_LEVEL, EVOLVE_TEXTS, ASCENDED_TEXT, PAUSED_TEXT
from crimson_dot.models import Pet, Couch, FoodBowl
from crimson_dot.placement import PlacementSampler
from crimson_dot.evolution import EvolutionManager
from crimson_dot.weather import StormWeather
from crimson_dot.behavior import BehaviorStateMachine, sanitize_dt

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the cat, the couch and the bowl plus the simulation clock.

    The frame loop feeds `update(dt, pointer)`; everything observable comes
    back as a Snapshot, which is also pushed to subscribed observers once the
    tick has been committed.
    """
    def __init__(self, config=None, viewport=None, play_sound=None, rng=None,
                 on_animation=None, best_times=None):
        self.config = config or SimulationConfig()
        self.viewport = viewport or Viewport()
        self.rng = rng or random.Random()
        self.play_sound = play_sound or (lambda name: None)
        self.best_times = best_times

        self.pet = Pet()
        self.couch = Couch()
        self.food = FoodBowl()
        self.sampler = PlacementSampler(self.config, self.rng)
        self.evolution = EvolutionManager(self.config, self.sampler, self._play)
        self.weather = StormWeather(self._play, self.rng)
        self.machine = BehaviorStateMachine(
            self.pet, self.couch, self.food, self.config, self.viewport,
            self.sampler, self.evolution, play_sound=self._play, on_animation=on_animation,
        )

        self.game_time = 0.0
        self.running = False
        self.scene = None
        self.best_time = best_times.load() if best_times else None
        self._observers = []
        self.new_game()

    def _play(self, name):
        self.play_sound(name)

    # --- Observers ---
    def subscribe(self, callback):
        self._observers.append(callback)
        return callback

    def unsubscribe(self, callback):
        if callback in self._observers:
            self._observers.remove(callback)

    # --- Clock control ---
    @property
    def ascended(self) -> bool:
        return self.evolution.ascended

    def start(self):
        self.running = True
        self.scene = None

    def pause(self):
        self.running = False
        self.scene = PAUSED_TEXT

    def new_game(self):
        """Reset level, meters, timers and game time. The clock stays as it was."""
        self.machine.reset()
        self.weather.reset()
        self.game_time = 0.0
        self.scene = None
        self.last_snapshot = self.machine.snapshot(game_time=0.0)
        logger.info("New game")

    def resize(self, window_width, window_height):
        self.viewport = Viewport.for_window(window_width, window_height, self.config)
        self.machine.set_viewport(self.viewport)
        self.machine.recenter()
        self.sampler.place_couch(self.couch, self.viewport)
        if self.food.visible:
            # The old spot may lie outside a smaller world
            self.sampler.place_food(self.food, self.couch, self.viewport)
        logger.debug("Viewport now %dx%d at zoom %d", self.viewport.width, self.viewport.height, self.viewport.zoom)
        return self.viewport

    # --- Tick ---
    def update(self, dt, pointer):
        if not self.running:
            return self.last_snapshot
        dt = sanitize_dt(dt)
        self.game_time += dt
        snapshot = self.machine.tick(dt, pointer)

        event = self.machine.last_evolution
        if event:
            # Every evolution stops the clock for its cutscene
            self.running = False
            self.scene = ASCENDED_TEXT if event.ascended else EVOLVE_TEXTS.get(event.level)
            if event.ascended and self.best_times:
                self.best_time = self.best_times.record(self.game_time)

        lightning = False
        if self.pet.evolution_level == STORM_LEVEL:
            lightning = self.weather.update(dt)

        snapshot = replace(snapshot, game_time=self.game_time, lightning=lightning, scene=self.scene)
        self.last_snapshot = snapshot
        for observer in list(self._observers):
            observer(snapshot)
        return snapshot
