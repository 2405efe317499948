import math
import logging

from crimson_dot import movement
from crimson_dot.meters import clamp, decay, increase, stamina_percent, evolution_percent
from crimson_dot.models import CatState, Snapshot
from crimson_dot.evolution import stage_name

logger = logging.getLogger(__name__)

# States that own the whole tick; no chasing or idle bookkeeping runs alongside them.
EXCLUSIVE_STATES = (CatState.EATING, CatState.SEEKING_COUCH, CatState.ASLEEP)


def sanitize_dt(dt) -> float:
    """Negative or non-finite steps are caller bugs; treat them as a zero step."""
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        logger.warning("Rejected non-numeric dt %r, using 0", dt)
        return 0.0
    if not math.isfinite(dt) or dt < 0:
        logger.warning("Rejected dt=%r, using 0", dt)
        return 0.0
    return dt


def animation_name(state: CatState, facing_right: bool) -> str:
    """Sprite animation for a state; awake and exhausted poses are directional."""
    if state is CatState.SEEKING_COUCH:
        state = CatState.EXHAUSTED
    name = state.value
    if state in (CatState.AWAKE, CatState.EXHAUSTED):
        name += "right" if facing_right else "left"
    return name


class BehaviorStateMachine:
    """
    Drives the cat one tick at a time.

    Each tick runs in a fixed order:
      1. pointer geometry (distance, direction, engagement)
      2. evolution accrual
      3. facing
      4. Eating / SeekingCouch / Asleep handlers, which end the tick
      5. food check, idle timers, Idle/Exhausted handling, idle promotion,
         chasing, then passive recovery when the cat did not move
    """
    def __init__(self, pet, couch, food, config, viewport, sampler, evolution,
                 play_sound=None, on_animation=None):
        self.pet = pet
        self.couch = couch
        self.food = food
        self.config = config
        self.viewport = viewport
        self.sampler = sampler
        self.evolution = evolution
        self.play_sound = play_sound or (lambda name: None)
        self.on_animation = on_animation
        self.last_evolution = None
        self._events = []
        self._current_animation = None
        self._handlers = {
            CatState.EATING: self._update_eating,
            CatState.SEEKING_COUCH: self._update_seeking_couch,
            CatState.ASLEEP: self._update_asleep,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self):
        """Fresh cat for a new game: level 0, empty meters, awake in the middle."""
        pet = self.pet
        self.evolution.reset(pet)
        pet.state = CatState.AWAKE
        pet.facing_right = False
        pet.happiness = 0.0
        pet.exhaustion = 0.0
        pet.reset_timers()
        pet.eating_sound_timer = 0.0
        pet.bored = False
        self.food.visible = False
        self.recenter()
        self.sampler.place_couch(self.couch, self.viewport)
        self.last_evolution = None

    def recenter(self):
        self.pet.x, self.pet.y = self.viewport.centered(self.pet.width, self.pet.height)

    def set_viewport(self, viewport):
        self.viewport = viewport

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _transition_to(self, new_state: CatState):
        if self.pet.state is not new_state:
            logger.debug("Cat transitioning from %s to %s", self.pet.state.name, new_state.name)
            self.pet.state = new_state

    def start_eating(self):
        pet = self.pet
        self._transition_to(CatState.EATING)
        pet.reset_timers()
        pet.eating_timer = 0.0
        pet.eating_sound_timer = 0.0
        zoom = self.viewport.zoom
        movement.center_on(pet, self.food, self.viewport, -10 * zoom, -5 * zoom)
        self.play_sound("eat")
        self._events.append("eating")

    def start_seeking_couch(self):
        self._transition_to(CatState.SEEKING_COUCH)
        self.pet.reset_timers()
        self._events.append("seeking_couch")

    def sleep(self, center_on_couch=True):
        pet = self.pet
        self._transition_to(CatState.ASLEEP)
        pet.reset_timers()
        pet.sleep_timer = 0.0
        self.food.visible = False
        if center_on_couch:
            movement.center_on(pet, self.couch, self.viewport)
        self._events.append("asleep")

    def wake_up(self):
        pet, cfg = self.pet, self.config
        self._transition_to(CatState.AWAKE)
        pet.sleep_timer = 0.0
        pet.happiness = clamp(pet.happiness * cfg.wake_happiness_factor, 0.0, cfg.happiness_max)
        penalty_levels = pet.evolution_level + (2 if pet.bored else 1)
        pet.exhaustion = clamp(cfg.wake_exhaustion_step * penalty_levels, 0.0, cfg.sleep_threshold)
        pet.bored = False
        self._events.append("awake")

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self, dt, pointer) -> Snapshot:
        dt = sanitize_dt(dt)
        pet = self.pet
        self._events = []
        self.last_evolution = None

        geometry = movement.measure(pet, pointer, self.config, self.viewport)
        engaged = geometry.in_band and pet.state not in (CatState.SEEKING_COUCH, CatState.EATING)
        pet.last_pointer_x, pet.last_pointer_y = pointer

        event = self.evolution.accrue(pet, dt, self.couch, self.viewport)
        if event:
            self.last_evolution = event
            self._events.append("evolved")

        self._update_facing(geometry)

        handler = self._handlers.get(pet.state)
        if handler:
            handler(dt)
        else:
            self._update_active(dt, geometry, engaged)

        self._select_animation()
        return self.snapshot()

    def _update_facing(self, geometry):
        pet = self.pet
        if pet.state is CatState.SEEKING_COUCH:
            to_couch_x = self.couch.x - pet.x
            if to_couch_x != 0:
                pet.facing_right = to_couch_x > 0
        elif geometry.dx != 0 and pet.state is not CatState.EATING:
            pet.facing_right = geometry.dx > 0

    def _update_eating(self, dt):
        pet, cfg = self.pet, self.config
        pet.eating_timer += dt
        pet.happiness = increase(pet.happiness, cfg.eating_happiness_gain * dt, cfg.happiness_max)
        if pet.eating_timer >= cfg.eating_duration:
            pet.eating_sound_timer = 0.0
            pet.exhaustion = 0.0
            self._transition_to(CatState.AWAKE)
            self.food.visible = False
            self._events.append("fed")
        pet.eating_sound_timer += dt
        if pet.eating_sound_timer >= cfg.eating_sound_interval:
            self.play_sound("eat")
            pet.eating_sound_timer = 0.0

    def _update_seeking_couch(self, dt):
        pet = self.pet
        pet.happiness = decay(pet.happiness, self.config.seeking_happiness_decay, dt)
        if movement.seek(pet, self.couch, self.config, self.viewport):
            self.sleep()

    def _update_asleep(self, dt):
        pet = self.pet
        pet.sleep_timer += dt
        pet.happiness = decay(pet.happiness, self.config.sleep_happiness_decay, dt)
        if pet.sleep_timer >= self.config.sleep_duration:
            self.wake_up()

    def _idle_elapsed(self) -> bool:
        timeout = self.config.idle_timeout
        return self.pet.idle_timer >= timeout or self.pet.outside_range_timer >= timeout

    def _update_active(self, dt, geometry, engaged):
        pet, cfg, vp = self.pet, self.config, self.viewport

        if self.food.visible:
            to_food = movement.distance(self.food.x, self.food.y, pet.x, pet.y)
            if to_food <= cfg.food_threshold:
                self.start_eating()
                return

        if not geometry.moved or geometry.outside_range:
            pet.idle_timer += dt
            if geometry.outside_range:
                pet.outside_range_timer += dt
            else:
                pet.outside_range_timer = 0.0
        elif engaged:
            pet.reset_timers()

        if pet.state in (CatState.EXHAUSTED, CatState.IDLE):
            if pet.state is CatState.IDLE and pet.idle_timer >= cfg.idle_to_sleep_timeout:
                pet.bored = cfg.bored_penalty
                self.start_seeking_couch()
                return
            reengagement = vp.scale(cfg.reengagement_distance * cfg.tile_size)
            if geometry.distance < reengagement and geometry.moved:
                self._transition_to(CatState.AWAKE)
                pet.reset_timers()
            else:
                self._rest(dt)
                return

        if self._idle_elapsed():
            self._transition_to(CatState.IDLE)
            return

        moved = 0.0
        if engaged:
            moved = movement.chase(pet, geometry, cfg, vp)
            pet.exhaustion = increase(pet.exhaustion, moved * cfg.exhaust_factor, cfg.sleep_threshold)
            if geometry.moved and moved > 0:
                pet.happiness = increase(pet.happiness, cfg.chase_happiness_gain * dt, cfg.happiness_max)
            self._check_exhaustion()

        if not moved and pet.state is not CatState.ASLEEP and pet.exhaustion > 0:
            pet.exhaustion = decay(pet.exhaustion, cfg.recovery_rate, dt)

    def _check_exhaustion(self):
        pet, cfg = self.pet, self.config
        if pet.exhaustion >= cfg.sleep_threshold:
            self.start_seeking_couch()
        elif pet.exhaustion >= cfg.hunger_threshold and not self.food.visible:
            self.sampler.place_food(self.food, self.couch, self.viewport)
            self._events.append("food")
        elif pet.exhaustion >= cfg.exhaust_threshold and pet.state is not CatState.EXHAUSTED:
            self._transition_to(CatState.EXHAUSTED)

    def _rest(self, dt):
        """Idle/Exhausted tick without re-engagement: recover and lose interest."""
        pet, cfg = self.pet, self.config
        if self._idle_elapsed():
            self._transition_to(CatState.IDLE)
        if pet.exhaustion > 0:
            multiplier = cfg.idle_recovery_multiplier if pet.state is CatState.IDLE else 1.0
            pet.exhaustion = decay(pet.exhaustion, cfg.recovery_rate, dt, multiplier)
        if pet.state is CatState.IDLE:
            pet.happiness = decay(pet.happiness, cfg.idle_happiness_decay, dt)
        elif pet.state is CatState.EXHAUSTED:
            pet.happiness = decay(pet.happiness, cfg.exhausted_happiness_decay, dt)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    @property
    def animation(self) -> str:
        return animation_name(self.pet.state, self.pet.facing_right)

    def _select_animation(self):
        selected = (stage_name(self.pet.evolution_level), self.animation)
        if selected != self._current_animation:
            self._current_animation = selected
            if self.on_animation:
                self.on_animation(*selected)

    def snapshot(self, **extra) -> Snapshot:
        pet, cfg = self.pet, self.config
        values = dict(
            state=pet.state,
            x=pet.x,
            y=pet.y,
            facing_right=pet.facing_right,
            happiness=pet.happiness,
            exhaustion=pet.exhaustion,
            stamina_percent=stamina_percent(pet.exhaustion, cfg.sleep_threshold),
            evolution_percent=evolution_percent(pet.evolution_timer, pet.evolution_target_time),
            evolving=self.evolution.is_saturated(pet),
            level=pet.evolution_level,
            stage=stage_name(pet.evolution_level),
            animation=self.animation,
            couch=(self.couch.x, self.couch.y),
            food=(self.food.x, self.food.y),
            food_visible=self.food.visible,
            idle_time=pet.idle_timer,
            sleep_time=pet.sleep_timer,
            ascended=self.evolution.ascended,
            events=tuple(self._events),
        )
        values.update(extra)
        return Snapshot(**values)
