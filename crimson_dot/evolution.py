import logging
from dataclasses import dataclass

from crimson_dot.config import EvolutionAccrual
from crimson_dot.constants import LEVELS
from crimson_dot.meters import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvolutionEvent:
    level: int
    stage: str
    ascended: bool


def stage_name(level: int) -> str:
    return LEVELS[min(level, len(LEVELS) - 1)]


class EvolutionManager:
    """
    Promotes the cat through the stages once happiness has stayed saturated
    for the current target time.

    Accrual policy:
      - OPPORTUNISTIC: the timer only runs while happiness is at the maximum,
        but a dip below it does not discard the time already earned.
      - CONTINUOUS: any dip below the maximum resets the timer.
    """
    def __init__(self, config, sampler, play_sound=None):
        self.config = config
        self.sampler = sampler
        self.play_sound = play_sound or (lambda name: None)
        self.ascended = False

    def reset(self, pet):
        pet.evolution_level = 0
        pet.evolution_timer = 0.0
        pet.evolution_target_time = self.config.evolution_base_time
        self.ascended = False

    def is_saturated(self, pet) -> bool:
        return pet.happiness >= self.config.happiness_max

    def accrue(self, pet, dt, couch, viewport):
        """Advance the evolution timer for one tick; evolves when the target is reached."""
        if not self.is_saturated(pet):
            if self.config.evolution_accrual is EvolutionAccrual.CONTINUOUS:
                pet.evolution_timer = 0.0
            return None
        pet.evolution_timer += dt
        return self.try_evolve(pet, couch, viewport)

    def try_evolve(self, pet, couch, viewport):
        if self.ascended or not self.is_saturated(pet):
            return None
        if pet.evolution_timer < pet.evolution_target_time:
            return None
        pet.evolution_timer = 0.0
        return self.evolve(pet, couch, viewport)

    def evolve(self, pet, couch, viewport) -> EvolutionEvent:
        pet.evolution_level += 1
        level = pet.evolution_level
        self.play_sound("evolve")
        pet.evolution_target_time = self.config.evolution_base_time * (level + 1)
        pet.happiness = clamp(pet.happiness - level * self.config.evolution_happiness_penalty,
                              0.0, self.config.happiness_max)
        # New level, new spot for the couch
        self.sampler.place_couch(couch, viewport)
        if level > self.config.final_level:
            self.ascended = True
        event = EvolutionEvent(level=level, stage=stage_name(level), ascended=self.ascended)
        logger.info("Evolved to level %d (%s)%s", level, event.stage,
                    " - ascended" if event.ascended else "")
        return event
