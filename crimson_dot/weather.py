import random

FLASH_DURATION = 0.83
FLASH_CHANCE = 0.33
COOLDOWN_MIN = 2.0
COOLDOWN_SPREAD = 4.0


class StormWeather:
    """Lightning for the storm stage. A flash briefly reveals the couch and bowl."""
    def __init__(self, play_sound=None, rng=None):
        self.play_sound = play_sound or (lambda name: None)
        self.rng = rng or random.Random()
        self.timer = 0.0
        self.flashing = False

    def reset(self):
        self.timer = 0.0
        self.flashing = False

    def update(self, dt):
        """Count down; on expiry end the current flash or roll for a new one."""
        self.timer -= dt
        if self.timer > 0:
            return self.flashing
        if self.flashing:
            self.flashing = False
            self.timer = COOLDOWN_MIN + self.rng.random() * COOLDOWN_SPREAD
        elif self.rng.random() < FLASH_CHANCE:
            self.flashing = True
            self.play_sound("explosion")
            self.timer = FLASH_DURATION
        return self.flashing
