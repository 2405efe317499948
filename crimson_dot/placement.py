import random
import logging

from crimson_dot.movement import distance

logger = logging.getLogger(__name__)


class PlacementSampler:
    """Places the couch and food bowl at random spots inside the world.

    The random source is injectable so sessions and tests can be reproducible.
    """
    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng or random.Random()

    def _box(self, obj, margin, viewport):
        max_x = viewport.width - viewport.scale(obj.width) - margin
        max_y = viewport.height - viewport.scale(obj.height) - margin
        return max(0.0, max_x), max(0.0, max_y)

    def _draw(self, margin, max_x, max_y):
        return (margin + self.rng.random() * max_x,
                margin + self.rng.random() * max_y)

    def place_couch(self, couch, viewport):
        """Single unconditional draw, kept two tiles away from the edges."""
        margin = viewport.scale(2 * self.config.tile_size)
        max_x, max_y = self._box(couch, margin, viewport)
        couch.x, couch.y = self._draw(margin, max_x, max_y)
        logger.debug("Couch placed at (%.1f, %.1f)", couch.x, couch.y)
        return couch.x, couch.y

    def place_food(self, food, couch, viewport):
        """
        Best-effort placement away from the couch: up to N draws, rejecting any
        closer than the minimum separation. The last draw is kept regardless,
        so callers must not rely on the separation holding.
        """
        margin = viewport.scale(self.config.tile_size)
        max_x, max_y = self._box(food, margin, viewport)
        attempts = 0
        while True:
            x, y = self._draw(margin, max_x, max_y)
            attempts += 1
            to_couch = distance(x, y, couch.x, couch.y)
            if to_couch >= self.config.food_min_separation:
                break
            if attempts >= self.config.food_placement_attempts:
                logger.debug("Food placed %.1fpx from couch after %d attempts", to_couch, attempts)
                break
        food.x, food.y = x, y
        food.visible = True
        return x, y
