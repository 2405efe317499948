import random

from crimson_dot.config import SimulationConfig, Viewport
from crimson_dot.models import Couch, FoodBowl
from crimson_dot.movement import distance
from crimson_dot.placement import PlacementSampler


class CountingRandom(random.Random):
    def __init__(self, seed):
        super().__init__(seed)
        self.calls = 0

    def random(self):
        self.calls += 1
        return super().random()


def test_couch_stays_inside_margins():
    viewport = Viewport()
    sampler = PlacementSampler(SimulationConfig(), random.Random(1))
    couch = Couch()
    for _ in range(200):
        x, y = sampler.place_couch(couch, viewport)
        assert 64 <= x <= viewport.width - couch.width
        assert 64 <= y <= viewport.height - couch.height


def test_food_is_shown_and_usually_away_from_couch():
    viewport = Viewport()
    config = SimulationConfig()
    sampler = PlacementSampler(config, random.Random(42))
    couch, food = Couch(), FoodBowl()
    violations = 0
    for _ in range(1000):
        sampler.place_couch(couch, viewport)
        sampler.place_food(food, couch, viewport)
        assert food.visible
        assert 32 <= food.x <= viewport.width - food.width
        assert 32 <= food.y <= viewport.height - food.height
        if distance(food.x, food.y, couch.x, couch.y) < config.food_min_separation:
            violations += 1
    assert violations / 1000 < 0.01


def test_food_placement_gives_up_after_twenty_attempts():
    # No spot can ever be far enough, so the last draw is kept
    config = SimulationConfig(food_min_separation=100000)
    rng = CountingRandom(3)
    sampler = PlacementSampler(config, rng)
    food = FoodBowl()
    sampler.place_food(food, Couch(), Viewport())
    assert rng.calls == 2 * 20
    assert food.visible
