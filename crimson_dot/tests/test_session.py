import random

import pytest

from crimson_dot.best_time import BestTimeStore
from crimson_dot.constants import EVOLVE_TEXTS, ASCENDED_TEXT, PAUSED_TEXT
from crimson_dot.models import CatState
from crimson_dot.session import GameSession


def make_session(tmp_path=None):
    sounds = []
    store = BestTimeStore(tmp_path / "save.json") if tmp_path else None
    session = GameSession(play_sound=sounds.append, rng=random.Random(11), best_times=store)
    return session, sounds


def test_clock_does_not_run_until_started():
    session, _ = make_session()
    before = session.last_snapshot
    assert session.update(0.5, (0.0, 0.0)) is before
    assert session.game_time == 0.0
    session.start()
    snap = session.update(0.5, (0.0, 0.0))
    assert snap.game_time == 0.5


def test_pause_stops_clock():
    session, _ = make_session()
    session.start()
    session.update(0.25, (0.0, 0.0))
    session.pause()
    assert session.scene == PAUSED_TEXT
    session.update(0.25, (0.0, 0.0))
    assert session.game_time == 0.25


def test_observers_receive_committed_snapshots():
    session, _ = make_session()
    seen = []
    callback = session.subscribe(seen.append)
    session.start()
    snap = session.update(0.25, (0.0, 0.0))
    assert seen == [snap]
    session.unsubscribe(callback)
    session.update(0.25, (0.0, 0.0))
    assert len(seen) == 1


def test_evolution_stops_clock_for_cutscene():
    session, _ = make_session()
    session.start()
    session.pet.happiness = 100.0
    session.pet.evolution_timer = 19.9
    snap = session.update(0.25, (672.0, 288.0))
    assert not session.running
    assert snap.scene == EVOLVE_TEXTS[1]
    assert snap.level == 1
    assert session.update(0.25, (672.0, 288.0)) is snap


def test_ascension_records_best_time(tmp_path):
    session, _ = make_session(tmp_path)
    assert session.best_time is None
    session.start()
    session.game_time = 100.0
    pet = session.pet
    pet.evolution_level = 2
    pet.evolution_target_time = 60.0
    pet.evolution_timer = 59.9
    pet.happiness = 100.0
    snap = session.update(0.25, (672.0, 288.0))
    assert session.ascended and snap.ascended
    assert snap.scene == ASCENDED_TEXT
    assert session.best_time == pytest.approx(100.25)
    assert BestTimeStore(tmp_path / "save.json").load() == pytest.approx(100.25)


def test_new_game_resets_everything():
    session, _ = make_session()
    session.start()
    pet = session.pet
    pet.evolution_level = 2
    pet.happiness = 70.0
    pet.exhaustion = 200.0
    pet.state = CatState.ASLEEP
    session.food.visible = True
    session.update(0.25, (0.0, 0.0))
    session.new_game()
    assert pet.evolution_level == 0
    assert pet.happiness == 0.0 and pet.exhaustion == 0.0
    assert pet.state is CatState.AWAKE
    assert not session.food.visible
    assert session.game_time == 0.0
    assert not session.ascended


def test_storm_level_brings_lightning():
    class AlwaysFlash:
        def random(self):
            return 0.0

    session, sounds = make_session()
    session.weather.rng = AlwaysFlash()
    session.start()
    snap = session.update(0.25, (0.0, 0.0))
    assert not snap.lightning
    session.pet.evolution_level = 2
    snap = session.update(0.25, (0.0, 0.0))
    assert snap.lightning
    assert "explosion" in sounds


def test_resize_rescales_world_and_recenters():
    session, _ = make_session()
    viewport = session.resize(1408, 800)
    assert viewport.zoom == 2
    assert (viewport.width, viewport.height) == (1408, 640)
    assert (session.pet.x, session.pet.y) == (672.0, 288.0)
    assert session.machine.viewport is viewport


def test_shrinking_world_moves_visible_bowl_back_inside():
    session, _ = make_session()
    session.resize(1408, 800)
    food = session.food
    food.x, food.y, food.visible = 1300.0, 600.0, True
    viewport = session.resize(800, 600)
    assert viewport.zoom == 1
    assert food.visible
    assert 0 <= food.x <= viewport.width - food.width
    assert 0 <= food.y <= viewport.height - food.height


def test_resize_leaves_hidden_bowl_alone():
    session, _ = make_session()
    food = session.food
    food.x, food.y = 1300.0, 600.0
    session.resize(800, 600)
    assert (food.x, food.y) == (1300.0, 600.0)
    assert not food.visible


def test_bad_dt_does_not_advance_clock():
    session, _ = make_session()
    session.start()
    session.update(float("nan"), (0.0, 0.0))
    session.update(-3, (0.0, 0.0))
    assert session.game_time == 0.0
