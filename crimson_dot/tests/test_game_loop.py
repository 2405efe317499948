from crimson_dot.game_loop import FixedStepLoop


def test_fixed_steps_from_elapsed_time():
    steps = []
    renders = []
    loop = FixedStepLoop(steps.append, render=lambda: renders.append(1), fps=4)
    loop.start()
    assert loop.advance(0.6) == 2
    assert steps == [0.25, 0.25]
    # The leftover 0.1s carries over to the next frame
    assert loop.advance(0.15) == 1
    assert len(renders) == 2


def test_stopped_loop_does_nothing():
    steps = []
    loop = FixedStepLoop(steps.append, fps=4)
    assert loop.advance(1.0) == 0
    loop.start()
    loop.stop()
    assert loop.advance(1.0) == 0
    assert steps == []


def test_long_gap_is_dropped():
    steps = []
    loop = FixedStepLoop(steps.append, fps=4)
    loop.start()
    assert loop.advance(5.0) == 0
    assert loop.advance(-1.0) == 0
    assert loop.accumulator == 0.0


def test_update_can_stop_the_loop():
    loop = FixedStepLoop(lambda dt: loop.stop(), fps=4)
    loop.start()
    assert loop.advance(1.0) == 1
