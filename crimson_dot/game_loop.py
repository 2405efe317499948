from crimson_dot.constants import FPS, MAX_FRAME_GAP


class FixedStepLoop:
    """
    Accumulates real elapsed time and calls `update` with a fixed step of
    1/fps seconds, so the simulation never sees a variable dt.
    Frames arriving after a long gap (window lost focus) are dropped.
    """
    def __init__(self, update, render=None, fps=FPS, max_gap=MAX_FRAME_GAP):
        self.update = update
        self.render = render
        self.step = 1.0 / fps
        self.max_gap = max_gap
        self.accumulator = 0.0
        self.is_stopped = True

    def start(self):
        if self.is_stopped:
            self.accumulator = 0.0
            self.is_stopped = False

    def stop(self):
        self.is_stopped = True

    def advance(self, elapsed: float) -> int:
        """Feed elapsed seconds; returns how many fixed updates ran."""
        if self.is_stopped or elapsed > self.max_gap or elapsed < 0:
            return 0
        self.accumulator += elapsed
        updates = 0
        # Small epsilon so float drift never swallows a whole step
        while not self.is_stopped and self.accumulator >= self.step - 1e-9:
            self.update(self.step)
            self.accumulator -= self.step
            updates += 1
        if self.render:
            self.render()
        return updates
