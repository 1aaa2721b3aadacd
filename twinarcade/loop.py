# loop.py
# One-frame-at-a-time scheduler. The host's clock calls pump() once per tick;
# a frame only runs if it was scheduled, and the next one is scheduled after it.


class FrameDriver:
    def __init__(self, frame):
        self.frame = frame          # callable(dt_ms)
        self.generation = 0
        self.pending = None
        self.frames = 0

    @property
    def scheduled(self):
        return self.pending is not None

    def schedule(self):
        if self.pending is None:
            self.pending = self.generation
        return self.pending

    def cancel(self):
        # bump the generation so a handle taken before cancel() is dead
        self.generation += 1
        self.pending = None

    def pump(self, dt_ms):
        handle = self.pending
        if handle is None or handle != self.generation:
            return False
        self.pending = None
        self.frame(dt_ms)
        self.frames += 1
        # frame() may have cancelled (restart/teardown); don't resurrect it
        if handle == self.generation:
            self.schedule()
        return True
