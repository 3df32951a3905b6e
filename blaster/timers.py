"""
Interval timers driven by frame deltas
"""


class IntervalTimer:
    """
    Repeating timer advanced by the game loop instead of the OS clock.

    tick() reports how many whole intervals elapsed since the last call.
    cancel() is safe to call any number of times; only the first call on an
    active timer has an effect.
    """

    def __init__(self, interval: float, name: str = "timer"):
        assert interval > 0, "interval must be positive"
        self.interval = interval
        self.name = name
        self._elapsed = 0.0
        self._active = False
        self.cancel_count = 0

    @property
    def active(self) -> bool:
        return self._active

    def start(self):
        """(Re)arm the timer; the first fire is one full interval away"""
        self._elapsed = 0.0
        self._active = True

    def cancel(self) -> bool:
        if not self._active:
            return False
        self._active = False
        self._elapsed = 0.0
        self.cancel_count += 1
        return True

    def tick(self, delta: float) -> int:
        if not self._active:
            return 0
        self._elapsed += delta
        fired = int(self._elapsed // self.interval)
        self._elapsed -= fired * self.interval
        return fired

    def __repr__(self):
        state = "active" if self._active else "stopped"
        return f"IntervalTimer({self.name}, {self.interval}ms, {state})"
