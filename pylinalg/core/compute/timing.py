"""
Wall-clock timing for backends.

Every backend Result carries a timing dict: the overall duration under
'total_seconds' plus one entry per named phase (reduction,
classification, ...).
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus accumulating named phases.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('reduction'):
            reduction = augmented.reduce()
        with timer.section('classification'):
            rows = find_inconsistent_rows(reduction)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.0021, 'reduction': 0.0017, 'classification': 0.0003}
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time the enclosed block under name.

        Re-entering a name adds to its total. Phases are not required to
        be disjoint, and they are timed even if the block raises.
        """
        began = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (time.perf_counter() - began)

    def result(self) -> dict[str, float]:
        """
        Timing dict for a Result.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}
