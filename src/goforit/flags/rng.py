"""Flags – RandomSource, the lock-guarded uniform draw used by sampling."""
from __future__ import annotations

import random
import threading


class RandomSource:
    """A ``random.Random`` that is only ever drawn from under a lock.

    Sampling flags take exactly one :meth:`random` draw per evaluation, so
    two sources built with the same seed and driven by the same ordered
    sequence of checks produce the same decisions.
    """

    _shared: RandomSource | None = None
    _shared_lock = threading.Lock()

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls, seed: int) -> RandomSource:
        """Return a reproducible source."""
        return cls(random.Random(seed))

    @classmethod
    def shared(cls) -> RandomSource:
        """Return the lazily-created, process-wide unseeded source."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    def random(self) -> float:
        """Draw one uniform value in ``[0, 1)``."""
        with self._lock:
            return self._rng.random()


__all__ = ["RandomSource"]
