"""A pseudo-random generator that reproduces the C library's ``rand()`` sequence.

Initial grids are drawn from this generator. The same seed gives the same
grid no matter how the board is split between ranks.
"""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_DEGREE = 31
_SEPARATION = 3
_WARMUP = _DEGREE * 10


class GlibcRandom:
    """The additive feedback generator behind ``srand``/``rand`` (TYPE_3 state)."""

    RAND_MAX = 2147483647

    def __init__(self, seed: int = 1) -> None:
        self._state: list[int] = []
        self._front = _SEPARATION
        self._rear = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the generator as ``srand(seed)`` does."""
        seed &= _MASK32
        if seed == 0:
            seed = 1
        state = [seed]
        word = seed
        for _ in range(1, _DEGREE):
            hi, lo = divmod(word, 127773)
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word)
        self._state = state
        self._front = _SEPARATION
        self._rear = 0
        for _ in range(_WARMUP):
            self._step()

    def _step(self) -> int:
        state = self._state
        state[self._front] = (state[self._front] + state[self._rear]) & _MASK32
        result = state[self._front] >> 1
        self._front = (self._front + 1) % _DEGREE
        self._rear = (self._rear + 1) % _DEGREE
        return result

    def rand(self) -> int:
        """Return the next value in ``0..RAND_MAX``."""
        return self._step()