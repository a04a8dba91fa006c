"""
Random draws for the factorization sequencer.

The sequencer makes two kinds of draws: the base `a` and the multiple `s`
used to fake a measurement. Both go through a RandomSource so tests can
replay exact values.

Sources:
- NumpyRandomSource: numpy Generator, optionally seeded
- ScriptedRandomSource: replays a fixed list of draws
"""

import numpy as np

# Largest span numpy can draw from directly with int64
_NUMPY_SPAN_LIMIT = 2 ** 62
_WORD_BITS = 32


class RandomSource:
    """Interface: uniform integer in the closed range [low, high]."""

    def randint(self, low, high):
        raise NotImplementedError


class NumpyRandomSource(RandomSource):
    def __init__(self, seed=None):
        self._rng = np.random.default_rng(seed)

    def randint(self, low, high):
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        span = high - low + 1
        if span <= _NUMPY_SPAN_LIMIT:
            return low + int(self._rng.integers(0, span))
        return low + self._wide_draw(span)

    def _wide_draw(self, span):
        # Rejection sampling over concatenated 32-bit words keeps big ranges uniform
        bits = span.bit_length()
        words = (bits + _WORD_BITS - 1) // _WORD_BITS
        surplus = words * _WORD_BITS - bits
        while True:
            chunk = self._rng.integers(0, 2 ** _WORD_BITS, size=words, dtype=np.uint64)
            value = 0
            for word in chunk:
                value = (value << _WORD_BITS) | int(word)
            value >>= surplus
            if value < span:
                return value


class ScriptedRandomSource(RandomSource):
    """
    Replays predetermined draws in order.

    Args:
        draws (iterable[int]): Values returned by successive randint calls

    Raises:
        ValueError: If a scripted value falls outside the requested range
        RuntimeError: If the script runs out
    """

    def __init__(self, draws):
        self._draws = list(draws)
        self._position = 0

    @property
    def remaining(self):
        return len(self._draws) - self._position

    def randint(self, low, high):
        if self._position >= len(self._draws):
            raise RuntimeError("Scripted random source exhausted")
        value = self._draws[self._position]
        if not low <= value <= high:
            raise ValueError(f"Scripted draw {value} outside [{low}, {high}]")
        self._position += 1
        return value


def get_random_source(seed=None):
    """Default source for a session."""
    return NumpyRandomSource(seed)
