"""Seeded 2-D gradient noise.

A classic improved-Perlin lattice over a 256-entry permutation that is
shuffled by a small LCG and then doubled to 512 entries.  ``get`` accepts
scalars or numpy arrays; both paths give identical values.
"""

from __future__ import annotations

import math

import numpy as np

_LCG_MODULUS = 233280
_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_FALLBACK_SEED = 1337


class NoiseField:
    """Immutable noise field.  Output of :meth:`get` is roughly in [-1, 1]."""

    def __init__(self, seed_value: float):
        fraction = math.fmod(math.fmod(seed_value, 1.0) + 1.0, 1.0)
        seed = int(math.floor(fraction * _LCG_MODULUS)) or _FALLBACK_SEED

        perm = list(range(256))
        running = seed
        for index in range(255, 0, -1):
            running = (running * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
            other = int(math.floor(running / _LCG_MODULUS * (index + 1)))
            perm[index], perm[other] = perm[other], perm[index]

        self._perm = np.array(perm + perm, dtype=np.int64)
        self._perm.setflags(write=False)

    @property
    def permutation(self) -> np.ndarray:
        return self._perm

    @staticmethod
    def _fade(t):
        return t * t * t * (t * (t * 6 - 15) + 10)

    @staticmethod
    def _grad(hash_value, x, y):
        h = hash_value & 15
        u = np.where(h < 8, x, y)
        v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, 0.0))
        return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)

    def get(self, x, y):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255
        fx = x - x_floor
        fy = y - y_floor
        u = self._fade(fx)
        v = self._fade(fy)

        perm = self._perm
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        lower = self._grad(perm[a], fx, fy)
        lower = lower + u * (self._grad(perm[b], fx - 1, fy) - lower)
        upper = self._grad(perm[a + 1], fx, fy - 1)
        upper = upper + u * (self._grad(perm[b + 1], fx - 1, fy - 1) - upper)
        result = lower + v * (upper - lower)

        if result.ndim == 0:
            return float(result)
        return result

    def get01(self, x, y):
        """``get`` remapped to [0, 1]."""
        return (self.get(x, y) + 1) * 0.5
