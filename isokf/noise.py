"""Seedable random number sources."""

from __future__ import annotations

from typing import Any

import numpy as np


class GaussianNoiseGen:
    """Draws normally distributed samples with a fixed mean and deviation."""

    def __init__(self, mean: float = 0.0, standard_deviation: float = 1.0, seed: int | None = None) -> None:
        if standard_deviation <= 0:
            raise ValueError("standard deviation must be positive")
        self.mean = float(mean)
        self.standard_deviation = float(standard_deviation)
        self._gen = np.random.default_rng(seed)

    @classmethod
    def instance(cls) -> GaussianNoiseGen:
        """Shared standard-normal generator, created on first use."""
        if "_shared" not in cls.__dict__:
            cls._shared = cls(0.0, 1.0)
        return cls._shared

    def seed(self, seed: int) -> None:
        self._gen = np.random.default_rng(seed)

    def randn(self, n: int | None = None) -> Any:
        """One sample as a float, or an array of ``n`` samples."""
        if n is None:
            return float(self._gen.normal(self.mean, self.standard_deviation))
        if n < 0:
            raise ValueError("sample count must not be negative")
        return self._gen.normal(self.mean, self.standard_deviation, size=n)


class RandomSampler:
    """Holds a seedable random generator shared by sampling routines."""

    def __init__(self, seed: int | None = None) -> None:
        self.generator = np.random.default_rng(seed)

    @classmethod
    def instance(cls) -> RandomSampler:
        """Shared sampler, created on first use."""
        if "_shared" not in cls.__dict__:
            cls._shared = cls()
        return cls._shared

    def seed(self, seed: int) -> None:
        self.generator = np.random.default_rng(seed)