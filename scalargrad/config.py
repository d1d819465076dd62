"""
Parameter initialisation settings.

Model parameters are leaves drawn uniformly from [low, high). The default
range is symmetric around zero; `seed` makes construction reproducible.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional


@dataclass
class InitConfig:
    """Configuration for model parameter initialisation."""
    low: float = -1.0
    high: float = 1.0
    seed: Optional[int] = None  # None: fresh entropy on every run

    def __post_init__(self):
        if self.low >= self.high:
            raise ValueError(
                f"low must be smaller than high, got low={self.low}, high={self.high}"
            )

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.low, self.high))
