"""Randomness source handed to genesis and mutation.

Every network owns its own stream rather than drawing from process-wide
state: seeded runs are reproducible and networks can be mutated in parallel
without sharing a generator.
"""

from typing import Annotated as An

import torch
from jaxtyping import Float
from torch import Tensor

from retne.utils.beartype import ge, le


class RandomnessSource:
    """Uniform and Gaussian draws from an owned `torch.Generator`."""

    def __init__(
        self: "RandomnessSource", seed: An[int, ge(0)] | None = None
    ) -> None:
        self.generator: torch.Generator = torch.Generator()
        if seed is None:
            self.seed: int = self.generator.seed()
        else:
            self.seed = seed
            self.generator.manual_seed(seed)

    def __repr__(self: "RandomnessSource") -> str:
        return f"RandomnessSource(seed={self.seed})"

    def uniform(self: "RandomnessSource") -> float:
        """Draws from `[0, 1)`."""
        return torch.rand(1, generator=self.generator).item()

    def bernoulli(
        self: "RandomnessSource", probability: An[float, ge(0), le(1)]
    ) -> bool:
        return self.uniform() < probability

    def gaussian(
        self: "RandomnessSource", mean: float, std: An[float, ge(0)]
    ) -> float:
        return self.gaussians(mean, std, 1)[0].item()

    def gaussians(
        self: "RandomnessSource",
        mean: float,
        std: An[float, ge(0)],
        num: An[int, ge(0)],
    ) -> Float[Tensor, " num"]:
        return torch.normal(
            float(mean), float(std), size=(num,), generator=self.generator
        )

    def integer(
        self: "RandomnessSource", low: An[int, ge(0)], high: An[int, ge(0)]
    ) -> int:
        """Draws uniformly from the inclusive range `[low, high]`."""
        if high < low:
            raise ValueError(f"Empty range: [{low}, {high}]")
        return int(torch.randint(low, high + 1, (1,), generator=self.generator).item())

    def spawn(self: "RandomnessSource") -> "RandomnessSource":
        """New independent stream seeded from this one."""
        return RandomnessSource(self.integer(0, 2**62))

    def clone(self: "RandomnessSource") -> "RandomnessSource":
        """New stream that replays this one's future draws."""
        rng = RandomnessSource(self.seed)
        rng.generator.set_state(self.generator.get_state())
        return rng
