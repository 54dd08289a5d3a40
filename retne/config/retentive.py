"""Retentive network configuration dataclasses.

Gathers every tunable of genesis and mutation: structural-change
probabilities, genesis ranges, the activation clamp bound and the mean/std of
each Gaussian used to initialize or perturb weights, biases and retentions.
"""

from dataclasses import dataclass, field
from typing import Annotated as An

from beartype.door import die_if_unbearable

from retne.net.activation import ACTIVATIONS
from retne.utils.beartype import one_of

# Default number of reserved input/output neurons.
INPUT_COUNT: int = 5
OUTPUT_COUNT: int = 6

LINK_COLLISION_POLICIES: tuple[str, ...] = ("legacy", "resample")

CollisionPolicy = An[str, one_of(*LINK_COLLISION_POLICIES)]
ActivationName = An[str, one_of(*ACTIVATIONS)]


@dataclass
class GaussianConfig:
    """Normal distribution parameters."""

    mean: float
    std: float

    def __post_init__(self) -> None:
        if self.std < 0:
            raise ValueError(f"Standard deviation must be >= 0, got {self.std}")


@dataclass
class PerturbationConfig:
    """`x ← x * G(mult) + G(add)`"""

    mult: GaussianConfig
    add: GaussianConfig


def _gaussian(mean: float, std: float):
    return field(default_factory=lambda: GaussianConfig(mean, std))


def _perturbation(
    mult_mean: float, mult_std: float, add_mean: float, add_std: float
):
    return field(
        default_factory=lambda: PerturbationConfig(
            mult=GaussianConfig(mult_mean, mult_std),
            add=GaussianConfig(add_mean, add_std),
        )
    )


@dataclass
class RetentiveNetConfig:
    """Genesis, mutation and computation configuration."""

    # Scales the standard deviation of every mutation Gaussian.
    mutation_intensity: float = 1.0

    # Structural mutation probabilities, drawn independently per `mutate`.
    new_neuron_probability: float = 0.05
    new_link_probability: float = 0.25
    remove_link_probability: float = 0.10

    # Inclusive ranges sampled uniformly during genesis.
    initial_hidden_neurons: tuple[int, int] = (3, 10)
    initial_links: tuple[int, int] = (0, 0)

    max_activation_value: float = 1e3
    # "legacy": a link whose sampled endpoints coincide is redirected to
    # neuron 0. "resample": the end index is drawn among the other neurons.
    link_collision_policy: CollisionPolicy = "legacy"
    output_activation: ActivationName = "sigmoid"

    weight_init: GaussianConfig = _gaussian(0.3, 0.2)
    retention_init: GaussianConfig = _gaussian(0.1, 0.01)
    bias_init: GaussianConfig = _gaussian(0.1, 0.075)

    weight_mutation: PerturbationConfig = _perturbation(1.0, 0.05, 0.08, 0.08)
    bias_mutation: PerturbationConfig = _perturbation(1.0, 0.05, 0.01, 0.01)
    retention_mutation: PerturbationConfig = _perturbation(1.0, 0.07, 0.01, 0.001)

    def __post_init__(self) -> None:
        if self.mutation_intensity < 0:
            raise ValueError(
                f"mutation_intensity must be >= 0, got {self.mutation_intensity}"
            )
        for name in (
            "new_neuron_probability",
            "new_link_probability",
            "remove_link_probability",
        ):
            probability: float = getattr(self, name)
            if not 0 <= probability <= 1:
                raise ValueError(f"{name} must lie in [0, 1], got {probability}")
        for name in ("initial_hidden_neurons", "initial_links"):
            low, high = getattr(self, name)
            if not 0 <= low <= high:
                raise ValueError(
                    f"{name} must satisfy 0 <= low <= high, got ({low}, {high})"
                )
        if self.max_activation_value <= 0:
            raise ValueError(
                f"max_activation_value must be > 0, got {self.max_activation_value}"
            )
        die_if_unbearable(self.link_collision_policy, CollisionPolicy)
        die_if_unbearable(self.output_activation, ActivationName)

    def scaled(self, gaussian: GaussianConfig) -> GaussianConfig:
        """Returns `gaussian` with its std scaled by `mutation_intensity`."""
        return GaussianConfig(gaussian.mean, gaussian.std * self.mutation_intensity)
