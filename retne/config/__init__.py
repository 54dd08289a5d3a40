"""Shared configuration module.

- retentive: Retentive network genesis/mutation dataclasses and reserved
  neuron counts
"""

from retne.config.retentive import (
    INPUT_COUNT,
    LINK_COLLISION_POLICIES,
    OUTPUT_COUNT,
    ActivationName,
    CollisionPolicy,
    GaussianConfig,
    PerturbationConfig,
    RetentiveNetConfig,
)

__all__ = [
    "INPUT_COUNT",
    "OUTPUT_COUNT",
    "LINK_COLLISION_POLICIES",
    "ActivationName",
    "CollisionPolicy",
    "GaussianConfig",
    "PerturbationConfig",
    "RetentiveNetConfig",
]
