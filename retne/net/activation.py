"""Scalar activation functions, referenced by name from configuration."""

import math
from collections.abc import Callable


def relu(x: float) -> float:
    return max(x, 0.0)


def leaky_relu(x: float) -> float:
    return x if x >= 0 else 0.1 * x


def sigmoid(x: float) -> float:
    """`1 / (1 + e^-x)`, arranged so that `math.exp` never overflows."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z: float = math.exp(x)
    return z / (1.0 + z)


def tanh(x: float) -> float:
    return math.tanh(x)


def identity(x: float) -> float:
    return x


ACTIVATIONS: dict[str, Callable[[float], float]] = {
    "relu": relu,
    "leaky_relu": leaky_relu,
    "sigmoid": sigmoid,
    "tanh": tanh,
    "identity": identity,
}


def get_activation(name: str) -> Callable[[float], float]:
    """Get activation function by name.

    Raises:
        ValueError: If no activation goes by that name
    """
    if name not in ACTIVATIONS:
        raise ValueError(
            f"Unknown activation: {name}. Available: {list(ACTIVATIONS)}"
        )
    return ACTIVATIONS[name]
