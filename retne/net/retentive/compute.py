"""Forward-pass logic for a single retentive network.

Per time-step, the caller runs `prepare`, then writes the inputs, then runs
`forward_pass`, then reads the outputs (`step` bundles the four).

Neuron values persist across time-steps and every link moves signal by a
single hop per `forward_pass`, so an input can take several time-steps to
reach an output. Cycles thereby act as memory.
"""

from collections.abc import Sequence
from typing import Annotated as An

from retne.net.activation import get_activation
from retne.net.retentive.evolution import Net
from retne.utils.beartype import ge, gt


def clamp(value: float, bound: An[float, gt(0)]) -> float:
    return min(max(value, -bound), bound)


def prepare(net: Net) -> None:
    """`value ← value * retention + bias` for every neuron, reserved ones
    included."""
    for neuron in net.neurons:
        neuron.prepare()


def set_input(net: Net, index: An[int, ge(0)], value: float) -> None:
    if index >= net.num_inputs:
        raise IndexError(f"Input index {index} out of range for {net.num_inputs} inputs")
    net.neurons[index].value = value


def set_inputs(net: Net, values: Sequence[float]) -> None:
    if len(values) != net.num_inputs:
        raise ValueError(f"Expected {net.num_inputs} input values, got {len(values)}")
    for index, value in enumerate(values):
        net.neurons[index].value = value


def forward_pass(net: Net) -> None:
    """Propagates every link once, in list order.

    A link reads its start neuron's current value, which an earlier link of
    the same pass may already have updated. The end neuron is clamped after
    each individual update. Only output neurons then go through the output
    activation.
    """
    bound: float = net.config.max_activation_value
    neurons = net.neurons
    for link in net.links:
        end = neurons[link.end_index]
        end.value = clamp(
            end.value + neurons[link.start_index].value * link.weight, bound
        )
    apply_output_activation(net)


def apply_output_activation(net: Net) -> None:
    activation = get_activation(net.config.output_activation)
    for neuron in net.output_neurons:
        neuron.value = activation(neuron.value)


def get_output(net: Net, index: An[int, ge(0)]) -> float:
    if index >= net.num_outputs:
        raise IndexError(
            f"Output index {index} out of range for {net.num_outputs} outputs"
        )
    return net.neurons[net.num_inputs + index].value


def get_outputs(net: Net) -> list[float]:
    return [neuron.value for neuron in net.output_neurons]


def step(net: Net, inputs: Sequence[float]) -> list[float]:
    """Runs one full time-step and returns the activated outputs."""
    prepare(net)
    set_inputs(net, inputs)
    forward_pass(net)
    return get_outputs(net)
