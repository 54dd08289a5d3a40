"""Retentive networks for neuroevolution.

Networks whose neurons keep part of their value between passes, whose links
can connect any neuron to any other (cycles included), and whose topology
and parameters evolve through random mutation. Only output neurons go
through an activation function.
"""

from .compute import (
    apply_output_activation,
    forward_pass,
    get_output,
    get_outputs,
    prepare,
    set_input,
    set_inputs,
    step,
)
from .evolution import Link, MutationReport, Net, Neuron, create

__all__ = [
    "Link",
    "MutationReport",
    "Net",
    "Neuron",
    "create",
    "apply_output_activation",
    "forward_pass",
    "get_output",
    "get_outputs",
    "prepare",
    "set_input",
    "set_inputs",
    "step",
]
