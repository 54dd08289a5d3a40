"""Contains the retentive network genotype and the logic to drive its
evolution.

The genotype is a pair of append-only sequences: neurons, addressed by their
position, and directed links between those positions. Neurons are never
removed, so a neuron index stays valid for the lifetime of the network and of
all its offspring.

Network computation lives in `compute.py`.

Acronyms:
 `NN` : Number of neurons.
 `NL` : Number of links.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated as An

from jaxtyping import Float
from torch import Tensor

from retne.config import (
    INPUT_COUNT,
    OUTPUT_COUNT,
    PerturbationConfig,
    RetentiveNetConfig,
)
from retne.net.rng import RandomnessSource
from retne.utils.beartype import ge


@dataclass
class Neuron:
    """Network neuron.

    `value` is persistent state: it is not cleared between passes. Each
    `prepare` keeps a `retention` fraction of it and adds `bias`, so without
    incoming signal the value decays geometrically towards a per-neuron
    equilibrium. `retention` is nominally in [0, 1] but is left unclamped.
    """

    value: float = 0.0
    retention: float = 0.0
    bias: float = 0.0

    def prepare(self: "Neuron") -> None:
        self.value = self.value * self.retention + self.bias


@dataclass
class Link:
    """Directed weighted link. Links can form cycles, self-loops and
    duplicates, and may enter or leave any neuron (inputs included)."""

    start_index: int
    end_index: int
    weight: float


@dataclass
class MutationReport:
    """Structural changes applied by one `Net.mutate` call."""

    added_neuron: bool = False
    added_link: bool = False
    removed_link: bool = False


class Net:
    """Network whose neuron set grows and link set grows/shrinks through
    the `mutate` method.

    Index ranges:
    - `[0, num_inputs)`: input neurons.
    - `[num_inputs, num_reserved)`: output neurons.
    - `[num_reserved, NN)`: hidden neurons.
    """

    def __init__(
        self: "Net",
        num_inputs: An[int, ge(1)] = INPUT_COUNT,
        num_outputs: An[int, ge(1)] = OUTPUT_COUNT,
        config: RetentiveNetConfig | None = None,
        rng: RandomnessSource | None = None,
        initialize: bool = True,
    ) -> None:
        self.num_inputs: An[int, ge(1)] = num_inputs
        self.num_outputs: An[int, ge(1)] = num_outputs
        self.config: RetentiveNetConfig = config or RetentiveNetConfig()
        self.rng: RandomnessSource = rng or RandomnessSource()
        self.neurons: list[Neuron] = []
        self.links: list[Link] = []
        if initialize:
            self.initialize()

    def __repr__(self: "Net") -> str:
        """Examples:
        Net(5 in, 6 out, 4 hidden, links=[0→7 (0.31), 8→5 (-0.12)])
        """
        links: str = ", ".join(
            f"{link.start_index}→{link.end_index} ({link.weight:.2f})"
            for link in self.links
        )
        return (
            f"Net({self.num_inputs} in, {self.num_outputs} out, "
            f"{len(self.hidden_neurons)} hidden, links=[{links}])"
        )

    @property
    def num_reserved(self: "Net") -> int:
        return self.num_inputs + self.num_outputs

    @property
    def num_neurons(self: "Net") -> int:
        return len(self.neurons)

    @property
    def num_links(self: "Net") -> int:
        return len(self.links)

    @property
    def input_neurons(self: "Net") -> list[Neuron]:
        return self.neurons[: self.num_inputs]

    @property
    def output_neurons(self: "Net") -> list[Neuron]:
        return self.neurons[self.num_inputs : self.num_reserved]

    @property
    def hidden_neurons(self: "Net") -> list[Neuron]:
        return self.neurons[self.num_reserved :]

    # GENESIS / REPRODUCTION

    def initialize(self: "Net") -> None:
        self.add_reserved_neurons()
        self.add_hidden_neurons(self.rng.integer(*self.config.initial_hidden_neurons))
        self.add_random_links(self.rng.integer(*self.config.initial_links))

    def copy_structure(
        self: "Net", neurons: Iterable[Neuron], links: Iterable[Link]
    ) -> None:
        """Appends value copies of `neurons` and `links`."""
        for neuron in neurons:
            self.neurons.append(Neuron(neuron.value, neuron.retention, neuron.bias))
        for link in links:
            self.links.append(Link(link.start_index, link.end_index, link.weight))

    def clone(self: "Net", rng: RandomnessSource | None = None) -> "Net":
        """Create an offspring that shares no neuron or link storage with
        this network.

        Args:
            rng: Offspring's randomness source. Defaults to a stream spawned
                from this network's, which consumes one draw from this
                network's stream.

        Returns:
            New Net instance with copied neurons and links
        """
        offspring = Net(
            self.num_inputs,
            self.num_outputs,
            config=self.config,
            rng=rng or self.rng.spawn(),
            initialize=False,
        )
        offspring.copy_structure(self.neurons, self.links)
        return offspring

    # STRUCTURE

    def add_reserved_neurons(self: "Net") -> None:
        for _ in range(self.num_reserved):
            self.neurons.append(Neuron())

    def add_hidden_neuron(
        self: "Net",
        retention: float | None = None,
        bias: float | None = None,
    ) -> Neuron:
        """Appends a hidden neuron. Parameters left to `None` are drawn from
        their genesis distributions."""
        if retention is None:
            init = self.config.retention_init
            retention = self.rng.gaussian(init.mean, init.std)
        if bias is None:
            init = self.config.bias_init
            bias = self.rng.gaussian(init.mean, init.std)
        neuron = Neuron(0.0, retention, bias)
        self.neurons.append(neuron)
        return neuron

    def add_hidden_neurons(self: "Net", count: An[int, ge(0)]) -> None:
        for _ in range(count):
            self.add_hidden_neuron()

    def add_link(
        self: "Net",
        start_index: An[int, ge(0)],
        end_index: An[int, ge(0)],
        weight: float,
    ) -> Link:
        """Appends a link after checking that both endpoints exist."""
        for index in (start_index, end_index):
            if index >= self.num_neurons:
                raise IndexError(
                    f"Neuron index {index} out of range for {self.num_neurons} "
                    "neurons"
                )
        link = Link(start_index, end_index, weight)
        self.links.append(link)
        return link

    def add_random_link(self: "Net") -> Link:
        """Appends a link with endpoints sampled uniformly over the current
        neurons.

        Under the "legacy" collision policy, coinciding endpoints send the
        link to neuron 0 (which favours the first input neuron). Under
        "resample", the end is drawn uniformly among the other neurons.
        """
        start: int = self.rng.integer(0, self.num_neurons - 1)
        if self.config.link_collision_policy == "resample" and self.num_neurons > 1:
            end: int = self.rng.integer(0, self.num_neurons - 2)
            if end >= start:
                end += 1
        else:
            end = self.rng.integer(0, self.num_neurons - 1)
            if start == end:
                end = 0
        init = self.config.weight_init
        return self.add_link(start, end, self.rng.gaussian(init.mean, init.std))

    def add_random_links(self: "Net", count: An[int, ge(0)]) -> None:
        for _ in range(count):
            self.add_random_link()

    def remove_random_link(self: "Net") -> Link | None:
        """Removes a uniformly sampled link. Does nothing if there are no
        links.

        Returns:
            The removed link, or `None` if the link list was empty
        """
        if not self.links:
            return None
        return self.links.pop(self.rng.integer(0, self.num_links - 1))

    # MUTATION

    def _perturbations(
        self: "Net", perturbation: PerturbationConfig, num: An[int, ge(0)]
    ) -> tuple[Float[Tensor, " num"], Float[Tensor, " num"]]:
        mult = self.config.scaled(perturbation.mult)
        add = self.config.scaled(perturbation.add)
        return (
            self.rng.gaussians(mult.mean, mult.std, num),
            self.rng.gaussians(add.mean, add.std, num),
        )

    def perturb_weights(self: "Net") -> None:
        """`weight ← weight * G(mult) + G(add)` for every link."""
        mult, add = self._perturbations(self.config.weight_mutation, self.num_links)
        for link, m, a in zip(self.links, mult.tolist(), add.tolist()):
            link.weight = link.weight * m + a

    def perturb_neuron_parameters(self: "Net") -> None:
        """Same multiplicative-then-additive perturbation as `perturb_weights`,
        applied to every neuron's bias and retention."""
        bias_mult, bias_add = self._perturbations(
            self.config.bias_mutation, self.num_neurons
        )
        retention_mult, retention_add = self._perturbations(
            self.config.retention_mutation, self.num_neurons
        )
        for neuron, bm, ba, rm, ra in zip(
            self.neurons,
            bias_mult.tolist(),
            bias_add.tolist(),
            retention_mult.tolist(),
            retention_add.tolist(),
        ):
            neuron.bias = neuron.bias * bm + ba
            neuron.retention = neuron.retention * rm + ra

    def mutate(self: "Net") -> MutationReport:
        report = MutationReport()

        # ARCHITECTURE PERTURBATION
        if self.rng.bernoulli(self.config.new_neuron_probability):
            self.add_hidden_neuron()
            report.added_neuron = True
        if self.rng.bernoulli(self.config.new_link_probability):
            self.add_random_link()
            report.added_link = True
        if self.rng.bernoulli(self.config.remove_link_probability):
            report.removed_link = self.remove_random_link() is not None

        # PARAMETER PERTURBATION
        self.perturb_weights()
        self.perturb_neuron_parameters()

        return report


def create(
    num_inputs: An[int, ge(1)] = INPUT_COUNT,
    num_outputs: An[int, ge(1)] = OUTPUT_COUNT,
    config: RetentiveNetConfig | None = None,
    seed: An[int, ge(0)] | None = None,
) -> Net:
    """Genesis: reserved neurons, random hidden neurons and initial links,
    drawn from a stream seeded with `seed`."""
    return Net(num_inputs, num_outputs, config=config, rng=RandomnessSource(seed))
