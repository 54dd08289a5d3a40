import math

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from retne.config import INPUT_COUNT, OUTPUT_COUNT, RetentiveNetConfig
from retne.net.activation import sigmoid
from retne.net.retentive.compute import (
    clamp,
    forward_pass,
    get_output,
    get_outputs,
    prepare,
    set_input,
    set_inputs,
    step,
)
from retne.net.retentive.evolution import Net, create
from retne.net.rng import RandomnessSource


def empty_net(config: RetentiveNetConfig | None = None) -> Net:
    net = Net(config=config, rng=RandomnessSource(0), initialize=False)
    net.add_reserved_neurons()
    return net


def test_single_link_to_output():
    net = empty_net()
    net.add_link(0, INPUT_COUNT, 2.0)
    prepare(net)
    set_input(net, 0, 1.0)
    forward_pass(net)
    assert get_output(net, 0) == pytest.approx(sigmoid(2.0))
    assert get_output(net, 0) == pytest.approx(0.881, abs=1e-3)


def test_prepare_applies_retention_and_bias_per_neuron():
    net = empty_net()
    a = net.add_hidden_neuron(retention=0.5, bias=0.25)
    b = net.add_hidden_neuron(retention=2.0, bias=-1.0)
    a.value, b.value = 4.0, 3.0
    net.neurons[0].value = 7.0
    prepare(net)
    assert a.value == pytest.approx(4.0 * 0.5 + 0.25)
    assert b.value == pytest.approx(3.0 * 2.0 - 1.0)
    # Reserved neurons start with zero retention and bias.
    assert net.neurons[0].value == 0.0


def test_values_persist_across_passes():
    net = empty_net()
    hidden = net.add_hidden_neuron(retention=0.5, bias=0.0)
    hidden_index = net.num_neurons - 1
    net.add_link(0, hidden_index, 1.0)
    step(net, [2.0] + [0.0] * (INPUT_COUNT - 1))
    assert hidden.value == pytest.approx(2.0)
    step(net, [0.0] * INPUT_COUNT)
    assert hidden.value == pytest.approx(1.0)
    step(net, [0.0] * INPUT_COUNT)
    assert hidden.value == pytest.approx(0.5)


def test_clamp_applies_after_every_link():
    net = empty_net()
    net.add_hidden_neuron(retention=0.0, bias=0.0)
    target = net.num_neurons - 1
    net.add_link(0, target, 1e6)
    net.add_link(1, target, -500.0)
    prepare(net)
    set_inputs(net, [1.0, 1.0, 0.0, 0.0, 0.0])
    forward_pass(net)
    # Clamping only at the end would give 1e3.
    assert net.neurons[target].value == pytest.approx(500.0)


def test_values_stay_within_bound():
    config = RetentiveNetConfig(max_activation_value=10.0)
    net = empty_net(config)
    net.add_hidden_neuron(retention=1.0, bias=1.0)
    hidden = net.num_neurons - 1
    # Positive feedback loop.
    net.add_link(hidden, hidden, 3.0)
    net.add_link(0, hidden, -100.0)
    for _ in range(20):
        step(net, [1.0] * INPUT_COUNT)
        assert -10.0 <= net.neurons[hidden].value <= 10.0


def test_signal_takes_one_hop_per_pass():
    net = empty_net()
    net.add_hidden_neuron(retention=1.0, bias=0.0)
    hidden = net.num_neurons - 1
    # Listed downstream-first so the hidden value read by the first link is
    # the one from the previous pass.
    net.add_link(hidden, INPUT_COUNT, 3.0)
    net.add_link(0, hidden, 1.0)
    outputs = step(net, [1.0] + [0.0] * (INPUT_COUNT - 1))
    assert outputs[0] == pytest.approx(sigmoid(0.0))
    outputs = step(net, [0.0] * INPUT_COUNT)
    assert outputs[0] == pytest.approx(sigmoid(3.0))


def test_link_order_matters_within_a_pass():
    net = empty_net()
    net.add_hidden_neuron(retention=0.0, bias=0.0)
    hidden = net.num_neurons - 1
    net.add_link(0, hidden, 1.0)
    net.add_link(hidden, INPUT_COUNT, 3.0)
    outputs = step(net, [1.0] + [0.0] * (INPUT_COUNT - 1))
    assert outputs[0] == pytest.approx(sigmoid(3.0))


def test_only_outputs_are_activated():
    net = empty_net()
    net.add_hidden_neuron(retention=0.0, bias=0.0)
    hidden = net.num_neurons - 1
    net.add_link(0, hidden, 5.0)
    net.add_link(0, INPUT_COUNT + 1, -1.5)
    step(net, [2.0] + [0.0] * (INPUT_COUNT - 1))
    assert net.neurons[0].value == 2.0
    assert net.neurons[hidden].value == pytest.approx(10.0)
    assert get_output(net, 1) == pytest.approx(1 / (1 + math.exp(3.0)))
    # Outputs with no incoming links see sigmoid(0).
    assert get_output(net, 0) == pytest.approx(0.5)


def test_evolved_outputs_lie_in_sigmoid_range():
    net = create(config=RetentiveNetConfig(initial_links=(10, 20)), seed=8)
    rng = RandomnessSource(8)
    for _ in range(30):
        net.mutate()
        outputs = step(net, rng.gaussians(0.0, 1.0, INPUT_COUNT).tolist())
        assert len(outputs) == OUTPUT_COUNT
        assert all(0.0 <= y <= 1.0 for y in outputs)


def test_configured_output_activation():
    net = empty_net(RetentiveNetConfig(output_activation="identity"))
    net.add_link(0, INPUT_COUNT, 2.0)
    step(net, [1.5] + [0.0] * (INPUT_COUNT - 1))
    assert get_outputs(net)[0] == pytest.approx(3.0)


def test_input_and_output_index_checks():
    net = empty_net()
    with pytest.raises(IndexError):
        set_input(net, INPUT_COUNT, 1.0)
    with pytest.raises(IndexError):
        get_output(net, OUTPUT_COUNT)
    with pytest.raises(BeartypeCallHintParamViolation):
        set_input(net, -1, 1.0)
    with pytest.raises(ValueError):
        set_inputs(net, [1.0])


def test_clamp():
    assert clamp(5.0, 2.0) == 2.0
    assert clamp(-5.0, 2.0) == -2.0
    assert clamp(1.5, 2.0) == 1.5


def test_outputs_strictly_inside_unit_interval_unless_saturated():
    net = empty_net()
    net.add_link(0, INPUT_COUNT, 2.0)
    net.add_link(1, INPUT_COUNT + 1, -2.0)
    net.add_link(2, INPUT_COUNT + 2, 1e6)
    outputs = step(net, [1.0, 1.0, 1.0, 0.0, 0.0])
    assert 0.0 < outputs[0] < 1.0
    assert 0.0 < outputs[1] < 1.0
    # Clamped to the 1e3 bound, where the sigmoid rounds to exactly 1.
    assert outputs[2] == 1.0
