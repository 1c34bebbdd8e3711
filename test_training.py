"""
Batch gradient descent training loop.
"""

import itertools
import sys
import warnings
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent))

from nn_backprop import (
    create_network, evaluate_network, train, Trainer, TrainingConfig, TrainingStatus,
    DimensionMismatch, EmptyTrainingSet, NonConvergenceWarning,
)
from nn_backprop.aad import ADVar
from nn_backprop.network import Network, Layer, Neuron
from nn_backprop.training import TRAIN_OR, TRAIN_XOR, TRAIN_AND, get_dataset


def _mse(net, examples):
    return float(np.mean([
        np.sum((np.asarray(t) - np.asarray(evaluate_network(x, net))) ** 2)
        for x, t in examples
    ]))


def test_or_single_neuron_converges():
    net = create_network(2, [1], rng=0)
    errors = list(train(net, 0.9, 0.005, 10000, TRAIN_OR))
    assert errors[-1] < 0.005
    assert all(e >= 0.005 for e in errors[:-1])
    assert len(errors) < 10000
    assert errors[-1] < errors[0]
    assert _mse(net, TRAIN_OR) < 0.005


def test_and_single_neuron_converges():
    net = create_network(2, [1], rng=3)
    trainer = Trainer(net, TRAIN_AND, TrainingConfig(eta=0.9, epsilon=0.005, timeout=20000))
    list(trainer.steps())
    assert trainer.status is TrainingStatus.CONVERGED


def test_xor_single_neuron_does_not_converge():
    net = create_network(2, [1], rng=0)
    with pytest.warns(NonConvergenceWarning, match="Failed to converge within 2000 steps"):
        errors = list(train(net, 0.9, 0.005, 2000, TRAIN_XOR))
    assert len(errors) == 2001
    # a single sigmoid unit cannot get the XOR mean squared error near zero
    assert min(errors) > 0.1


def _network_from_values(layers):
    """layers: per layer, rows of [w0, ..., wn, b]."""
    return Network([
        Layer([Neuron([ADVar(w) for w in row[:-1]], ADVar(row[-1])) for row in rows])
        for rows in layers
    ])


# Hidden units start as rough OR / AND detectors and the output as OR-and-not-AND,
# i.e. inside the basin of the XOR solution; training has to sharpen them.
XOR_HIDDEN_2 = [
    [[4.0, 4.0, -2.0], [4.0, 4.0, -6.0]],
    [[6.0, -6.0, -2.0]],
]
XOR_HIDDEN_3 = [
    [[4.0, 4.0, -2.0], [4.0, 4.0, -6.0], [0.3, -0.2, 0.1]],
    [[6.0, -6.0, 0.25, -2.0]],
]


@pytest.mark.parametrize("start", [XOR_HIDDEN_2, XOR_HIDDEN_3], ids=["2-1", "3-1"])
def test_xor_with_hidden_layer_converges(start):
    net = _network_from_values(start)
    trainer = Trainer(net, TRAIN_XOR, TrainingConfig(eta=0.9, epsilon=0.005, timeout=10000))
    errors = list(trainer.steps())
    assert trainer.status is TrainingStatus.CONVERGED
    assert errors[-1] < 0.005 < errors[0]
    for x, t in TRAIN_XOR:
        assert round(evaluate_network(x, net)[0]) == t[0]


def test_timeout_reported_with_last_value():
    net = create_network(2, [1], rng=0)
    trainer = Trainer(net, TRAIN_XOR, TrainingConfig(eta=0.9, epsilon=0.005, timeout=5))
    with pytest.warns(NonConvergenceWarning, match="within 5 steps"):
        values = list(itertools.islice(trainer.steps(), 6))
    assert len(values) == 6
    assert trainer.status is TrainingStatus.TIMED_OUT


def test_status_running_before_last_iteration():
    net = create_network(2, [1], rng=0)
    trainer = Trainer(net, TRAIN_XOR, TrainingConfig(eta=0.9, epsilon=0.005, timeout=5))
    with warnings.catch_warnings():
        warnings.simplefilter("error", NonConvergenceWarning)
        list(itertools.islice(trainer.steps(), 5))
    assert trainer.status is TrainingStatus.RUNNING


def test_identical_seeds_give_identical_error_sequences():
    def run():
        net = create_network(2, [2, 1], rng=7)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NonConvergenceWarning)
            return list(train(net, 0.9, 0.0, 200, TRAIN_XOR))

    assert run() == run()


def test_first_error_is_mse_before_update():
    net = create_network(2, [2, 1], rng=2)
    before = _mse(net, TRAIN_XOR)
    first = next(train(net, 0.5, 0.0, 10, TRAIN_XOR))
    assert first == pytest.approx(before, rel=1e-12)
    assert _mse(net, TRAIN_XOR) != before


def test_training_is_lazy():
    net = create_network(2, [1], rng=0)
    initial = [float(p) for p in net.parameters()]
    trainer = Trainer(net, TRAIN_OR, TrainingConfig(eta=0.9, epsilon=0.0, timeout=100))
    gen = trainer.steps()
    assert trainer.error_history == []
    assert [float(p) for p in net.parameters()] == initial

    taken = list(itertools.islice(gen, 3))
    assert len(taken) == 3
    assert trainer.iteration == 2
    assert trainer.error_history == taken
    assert trainer.status is TrainingStatus.RUNNING
    assert [float(p) for p in net.parameters()] != initial


def test_one_step_is_batch_gradient_descent():
    eta = 0.3
    net = create_network(2, [2, 1], rng=4)
    params = list(net.parameters())
    old = np.array([float(p) for p in params])

    # centered differences of the batch error w.r.t. every parameter
    eps = 1e-6
    fd = []
    for layer in net.layers:
        for neuron in layer.neurons:
            slots = [(neuron.weights, k) for k in range(len(neuron.weights))]
            for vec, k in slots:
                w = vec[k]
                vec[k] = ADVar(w.val + eps); up = _mse(net, TRAIN_XOR)
                vec[k] = ADVar(w.val - eps); dn = _mse(net, TRAIN_XOR)
                vec[k] = w
                fd.append((up - dn) / (2 * eps))
            b = neuron.bias
            neuron.bias = ADVar(b.val + eps); up = _mse(net, TRAIN_XOR)
            neuron.bias = ADVar(b.val - eps); dn = _mse(net, TRAIN_XOR)
            neuron.bias = b
            fd.append((up - dn) / (2 * eps))

    Trainer(net, TRAIN_XOR, TrainingConfig(eta=eta)).step()
    new = np.array([float(p) for p in net.parameters()])
    np.testing.assert_allclose(new, old - eta * np.array(fd), rtol=1e-7, atol=1e-9)


def test_timeout_zero_runs_one_iteration():
    net = create_network(2, [1], rng=0)
    with pytest.warns(NonConvergenceWarning):
        errors = list(train(net, 0.9, 0.0, 0, TRAIN_OR))
    assert len(errors) == 1


def test_large_epsilon_stops_after_first_value():
    net = create_network(2, [1], rng=0)
    trainer = Trainer(net, TRAIN_OR, TrainingConfig(eta=0.9, epsilon=10.0, timeout=100))
    errors = list(trainer.steps())
    assert len(errors) == 1
    assert trainer.status is TrainingStatus.CONVERGED


def test_zero_learning_rate_is_accepted():
    net = create_network(2, [1], rng=0)
    initial = [float(p) for p in net.parameters()]
    with pytest.warns(NonConvergenceWarning):
        errors = list(train(net, 0.0, 0.005, 20, TRAIN_OR))
    assert len(set(errors)) == 1
    assert [float(p) for p in net.parameters()] == initial


def test_empty_training_set_fails_eagerly():
    net = create_network(2, [1], rng=0)
    with pytest.raises(EmptyTrainingSet):
        train(net, 0.9, 0.005, 10, [])


@pytest.mark.parametrize("examples", [
    [([0.0, 1.0, 1.0], [1.0])],
    [([0.0, 1.0], [1.0, 0.0])],
])
def test_example_dimension_mismatch_fails_eagerly(examples):
    net = create_network(2, [1], rng=0)
    with pytest.raises(DimensionMismatch):
        train(net, 0.9, 0.005, 10, examples)


def test_verbose_prints_progress(capsys):
    net = create_network(2, [1], rng=0)
    cfg = TrainingConfig(eta=0.9, epsilon=0.0, timeout=4, verbose=True, log_every=2)
    with pytest.warns(NonConvergenceWarning):
        list(Trainer(net, TRAIN_OR, cfg).steps())
    out = capsys.readouterr().out
    assert "iter      0" in out
    assert "iter      4" in out


def test_get_dataset():
    assert get_dataset("XOR") is TRAIN_XOR
    with pytest.raises(ValueError):
        get_dataset("nand")
