"""
Fully connected feedforward network model.

Every weight and bias is an ADVar leaf, so an evaluation of the network
leaves a trace that links the output back to each parameter:

    a = sigmoid( sum_i w_i x_i + b )

Parameters are replaced by fresh leaves after each gradient step; the graph
built during a pass is never mutated in place.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Union

import numpy as np

from ..aad import ADVar
from .errors import DimensionMismatch


@dataclass
class Neuron:
    """Weight vector (one per input) and bias."""
    weights: List[ADVar]
    bias: ADVar

    @property
    def input_size(self) -> int:
        return len(self.weights)

    def parameters(self) -> Iterator[ADVar]:
        yield from self.weights
        yield self.bias

    def step(self, eta: float):
        """
        Gradient descent update w <- w - eta * dE/dw using the adjoints left by
        the last reverse pass. New leaves replace the old ones.
        """
        self.weights = [_descend(w, eta) for w in self.weights]
        self.bias = _descend(self.bias, eta)


def _descend(p: ADVar, eta: float) -> ADVar:
    return ADVar(p.val - eta * p.adj, requires_grad=True, name=p.name)


@dataclass
class Layer:
    neurons: List[Neuron]

    def __post_init__(self):
        if not self.neurons:
            raise ValueError("Layer needs at least one neuron")
        arity = self.neurons[0].input_size
        for j, n in enumerate(self.neurons):
            if n.input_size != arity:
                raise DimensionMismatch(
                    f"Neuron {j} has {n.input_size} weights, expected {arity}"
                )

    @property
    def input_size(self) -> int:
        return self.neurons[0].input_size

    @property
    def output_size(self) -> int:
        return len(self.neurons)


@dataclass
class Network:
    layers: List[Layer]

    def __post_init__(self):
        if not self.layers:
            raise ValueError("Network needs at least one layer")
        for i in range(1, len(self.layers)):
            prev, cur = self.layers[i - 1], self.layers[i]
            if cur.input_size != prev.output_size:
                raise DimensionMismatch(
                    f"Layer {i} expects {cur.input_size} inputs but layer {i - 1} "
                    f"has {prev.output_size} neurons"
                )

    @property
    def input_size(self) -> int:
        return self.layers[0].input_size

    @property
    def output_size(self) -> int:
        return self.layers[-1].output_size

    @property
    def layer_sizes(self) -> List[int]:
        return [layer.output_size for layer in self.layers]

    def parameters(self) -> Iterator[ADVar]:
        """All weights and biases, in layer / neuron order."""
        for layer in self.layers:
            for neuron in layer.neurons:
                yield from neuron.parameters()

    def step(self, eta: float):
        for layer in self.layers:
            for neuron in layer.neurons:
                neuron.step(eta)

    def weight_values(self) -> List[np.ndarray]:
        """Per layer, a (neurons x inputs+1) array; the last column is the bias."""
        return [
            np.array([[float(w) for w in n.weights] + [float(n.bias)] for n in layer.neurons])
            for layer in self.layers
        ]


def _as_rng(rng: Union[None, int, np.random.Generator]) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def create_network(input_count: int, layer_sizes: Sequence[int],
                   rng: Optional[Union[int, np.random.Generator]] = None) -> Network:
    """
    Build a fully connected network with `len(layer_sizes)` layers.

    Layer i has layer_sizes[i] neurons, each with one weight per neuron of the
    previous layer (or `input_count` weights for layer 0). Weights and biases
    are drawn uniformly from [-0.5, 0.5), weights first then bias, neuron by
    neuron.

    Args:
        input_count: Size of the input vector.
        layer_sizes: Neuron count per layer, output layer last.
        rng: A numpy Generator, an int seed, or None for fresh entropy.
    """
    if input_count <= 0:
        raise ValueError(f"input_count must be positive, got {input_count}")
    if not layer_sizes or any(s <= 0 for s in layer_sizes):
        raise ValueError(f"layer_sizes must be non-empty and positive, got {list(layer_sizes)}")

    rng = _as_rng(rng)
    layers = []
    fan_in = input_count
    for i, size in enumerate(layer_sizes):
        neurons = []
        for j in range(size):
            weights = [
                ADVar(rng.uniform(-0.5, 0.5), name=f"L{i}N{j}w{k}") for k in range(fan_in)
            ]
            bias = ADVar(rng.uniform(-0.5, 0.5), name=f"L{i}N{j}b")
            neurons.append(Neuron(weights=weights, bias=bias))
        layers.append(Layer(neurons=neurons))
        fan_in = size
    return Network(layers=layers)
