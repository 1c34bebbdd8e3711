"""
Forward evaluation of a network on one input vector.

run_* return ADVars carrying the trace (for training); evaluate_network
returns plain floats and drops the trace.
"""

from typing import List, Sequence

from ..aad import ADVar, use_tape
from ..aad.ops import add, dot, sigmoid
from .errors import DimensionMismatch
from .model import Layer, Network, Neuron


def run_neuron(x: Sequence, neuron: Neuron) -> ADVar:
    if len(x) != neuron.input_size:
        raise DimensionMismatch(
            f"Neuron expects {neuron.input_size} inputs, got {len(x)}"
        )
    return sigmoid(add(dot(x, neuron.weights), neuron.bias))


def run_layer(x: Sequence, layer: Layer) -> List[ADVar]:
    if len(x) != layer.input_size:
        raise DimensionMismatch(
            f"Layer expects {layer.input_size} inputs, got {len(x)}"
        )
    return [run_neuron(x, n) for n in layer.neurons]


def run_network(x: Sequence, network: Network) -> List[ADVar]:
    out = list(x)
    for layer in network.layers:
        out = run_layer(out, layer)
    return out


def evaluate_network(x: Sequence[float], network: Network) -> List[float]:
    """Pure evaluation: outputs as floats, trace discarded with its tape."""
    with use_tape():
        return [float(o) for o in run_network(x, network)]
