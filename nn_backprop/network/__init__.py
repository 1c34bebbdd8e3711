from .errors import DimensionMismatch, EmptyTrainingSet, NonConvergenceWarning
from .model import Neuron, Layer, Network, create_network
from .evaluator import run_neuron, run_layer, run_network, evaluate_network

__all__ = [
    "DimensionMismatch", "EmptyTrainingSet", "NonConvergenceWarning",
    "Neuron", "Layer", "Network", "create_network",
    "run_neuron", "run_layer", "run_network", "evaluate_network",
]
