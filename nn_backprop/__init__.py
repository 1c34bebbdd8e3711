"""
nn_backprop: feedforward neural networks trained by backpropagation,
with gradients from a small reverse-mode automatic differentiation engine.
"""

from .aad import ADVar, use_tape, reset_trace, reverse_trace
from .network import (
    Network, Layer, Neuron,
    create_network, run_network, evaluate_network,
    DimensionMismatch, EmptyTrainingSet, NonConvergenceWarning,
)
from .training import Trainer, TrainingConfig, TrainingStatus, train, get_dataset

__version__ = "0.1.0"

__all__ = [
    "ADVar", "use_tape", "reset_trace", "reverse_trace",
    "Network", "Layer", "Neuron",
    "create_network", "run_network", "evaluate_network",
    "DimensionMismatch", "EmptyTrainingSet", "NonConvergenceWarning",
    "Trainer", "TrainingConfig", "TrainingStatus", "train", "get_dataset",
]
