"""
Backpropagation: batch gradient descent driven by reverse-mode AD.

Each iteration builds the error

    E = (1/N) * sum_k || t_k - net(x_k) ||^2

on a fresh tape, runs one reverse sweep from E, and moves every weight and
bias against its adjoint:

    w <- w - eta * dE/dw,    b <- b - eta * dE/db

There is exactly one update per pass over the whole training set. Because
E is composed only of AD primitives, changing the activation or the loss
needs no change here.
"""

import warnings
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from ..aad import ADVar, use_tape, reset_trace, reverse_trace
from ..aad.ops import mean, norm_sq, vsub
from ..network.errors import DimensionMismatch, EmptyTrainingSet, NonConvergenceWarning
from ..network.evaluator import run_network
from ..network.model import Network
from .config import TrainingConfig

Example = Tuple[Sequence[float], Sequence[float]]


class TrainingStatus(str, Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    TIMED_OUT = "timed_out"


def batch_error(network: Network, examples: Sequence[Example]) -> ADVar:
    """Mean squared error over all examples, built on the active tape."""
    return mean([
        norm_sq(vsub(target, run_network(x, network))) for x, target in examples
    ])


def validate_examples(network: Network, examples: Sequence[Example]):
    if len(examples) == 0:
        raise EmptyTrainingSet("Training set is empty")
    for k, (x, target) in enumerate(examples):
        if len(x) != network.input_size:
            raise DimensionMismatch(
                f"Example {k}: input has {len(x)} values, network expects {network.input_size}"
            )
        if len(target) != network.output_size:
            raise DimensionMismatch(
                f"Example {k}: target has {len(target)} values, network outputs {network.output_size}"
            )


class Trainer:
    """
    Train a network in place by batch gradient descent.

    Usage:
        >>> net = create_network(2, [1], rng=0)
        >>> trainer = Trainer(net, TRAIN_OR, TrainingConfig(eta=0.9))
        >>> errors = list(trainer.steps())
        >>> trainer.status
        <TrainingStatus.CONVERGED: 'converged'>

    The error sequence is produced lazily: an iteration only runs when the
    consumer asks for its value, and the network is already updated when
    the value is handed out.
    """

    def __init__(self, network: Network, examples: Sequence[Example],
                 config: TrainingConfig = None):
        self.network = network
        self.examples = [(list(x), list(t)) for x, t in examples]
        self.config = config or TrainingConfig()
        validate_examples(network, self.examples)

        self.iteration = 0
        self.status = TrainingStatus.RUNNING
        self.error_history: List[float] = []

    def step(self) -> float:
        """One forward / reverse / update cycle; returns the error before the update."""
        with use_tape():
            error = batch_error(self.network, self.examples)
            reset_trace(error)
            reverse_trace(error, seed=1.0)
            self.network.step(self.config.eta)
        return float(error)

    def steps(self) -> Iterator[float]:
        cfg = self.config
        if cfg.verbose:
            print(f"Training {self.network.input_size} -> {self.network.layer_sizes} "
                  f"on {len(self.examples)} examples (eta={cfg.eta}, epsilon={cfg.epsilon})")

        for i in range(cfg.timeout + 1):
            self.iteration = i
            err = self.step()
            self.error_history.append(err)

            if cfg.verbose and cfg.log_every and i % cfg.log_every == 0:
                print(f"  iter {i:6d}: error = {err:.6e}")

            if err < cfg.epsilon:
                self.status = TrainingStatus.CONVERGED
                if cfg.verbose:
                    print(f"Converged after {i + 1} iterations (error = {err:.6e})")
                yield err
                return

            # Last allowed iteration: report before handing out its value
            if i == cfg.timeout:
                self.status = TrainingStatus.TIMED_OUT
                warnings.warn(
                    f"Failed to converge within {cfg.timeout} steps.",
                    NonConvergenceWarning,
                    stacklevel=2,
                )
            yield err


def train(network: Network, eta: float, epsilon: float, timeout: int,
          examples: Sequence[Example], *, verbose: bool = False) -> Iterator[float]:
    """
    Lazily train `network` in place, yielding one error value per iteration.

    Stops after yielding the first error below `epsilon`, or after iteration
    `timeout` with a NonConvergenceWarning. The training set is checked
    eagerly (EmptyTrainingSet, DimensionMismatch); eta / epsilon are not.
    """
    config = TrainingConfig(eta=eta, epsilon=epsilon, timeout=timeout, verbose=verbose)
    return Trainer(network, examples, config).steps()
