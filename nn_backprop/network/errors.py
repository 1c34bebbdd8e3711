"""Error types raised by the network model and the trainer."""


class DimensionMismatch(ValueError):
    """Vector length disagrees with a layer's arity or the network's output size."""


class EmptyTrainingSet(ValueError):
    """Training requested with zero examples (the mean error is undefined)."""


class NonConvergenceWarning(RuntimeWarning):
    """Training reached its iteration budget without the error dropping below epsilon."""
