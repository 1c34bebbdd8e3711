from dataclasses import dataclass


@dataclass
class TrainingConfig:
    """Configuration for batch gradient descent training."""
    # Update rule (ranges are not validated)
    eta: float = 0.9        # Learning rate
    epsilon: float = 0.005  # Stop once the mean error drops below this
    timeout: int = 10000    # Last iteration index; runs at most timeout + 1 steps

    # Logging
    verbose: bool = False
    log_every: int = 1000   # Print progress every N iterations when verbose
