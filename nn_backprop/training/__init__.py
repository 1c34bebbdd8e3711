from .config import TrainingConfig
from .backprop import Trainer, TrainingStatus, batch_error, validate_examples, train
from .datasets import TRAIN_OR, TRAIN_AND, TRAIN_XOR, DATASETS, get_dataset

__all__ = [
    "TrainingConfig",
    "Trainer", "TrainingStatus", "batch_error", "validate_examples", "train",
    "TRAIN_OR", "TRAIN_AND", "TRAIN_XOR", "DATASETS", "get_dataset",
]
