"""Boolean function training sets: ([inputs], [target]) pairs."""

TRAIN_OR = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [1.0]),
    ([1.0, 0.0], [1.0]),
    ([1.0, 1.0], [1.0]),
]

TRAIN_AND = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [0.0]),
    ([1.0, 0.0], [0.0]),
    ([1.0, 1.0], [1.0]),
]

TRAIN_XOR = [
    ([0.0, 0.0], [0.0]),
    ([0.0, 1.0], [1.0]),
    ([1.0, 0.0], [1.0]),
    ([1.0, 1.0], [0.0]),
]

DATASETS = {
    'or': TRAIN_OR,
    'and': TRAIN_AND,
    'xor': TRAIN_XOR,
}


def get_dataset(name: str):
    try:
        return DATASETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown dataset '{name}', choose from {sorted(DATASETS)}"
        ) from None
