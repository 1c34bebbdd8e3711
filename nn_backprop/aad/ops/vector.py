# aad/ops/vector.py
"""
Composite operations on vectors of scalars.

Vectors are plain Python sequences of ADVar (or numbers). Everything here is
written in terms of the primitives in `arithmetic` and `transcendental`, so
the backward pass needs no extra derivative rules for them.
"""
from typing import Sequence

from .arithmetic import _as_ad, add, sub, mul, div, neg
from .transcendental import exp


def vsum(xs: Sequence):
    """Left fold of `add`; the empty sum is a constant 0."""
    xs = list(xs)
    if not xs:
        return _as_ad(0.0)
    acc = _as_ad(xs[0])
    for x in xs[1:]:
        acc = add(acc, x)
    return acc


def dot(xs: Sequence, ws: Sequence):
    if len(xs) != len(ws):
        raise ValueError(f"dot: length mismatch ({len(xs)} vs {len(ws)})")
    return vsum([mul(x, w) for x, w in zip(xs, ws)])


def vsub(xs: Sequence, ys: Sequence):
    if len(xs) != len(ys):
        raise ValueError(f"vsub: length mismatch ({len(xs)} vs {len(ys)})")
    return [sub(x, y) for x, y in zip(xs, ys)]


def norm_sq(xs: Sequence):
    """Squared Euclidean norm, sum_i x_i * x_i."""
    return vsum([mul(x, x) for x in xs])


def mean(xs: Sequence):
    xs = list(xs)
    if not xs:
        raise ValueError("mean of an empty sequence")
    return mul(1.0 / len(xs), vsum(xs))


def sigmoid(x):
    """Logistic activation 1 / (1 + exp(-x))."""
    return div(1.0, add(1.0, exp(neg(x))))
