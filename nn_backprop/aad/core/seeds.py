# aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Iterable, List
import numpy as np

from .var import ADVar
from .tape import use_tape
from .engine import reset_trace, reverse_trace


def value(x: Any) -> Any:
    """Return the numeric value of an ADVar; pass through plain numbers unchanged."""
    return x.val if isinstance(x, ADVar) else x


def _ensure_ad(v: Any, *, name: str, requires_grad: bool = True) -> ADVar:
    """Wrap a plain value as ADVar if needed; otherwise return the ADVar itself."""
    return v if isinstance(v, ADVar) else ADVar(v, requires_grad=requires_grad, name=name)


def _scalar_output(y: Any) -> ADVar:
    return y if isinstance(y, ADVar) else ADVar(y, requires_grad=False, name="y")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[ADVar], ADVar], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = _ensure_ad(x0, name="x", requires_grad=True)
        y = _scalar_output(f(x))
        reset_trace(y)
        reverse_trace(y, seed=1.0)
        return x.adj


# ----------------------------- multi-input grads ----------------------------- #
def grads_list(f: Callable[[List[ADVar]], ADVar],
               x0_list: Iterable[float]) -> List[float]:
    """
    Gradient of y=f(xs) w.r.t. every input, from ONE reverse pass.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[ADVar] = [
            _ensure_ad(v, name=f"x{i}", requires_grad=True) for i, v in enumerate(x0_list)
        ]
        y = _scalar_output(f(xs))
        reset_trace(y)
        reverse_trace(y, seed=1.0)
        return [x.adj for x in xs]


def bump_grads_list(f: Callable[[List[ADVar]], ADVar],
                    x0_list: Iterable[float], eps: float = 1e-6) -> np.ndarray:
    """
    Centered finite differences (f(x + eps e_i) - f(x - eps e_i)) / (2 eps),
    used to check AD gradients. `f` is evaluated on ADVars so the same
    callable works for both.
    """
    x0 = np.asarray(list(x0_list), dtype=np.float64)
    out = np.zeros_like(x0)

    def _eval(x):
        with use_tape():
            return float(value(f([ADVar(xi, requires_grad=False) for xi in x])))

    for i in range(len(x0)):
        up = x0.copy(); up[i] += eps
        dn = x0.copy(); dn[i] -= eps
        out[i] = (_eval(up) - _eval(dn)) / (2.0 * eps)
    return out
