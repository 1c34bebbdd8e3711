# aad/ops/arithmetic.py
import numbers
from ..core.var import ADVar
from ..core.node import Op
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility


def _as_ad(x, requires_grad=False):
    """Ensure x is an ADVar; otherwise wrap it as a constant ADVar."""
    return x if isinstance(x, ADVar) else ADVar(x, requires_grad=requires_grad)


def _record(op_tag, val, *parents):
    """Create the output ADVar and push its trace record on the active tape."""
    out = ADVar(val)
    tape_mod.global_tape.push_node(op_tag=op_tag, out=out, parents=parents)
    return out


def constant(v, name=None):
    """Leaf scalar: no operands, adjoint starts at 0."""
    return ADVar(v, requires_grad=True, name=name)


def add(x, y):
    x, y = _as_ad(x), _as_ad(y)
    return _record(Op.ADD, x.val + y.val, x, y)


def sub(x, y):
    x, y = _as_ad(x), _as_ad(y)
    return _record(Op.SUB, x.val - y.val, x, y)


def mul(x, y):
    x, y = _as_ad(x), _as_ad(y)
    return _record(Op.MUL, x.val * y.val, x, y)


def div(x, y):
    # b == 0 follows IEEE semantics (inf / nan with a numpy RuntimeWarning)
    x, y = _as_ad(x), _as_ad(y)
    return _record(Op.DIV, x.val / y.val, x, y)


def neg(x):
    x = _as_ad(x)
    return _record(Op.NEG, -x.val, x)


def ipow(x, n):
    """
    Integer power x**n, expanded into repeated `mul` (and one `div` for n < 0).
    Non-integer exponents are not a primitive here.
    """
    if isinstance(n, ADVar) or not isinstance(n, numbers.Integral):
        raise TypeError(f"ADVar ** only supports integer exponents, got {type(n)}")
    n = int(n)
    if n < 0:
        return div(1.0, ipow(x, -n))
    if n == 0:
        return _as_ad(1.0)
    out = x
    for _ in range(n - 1):
        out = mul(out, x)
    return out
