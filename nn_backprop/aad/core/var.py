# aad/core/var.py
from __future__ import annotations
import numbers
import numpy as np
from typing import Any, Optional


class ADVar:
    """
    Active scalar for reverse-mode Automatic Differentiation (AD).

    Attributes
    ----------
    val : np.float64
        Forward (primal) value of this variable.
    adj : float
        Reverse-mode adjoint, i.e. d(root)/d(this) after a reverse pass.
    node : Optional[Node]
        Trace record of the primitive that produced this variable, or None
        for a leaf. Set by Tape.push_node.
    requires_grad : bool
        Whether this variable receives adjoints. Constants wrapped from plain
        numbers are created with requires_grad=False and are skipped by the
        backward pass.
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __slots__ = ("val", "adj", "node", "requires_grad", "name")

    # numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, val: Any, *, requires_grad: bool = True, name: Optional[str] = None):
        # Only real scalars; vectors are plain Python lists of ADVar. bool is a
        # numbers.Real subclass but never a meaningful value here.
        if isinstance(val, (ADVar, bool, np.bool_)) or not isinstance(val, numbers.Real):
            raise TypeError(
                f"ADVar only accepts real numeric scalars (int, float, numpy scalar), "
                f"but got {type(val)}"
            )

        self.val = np.float64(val)
        self.adj = 0.0
        self.node = None
        self.requires_grad = requires_grad
        self.name = name

    @property
    def is_leaf(self) -> bool:
        return self.node is None

    def __float__(self):
        return float(self.val)

    def __repr__(self):
        # Short label: "req" if requires_grad=True, else "const"
        rg = "req" if self.requires_grad else "const"
        return f"ADVar({float(self.val)!r}, adj={float(self.adj)!r}, {rg}, name={self.name!r})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import ipow
        return ipow(self, other)
