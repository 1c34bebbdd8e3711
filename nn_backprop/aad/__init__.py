# aad/__init__.py
# Reverse-mode automatic differentiation on scalars

from .core.var import ADVar
from .core.tape import Tape, use_tape
from .core.engine import reset_trace, reverse_trace, reverse, zero_adjoints
from .core.seeds import grad, grads_list, value

# Registers the primitives behind ADVar's operators
from . import ops
from .ops import constant, exp, log, sigmoid, dot, norm_sq, mean

__all__ = [
    # Core
    'ADVar',
    'Tape',
    'use_tape',
    # Engine
    'reset_trace',
    'reverse_trace',
    'reverse',
    'zero_adjoints',
    'grad',
    'grads_list',
    'value',
    # Ops
    'ops',
    'constant',
    'exp',
    'log',
    'sigmoid',
    'dot',
    'norm_sq',
    'mean',
]
