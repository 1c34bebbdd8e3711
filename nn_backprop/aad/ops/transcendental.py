# aad/ops/transcendental.py
import numpy as np
from ..core.node import Op
from .arithmetic import _as_ad, _record


def exp(x):
    # Saturates to 0 / inf for large |x|, no clamping
    x = _as_ad(x)
    return _record(Op.EXP, np.exp(x.val), x)


def log(x):
    # Not used by the squared-error loss; available for composing others
    # such as cross-entropy.
    x = _as_ad(x)
    return _record(Op.LOG, np.log(x.val), x)
