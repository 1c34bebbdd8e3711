# aad/ops/__init__.py

from .arithmetic import constant, add, sub, mul, div, neg, ipow
from .transcendental import exp, log
from .vector import vsum, dot, vsub, norm_sq, mean, sigmoid

__all__ = [
    "constant", "add", "sub", "mul", "div", "neg", "ipow",
    "exp", "log",
    "vsum", "dot", "vsub", "norm_sq", "mean", "sigmoid",
]
