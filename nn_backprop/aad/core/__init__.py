# aad/core/__init__.py

"""
Core public API for the AAD package.

Exports:
    ADVar             : The differentiable scalar used by the AAD system.
    Node, Op          : Trace record and the closed set of primitive kinds.
    Tape, use_tape    : Forward-order record of nodes; context manager to
                        temporarily switch the active tape.
    reset_trace       : Zero adjoints of everything reachable from a root.
    reverse_trace     : Reverse pass from a root in reverse topological order.
    reverse           : Reverse pass driven by the active tape.
    zero_adjoints     : Reset all adjoints on the active tape to zero.
    grad, grads_list  : Convenience: gradients of a function at a point.
    value             : Convenience: extract the primal value from ADVar.
"""

from .var import ADVar
from .node import Node, Op
from .tape import Tape, use_tape
from .engine import (
    local_partials,
    topological_order,
    reset_trace,
    reverse_trace,
    reverse,
    zero_adjoints,
)
from .seeds import grad, grads_list, bump_grads_list, value
from .graph_utils import graph_stats, format_graph_stats

__all__ = [
    "ADVar", "Node", "Op",
    "Tape", "use_tape",
    "local_partials", "topological_order",
    "reset_trace", "reverse_trace", "reverse", "zero_adjoints",
    "grad", "grads_list", "bump_grads_list", "value",
    "graph_stats", "format_graph_stats",
]
