# aad/core/engine.py
from __future__ import annotations
from typing import List, Sequence, Tuple, Union
from . import tape as tape_mod
from .node import Node, Op
from .var import ADVar


# Local partials d(out)/d(operand), one rule per primitive, evaluated from
# the forward values recorded on the node.
_PARTIALS = {
    Op.ADD: lambda n: (1.0, 1.0),
    Op.SUB: lambda n: (1.0, -1.0),
    Op.MUL: lambda n: (n.parents[1].val, n.parents[0].val),
    Op.DIV: lambda n: (1.0 / n.parents[1].val,
                       -n.parents[0].val / (n.parents[1].val * n.parents[1].val)),
    Op.NEG: lambda n: (-1.0,),
    Op.EXP: lambda n: (n.out.val,),
    Op.LOG: lambda n: (1.0 / n.parents[0].val,),
    Op.LEAF: lambda n: (),
}


def local_partials(node: Node) -> Tuple:
    """Return (d out/d parent_0, d out/d parent_1, ...) for a trace record."""
    return _PARTIALS[node.op_tag](node)


def _operands(v: ADVar):
    return v.node.parents if v.node is not None else ()


def topological_order(root: ADVar) -> List[ADVar]:
    """
    All scalars reachable from `root` through operand links, each exactly once,
    ordered so that every operand precedes its consumers (root comes last).

    Iterative post-order DFS, so deep graphs do not hit the recursion limit.
    """
    order: List[ADVar] = []
    seen = {id(root)}
    stack = [(root, iter(_operands(root)))]
    while stack:
        v, it = stack[-1]
        for p in it:
            if id(p) not in seen:
                seen.add(id(p))
                stack.append((p, iter(_operands(p))))
                break
        else:
            stack.pop()
            order.append(v)
    return order


def reset_trace(root: ADVar):
    """Zero `adj` on every scalar reachable from `root`, visiting each once."""
    seen = {id(root)}
    stack = [root]
    while stack:
        v = stack.pop()
        v.adj = 0.0
        for p in _operands(v):
            if id(p) not in seen:
                seen.add(id(p))
                stack.append(p)


def reverse_trace(root: ADVar, seed=1.0):
    """
    Reverse sweep over the subgraph reachable from `root`.

    Sets root.adj = seed, then walks the scalars in reverse topological order
    so that a node's adjoint is complete before it is pushed to its operands:
        p.adj += y.adj * (dy/dp)
    Operands with requires_grad=False are skipped. Cycles are not checked.
    """
    order = topological_order(root)
    root.adj = float(seed)
    for y in reversed(order):
        if y.node is None:
            continue
        _propagate(y.node)


def _propagate(node: Node):
    y = node.out
    for p, d in zip(node.parents, local_partials(node)):
        if not p.requires_grad:
            continue
        p.adj = p.adj + y.adj * d


def zero_adjoints():
    """
    Set all adjoints on the current tape to zero.
    We scan the recorded nodes to find all ADVars (outputs and parents)
    and zero their `.adj` fields.

    Tape-driven counterpart of `reset_trace`. Training resets from the error
    root instead; this pair is kept to cross-check the root-driven passes.
    """
    seen = set()
    for node in tape_mod.global_tape.nodes:
        if id(node.out) not in seen:
            node.out.adj = 0.0; seen.add(id(node.out))
        for p in node.parents:
            if id(p) not in seen:
                p.adj = 0.0; seen.add(id(p))


def reverse(outputs: Union[ADVar, Sequence[ADVar]], seed=1.0):
    """
    Run a single reverse pass over the active tape.

    Args:
        outputs: an ADVar or a (list/tuple) of ADVars to seed.
        seed: adjoint seed. If `outputs` is a sequence, each output is seeded
              with 1.0 (the `seed` arg is ignored in that case).

    The tape's recorded order is already topological, so walking it backwards
    gives the same adjoints as `reverse_trace`, which is what training uses.
    Used to cross-check it.
    """
    if isinstance(outputs, (list, tuple)):
        for y in outputs:
            y.adj += 1.0
    else:
        outputs.adj += float(seed)

    for node in reversed(tape_mod.global_tape.nodes):
        if node.out.adj == 0.0:
            continue  # nothing to propagate
        _propagate(node)
