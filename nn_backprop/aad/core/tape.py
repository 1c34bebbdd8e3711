# aad/core/tape.py
from __future__ import annotations
from typing import List, Optional, Sequence
from .node import Node, Op


class Tape:
    """
    A simple tape: records Nodes in forward order.

    Because operands are always created before their consumers, the
    recorded order is a valid topological order of the graph.

    A tape is also a context manager: entering installs it as the active
    tape (`global_tape`), exiting puts back whichever tape was active before.
    Entering the same tape again while it is active nests correctly.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        self._outer: List[Tape] = []

    def __len__(self):
        return len(self.nodes)

    def reset(self):
        self.nodes.clear()

    def push_node(self, *, op_tag: Op, out, parents: Sequence):
        """
        Append a Node(op_tag, out, parents) to the tape, link it to `out`
        and return its index.
        """
        node = Node(op_tag=op_tag, out=out, parents=tuple(parents))
        out.node = node
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __enter__(self) -> Tape:
        global global_tape
        self._outer.append(global_tape)
        global_tape = self
        return self

    def __exit__(self, exc_type, exc, tb):
        global global_tape
        global_tape = self._outer.pop()
        return False


# Active tape; ops always read it through the module so swaps are seen
global_tape = Tape()


def use_tape(tape: Optional[Tape] = None) -> Tape:
    """
    Tape to record a block on, fresh unless one is given:
        with use_tape():
            ... build computation ...
            reverse_trace(y)
    Nothing recorded inside the block stays reachable from the outer tape.
    """
    return Tape() if tape is None else tape
