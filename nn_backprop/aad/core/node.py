# aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class Op(str, Enum):
    """Closed set of primitive operation kinds that can appear on a trace."""
    LEAF = "leaf"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    NEG = "neg"
    EXP = "exp"
    LOG = "log"


@dataclass
class Node:
    """
    One node on the tape produced by a primitive operation.

    Attributes
    ----------
    op_tag : Op
        Which primitive produced `out`; selects the local-partial rule
        used by the backward pass.
    out    : Any
        The ADVar produced by this op.
    parents: Tuple[Any, ...]
        Operand ADVars in positional order. Local partials are not stored,
        they are evaluated from the operands' values when needed.
    """
    op_tag: Op
    out: Any
    parents: Tuple[Any, ...]
