"""
Computation graph utilities.
Summaries of the graph reachable from a root scalar.
"""

import numpy as np
from typing import Dict
from collections import Counter

from .engine import topological_order


def graph_stats(root) -> Dict:
    """
    Statistics for the graph reachable from `root`.

    Returns a dict with node/edge counts, leaf count, fan-in / fan-out
    (max and mean over operation nodes) and a per-op breakdown.
    """
    order = topological_order(root)
    ops = [v.node for v in order if v.node is not None]

    fan_ins = [len(node.parents) for node in ops]
    fan_out = Counter()
    for node in ops:
        for p in node.parents:
            fan_out[id(p)] += 1
    fan_outs = [fan_out[id(v)] for v in order]

    op_counter = Counter(node.op_tag.value for node in ops)

    return {
        'nodes': len(order),
        'leaves': len(order) - len(ops),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins) if fan_ins else 0,
        'avg_fan_in': float(np.mean(fan_ins)) if fan_ins else 0.0,
        'max_fan_out': max(fan_outs) if fan_outs else 0,
        'avg_fan_out': float(np.mean(fan_outs)) if fan_outs else 0.0,
        'operations': dict(op_counter),
    }


def format_graph_stats(stats: Dict) -> str:
    """Render graph_stats() output as a text block."""
    lines = [
        "=" * 70,
        "COMPUTATION GRAPH SUMMARY",
        "=" * 70,
        f"Total nodes:        {stats['nodes']:,}",
        f"Leaves:             {stats['leaves']:,}",
        f"Total edges:        {stats['edges']:,}",
        f"Max fan-in:         {stats['max_fan_in']}",
        f"Avg fan-in:         {stats['avg_fan_in']:.2f}",
        f"Max fan-out:        {stats['max_fan_out']}",
        f"Avg fan-out:        {stats['avg_fan_out']:.2f}",
        "",
        "Operation breakdown:",
    ]
    n_ops = max(sum(stats['operations'].values()), 1)
    for op_type, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / n_ops
        lines.append(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    lines.append("=" * 70)
    return "\n".join(lines)
