"""
Graph utilities: statistics and node dumps for debugging a tape.
"""

import logging
from collections import Counter
from typing import Dict, Optional

import numpy as np

from .errors import OperationCancelledError

log = logging.getLogger(__name__)

_NODE_TEMPLATE = "%s: %d\n    Weights: [%s, %s]\n    Parents: [%d, %d]"
_HESSIAN_NODE_TEMPLATE = ("%s: %d\n    Weights: [%s, %s]\n    Curvature: [%s, %s, %s]\n"
                          "    Parents: [%d, %d]")


def get_graph_stats(tape) -> Dict:
    """
    Count the structure of a tape.

    Returns:
        dict with nodes, roots, edges (non-degenerate parent links), unary and
        binary node counts, and max / mean fan-out over all nodes.
    """
    n_nodes = tape.node_count
    n_roots = tape.variable_count
    parents = tape.arena.parents

    fan_outs = np.zeros(n_nodes, dtype=np.int64)
    kinds = Counter()
    n_edges = 0
    for i in range(n_roots, n_nodes):
        p0, p1 = int(parents[i, 0]), int(parents[i, 1])
        if p1 == i:
            kinds["unary"] += 1
            fan_outs[p0] += 1
            n_edges += 1
        else:
            kinds["binary"] += 1
            fan_outs[p0] += 1
            fan_outs[p1] += 1
            n_edges += 2

    return {
        'nodes': n_nodes,
        'roots': n_roots,
        'edges': n_edges,
        'unary': kinds["unary"],
        'binary': kinds["binary"],
        'max_fan_out': int(fan_outs.max()) if n_nodes else 0,
        'avg_fan_out': float(fan_outs.mean()) if n_nodes else 0.0,
    }


def print_graph_summary(tape, detailed: bool = False) -> Dict:
    """
    Print a summary of the tape and return the stats dictionary.

    Args:
        tape: GradientTape or HessianTape
        detailed: also print the node list when the tape has at most 100 nodes
    """
    if tape.node_count == 0:
        print("Empty computation graph")
        return {}

    stats = get_graph_stats(tape)

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Root nodes:         {stats['roots']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Unary nodes:        {stats['unary']:,}")
    print(f"Binary nodes:       {stats['binary']:,}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")

    if detailed and tape.node_count <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for i, node in enumerate(tape.nodes):
            if node.is_root(i):
                print(f"Node {i:3d}: root")
            elif node.is_unary(i):
                print(f"Node {i:3d}: unary  <- [Node{node.parent0}]")
            else:
                print(f"Node {i:3d}: binary <- [Node{node.parent0}, Node{node.parent1}]")

    print("="*70 + "\n")
    return stats


def log_nodes(tape, logger: Optional[logging.Logger] = None,
              cancel_event=None, limit: Optional[int] = None) -> None:
    """
    Log the first `limit` nodes of a tape at INFO level, roots first.

    Args:
        tape: GradientTape or HessianTape
        logger: destination logger (defaults to this module's logger)
        cancel_event: optional threading.Event checked before every node
        limit: maximum number of nodes (defaults to tape.config.log_limit)

    Raises:
        OperationCancelledError: `cancel_event` was set.
    """
    logger = logger or log
    if limit is None:
        limit = tape.config.log_limit
    n_roots = tape.variable_count
    second_order = tape.arena.second_order

    for i in range(min(tape.node_count, limit)):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Log nodes operation cancelled")
            raise OperationCancelledError("Log nodes operation cancelled")
        node = tape.node(i)
        node_type = "Root Node" if i < n_roots else "Node"
        if second_order:
            logger.info(_HESSIAN_NODE_TEMPLATE, node_type, i, node.weight0, node.weight1,
                        node.curvature00, node.curvature01, node.curvature11,
                        node.parent0, node.parent1)
        else:
            logger.info(_NODE_TEMPLATE, node_type, i, node.weight0, node.weight1,
                        node.parent0, node.parent1)
