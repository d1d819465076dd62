"""
Graph inspection helpers.
Print and analyse the structure of a ScalarGraph.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .node import ScalarData


def _fan_outs(nodes: List[ScalarData]) -> List[int]:
    fan_outs = [0] * len(nodes)
    for node in nodes:
        for operand in node.op.operands:
            fan_outs[operand] += 1
    return fan_outs


def get_graph_stats(graph) -> Dict:
    """
    Collect graph statistics without printing.

    Returns:
        dict with node/edge counts, fan-in and fan-out figures and a
        per-operation breakdown
    """
    nodes = graph.snapshot()
    if not nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    fan_ins = [len(node.op.operands) for node in nodes]
    fan_outs = _fan_outs(nodes)
    op_counter = Counter(node.op.kind.value for node in nodes)

    return {
        'nodes': len(nodes),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(graph, detailed: bool = False) -> Dict:
    """
    Print a summary of the computation graph.

    Args:
        graph: ScalarGraph to inspect
        detailed: also list every node (only for graphs of at most 100 nodes)

    Returns:
        the statistics dict from get_graph_stats()
    """
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for i, node in enumerate(graph.snapshot()):
            operand_info = ", ".join(f"Node{j}" for j in node.op.operands)
            print(f"Node {i:3d}: {node.op.kind.value:12s} <- [{operand_info}]")

    print("="*70 + "\n")
    return stats


def print_computation_graph(graph, max_nodes: int = 20) -> None:
    """
    Print the node list with values, gradients and operands.

    Args:
        graph: ScalarGraph to inspect
        max_nodes: print at most this many nodes
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    nodes = graph.snapshot()
    if not nodes:
        print("Empty graph")
        return

    for i, node in enumerate(nodes[:max_nodes]):
        value = float(node.data)
        grad = float(node.grad)
        if node.op.is_leaf:
            print(f"Node {i:4d}: {'leaf':12s} ({value:10.6f}, grad {grad:10.6f})")
            continue
        operand_info = ", ".join(f"Node{j}" for j in node.op.operands)
        if node.op.exponent is not None:
            operand_info += f"; k={node.op.exponent:g}"
        print(f"Node {i:4d}: {node.op.kind.value:12s} ({value:10.6f}, grad {grad:10.6f}) <- [{operand_info}]")

    if len(nodes) > max_nodes:
        print(f"... ({len(nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")


def analyze_graph_complexity(graph) -> str:
    """
    Analyse graph complexity and return a text report.

    Returns:
        multi-line report string
    """
    stats = get_graph_stats(graph)

    if stats['nodes'] == 0:
        return "Empty computation graph"

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total operations: {stats['nodes']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"

    report.append(f"  Complexity level: {complexity}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
