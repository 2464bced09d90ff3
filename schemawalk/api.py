"""High-level API for schemawalk.

This module provides simple, functional interfaces for common walks. These
functions wrap the Walker for ease of use in simple cases; use the Walker
directly when you need its state during the walk.
"""

from typing import Any, Dict, List, Optional, Union

from .config import WalkerConfig
from .core.collector import PostOrderCollector
from .core.mutator import Mutator, NodeCallback
from .core.node import Schema
from .core.tracker import CycleEvent
from .core.walker import Walker


def walk_depth_first(
    root: Schema,
    mutator: Union[Mutator, NodeCallback],
    config: Optional[WalkerConfig] = None,
) -> Walker:
    """Walk a schema graph post-order with a fresh Walker.

    Args:
        root: Node to start from
        mutator: Callable taking one Schema, or a Mutator
        config: Walk options

    Returns:
        The Walker used, for inspecting ``iter`` and ``cycles()``

    Raises:
        NilRootError: If ``root`` is None
        Exception: Whatever the mutator raised first

    Example:
        >>> walker = walk_depth_first(root, lambda n: n.with_description("x"))
        >>> print(walker.iter)
    """
    walker = Walker(config)
    walker.depth_first(root, mutator)
    return walker


def count_nodes(root: Schema) -> int:
    """Count mutator invocations over a graph.

    Aliased nodes count once per path; back-edges do not count.

    Example:
        >>> count_nodes(loads('{"properties": {"a": {}, "b": {}}}'))
        3
    """
    count = 0

    def _count(_node: Schema) -> None:
        nonlocal count
        count += 1

    walk_depth_first(root, _count)
    return count


def collect_post_order(root: Schema) -> List[Schema]:
    """Return nodes in the order the walker completes them."""
    collector = PostOrderCollector()
    walk_depth_first(root, collector)
    return collector.nodes


def find_cycles(root: Schema) -> List[CycleEvent]:
    """Return every back-edge met while walking ``root``."""
    walker = walk_depth_first(root, lambda _node: None)
    return walker.cycles()


def get_walk_stats(root: Schema) -> Dict[str, Any]:
    """Get statistics about a walk over ``root``.

    Returns:
        Dictionary with walk statistics

    Example:
        >>> stats = get_walk_stats(root)
        >>> print(f"Mutations: {stats['mutations']}")
        >>> print(f"Cycles: {stats['cycles']}")
    """
    stats: Dict[str, Any] = {
        'total_entries': 0,
        'mutations': 0,
        'cycles': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {},
    }

    walker = Walker()
    collector = PostOrderCollector(walker)
    walker.depth_first(root, collector)

    for node, depth in collector.pairs():
        stats['mutations'] += 1
        if node.is_leaf():
            stats['leaf_nodes'] += 1
        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['total_entries'] = walker.iter
    stats['cycles'] = len(walker.cycles())
    return stats
