"""Data collection strategies for schemawalk.

Collectors are mutators that leave nodes alone and gather information
instead. Passing one to ``Walker.depth_first`` collects post-order, so a
collector always sees a node after its whole subtree.

Content-keyed collectors (DistinctCollector, UniqueCollector) key nodes by
their canonical JSON encoding, which means they only work on graphs without
true cycles. Acyclic aliasing is fine.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..codec import canonical_key
from .mutator import Mutator, NodeCallback, as_callback
from .node import Schema


@dataclass
class TraversalRecord:
    """Before/after pair for one entered node.

    Attributes:
        iter: Walker entry count when the node was entered
        depth: Depth the node occupied
        before: Deep copy taken on entry, before any child was walked
        after: The node itself, set once its mutator returned
    """

    iter: int
    depth: int
    before: Schema
    after: Optional[Schema] = None

    @property
    def completed(self) -> bool:
        return self.after is not None


class NodeCollector(Mutator):
    """Abstract base class for collectors.

    Subclasses implement ``collect``; ``on_schema`` simply forwards to it so
    a collector can be handed to the walker like any other mutator.
    """

    def on_schema(self, node: Schema) -> None:
        self.collect(node)

    @abstractmethod
    def collect(self, node: Schema) -> Any:
        """Collect data from a node.

        Args:
            node: The node being completed

        Returns:
            Collected data (type depends on collector)
        """
        pass


class PostOrderCollector(NodeCollector):
    """Collects node references in the order they were completed.

    If a walker is given, the depth of each node is recorded alongside it.
    """

    def __init__(self, walker: Any = None):
        self.walker = walker
        self.nodes: List[Schema] = []
        self.depths: List[Optional[int]] = []

    def collect(self, node: Schema) -> Schema:
        self.nodes.append(node)
        self.depths.append(self.walker.depth if self.walker is not None else None)
        return node

    def pairs(self) -> List[Tuple[Schema, Optional[int]]]:
        return list(zip(self.nodes, self.depths))

    def __len__(self) -> int:
        return len(self.nodes)


class DistinctCollector(NodeCollector):
    """Memoizes at most one node per distinct content.

    Nodes whose content repeats are represented once (by the first node
    seen), so ``len()`` is the number of distinct contents in the walk.
    """

    def __init__(self):
        self.registry: Dict[str, Schema] = {}

    def collect(self, node: Schema) -> str:
        key = canonical_key(node)
        self.registry.setdefault(key, node)
        return key

    def __contains__(self, node: Schema) -> bool:
        return canonical_key(node) in self.registry

    def __len__(self) -> int:
        return len(self.registry)


class UniqueCollector(NodeCollector):
    """Separates contents seen exactly once from contents seen repeatedly.

    After a walk, ``unique`` maps each once-only content to its node and
    ``duplicates`` maps each repeated content to the last node seen with it.
    """

    def __init__(self):
        self.unique: Dict[str, Schema] = {}
        self.duplicates: Dict[str, Schema] = {}

    def collect(self, node: Schema) -> str:
        key = canonical_key(node)
        if key in self.duplicates:
            self.duplicates[key] = node
        elif key in self.unique:
            del self.unique[key]
            self.duplicates[key] = node
        else:
            self.unique[key] = node
        return key

    def is_unique(self, node: Schema) -> bool:
        """Check if ``node``'s current content was seen exactly once."""
        return canonical_key(node) in self.unique


def only_unique(collector: UniqueCollector,
                mutator: Union[Mutator, NodeCallback]) -> NodeCallback:
    """Restrict a mutator to nodes whose content was unique.

    This is the second pass of a two-pass pattern: walk once with a
    UniqueCollector, then walk again with ``only_unique(collector, mutator)``.
    Content is checked at the moment each node is completed, so mutating a
    child can change whether its parent still matches.

    Args:
        collector: A UniqueCollector already filled by a previous walk
        mutator: The mutator to apply to unique nodes

    Returns:
        Node callback for the second walk
    """
    callback = as_callback(mutator)

    def _if_unique(node: Schema) -> None:
        if collector.is_unique(node):
            callback(node)

    return _if_unique
