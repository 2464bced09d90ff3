"""Core abstractions for schemawalk.

This package contains the node model, the navigation adapter, the identity
tracker and the depth-first walker built on top of them.
"""

from .errors import WalkError, WalkerConfigError
from .node import Schema, SchemaOrBool, SchemaOrArray
from .adapter import SchemaAdapter, ChildEdge
from .tracker import IdentityTracker, CycleDetected, CycleEvent
from .mutator import Mutator, FunctionMutator, NodeCallback, as_callback, chain
from .collector import (
    TraversalRecord,
    NodeCollector,
    PostOrderCollector,
    DistinctCollector,
    UniqueCollector,
    only_unique,
)
from .walker import Walker, NilRootError

__all__ = [
    "WalkError",
    "WalkerConfigError",
    "Schema",
    "SchemaOrBool",
    "SchemaOrArray",
    "SchemaAdapter",
    "ChildEdge",
    "IdentityTracker",
    "CycleDetected",
    "CycleEvent",
    "Mutator",
    "FunctionMutator",
    "NodeCallback",
    "as_callback",
    "chain",
    "TraversalRecord",
    "NodeCollector",
    "PostOrderCollector",
    "DistinctCollector",
    "UniqueCollector",
    "only_unique",
    "Walker",
    "NilRootError",
]
