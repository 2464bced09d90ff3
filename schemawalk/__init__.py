"""schemawalk - depth-first walking of JSON-Schema-shaped graphs.

schemawalk visits every node of a schema graph once per distinct path,
runs a caller-supplied mutator on each node post-order, and tells shared
(aliased) nodes apart from true cycles by reference identity.

Typical use:
━━━━━━━━━━━━
    from schemawalk import Walker, loads

    root = loads('{"properties": {"foo": {"title": "x"}}}')
    walker = Walker()
    walker.depth_first(root, lambda node: node.with_description("seen"))
━━━━━━━━━━━━
"""

__version__ = "0.3.0"

# Core must be imported before the collaborator modules
from .core import (
    WalkError,
    WalkerConfigError,
    Schema,
    SchemaOrBool,
    SchemaOrArray,
    SchemaAdapter,
    ChildEdge,
    IdentityTracker,
    CycleDetected,
    CycleEvent,
    Mutator,
    FunctionMutator,
    as_callback,
    chain,
    TraversalRecord,
    NodeCollector,
    PostOrderCollector,
    DistinctCollector,
    UniqueCollector,
    only_unique,
    Walker,
    NilRootError,
)
from .config import WalkerConfig, Branch, BRANCH_ORDER
from .codec import CodecError, loads, dumps, from_dict, to_dict, canonical_key
from .expand import RefResolutionError, expand_refs, resolve_pointer
from .equivalence import schemas_are_equivalent
from .api import (
    walk_depth_first,
    count_nodes,
    collect_post_order,
    find_cycles,
    get_walk_stats,
)

__all__ = [
    "__version__",
    # Core
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
    # Config
    "WalkerConfig",
    "Branch",
    "BRANCH_ORDER",
    # Collaborators
    "CodecError",
    "loads",
    "dumps",
    "from_dict",
    "to_dict",
    "canonical_key",
    "RefResolutionError",
    "expand_refs",
    "resolve_pointer",
    "schemas_are_equivalent",
    # API
    "walk_depth_first",
    "count_nodes",
    "collect_post_order",
    "find_cycles",
    "get_walk_stats",
]
