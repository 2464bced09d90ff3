"""SchemaAdapter for schemawalk.

The adapter provides the navigation logic for schema nodes, decoupling the
node representation from the traversal mechanism. The walker, the reference
expander and the equivalence checker all reach children through it, so the
branch order is defined in exactly one place.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from ..config import Branch, BRANCH_ORDER
from .node import Schema


Key = Union[str, int, None]


@dataclass
class ChildEdge:
    """One parent-to-child edge in a schema graph.

    Attributes:
        parent: The node holding the child
        branch: Which slot of the parent holds it
        key: Property name for keyed branches, list index for ordered
            branches and list-form items, None for single slots
        node: The child itself
    """

    parent: Schema
    branch: Branch
    key: Key
    node: Schema

    def replace(self, new: Schema) -> None:
        """Write ``new`` into the parent slot this edge points at."""
        SchemaAdapter.set_child(self.parent, self.branch, self.key, new)
        self.node = new

    def pointer_token(self) -> str:
        """JSON-pointer path fragment for this edge (without leading slash)."""
        if self.key is None:
            return self.branch.value
        key = str(self.key).replace("~", "~0").replace("/", "~1")
        return f"{self.branch.value}/{key}"


class SchemaAdapter:
    """Navigates the branches of schema nodes.

    All methods are static; the class exists to keep navigation in one
    documented place.
    """

    @staticmethod
    def get_edges(node: Schema) -> List[ChildEdge]:
        """Return every traversable child edge of ``node``, in branch order.

        The result is a snapshot: later changes to the node's containers do
        not affect it. Keyed branches keep the mapping's own iteration order,
        which carries no meaning.

        Args:
            node: The parent node

        Returns:
            List of ChildEdge in traversal order
        """
        edges: List[ChildEdge] = []
        for branch in BRANCH_ORDER:
            edges.extend(SchemaAdapter.iter_branch(node, branch))
        return edges

    @staticmethod
    def get_children(node: Schema) -> Iterator[Schema]:
        """Iterate over child nodes in traversal order."""
        for edge in SchemaAdapter.get_edges(node):
            yield edge.node

    @staticmethod
    def iter_branch(node: Schema, branch: Branch) -> Iterator[ChildEdge]:
        """Iterate over the edges held by a single branch of ``node``.

        Args:
            node: The parent node
            branch: Branch to read

        Yields:
            ChildEdge for each populated child in the branch
        """
        if branch.is_ordered:
            seq = list(SchemaAdapter._ordered(node, branch))
            for index, child in enumerate(seq):
                yield ChildEdge(node, branch, index, child)

        elif branch.is_keyed:
            mapping = SchemaAdapter._keyed(node, branch)
            for key, child in list(mapping.items()):
                yield ChildEdge(node, branch, key, child)

        elif branch.is_conditional:
            slot = SchemaAdapter._conditional(node, branch)
            if slot is not None and slot.enabled:
                yield ChildEdge(node, branch, None, slot.schema)

        elif branch is Branch.ITEMS:
            items = node.items
            if items is None:
                return
            # The single-schema form wins whenever it is populated
            if items.schema is not None:
                yield ChildEdge(node, branch, None, items.schema)
            else:
                for index, child in enumerate(list(items.schemas)):
                    yield ChildEdge(node, branch, index, child)

    @staticmethod
    def set_child(parent: Schema, branch: Branch, key: Key, new: Schema) -> None:
        """Store ``new`` in the given slot of ``parent``.

        Raises:
            KeyError: If the slot does not exist on the parent
        """
        if branch.is_ordered:
            SchemaAdapter._ordered(parent, branch)[key] = new
        elif branch.is_keyed:
            SchemaAdapter._keyed(parent, branch)[key] = new
        elif branch.is_conditional:
            slot = SchemaAdapter._conditional(parent, branch)
            if slot is None:
                raise KeyError(f"{branch.value} is not set on {parent!r}")
            slot.schema = new
        elif branch is Branch.ITEMS:
            if parent.items is None:
                raise KeyError(f"items is not set on {parent!r}")
            if key is None:
                parent.items.schema = new
            else:
                parent.items.schemas[key] = new

    @staticmethod
    def get_child(parent: Schema, branch: Branch, key: Key) -> Optional[Schema]:
        """Look up a single child slot, returning None if it is empty."""
        if branch.is_ordered:
            seq = SchemaAdapter._ordered(parent, branch)
            if isinstance(key, int) and 0 <= key < len(seq):
                return seq[key]
            return None
        if branch.is_keyed:
            return SchemaAdapter._keyed(parent, branch).get(key)
        if branch.is_conditional:
            slot = SchemaAdapter._conditional(parent, branch)
            return slot.schema if slot is not None else None
        if parent.items is None:
            return None
        if key is None:
            return parent.items.schema
        if isinstance(key, int) and 0 <= key < len(parent.items.schemas):
            return parent.items.schemas[key]
        return None

    # Field accessors

    @staticmethod
    def _ordered(node: Schema, branch: Branch) -> List[Schema]:
        if branch is Branch.ANY_OF:
            return node.any_of
        if branch is Branch.ALL_OF:
            return node.all_of
        return node.one_of

    @staticmethod
    def _keyed(node: Schema, branch: Branch):
        if branch is Branch.PROPERTIES:
            return node.properties
        return node.pattern_properties

    @staticmethod
    def _conditional(node: Schema, branch: Branch):
        if branch is Branch.ADDITIONAL_PROPERTIES:
            return node.additional_properties
        return node.additional_items
