"""Local ``$ref`` expansion for schema graphs.

Expansion replaces nodes that carry a ``$ref`` with the node the reference
points at, so that a later walk sees real structure instead of indirection
markers. Only local references (JSON pointers into the same document, such
as ``#/definitions/address``) are supported.

Two modes:

- copy (default): every occurrence gets its own deep copy of the target.
  The result has no aliasing introduced by expansion. A reference found
  inside its own expansion is left in place as a ``$ref`` node.
- share: every occurrence is the target instance itself. Repeated
  references become aliasing, and recursive references become true cycles,
  which the walker reports as cycle events.
"""

import copy
import logging
from typing import List, Set, Tuple
from urllib.parse import unquote

from .config import Branch
from .core.adapter import SchemaAdapter
from .core.errors import WalkError
from .core.node import Schema

logger = logging.getLogger(__name__)


class RefResolutionError(WalkError):
    """Raised when a ``$ref`` cannot be resolved within the document."""
    pass


def resolve_pointer(root: Schema, ref: str) -> Schema:
    """Resolve a local JSON pointer against ``root``.

    Args:
        root: Document root the pointer is relative to
        ref: Reference such as ``#``, ``#/definitions/foo`` or
            ``#/properties/a/items/0``

    Returns:
        The node the pointer designates

    Raises:
        RefResolutionError: If the reference is not local or points nowhere
    """
    if not ref.startswith("#"):
        raise RefResolutionError(f"only local references are supported: {ref!r}")

    fragment = ref[1:]
    if fragment == "":
        return root
    if not fragment.startswith("/"):
        raise RefResolutionError(f"malformed JSON pointer: {ref!r}")

    tokens = [_unescape(t) for t in fragment[1:].split("/")]
    current = root
    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        pos += 1

        if token == "definitions":
            if pos >= len(tokens):
                raise RefResolutionError(f"{ref!r}: missing definition name")
            child = current.definitions.get(tokens[pos])
            pos += 1
        else:
            try:
                branch = Branch(token)
            except ValueError:
                raise RefResolutionError(f"{ref!r}: unsupported pointer segment {token!r}") from None

            key = None
            takes_key = (
                branch.is_ordered or branch.is_keyed
                or (branch is Branch.ITEMS and current.items is not None
                    and current.items.schema is None)
            )
            if takes_key:
                if pos >= len(tokens):
                    raise RefResolutionError(f"{ref!r}: missing key after {token!r}")
                key = tokens[pos]
                pos += 1
                if not branch.is_keyed:
                    try:
                        key = int(key)
                    except ValueError:
                        raise RefResolutionError(f"{ref!r}: expected an index, got {key!r}") from None
            child = SchemaAdapter.get_child(current, branch, key)

        if child is None:
            raise RefResolutionError(f"unresolvable reference: {ref!r}")
        current = child

    return current


def expand_refs(root: Schema, share: bool = False) -> Schema:
    """Inline every local ``$ref`` reachable from ``root``, in place.

    Definitions are used as targets but are not themselves expanded unless
    they are reached through a reference.

    Args:
        root: Document root; pointers are resolved against it
        share: Alias targets instead of copying them

    Returns:
        The expanded root. This is a different node from ``root`` when the
        root itself was a reference.

    Raises:
        RefResolutionError: If any reachable reference cannot be resolved
    """
    return _RefExpander(root, share).expand()


class _RefExpander:
    """One expansion pass over a document."""

    def __init__(self, document: Schema, share: bool):
        self.document = document
        self.share = share
        self._open: Set[int] = set()
        self._done: Set[int] = set()
        self.expanded: List[str] = []

    def expand(self) -> Schema:
        root, stack, descend = self._follow(self.document, ())
        if descend:
            self._expand_node(root, stack)
        logger.debug("expanded %d reference(s) (share=%s)", len(self.expanded), self.share)
        return root

    def _expand_node(self, node: Schema, stack: Tuple[str, ...]) -> None:
        handle = id(node)
        if handle in self._open:
            return
        if self.share and handle in self._done:
            return

        self._open.add(handle)
        try:
            for edge in SchemaAdapter.get_edges(node):
                child, child_stack, descend = self._follow(edge.node, stack)
                if child is not edge.node:
                    edge.replace(child)
                if descend:
                    self._expand_node(child, child_stack)
        finally:
            self._open.discard(handle)
            self._done.add(handle)

    def _follow(self, node: Schema, stack: Tuple[str, ...]):
        """Chase a chain of references starting at ``node``.

        Returns:
            (replacement node, reference stack, whether to descend into it)
        """
        while node.ref is not None:
            ref = node.ref
            if ref in stack:
                # Reference to something already being expanded on this path
                if self.share:
                    return resolve_pointer(self.document, ref), stack, False
                return node, stack, False

            target = resolve_pointer(self.document, ref)
            node = target if self.share else copy.deepcopy(target)
            stack = stack + (ref,)
            self.expanded.append(ref)
        return node, stack, True


def _unescape(token: str) -> str:
    return unquote(token).replace("~1", "/").replace("~0", "~")
