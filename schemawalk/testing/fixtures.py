"""Test fixtures for schemawalk consumers.

Builders for small hand-made graphs and mutators that record what the
walker did, so test suites can assert on mutation order and counts without
re-implementing the same helpers.
"""

import itertools
import logging
from typing import Any, List, Optional, Tuple

from ..core.mutator import Mutator
from ..core.node import Schema, SchemaOrBool

logger = logging.getLogger(__name__)

_map_keys = itertools.count(1)


def new_schema(title: str = "") -> Schema:
    """Create an object-typed schema with no children."""
    return Schema(title=title, type=["object"])


def with_slice_child(parent: Schema) -> Schema:
    """Append a new schema to an ordered branch of ``parent`` and return it.

    anyOf is used; the choice of ordered branch is arbitrary.
    """
    child = new_schema()
    parent.any_of.append(child)
    return child


def with_map_child(parent: Schema, key: Optional[str] = None) -> Schema:
    """Add a new schema to a keyed branch of ``parent`` and return it.

    The property key defaults to a fresh unique string and is also stored as
    the child's title, so tests can look the child up again by title.
    """
    if key is None:
        key = f"prop{next(_map_keys)}"
    child = new_schema(title=key)
    parent.properties[key] = child
    return child


def link_additional_properties(parent: Schema, child: Schema) -> Schema:
    """Make ``child`` the enabled additionalProperties schema of ``parent``."""
    parent.additional_properties = SchemaOrBool(allows=True, schema=child)
    return child


class DescriptionMarker(Mutator):
    """Appends a marker to each node's description.

    Gives tests a visible trace of which nodes were mutated and how many
    times. If a walker is given, each call is logged with its depth.
    """

    def __init__(self, marker: str = ".", walker: Any = None):
        self.marker = marker
        self.walker = walker
        self.calls = 0

    def on_schema(self, node: Schema) -> None:
        node.description = node.description + self.marker
        self.calls += 1
        if self.walker is not None:
            depth = self.walker.depth
            logger.debug("%d %s%r", depth, "\t" * max(depth, 0), node)


class RecordingMutator(Mutator):
    """Records every call: the node, its title and description at call time.

    If a walker is given, the walker's depth is recorded too.
    """

    def __init__(self, walker: Any = None):
        self.walker = walker
        self.calls: List[Tuple[Schema, str, str, Optional[int]]] = []

    def on_schema(self, node: Schema) -> None:
        depth = self.walker.depth if self.walker is not None else None
        self.calls.append((node, node.title, node.description, depth))

    @property
    def nodes(self) -> List[Schema]:
        return [call[0] for call in self.calls]

    def titles(self) -> List[str]:
        return [call[1] for call in self.calls]

    def __len__(self) -> int:
        return len(self.calls)


class FailingMutator(Mutator):
    """Delegates to another mutator, but raises on the Nth call (1-based)."""

    def __init__(self, fail_on: int, error: Exception, delegate: Optional[Mutator] = None):
        self.fail_on = fail_on
        self.error = error
        self.delegate = delegate or DescriptionMarker()
        self.calls = 0

    def on_schema(self, node: Schema) -> None:
        self.calls += 1
        if self.calls == self.fail_on:
            raise self.error
        self.delegate.on_schema(node)
