"""Walks over parsed documents.

Counts mutator calls across every branch kind, on documents grafted
together from pieces of other documents, and checks the collector-driven
patterns built on top of the walker.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from schemawalk import (
    DistinctCollector,
    UniqueCollector,
    Walker,
    count_nodes,
    loads,
    only_unique,
)


CHAINED_DOC = """
{
  "title": "1-top",
  "type": "object",
  "properties": {
    "foo": {
      "title": "2",
      "items": [
        {
          "title": "3",
          "type": "array",
          "items": {"title": "4-maxdepth"}
        }
      ]
    }
  }
}
"""

MEDIA_RES_DOC = """
{
  "title": "1",
  "type": "object",
  "properties": {
    "foo": {
      "title": "2",
      "anyOf": [
        {
          "title": "3",
          "type": "array",
          "items": {
            "title": "4",
            "properties": {
              "baz": {"title": "5"}
            }
          }
        }
      ]
    }
  }
}
"""

TWO_BRANCH_DOC = """
{
  "title": "1",
  "type": "object",
  "properties": {
    "foo": {
      "title": "2",
      "anyOf": [
        {
          "title": "3",
          "type": "array",
          "items": {
            "title": "4",
            "properties": {
              "baz": {"title": "5"}
            }
          }
        }
      ]
    },
    "bar": {
      "title": "6",
      "type": "object",
      "allOf": [
        {
          "title": "7",
          "type": "object",
          "properties": {
            "baz": {"title": "8"}
          }
        }
      ]
    }
  }
}
"""

REPEATED_LEAVES_DOC = """
{
  "title": "1",
  "type": "object",
  "properties": {
    "foo": {
      "title": "2",
      "anyOf": [
        {
          "title": "3",
          "type": "array",
          "items": {
            "title": "4",
            "properties": {
              "baz": {"title": "5"}
            }
          }
        }
      ]
    },
    "bar": {
      "title": "6",
      "type": "object",
      "allOf": [
        {
          "title": "7",
          "type": "object",
          "properties": {
            "baz": {"title": "5"},
            "baz2": {"title": "5"}
          }
        }
      ]
    }
  }
}
"""

TWO_ALIKE_ANY_OF = """
{
  "anyOf": [
    {"type": "object", "properties": {"foo": {}}},
    {"type": "object", "properties": {"foo": {}}}
  ]
}
"""


def _count_and_unique(root):
    """Return (mutator calls, number of contents seen exactly once)."""
    collector = UniqueCollector()
    calls = []

    def mutator(node):
        calls.append(node)
        collector.collect(node)

    Walker().depth_first(root, mutator)
    return len(calls), len(collector.unique)


class TestBranchKinds:
    """One parent with two children in each branch kind."""

    @pytest.mark.parametrize("keyword", ["anyOf", "allOf", "oneOf"])
    def test_ordered_branches(self, keyword):
        """Two empty children in an ordered branch: three calls, one unique."""
        root = loads('{"%s": [{}, {}]}' % keyword)
        assert _count_and_unique(root) == (3, 1)

    def test_items_list(self):
        """List-form items behave like an ordered branch."""
        root = loads('{"items": [{}, {}]}')
        assert _count_and_unique(root) == (3, 1)

    def test_items_single(self):
        """Single-form items is one child; unknown keys inside it are content."""
        root = loads('{"items": {"a": {}, "b": {}}}')
        assert _count_and_unique(root) == (2, 2)

    def test_properties(self):
        """Two equivalent properties are still two paths."""
        root = loads('{"properties": {"a": {}, "b": {}}}')
        assert _count_and_unique(root) == (3, 1)

    def test_pattern_properties(self):
        """patternProperties are walked like properties."""
        root = loads('{"patternProperties": {"^a": {}, "^b": {"title": "b"}}}')
        assert _count_and_unique(root) == (3, 3)

    def test_additional_branches(self):
        """Enabled additionalProperties and additionalItems are children."""
        root = loads('{"additionalProperties": {}, "additionalItems": {"title": "i"}}')
        assert count_nodes(root) == 3

    def test_additional_branches_as_booleans(self):
        """Boolean additionalProperties/additionalItems have no child."""
        root = loads('{"additionalProperties": false, "additionalItems": true}')
        assert count_nodes(root) == 1

    def test_definitions_not_walked(self):
        """definitions are reference targets, not traversal branches."""
        root = loads('{"definitions": {"a": {}, "b": {}}, "properties": {"c": {}}}')
        assert count_nodes(root) == 2


class TestGraftedDocuments:
    """Documents assembled by moving subtrees between parsed documents."""

    def test_chained(self):
        """A whole document grafted in place of its own deepest leaf."""
        root = loads(CHAINED_DOC)
        assert count_nodes(root) == 4

        root.properties["foo"].items.schemas[0].items.schema = loads(CHAINED_DOC)

        assert count_nodes(root) == 7

    def test_chained_in_media_res(self):
        """A subtree from the middle of another copy grafted onto a leaf."""
        root = loads(MEDIA_RES_DOC)
        root.properties["foo"].any_of[0].items.schema.properties["baz"] = (
            loads(MEDIA_RES_DOC).properties["foo"]
        )

        assert count_nodes(root) == 8

    def test_chained_in_media_res_different_branch(self):
        """Grafts onto two different branch kinds of the same document."""
        root = loads(TWO_BRANCH_DOC)
        root.properties["foo"].any_of[0].items.schema.properties["baz"] = loads(TWO_BRANCH_DOC)
        root.properties["bar"].all_of[0].properties["baz"] = (
            loads(TWO_BRANCH_DOC).properties["foo"].any_of[0]
        )

        assert count_nodes(root) == 17

    def test_grafted_nodes_mutated_in_place(self):
        """Nodes grafted in are the ones the walker mutates."""
        root = loads(MEDIA_RES_DOC)
        graft = loads(MEDIA_RES_DOC).properties["foo"]
        root.properties["foo"].any_of[0].items.schema.properties["baz"] = graft

        Walker().depth_first(root, lambda node: node.with_description("seen"))

        assert root.properties["foo"].any_of[0].items.schema.properties["baz"] is graft
        assert graft.description == "seen"
        assert graft.any_of[0].items.schema.properties["baz"].description == "seen"


class TestCollectorPatterns:
    """Collectors driven by the walker."""

    def test_distinct(self):
        """Nine nodes, seven distinct contents."""
        root = loads(REPEATED_LEAVES_DOC)
        collector = DistinctCollector()
        calls = []

        def mutator(node):
            calls.append(node)
            collector.collect(node)

        Walker().depth_first(root, mutator)

        assert len(calls) == 9
        assert len(collector) == 7

    def test_unique_two_pass_mutation(self):
        """Only nodes with once-only content are mutated on the second pass."""
        root = loads(TWO_ALIKE_ANY_OF)
        collector = UniqueCollector()
        Walker().depth_first(root, collector)

        Walker().depth_first(
            root,
            only_unique(collector, lambda node: node.with_description("baz")),
        )

        assert root.description == "baz"
        for alternative in root.any_of:
            assert alternative.description != "baz"
            assert alternative.properties["foo"].description != "baz"

    def test_mutation_reaches_every_node(self):
        """A plain mutator changes the root and the property."""
        root = loads('{"title": "object", "properties": {"foo": {"title": "bar"}}}')

        Walker().depth_first(root, lambda node: node.with_description("baz"))

        assert root.description == "baz"
        assert root.properties["foo"].description == "baz"
