"""Structural equivalence between schema graphs.

Two graphs are equivalent when their content matches: same scalar values,
same children in the same ordered positions, same keys in keyed branches,
and the same form in conditional and items slots. Reference identity plays
no part, except that a pair of nodes already under comparison is assumed
equivalent, which is what lets cyclic graphs be compared at all.
"""

import copy
from typing import Set, Tuple

from .config import Branch, BRANCH_ORDER
from .core.node import Schema
from .expand import expand_refs


_SCALAR_FIELDS = (
    'title', 'description', 'type', 'format', 'ref',
    'default', 'enum', 'required', 'extra',
)


def schemas_are_equivalent(a: Schema, b: Schema, expand: bool = False) -> bool:
    """Compare two schema graphs by content.

    Args:
        a: First graph
        b: Second graph
        expand: Expand local references on deep copies of both graphs
            before comparing. The inputs are left untouched.

    Returns:
        True if the graphs have the same content
    """
    if expand:
        a = expand_refs(copy.deepcopy(a))
        b = expand_refs(copy.deepcopy(b))
    return _equivalent(a, b, set())


def _equivalent(a: Schema, b: Schema, assumed: Set[Tuple[int, int]]) -> bool:
    if a is b:
        return True
    if a is None or b is None:
        return False

    pair = (id(a), id(b))
    if pair in assumed:
        return True
    assumed.add(pair)

    for name in _SCALAR_FIELDS:
        if getattr(a, name) != getattr(b, name):
            return False

    if not _same_definitions(a, b, assumed):
        return False

    for branch in BRANCH_ORDER:
        if not _same_branch(a, b, branch, assumed):
            return False
    return True


def _same_definitions(a: Schema, b: Schema, assumed) -> bool:
    if a.definitions.keys() != b.definitions.keys():
        return False
    return all(
        _equivalent(a.definitions[k], b.definitions[k], assumed)
        for k in a.definitions
    )


def _same_branch(a: Schema, b: Schema, branch: Branch, assumed) -> bool:
    if branch is Branch.ANY_OF:
        return _same_list(a.any_of, b.any_of, assumed)
    if branch is Branch.ALL_OF:
        return _same_list(a.all_of, b.all_of, assumed)
    if branch is Branch.ONE_OF:
        return _same_list(a.one_of, b.one_of, assumed)

    if branch.is_keyed:
        ma = a.properties if branch is Branch.PROPERTIES else a.pattern_properties
        mb = b.properties if branch is Branch.PROPERTIES else b.pattern_properties
        if ma.keys() != mb.keys():
            return False
        return all(_equivalent(ma[k], mb[k], assumed) for k in ma)

    if branch.is_conditional:
        sa = a.additional_properties if branch is Branch.ADDITIONAL_PROPERTIES else a.additional_items
        sb = b.additional_properties if branch is Branch.ADDITIONAL_PROPERTIES else b.additional_items
        if sa is None or sb is None:
            return sa is None and sb is None
        if sa.allows != sb.allows:
            return False
        if sa.schema is None or sb.schema is None:
            return sa.schema is None and sb.schema is None
        return _equivalent(sa.schema, sb.schema, assumed)

    # items
    ia, ib = a.items, b.items
    if ia is None or ib is None:
        return ia is None and ib is None
    if (ia.schema is None) != (ib.schema is None):
        return False
    if ia.schema is not None:
        return _equivalent(ia.schema, ib.schema, assumed)
    return _same_list(ia.schemas, ib.schemas, assumed)


def _same_list(la, lb, assumed) -> bool:
    if len(la) != len(lb):
        return False
    return all(_equivalent(x, y, assumed) for x, y in zip(la, lb))
