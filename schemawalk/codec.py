"""JSON codec for schema graphs.

Converts between JSON text (or already-parsed mappings) and Schema trees.
The walker never depends on this module; callers use it to build trees
before a walk and to inspect them afterwards.

Encoding follows the graph as it is: an aliased node is written out once
per occurrence. A graph with a true cycle has no JSON form and raises
CodecError.
"""

import json
from typing import Any, Dict, Mapping, Optional, Set

from .core.errors import WalkError
from .core.node import Schema, SchemaOrArray, SchemaOrBool


class CodecError(WalkError, ValueError):
    """Raised when text or data cannot be converted to or from a Schema."""
    pass


# Scalar keywords: JSON key -> attribute name
_SCALAR_KEYS = {
    'title': 'title',
    'description': 'description',
    'format': 'format',
    '$ref': 'ref',
    'default': 'default',
    'enum': 'enum',
    'required': 'required',
}

_ORDERED_KEYS = {
    'anyOf': 'any_of',
    'allOf': 'all_of',
    'oneOf': 'one_of',
}

_KEYED_KEYS = {
    'properties': 'properties',
    'patternProperties': 'pattern_properties',
    'definitions': 'definitions',
}

_CONDITIONAL_KEYS = {
    'additionalProperties': 'additional_properties',
    'additionalItems': 'additional_items',
}

_KNOWN_KEYS = (
    set(_SCALAR_KEYS) | set(_ORDERED_KEYS) | set(_KEYED_KEYS)
    | set(_CONDITIONAL_KEYS) | {'type', 'items'}
)


def loads(text: str) -> Schema:
    """Parse JSON text into a Schema tree.

    Args:
        text: JSON document whose top level is an object

    Returns:
        Root Schema

    Raises:
        CodecError: If the text is not valid JSON or not a schema object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"invalid JSON: {e}") from e
    return from_dict(data)


def dumps(schema: Schema, indent: Optional[int] = None, sort_keys: bool = True) -> str:
    """Encode a Schema graph as JSON text.

    Args:
        schema: Root node
        indent: Passed to json.dumps; None gives compact output
        sort_keys: Sort object keys for deterministic output

    Raises:
        CodecError: If the graph contains a cycle
    """
    separators = (',', ':') if indent is None else None
    return json.dumps(to_dict(schema), indent=indent, sort_keys=sort_keys,
                      separators=separators)


def canonical_key(schema: Schema) -> str:
    """Deterministic content key for a node and everything below it."""
    return dumps(schema, indent=None, sort_keys=True)


def from_dict(data: Any, path: str = "#") -> Schema:
    """Build a Schema tree from parsed JSON data.

    Args:
        data: Mapping in JSON-Schema shape
        path: JSON-pointer location of ``data``, used in error messages

    Raises:
        CodecError: If ``data`` or a nested schema position is not a mapping
    """
    if not isinstance(data, Mapping):
        raise CodecError(f"{path}: expected a schema object, got {type(data).__name__}")

    node = Schema()

    for key, attr in _SCALAR_KEYS.items():
        if key in data:
            setattr(node, attr, data[key])

    if 'type' in data:
        node.type = _read_type(data['type'], path)

    for key, attr in _ORDERED_KEYS.items():
        if key in data:
            seq = data[key]
            if not isinstance(seq, list):
                raise CodecError(f"{path}/{key}: expected an array")
            setattr(node, attr, [
                from_dict(item, f"{path}/{key}/{i}") for i, item in enumerate(seq)
            ])

    for key, attr in _KEYED_KEYS.items():
        if key in data:
            mapping = data[key]
            if not isinstance(mapping, Mapping):
                raise CodecError(f"{path}/{key}: expected an object")
            setattr(node, attr, {
                name: from_dict(sub, f"{path}/{key}/{_escape(name)}")
                for name, sub in mapping.items()
            })

    for key, attr in _CONDITIONAL_KEYS.items():
        if key in data:
            setattr(node, attr, _read_schema_or_bool(data[key], f"{path}/{key}"))

    if 'items' in data:
        node.items = _read_items(data['items'], f"{path}/items")

    node.extra = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
    return node


def to_dict(schema: Schema) -> Dict[str, Any]:
    """Convert a Schema graph to plain JSON-compatible data.

    Unset scalars and empty collections are omitted.

    Raises:
        CodecError: If the graph contains a cycle
    """
    return _to_dict(schema, set(), "#")


def _to_dict(node: Schema, open_ids: Set[int], path: str) -> Dict[str, Any]:
    if id(node) in open_ids:
        raise CodecError(f"{path}: circular reference, graph has no JSON form")
    open_ids.add(id(node))
    try:
        out: Dict[str, Any] = dict(node.extra)

        for key, attr in _SCALAR_KEYS.items():
            value = getattr(node, attr)
            if value is None:
                continue
            if attr != 'default' and (value == "" or value == []):
                continue
            out[key] = value

        if node.type:
            out['type'] = node.type[0] if len(node.type) == 1 else list(node.type)

        for key, attr in _ORDERED_KEYS.items():
            seq = getattr(node, attr)
            if seq:
                out[key] = [
                    _to_dict(child, open_ids, f"{path}/{key}/{i}")
                    for i, child in enumerate(seq)
                ]

        for key, attr in _KEYED_KEYS.items():
            mapping = getattr(node, attr)
            if mapping:
                out[key] = {
                    name: _to_dict(child, open_ids, f"{path}/{key}/{_escape(name)}")
                    for name, child in mapping.items()
                }

        for key, attr in _CONDITIONAL_KEYS.items():
            slot = getattr(node, attr)
            if slot is None:
                continue
            if slot.schema is not None and slot.allows:
                out[key] = _to_dict(slot.schema, open_ids, f"{path}/{key}")
            else:
                out[key] = slot.allows

        items = node.items
        if items is not None:
            if items.schema is not None:
                out['items'] = _to_dict(items.schema, open_ids, f"{path}/items")
            else:
                out['items'] = [
                    _to_dict(child, open_ids, f"{path}/items/{i}")
                    for i, child in enumerate(items.schemas)
                ]

        return out
    finally:
        open_ids.discard(id(node))


def _read_type(value: Any, path: str) -> list:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise CodecError(f"{path}/type: expected a string or array of strings")


def _read_schema_or_bool(value: Any, path: str) -> SchemaOrBool:
    if isinstance(value, bool):
        return SchemaOrBool(allows=value)
    return SchemaOrBool(allows=True, schema=from_dict(value, path))


def _read_items(value: Any, path: str) -> SchemaOrArray:
    if isinstance(value, list):
        return SchemaOrArray(schemas=[
            from_dict(item, f"{path}/{i}") for i, item in enumerate(value)
        ])
    return SchemaOrArray(schema=from_dict(value, path))


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")
