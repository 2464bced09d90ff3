"""Testing utilities for schemawalk consumers."""

from .fixtures import (
    new_schema,
    with_slice_child,
    with_map_child,
    link_additional_properties,
    DescriptionMarker,
    RecordingMutator,
    FailingMutator,
)

__all__ = [
    'new_schema',
    'with_slice_child',
    'with_map_child',
    'link_additional_properties',
    'DescriptionMarker',
    'RecordingMutator',
    'FailingMutator',
]
