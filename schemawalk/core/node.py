"""Schema node model for schemawalk.

A Schema is intentionally kept simple - it's primarily a data container.
Navigation logic (which fields hold children, and in which order) is
delegated to the SchemaAdapter, and traversal to the Walker.

Identity matters here. Two Schema instances with identical field values are
two different nodes; one instance reachable through two parent edges is a
single, aliased node. For that reason Schema compares and hashes by
reference, and content comparison lives in ``schemawalk.equivalence``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(eq=False)
class SchemaOrBool:
    """A conditional single-branch slot (additionalProperties, additionalItems).

    The JSON form is either a boolean or a schema object. Only the enabled
    form - ``allows`` true with a schema attached - carries a child.
    """

    allows: bool = True
    schema: Optional["Schema"] = None

    @property
    def enabled(self) -> bool:
        """True when this slot holds a traversable schema."""
        return self.allows and self.schema is not None


@dataclass(eq=False)
class SchemaOrArray:
    """The exclusive-variant ``items`` slot.

    Holds either a single schema (applies to every array element) or an
    ordered list of schemas (tuple validation). When ``schema`` is set it is
    authoritative and ``schemas`` is ignored.
    """

    schema: Optional["Schema"] = None
    schemas: List["Schema"] = field(default_factory=list)

    def __len__(self) -> int:
        if self.schema is not None:
            return 1
        return len(self.schemas)


@dataclass(eq=False)
class Schema:
    """A node in a JSON-Schema-shaped document graph.

    Scalar fields are opaque to the walker and freely mutable by mutators.
    The branch fields hold child nodes:

    - ordered branches: ``any_of``, ``all_of``, ``one_of``
    - keyed branches: ``properties``, ``pattern_properties``
    - conditional branches: ``additional_properties``, ``additional_items``
    - exclusive-variant branch: ``items``

    ``definitions`` holds named sub-schemas used as ``$ref`` targets. It is
    not a traversal branch.
    """

    # Descriptive fields
    title: str = ""
    description: str = ""
    type: List[str] = field(default_factory=list)
    format: str = ""
    ref: Optional[str] = None
    default: Any = None
    enum: Optional[List[Any]] = None
    required: List[str] = field(default_factory=list)
    definitions: Dict[str, "Schema"] = field(default_factory=dict)

    # Ordered branches
    any_of: List["Schema"] = field(default_factory=list)
    all_of: List["Schema"] = field(default_factory=list)
    one_of: List["Schema"] = field(default_factory=list)

    # Keyed branches
    properties: Dict[str, "Schema"] = field(default_factory=dict)
    pattern_properties: Dict[str, "Schema"] = field(default_factory=dict)

    # Conditional branches
    additional_properties: Optional[SchemaOrBool] = None
    additional_items: Optional[SchemaOrBool] = None

    # Exclusive-variant branch
    items: Optional[SchemaOrArray] = None

    # Unrecognised keywords, preserved verbatim by the codec
    extra: Dict[str, Any] = field(default_factory=dict)

    def identifier(self) -> int:
        """Return the opaque reference-identity handle of this node.

        The handle is stable for as long as the instance is alive and is
        what the identity tracker keys on. It is NOT derived from content.
        """
        return id(self)

    def is_leaf(self) -> bool:
        """Check if this node has no traversable children."""
        if self.any_of or self.all_of or self.one_of:
            return False
        if self.properties or self.pattern_properties:
            return False
        for slot in (self.additional_properties, self.additional_items):
            if slot is not None and slot.enabled:
                return False
        if self.items is not None and len(self.items) > 0:
            return False
        return True

    def metadata(self) -> Dict[str, Any]:
        """Return the descriptive scalar fields as a dictionary."""
        return {
            'title': self.title,
            'description': self.description,
            'type': list(self.type),
            'format': self.format,
            'ref': self.ref,
        }

    # Fluent helpers, handy when building trees by hand

    def with_title(self, title: str) -> "Schema":
        self.title = title
        return self

    def with_description(self, description: str) -> "Schema":
        self.description = description
        return self

    def __repr__(self) -> str:
        """Short representation; never recurses into children."""
        label = self.title or self.ref or ",".join(self.type) or "-"
        return f"{self.__class__.__name__}({label!r} @0x{id(self):x})"
