"""Configuration system for schemawalk.

This module defines how users tune a walk: what gets logged, which
observers are notified, and whether diagnostic snapshots are kept. It does
NOT make the traversal order configurable; that order is part of the
walker's contract and is spelled out by BRANCH_ORDER.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional


class Branch(Enum):
    """The child-bearing slots of a schema node.

    Declared in traversal order.
    """
    ANY_OF = "anyOf"                                # Ordered
    ALL_OF = "allOf"                                # Ordered
    ONE_OF = "oneOf"                                # Ordered
    PROPERTIES = "properties"                       # Keyed
    PATTERN_PROPERTIES = "patternProperties"        # Keyed
    ADDITIONAL_PROPERTIES = "additionalProperties"  # Conditional
    ADDITIONAL_ITEMS = "additionalItems"            # Conditional
    ITEMS = "items"                                 # Single schema or ordered list

    @property
    def is_ordered(self) -> bool:
        return self in (Branch.ANY_OF, Branch.ALL_OF, Branch.ONE_OF)

    @property
    def is_keyed(self) -> bool:
        return self in (Branch.PROPERTIES, Branch.PATTERN_PROPERTIES)

    @property
    def is_conditional(self) -> bool:
        return self in (Branch.ADDITIONAL_PROPERTIES, Branch.ADDITIONAL_ITEMS)


BRANCH_ORDER = tuple(Branch)


@dataclass
class WalkerConfig:
    """Complete configuration for a depth-first walk.

    The defaults give a silent walk with no observers, which is what the
    walker's core contract describes. Everything here is observability:
    none of these options change which nodes are visited or mutated.
    """

    # Logging
    trace: bool = False                        # DEBUG line per entry and mutation
    cycle_log_level: int = logging.DEBUG       # Level used for cycle events

    # Observers
    on_cycle: Optional[Callable[[Any, Any], None]] = None  # (CycleEvent, Schema)
    progress_callback: Optional[Callable[[int], None]] = None
    progress_interval: int = 100               # Report every N entries

    # Diagnostics
    record_snapshots: bool = False             # Keep before/after TraversalRecords

    @classmethod
    def quiet(cls) -> 'WalkerConfig':
        """Create config for a plain walk with no extra output."""
        return cls()

    @classmethod
    def diagnostic(cls, cycle_log_level: int = logging.WARNING) -> 'WalkerConfig':
        """Create config for debugging a walk.

        Args:
            cycle_log_level: Level at which back-edges are reported

        Returns:
            WalkerConfig with tracing and snapshot recording enabled
        """
        return cls(
            trace=True,
            cycle_log_level=cycle_log_level,
            record_snapshots=True,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.progress_interval <= 0:
            errors.append("progress_interval must be positive")

        if not isinstance(self.cycle_log_level, int) or self.cycle_log_level < 0:
            errors.append("cycle_log_level must be a non-negative logging level")

        if self.on_cycle is not None and not callable(self.on_cycle):
            errors.append("on_cycle must be callable")

        if self.progress_callback is not None and not callable(self.progress_callback):
            errors.append("progress_callback must be callable")

        return errors
