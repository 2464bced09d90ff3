"""Depth-first, post-order walker for schema graphs.

The walker visits every node reachable from a root once per distinct path,
runs a caller-supplied mutator on each node after all of its children have
been completed, and stops descending wherever an edge leads back to an open
ancestor.

Aliasing and cycles are told apart by the IdentityTracker: a shared node
reached through an unrelated branch is walked (and mutated) again, while a
node that is still open on the current path is reported as a cycle event
and skipped.
"""

import copy
import logging
from typing import List, Optional, Union

from ..config import WalkerConfig
from .adapter import SchemaAdapter
from .collector import TraversalRecord
from .errors import WalkError, WalkerConfigError
from .mutator import Mutator, NodeCallback, as_callback
from .node import Schema
from .tracker import CycleDetected, CycleEvent, IdentityTracker

logger = logging.getLogger(__name__)


class NilRootError(WalkError, ValueError):
    """Raised when the walker is handed None instead of a node."""
    pass


class Walker:
    """Depth-first walker with path-scoped cycle detection.

    A Walker holds the state of one logical traversal:

    - ``iter``: node-entry attempts so far, back-edges included
    - ``depth``: depth of the node being processed, -1 outside a walk
    - the identity tracker (open ancestors on the current path)
    - the cycle log, see ``cycles()``

    Construct a fresh Walker for each independent traversal, or call
    ``reset()`` first. Walkers must not be shared between concurrent walks.

    Example:
        >>> walker = Walker()
        >>> walker.depth_first(root, lambda node: node.with_description("seen"))
        >>> walker.iter, len(walker.cycles())
    """

    def __init__(self, config: Optional[WalkerConfig] = None):
        """Initialize walker state.

        Args:
            config: Walk options (defaults to WalkerConfig())

        Raises:
            WalkerConfigError: If the configuration is invalid
        """
        self.config = config or WalkerConfig()

        config_errors = self.config.validate()
        if config_errors:
            raise WalkerConfigError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.iter = 0
        self.depth = -1
        self._tracker = IdentityTracker()
        self._cycles: List[CycleEvent] = []
        self._records: List[TraversalRecord] = []

    @property
    def tracker(self) -> IdentityTracker:
        return self._tracker

    def cycles(self) -> List[CycleEvent]:
        """Return the back-edges met so far, in the order they were met."""
        return list(self._cycles)

    def records(self) -> List[TraversalRecord]:
        """Return before/after records in pre-order.

        Empty unless the walker was configured with ``record_snapshots``.
        """
        return list(self._records)

    def reset(self) -> None:
        """Restore fresh state so the instance can walk another tree."""
        self.iter = 0
        self.depth = -1
        self._tracker.clear()
        self._cycles.clear()
        self._records.clear()

    def depth_first(self, root: Schema, mutator: Union[Mutator, NodeCallback]) -> None:
        """Walk ``root`` depth-first and mutate every node post-order.

        Branches are visited in this order: anyOf, allOf, oneOf, properties,
        patternProperties, additionalProperties (if enabled),
        additionalItems (if enabled), items (the single schema if set,
        otherwise each schema of the list). The mutator then runs on the
        node itself.

        Args:
            root: Node to start from
            mutator: Callable taking one Schema, or a Mutator

        Raises:
            NilRootError: If ``root`` is None
            Exception: The first exception raised by the mutator, unchanged.
                Mutations applied before it are kept.
        """
        callback = as_callback(mutator)
        self._walk(root, callback)

    def _walk(self, node: Optional[Schema], callback: NodeCallback) -> None:
        self.iter += 1

        if node is None:
            raise NilRootError(f"depth_first reached a None node (iter {self.iter})")

        self._report_progress()

        entering = self.depth + 1
        try:
            self._tracker.enter(node, entering, self.iter)
        except CycleDetected as cycle:
            self._record_cycle(cycle, node)
            return

        self.depth = entering
        try:
            record = self._open_record(node)

            if self.config.trace:
                logger.debug("enter iter=%d depth=%d %r", self.iter, self.depth, node)

            for edge in SchemaAdapter.get_edges(node):
                self._walk(edge.node, callback)
                if edge.branch.is_keyed:
                    # Store the completed child back under its key
                    edge.replace(edge.node)

            try:
                callback(node)
            except Exception:
                logger.debug(
                    "mutator failed on %r at iter=%d depth=%d; aborting walk",
                    node, self.iter, self.depth,
                )
                raise

            if record is not None:
                record.after = node
            if self.config.trace:
                logger.debug("mutated depth=%d %r", self.depth, node)
        finally:
            self.depth -= 1

    def _record_cycle(self, cycle: CycleDetected, node: Schema) -> None:
        event = cycle.event
        self._cycles.append(event)
        logger.log(
            self.config.cycle_log_level,
            "cycle detected at iter=%d depth=%d: %r already open at depth %d",
            event.iter, event.depth, node, cycle.first_depth,
        )
        if self.config.on_cycle is not None:
            self.config.on_cycle(event, node)

    def _open_record(self, node: Schema) -> Optional[TraversalRecord]:
        if not self.config.record_snapshots:
            return None
        record = TraversalRecord(
            iter=self.iter,
            depth=self.depth,
            before=copy.deepcopy(node),
        )
        self._records.append(record)
        return record

    def _report_progress(self) -> None:
        callback = self.config.progress_callback
        if callback is not None and self.iter % self.config.progress_interval == 0:
            callback(self.iter)
