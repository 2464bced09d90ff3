"""Identity tracking for cycle detection.

The IdentityTracker answers one question for the walker: is the node about
to be entered an open ancestor on the current path? It keys on reference
identity and scopes every entry to the depth where it was recorded, so a
node that was visited and fully exited through an earlier sibling branch is
not mistaken for a cycle.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import WalkError


@dataclass(frozen=True)
class CycleEvent:
    """A back-edge observed during a walk.

    Attributes:
        iter: Walker entry count at the moment the back-edge was met
        depth: Depth the back-edge target would have occupied
    """

    iter: int
    depth: int


class CycleDetected(WalkError):
    """Raised by the tracker when an entering node is an open ancestor.

    The walker always recovers from this locally. It is never the outcome of
    a traversal.
    """

    def __init__(self, event: CycleEvent, first_depth: int):
        self.event = event
        self.first_depth = first_depth
        super().__init__(
            f"back-edge at iter {event.iter}: node open at depth {first_depth} "
            f"re-entered at depth {event.depth}"
        )


class IdentityTracker:
    """Path-scoped map from node identity to the depth it was entered at.

    The map only ever describes the chain of nodes that are currently open
    above (or at) the depth being entered; see ``enter``.
    """

    def __init__(self):
        self._open: Dict[int, int] = {}

    def enter(self, node: Any, depth: int, iteration: int = 0) -> None:
        """Record ``node`` as entered at ``depth``, or report a back-edge.

        Steps:
        1. Drop every entry recorded at ``depth`` or deeper. Those belong to
           sibling subtrees that have already been exited.
        2. If the node is still present, it is open at a shallower depth:
           raise CycleDetected.
        3. Otherwise record it at ``depth``.

        Args:
            node: Node about to be entered
            depth: Depth the node is about to occupy
            iteration: Walker entry count, stored on the cycle event

        Raises:
            CycleDetected: If ``node`` is an open ancestor
        """
        self._purge(depth)

        handle = id(node)
        first_depth = self._open.get(handle)
        if first_depth is not None:
            # After the purge every survivor sits strictly above ``depth``
            raise CycleDetected(CycleEvent(iter=iteration, depth=depth), first_depth)

        self._open[handle] = depth

    def is_open(self, node: Any) -> bool:
        """Check if ``node`` is currently recorded on the path."""
        return id(node) in self._open

    def open_depth(self, node: Any) -> Optional[int]:
        """Depth at which ``node`` was recorded, or None."""
        return self._open.get(id(node))

    def clear(self) -> None:
        self._open.clear()

    def _purge(self, depth: int) -> None:
        stale = [handle for handle, d in self._open.items() if d >= depth]
        for handle in stale:
            del self._open[handle]

    def __len__(self) -> int:
        return len(self._open)
