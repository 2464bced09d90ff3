"""Exception hierarchy for schemawalk.

Every exception raised by the library itself derives from WalkError so
callers can catch the whole family in one place. Exceptions raised by a
caller's mutator are never wrapped; they reach the caller unchanged.
"""


class WalkError(Exception):
    """Base class for all schemawalk errors."""
    pass


class WalkerConfigError(WalkError):
    """Raised when a WalkerConfig fails validation."""
    pass
