"""
Exceptions raised by the minefield engine.

Losing a game is not an error and has no exception here; it is reported
through the session state.
"""


class ConfigurationError(ValueError):
    """Field shape or mine count cannot produce a playable field."""


class PreconditionViolation(IndexError):
    """A caller passed an out-of-bounds coordinate or called out of order."""
