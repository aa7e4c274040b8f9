"""Error kinds raised by the CFI subsystem.

Every error is raised to the immediate caller. Nothing in this package
substitutes a default location for a malformed or mismatched one.
"""

from __future__ import annotations


class CFIError(ValueError):
    """Base class for all canonical fragment identifier errors."""


class MalformedIdentifier(CFIError):
    """Input does not follow the ``epubcfi(...)`` grammar."""


class InvalidStepIndex(MalformedIdentifier):
    """A step token is not a non-negative integer."""


class IncomparableBase(CFIError):
    """Operation needs two identifiers on the same base, but the bases differ."""


class EmptyRangeCollapse(CFIError):
    """Collapsing a range produced a point with no steps and no terminal."""


__all__ = [
    "CFIError",
    "MalformedIdentifier",
    "InvalidStepIndex",
    "IncomparableBase",
    "EmptyRangeCollapse",
]
