"""Exception types raised by genolik."""

__all__ = [
    "GenolikError",
    "InvalidArgumentError",
    "MalformedFieldError",
    "OutOfRangeError",
]


class GenolikError(Exception):
    """Base class for all genolik errors."""


class InvalidArgumentError(GenolikError, ValueError):
    """A structural precondition was violated (e.g. ploidy < 1)."""


class MalformedFieldError(GenolikError, ValueError):
    """A GL or PL field does not follow the field grammar."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class OutOfRangeError(GenolikError, IndexError):
    """A likelihood index lies outside the genotype space being decoded."""
