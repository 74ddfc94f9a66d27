"""Errors raised by the generator pipeline."""


class TauswortheError(Exception):
    """Base class for all pipeline errors."""


class InvalidParameterError(TauswortheError, ValueError):
    """Generator parameters or transform inputs are out of bounds."""


class NumericDomainError(TauswortheError, ArithmeticError):
    """A uniform value lies outside the domain of the logarithm."""

    def __init__(self, message, indices=()):
        super().__init__(message)
        self.indices = list(indices)


class IndexExhaustionError(TauswortheError, IndexError):
    """More data requested than the defined sequence range supports."""

    def __init__(self, message, requested=None, available=None):
        super().__init__(message)
        self.requested = requested
        self.available = available
