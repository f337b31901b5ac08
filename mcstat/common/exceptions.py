"""Exceptions raised by mcstat."""


class McstatError(Exception):
    """Base class for all errors raised by mcstat."""


class DegenerateOperationError(McstatError, ArithmeticError):
    """
    A numeric operation has no meaningful result.

    Raised e.g. when a histogram is divided by a histogram lacking one of
    its bins, or when an autocorrelation function is normalized by C(0) = 0.
    """


class CheckpointError(McstatError, OSError):
    """Saving or loading a histogram or simulation state failed."""
