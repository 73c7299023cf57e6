# File location: bnn-layout/src/bnn_layout/core/errors.py

"""
Exception types for structural layout and dimension failures.

Both derive from ValueError so code that already guards array
utilities with ``except ValueError`` keeps working.
"""


class BNNLayoutError(ValueError):
    """Base class for all structural errors raised by bnn_layout."""


class LayoutError(BNNLayoutError):
    """Flat parameter vector or network shape cannot describe a layout.

    Raised when the flat vector is shorter than the shape requires, or
    when the shape itself is empty or has non-positive dimensions.
    """


class DimensionMismatch(BNNLayoutError):
    """Propagated vector and decoded layer disagree in size.

    Also raised for unknown activation tags and for layer/activation
    sequences of different lengths.
    """
