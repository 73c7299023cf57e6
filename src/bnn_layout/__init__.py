# File location: bnn-layout/src/bnn_layout/__init__.py

"""
bnn-layout: flat parameter layouts for Bayesian neural networks in JAX

Maps the flat parameter vectors produced by samplers and optimizers onto
dense feed-forward networks, and evaluates those networks.
"""

__version__ = "0.1.0"

from . import core
from . import models
from . import datasets

from .core.errors import BNNLayoutError, LayoutError, DimensionMismatch
from .core.shapes import LayerShape, num_params
from .models.layout import DecodedLayer, decode, encode
from .models.forward import forward

__all__ = [
    "__version__",
    "core",
    "models",
    "datasets",
    "BNNLayoutError",
    "LayoutError",
    "DimensionMismatch",
    "LayerShape",
    "num_params",
    "DecodedLayer",
    "decode",
    "encode",
    "forward",
]
