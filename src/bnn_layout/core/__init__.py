# File location: bnn-layout/src/bnn_layout/core/__init__.py

"""
Core building blocks shared by the codec and the evaluator.

- Error types
- Activation table
- Network shape declarations
- PRNG helpers and stable numerics
"""

from .errors import *
from .activations import *
from .shapes import *
from .prng import *
from .numerics import *

__all__ = [
    # errors.py
    "BNNLayoutError",
    "LayoutError",
    "DimensionMismatch",

    # activations.py
    "ACTIVATIONS",
    "ACTIVATION_ALIASES",
    "canonical_activation",
    "get_activation",
    "activation_fn",

    # shapes.py
    "LayerShape",
    "NetworkShape",
    "as_network_shape",
    "validate_network_shape",
    "check_adjacency",
    "num_params",
    "layer_activations",
    "parse_network_shape",
    "format_network_shape",

    # prng.py
    "glorot_uniform_init",
    "split_per_layer",
    "sample_prior",

    # numerics.py
    "safe_log",
    "logsumexp_stable",
    "log_mean_exp",
]
