# File location: bnn-layout/src/bnn_layout/models/__init__.py

"""
Flat-parameter dense networks.

The layout codec turns a flat parameter vector into per-layer weights
and biases, the forward evaluator runs them, and the Bayesian helpers
wrap both into log densities and posterior predictions.
"""

from .layout import *
from .forward import *
from .bayes import *

__all__ = [
    # layout.py
    "DecodedLayer",
    "decode",
    "encode",
    "init_flat_params",
    "layer_slices",

    # forward.py
    "dense_layer",
    "forward",
    "forward_batch",
    "network_forward",
    "get_layer_outputs",

    # bayes.py
    "BNNConfig",
    "DEFAULT_PRIOR_PRECISION",
    "log_prior",
    "bernoulli_log_likelihood",
    "make_log_posterior",
    "posterior_predictive",
    "predict_labels",
    "log_predictive_density",
]
