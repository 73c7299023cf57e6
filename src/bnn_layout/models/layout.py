# File location: bnn-layout/src/bnn_layout/models/layout.py

"""
Flat parameter layout codec.

Samplers and optimizers work on a single flat vector of reals, while
the forward pass wants one (weight matrix, bias vector) pair per layer.
This module maps between the two for a given network shape.

Layout of the flat vector, layer by layer in shape order:

    [ W_0 (row-major, output_dim x input_dim) | b_0 | W_1 | b_1 | ... ]
"""

import logging
import warnings

import jax
import jax.numpy as jnp
from typing import List, NamedTuple, Sequence

from ..core.errors import LayoutError
from ..core.prng import glorot_uniform_init, split_per_layer
from ..core.shapes import ShapeLike, as_network_shape

logger = logging.getLogger(__name__)

_DTYPE_KINDS = {
    'b': 'boolean',
    'i': 'integer',
    'u': 'unsigned integer',
    'c': 'complex',
}


class DecodedLayer(NamedTuple):
    """Weight matrix and bias vector of one dense layer."""
    weights: jnp.ndarray
    bias: jnp.ndarray

    @property
    def output_dim(self) -> int:
        return self.weights.shape[0]

    @property
    def input_dim(self) -> int:
        return self.weights.shape[1]


def decode(flat: jnp.ndarray, shape: ShapeLike) -> List[DecodedLayer]:
    """Split a flat parameter vector into per-layer weights and biases.

    A single cursor walks the vector. For each layer it takes
    ``output_dim * input_dim`` values, reshaped row-major into the weight
    matrix, followed by ``output_dim`` values for the bias.

    Elements past the required total are ignored. Length checks use the
    static shape of ``flat``, so the function can be traced by ``jax.jit``
    and ``jax.vmap``.

    Args:
        flat: 1-D array of parameters
        shape: Network shape describing the layers

    Returns:
        List of DecodedLayer in shape order

    Raises:
        LayoutError: If ``flat`` is not 1-D or is too short for the shape
    """
    layers_shape = as_network_shape(shape)
    flat = jnp.asarray(flat)

    if flat.ndim != 1:
        raise LayoutError(f"Flat parameters must be 1-D, got shape {flat.shape}")

    if not jnp.issubdtype(flat.dtype, jnp.floating):
        kind = _DTYPE_KINDS.get(flat.dtype.kind, 'non-float')
        warnings.warn(f"Casting {kind} flat parameters of dtype {flat.dtype} to float32")
        flat = flat.astype(jnp.float32)

    required = sum(layer.param_count for layer in layers_shape)
    available = flat.shape[0]
    if available < required:
        raise LayoutError(
            f"Network shape requires {required} parameters, got {available}"
        )
    if available > required:
        logger.debug("Ignoring %d trailing parameters beyond the %d required",
                     available - required, required)

    layers = []
    cursor = 0
    for layer in layers_shape:
        n_weights = layer.weight_count
        W = flat[cursor:cursor + n_weights].reshape(layer.output_dim, layer.input_dim)
        cursor += n_weights

        b = flat[cursor:cursor + layer.output_dim]
        cursor += layer.output_dim

        layers.append(DecodedLayer(weights=W, bias=b))

    return layers


def encode(layers: Sequence[DecodedLayer]) -> jnp.ndarray:
    """Flatten per-layer weights and biases into a single vector.

    Inverse of ``decode`` for a flat vector of exactly the required length.

    Args:
        layers: Sequence of (weights, bias) pairs

    Returns:
        1-D array of parameters
    """
    if not layers:
        raise LayoutError("Cannot encode an empty list of layers")

    pieces = []
    for W, b in layers:
        pieces.append(jnp.ravel(W))
        pieces.append(jnp.ravel(b))
    return jnp.concatenate(pieces)


def init_flat_params(key: jax.Array,
                     shape: ShapeLike,
                     dtype: jnp.dtype = jnp.float32) -> jnp.ndarray:
    """Glorot-initialized weights and zero biases, as one flat vector.

    Useful as a starting point for a sampler or optimizer.

    Args:
        key: PRNG key
        shape: Network shape
        dtype: Parameter dtype

    Returns:
        1-D array of length ``num_params(shape)``
    """
    layers_shape = as_network_shape(shape)
    keys = split_per_layer(key, layers_shape)

    layers = []
    for key_i, layer in zip(keys, layers_shape):
        W = glorot_uniform_init(key_i, (layer.output_dim, layer.input_dim), dtype)
        b = jnp.zeros(layer.output_dim, dtype)
        layers.append(DecodedLayer(weights=W, bias=b))

    return encode(layers)


def layer_slices(shape: ShapeLike) -> List[dict]:
    """Index ranges of each layer's weights and bias in the flat vector.

    Args:
        shape: Network shape

    Returns:
        List of ``{'weights': slice, 'bias': slice}`` in layer order
    """
    slices = []
    cursor = 0
    for layer in as_network_shape(shape):
        w = slice(cursor, cursor + layer.weight_count)
        cursor += layer.weight_count
        b = slice(cursor, cursor + layer.output_dim)
        cursor += layer.output_dim
        slices.append({'weights': w, 'bias': b})
    return slices
