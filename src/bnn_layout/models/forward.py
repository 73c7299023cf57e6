# File location: bnn-layout/src/bnn_layout/models/forward.py

"""
Forward evaluation of decoded dense networks.

Each layer computes ``activation(W @ x + b)`` with W laid out as
(output_dim, input_dim), matching the layout codec.
"""

import jax
import jax.numpy as jnp
from typing import List, Sequence

from ..core.activations import get_activation
from ..core.errors import DimensionMismatch
from ..core.shapes import ShapeLike, as_network_shape
from .layout import DecodedLayer, decode


def _check_layers(layers: Sequence[DecodedLayer], activations: Sequence[str]) -> None:
    if len(layers) != len(activations):
        raise DimensionMismatch(
            f"Got {len(layers)} layers but {len(activations)} activations"
        )
    if not layers:
        raise DimensionMismatch("Cannot evaluate a network with no layers")


def dense_layer(x: jnp.ndarray,
                weights: jnp.ndarray,
                bias: jnp.ndarray,
                activation: str) -> jnp.ndarray:
    """Single dense layer computation.

    Args:
        x: Input vector of length input_dim
        weights: Weight matrix (output_dim, input_dim)
        bias: Bias vector (output_dim,)
        activation: Activation tag

    Returns:
        Layer output of length output_dim
    """
    act = get_activation(activation)
    if weights.ndim != 2 or weights.shape[1] != x.shape[-1]:
        raise DimensionMismatch(
            f"Layer expects {weights.shape[-1]} inputs, got vector of length {x.shape[-1]}"
        )
    if bias.shape != (weights.shape[0],):
        raise DimensionMismatch(
            f"Bias of shape {bias.shape} does not match {weights.shape[0]} outputs"
        )
    return act(weights @ x + bias)


def forward(x: jnp.ndarray,
            layers: Sequence[DecodedLayer],
            activations: Sequence[str]) -> jnp.ndarray:
    """Forward pass of a single input vector through decoded layers.

    Args:
        x: Input vector with length equal to the first layer's input_dim
        layers: Decoded (weights, bias) pairs
        activations: One activation tag per layer

    Returns:
        Output vector with length equal to the last layer's output_dim

    Raises:
        DimensionMismatch: On a size disagreement between the propagated
            vector and a layer, on mismatched layer/activation counts, or
            on an unknown activation tag
    """
    _check_layers(layers, activations)
    x = jnp.asarray(x)
    if x.ndim != 1:
        raise DimensionMismatch(f"Input must be a vector, got shape {x.shape}")

    h = x
    for (W, b), activation in zip(layers, activations):
        h = dense_layer(h, W, b, activation)
    return h


def forward_batch(xs: jnp.ndarray,
                  layers: Sequence[DecodedLayer],
                  activations: Sequence[str]) -> jnp.ndarray:
    """Forward pass over a batch of inputs.

    Args:
        xs: Inputs with shape (batch_size, input_dim)
        layers: Decoded (weights, bias) pairs
        activations: One activation tag per layer

    Returns:
        Outputs with shape (batch_size, output_dim)
    """
    xs = jnp.asarray(xs)
    if xs.ndim != 2:
        raise DimensionMismatch(f"Batch must have shape (batch, features), got {xs.shape}")
    # Activation tags are strings, so they are closed over rather than mapped
    return jax.vmap(lambda x: forward(x, layers, activations))(xs)


def network_forward(flat: jnp.ndarray, shape: ShapeLike, x: jnp.ndarray) -> jnp.ndarray:
    """Decode ``flat`` for ``shape`` and evaluate it on ``x``.

    ``x`` may be a single vector or a (batch_size, input_dim) batch.
    """
    layers_shape = as_network_shape(shape)
    layers = decode(flat, layers_shape)
    activations = [layer.activation for layer in layers_shape]

    x = jnp.asarray(x)
    if x.ndim == 2:
        return forward_batch(x, layers, activations)
    return forward(x, layers, activations)


def get_layer_outputs(x: jnp.ndarray,
                      layers: Sequence[DecodedLayer],
                      activations: Sequence[str]) -> List[jnp.ndarray]:
    """Get outputs from all layers (for visualization/analysis).

    Args:
        x: Input vector
        layers: Decoded (weights, bias) pairs
        activations: One activation tag per layer

    Returns:
        List starting with the input followed by each layer's output
    """
    _check_layers(layers, activations)
    h = jnp.asarray(x)
    outputs = [h]
    for (W, b), activation in zip(layers, activations):
        h = dense_layer(h, W, b, activation)
        outputs.append(h)
    return outputs
