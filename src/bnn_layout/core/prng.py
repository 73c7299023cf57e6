# File location: bnn-layout/src/bnn_layout/core/prng.py

"""
PRNG helpers for drawing flat parameter vectors.

Weights are laid out as (output_dim, input_dim), so fan-in is the last
axis and fan-out the one before it.
"""

import jax
import jax.numpy as jnp
import jax.random as jr
from typing import Optional, Tuple

from .shapes import ShapeLike, as_network_shape, num_params


def glorot_uniform_init(key: jax.Array,
                        shape: Tuple[int, ...],
                        dtype: jnp.dtype = jnp.float32,
                        in_axis: int = -1,
                        out_axis: int = -2) -> jax.Array:
    """Glorot (Xavier) uniform initialization.

    Args:
        key: PRNG key
        shape: Parameter shape
        dtype: Parameter dtype
        in_axis: Input dimension axis
        out_axis: Output dimension axis

    Returns:
        Initialized parameter array
    """
    fan_in = shape[in_axis]
    fan_out = shape[out_axis]
    variance = 2.0 / (fan_in + fan_out)
    bound = jnp.sqrt(3.0 * variance)
    return jr.uniform(key, shape, dtype, minval=-bound, maxval=bound)


def split_per_layer(key: jax.Array, shape: ShapeLike) -> jax.Array:
    """One independent key per layer of a network shape."""
    return jr.split(key, len(as_network_shape(shape)))


def sample_prior(key: jax.Array,
                 shape: ShapeLike,
                 prior_scale: float = 1.0,
                 num_samples: Optional[int] = None,
                 dtype: jnp.dtype = jnp.float32) -> jax.Array:
    """Draw flat parameter vectors from an isotropic Gaussian prior.

    Args:
        key: PRNG key
        shape: Network shape the vectors are laid out for
        prior_scale: Standard deviation of every parameter
        num_samples: If given, draw a (num_samples, L) stack instead
            of a single vector of length L
        dtype: Parameter dtype

    Returns:
        Flat parameter vector(s)
    """
    n = num_params(shape)
    draw_shape = (n,) if num_samples is None else (num_samples, n)
    return jr.normal(key, draw_shape, dtype) * prior_scale
