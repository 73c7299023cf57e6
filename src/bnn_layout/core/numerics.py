# File location: bnn-layout/src/bnn_layout/core/numerics.py

"""
Numerically stable operations used by the likelihood code.
"""

import jax.numpy as jnp
from typing import Optional, Tuple, Union


def safe_log(x: jnp.ndarray, eps: float = 1e-8) -> jnp.ndarray:
    """Numerically stable logarithm.

    Args:
        x: Input array
        eps: Small epsilon to prevent log(0)

    Returns:
        log(max(x, eps))
    """
    return jnp.log(jnp.maximum(x, eps))


def logsumexp_stable(x: jnp.ndarray,
                     axis: Optional[Union[int, Tuple[int, ...]]] = None,
                     keepdims: bool = False) -> jnp.ndarray:
    """Numerically stable log-sum-exp computation.

    Computes log(sum(exp(x), axis)) by factoring out the maximum value
    before exponentiation.

    Args:
        x: Input array
        axis: Axis or axes along which to sum
        keepdims: Whether to keep dimensions

    Returns:
        log-sum-exp result
    """
    x_max = jnp.max(x, axis=axis, keepdims=True)

    # Handle case where all values are -inf
    x_max = jnp.where(jnp.isfinite(x_max), x_max, 0.0)

    result = x_max + jnp.log(jnp.sum(jnp.exp(x - x_max), axis=axis, keepdims=True))

    if not keepdims:
        result = jnp.squeeze(result, axis=axis)
    return result


def log_mean_exp(x: jnp.ndarray, axis: int = 0) -> jnp.ndarray:
    """log(mean(exp(x))) along an axis."""
    return logsumexp_stable(x, axis=axis) - jnp.log(x.shape[axis])
