# File location: bnn-layout/src/bnn_layout/models/bayes.py

"""
Log densities and posterior predictions for Bayesian neural networks.

The network parameters are a single flat vector with an isotropic
Gaussian prior. Targets are binary and the network's final layer is
read as the probability of class 1. Sampling itself happens elsewhere:
``make_log_posterior`` returns the unnormalized log density an external
MCMC or variational routine needs, and ``posterior_predictive`` turns
the resulting draws into predictions.
"""

import logging
import math

import jax
import jax.numpy as jnp
from typing import Callable, NamedTuple, Tuple

from ..core.errors import DimensionMismatch, LayoutError
from ..core.numerics import log_mean_exp, safe_log
from ..core.shapes import LayerShape, ShapeLike, as_network_shape, num_params
from .forward import network_forward

logger = logging.getLogger(__name__)

# Prior precision used for the toy classification problem
DEFAULT_PRIOR_PRECISION = 0.09


class BNNConfig(NamedTuple):
    """Caller-owned configuration of a Bayesian network."""
    shape: Tuple[LayerShape, ...]
    prior_scale: float = math.sqrt(1.0 / DEFAULT_PRIOR_PRECISION)

    @classmethod
    def create(cls, shape: ShapeLike, prior_scale: float = None) -> 'BNNConfig':
        """Validate ``shape`` and build a config."""
        if prior_scale is None:
            prior_scale = math.sqrt(1.0 / DEFAULT_PRIOR_PRECISION)
        if prior_scale <= 0:
            raise ValueError(f"prior_scale must be positive, got {prior_scale}")
        return cls(shape=as_network_shape(shape), prior_scale=float(prior_scale))

    @property
    def num_params(self) -> int:
        return num_params(self.shape)


def log_prior(flat: jnp.ndarray, prior_scale: float) -> jnp.ndarray:
    """Log density of an isotropic zero-mean Gaussian prior.

    Args:
        flat: Flat parameter vector
        prior_scale: Standard deviation of every parameter

    Returns:
        Scalar sum of log N(theta_i | 0, prior_scale^2)
    """
    z = flat / prior_scale
    n = flat.shape[-1]
    return (-0.5 * jnp.sum(z ** 2, axis=-1)
            - n * jnp.log(prior_scale)
            - 0.5 * n * jnp.log(2.0 * jnp.pi))


def bernoulli_log_likelihood(probs: jnp.ndarray, targets: jnp.ndarray) -> jnp.ndarray:
    """Bernoulli log likelihood of binary targets.

    Args:
        probs: Predicted probabilities of class 1
        targets: Binary targets, same shape as ``probs``

    Returns:
        Scalar sum of t log p + (1 - t) log(1 - p)
    """
    return jnp.sum(targets * safe_log(probs) + (1.0 - targets) * safe_log(1.0 - probs))


def _check_data(shape: Tuple[LayerShape, ...], xs: jnp.ndarray, ts: jnp.ndarray) -> None:
    if shape[-1].output_dim != 1:
        raise DimensionMismatch(
            f"Binary classification needs a single output, last layer has {shape[-1].output_dim}"
        )
    if xs.ndim != 2 or xs.shape[1] != shape[0].input_dim:
        raise DimensionMismatch(
            f"Inputs must have shape (N, {shape[0].input_dim}), got {xs.shape}"
        )
    if ts.shape != (xs.shape[0],):
        raise DimensionMismatch(f"Expected {xs.shape[0]} targets, got shape {ts.shape}")


def make_log_posterior(config: BNNConfig,
                       xs: jnp.ndarray,
                       ts: jnp.ndarray) -> Callable[[jnp.ndarray], jnp.ndarray]:
    """Build the unnormalized log posterior over flat parameters.

    Args:
        config: Network shape and prior scale
        xs: Training inputs with shape (N, input_dim)
        ts: Binary training targets with shape (N,)

    Returns:
        Function mapping a flat parameter vector to a scalar log density.
        It is pure and can be wrapped in ``jax.jit`` or ``jax.grad``.
    """
    shape = as_network_shape(config.shape)
    xs = jnp.asarray(xs)
    ts = jnp.asarray(ts, dtype=xs.dtype)
    _check_data(shape, xs, ts)

    logger.debug("Built log posterior for %d parameters over %d observations",
                 num_params(shape), xs.shape[0])

    def log_posterior(flat: jnp.ndarray) -> jnp.ndarray:
        probs = network_forward(flat, shape, xs)[:, 0]
        return log_prior(flat, config.prior_scale) + bernoulli_log_likelihood(probs, ts)

    return log_posterior


def _check_samples(samples: jnp.ndarray) -> jnp.ndarray:
    samples = jnp.asarray(samples)
    if samples.ndim != 2:
        raise LayoutError(f"Samples must have shape (num_samples, num_params), got {samples.shape}")
    if samples.shape[0] == 0:
        raise LayoutError("Need at least one sample")
    return samples


def posterior_predictive(xs: jnp.ndarray,
                         samples: jnp.ndarray,
                         shape: ShapeLike) -> jnp.ndarray:
    """Average network output over posterior draws.

    Args:
        xs: Inputs with shape (N, input_dim)
        samples: Flat parameter draws with shape (num_samples, L)
        shape: Network shape the draws are laid out for

    Returns:
        Mean outputs with shape (N, output_dim)
    """
    shape = as_network_shape(shape)
    samples = _check_samples(samples)
    xs = jnp.asarray(xs)
    if xs.ndim != 2 or xs.shape[1] != shape[0].input_dim:
        raise DimensionMismatch(
            f"Inputs must have shape (N, {shape[0].input_dim}), got {xs.shape}"
        )

    outputs = jax.vmap(lambda flat: network_forward(flat, shape, xs))(samples)
    return jnp.mean(outputs, axis=0)


def predict_labels(xs: jnp.ndarray,
                   samples: jnp.ndarray,
                   shape: ShapeLike,
                   threshold: float = 0.5) -> jnp.ndarray:
    """Binary labels from the posterior-predictive probability of class 1."""
    probs = posterior_predictive(xs, samples, shape)[:, 0]
    return (probs >= threshold).astype(jnp.int32)


def log_predictive_density(xs: jnp.ndarray,
                           ts: jnp.ndarray,
                           samples: jnp.ndarray,
                           shape: ShapeLike) -> jnp.ndarray:
    """Log pointwise predictive density of binary targets.

    Computes sum_i log( mean_s p(t_i | x_i, theta_s) ).

    Args:
        xs: Inputs with shape (N, input_dim)
        ts: Binary targets with shape (N,)
        samples: Flat parameter draws with shape (num_samples, L)
        shape: Network shape the draws are laid out for

    Returns:
        Scalar log predictive density
    """
    shape = as_network_shape(shape)
    samples = _check_samples(samples)
    xs = jnp.asarray(xs)
    ts = jnp.asarray(ts, dtype=xs.dtype)
    _check_data(shape, xs, ts)

    def pointwise(flat):
        probs = network_forward(flat, shape, xs)[:, 0]
        return ts * safe_log(probs) + (1.0 - ts) * safe_log(1.0 - probs)

    log_liks = jax.vmap(pointwise)(samples)
    return jnp.sum(log_mean_exp(log_liks, axis=0))
