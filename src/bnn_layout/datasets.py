# File location: bnn-layout/src/bnn_layout/datasets.py

"""Small synthetic datasets for Bayesian network examples."""

import jax
import jax.numpy as jnp
import jax.random as jr
from typing import Tuple


def make_xor_clusters(key: jax.Array,
                      n_samples: int = 80,
                      spread: float = 4.5,
                      offset: float = 0.5,
                      shift: float = 5.0) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """Generate the four-cluster XOR toy classification set.

    Points are drawn uniformly in a ``spread``-sized square and placed in
    one of four quadrants. The (+,+) and (-,-) quadrants are class 1, the
    two off-diagonal quadrants class 0, so no linear boundary separates
    the classes.

    Args:
        key: PRNG key
        n_samples: Total number of points, rounded down to a multiple of 4
        spread: Side length of each cluster
        offset: Shift applied on the positive side of an axis
        shift: Shift applied on the negative side of an axis

    Returns:
        (X, y) with X of shape (n, 2) and y of shape (n,) in {0, 1}
    """
    m = n_samples // 4
    if n_samples < 4:
        raise ValueError(f"n_samples must be at least 4, got {n_samples}")

    x1_key, x2_key = jr.split(key)
    x1 = jr.uniform(x1_key, (m,)) * spread
    x2 = jr.uniform(x2_key, (m,)) * spread

    pos1, neg1 = x1 + offset, x1 - shift
    pos2, neg2 = x2 + offset, x2 - shift

    ones = jnp.concatenate([
        jnp.stack([pos1, pos2], axis=1),
        jnp.stack([neg1, neg2], axis=1),
    ])
    zeros = jnp.concatenate([
        jnp.stack([pos1, neg2], axis=1),
        jnp.stack([neg1, pos2], axis=1),
    ])

    X = jnp.concatenate([ones, zeros])
    y = jnp.concatenate([jnp.ones(2 * m), jnp.zeros(2 * m)])
    return X, y
