# File location: bnn-layout/src/bnn_layout/core/activations.py

"""
Activation functions available to decoded layers.

The set is closed: a tag either resolves to one of the functions in
``ACTIVATIONS`` or is rejected with DimensionMismatch.
"""

import jax
import jax.numpy as jnp
from typing import Callable, Dict

from .errors import DimensionMismatch


ACTIVATIONS: Dict[str, Callable[[jnp.ndarray], jnp.ndarray]] = {
    'tanh': jnp.tanh,
    'sigmoid': jax.nn.sigmoid,
}

# Alternative spellings accepted in network shapes
ACTIVATION_ALIASES: Dict[str, str] = {
    'σ': 'sigmoid',
    'logistic': 'sigmoid',
}


def canonical_activation(name: str) -> str:
    """Normalize an activation tag to its canonical name.

    Args:
        name: Activation tag as written in a network shape

    Returns:
        Canonical tag, a key of ``ACTIVATIONS``

    Raises:
        DimensionMismatch: If the tag is not recognized
    """
    if not isinstance(name, str):
        raise DimensionMismatch(f"Activation tag must be a string, got {type(name).__name__}")

    tag = ACTIVATION_ALIASES.get(name, name)
    if tag not in ACTIVATIONS:
        raise DimensionMismatch(
            f"Unknown activation function: {name!r} "
            f"(expected one of {sorted(ACTIVATIONS)})"
        )
    return tag


def get_activation(name: str) -> Callable[[jnp.ndarray], jnp.ndarray]:
    """Resolve an activation tag to its element-wise function."""
    return ACTIVATIONS[canonical_activation(name)]


def activation_fn(x: jnp.ndarray, name: str) -> jnp.ndarray:
    """Apply activation function.

    Args:
        x: Input array
        name: Activation tag ('tanh' or 'sigmoid')

    Returns:
        Activated output
    """
    return get_activation(name)(x)
