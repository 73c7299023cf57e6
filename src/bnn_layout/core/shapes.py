# File location: bnn-layout/src/bnn_layout/core/shapes.py

"""
Network shape declarations, validation, and parameter counting.

A network shape is an ordered sequence of (output_dim, input_dim,
activation) triples. It is the only configuration the layout codec
and forward evaluator need.
"""

import collections.abc

import numpy as np
from typing import List, NamedTuple, Sequence, Tuple, Union

from .activations import canonical_activation
from .errors import DimensionMismatch, LayoutError


class LayerShape(NamedTuple):
    """Declared shape of one dense layer."""
    output_dim: int
    input_dim: int
    activation: str = 'tanh'

    @property
    def weight_count(self) -> int:
        return self.output_dim * self.input_dim

    @property
    def param_count(self) -> int:
        return self.output_dim * self.input_dim + self.output_dim


NetworkShape = Sequence[LayerShape]
ShapeLike = Sequence[Union[LayerShape, Tuple[int, int, str]]]


def _check_dim(value, what: str, index: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise LayoutError(f"Layer {index}: {what} must be an integer, got {value!r}")
    if value <= 0:
        raise LayoutError(f"Layer {index}: {what} must be positive, got {value}")
    return int(value)


def as_network_shape(shape: ShapeLike) -> Tuple[LayerShape, ...]:
    """Coerce a sequence of triples into a validated tuple of LayerShape.

    Plain tuples such as ``(3, 2, 'tanh')`` are accepted. Activation tags
    are normalized to their canonical names, so unknown tags fail here,
    before any parameters are decoded.

    Args:
        shape: Sequence of LayerShape or (output_dim, input_dim, activation)

    Returns:
        Tuple of LayerShape

    Raises:
        LayoutError: If the shape is empty or a dimension is not a
            positive integer
        DimensionMismatch: If an activation tag is unknown
    """
    if isinstance(shape, LayerShape):
        shape = (shape,)

    layers = []
    for i, entry in enumerate(shape):
        is_triple = (isinstance(entry, collections.abc.Sequence)
                     and not isinstance(entry, str)
                     and len(entry) == 3)
        if not is_triple:
            raise LayoutError(
                f"Layer {i}: expected (output_dim, input_dim, activation), got {entry!r}"
            )
        out_dim, in_dim, activation = entry
        layers.append(LayerShape(
            output_dim=_check_dim(out_dim, 'output_dim', i),
            input_dim=_check_dim(in_dim, 'input_dim', i),
            activation=canonical_activation(activation),
        ))

    if not layers:
        raise LayoutError("Network shape must contain at least one layer")

    return tuple(layers)


def validate_network_shape(shape: ShapeLike,
                           check_adjacent: bool = False) -> Tuple[LayerShape, ...]:
    """Validate a network shape, optionally checking layer adjacency.

    Args:
        shape: Network shape to validate
        check_adjacent: Also require output_dim of each layer to equal
            input_dim of the next

    Returns:
        Normalized tuple of LayerShape
    """
    layers = as_network_shape(shape)
    if check_adjacent:
        check_adjacency(layers)
    return layers


def check_adjacency(shape: ShapeLike) -> None:
    """Raise DimensionMismatch if consecutive layers do not chain."""
    layers = as_network_shape(shape)
    for i, (prev, nxt) in enumerate(zip(layers[:-1], layers[1:])):
        if prev.output_dim != nxt.input_dim:
            raise DimensionMismatch(
                f"Layer {i} outputs {prev.output_dim} values but layer {i + 1} "
                f"expects {nxt.input_dim} inputs"
            )


def num_params(shape: ShapeLike) -> int:
    """Total number of flat parameters a network shape consumes.

    Args:
        shape: Network shape

    Returns:
        Sum of output_dim * input_dim + output_dim over all layers
    """
    return sum(layer.param_count for layer in as_network_shape(shape))


def layer_activations(shape: ShapeLike) -> List[str]:
    """Activation tags of a network shape, in layer order."""
    return [layer.activation for layer in as_network_shape(shape)]


def parse_network_shape(text: str) -> Tuple[LayerShape, ...]:
    """Parse the compact text form of a network shape.

    Layers are separated by ``;`` and fields by ``,``, e.g.
    ``"3,2,tanh;2,3,tanh;1,2,sigmoid"``.

    Args:
        text: Network shape text

    Returns:
        Validated tuple of LayerShape
    """
    entries = []
    for i, chunk in enumerate(part.strip() for part in text.split(';')):
        if not chunk:
            continue
        fields = [field.strip() for field in chunk.split(',')]
        if len(fields) != 3:
            raise LayoutError(
                f"Layer {i}: expected 'output_dim,input_dim,activation', got {chunk!r}"
            )
        try:
            out_dim, in_dim = int(fields[0]), int(fields[1])
        except ValueError:
            raise LayoutError(f"Layer {i}: dimensions must be integers, got {chunk!r}")
        entries.append((out_dim, in_dim, fields[2]))

    return as_network_shape(entries)


def format_network_shape(shape: ShapeLike) -> str:
    """Inverse of parse_network_shape."""
    return ';'.join(
        f"{layer.output_dim},{layer.input_dim},{layer.activation}"
        for layer in as_network_shape(shape)
    )
