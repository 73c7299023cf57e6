# tests/test_layout.py

import jax
import jax.numpy as jnp
import pytest
from jax import random

from bnn_layout.core.errors import LayoutError
from bnn_layout.core.shapes import num_params
from bnn_layout.models.layout import (
    DecodedLayer, decode, encode, init_flat_params, layer_slices
)


THREE_LAYER = [(3, 2, 'tanh'), (2, 3, 'tanh'), (1, 2, 'sigmoid')]


class TestDecode:
    """Test decoding flat parameter vectors into layers."""

    def test_layer_count_and_dimensions(self):
        """Decoded layers match the declared shapes."""
        flat = jnp.arange(num_params(THREE_LAYER), dtype=jnp.float32)
        layers = decode(flat, THREE_LAYER)

        assert len(layers) == len(THREE_LAYER)
        for layer, (out_dim, in_dim, _) in zip(layers, THREE_LAYER):
            assert isinstance(layer, DecodedLayer)
            assert layer.weights.shape == (out_dim, in_dim)
            assert layer.bias.shape == (out_dim,)
            assert layer.output_dim == out_dim
            assert layer.input_dim == in_dim

    def test_row_major_order(self):
        """Weights fill row by row, followed by the bias."""
        flat = jnp.arange(9, dtype=jnp.float32)
        (layer,) = decode(flat, [(3, 2, 'tanh')])

        expected_W = jnp.array([[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]])
        assert jnp.array_equal(layer.weights, expected_W)
        assert jnp.array_equal(layer.bias, jnp.array([6.0, 7.0, 8.0]))

    def test_cursor_advances_across_layers(self):
        """Second layer starts right after the first layer's bias."""
        flat = jnp.arange(num_params(THREE_LAYER), dtype=jnp.float32)
        layers = decode(flat, THREE_LAYER)

        # First layer uses 3*2 + 3 = 9 values
        assert layers[1].weights[0, 0] == 9.0
        # Second layer uses 2*3 + 2 = 8 values
        assert layers[2].weights[0, 0] == 17.0
        assert layers[2].bias[0] == 19.0

    def test_deterministic(self):
        """Decoding twice yields identical arrays."""
        flat = random.normal(random.PRNGKey(0), (num_params(THREE_LAYER),))
        first = decode(flat, THREE_LAYER)
        second = decode(flat, THREE_LAYER)

        for a, b in zip(first, second):
            assert jnp.array_equal(a.weights, b.weights)
            assert jnp.array_equal(a.bias, b.bias)

    def test_insufficient_parameters(self):
        """A (3, 2) layer needs 9 values; 8 is too few."""
        with pytest.raises(LayoutError):
            decode(jnp.zeros(8), [(3, 2, 'tanh')])

    def test_exact_length_succeeds(self):
        layers = decode(jnp.zeros(9), [(3, 2, 'tanh')])
        assert len(layers) == 1

    def test_excess_parameters_ignored(self):
        """Trailing values beyond the required count are dropped."""
        flat = jnp.arange(10, dtype=jnp.float32)
        (layer,) = decode(flat, [(3, 2, 'tanh')])

        assert layer.bias[-1] == 8.0
        assert not jnp.any(layer.weights == 9.0)
        assert not jnp.any(layer.bias == 9.0)

    def test_rejects_matrix_input(self):
        with pytest.raises(LayoutError):
            decode(jnp.zeros((3, 3)), [(3, 2, 'tanh')])

    def test_integer_input_warns_and_casts(self):
        with pytest.warns(UserWarning):
            (layer,) = decode(jnp.arange(9), [(3, 2, 'tanh')])
        assert jnp.issubdtype(layer.weights.dtype, jnp.floating)

    def test_cast_warning_names_dtype_kind(self):
        with pytest.warns(UserWarning, match="boolean"):
            (layer,) = decode(jnp.ones(9, dtype=bool), [(3, 2, 'tanh')])
        assert jnp.array_equal(layer.bias, jnp.ones(3))

        with pytest.warns(UserWarning, match="integer"):
            decode(jnp.arange(9), [(3, 2, 'tanh')])

    def test_layout_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode(jnp.zeros(1), [(3, 2, 'tanh')])

    def test_jit_compatible(self):
        """decode can be traced with the shape closed over."""
        @jax.jit
        def first_bias(flat):
            return decode(flat, THREE_LAYER)[0].bias

        flat = jnp.arange(num_params(THREE_LAYER), dtype=jnp.float32)
        assert jnp.allclose(first_bias(flat), jnp.array([6.0, 7.0, 8.0]))


class TestEncode:
    """Test flattening layers back into a vector."""

    def test_inverse_of_decode(self):
        flat = random.normal(random.PRNGKey(1), (num_params(THREE_LAYER),))
        assert jnp.array_equal(encode(decode(flat, THREE_LAYER)), flat)

    def test_plain_tuples(self):
        layers = [(jnp.ones((2, 3)), jnp.zeros(2))]
        flat = encode(layers)
        assert flat.shape == (8,)
        assert jnp.array_equal(flat[:6], jnp.ones(6))

    def test_empty_layers(self):
        with pytest.raises(LayoutError):
            encode([])


class TestInitialization:
    """Test Glorot-initialized flat vectors."""

    def test_length_and_zero_biases(self):
        flat = init_flat_params(random.PRNGKey(0), THREE_LAYER)
        assert flat.shape == (num_params(THREE_LAYER),)

        for layer in decode(flat, THREE_LAYER):
            assert jnp.all(layer.bias == 0.0)
            assert jnp.any(layer.weights != 0.0)

    def test_glorot_bounds(self):
        flat = init_flat_params(random.PRNGKey(3), [(50, 30, 'tanh')])
        (layer,) = decode(flat, [(50, 30, 'tanh')])
        bound = jnp.sqrt(6.0 / (50 + 30))
        assert jnp.all(jnp.abs(layer.weights) <= bound + 1e-6)

    def test_reproducible(self):
        a = init_flat_params(random.PRNGKey(7), THREE_LAYER)
        b = init_flat_params(random.PRNGKey(7), THREE_LAYER)
        assert jnp.array_equal(a, b)


class TestLayerSlices:
    """Test index ranges into the flat vector."""

    def test_slices_match_decode(self):
        flat = jnp.arange(num_params(THREE_LAYER), dtype=jnp.float32)
        layers = decode(flat, THREE_LAYER)

        for layer, s in zip(layers, layer_slices(THREE_LAYER)):
            assert jnp.array_equal(flat[s['weights']], layer.weights.ravel())
            assert jnp.array_equal(flat[s['bias']], layer.bias)

    def test_slices_cover_vector(self):
        slices = layer_slices(THREE_LAYER)
        assert slices[0]['weights'].start == 0
        assert slices[-1]['bias'].stop == num_params(THREE_LAYER)
