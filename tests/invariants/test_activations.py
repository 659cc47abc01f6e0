"""Tests for ReLU and Softmax invariants."""

import jax
import jax.numpy as jnp
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fixnet.activations import ActivationFn, ReLU, Softmax, get_activation
from fixnet.math import INT32, Matrix
from fixnet.types.invariants import (
    assert_non_negative,
    assert_row_stochastic,
    assert_shape,
)


class TestReLU:
    def test_reference(self):
        out = ReLU().apply(Matrix([[0.0, 0.2, -0.2]]))
        assert jnp.array_equal(out.data, jnp.array([[0.0, 0.2, 0.0]], dtype=jnp.float32))

    def test_negative_zero_resolves_to_zero(self):
        out = ReLU().apply(Matrix([[-0.0]]))
        assert not jnp.signbit(out.data[0, 0])

    def test_integer_scalar(self):
        out = ReLU()(Matrix([[-3, 0, 4]], INT32))
        assert out.tolist() == [[0, 0, 4]]

    def test_preserves_shape(self):
        batch = Matrix.zero(4, 7)
        assert_shape(ReLU().apply(batch), (4, 7))
        assert_shape(ReLU().apply(Matrix.zero(0, 2)), (0, 2))


class TestSoftmax:
    def test_reference(self):
        out = Softmax().apply(Matrix([[2.0, 4.0, 1.0]]))
        expected = jnp.array([[0.1141952, 0.8437947, 0.042010065]])
        assert jnp.allclose(out.data, expected, rtol=0, atol=1e-6)

    def test_rows_independent(self):
        batch = Matrix([[2.0, 4.0, 1.0], [0.0, 0.0, 0.0]])
        out = Softmax()(batch)
        assert jnp.allclose(out.data[1], jnp.full((3,), 1.0 / 3.0))
        assert_row_stochastic(out)

    def test_empty_rows_unchanged(self):
        out = Softmax().apply(Matrix.zero(2, 0))
        assert_shape(out, (2, 0))

    def test_no_max_subtraction(self):
        """Large inputs overflow exp instead of being stabilised."""
        out = Softmax().apply(Matrix([[100.0, 0.0]]))
        assert jnp.isnan(out.data[0, 0])

    def test_rejects_integer_scalar(self):
        with pytest.raises(TypeError, match="does not support exp"):
            Softmax().apply(Matrix([[1, 2]], INT32))


class TestRegistry:
    def test_lookup(self):
        assert isinstance(get_activation("relu"), ReLU)
        assert isinstance(get_activation("softmax"), Softmax)
        assert isinstance(ReLU(), ActivationFn)
        assert isinstance(Softmax(), ActivationFn)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown activation"):
            get_activation("gelu")


@settings(max_examples=20, deadline=5000)
@given(
    rows=st.integers(min_value=0, max_value=8),
    cols=st.integers(min_value=0, max_value=8),
    seed=st.integers(min_value=0, max_value=2**16),
)
def test_relu_property(rows: int, cols: int, seed: int):
    """Property test: ReLU output is non-negative and keeps non-negative inputs."""
    key = jax.random.PRNGKey(seed)
    batch = Matrix(jax.random.normal(key, (rows, cols)))

    out = ReLU().apply(batch)

    assert_non_negative(out)
    keep = batch.data >= 0
    assert jnp.array_equal(jnp.where(keep, out.data, 0.0), jnp.where(keep, batch.data, 0.0))


@settings(max_examples=20, deadline=5000)
@given(
    rows=st.integers(min_value=1, max_value=8),
    cols=st.integers(min_value=1, max_value=8),
    seed=st.integers(min_value=0, max_value=2**16),
)
def test_softmax_property_row_stochastic(rows: int, cols: int, seed: int):
    """Property test: Softmax rows sum to 1 and are non-negative."""
    key = jax.random.PRNGKey(seed)
    batch = Matrix(jax.random.normal(key, (rows, cols)) * 3.0)

    out = Softmax().apply(batch)

    assert_shape(out, (rows, cols))
    assert_row_stochastic(out, rtol=1e-5, atol=1e-5)
