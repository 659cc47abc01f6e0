"""Runtime invariant assertions for activation outputs and shapes."""

from typing import Any

import jax.numpy as jnp
from jaxtyping import Array


def _values(x: Any) -> Array:
    # Accept fixnet containers as well as raw arrays.
    return jnp.asarray(getattr(x, "data", x))


def assert_row_stochastic(
    m: Any,
    rtol: float = 1e-5,
    atol: float = 1e-6,
) -> None:
    """
    Assert every row of a batch is a probability distribution.

    Used for Softmax outputs.

    Checks:
    - Rows sum to 1
    - All entries non-negative

    Raises:
        AssertionError: If any invariant is violated.
    """
    values = _values(m).astype(jnp.float32)
    row_sums = jnp.sum(values, axis=-1)
    ones = jnp.ones_like(row_sums)

    row_ok = jnp.allclose(row_sums, ones, rtol=rtol, atol=atol)
    nonneg_ok = jnp.all(values >= 0)

    if not row_ok:
        max_err = jnp.max(jnp.abs(row_sums - 1.0))
        raise AssertionError(f"Rows must sum to 1, max error: {max_err}")
    if not nonneg_ok:
        min_val = jnp.min(values)
        raise AssertionError(f"All entries must be non-negative, min value: {min_val}")


def assert_non_negative(m: Any) -> None:
    """
    Assert all entries are >= 0 (ReLU output).

    Raises:
        AssertionError: If any entry is negative.
    """
    values = _values(m)
    if values.size and not jnp.all(values >= 0):
        raise AssertionError(
            f"All entries must be non-negative, min value: {jnp.min(values)}"
        )


def assert_shape(m: Any, expected: tuple[int, ...]) -> None:
    """
    Assert a container or array has exactly the expected shape.

    Raises:
        AssertionError: On mismatch.
    """
    shape: tuple[int, ...] = tuple(_values(m).shape)
    if shape != tuple(expected):
        raise AssertionError(f"Expected shape {tuple(expected)}, got {shape}")
