"""
Scalar element types.

A ScalarType describes the numeric element that parameterizes every
container in fixnet. It wraps a JAX dtype and supplies the arithmetic and
constant contract the algorithms rely on:

- additive identity (``zero``)
- ``+``, ``*`` natively on arrays, ``div`` for ``/``
- ordering (``<``, ``<=``, ``>=``) natively on arrays
- ``max`` with ties resolving to the left operand
- ``exp`` and ``abs``
- conversion from a non-negative integer count
- a source of independent random values
"""

from dataclasses import dataclass
from typing import Any

import jax
import jax.numpy as jnp
from jax import lax
from jaxtyping import Array, Shaped


# Inclusive bound for random integer draws
INT_RANDOM_BOUND = 8


@dataclass(frozen=True, slots=True)
class ScalarType:
    """
    Numeric element type backed by a JAX dtype.

    Instances are hashable so they can live in static ``eqx.Module`` fields.
    """

    name: str
    dtype: Any

    @property
    def is_floating(self) -> bool:
        return jnp.issubdtype(self.dtype, jnp.floating)

    @property
    def zero(self) -> Shaped[Array, ""]:
        """Additive identity."""
        return jnp.zeros((), dtype=self.dtype)

    def cast(self, value: Any) -> Shaped[Array, "..."]:
        return jnp.asarray(value, dtype=self.dtype)

    def max(self, a: Any, b: Any) -> Shaped[Array, "..."]:
        """
        Elementwise maximum preferring ``a`` on ties.

        ``max(ZERO, -0.0)`` is ``ZERO``, which keeps ReLU outputs at +0.
        """
        a = self.cast(a)
        b = self.cast(b)
        return jnp.where(a >= b, a, b)

    def exp(self, x: Any) -> Shaped[Array, "..."]:
        if not self.is_floating:
            raise TypeError(f"Scalar type {self.name} does not support exp")
        return jnp.exp(self.cast(x))

    def abs(self, x: Any) -> Shaped[Array, "..."]:
        return jnp.abs(self.cast(x))

    def div(self, a: Any, b: Any) -> Shaped[Array, "..."]:
        """
        Elementwise ``a / b`` staying in this scalar type.

        True division for floating types, truncation toward zero for integers.
        """
        a, b = jnp.broadcast_arrays(self.cast(a), self.cast(b))
        return lax.div(a, b)

    def from_count(self, n: int) -> Shaped[Array, ""]:
        """Convert a non-negative element count to this scalar type."""
        if n < 0:
            raise ValueError(f"count must be non-negative, got {n}")
        return self.cast(n)

    def random(
        self,
        key: jax.Array,
        shape: tuple[int, ...] = (),
    ) -> Shaped[Array, "..."]:
        """
        Draw independent values.

        Floating types sample uniformly from [0, 1); integer types sample
        uniformly from the closed interval
        ``[-INT_RANDOM_BOUND, INT_RANDOM_BOUND]``.
        """
        if self.is_floating:
            return jax.random.uniform(key, shape, dtype=self.dtype)
        return jax.random.randint(
            key, shape, -INT_RANDOM_BOUND, INT_RANDOM_BOUND + 1, dtype=self.dtype
        )


FLOAT32 = ScalarType("float32", jnp.float32)
FLOAT16 = ScalarType("float16", jnp.float16)
BFLOAT16 = ScalarType("bfloat16", jnp.bfloat16)
INT32 = ScalarType("int32", jnp.int32)

DEFAULT_SCALAR = FLOAT32

SCALAR_TYPES = {s.name: s for s in (FLOAT32, FLOAT16, BFLOAT16, INT32)}


def scalar_type(name: str) -> ScalarType:
    if name not in SCALAR_TYPES:
        raise ValueError(
            f"Unknown scalar type: {name}. Available: {list(SCALAR_TYPES.keys())}"
        )
    return SCALAR_TYPES[name]


def check_same_scalar(left: ScalarType, right: ScalarType) -> None:
    """Raise TypeError when two operands disagree on their element type."""
    if left != right:
        raise TypeError(
            f"Scalar types differ: {left.name} and {right.name}"
        )
