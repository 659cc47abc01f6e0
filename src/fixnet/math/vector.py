"""Fixed-length vectors over a scalar type."""

from __future__ import annotations

from typing import Any, ClassVar, Sequence

import equinox as eqx
import jax.numpy as jnp
from jax import lax
from jaxtyping import Array, Shaped

from fixnet.math.scalar import DEFAULT_SCALAR, ScalarType, check_same_scalar
from fixnet.math.tensor import as_rank, check_index


def ordered_sum(
    values: Shaped[Array, "N ..."],
    zero: Shaped[Array, ""],
) -> Shaped[Array, "..."]:
    """
    Left fold of ``values`` along the leading axis, starting from ``zero``.

    ``jnp.sum`` is free to reduce pairwise; scanning fixes the order to
    ``((zero + v0) + v1) + ...`` so float results are reproducible.
    An empty leading axis returns ``zero`` broadcast to the trailing shape.
    """
    init = jnp.broadcast_to(zero, values.shape[1:]).astype(values.dtype)

    def body(acc, item):
        return acc + item, None

    total, _ = lax.scan(body, init, values)
    return total


class Vector(eqx.Module):
    """
    Ordered sequence of exactly N scalars.

    The length is fixed at construction. Every operation returns a new
    Vector; the stored array is never updated in place.
    """

    rank: ClassVar[int] = 1

    data: Shaped[Array, "N"]
    scalar: ScalarType = eqx.field(static=True)

    def __init__(self, data: Any, scalar: ScalarType = DEFAULT_SCALAR):
        """
        Args:
            data: Rank-1 literal data or array.
            scalar: Element type; data is cast to its dtype.

        Raises:
            ValueError: If ``data`` is not rank 1.
        """
        self.data = as_rank(data, scalar, 1, "Vector")
        self.scalar = scalar

    @classmethod
    def zero(cls, n: int, scalar: ScalarType = DEFAULT_SCALAR) -> Vector:
        return cls(jnp.zeros((n,), dtype=scalar.dtype), scalar)

    def __len__(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> tuple[int, ...]:
        return (len(self),)

    def get(self, indices: Sequence[int]) -> Shaped[Array, ""]:
        return self.data[check_index(indices, self.shape)]

    def set(self, indices: Sequence[int], value: Any) -> Vector:
        index = check_index(indices, self.shape)
        return Vector(self.data.at[index].set(self.scalar.cast(value)), self.scalar)

    def tolist(self) -> list:
        return self.data.tolist()

    def _like(self, data: Shaped[Array, "N"]) -> Vector:
        return Vector(data, self.scalar)

    def exp(self) -> Vector:
        return self._like(self.scalar.exp(self.data))

    def abs(self) -> Vector:
        return self._like(self.scalar.abs(self.data))

    def sum(self) -> Shaped[Array, ""]:
        return ordered_sum(self.data, self.scalar.zero)

    def mean(self) -> Shaped[Array, ""]:
        n = len(self)
        if n == 0:
            return self.scalar.zero
        return self.scalar.div(self.sum(), self.scalar.from_count(n))

    def norm(self) -> Vector:
        """
        L1 normalization: divide every element by the sum of absolute values.

        When that sum is ZERO the vector is returned unchanged.
        """
        total = self.abs().sum()
        scaled = self.scalar.div(self.data, total)
        return self._like(jnp.where(total == self.scalar.zero, self.data, scaled))

    def clip(self, min: Any, max: Any) -> Vector:
        """
        Clamp every element into ``[min, max]``.

        ``min > max`` violates the contract and raises at runtime.
        """
        lo = self.scalar.cast(min)
        hi = self.scalar.cast(max)
        lo = eqx.error_if(lo, lo > hi, "clip bounds require min <= max")
        return self._like(jnp.minimum(jnp.maximum(self.data, lo), hi))

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        check_same_scalar(self.scalar, other.scalar)
        if len(self) != len(other):
            raise ValueError(
                f"Vector lengths must match, got {len(self)} and {len(other)}"
            )
        return self._like(self.data + other.data)
