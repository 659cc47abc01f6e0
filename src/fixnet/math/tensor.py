"""
Rank-indexed access shared by every fixed-shape container.

Each container satisfies the Tensor protocol on its own; there is no common
base class. Containers are immutable pytrees, so ``set`` returns a new
container with one element replaced.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, Sequence, runtime_checkable

import equinox as eqx
import jax.numpy as jnp
from jaxtyping import Array, Shaped

from fixnet.math.scalar import DEFAULT_SCALAR, ScalarType


@runtime_checkable
class Tensor(Protocol):
    """A container with a fixed shape of known rank."""

    rank: ClassVar[int]

    @property
    def shape(self) -> tuple[int, ...]: ...

    def get(self, indices: Sequence[int]) -> Shaped[Array, ""]: ...

    def set(self, indices: Sequence[int], value: Any) -> Tensor: ...


def check_index(indices: Sequence[int], shape: tuple[int, ...]) -> tuple[int, ...]:
    """
    Validate an index tuple against a shape.

    JAX clamps out-of-range indices silently, so bounds are checked here.

    Raises:
        IndexError: On wrong arity or an index outside ``[0, dim)``.
    """
    indices = tuple(indices)
    if len(indices) != len(shape):
        raise IndexError(
            f"Expected {len(shape)} indices for shape {shape}, got {len(indices)}"
        )
    for axis, (i, dim) in enumerate(zip(indices, shape)):
        if not 0 <= i < dim:
            raise IndexError(f"Index {i} out of range for axis {axis} of size {dim}")
    return indices


def as_rank(data: Any, scalar: ScalarType, rank: int, kind: str) -> Array:
    """Cast ``data`` to the scalar dtype and require exactly ``rank`` axes."""
    array = jnp.asarray(data, dtype=scalar.dtype)
    if array.ndim != rank:
        raise ValueError(f"{kind} data must be rank {rank}, got shape {array.shape}")
    return array


class ScalarTensor(eqx.Module):
    """Rank-0 view of a single scalar value."""

    rank: ClassVar[int] = 0

    value: Shaped[Array, ""]
    scalar: ScalarType = eqx.field(static=True)

    def __init__(self, value: Any, scalar: ScalarType = DEFAULT_SCALAR):
        self.value = as_rank(value, scalar, 0, "Scalar")
        self.scalar = scalar

    @property
    def shape(self) -> tuple[int, ...]:
        return ()

    def get(self, indices: Sequence[int] = ()) -> Shaped[Array, ""]:
        check_index(indices, ())
        return self.value

    def set(self, indices: Sequence[int], value: Any) -> ScalarTensor:
        check_index(indices, ())
        return ScalarTensor(value, self.scalar)


class Tensor3(eqx.Module):
    """Fixed A×B×C grid."""

    rank: ClassVar[int] = 3

    data: Shaped[Array, "A B C"]
    scalar: ScalarType = eqx.field(static=True)

    def __init__(self, data: Any, scalar: ScalarType = DEFAULT_SCALAR):
        self.data = as_rank(data, scalar, 3, "Tensor3")
        self.scalar = scalar

    @classmethod
    def zero(
        cls, a: int, b: int, c: int, scalar: ScalarType = DEFAULT_SCALAR
    ) -> Tensor3:
        return cls(jnp.zeros((a, b, c), dtype=scalar.dtype), scalar)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.data.shape)

    def get(self, indices: Sequence[int]) -> Shaped[Array, ""]:
        return self.data[check_index(indices, self.shape)]

    def set(self, indices: Sequence[int], value: Any) -> Tensor3:
        index = check_index(indices, self.shape)
        return Tensor3(self.data.at[index].set(self.scalar.cast(value)), self.scalar)

    def tolist(self) -> list:
        return self.data.tolist()


class Tensor4(eqx.Module):
    """Fixed A×B×C×D grid."""

    rank: ClassVar[int] = 4

    data: Shaped[Array, "A B C D"]
    scalar: ScalarType = eqx.field(static=True)

    def __init__(self, data: Any, scalar: ScalarType = DEFAULT_SCALAR):
        self.data = as_rank(data, scalar, 4, "Tensor4")
        self.scalar = scalar

    @classmethod
    def zero(
        cls, a: int, b: int, c: int, d: int, scalar: ScalarType = DEFAULT_SCALAR
    ) -> Tensor4:
        return cls(jnp.zeros((a, b, c, d), dtype=scalar.dtype), scalar)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.data.shape)

    def get(self, indices: Sequence[int]) -> Shaped[Array, ""]:
        return self.data[check_index(indices, self.shape)]

    def set(self, indices: Sequence[int], value: Any) -> Tensor4:
        index = check_index(indices, self.shape)
        return Tensor4(self.data.at[index].set(self.scalar.cast(value)), self.scalar)

    def tolist(self) -> list:
        return self.data.tolist()
