"""Fixed R×C matrices over a scalar type."""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Sequence

import equinox as eqx
import jax
import jax.numpy as jnp
from jax import lax
from jaxtyping import Array, Shaped

from fixnet.math.scalar import DEFAULT_SCALAR, ScalarType, check_same_scalar
from fixnet.math.tensor import as_rank, check_index
from fixnet.math.vector import Vector


def ordered_matmul(
    a: Shaped[Array, "R K"],
    b: Shaped[Array, "K C"],
    zero: Shaped[Array, ""],
) -> Shaped[Array, "R C"]:
    """
    Matrix product with a fixed accumulation order.

    Every output element is ``((zero + a[r,0]*b[0,c]) + a[r,1]*b[1,c]) + ...``,
    accumulated over k = 0..K-1 in increasing order. Scanning over K keeps
    that order regardless of how the backend would tile ``a @ b``. Each
    product is rounded on its own before it is added, so no step fuses into
    a multiply-add.
    An empty K yields a matrix of ``zero``.
    """
    rows, cols = a.shape[0], b.shape[1]
    init = jnp.broadcast_to(zero, (rows, cols)).astype(a.dtype)

    def body(acc, pair):
        a_col, b_row = pair
        prod = lax.optimization_barrier(a_col[:, None] * b_row[None, :])
        return acc + prod, None

    out, _ = lax.scan(body, init, (a.T, b))
    return out


class Matrix(eqx.Module):
    """
    R rows of C scalars in row-major order.

    Dimensions are fixed at construction and every row has exactly C
    elements. Operations return new matrices.
    """

    rank: ClassVar[int] = 2

    data: Shaped[Array, "R C"]
    scalar: ScalarType = eqx.field(static=True)

    def __init__(self, data: Any, scalar: ScalarType = DEFAULT_SCALAR):
        """
        Args:
            data: Rank-2 literal data (list of rows) or array.
            scalar: Element type; data is cast to its dtype.

        Raises:
            ValueError: If ``data`` is not rank 2 (including ragged rows).
        """
        self.data = as_rank(data, scalar, 2, "Matrix")
        self.scalar = scalar

    @classmethod
    def zero(
        cls, rows: int, cols: int, scalar: ScalarType = DEFAULT_SCALAR
    ) -> Matrix:
        return cls(jnp.zeros((rows, cols), dtype=scalar.dtype), scalar)

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> tuple[int, ...]:
        return (self.rows, self.cols)

    def get(self, indices: Sequence[int]) -> Shaped[Array, ""]:
        return self.data[check_index(indices, self.shape)]

    def set(self, indices: Sequence[int], value: Any) -> Matrix:
        index = check_index(indices, self.shape)
        return Matrix(self.data.at[index].set(self.scalar.cast(value)), self.scalar)

    def tolist(self) -> list:
        return self.data.tolist()

    def row(self, i: int) -> Vector:
        check_index((i,), (self.rows,))
        return Vector(self.data[i], self.scalar)

    def map_rows(self, fn: Callable[[Vector], Vector]) -> Matrix:
        """
        Apply a length-preserving Vector transform to every row.

        Rows are independent, so they are vectorised with ``jax.vmap``.
        """
        if self.rows == 0:
            return self
        scalar = self.scalar

        def apply_row(row: Shaped[Array, "C"]) -> Shaped[Array, "C"]:
            return fn(Vector(row, scalar)).data

        out = jax.vmap(apply_row)(self.data)
        if out.shape != self.data.shape:
            raise ValueError(
                f"Row transform changed shape {self.data.shape} to {out.shape}"
            )
        return Matrix(out, scalar)

    def transpose(self) -> Matrix:
        return Matrix(self.data.T, self.scalar)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def __matmul__(self, other: Matrix | Vector) -> Matrix | Vector:
        """
        ``(R × K) @ (K × C) -> (R × C)`` or ``(R × C) @ (C,) -> (R,)``.

        Raises:
            ValueError: If the shared inner dimension differs.
            TypeError: If the scalar types differ.
        """
        if isinstance(other, Matrix):
            check_same_scalar(self.scalar, other.scalar)
            if self.cols != other.rows:
                raise ValueError(
                    f"Inner dimensions must match: {self.shape} @ {other.shape}"
                )
            return Matrix(
                ordered_matmul(self.data, other.data, self.scalar.zero), self.scalar
            )
        if isinstance(other, Vector):
            check_same_scalar(self.scalar, other.scalar)
            if self.cols != len(other):
                raise ValueError(
                    f"Inner dimensions must match: {self.shape} @ {other.shape}"
                )
            column = other.data[:, None]
            out = ordered_matmul(self.data, column, self.scalar.zero)
            return Vector(out[:, 0], self.scalar)
        return NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        """Scale every element by a scalar value."""
        if isinstance(other, (Matrix, Vector)):
            return NotImplemented
        return Matrix(self.data * self.scalar.cast(other), self.scalar)

    __rmul__ = __mul__

    def __add__(self, other: Vector) -> Matrix:
        """
        Row-broadcast addition: ``other`` is added to every row.

        Raises:
            ValueError: If ``len(other) != cols``.
        """
        if not isinstance(other, Vector):
            return NotImplemented
        check_same_scalar(self.scalar, other.scalar)
        if self.cols != len(other):
            raise ValueError(
                f"Broadcast vector length {len(other)} must equal column count {self.cols}"
            )
        return Matrix(self.data + other.data[None, :], self.scalar)
