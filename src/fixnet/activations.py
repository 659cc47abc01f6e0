"""
Activation functions over batch matrices.

Two stateless strategies satisfy the same capability: transform a batch
matrix into another of identical shape.
"""

from typing import Protocol, runtime_checkable

import equinox as eqx

from fixnet.math import Matrix, Vector


@runtime_checkable
class ActivationFn(Protocol):
    def apply(self, batch: Matrix) -> Matrix: ...


class ReLU(eqx.Module):
    """
    Elementwise ``max(ZERO, x)``.

    Ties at ``x == ZERO`` resolve to ZERO through the scalar ``max`` contract.
    """

    def apply(self, batch: Matrix) -> Matrix:
        scalar = batch.scalar
        return Matrix(scalar.max(scalar.zero, batch.data), scalar)

    def __call__(self, batch: Matrix) -> Matrix:
        return self.apply(batch)


def _softmax_row(row: Vector) -> Vector:
    return row.exp().norm()


class Softmax(eqx.Module):
    """
    Per-row softmax: ``row' = norm(exp(row))``.

    The row maximum is not subtracted before exponentiating, so very large
    inputs overflow to inf. A row whose exponentials sum to ZERO (only the
    empty row) is returned unchanged.
    """

    def apply(self, batch: Matrix) -> Matrix:
        return batch.map_rows(_softmax_row)

    def __call__(self, batch: Matrix) -> Matrix:
        return self.apply(batch)


ACTIVATIONS: dict[str, type[eqx.Module]] = {"relu": ReLU, "softmax": Softmax}


def get_activation(name: str) -> ActivationFn:
    if name not in ACTIVATIONS:
        raise ValueError(
            f"Unknown activation: {name}. Available: {list(ACTIVATIONS.keys())}"
        )
    return ACTIVATIONS[name]()
