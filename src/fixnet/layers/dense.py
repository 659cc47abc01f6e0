"""
Fully-connected (dense) layer.

Applies the same affine transform to every sample row of a batch:

    output = batch @ weights.T + biases
"""

from __future__ import annotations

import jax
import equinox as eqx

from fixnet.math import DEFAULT_SCALAR, Matrix, ScalarType, Vector
from fixnet.math.scalar import check_same_scalar


class Dense(eqx.Module):
    """
    Dense layer with fixed INPUTS and OUTPUTS widths.

    Weights are supplied logically as (OUTPUTS × INPUTS) and stored
    transposed as (INPUTS × OUTPUTS) so a batched forward pass is one
    matrix product followed by a row-broadcast bias add. The storage
    layout does not change any output value.

    Parameters are immutable after construction.
    """

    kernel: Matrix
    biases: Vector

    def __init__(self, weights: Matrix, biases: Vector):
        """
        Args:
            weights: Weight matrix [OUTPUTS, INPUTS].
            biases: Bias vector [OUTPUTS].

        Raises:
            ValueError: If ``weights.rows != len(biases)``.
            TypeError: If weights and biases use different scalar types.
        """
        check_same_scalar(weights.scalar, biases.scalar)
        if weights.rows != len(biases):
            raise ValueError(
                f"Bias length {len(biases)} must equal weight rows {weights.rows}"
            )
        self.kernel = weights.transpose()
        self.biases = biases

    @classmethod
    def init(
        cls,
        inputs: int,
        outputs: int,
        *,
        key: jax.Array,
        scalar: ScalarType = DEFAULT_SCALAR,
    ) -> Dense:
        """
        Build a layer with random weights and zero biases.

        Args:
            inputs: Input width.
            outputs: Output width.
            key: PRNG key for the weights.
            scalar: Element type.
        """
        weights = Matrix(scalar.random(key, (outputs, inputs)), scalar)
        return cls(weights, Vector.zero(outputs, scalar))

    @property
    def inputs(self) -> int:
        return self.kernel.rows

    @property
    def outputs(self) -> int:
        return self.kernel.cols

    @property
    def scalar(self) -> ScalarType:
        return self.kernel.scalar

    @property
    def weights(self) -> Matrix:
        """Weights in the logical (OUTPUTS × INPUTS) layout."""
        return self.kernel.transpose()

    def forward(self, batch: Matrix) -> Matrix:
        """
        Apply the layer to a batch.

        Args:
            batch: Input batch [SAMPLES, INPUTS].

        Returns:
            Output batch [SAMPLES, OUTPUTS].

        Raises:
            ValueError: If ``batch.cols != inputs``.
        """
        if batch.cols != self.inputs:
            raise ValueError(
                f"Dense expects {self.inputs} input features, got {batch.cols}"
            )
        return batch @ self.kernel + self.biases

    def forward_sample(self, sample: Vector) -> Vector:
        """Apply the layer to a single sample [INPUTS] -> [OUTPUTS]."""
        if len(sample) != self.inputs:
            raise ValueError(
                f"Dense expects {self.inputs} input features, got {len(sample)}"
            )
        return self.weights @ sample + self.biases

    def __call__(self, batch: Matrix) -> Matrix:
        return self.forward(batch)
