"""Configuration types with construction-time invariant enforcement."""

from dataclasses import dataclass
from typing import Literal

from fixnet.math.scalar import ScalarType, scalar_type


ActivationName = Literal["relu", "softmax"]
DTypeName = Literal["float32", "float16", "bfloat16", "int32"]

_ACTIVATION_NAMES = ("relu", "softmax")


@dataclass(frozen=True, slots=True)
class LayerConfig:
    """
    One Dense layer, optionally followed by an activation.

    Invariants enforced at construction:
    - outputs >= 0
    - activation is None, "relu" or "softmax"
    """

    outputs: int
    activation: ActivationName | None = None

    def __post_init__(self) -> None:
        if self.outputs < 0:
            raise ValueError(f"outputs must be non-negative, got {self.outputs}")
        if self.activation is not None and self.activation not in _ACTIVATION_NAMES:
            raise ValueError(
                f"activation must be one of {_ACTIVATION_NAMES} or None, "
                f"got {self.activation!r}"
            )


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """
    Immutable feed-forward network shape.

    Invariants enforced at construction:
    - inputs >= 0
    - at least one layer
    - dtype names a known scalar type
    - softmax layers require a floating dtype (exp is undefined on integers)
    """

    inputs: int
    layers: tuple[LayerConfig, ...]
    dtype: DTypeName = "float32"
    seed: int = 42

    def __post_init__(self) -> None:
        if self.inputs < 0:
            raise ValueError(f"inputs must be non-negative, got {self.inputs}")
        if not self.layers:
            raise ValueError("layers must contain at least one LayerConfig")

        # Raises ValueError for unknown names
        scalar = scalar_type(self.dtype)

        if not scalar.is_floating and any(
            layer.activation == "softmax" for layer in self.layers
        ):
            raise ValueError(
                f"softmax requires a floating dtype, got {self.dtype}"
            )

    @property
    def scalar(self) -> ScalarType:
        return scalar_type(self.dtype)

    def widths(self) -> tuple[int, ...]:
        """Feature width at every layer boundary, input first."""
        return (self.inputs,) + tuple(layer.outputs for layer in self.layers)


# Same shape as the reference two-layer example: 3 -> 2 (ReLU) -> 2 (Softmax)
SIMPLE_DENSE_CONFIG = NetworkConfig(
    inputs=3,
    layers=(
        LayerConfig(outputs=2, activation="relu"),
        LayerConfig(outputs=2, activation="softmax"),
    ),
    dtype="float32",
    seed=42,
)
