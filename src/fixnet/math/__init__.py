"""Fixed-shape numeric containers and the scalar contract."""

from fixnet.math.scalar import (
    BFLOAT16,
    DEFAULT_SCALAR,
    FLOAT16,
    FLOAT32,
    INT32,
    ScalarType,
    scalar_type,
)
from fixnet.math.tensor import ScalarTensor, Tensor, Tensor3, Tensor4
from fixnet.math.vector import Vector
from fixnet.math.matrix import Matrix

__all__ = [
    "ScalarType",
    "scalar_type",
    "DEFAULT_SCALAR",
    "FLOAT32",
    "FLOAT16",
    "BFLOAT16",
    "INT32",
    "Tensor",
    "ScalarTensor",
    "Tensor3",
    "Tensor4",
    "Vector",
    "Matrix",
]
