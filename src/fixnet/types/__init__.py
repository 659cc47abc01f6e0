"""Type definitions for fixnet."""

from fixnet.types.configs import LayerConfig, NetworkConfig, SIMPLE_DENSE_CONFIG
from fixnet.types.invariants import (
    assert_row_stochastic,
    assert_non_negative,
    assert_shape,
)

__all__ = [
    "LayerConfig",
    "NetworkConfig",
    "SIMPLE_DENSE_CONFIG",
    "assert_row_stochastic",
    "assert_non_negative",
    "assert_shape",
]
