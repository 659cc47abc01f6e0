from __future__ import annotations

import pytest

from fixnet.math import BFLOAT16
from fixnet.types.configs import SIMPLE_DENSE_CONFIG, LayerConfig, NetworkConfig


def test_layer_config_validation():
    """Test LayerConfig validates width and activation name."""

    assert LayerConfig(outputs=4, activation="relu").activation == "relu"
    assert LayerConfig(outputs=0).activation is None

    with pytest.raises(ValueError, match="must be non-negative"):
        LayerConfig(outputs=-1)

    with pytest.raises(ValueError, match="activation must be one of"):
        LayerConfig(outputs=2, activation="tanh")


def test_network_config_validation():
    """Test NetworkConfig validates inputs, layers and dtype."""

    config = NetworkConfig(
        inputs=4,
        layers=(LayerConfig(8, "relu"), LayerConfig(3, "softmax")),
        dtype="bfloat16",
    )
    assert config.widths() == (4, 8, 3)
    assert config.scalar is BFLOAT16

    with pytest.raises(ValueError, match="must be non-negative"):
        NetworkConfig(inputs=-1, layers=(LayerConfig(2),))

    with pytest.raises(ValueError, match="at least one LayerConfig"):
        NetworkConfig(inputs=2, layers=())

    with pytest.raises(ValueError, match="Unknown scalar type"):
        NetworkConfig(inputs=2, layers=(LayerConfig(2),), dtype="float64")

    with pytest.raises(ValueError, match="softmax requires a floating dtype"):
        NetworkConfig(inputs=2, layers=(LayerConfig(2, "softmax"),), dtype="int32")

    # Integer networks without softmax are allowed
    NetworkConfig(inputs=2, layers=(LayerConfig(2, "relu"),), dtype="int32")


def test_simple_dense_config():
    """Test the reference config matches the two-layer example shape."""
    assert SIMPLE_DENSE_CONFIG.widths() == (3, 2, 2)
    assert [layer.activation for layer in SIMPLE_DENSE_CONFIG.layers] == [
        "relu",
        "softmax",
    ]


def test_configs_are_frozen():
    with pytest.raises(AttributeError):
        SIMPLE_DENSE_CONFIG.inputs = 5
