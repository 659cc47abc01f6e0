"""Tests for the feed-forward Network pipeline."""

import jax
import jax.numpy as jnp
import pytest

from fixnet.activations import ReLU, Softmax
from fixnet.layers import Dense
from fixnet.math import INT32, Matrix, Vector
from fixnet.network import Network, build_network
from fixnet.types.configs import LayerConfig, NetworkConfig
from fixnet.types.invariants import assert_row_stochastic, assert_shape


def _reference_network() -> Network:
    layer1 = Dense(
        Matrix([[0.1, -0.2, 1.3], [1.1, -2.0, 0.8]]),
        Vector([1.0, -1.0]),
    )
    layer2 = Dense(Matrix([[0.5, 0.1], [2.2, 0.2]]), Vector([0.0, 0.0]))
    return Network([layer1, ReLU(), layer2, Softmax()])


class TestNetwork:
    def test_reference_pipeline(self):
        network = _reference_network()
        batch = Matrix([[1.1, 2.2, 3.3]])

        out = network(batch)

        # Same computation staged by hand
        hidden = ReLU().apply(network.stages[0].forward(batch))
        expected = Softmax().apply(network.stages[2].forward(hidden))
        assert jnp.array_equal(out.data, expected.data)
        assert_row_stochastic(out)

    def test_widths(self):
        network = _reference_network()
        assert network.input_dim == 3
        assert network.output_dim == 2
        assert len(network.layers()) == 2

    def test_rejects_width_mismatch(self):
        with pytest.raises(ValueError, match="Stage 2 .* expects 3 inputs"):
            Network([
                Dense(Matrix.zero(2, 3), Vector.zero(2)),
                ReLU(),
                Dense(Matrix.zero(2, 3), Vector.zero(2)),
            ])

    def test_rejects_no_layers(self):
        with pytest.raises(ValueError, match="at least one layer"):
            Network([ReLU()])

    def test_rejects_unknown_stage(self):
        with pytest.raises(ValueError, match="neither a layer nor an activation"):
            Network([Dense(Matrix.zero(2, 3), Vector.zero(2)), object()])

    def test_rejects_batch_width(self):
        network = _reference_network()
        with pytest.raises(ValueError, match="expects 3 input features"):
            network(Matrix.zero(1, 2))

    def test_integer_pipeline(self):
        network = Network([
            Dense(Matrix([[1, 2, 3], [4, 5, 6]], INT32), Vector([1, -20], INT32)),
            ReLU(),
        ])
        assert network(Matrix([[4, 3, 2]], INT32)).tolist() == [[17, 23]]


class TestBuildNetwork:
    def test_from_config(self, simple_config, key):
        network = build_network(simple_config, key=key)

        assert network.input_dim == simple_config.inputs
        assert network.output_dim == simple_config.layers[-1].outputs
        assert isinstance(network.stages[1], ReLU)
        assert isinstance(network.stages[-1], Softmax)

        batch = Matrix(jax.random.normal(key, (4, simple_config.inputs)))
        out = network(batch)
        assert_shape(out, (4, 2))
        assert_row_stochastic(out)

    def test_layer_without_activation(self, key):
        config = NetworkConfig(inputs=5, layers=(LayerConfig(outputs=3),))
        network = build_network(config, key=key)
        assert len(network.stages) == 1
        assert network(Matrix.zero(2, 5)).shape == (2, 3)

    def test_deterministic_per_key(self, simple_config, key):
        a = build_network(simple_config, key=key)
        b = build_network(simple_config, key=key)
        batch = Matrix([[1.0, 2.0, 3.0]])
        assert jnp.array_equal(a(batch).data, b(batch).data)
