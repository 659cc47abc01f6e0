"""Feed-forward pipeline of Dense layers and activations."""

from __future__ import annotations

import logging
from typing import Sequence, Union

import jax
import equinox as eqx

from fixnet.activations import ActivationFn, get_activation
from fixnet.layers import Dense, Layer
from fixnet.math import Matrix
from fixnet.types.configs import NetworkConfig

logger = logging.getLogger(__name__)

Stage = Union[Layer, ActivationFn]


class Network(eqx.Module):
    """
    Ordered stages applied to a batch matrix.

    Layers change the feature width; activations preserve it. Adjacent
    widths are checked once at construction, so a built network accepts
    exactly one input width and always produces the same output width.
    """

    stages: tuple[Stage, ...]
    input_dim: int = eqx.field(static=True)
    output_dim: int = eqx.field(static=True)

    def __init__(self, stages: Sequence[Stage]):
        """
        Args:
            stages: Layers and activations in application order. The first
                layer fixes the input width.

        Raises:
            ValueError: If there is no layer, if a layer's input width differs
                from the width produced before it, or a stage is neither a
                Layer nor an ActivationFn.
        """
        stages = tuple(stages)
        input_dim: int | None = None
        width: int | None = None

        for position, stage in enumerate(stages):
            if isinstance(stage, Layer):
                if width is None:
                    input_dim = stage.inputs
                elif stage.inputs != width:
                    raise ValueError(
                        f"Stage {position} ({type(stage).__name__}) expects "
                        f"{stage.inputs} inputs, previous stage produces {width}"
                    )
                width = stage.outputs
            elif not isinstance(stage, ActivationFn):
                raise ValueError(
                    f"Stage {position} ({type(stage).__name__}) is neither a layer "
                    f"nor an activation"
                )

        if input_dim is None or width is None:
            raise ValueError("Network requires at least one layer")

        self.stages = stages
        self.input_dim = input_dim
        self.output_dim = width

    def __call__(self, batch: Matrix) -> Matrix:
        """
        Run a forward pass.

        Args:
            batch: Input batch [SAMPLES, input_dim].

        Returns:
            Output batch [SAMPLES, output_dim].
        """
        if batch.cols != self.input_dim:
            raise ValueError(
                f"Network expects {self.input_dim} input features, got {batch.cols}"
            )
        for stage in self.stages:
            if isinstance(stage, Layer):
                batch = stage.forward(batch)
            else:
                batch = stage.apply(batch)
        return batch

    def layers(self) -> tuple[Layer, ...]:
        return tuple(s for s in self.stages if isinstance(s, Layer))


def build_network(config: NetworkConfig, *, key: jax.Array) -> Network:
    """
    Build a randomly initialised network from a config.

    Args:
        config: Network shape and dtype.
        key: PRNG key, split once per layer.
    """
    scalar = config.scalar
    keys = jax.random.split(key, len(config.layers))
    widths = config.widths()

    stages: list[Stage] = []
    for i, (layer_config, layer_key) in enumerate(zip(config.layers, keys)):
        stages.append(
            Dense.init(widths[i], widths[i + 1], key=layer_key, scalar=scalar)
        )
        if layer_config.activation is not None:
            stages.append(get_activation(layer_config.activation))

    network = Network(stages)
    logger.debug(
        "Built network widths=%s dtype=%s stages=%d",
        widths,
        scalar.name,
        len(stages),
    )
    return network
