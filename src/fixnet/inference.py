"""Inference script for fixnet feed-forward networks."""

import argparse
import logging
import sys
from typing import Optional, Sequence

import jax

from fixnet.activations import ReLU, Softmax
from fixnet.layers import Dense
from fixnet.math import Matrix, ScalarType, Vector, scalar_type
from fixnet.network import Network, build_network
from fixnet.types.configs import SIMPLE_DENSE_CONFIG, NetworkConfig

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE = "1.1,2.2,3.3"


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        format_string: Custom format string (uses default if None).
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def example_network(scalar: ScalarType) -> Network:
    """Reference two-layer network: Dense 3->2, ReLU, Dense 2->2, Softmax."""
    layer1 = Dense(
        Matrix([[0.1, -0.2, 1.3], [1.1, -2.0, 0.8]], scalar),
        Vector([1.0, -1.0], scalar),
    )
    layer2 = Dense(
        Matrix([[0.5, 0.1], [2.2, 0.2]], scalar),
        Vector([0.0, 0.0], scalar),
    )
    return Network([layer1, ReLU(), layer2, Softmax()])


def parse_sample(text: str) -> list[float]:
    """Parse a comma-separated row of numbers."""
    try:
        return [float(part) for part in text.split(",") if part.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid sample {text!r}: {e}") from e


def run(network: Network, samples: Sequence[Sequence[float]], scalar: ScalarType) -> Matrix:
    """Stack samples into a batch and run the network on it."""
    batch = Matrix(samples, scalar)
    logger.info("Running batch of shape %s", batch.shape)
    return network(batch)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="fixnet inference")
    parser.add_argument(
        "--sample",
        type=parse_sample,
        action="append",
        help=f"Comma-separated input row; repeat for a batch (default {DEFAULT_SAMPLE})",
    )
    parser.add_argument(
        "--random-init",
        action="store_true",
        help="Use randomly initialised weights instead of the reference example",
    )
    parser.add_argument(
        "--seed", type=int, default=SIMPLE_DENSE_CONFIG.seed, help="PRNG seed"
    )
    parser.add_argument(
        "--dtype",
        type=str,
        default=SIMPLE_DENSE_CONFIG.dtype,
        choices=["float32", "float16", "bfloat16"],
        help="Scalar type",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    samples = args.sample or [parse_sample(DEFAULT_SAMPLE)]
    scalar = scalar_type(args.dtype)

    if args.random_init:
        config = NetworkConfig(
            inputs=SIMPLE_DENSE_CONFIG.inputs,
            layers=SIMPLE_DENSE_CONFIG.layers,
            dtype=args.dtype,
            seed=args.seed,
        )
        print(f"Initializing random network (seed={config.seed})...")
        network = build_network(config, key=jax.random.PRNGKey(config.seed))
    else:
        network = example_network(scalar)

    print(f"Network: {network.input_dim} -> {network.output_dim} ({scalar.name})")
    outputs = run(network, samples, scalar)

    print("=" * 50)
    for row in outputs.tolist():
        print(row)
    print("=" * 50)


if __name__ == "__main__":
    main()
