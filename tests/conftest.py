"""Pytest configuration and fixtures."""

import pytest
import jax


@pytest.fixture
def key():
    """Provide a PRNG key for tests."""
    return jax.random.PRNGKey(42)


@pytest.fixture
def simple_config():
    """Provide the reference network config for testing."""
    from fixnet.types.configs import SIMPLE_DENSE_CONFIG
    return SIMPLE_DENSE_CONFIG
