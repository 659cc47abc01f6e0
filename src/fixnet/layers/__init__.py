"""Equinox layer modules for feed-forward inference."""

from fixnet.layers.base import Layer
from fixnet.layers.dense import Dense

__all__ = [
    "Layer",
    "Dense",
]
