"""
fixnet: fixed-shape tensors and dense layers for feed-forward inference.

Combines:
- Scalar-parameterized Vector and Matrix containers with ordered accumulation
- Dense layers and ReLU/Softmax activations composed into a Network
"""

__version__ = "0.1.0"
