"""
Activations Package

This package provides the activation functions used by EAN networks. Each
activation is registered under a name together with its derivative, so that
a network can run both the forward and the backward pass.

Exported:
    ActivationFunction: (name, value, derivative) triple
    activations:        Read-only mapping from activation function names to ActivationFunction
    activation_names:   Tuple of all registered names (fixed order)
    activation_codes:   Read-only mapping from activation function names to 3-letter codes
"""

from ean.activations.basic_activations import (
    ActivationFunction,
    activations,
    activation_names,
    activation_codes,
)

__all__ = [
    'ActivationFunction',
    'activations',
    'activation_names',
    'activation_codes',
]
