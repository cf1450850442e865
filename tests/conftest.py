"""Pytest configuration and shared fixtures."""

import pytest
import sys
import numpy as np
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def rng():
    """A seeded random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def genome_2_3_1(rng):
    """Fully connected genome: 2 inputs, 3 hidden nodes, 1 output."""
    from ean.genotype import Genome
    return Genome(0, 2, 3, 1, rng)


@pytest.fixture
def small_genome_dict():
    """A small hand-written genome: 2 inputs, 1 output, 1 hidden node."""
    return {
        'id': 7,
        'nodes': [
            {'id': 0, 'type': 'input'},
            {'id': 1, 'type': 'input'},
            {'id': 2, 'type': 'output', 'activation': 'sigmoid'},
            {'id': 3, 'type': 'hidden', 'activation': 'tanh'},
        ],
        'edges': [
            {'from': 0, 'to': 3, 'weight':  1.5, 'enabled': True},
            {'from': 1, 'to': 3, 'weight': -1.2, 'enabled': True},
            {'from': 3, 'to': 2, 'weight':  2.0, 'enabled': True},
            {'from': 0, 'to': 2, 'weight':  0.5, 'enabled': False},
        ]
    }
