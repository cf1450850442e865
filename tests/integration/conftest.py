"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np
from pathlib import Path

from ean.run.config import Config


@pytest.fixture
def truth_table_inputs():
    """Truth table inputs; the third column is a constant bias input."""
    return np.array([[1.0, 1.0, 1.0],
                     [0.0, 1.0, 1.0],
                     [1.0, 0.0, 1.0],
                     [0.0, 0.0, 1.0]])


@pytest.fixture
def truth_table_outputs():
    return np.array([[0.0], [1.0], [1.0], [0.0]])


@pytest.fixture
def truth_table_config():
    """The example configuration, shortened for testing."""
    config_file = Path(__file__).parent.parent.parent / "examples" / "configs" / "config_truth_table.ini"
    config = Config(str(config_file))
    config.population_size = 8
    config.num_tournaments = 40
    config.num_epochs      = 20
    return config
