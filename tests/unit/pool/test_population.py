"""
Unit tests for ean.pool.population module.
"""

import pytest
import numpy as np
from unittest.mock import Mock

from ean.run.config     import Config
from ean.run.comparison import direct_comparison, inverse_comparison
from ean.pool.population import Population


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def mock_config():
    """Create a mock Config object with the population parameters."""
    config = Mock(spec=Config)
    config.population_size = 6
    config.num_inputs      = 2
    config.num_outputs     = 1
    config.num_init_hidden = 3
    return config


@pytest.fixture
def population(mock_config, rng):
    return Population(mock_config, rng)


# ============================================================================
# Test Population Initialization
# ============================================================================

class TestPopulationInit:
    """Test creation of the initial population."""

    def test_size(self, population):
        assert len(population) == 6
        assert len(population.genomes) == 6

    def test_ids_are_slots(self, population):
        """Test genome i has ID i."""
        assert [genome.id for genome in population] == list(range(6))

    def test_genome_shape(self, population):
        """Test every genome is fully connected through its hidden nodes."""
        for genome in population:
            assert genome.num_inputs  == 2
            assert genome.num_outputs == 1
            assert genome.num_hidden  == 3
            assert len(genome.edge_genes) == 2 * 3 + 3 * 1

    def test_genomes_differ(self, population):
        """Test genomes get their own random weights."""
        weights = [tuple(edge.weight for edge in genome.edge_genes.values()) for genome in population]
        assert len(set(weights)) == len(weights)

    def test_reproducible(self, mock_config):
        first  = Population(mock_config, np.random.default_rng(3))
        second = Population(mock_config, np.random.default_rng(3))
        assert [g.to_dict() for g in first] == [g.to_dict() for g in second]

    @pytest.mark.parametrize("size", [0, 1])
    def test_too_small(self, mock_config, rng, size):
        """Test a tournament needs at least two genomes."""
        mock_config.population_size = size
        with pytest.raises(ValueError, match="at least 2"):
            Population(mock_config, rng)


# ============================================================================
# Test Population Queries
# ============================================================================

class TestPopulationQueries:
    """Test drawing tournament contestants and finding the fittest genome."""

    def test_random_pair_distinct(self, population, rng):
        for _ in range(50):
            genome1, genome2 = population.random_pair(rng)
            assert genome1 is not genome2
            assert genome1 in population.genomes
            assert genome2 in population.genomes

    def test_random_pair_smallest_population(self, mock_config, rng):
        mock_config.population_size = 2
        population = Population(mock_config, rng)
        genome1, genome2 = population.random_pair(rng)
        assert {genome1.id, genome2.id} == {0, 1}

    def test_random_pair_covers_population(self, population, rng):
        drawn = set()
        for _ in range(100):
            drawn.update(genome.id for genome in population.random_pair(rng))
        assert drawn == set(range(6))

    def test_get_fittest_genome(self, population):
        for genome, fitness in zip(population, [0.4, 0.1, 0.9, 0.3, 0.7, 0.2]):
            genome.fitness = fitness
        assert population.get_fittest_genome(direct_comparison).id == 2
        assert population.get_fittest_genome(inverse_comparison).id == 1

    def test_get_fittest_genome_tie(self, population):
        """Test the first of several equally fit genomes is returned."""
        for genome in population:
            genome.fitness = 0.5
        assert population.get_fittest_genome(direct_comparison).id == 0

    def test_str(self, population):
        text = str(population)
        for genome in population:
            assert str(genome) in text
