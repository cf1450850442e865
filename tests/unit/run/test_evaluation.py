"""
Unit tests for BackpropEvaluation.
"""

import pytest
import numpy as np

from ean.genotype import Genome
from ean.phenotype import Network
from ean.run.evaluation import BackpropEvaluation


@pytest.fixture
def xor_data():
    inputs  = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    targets = np.array([[0.0], [1.0], [1.0], [0.0]])
    return inputs, targets


class TestBackpropEvaluation:
    """Test scoring genomes by training them."""

    def test_score_is_mean_epoch_error(self, genome_2_3_1, xor_data):
        """Test the score averages the errors reported by each epoch."""
        inputs, targets = xor_data
        twin = Genome.from_dict(genome_2_3_1.to_dict())

        score = BackpropEvaluation(inputs, targets, num_epochs=20, learning_rate=0.3)(genome_2_3_1)

        network = Network.decode(twin, 4)
        errors  = [network.backprop(inputs, targets, 0.3) for _ in range(20)]
        assert score == pytest.approx(np.mean(errors))

    def test_weights_written_back(self, genome_2_3_1, xor_data):
        """Test the learned weights are encoded into the genome."""
        before = {key: edge.weight for key, edge in genome_2_3_1.edge_genes.items()}
        BackpropEvaluation(*xor_data, num_epochs=5, learning_rate=0.5)(genome_2_3_1)
        after = {key: edge.weight for key, edge in genome_2_3_1.edge_genes.items()}
        assert after.keys() == before.keys()
        assert after != before

    def test_structure_untouched(self, genome_2_3_1, xor_data):
        """Test evaluation never changes the structure of the genome."""
        nodes = set(genome_2_3_1.node_genes)
        edges = set(genome_2_3_1.edge_genes)
        BackpropEvaluation(*xor_data, num_epochs=3, learning_rate=0.5)(genome_2_3_1)
        assert set(genome_2_3_1.node_genes) == nodes
        assert set(genome_2_3_1.edge_genes) == edges

    def test_zero_epochs(self, genome_2_3_1, xor_data):
        """Test no training gives a zero score and unchanged weights."""
        before = genome_2_3_1.to_dict()
        assert BackpropEvaluation(*xor_data, num_epochs=0, learning_rate=0.5)(genome_2_3_1) == 0.0
        assert genome_2_3_1.to_dict() == before

    def test_mini_batches(self, genome_2_3_1, xor_data):
        """Test training on random mini-batches drawn from the data."""
        evaluation = BackpropEvaluation(*xor_data, num_epochs=10, learning_rate=0.5,
                                        batch_size=2, rng=np.random.default_rng(0))
        score = evaluation(genome_2_3_1)
        assert np.isfinite(score) and score >= 0.0

    def test_mini_batches_reproducible(self, xor_data):
        """Test identically seeded evaluations give identical scores."""
        scores = []
        for _ in range(2):
            genome = Genome(0, 2, 3, 1, np.random.default_rng(1))
            evaluation = BackpropEvaluation(*xor_data, num_epochs=10, learning_rate=0.5,
                                            batch_size=3, rng=np.random.default_rng(2))
            scores.append(evaluation(genome))
        assert scores[0] == scores[1]

    def test_invalid_batch_size(self, xor_data):
        """Test the batch size must fit the data."""
        with pytest.raises(ValueError):
            BackpropEvaluation(*xor_data, num_epochs=1, learning_rate=0.1, batch_size=5)
        with pytest.raises(ValueError):
            BackpropEvaluation(*xor_data, num_epochs=1, learning_rate=0.1, batch_size=0)

    def test_mismatched_data(self):
        """Test inputs and targets must have the same number of rows."""
        with pytest.raises(ValueError):
            BackpropEvaluation(np.zeros((4, 2)), np.zeros((3, 1)), num_epochs=1, learning_rate=0.1)
