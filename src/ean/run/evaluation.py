"""
EAN Evaluation Module

An evaluation function maps a genome to a score. The one provided here trains
the network decoded from the genome by backpropagation and scores it by the
error it reached, writing the learned weights back into the genome.

Classes:
    BackpropEvaluation: Score a genome by training it on a fixed data set
"""

import numpy as np
from statistics import mean
from typing     import Callable, TYPE_CHECKING

from ean.phenotype import Network

if TYPE_CHECKING:
    from ean.genotype import Genome

EvaluationFunction = Callable[['Genome'], float]

class BackpropEvaluation:
    """
    Evaluate a genome by training its network on a data set.

    Each call decodes the genome, runs 'num_epochs' steps of backpropagation
    and encodes the learned weights back into the genome (so they are inherited
    by its offspring). The score is the mean of the errors reported by all the
    epochs; lower is better, so it goes with the "inverse" comparison.

    When 'batch_size' is smaller than the number of samples, every epoch
    trains on a different batch, drawn at random without replacement.
    """

    def __init__(self,
                 inputs,
                 targets,
                 num_epochs   : int,
                 learning_rate: float,
                 batch_size   : int | None = None,
                 rng          : np.random.Generator | None = None):
        """
        Parameters:
            inputs:        Training inputs, shape (num_samples, num_inputs)
            targets:       Training targets, shape (num_samples, num_outputs)
            num_epochs:    Number of backpropagation steps per evaluation
            learning_rate: Step size of the weight update
            batch_size:    Rows per training batch (defaults to all samples)
            rng:           Draws the training batches (only used when batching)
        """
        self.inputs  = np.asarray(inputs , dtype=np.float64)
        self.targets = np.asarray(targets, dtype=np.float64)
        if self.inputs.ndim != 2 or self.targets.ndim != 2 or len(self.inputs) != len(self.targets):
            raise ValueError(f"Inputs {self.inputs.shape} and targets {self.targets.shape} "
                             f"must be 2-D with the same number of rows")

        num_samples = len(self.inputs)
        if batch_size is None:
            batch_size = num_samples
        if not 1 <= batch_size <= num_samples:
            raise ValueError(f"Batch size must be in [1, {num_samples}], got {batch_size}")

        self.num_epochs    = num_epochs
        self.learning_rate = learning_rate
        self.batch_size    = batch_size
        self._rng          = rng if rng is not None else np.random.default_rng()

    def _next_batch(self) -> tuple[np.ndarray, np.ndarray]:
        if self.batch_size == len(self.inputs):
            return self.inputs, self.targets
        rows = self._rng.choice(len(self.inputs), size=self.batch_size, replace=False)
        return self.inputs[rows], self.targets[rows]

    def __call__(self, genome: 'Genome') -> float:
        network = Network.decode(genome, self.batch_size)

        errors = []
        for _ in range(self.num_epochs):
            inputs, targets = self._next_batch()
            errors.append(network.backprop(inputs, targets, self.learning_rate))

        network.encode(genome)
        return mean(errors) if errors else 0.0
