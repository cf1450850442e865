"""
EAN Population Module

This module implements the Population class: the fixed-size pool of genomes a
trial draws its tournament contestants from. Genomes are never replaced; the
loser of a tournament is rewritten in place, so every genome keeps its ID (its
slot in the population) for the whole run.

Classes:
    Population: Fixed-size collection of genomes
"""

import numpy as np
from typing import Callable, Iterator, TYPE_CHECKING

from ean.genotype import Genome

if TYPE_CHECKING:
    from ean.run.config import Config

class Population:
    """
    A fixed-size population of genomes.

    Public Attributes:
        genomes: List of all genomes; genome i has ID i

    Public Methods:
        random_pair(rng):               Two distinct genomes, drawn uniformly at random
        get_fittest_genome(comparison): The genome with the best fitness
    """

    def __init__(self, config: 'Config', rng: np.random.Generator):
        """
        Create 'population_size' fully connected genomes.

        Parameters:
            config: Stores configuration parameters
            rng:    Source of randomness for the genomes' activations and weights
        """
        if config.population_size < 2:
            raise ValueError(f"A population needs at least 2 genomes, got {config.population_size}")

        self.genomes: list[Genome] = []
        for genome_id in range(config.population_size):
            genome = Genome(genome_id, config.num_inputs, config.num_init_hidden, config.num_outputs, rng)
            self.genomes.append(genome)

    def random_pair(self, rng: np.random.Generator) -> tuple[Genome, Genome]:
        first, second = rng.choice(len(self.genomes), size=2, replace=False)
        return self.genomes[first], self.genomes[second]

    def get_fittest_genome(self, comparison: Callable[[float, float], bool]) -> Genome:
        """
        Return the genome whose fitness beats (or ties) every other one.

        Parameters:
            comparison: Returns True when its first score beats its second one
        """
        fittest = self.genomes[0]
        for genome in self.genomes[1:]:
            if comparison(genome.fitness, fittest.fitness):
                fittest = genome
        return fittest

    def __len__(self):
        return len(self.genomes)

    def __iter__(self) -> Iterator[Genome]:
        return iter(self.genomes)

    def __str__(self):
        return "\n".join(str(genome) for genome in self.genomes)
