"""
EAN Trial Module

This module defines the Trial class, which runs the microbial genetic algorithm:
a steady-state loop of tournaments between two genomes of a fixed population.

A trial represents one independent run of the algorithm, from a freshly created
population to the last tournament.
"""

import copy
import numpy as np
from typing import Callable, TYPE_CHECKING

from ean.pool        import Population
from ean.run.config  import Config
from ean.run.logbook import LogBook

if TYPE_CHECKING:
    from ean.genotype import Genome

class Trial:
    """
    One run of the microbial genetic algorithm.

    Every tournament:
    - draws two distinct genomes from the population
    - evaluates each of them, unless it won its previous tournament (a winner
      is left untouched, so its score is still valid)
    - lets the comparison function pick the winner
    - with probability 'crossover_rate', crosses the loser over with the winner
      (the loser absorbs the winner's structure)
    - mutates the loser

    Public Attributes:
        population: The population of the most recent run (None before the first run)
        logbook:    The log book of the most recent run (None before the first run)
        best_score: The best score seen in the most recent run

    Public Methods:
        run(log_path): Execute a complete trial and return the best score
    """

    def __init__(self,
                 config         : Config,
                 evaluation     : Callable[['Genome'], float],
                 comparison     : Callable[[float, float], bool],
                 suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            evaluation:      Maps a genome to its score
            comparison:      Returns True when its first score beats its second one
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials)
        """
        self._config         : Config = config
        self._evaluation              = evaluation
        self._comparison              = comparison
        self._suppress_output: bool   = suppress_output

        self.population: Population | None = None
        self.logbook   : LogBook    | None = None
        self.best_score: float      | None = None

    def run(self, log_path: str | None = None) -> float:
        """
        Run the trial.

        Creates a new population (seeded from the configuration) and
        runs 'num_tournaments' tournaments.

        Parameters:
            log_path: If given, the log book is exported to this file at the end

        Returns:
            The best score seen during the run (None if no tournament was played)
        """
        rng = np.random.default_rng(self._config.seed)

        self.population = Population(self._config, rng)
        self.logbook    = LogBook()
        self.best_score = None

        for tournament in range(self._config.num_tournaments):
            genome1, genome2 = self.population.random_pair(rng)
            self._play(genome1, genome2, rng)

            self.logbook.record(genome1.id, genome2.id, genome1.fitness, genome2.fitness, self.best_score)
            if not self._suppress_output:
                self._report_progress(tournament, genome1, genome2)

        if log_path is not None:
            self.logbook.export(log_path)

        if not self._suppress_output:
            self._final_report()

        return self.best_score

    def _play(self, genome1: 'Genome', genome2: 'Genome', rng: np.random.Generator) -> None:
        """
        Play a single tournament between two genomes.
        """
        if not genome1.winner:
            genome1.fitness = self._evaluation(genome1)
        if not genome2.winner:
            genome2.fitness = self._evaluation(genome2)

        if self._comparison(genome1.fitness, genome2.fitness):
            winner, loser = genome1, genome2
        else:
            winner, loser = genome2, genome1

        winner.winner = True
        loser.winner  = False

        if self.best_score is None or self._comparison(winner.fitness, self.best_score):
            self.best_score = winner.fitness
            self.logbook.best       = copy.deepcopy(winner)
            self.logbook.best_score = winner.fitness

        if rng.random() < self._config.crossover_rate:
            loser.crossover(winner)
        loser.mutate(self._config.add_node_rate, self._config.add_edge_rate, rng)

    def _report_progress(self, tournament: int, genome1: 'Genome', genome2: 'Genome'):
        print(f"Tournament [{tournament:4d}] | {genome1.id:3d} and {genome2.id:3d} | "
              f"best score: {self.best_score:f}")

    def _final_report(self):
        best_score = "None" if self.best_score is None else f"{self.best_score:f}"
        print(f"\nBest score: {best_score}")
        print(self.logbook.best)
