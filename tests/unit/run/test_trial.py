"""
Unit tests for Trial class.
"""

import pytest
from unittest.mock import Mock

from ean.run.config     import Config
from ean.run.comparison import direct_comparison, inverse_comparison
from ean.run.trial      import Trial


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    """A small configuration for quick trials."""
    config = Config()
    config.seed            = 0
    config.population_size = 4
    config.num_inputs      = 2
    config.num_outputs     = 1
    config.num_init_hidden = 2
    config.num_tournaments = 10
    return config


def score_by_id(genome):
    return float(genome.id)


def score_by_size(genome):
    return float(len(genome.node_genes) + len(genome.edge_genes))


# ============================================================================
# Test Trial Run
# ============================================================================

class TestTrialRun:
    """Test a complete run of the tournament loop."""

    def test_one_record_per_tournament(self, config):
        trial = Trial(config, score_by_size, inverse_comparison, suppress_output=True)
        trial.run()
        assert len(trial.logbook) == config.num_tournaments
        assert len(trial.population) == config.population_size

    def test_best_score(self, config):
        """Test the best score is the best fitness of any tournament winner."""
        trial = Trial(config, score_by_id, inverse_comparison, suppress_output=True)
        best_score = trial.run()
        assert best_score == trial.best_score == trial.logbook.best_score
        assert best_score == min(genome.fitness for genome in trial.population if genome.winner)

    def test_best_genome_is_snapshot(self, config):
        """Test the log book keeps a copy of the best genome, not the genome itself."""
        trial = Trial(config, score_by_id, direct_comparison, suppress_output=True)
        trial.run()
        best = trial.logbook.best
        assert best is not None
        assert all(best is not genome for genome in trial.population)
        assert best.fitness == trial.best_score

    def test_reproducible(self, config):
        """Test the seed fixes the whole run."""
        first  = Trial(config, score_by_size, inverse_comparison, suppress_output=True)
        second = Trial(config, score_by_size, inverse_comparison, suppress_output=True)
        assert first.run() == second.run()
        assert first.logbook.entries == second.logbook.entries
        assert [g.to_dict() for g in first.population] == [g.to_dict() for g in second.population]

    def test_rerun_starts_fresh(self, config):
        trial = Trial(config, score_by_size, inverse_comparison, suppress_output=True)
        trial.run()
        entries = list(trial.logbook.entries)
        trial.run()
        assert trial.logbook.entries == entries

    def test_export_log(self, config, tmp_path):
        trial = Trial(config, score_by_size, inverse_comparison, suppress_output=True)
        trial.run(log_path=tmp_path / "trial.log")
        lines = (tmp_path / "trial.log").read_text().splitlines()
        assert lines[:config.num_tournaments] == trial.logbook.entries
        assert lines[config.num_tournaments] == "Best Genome:"

    def test_suppress_output(self, config, capsys):
        Trial(config, score_by_size, inverse_comparison, suppress_output=True).run()
        assert capsys.readouterr().out == ""

    def test_progress_output(self, config, capsys):
        Trial(config, score_by_size, inverse_comparison).run()
        out = capsys.readouterr().out
        assert out.count("Tournament [") == config.num_tournaments
        assert "Best score:" in out

    def test_no_tournaments(self, config, capsys):
        """Test a run without tournaments reports that there is no best genome."""
        config.num_tournaments = 0
        evaluation = Mock(return_value=1.0)
        trial = Trial(config, evaluation, inverse_comparison)

        assert trial.run() is None
        assert len(trial.logbook) == 0
        assert trial.logbook.best is None
        evaluation.assert_not_called()
        out = capsys.readouterr().out
        assert "Best score: None" in out


# ============================================================================
# Test Tournaments
# ============================================================================

class TestTournament:
    """Test what a single tournament does to its two genomes."""

    @pytest.fixture
    def duel_config(self, config):
        """Two genomes, so every tournament is between the same pair."""
        config.population_size = 2
        config.crossover_rate  = 0.0
        config.add_node_rate   = 0.0
        config.add_edge_rate   = 0.0
        return config

    def test_winner_not_reevaluated(self, duel_config):
        """Test only the loser is scored again after the first tournament."""
        duel_config.num_tournaments = 3
        evaluation = Mock(return_value=1.0)
        Trial(duel_config, evaluation, inverse_comparison, suppress_output=True).run()
        assert evaluation.call_count == 2 + 2

    def test_winner_flags(self, duel_config):
        duel_config.num_tournaments = 1
        trial = Trial(duel_config, score_by_id, inverse_comparison, suppress_output=True)
        trial.run()
        genome0, genome1 = trial.population.genomes
        assert genome0.winner is True
        assert genome1.winner is False

    def test_loser_mutated(self, duel_config):
        """Test the loser gets the structural mutation, the winner is untouched."""
        duel_config.num_tournaments = 1
        duel_config.add_node_rate   = 1.0
        trial = Trial(duel_config, score_by_id, inverse_comparison, suppress_output=True)
        trial.run()
        winner, loser = trial.population.genomes
        assert winner.num_hidden == 2
        assert loser.num_hidden  == 3
        assert trial.logbook.best.num_hidden == 2

    def test_loser_crossed_over(self, duel_config):
        """Test the loser absorbs the hidden nodes of the winner."""
        duel_config.num_tournaments = 1
        duel_config.crossover_rate  = 1.0
        trial = Trial(duel_config, score_by_id, direct_comparison, suppress_output=True)
        trial.run()
        loser, winner = trial.population.genomes
        assert winner.num_hidden == 2
        assert loser.num_hidden  == 4
        assert loser.is_acyclic()
