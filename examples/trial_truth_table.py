"""
Truth Table Problem

Evolves networks that reproduce a small truth table, training the weights of
every contestant by backpropagation before it is scored. The learned weights
are written back into the genomes, so offspring start from trained weights.

The Truth Table:
    The first two inputs are the operands, the third one is a constant 1 that
    plays the role of a bias:
        (1, 1, 1) -> 0
        (0, 1, 1) -> 1
        (1, 0, 1) -> 1
        (0, 0, 1) -> 0

    The first two columns form an XOR, so a network without hidden nodes
    cannot represent it.

Score:
    The mean squared error over the training epochs (lower is better).

Usage:
    python examples/trial_truth_table.py [path/to/config.ini]
"""

import sys
import graphviz
import numpy as np
from pathlib import Path

from ean.phenotype import Network
from ean.run       import BackpropEvaluation, Config, Trial, comparison_functions

TRUTH_TABLE_INPUTS  = np.array([[1.0, 1.0, 1.0],
                                [0.0, 1.0, 1.0],
                                [1.0, 0.0, 1.0],
                                [0.0, 0.0, 1.0]])
TRUTH_TABLE_OUTPUTS = np.array([[0.0],
                                [1.0],
                                [1.0],
                                [0.0]])

DEFAULT_CONFIG = Path(__file__).parent / "configs" / "config_truth_table.ini"

def print_truth_table(network: Network):
    outputs = network.feed_forward(TRUTH_TABLE_INPUTS)

    s  = "input            output   target  error\n"
    s += "---------------------------------------\n"
    for inputs, output, target in zip(TRUTH_TABLE_INPUTS, outputs, TRUTH_TABLE_OUTPUTS):
        s += f"{inputs.tolist()} -> {output[0]:.4f}   {target[0]}     {abs(output[0] - target[0]):.4f}\n"
    print(s)

def main(config_file: str | Path = DEFAULT_CONFIG):
    config = Config(str(config_file))

    evaluation = BackpropEvaluation(TRUTH_TABLE_INPUTS,
                                    TRUTH_TABLE_OUTPUTS,
                                    num_epochs    = config.num_epochs,
                                    learning_rate = config.learning_rate,
                                    batch_size    = config.batch_size,
                                    rng           = np.random.default_rng(config.seed))

    trial      = Trial(config, evaluation, comparison_functions[config.comparison])
    best_score = trial.run()

    network = Network.decode(trial.logbook.best, len(TRUTH_TABLE_INPUTS))
    print(f"\nBest score: {best_score:.4f}\n")
    print(network)
    print()
    print_truth_table(network)

    try:
        path = network.visualize().render("truth_table_network", cleanup=True)
        print(f"Network visualization saved as '{path}'")
    except graphviz.ExecutableNotFound as e:
        print(f"Could not visualize network: {e}")

if __name__ == "__main__":
    main(*sys.argv[1:2])
