"""
EAN Phenotype Package

This package implements the phenotype: the executable form of a genome. A network
is decoded from a genome for a single evaluation, processes batches of inputs,
learns its weights by backpropagation and writes them back into the genome.

Modules:
    network: Node and Network classes

Exported Classes:
    Node:    A computational node applying its activation function to a batch
    Network: Feedforward network decoded from a genome
"""

from ean.phenotype.network import Node, Network

__all__ = ['Node',
           'Network']
