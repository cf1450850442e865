"""
EAN Genotype Package

This package implements the genotype representation: an evolvable description
of a feed-forward network topology together with its initial weights.

The genotype consists of two types of genes:
- Node genes: Encode individual nodes (type and activation function name)
- Edge genes: Encode weighted, directed edges between nodes

Modules:
    node_gene: NodeType enumeration and NodeGene class
    edge_gene: EdgeGene class
    genome:    Genome class

Exported Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node
    EdgeGene: Gene encoding a weighted edge between nodes
    Genome:   Complete genome with structural mutation and crossover operators
"""

from ean.genotype.edge_gene import EdgeGene
from ean.genotype.genome    import Genome
from ean.genotype.node_gene import NodeType, NodeGene

__all__ = ['EdgeGene',
           'Genome',
           'NodeGene',
           'NodeType']
