"""
EAN: evolving differentiable pattern-producing networks.

Genomes describe feed-forward networks as directed acyclic graphs that grow by
structural mutation and crossover; networks decoded from them are trained by
backpropagation and write their learned weights back into the genome.
"""

__version__ = "0.1.0"

from ean.errors    import IdentityMismatchError, ShapeError, StructuralError
from ean.genotype  import EdgeGene, Genome, NodeGene, NodeType
from ean.phenotype import Network, Node

__all__ = ['EdgeGene',
           'Genome',
           'IdentityMismatchError',
           'Network',
           'Node',
           'NodeGene',
           'NodeType',
           'ShapeError',
           'StructuralError']
