"""
EAN Errors Module

Exceptions raised by the genotype and phenotype layers when a structural
contract is violated. None of them describe transient conditions: nothing
raising them is ever retried internally.

All of them derive from ValueError, so callers that only care about "bad
argument" can keep catching ValueError.

Classes:
    ShapeError:            batch width/height or genome arity disagrees with what is expected
    StructuralError:       a genome does not describe a valid feed-forward graph
    IdentityMismatchError: a network tried to write its weights into a foreign genome
"""

class ShapeError(ValueError):
    """
    A batch (or a pair of genomes) has the wrong shape.

    Raised when the width of an input/target batch differs from the number of
    input/output nodes of a network, when its number of rows differs from the
    batch size the network was decoded with, and when two genomes with
    different numbers of inputs/outputs are crossed over.
    """

class StructuralError(ValueError):
    """
    A genome does not describe a valid network.

    Raised when decoding a genome that references a node ID it does not contain,
    whose enabled edges form a cycle, or when building a genome from an invalid
    description. Fatal for that genome only.
    """

class IdentityMismatchError(ValueError):
    """
    Raised when a network encodes its weights into a genome other than the one it was decoded from.
    """
