"""
EAN Node Gene Module.

This module implements the NodeGene class and NodeType enumeration.

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node
"""

from enum import Enum

from ean.activations import activations, activation_codes, ActivationFunction

class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    The values are the tokens used when exporting a genome.
    """
    INPUT  = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"

class NodeGene:
    """
    A gene describing a node in a network.

    A node gene only stores the *name* of its activation function, never the
    function itself; the network decoded from the genome resolves the name
    through the activation registry. This keeps the phenotype reconstructible
    from the genotype alone.

    Public Attributes:
        id:              Unique identifier for this node
        type:            Type of node (INPUT, HIDDEN, or OUTPUT)
        activation_name: Name of the activation function (e.g., 'tanh', 'relu')

    Public Properties:
        activation: The registered (value, derivative) pair for 'activation_name'
    """

    def __init__(self, node_id: int, node_type: NodeType, activation_name: str):
        """
        Initialize a node gene.

        Parameters:
            node_id:         Unique identifier for this node
            node_type:       Type of node (INPUT, HIDDEN, or OUTPUT)
            activation_name: Name of a registered activation function
        """
        self.id             : int      = node_id
        self.type           : NodeType = node_type
        self.activation_name: str      = activation_name

    @property
    def activation(self) -> ActivationFunction:
        return activations[self.activation_name]

    def __repr__(self):
        return (f"NodeGene(node_id={self.id:+03d}, node_type=NodeType.{self.type.name:6s}, "
                f"activation_name='{self.activation_name}')")

    def __str__(self):
        if self.type == NodeType.INPUT:
            return f"[I{self.id}]"
        act_code = activation_codes.get(self.activation_name, "???")
        return f"[{self.type.name[0]}{self.id},{act_code}]"
