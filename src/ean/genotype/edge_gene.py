"""
EAN Edge Gene Module

This module implements the EdgeGene class.

Classes:
    EdgeGene: Gene encoding a weighted, directed edge between two nodes
"""

class EdgeGene:
    """
    A gene describing a weighted edge between two nodes in a network.

    Each edge gene represents a directed edge in the network graph, connecting
    a source node to a destination node with an associated weight. An edge is
    identified by its (node_in, node_out) pair: a genome holds at most one
    edge gene per ordered pair.

    Edges are never deleted. When a node is inserted in the middle of an edge,
    the edge is disabled instead: it stays in the genome as a historical
    record, but it is ignored when checking for cycles and when decoding.

    Public Attributes:
        node_in:  ID of the source node
        node_out: ID of the destination node
        weight:   Weight of the edge
        disabled: Whether this edge has been removed from the active topology

    Public Properties:
        enabled: The negation of 'disabled'
        key:     The (node_in, node_out) pair identifying the edge
    """

    def __init__(self, node_in: int, node_out: int, weight: float, disabled: bool = False):
        """
        Initialize an edge gene.

        Parameters:
            node_in:  ID of the source node
            node_out: ID of the destination node
            weight:   Weight of the edge
            disabled: Whether this edge is excluded from the network
        """
        self.node_in : int   = node_in
        self.node_out: int   = node_out
        self.weight  : float = weight
        self.disabled: bool  = disabled

    @property
    def enabled(self) -> bool:
        return not self.disabled

    @property
    def key(self) -> tuple[int, int]:
        return self.node_in, self.node_out

    def __repr__(self):
        return (f"EdgeGene(node_in={self.node_in:03d}, node_out={self.node_out:03d}, "
                f"weight={self.weight:+.6f}, disabled={self.disabled})")

    def __str__(self):
        return f"[{'D' if self.disabled else 'E'},{self.node_in:02d}=>{self.node_out:02d},{self.weight:+.02f}]"
