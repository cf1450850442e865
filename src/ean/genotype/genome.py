"""
EAN Genome Module

This module implements the Genome class: an evolvable description of a
feed-forward network as a labeled directed acyclic graph of node and edge genes.

Classes:
    Genome: Node and edge genes, plus the structural mutation and crossover operators
"""

import numpy as np
from pathlib import Path
from typing  import Iterator

from ean.activations         import activation_names
from ean.errors              import ShapeError, StructuralError
from ean.genotype.edge_gene  import EdgeGene
from ean.genotype.node_gene  import NodeType, NodeGene

class Genome:
    """
    A genome representing a feed-forward network as a collection of node and edge genes.

    The graph induced by the enabled edges is kept acyclic at all times. This is
    enforced by the mutation operators themselves (every edge insertion runs a
    reachability check before committing) and is never repaired after the fact.
    Disabled edges are kept forever; they take no part in the acyclic graph and
    are ignored when the genome is decoded into a network.

    Node numbering convention:
        - Input nodes:  [0, num_inputs)
        - Output nodes: [num_inputs, num_inputs + num_outputs)
        - Hidden nodes: [num_inputs + num_outputs, ...)

    Node IDs are assigned monotonically (one past the largest ID in the genome)
    and never reused. Because input and output IDs depend on the arity alone,
    they are identical across all genomes with the same number of inputs/outputs.

    Attributes:
        id:          Genome ID (its slot in the population; survives crossover)
        num_inputs:  Number of input nodes
        num_outputs: Number of output nodes
        num_hidden:  Number of hidden nodes
        node_genes:  Dictionary mapping node IDs to NodeGene objects
        edge_genes:  Dictionary mapping (node_in, node_out) pairs to EdgeGene objects
        fitness:     Score assigned by the most recent evaluation
        winner:      Whether the genome won the most recent tournament it took part in

    Public Properties:
        input_nodes:   List of all input node genes
        output_nodes:  List of all output node genes
        hidden_nodes:  List of all hidden node genes
        enabled_edges: List of all enabled edge genes
        next_node_id:  ID the next new node will receive

    Public Methods:
        add_node(rng):                          Split a random enabled edge with a new hidden node
        add_edge(rng):                          Connect two random nodes, unless it creates a cycle
        mutate(add_node_rate, add_edge_rate, rng): Apply both structural mutations stochastically
        crossover(donor):                       Merge the donor's structure into this genome
        has_path(from_id, to_id):               Whether 'to_id' is reachable from 'from_id'
        is_acyclic():                           Whether the enabled edges form a DAG
        to_records():                           Genotype export records
        export(path):                           Write the export records to a file
        to_dict():                              Convert genome to dictionary representation

    Class Methods:
        from_dict(genome_dict): Create a genome from a dictionary description
    """

    def __init__(self,
                 genome_id  : int,
                 num_inputs : int,
                 num_hidden : int,
                 num_outputs: int,
                 rng        : np.random.Generator):
        """
        Initialize a genome with full input -> hidden -> output connectivity.

        Input nodes use the 'identity' activation, output nodes 'sigmoid', and every
        hidden node an activation picked uniformly at random. Each hidden node is
        connected from every input node and to every output node; all weights are
        sampled from the standard normal distribution.

        Parameters:
            genome_id:   Genome ID
            num_inputs:  Number of input nodes
            num_hidden:  Number of initial hidden nodes
            num_outputs: Number of output nodes
            rng:         Source of randomness for activations and weights
        """
        self.id         : int   = genome_id
        self.num_inputs : int   = num_inputs
        self.num_outputs: int   = num_outputs
        self.num_hidden : int   = num_hidden
        self.fitness    : float = 0.0
        self.winner     : bool  = False

        self.node_genes: dict[int, NodeGene]             = {}  # node ID => node gene
        self.edge_genes: dict[tuple[int, int], EdgeGene] = {}  # (node_in, node_out) => edge gene

        for node_id in range(num_inputs):
            self.node_genes[node_id] = NodeGene(node_id, NodeType.INPUT, "identity")

        for node_id in range(num_inputs, num_inputs + num_outputs):
            self.node_genes[node_id] = NodeGene(node_id, NodeType.OUTPUT, "sigmoid")

        first_hidden = num_inputs + num_outputs
        for node_id in range(first_hidden, first_hidden + num_hidden):
            self.node_genes[node_id] = NodeGene(node_id, NodeType.HIDDEN, self._random_activation(rng))
            for input_id in range(num_inputs):
                self._add_edge_gene(input_id, node_id, rng.standard_normal())
            for output_id in range(num_inputs, first_hidden):
                self._add_edge_gene(node_id, output_id, rng.standard_normal())

    @classmethod
    def from_dict(cls, genome_dict: dict) -> 'Genome':
        """
        Create a Genome from a dictionary description.

        Dictionary format:
            {
                "id": 0,                     # Optional, defaults to 0
                "nodes": [
                    {"id": 0, "type": "input"},
                    {"id": 1, "type": "input"},
                    {"id": 2, "type": "output", "activation": "sigmoid"},
                    {"id": 3, "type": "hidden", "activation": "tanh"}
                ],
                "edges": [
                    {"from": 0, "to": 3, "weight":  0.5, "enabled": true},
                    {"from": 1, "to": 3, "weight": -0.3, "enabled": true},
                    {"from": 3, "to": 2, "weight":  1.5, "enabled": true}
                ]
            }

        Input nodes always use the 'identity' activation; output nodes default
        to 'sigmoid' when no activation is given. Hidden nodes must name one.

        Parameters:
            genome_dict: Dictionary describing the genome structure

        Returns:
            A new Genome object with the specified structure

        Raises:
            StructuralError: If the structure is invalid (wrong node numbering, unknown
                             activation, missing endpoint, edge into an input, cycle)
            KeyError:        If required fields are missing from the dictionary
        """
        nodes_data   = genome_dict["nodes"]
        input_nodes  = [n for n in nodes_data if n["type"] == NodeType.INPUT.value]
        output_nodes = [n for n in nodes_data if n["type"] == NodeType.OUTPUT.value]
        hidden_nodes = [n for n in nodes_data if n["type"] == NodeType.HIDDEN.value]
        if len(input_nodes) + len(output_nodes) + len(hidden_nodes) != len(nodes_data):
            raise StructuralError("Node types must be one of 'input', 'output', 'hidden'")

        num_inputs  = len(input_nodes)
        num_outputs = len(output_nodes)
        cls._validate_node_numbering(input_nodes, output_nodes, hidden_nodes, num_inputs, num_outputs)

        genome = cls.__new__(cls)
        genome.id          = genome_dict.get("id", 0)
        genome.num_inputs  = num_inputs
        genome.num_outputs = num_outputs
        genome.num_hidden  = len(hidden_nodes)
        genome.fitness     = 0.0
        genome.winner      = False
        genome.node_genes  = {}
        genome.edge_genes  = {}

        for node_data in sorted(nodes_data, key=lambda n: n["id"]):
            node_type = NodeType(node_data["type"])
            if node_type == NodeType.INPUT:
                actname = "identity"
            elif node_type == NodeType.OUTPUT:
                actname = node_data.get("activation", "sigmoid")
            elif "activation" in node_data:
                actname = node_data["activation"]
            else:
                raise StructuralError(f"No activation function specified for hidden node {node_data['id']}")
            if actname not in activation_names:
                raise StructuralError(f"Unknown activation function '{actname}' for node {node_data['id']}")
            genome.node_genes[node_data["id"]] = NodeGene(node_data["id"], node_type, actname)

        for edge_data in genome_dict.get("edges", []):
            node_in  = edge_data["from"]
            node_out = edge_data["to"]
            enabled  = edge_data.get("enabled", True)

            if node_in not in genome.node_genes:
                raise StructuralError(f"Edge references non-existent source node: {node_in}")
            if node_out not in genome.node_genes:
                raise StructuralError(f"Edge references non-existent destination node: {node_out}")
            if genome.node_genes[node_out].type == NodeType.INPUT:
                raise StructuralError(f"Edge {node_in} => {node_out} ends at an input node")
            if (node_in, node_out) in genome.edge_genes:
                raise StructuralError(f"Duplicate edge {node_in} => {node_out}")
            if enabled and genome.has_path(node_out, node_in):
                raise StructuralError(f"Edge {node_in} => {node_out} would create a cycle")

            genome._add_edge_gene(node_in, node_out, edge_data["weight"], disabled=not enabled)

        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(); disabled edges are kept
        (with "enabled": false) so that the round trip is lossless.
        """
        nodes = []
        for node in sorted(self.node_genes.values(), key=lambda n: n.id):
            node_dict = {"id": node.id, "type": node.type.value}
            if node.type != NodeType.INPUT:
                node_dict["activation"] = node.activation_name
            nodes.append(node_dict)

        edges = []
        for edge in self.edge_genes.values():
            edges.append({
                "from"   : edge.node_in,
                "to"     : edge.node_out,
                "weight" : float(edge.weight),
                "enabled": edge.enabled
            })

        return {"id": self.id, "nodes": nodes, "edges": edges}

    @staticmethod
    def _validate_node_numbering(input_nodes : list,
                                 output_nodes: list,
                                 hidden_nodes: list,
                                 num_inputs  : int,
                                 num_outputs : int) -> None:
        """
        Validate that nodes follow the numbering convention.

        Raises:
            StructuralError: If node numbering doesn't follow the convention
        """
        input_ids = sorted([n["id"] for n in input_nodes])
        expected_input_ids = list(range(num_inputs))
        if input_ids != expected_input_ids:
            raise StructuralError(f"Input nodes must be numbered {expected_input_ids}, got {input_ids}")

        output_ids = sorted([n["id"] for n in output_nodes])
        expected_output_ids = list(range(num_inputs, num_inputs + num_outputs))
        if output_ids != expected_output_ids:
            raise StructuralError(f"Output nodes must be numbered {expected_output_ids}, got {output_ids}")

        hidden_ids = [n["id"] for n in hidden_nodes]
        min_hidden_id = num_inputs + num_outputs
        for hid in hidden_ids:
            if hid < min_hidden_id:
                raise StructuralError(f"Hidden node {hid} has ID below minimum {min_hidden_id}")

        if len(hidden_ids) != len(set(hidden_ids)):
            raise StructuralError("Duplicate node IDs found in node list")

    @property
    def input_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes.values() if node.type == NodeType.INPUT]

    @property
    def output_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes.values() if node.type == NodeType.OUTPUT]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes.values() if node.type == NodeType.HIDDEN]

    @property
    def enabled_edges(self) -> list[EdgeGene]:
        return [edge for edge in self.edge_genes.values() if edge.enabled]

    @property
    def next_node_id(self) -> int:
        return max(self.node_genes, default=-1) + 1

    def _random_activation(self, rng: np.random.Generator) -> str:
        return activation_names[rng.integers(len(activation_names))]

    def _add_edge_gene(self, node_in: int, node_out: int, weight: float, disabled: bool = False) -> EdgeGene:
        edge = EdgeGene(node_in, node_out, float(weight), disabled)
        self.edge_genes[edge.key] = edge
        return edge

    def add_node(self, rng: np.random.Generator) -> int | None:
        """
        Split a random enabled edge by inserting a new hidden node.

        The edge u -> v is disabled and replaced by u -> h -> v, where h is the new
        hidden node. Both new edges get independently sampled standard-normal weights.
        This never creates a cycle: h gets one inbound and one outbound edge that lie
        along a path that already existed in the acyclic graph.

        Parameters:
            rng: Source of randomness

        Returns:
            The ID of the new node, or None if the genome has no enabled edge
            (in which case the genome is left unchanged)
        """
        enabled_edges = self.enabled_edges
        if not enabled_edges:
            return None
        split_edge = enabled_edges[rng.integers(len(enabled_edges))]

        new_node_id = self.next_node_id
        self.node_genes[new_node_id] = NodeGene(new_node_id, NodeType.HIDDEN, self._random_activation(rng))
        self.num_hidden += 1

        split_edge.disabled = True
        self._add_edge_gene(split_edge.node_in, new_node_id, rng.standard_normal())
        self._add_edge_gene(new_node_id, split_edge.node_out, rng.standard_normal())

        return new_node_id

    def add_edge(self, rng: np.random.Generator) -> tuple[int, int] | None:
        """
        Connect two randomly selected nodes with a new edge.

        The two endpoints are sampled independently and uniformly among all nodes.
        The mutation fails (and leaves the genome unchanged) when:
        - the genome already has an edge (enabled or disabled) with that exact direction
        - the destination is an input node
        - the destination already reaches the source over enabled edges,
          so the new edge would close a cycle (this includes self-loops)

        Parameters:
            rng: Source of randomness

        Returns:
            The (node_in, node_out) pair of the new edge, or None if the mutation failed
        """
        node_ids = list(self.node_genes)
        node_in  = node_ids[rng.integers(len(node_ids))]
        node_out = node_ids[rng.integers(len(node_ids))]

        if (node_in, node_out) in self.edge_genes:
            return None
        if self.node_genes[node_out].type == NodeType.INPUT:
            return None
        if self.has_path(node_out, node_in):
            return None

        self._add_edge_gene(node_in, node_out, rng.standard_normal())
        return node_in, node_out

    def mutate(self,
               add_node_rate: float,
               add_edge_rate: float,
               rng          : np.random.Generator) -> tuple[int | None, tuple[int, int] | None]:
        """
        Apply the structural mutations, each with its own probability.

        Parameters:
            add_node_rate: Probability of calling add_node()
            add_edge_rate: Probability of calling add_edge()
            rng:           Source of randomness

        Returns:
            The results of add_node() and add_edge(); None for an operator that
            was skipped or that failed
        """
        new_node = None
        new_edge = None
        if rng.random() < add_node_rate:
            new_node = self.add_node(rng)
        if rng.random() < add_edge_rate:
            new_edge = self.add_edge(rng)
        return new_node, new_edge

    def crossover(self, donor: 'Genome') -> None:
        """
        Merge the structure of 'donor' into this genome, in place.

        Input and output nodes are shared between the two genomes and are not
        copied. Every hidden node of the donor is copied with its ID shifted past
        the IDs already in use here, and every edge of the donor is copied with
        remapped endpoints, keeping its weight and disabled flag.

        An edge that connects two input/output nodes is only copied if this genome
        has no edge between the same pair. Edges routed through hidden nodes always
        refer to fresh node copies, so parallel input->hidden->output paths are kept.

        Merging two acyclic graphs through their shared input/output nodes may
        close a cycle (e.g. out1 -> h -> out2 in one genome and out2 -> h' -> out1
        in the other). An enabled donor edge that would close a cycle in the merged
        graph is therefore copied as disabled, so the result is always acyclic.

        Parameters:
            donor: Genome providing the structure (left unchanged, may be self)

        Raises:
            ShapeError: If the genomes have different numbers of inputs or outputs
                        (neither genome is modified)
        """
        if self.num_inputs != donor.num_inputs or self.num_outputs != donor.num_outputs:
            raise ShapeError(f"Cannot cross over genomes with shapes "
                             f"{self.num_inputs}x{self.num_outputs} and {donor.num_inputs}x{donor.num_outputs}")

        donor_hidden = list(donor.hidden_nodes)
        donor_edges  = list(donor.edge_genes.values())
        donor_count  = donor.num_hidden

        num_boundary = self.num_inputs + self.num_outputs
        offset       = self.next_node_id - num_boundary

        def remap(node_id: int) -> int:
            return node_id if node_id < num_boundary else node_id + offset

        for node in donor_hidden:
            new_id = remap(node.id)
            self.node_genes[new_id] = NodeGene(new_id, NodeType.HIDDEN, node.activation_name)

        for edge in donor_edges:
            node_in  = remap(edge.node_in)
            node_out = remap(edge.node_out)
            # Only boundary-to-boundary pairs can collide with an existing edge
            if (node_in, node_out) in self.edge_genes:
                continue
            disabled = edge.disabled or self.has_path(node_out, node_in)
            self._add_edge_gene(node_in, node_out, edge.weight, disabled)

        self.num_hidden += donor_count

    def has_path(self, from_id: int, to_id: int) -> bool:
        """
        Check whether 'to_id' can be reached from 'from_id' following enabled edges.
        Iterative depth-first search; a node always reaches itself.

        Parameters:
            from_id: ID of the node the search starts at
            to_id:   ID of the node being looked for

        Returns:
            whether a directed path from 'from_id' to 'to_id' exists
        """
        if from_id == to_id:
            return True

        successors: dict[int, list[int]] = {}
        for edge in self.edge_genes.values():
            if edge.enabled:
                successors.setdefault(edge.node_in, []).append(edge.node_out)

        visited = set()
        stack   = [from_id]
        while stack:
            current = stack.pop()
            if current == to_id:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(successors.get(current, []))

        return False

    def is_acyclic(self) -> bool:
        """
        Check whether the graph induced by the enabled edges is acyclic (Kahn's algorithm).
        """
        in_degree  = {node_id: 0 for node_id in self.node_genes}
        successors = {node_id: [] for node_id in self.node_genes}
        for edge in self.enabled_edges:
            in_degree[edge.node_out] += 1
            successors[edge.node_in].append(edge.node_out)

        queue   = [node_id for node_id, degree in in_degree.items() if degree == 0]
        visited = 0
        while queue:
            node_id = queue.pop()
            visited += 1
            for succ_id in successors[node_id]:
                in_degree[succ_id] -= 1
                if in_degree[succ_id] == 0:
                    queue.append(succ_id)

        return visited == len(self.node_genes)

    def to_records(self) -> Iterator[str]:
        """
        Generate the export records of this genome.

        One record per node gene, 'n <id> <kind> <activation>', followed
        by one record per edge gene, 'e <node_in> <node_out> <weight>'.
        """
        for node in self.node_genes.values():
            yield f"n {node.id} {node.type.value} {node.activation_name}"
        for edge in self.edge_genes.values():
            yield f"e {edge.node_in} {edge.node_out} {edge.weight:f}"

    def export(self, path: str | Path) -> Path:
        """
        Write the export records of this genome to a text file, one per line.

        Parameters:
            path: Destination file (parent directories are created if needed)

        Returns:
            The path of the written file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(record + "\n" for record in self.to_records()))
        return path

    def __repr__(self):
        return (f"Genome(id={self.id}, num_inputs={self.num_inputs}, num_hidden={self.num_hidden}, "
                f"num_outputs={self.num_outputs}, num_edges={len(self.edge_genes)})")

    def __str__(self):
        node_genes_str  = ''.join(str(node) for node in self.input_nodes)
        node_genes_str += ''.join(str(node) for node in self.hidden_nodes)
        node_genes_str += ''.join(str(node) for node in self.output_nodes)
        edge_genes_str  = ''.join(str(edge) for edge in self.edge_genes.values())
        return f"Genome {self.id}\nNodes: {node_genes_str}\nEdges: {edge_genes_str}"
