"""
EAN Network Module

This module implements the phenotype: the executable, trainable network decoded
from a genome (a Differentiable Pattern Producing Network). A network lives for
a single evaluation. It is decoded from a genome, runs batched forward and
backward passes that update its weights in place, and finally writes the learned
weights back into the genome it came from.

Classes:
    Node:    A computational node holding its edges and per-batch buffers
    Network: A feedforward network decoded from a genome
"""

import graphviz  # type: ignore
import numpy as np
from collections import deque
from typing      import TYPE_CHECKING

from ean.activations        import ActivationFunction
from ean.errors             import IdentityMismatchError, ShapeError, StructuralError
from ean.genotype.node_gene import NodeType, NodeGene

if TYPE_CHECKING:
    from ean.genotype import Genome

class Node:
    """
    A computational node in a network.

    The activation function is resolved from the registry once, when the node is
    created. The inbound and outbound edges of the network are stored on its nodes
    twice, once on each endpoint; both views are always updated together (see
    Network._set_weight).

    Public Attributes:
        id:         ID of the node gene this node was decoded from
        type:       Node type (INPUT, HIDDEN, or OUTPUT)
        activation: (value, derivative) pair of the node
        inputs:     Producer node ID => weight of the edge producer -> self
        outputs:    Consumer node ID => weight of the edge self -> consumer
        signal:     Output of the node, one entry per batch row
        delta:      Error term of the node (see Network.backprop), one entry per batch row
    """

    def __init__(self, gene: NodeGene, batch_size: int):
        """
        Parameters:
            gene:       the gene encoding the node
            batch_size: length of the signal/delta buffers
        """
        self.id        : int                = gene.id
        self.type      : NodeType           = gene.type
        self.activation: ActivationFunction = gene.activation

        self.inputs : dict[int, float] = {}
        self.outputs: dict[int, float] = {}

        self.signal: np.ndarray = np.zeros(batch_size)
        self.delta : np.ndarray = np.zeros(batch_size)

    def __repr__(self):
        return f"Node(id={self.id}, type={self.type.name}, activation={self.activation.name})"

    def __str__(self):
        inputs_str = ''.join(f" [{node_id:3d}]({weight:+.4f})" for node_id, weight in self.inputs.items())
        return f"[{self.id:3d}] {self.activation.name:>8s} <- {{{inputs_str} }}"

class Network:
    """
    A feedforward network decoded from a genome, trainable by backpropagation.

    Decoding creates one node per node gene and wires one edge per *enabled* edge
    gene. A topological order of the nodes is computed once, at decode time; the
    forward pass follows it and the backward pass follows it in reverse, so that
    each node's signal and delta is computed exactly once per pass.

    Input nodes receive their batch column verbatim (no activation is applied).
    A node without inbound edges keeps whatever its buffer holds. Every other node
    computes: signal = activation(sum of weight * producer signal).

    Public Attributes:
        genome_id:   ID of the genome the network was decoded from
        num_inputs:  Number of input nodes
        num_outputs: Number of output nodes
        batch_size:  Number of rows in every batch processed by the network
        nodes:       Dictionary mapping node IDs to Node objects

    Public Properties:
        num_nodes:         Total number of nodes in the network
        num_edges:         Total number of (enabled) edges in the network
        topological_order: Node IDs, each one after all of its producers

    Public Methods:
        feed_forward(inputs):                       Run the forward pass over a batch
        backprop(inputs, targets, learning_rate):   Run one gradient descent step over a batch
        encode(genome):                             Write the learned weights back into the genome
        visualize(view):                            Draw the network using Graphviz

    Class Methods:
        decode(genome, batch_size): Alias of the constructor
    """

    def __init__(self, genome: 'Genome', batch_size: int):
        """
        Decode a genome into a network.

        Parameters:
            genome:     The genome encoding the network structure and weights
            batch_size: Number of rows of the batches the network will process

        Raises:
            ShapeError:      If batch_size is not positive
            StructuralError: If an edge gene references a node absent from the genome,
                             if an input/output node is missing, or if the enabled
                             edges form a cycle
        """
        if batch_size < 1:
            raise ShapeError(f"Batch size must be positive, got {batch_size}")

        self.genome_id  : int = genome.id
        self.num_inputs : int = genome.num_inputs
        self.num_outputs: int = genome.num_outputs
        self.batch_size : int = batch_size

        self.nodes: dict[int, Node] = {}
        for gene in sorted(genome.node_genes.values(), key=lambda g: g.id):
            self.nodes[gene.id] = Node(gene, batch_size)

        self._input_ids  = list(range(self.num_inputs))
        self._output_ids = list(range(self.num_inputs, self.num_inputs + self.num_outputs))
        missing = [node_id for node_id in self._input_ids + self._output_ids if node_id not in self.nodes]
        if missing:
            raise StructuralError(f"Genome {genome.id} lacks input/output nodes {missing}")

        for edge in genome.edge_genes.values():
            if edge.node_in not in self.nodes or edge.node_out not in self.nodes:
                raise StructuralError(f"Genome {genome.id} has an edge {edge.node_in} => {edge.node_out} "
                                      f"referencing a node that does not exist")
            if edge.enabled:
                self._set_weight(edge.node_in, edge.node_out, edge.weight)

        self._sorted_nodes = self._topological_sort()

    @classmethod
    def decode(cls, genome: 'Genome', batch_size: int) -> 'Network':
        """Decode 'genome' into a network processing batches of 'batch_size' rows."""
        return cls(genome, batch_size)

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def num_edges(self) -> int:
        return sum(len(node.inputs) for node in self.nodes.values())

    @property
    def topological_order(self) -> list[int]:
        return list(self._sorted_nodes)

    def _set_weight(self, producer_id: int, consumer_id: int, weight: float) -> None:
        self.nodes[consumer_id].inputs[producer_id] = weight
        self.nodes[producer_id].outputs[consumer_id] = weight

    def _topological_sort(self) -> list[int]:
        """
        Sort the nodes using Kahn's algorithm.

        Returns:
            List of node IDs in topological order

        Raises:
            StructuralError: If the network has a cycle
        """
        in_degree = {node_id: len(node.inputs) for node_id, node in self.nodes.items()}

        queue  = deque([node_id for node_id, degree in in_degree.items() if degree == 0])
        result = []

        while queue:
            node_id = queue.popleft()
            result.append(node_id)
            for neighbor in self.nodes[node_id].outputs:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    queue.append(neighbor)

        if len(result) != len(self.nodes):
            cyclic = sorted(set(self.nodes) - set(result))
            raise StructuralError(f"Genome {self.genome_id} has a cycle through nodes {cyclic}")

        return result

    def _as_batch(self, batch, width: int, what: str) -> np.ndarray:
        batch = np.asarray(batch, dtype=np.float64)
        if batch.ndim != 2 or batch.shape[1] != width:
            raise ShapeError(f"Expected {what} batch of width {width}, got shape {batch.shape}")
        if batch.shape[0] != self.batch_size:
            raise ShapeError(f"Expected {what} batch with {self.batch_size} rows, got {batch.shape[0]}")
        return batch

    def feed_forward(self, inputs) -> np.ndarray:
        """
        Propagate a batch of inputs through the network.

        Parameters:
            inputs: array-like of shape (batch_size, num_inputs)

        Returns:
            Array of shape (batch_size, num_outputs), one column per output node

        Raises:
            ShapeError: If 'inputs' does not have shape (batch_size, num_inputs)
        """
        inputs = self._as_batch(inputs, self.num_inputs, "input")

        for column, node_id in enumerate(self._input_ids):
            node = self.nodes[node_id]
            node.signal = inputs[:, column].copy()

        for node_id in self._sorted_nodes:
            node = self.nodes[node_id]
            if node.type == NodeType.INPUT or not node.inputs:
                continue
            net = np.zeros(self.batch_size)
            for producer_id, weight in node.inputs.items():
                net = net + weight * self.nodes[producer_id].signal
            node.signal = node.activation.value(net)

        outputs = np.zeros((self.batch_size, self.num_outputs))
        for column, node_id in enumerate(self._output_ids):
            outputs[:, column] = self.nodes[node_id].signal
        return outputs

    def backprop(self, inputs, targets, learning_rate: float) -> float:
        """
        Perform one step of gradient descent on a batch.

        The error of the batch is output - target. Deltas are computed in reverse
        topological order, each node's derivative being evaluated at its signal:
            output nodes: delta = error column * activation'(signal)
            other nodes:  delta = activation'(signal) * sum of weight * consumer delta
        An output node takes its delta from the error alone, even when it feeds
        other nodes. Each weight is then moved by the inner product (summed over
        the batch) of the consumer's delta with the producer's signal.

        Parameters:
            inputs:        array-like of shape (batch_size, num_inputs)
            targets:       array-like of shape (batch_size, num_outputs)
            learning_rate: Step size of the weight update

        Returns:
            Mean squared error of the outputs computed before the update

        Raises:
            ShapeError: If inputs/targets have the wrong shape (the network is not modified)
        """
        inputs  = self._as_batch(inputs,  self.num_inputs,  "input")
        targets = self._as_batch(targets, self.num_outputs, "target")

        outputs = self.feed_forward(inputs)
        errors  = outputs - targets

        output_columns = {node_id: column for column, node_id in enumerate(self._output_ids)}
        for node_id in reversed(self._sorted_nodes):
            node  = self.nodes[node_id]
            slope = node.activation.derivative(node.signal)
            if node_id in output_columns:
                node.delta = errors[:, output_columns[node_id]] * slope
                continue
            backward = np.zeros(self.batch_size)
            for consumer_id, weight in node.outputs.items():
                backward = backward + weight * self.nodes[consumer_id].delta
            node.delta = slope * backward

        # Gradients are computed before any weight is written
        updates = []
        for consumer in self.nodes.values():
            for producer_id, weight in consumer.inputs.items():
                gradient = np.dot(consumer.delta, self.nodes[producer_id].signal)
                updates.append((producer_id, consumer.id, weight - learning_rate * gradient))
        for producer_id, consumer_id, weight in updates:
            self._set_weight(producer_id, consumer_id, float(weight))

        return float(np.mean(errors ** 2))

    def encode(self, genome: 'Genome') -> None:
        """
        Write the current weights of the network into the edge genes of 'genome'.

        Only the weights of the decoded (enabled) edges are overwritten; disabled
        edges and the structure of the genome are left untouched.

        Parameters:
            genome: The genome the network was decoded from

        Raises:
            IdentityMismatchError: If 'genome' is not the genome the network was decoded from
            StructuralError:       If 'genome' no longer has one of the decoded edges
        (in both cases, no weight is written)
        """
        if genome.id != self.genome_id:
            raise IdentityMismatchError(f"Network decoded from genome {self.genome_id} "
                                        f"cannot encode into genome {genome.id}")

        weights = {(producer_id, consumer.id): weight
                   for consumer in self.nodes.values()
                   for producer_id, weight in consumer.inputs.items()}
        missing = [key for key in weights if key not in genome.edge_genes]
        if missing:
            raise StructuralError(f"Genome {genome.id} has no edge genes for {missing}")

        for key, weight in weights.items():
            genome.edge_genes[key].weight = weight

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')
        dot.attr('graph', labelloc='t', label=f"Network {self.genome_id}")

        common = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                  'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
        fillcolors = {NodeType.INPUT: 'lightgrey', NodeType.HIDDEN: 'lightblue', NodeType.OUTPUT: 'white'}
        clusters   = [('cluster_input' , NodeType.INPUT , 'source', 'Inputs'),
                      ('cluster_hidden', NodeType.HIDDEN, 'same'  , 'Hidden'),
                      ('cluster_output', NodeType.OUTPUT, 'sink'  , 'Outputs')]

        for name, node_type, rank, label in clusters:
            members = [node for node in self.nodes.values() if node.type == node_type]
            if not members:
                continue
            with dot.subgraph(name=name) as cluster:
                cluster.attr(rank=rank, label=label, style='invisible')
                for node in members:
                    attrs = dict(common, fillcolor=fillcolors[node_type])
                    attrs['label'] = f"id={node.id}\\n{node.activation.name}"
                    cluster.node(str(node.id), **attrs)

        for consumer in self.nodes.values():
            for producer_id, weight in consumer.inputs.items():
                dot.edge(str(producer_id), str(consumer.id),
                         label=f"w={weight:.2f}", fontsize='5', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __repr__(self):
        return (f"Network(genome_id={self.genome_id}, batch_size={self.batch_size}, "
                f"num_nodes={self.num_nodes}, num_edges={self.num_edges})")

    def __str__(self):
        lines = [f"Network {self.genome_id}"]
        lines += [str(self.nodes[node_id]) for node_id in self._sorted_nodes]
        return "\n".join(lines)
