import numpy as np
import scipy.sparse as scspa
import networkx as nx

class ContactNetwork:
    """
    Store a static contact network in compressed sparse row form

    The neighbors of node `i` occupy `indices[indptr[i]:indptr[i+1]]`; both
    arrays are read-only once the object is constructed, so a single
    ContactNetwork can be shared by any number of simulation runs.
    """

    @classmethod
    def from_networkx_graph(
            cls,
            graph):
        """
        Create an object from a nx.Graph object

        Input:
            graph (nx.Graph): an undirected graph; node labels are converted
                              to 0..N-1 following their sorted order

        Output:
            contact_network (ContactNetwork): initialized object
        """
        if not isinstance(graph, nx.Graph):
            raise ValueError(
                    cls.__name__
                    + ": expected a networkx graph, got "
                    + graph.__class__.__name__)

        if graph.is_directed():
            raise ValueError(
                    cls.__name__
                    + ": contact networks are undirected, got "
                    + graph.__class__.__name__)

        graph = nx.convert_node_labels_to_integers(graph, ordering='sorted')
        node_count = graph.number_of_nodes()
        adjacency = nx.to_scipy_sparse_array(graph,
                                             nodelist=range(node_count),
                                             weight=None,
                                             format='csr')

        return cls.from_csr_matrix(adjacency)

    @classmethod
    def from_edges(
            cls,
            edges,
            node_count=None):
        """
        Create an object from an array of undirected edges

        Input:
            edges (np.array): (n_edges,2) array of edges
            node_count (int): total number of nodes; if None, it is inferred as
                              the largest node label plus one

        Output:
            contact_network (ContactNetwork): initialized object
        """
        edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)

        if node_count is None:
            node_count = int(edges.max()) + 1 if edges.size > 0 else 0

        if edges.size > 0 and (edges.min() < 0 or edges.max() >= node_count):
            raise ValueError(
                    cls.__name__
                    + ": edge endpoints must lie in 0.."
                    + str(node_count - 1))

        # both directions; duplicates are summed away by the conversion to csr
        rows = np.concatenate((edges[:,0], edges[:,1]))
        cols = np.concatenate((edges[:,1], edges[:,0]))
        data = np.ones(rows.size)
        adjacency = scspa.csr_matrix((data, (rows, cols)),
                                     shape=(node_count, node_count))

        return cls.from_csr_matrix(adjacency)

    @classmethod
    def from_csr_matrix(
            cls,
            matrix):
        """
        Create an object from a square scipy.sparse adjacency matrix

        Input:
            matrix (scipy.sparse matrix or array): (n_nodes,n_nodes) adjacency;
                                                   only the sparsity pattern
                                                   is used

        Output:
            contact_network (ContactNetwork): initialized object
        """
        if not scspa.issparse(matrix):
            raise ValueError(
                    cls.__name__
                    + ": expected a scipy.sparse matrix, got "
                    + matrix.__class__.__name__)

        if matrix.shape[0] != matrix.shape[1]:
            raise ValueError(
                    cls.__name__
                    + ": adjacency matrix must be square")

        matrix = scspa.csr_matrix(matrix)
        matrix.sum_duplicates()

        return cls(matrix.indptr, matrix.indices)

    def __init__(
            self,
            indptr,
            indices):
        """
        Constructor

        Input:
            indptr (np.array): (n_nodes+1,) array of neighbor range bounds
            indices (np.array): (n_entries,) flat array of neighbor labels
        """
        self.indptr  = np.array(indptr,  dtype=np.int64)
        self.indices = np.array(indices, dtype=np.int64)
        self.__check_correct_format()

        self.indptr.setflags(write=False)
        self.indices.setflags(write=False)

    def __check_correct_format(self):
        """
        Check whether the adjacency is in the correct format

        The following is checked:
            - indptr is one-dimensional, starts at 0 and is non-decreasing
            - indptr ends at the number of neighbor entries
            - all neighbor labels are in the range 0..N-1

        Symmetry, self-loops and duplicate entries are not checked.

        Output:
            None
        """
        correct_format = True

        if self.indptr.ndim != 1 or self.indices.ndim != 1 or self.indptr.size == 0:
            correct_format = False
        elif self.indptr[0] != 0 or self.indptr[-1] != self.indices.size:
            correct_format = False
        elif np.any(np.diff(self.indptr) < 0):
            correct_format = False
        elif self.indices.size > 0:
            node_count = self.indptr.size - 1
            if self.indices.min() < 0 or self.indices.max() >= node_count:
                correct_format = False

        if not correct_format:
            raise ValueError(
                    self.__class__.__name__
                    + ": graph format is incorrect")

    def __len__(self):
        return self.get_node_count()

    def get_node_count(self):
        """
        Get the total number of nodes

        Output:
            n_nodes (int): total number of nodes
        """
        return self.indptr.size - 1

    def get_edge_count(self):
        """
        Get the total number of undirected edges

        Output:
            n_edges (int): total number of edges
        """
        return self.indices.size // 2

    def get_nodes(self):
        """
        Get all nodes of the graph

        Output:
            nodes (np.array): (n_nodes,) array of node indices
        """
        return np.arange(self.get_node_count())

    def get_neighbors(
            self,
            node):
        """
        Get the neighbors of a node

        Input:
            node (int): node whose neighbors to retrieve

        Output:
            neighbors (np.array): (degree,) read-only view into indices
        """
        return self.indices[self.indptr[node]:self.indptr[node + 1]]

    def get_degree(
            self,
            node):
        return int(self.indptr[node + 1] - self.indptr[node])

    def get_degrees(self):
        """
        Get the degrees of all nodes

        Output:
            degrees (np.array): (n_nodes,) array of degrees
        """
        return np.diff(self.indptr)

    def get_adjacency(self):
        """
        Get the adjacency of the graph as a scipy.sparse matrix

        Output:
            adjacency (scipy.sparse.csr_matrix): (n_nodes,n_nodes) matrix
        """
        node_count = self.get_node_count()
        data = np.ones(self.indices.size)
        return scspa.csr_matrix((data, self.indices.copy(), self.indptr.copy()),
                                shape=(node_count, node_count))

    def to_networkx_graph(self):
        """
        Convert to a nx.Graph object

        Output:
            graph (nx.Graph): graph with nodes 0..N-1
        """
        graph = nx.Graph()
        graph.add_nodes_from(range(self.get_node_count()))
        for node in range(self.get_node_count()):
            graph.add_edges_from((node, int(neighbor))
                                 for neighbor in self.get_neighbors(node))
        return graph
