import networkx as nx
import numpy as np
import pytest
import scipy.sparse as scspa

from epispread import ContactNetwork

def test_from_edges_triangle():
    network = ContactNetwork.from_edges([(0, 1), (1, 2), (2, 0)])

    assert network.get_node_count() == 3
    assert network.get_edge_count() == 3
    assert set(network.get_neighbors(0).tolist()) == {1, 2}
    assert set(network.get_neighbors(1).tolist()) == {0, 2}
    assert network.get_degrees().tolist() == [2, 2, 2]

def test_from_edges_collapses_duplicates():
    network = ContactNetwork.from_edges([(0, 1), (1, 0), (0, 1)])

    assert network.get_degree(0) == 1
    assert network.get_degree(1) == 1
    assert network.get_edge_count() == 1

def test_from_edges_isolated_nodes():
    network = ContactNetwork.from_edges([(0, 1)], node_count=4)

    assert network.get_node_count() == 4
    assert network.get_degree(3) == 0
    assert network.get_neighbors(3).size == 0

def test_from_edges_without_edges():
    network = ContactNetwork.from_edges([], node_count=1)

    assert network.get_node_count() == 1
    assert network.get_edge_count() == 0

def test_from_edges_rejects_out_of_range_endpoint():
    with pytest.raises(ValueError):
        ContactNetwork.from_edges([(0, 5)], node_count=3)

def test_from_networkx_graph_relabels_sorted():
    graph = nx.Graph()
    graph.add_edges_from([('b', 'c'), ('a', 'b')])

    network = ContactNetwork.from_networkx_graph(graph)

    # a -> 0, b -> 1, c -> 2
    assert network.get_node_count() == 3
    assert set(network.get_neighbors(1).tolist()) == {0, 2}
    assert network.get_neighbors(0).tolist() == [1]

def test_from_networkx_graph_matches_networkx_degrees():
    graph = nx.barabasi_albert_graph(200, 3, seed=7)

    network = ContactNetwork.from_networkx_graph(graph)

    assert network.get_edge_count() == graph.number_of_edges()
    assert network.get_degrees().tolist() == [graph.degree(node) for node in range(200)]

def test_from_networkx_graph_rejects_other_types():
    with pytest.raises(ValueError):
        ContactNetwork.from_networkx_graph([(0, 1)])

def test_from_networkx_graph_rejects_directed_graphs():
    with pytest.raises(ValueError, match="undirected"):
        ContactNetwork.from_networkx_graph(nx.DiGraph([(0, 1)]))

    with pytest.raises(ValueError, match="undirected"):
        ContactNetwork.from_networkx_graph(nx.MultiDiGraph([(0, 1), (1, 2)]))

def test_from_csr_matrix_rejects_non_square():
    with pytest.raises(ValueError):
        ContactNetwork.from_csr_matrix(scspa.csr_matrix(np.ones((2, 3))))

def test_from_csr_matrix_rejects_dense():
    with pytest.raises(ValueError):
        ContactNetwork.from_csr_matrix(np.ones((2, 2)))

def test_incorrect_format_is_rejected():
    with pytest.raises(ValueError, match="graph format is incorrect"):
        ContactNetwork(indptr=[0, 2, 1], indices=[1, 0])

    with pytest.raises(ValueError, match="graph format is incorrect"):
        ContactNetwork(indptr=[0, 1, 2], indices=[1, 7])

    with pytest.raises(ValueError, match="graph format is incorrect"):
        ContactNetwork(indptr=[0, 1, 3], indices=[1, 0])

def test_arrays_are_read_only():
    network = ContactNetwork.from_edges([(0, 1), (1, 2)])

    assert not network.indptr.flags.writeable
    assert not network.indices.flags.writeable

    with pytest.raises(ValueError):
        network.indices[0] = 2

def test_round_trip_through_networkx():
    graph = nx.random_regular_graph(4, 30, seed=3)

    network = ContactNetwork.from_networkx_graph(graph)

    edges = {tuple(sorted(edge)) for edge in graph.edges()}
    round_trip_edges = {tuple(sorted(edge)) for edge in network.to_networkx_graph().edges()}

    assert round_trip_edges == edges
    assert np.array_equal(network.get_adjacency().toarray(),
                          nx.to_numpy_array(graph, nodelist=range(30)))
