"""Tests for the NetworkX adapter."""
import networkx as nx
import pytest

from trusstools.errors import InvalidGraph, InvalidK
from trusstools.interop.nxgraph import index_from_nx, k_truss_nx, trussness_nx


def _edge_set(G):
    return {frozenset(e) for e in G.edges()}


def test_index_from_nx_labels():
    G = nx.Graph([("a", "b"), ("b", "c"), ("a", "c")])
    idx, labels = index_from_nx(G)
    assert labels == ["a", "b", "c"]
    assert idx.num_edges == 3


def test_index_from_nx_rejects_directed():
    with pytest.raises(InvalidGraph):
        index_from_nx(nx.DiGraph([(0, 1)]))


def test_index_from_nx_rejects_multigraph():
    with pytest.raises(InvalidGraph):
        index_from_nx(nx.MultiGraph([(0, 1)]))


def test_index_from_nx_rejects_self_loop():
    with pytest.raises(InvalidGraph):
        index_from_nx(nx.Graph([(0, 1), (1, 1)]))


def test_index_from_nx_rejects_empty():
    with pytest.raises(InvalidGraph):
        index_from_nx(nx.Graph())


@pytest.mark.parametrize("get_graph", [nx.florentine_families_graph, nx.les_miserables_graph, nx.karate_club_graph])
def test_k_truss_nx_matches_networkx(get_graph):
    G = get_graph()
    for k in range(2, 12):
        H = k_truss_nx(G, k, processes=1)
        expected = nx.k_truss(G, k)
        assert _edge_set(H) == _edge_set(expected)
        assert set(H.nodes()) == set(expected.nodes())
        if expected.number_of_edges() == 0:
            break


def test_k_truss_nx_support_attribute():
    G = nx.complete_graph(5)
    H = k_truss_nx(G, 4, processes=1)
    assert all(d["support"] == 3 for _, _, d in H.edges(data=True))


def test_k_truss_nx_invalid_k():
    with pytest.raises(InvalidK):
        k_truss_nx(nx.complete_graph(3), 1)


def test_trussness_nx():
    G = nx.complete_graph(4)
    G.add_edge(3, "tail")
    t = trussness_nx(G, processes=1)
    assert t[(3, "tail")] == 2
    assert t[(0, 1)] == 4
    assert len(t) == G.number_of_edges()
