"""Tests for trusstools.truss.engine."""
import itertools
import random

import networkx as nx
import pytest

from trusstools.errors import InvalidK
from trusstools.structure.adjacency import AdjacencyIndex
from trusstools.truss.engine import TrussEngine, TrussResult, k_truss


DIAMOND = [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3)]


def _peel(n, edges, k):
    return TrussEngine(AdjacencyIndex.build(n, edges)).peel(k)


def _oracle(G, k):
    H = nx.k_truss(G, k)
    return {tuple(sorted(e)) for e in H.edges()}


# --- concrete scenarios ---

def test_diamond_is_a_3_truss():
    res = _peel(4, DIAMOND, 3)
    assert res.edges == ((0, 1), (0, 2), (1, 2), (1, 3), (2, 3))
    assert res.support == (1, 1, 2, 1, 1)
    assert res.rounds == 0
    assert res.removed == 0


def test_diamond_4_truss_cascades_to_empty():
    res = _peel(4, DIAMOND, 4)
    assert len(res) == 0
    # round 1 removes the four support-1 edges, round 2 removes (1, 2)
    assert res.rounds == 2
    assert res.removed == 5


def test_k2_keeps_everything():
    res = _peel(3, [(0, 1), (1, 2)], 2)
    assert res.edges == ((0, 1), (1, 2))
    assert res.support == (0, 0)


def test_path_has_no_3_truss():
    assert len(_peel(3, [(0, 1), (1, 2)], 3)) == 0


@pytest.mark.parametrize("k", [2, 3, 4, 10])
def test_no_edges(k):
    res = _peel(5, [], k)
    assert res.edges == ()
    assert res.rounds == 0


def test_clique_with_tail():
    # K5 plus a pendant triangle hanging off node 4
    edges = list(itertools.combinations(range(5), 2)) + [(4, 5), (4, 6), (5, 6)]
    res = _peel(7, edges, 5)
    assert set(res.edges) == set(itertools.combinations(range(5), 2))
    assert set(res.support) == {3}
    assert res.nodes() == [0, 1, 2, 3, 4]


def test_cascade_needs_propagation():
    # a chain of triangles sharing edges: (0,1,2), (1,2,3), (2,3,4), (3,4,5)
    # every inner edge starts with support 2 but the 4-truss is empty
    edges = [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3), (2, 4), (3, 4), (3, 5), (4, 5)]
    res = _peel(6, edges, 4)
    assert len(res) == 0
    assert res.rounds >= 2


def test_as_dict():
    res = _peel(4, DIAMOND, 3)
    assert res.as_dict()[(1, 2)] == 2


# --- invalid k ---

@pytest.mark.parametrize("k", [1, 0, -2, 3.0, True, "3"])
def test_invalid_k(k):
    eng = TrussEngine(AdjacencyIndex.build(4, DIAMOND))
    with pytest.raises(InvalidK):
        eng.peel(k)
    # state untouched
    assert eng.alive == bytearray()


def test_invalid_k_module_level():
    with pytest.raises(InvalidK):
        k_truss(4, DIAMOND, 1)


# --- properties ---

@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_matches_networkx(seed):
    G = nx.gnp_random_graph(35, 0.3, seed=seed)
    idx = AdjacencyIndex.build(35, G.edges())
    eng = TrussEngine(idx)
    for k in range(2, 9):
        assert set(eng.peel(k).edges) == _oracle(G, k)


@pytest.mark.parametrize("k", [3, 4, 5])
def test_support_lower_bound_and_exact(k):
    G = nx.gnp_random_graph(40, 0.3, seed=7)
    res = _peel(40, G.edges(), k)
    alive = set(res.edges)
    for (u, v), s in res.as_dict().items():
        assert s >= k - 2
        # final support counts only surviving triangles
        live = sum(
            1 for w in set(G[u]) & set(G[v])
            if tuple(sorted((u, w))) in alive and tuple(sorted((v, w))) in alive
        )
        assert s == live


@pytest.mark.parametrize("k", [3, 4, 5])
def test_idempotent(k):
    G = nx.gnp_random_graph(40, 0.3, seed=9)
    first = _peel(40, G.edges(), k)
    again = _peel(40, first.edges, k)
    assert again.edges == first.edges
    assert again.support == first.support
    assert again.removed == 0


def test_monotone_in_k():
    G = nx.gnp_random_graph(40, 0.35, seed=21)
    eng = TrussEngine(AdjacencyIndex.build(40, G.edges()))
    prev = set(eng.peel(2).edges)
    for k in range(3, 10):
        cur = set(eng.peel(k).edges)
        assert cur <= prev
        prev = cur


def test_order_independent():
    G = nx.gnp_random_graph(40, 0.3, seed=13)
    edges = list(G.edges())
    rng = random.Random(4)
    for _ in range(3):
        rng.shuffle(edges)
        flipped = [(v, u) if rng.random() < 0.5 else (u, v) for u, v in edges]
        assert set(_peel(40, flipped, 4).edges) == _oracle(G, 4)


def test_repeated_peel_is_fresh():
    eng = TrussEngine(AdjacencyIndex.build(4, DIAMOND))
    assert len(eng.peel(4)) == 0
    assert len(eng.peel(3)) == 5


def test_peel_from_current_is_incremental():
    eng = TrussEngine(AdjacencyIndex.build(4, DIAMOND))
    eng.reset()
    rounds, removed = eng.peel_from_current(3)
    assert (rounds, removed) == (0, [])
    rounds, removed = eng.peel_from_current(4)
    assert rounds == 2
    assert sorted(removed) == [0, 1, 2, 3, 4]


def test_verbose_reports_rounds(capsys):
    TrussEngine(AdjacencyIndex.build(4, DIAMOND), verbose=True).peel(4)
    err = capsys.readouterr().err
    assert "[k=4 round=1] removed 4 edge(s), 1 queued" in err
    assert "[k=4 round=2] removed 1 edge(s), 0 queued" in err


def test_quiet_by_default(capsys):
    _peel(4, DIAMOND, 4)
    assert capsys.readouterr().err == ""


# --- module-level helper ---

def test_k_truss_helper():
    res = k_truss(4, DIAMOND, 3, processes=1)
    assert isinstance(res, TrussResult)
    assert res.k == 3
    assert len(res) == 5
