from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx

from trusstools.errors import InvalidGraph, check_k
from trusstools.parallel.executor import make_executor
from trusstools.structure.adjacency import AdjacencyIndex
from trusstools.truss.decompose import truss_decomposition
from trusstools.truss.engine import TrussEngine


def index_from_nx(G: nx.Graph) -> Tuple[AdjacencyIndex, List[Hashable]]:
    """
    Relabel G's nodes to 0..n-1 (in G.nodes() order) and build the index.

    Returns (index, labels) where labels[i] is the original node of id i.
    """
    if G.is_directed():
        raise InvalidGraph("directed graphs are not supported")
    if G.is_multigraph():
        raise InvalidGraph("multigraphs are not supported")
    if G.number_of_nodes() == 0:
        raise InvalidGraph("graph has no nodes")

    labels = list(G.nodes())
    ids = {x: i for i, x in enumerate(labels)}
    index = AdjacencyIndex.build(len(labels), ((ids[a], ids[b]) for a, b in G.edges()))
    return index, labels


def k_truss_nx(G: nx.Graph, k: int, *, processes: Optional[int] = None) -> nx.Graph:
    """
    Return the k-truss of G as a new graph on G's labels.

    Edges carry a 'support' attribute; nodes left without edges are dropped.
    """
    check_k(k)
    index, labels = index_from_nx(G)
    with make_executor(index, processes) as executor:
        res = TrussEngine(index, executor=executor).peel(k)

    H = nx.Graph()
    for (u, v), s in zip(res.edges, res.support):
        H.add_edge(labels[u], labels[v], support=s)
    return H


def trussness_nx(G: nx.Graph, *, processes: Optional[int] = None) -> Dict[Tuple[Hashable, Hashable], int]:
    """Map each edge (a, b) of G, in G's labels, to its trussness."""
    index, labels = index_from_nx(G)
    with make_executor(index, processes) as executor:
        dec = truss_decomposition(index, executor)
    return {(labels[u], labels[v]): t for (u, v), t in zip(dec.edges, dec.trussness)}
