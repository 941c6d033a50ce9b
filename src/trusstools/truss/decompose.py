from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from trusstools.errors import check_k
from trusstools.structure.adjacency import AdjacencyIndex, Edge
from .engine import TrussEngine


@dataclass(frozen=True)
class TrussDecomposition:
    """
    Trussness of every edge.

    trussness[i] is the largest k such that edges[i] lies in the k-truss.
    max_k is 0 for an edgeless graph and 2 for a triangle-free one.
    """

    edges: Tuple[Edge, ...]
    trussness: Tuple[int, ...]
    max_k: int

    def as_dict(self) -> Dict[Edge, int]:
        return dict(zip(self.edges, self.trussness))

    def k_truss_edges(self, k: int) -> List[Edge]:
        check_k(k)
        return [e for e, t in zip(self.edges, self.trussness) if t >= k]

    def k_classes(self) -> Dict[int, List[Edge]]:
        """Edges grouped by trussness."""
        groups: Dict[int, List[Edge]] = {}
        for e, t in zip(self.edges, self.trussness):
            groups.setdefault(t, []).append(e)
        return groups


def truss_decomposition(index: AdjacencyIndex, executor=None, *, verbose: bool = False) -> TrussDecomposition:
    """
    Peel with k = 3, 4, ... without resetting edge state between levels.

    Every level starts from the previous fixed point, so the total work is one
    peel plus one threshold scan per level. An edge removed on the way to the
    k-truss has trussness k - 1.
    """
    m = index.num_edges
    if m == 0:
        return TrussDecomposition(edges=(), trussness=(), max_k=0)

    engine = TrussEngine(index, executor=executor, verbose=verbose)
    engine.reset()
    trussness = [2] * m

    k = 3
    remaining = m
    while remaining:
        _rounds, removed = engine.peel_from_current(k)
        for eid in removed:
            trussness[eid] = k - 1
        remaining -= len(removed)
        k += 1

    return TrussDecomposition(edges=index.edges, trussness=tuple(trussness), max_k=max(trussness))


def max_truss(index: AdjacencyIndex, executor=None) -> int:
    """Largest k with a non-empty k-truss (0 for an edgeless graph)."""
    return truss_decomposition(index, executor).max_k
