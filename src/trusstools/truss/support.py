"""
Per-edge units of work shared by every executor.

Each function takes the read-only index plus one job and returns plain data,
so the same code runs in-process or inside a worker pool.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from trusstools.structure.adjacency import AdjacencyIndex


# Edge states inside a propagation snapshot.
GONE = 0
ALIVE = 1
REMOVING = 2


def triangle_count(index: AdjacencyIndex, u: int, v: int) -> int:
    """Number of common neighbours of u and v in the original graph."""
    return sum(1 for _ in index.common_neighbors(u, v))


def support_batch(index: AdjacencyIndex, eids: Sequence[int]) -> List[Tuple[int, int]]:
    """Return (edge id, initial support) for each edge id in the batch."""
    out: List[Tuple[int, int]] = []
    for eid in eids:
        u, v = index.edges[eid]
        out.append((eid, triangle_count(index, u, v)))
    return out


def propagation_batch(index: AdjacencyIndex, job: Tuple[Sequence[int], bytes]) -> List[int]:
    """
    Support decrements caused by removing a batch of edges.

    job = (edge ids removed this round, snapshot) where snapshot[eid] is
    GONE, ALIVE or REMOVING as of the start of the round.

    A triangle counts only if all three edges were present at the start of
    the round. When several of its edges are removed in the same round the
    one with the smallest id owns it, so each surviving edge of a destroyed
    triangle is decremented exactly once.

    Returns the ids of surviving edges to decrement, one entry per triangle.
    """
    eids, snapshot = job
    hits: List[int] = []
    for eid in eids:
        u, v = index.edges[eid]
        for _w, a, b in index.common_neighbors(u, v):
            sa = snapshot[a]
            sb = snapshot[b]
            if sa == GONE or sb == GONE:
                continue
            if (sa == REMOVING and a < eid) or (sb == REMOVING and b < eid):
                continue
            if sa == ALIVE:
                hits.append(a)
            if sb == ALIVE:
                hits.append(b)
    return hits
