"""CSR adjacency over a static undirected simple graph."""
from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from trusstools.errors import InvalidGraph, InvalidNode


Edge = Tuple[int, int]


def _is_int(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def canonical_edges(num_nodes: int, edges: Iterable[Sequence[int]]) -> List[Edge]:
    """
    Validate an edge iterable and return its edges as sorted (u, v) with u < v.

    Raises InvalidGraph on a malformed pair, a non-integer or out-of-range id,
    a self-loop, or a duplicate ((u, v) and (v, u) are the same edge).
    """
    if not _is_int(num_nodes) or num_nodes <= 0:
        raise InvalidGraph(f"num_nodes must be a positive int, got {num_nodes!r}")

    seen: set[Edge] = set()
    for e in edges:
        try:
            u, v = e
        except (TypeError, ValueError):
            raise InvalidGraph(f"edge must be a pair of node ids, got {e!r}") from None
        if not (_is_int(u) and _is_int(v)):
            raise InvalidGraph(f"node ids must be ints, got {e!r}")
        if not (0 <= u < num_nodes and 0 <= v < num_nodes):
            raise InvalidGraph(f"edge {e!r} has an endpoint outside [0, {num_nodes})")
        if u == v:
            raise InvalidGraph(f"self-loop on node {u}")
        key = (u, v) if u < v else (v, u)
        if key in seen:
            raise InvalidGraph(f"duplicate edge {key}")
        seen.add(key)
    return sorted(seen)


class AdjacencyIndex:
    """
    Immutable compressed adjacency (CSR).

    For node u, neighbors[offsets[u]:offsets[u+1]] is its ascending neighbour
    list and edge_slots over the same range holds the id of the edge each
    neighbour slot stands for. Edge ids follow the ascending order of the
    canonical (u, v) pairs, so they depend on topology only.
    """

    __slots__ = ("_num_nodes", "_edges", "_offsets", "_neighbors", "_edge_slots")

    def __init__(
        self,
        num_nodes: int,
        edges: Tuple[Edge, ...],
        offsets: Tuple[int, ...],
        neighbors: Tuple[int, ...],
        edge_slots: Tuple[int, ...],
    ) -> None:
        set_slot = object.__setattr__
        set_slot(self, "_num_nodes", num_nodes)
        set_slot(self, "_edges", edges)
        set_slot(self, "_offsets", offsets)
        set_slot(self, "_neighbors", neighbors)
        set_slot(self, "_edge_slots", edge_slots)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"AdjacencyIndex is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"AdjacencyIndex is immutable; cannot delete {name!r}")

    def __reduce__(self):
        # slot state is restored through __setattr__, so rebuild via __init__
        return (
            AdjacencyIndex,
            (self._num_nodes, self._edges, self._offsets, self._neighbors, self._edge_slots),
        )

    @classmethod
    def build(cls, num_nodes: int, edges: Iterable[Sequence[int]]) -> "AdjacencyIndex":
        canon = canonical_edges(num_nodes, edges)

        slots: List[List[Tuple[int, int]]] = [[] for _ in range(num_nodes)]
        for eid, (u, v) in enumerate(canon):
            slots[u].append((v, eid))
            slots[v].append((u, eid))

        # canon is visited in ascending order, so every slot list is already sorted
        offsets = [0]
        neighbors: List[int] = []
        edge_slots: List[int] = []
        for node_slots in slots:
            for w, eid in node_slots:
                neighbors.append(w)
                edge_slots.append(eid)
            offsets.append(len(neighbors))

        return cls(num_nodes, tuple(canon), tuple(offsets), tuple(neighbors), tuple(edge_slots))

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def offsets(self) -> Tuple[int, ...]:
        return self._offsets

    @property
    def neighbors(self) -> Tuple[int, ...]:
        return self._neighbors

    @property
    def edge_slots(self) -> Tuple[int, ...]:
        return self._edge_slots

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def _span(self, node: int) -> Tuple[int, int]:
        if not _is_int(node) or not (0 <= node < self.num_nodes):
            raise InvalidNode(f"node {node!r} outside [0, {self.num_nodes})")
        return self.offsets[node], self.offsets[node + 1]

    def neighbor_range(self, node: int) -> Tuple[int, ...]:
        lo, hi = self._span(node)
        return self.neighbors[lo:hi]

    def incident_edge_ids(self, node: int) -> Tuple[int, ...]:
        lo, hi = self._span(node)
        return self.edge_slots[lo:hi]

    def degree(self, node: int) -> int:
        lo, hi = self._span(node)
        return hi - lo

    def edge_id(self, u: int, v: int) -> Optional[int]:
        """Id of edge {u, v}, or None if the graph has no such edge."""
        lo, hi = self._span(u)
        self._span(v)
        i = bisect_left(self.neighbors, v, lo, hi)
        if i < hi and self.neighbors[i] == v:
            return self.edge_slots[i]
        return None

    def common_neighbors(self, u: int, v: int) -> Iterator[Tuple[int, int, int]]:
        """
        Two-pointer merge of the neighbour lists of u and v.

        Yields (w, id of {u,w}, id of {v,w}) for every common neighbour w.
        v is skipped while scanning u's list and u while scanning v's list.
        Cost: O(deg(u) + deg(v)).
        """
        i, iend = self._span(u)
        j, jend = self._span(v)
        nb = self.neighbors
        while i < iend and j < jend:
            a = nb[i]
            if a == v:
                i += 1
                continue
            b = nb[j]
            if b == u:
                j += 1
                continue
            if a == b:
                yield a, self.edge_slots[i], self.edge_slots[j]
                i += 1
                j += 1
            elif a < b:
                i += 1
            else:
                j += 1

    def __repr__(self) -> str:
        return f"AdjacencyIndex(num_nodes={self.num_nodes}, num_edges={self.num_edges})"
