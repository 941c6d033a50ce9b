from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from trusstools.errors import check_k
from trusstools.parallel.executor import SerialExecutor, edge_batches, make_executor
from trusstools.structure.adjacency import AdjacencyIndex, Edge
from .support import ALIVE, REMOVING, propagation_batch, support_batch


@dataclass(frozen=True)
class TrussResult:
    """
    Surviving edges of a k-truss peel.

    edges:   canonical (u, v) pairs, u < v, ascending
    support: final support of each edge, aligned with edges
    rounds:  peeling rounds that removed at least one edge
    removed: number of edges removed
    """

    k: int
    edges: Tuple[Edge, ...]
    support: Tuple[int, ...]
    rounds: int
    removed: int

    def __len__(self) -> int:
        return len(self.edges)

    def as_dict(self) -> Dict[Edge, int]:
        return dict(zip(self.edges, self.support))

    def nodes(self) -> List[int]:
        verts = set()
        for u, v in self.edges:
            verts.add(u)
            verts.add(v)
        return sorted(verts)


def compute_support(index: AdjacencyIndex, executor=None) -> List[int]:
    """
    Initial support of every edge, assuming the whole graph is alive.

    Each edge writes only its own slot, so batches may finish in any order.
    """
    if executor is None:
        executor = SerialExecutor(index)
    support = [0] * index.num_edges
    jobs = edge_batches(range(index.num_edges), executor.batch_size)
    for batch in executor.map(support_batch, jobs):
        for eid, count in batch:
            support[eid] = count
    return support


class TrussEngine:
    """
    Per-edge support and liveness, driven to a k-truss fixed point.

    Peeling runs in barrier rounds: the round's removals are fixed first, all
    decrements are computed against that one snapshot, and only then applied.
    """

    def __init__(self, index: AdjacencyIndex, *, executor=None, verbose: bool = False) -> None:
        if executor is None:
            executor = SerialExecutor(index)
        elif executor.index is not index:
            raise ValueError("executor is bound to a different AdjacencyIndex.")
        self.index = index
        self.executor = executor
        self.verbose = verbose
        self._initial: Optional[List[int]] = None
        self.support: List[int] = []
        self.alive = bytearray()

    def compute_initial_support(self) -> List[int]:
        if self._initial is None:
            self._initial = compute_support(self.index, self.executor)
        return list(self._initial)

    def reset(self) -> None:
        """Bring every edge back to Alive with its initial support."""
        self.support = self.compute_initial_support()
        self.alive = bytearray([ALIVE]) * self.index.num_edges

    def peel(self, k: int) -> TrussResult:
        check_k(k)
        self.reset()
        rounds, removed = self.peel_from_current(k)
        if self.verbose:
            print(
                f"[k={k}] fixed point after {rounds} round(s): "
                f"{self.index.num_edges - len(removed)} edge(s) survive",
                file=sys.stderr,
            )
        return self.result(k, rounds=rounds, removed=len(removed))

    def peel_from_current(self, k: int) -> Tuple[int, List[int]]:
        """
        Continue peeling from the current edge state with threshold k - 2.

        Returns (rounds with a removal, ids removed). State is not reset, so
        successive calls with growing k peel incrementally.
        """
        check_k(k)
        if len(self.alive) != self.index.num_edges:
            self.reset()
        threshold = k - 2
        alive = self.alive
        support = self.support

        work = [eid for eid in range(self.index.num_edges) if alive[eid] and support[eid] < threshold]
        rounds = 0
        removed: List[int] = []
        while work:
            rounds += 1
            before = len(removed)
            work = self._round(work, threshold, removed)
            if self.verbose:
                print(
                    f"[k={k} round={rounds}] removed {len(removed) - before} edge(s), "
                    f"{len(work)} queued",
                    file=sys.stderr,
                )
        return rounds, removed

    def _round(self, work: Sequence[int], threshold: int, removed: List[int]) -> List[int]:
        alive = self.alive
        support = self.support

        batch = [eid for eid in work if alive[eid]]
        snapshot = bytearray(alive)
        for eid in batch:
            snapshot[eid] = REMOVING
            alive[eid] = 0
        removed.extend(batch)

        # one immutable copy per round, shared by every job
        shared = bytes(snapshot)
        jobs = [(chunk, shared) for chunk in edge_batches(batch, self.executor.batch_size)]
        hits: Counter[int] = Counter()
        for part in self.executor.map(propagation_batch, jobs):
            hits.update(part)

        queued: List[int] = []
        for eid, n in hits.items():
            support[eid] -= n
            if support[eid] < threshold:
                queued.append(eid)
        queued.sort()
        return queued

    def result(self, k: int, *, rounds: int = 0, removed: int = 0) -> TrussResult:
        eids = [eid for eid in range(self.index.num_edges) if self.alive[eid]]
        return TrussResult(
            k=k,
            edges=tuple(self.index.edges[eid] for eid in eids),
            support=tuple(self.support[eid] for eid in eids),
            rounds=rounds,
            removed=removed,
        )


def k_truss(
    num_nodes: int,
    edges: Iterable[Sequence[int]],
    k: int,
    *,
    processes: Optional[int] = None,
    verbose: bool = False,
) -> TrussResult:
    """
    Build the index and peel to the k-truss in one call.

    processes=None picks serial or pool execution by graph size; 1 forces
    serial; anything larger runs a pool of that many workers.
    """
    check_k(k)
    index = AdjacencyIndex.build(num_nodes, edges)
    with make_executor(index, processes) as executor:
        return TrussEngine(index, executor=executor, verbose=verbose).peel(k)
