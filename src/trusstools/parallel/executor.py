from __future__ import annotations

from multiprocessing import Pool
from typing import Any, Callable, List, Optional, Sequence

from trusstools.config import (
    TRUSSTOOLS_BATCH_SIZE,
    TRUSSTOOLS_PARALLEL_MIN_EDGES,
    TRUSSTOOLS_PROCESSES,
)
from trusstools.structure.adjacency import AdjacencyIndex


WorkFn = Callable[[AdjacencyIndex, Any], Any]


_WORKER_INDEX: Optional[AdjacencyIndex] = None


def _worker_init(index: AdjacencyIndex) -> None:
    global _WORKER_INDEX
    _WORKER_INDEX = index


def _worker(task: tuple) -> Any:
    fn, job = task
    return fn(_WORKER_INDEX, job)


def edge_batches(eids: Sequence[int], size: int) -> List[Sequence[int]]:
    """Split edge ids into consecutive slices of at most size ids."""
    if size <= 0:
        raise ValueError("batch size must be positive.")
    return [eids[i : i + size] for i in range(0, len(eids), size)]


class SerialExecutor:
    """Runs work functions in the calling process."""

    def __init__(self, index: AdjacencyIndex, *, batch_size: int = TRUSSTOOLS_BATCH_SIZE) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive.")
        self.index = index
        self.batch_size = batch_size

    def map(self, fn: WorkFn, jobs: Sequence[Any]) -> List[Any]:
        return [fn(self.index, job) for job in jobs]

    def close(self) -> None:
        pass

    def __enter__(self) -> "SerialExecutor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PoolExecutor:
    """
    Runs work functions on a multiprocessing pool.

    The index is shipped once per worker through the pool initializer; jobs
    carry only edge ids (plus a liveness snapshot during peeling). Results
    come back in completion order, so callers must merge them by edge id.
    """

    def __init__(
        self,
        index: AdjacencyIndex,
        *,
        processes: int = TRUSSTOOLS_PROCESSES,
        batch_size: int = TRUSSTOOLS_BATCH_SIZE,
    ) -> None:
        if processes <= 0:
            raise ValueError("processes must be positive.")
        if batch_size <= 0:
            raise ValueError("batch_size must be positive.")
        self.index = index
        self.processes = processes
        self.batch_size = batch_size
        self._pool = Pool(processes=processes, initializer=_worker_init, initargs=(index,))

    def map(self, fn: WorkFn, jobs: Sequence[Any]) -> List[Any]:
        tasks = [(fn, job) for job in jobs]
        return list(self._pool.imap_unordered(_worker, tasks, chunksize=1))

    def close(self) -> None:
        self._pool.terminate()
        self._pool.join()

    def __enter__(self) -> "PoolExecutor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def default_executor(index: AdjacencyIndex):
    """Serial for small graphs or a single process, otherwise a pool."""
    if index.num_edges < TRUSSTOOLS_PARALLEL_MIN_EDGES or TRUSSTOOLS_PROCESSES <= 1:
        return SerialExecutor(index)
    return PoolExecutor(index)


def make_executor(index: AdjacencyIndex, processes: Optional[int] = None):
    """None defers to default_executor; 1 is serial; more is a pool of that size."""
    if processes is None:
        return default_executor(index)
    if processes <= 0:
        raise ValueError("processes must be positive.")
    if processes == 1:
        return SerialExecutor(index)
    return PoolExecutor(index, processes=processes)
