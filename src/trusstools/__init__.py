"""
trusstools: k-truss subgraphs of static undirected graphs via support peeling
over a CSR adjacency index, with optional process-pool execution.
"""

from .errors import TrussError, InvalidGraph, InvalidNode, InvalidK
from .structure.adjacency import AdjacencyIndex
from .truss.engine import TrussEngine, TrussResult, compute_support, k_truss
from .truss.decompose import TrussDecomposition, truss_decomposition, max_truss

# Execution
from .parallel.executor import SerialExecutor, PoolExecutor, default_executor, make_executor

# NetworkX interop
from .interop.nxgraph import index_from_nx, k_truss_nx, trussness_nx

__all__ = [
    # Errors
    "TrussError",
    "InvalidGraph",
    "InvalidNode",
    "InvalidK",
    # Structure
    "AdjacencyIndex",
    # Truss
    "TrussEngine",
    "TrussResult",
    "compute_support",
    "k_truss",
    "TrussDecomposition",
    "truss_decomposition",
    "max_truss",
    # Execution
    "SerialExecutor",
    "PoolExecutor",
    "default_executor",
    "make_executor",
    # Interop
    "index_from_nx",
    "k_truss_nx",
    "trussness_nx",
]
