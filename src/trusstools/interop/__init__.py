from .nxgraph import index_from_nx, k_truss_nx, trussness_nx

__all__ = [
    "index_from_nx",
    "k_truss_nx",
    "trussness_nx",
]
