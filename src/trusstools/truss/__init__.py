from .engine import TrussEngine, TrussResult, compute_support, k_truss
from .decompose import TrussDecomposition, max_truss, truss_decomposition
from .support import propagation_batch, support_batch, triangle_count

__all__ = [
    "TrussEngine",
    "TrussResult",
    "compute_support",
    "k_truss",
    "TrussDecomposition",
    "max_truss",
    "truss_decomposition",
    "propagation_batch",
    "support_batch",
    "triangle_count",
]
