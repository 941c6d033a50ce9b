from .adjacency import AdjacencyIndex, Edge, canonical_edges

__all__ = [
    "AdjacencyIndex",
    "Edge",
    "canonical_edges",
]
