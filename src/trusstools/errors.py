from __future__ import annotations


class TrussError(ValueError):
    """Base class for bad input handed to trusstools."""


class InvalidGraph(TrussError):
    """Malformed graph: out-of-range id, self-loop, duplicate edge."""


class InvalidNode(TrussError):
    """Lookup on a node id outside [0, num_nodes)."""


class InvalidK(TrussError):
    """Truss parameter below the minimum k = 2."""


def check_k(k: int) -> int:
    # bool is an int subclass; True would silently mean k=1
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidK(f"k must be an int, got {k!r}")
    if k < 2:
        raise InvalidK(f"k must be >= 2, got {k}")
    return k
