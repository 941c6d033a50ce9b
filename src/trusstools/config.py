from __future__ import annotations

import os
from multiprocessing import cpu_count


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


TRUSSTOOLS_PROCESSES = _env_int("TRUSSTOOLS_PROCESSES", max(1, cpu_count() - 1))
TRUSSTOOLS_BATCH_SIZE = _env_int("TRUSSTOOLS_BATCH_SIZE", 2048)
TRUSSTOOLS_PARALLEL_MIN_EDGES = _env_int("TRUSSTOOLS_PARALLEL_MIN_EDGES", 50_000, minimum=0)
