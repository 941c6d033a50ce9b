from .executor import PoolExecutor, SerialExecutor, default_executor, edge_batches, make_executor

__all__ = [
    "PoolExecutor",
    "SerialExecutor",
    "default_executor",
    "edge_batches",
    "make_executor",
]
