"""Worker-pool helpers shared by the multi-source algorithms.

Work is split into contiguous partitions, one pool task per partition. Each
task returns a private partial result and the submitting thread merges the
partials after waiting on the futures, so no shared structure is ever written
concurrently.
"""

from __future__ import annotations

import math
import os
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Iterable, List, Sequence, TypeVar

from netpaths.exceptions import InvalidArgument
from netpaths.logging import apply_exported_log_level, export_log_level, get_logger

logger = get_logger(__name__)

T = TypeVar("T")

EXECUTOR_KINDS = ("process", "thread")


def partition(items: Sequence[T], n: int) -> List[List[T]]:
    """Split ``items`` into ``n`` contiguous chunks.

    Every chunk has ``ceil(len(items) / n)`` elements except the trailing
    ones, which may be shorter or empty. Exactly ``n`` chunks are returned.

    Raises:
        InvalidArgument: If ``n`` is smaller than 1.
    """
    if n < 1:
        raise InvalidArgument(f"number of partitions must be positive, got {n}")
    size = math.ceil(len(items) / n)
    chunks = []
    for i in range(n):
        chunks.append(list(items[i * size : (i + 1) * size]))
    return chunks


def validate_pool_args(executor: Any, n: int) -> None:
    """Check the arguments of a partitioned computation."""
    if executor is None:
        raise InvalidArgument("executor should not be None")
    if n <= 1:
        raise InvalidArgument("number of partitions must be greater than 1")


def _worker_init() -> None:
    """Initialize a worker process with the parent's log level."""
    apply_exported_log_level()
    get_logger(f"{__name__}.worker").debug(f"Worker {os.getpid()} initialized")


def create_executor(kind: str, workers: int) -> Executor:
    """Create a fixed-size pool.

    Args:
        kind: ``"process"`` or ``"thread"``.
        workers: Number of workers.

    Returns:
        A ``concurrent.futures`` executor. The caller owns and shuts it down.
    """
    if workers < 1:
        raise InvalidArgument(f"number of workers must be positive, got {workers}")
    if kind == "process":
        # Propagate logging level to workers via environment
        export_log_level()
        logger.debug(f"Creating ProcessPoolExecutor with {workers} workers")
        return ProcessPoolExecutor(max_workers=workers, initializer=_worker_init)
    if kind == "thread":
        logger.debug(f"Creating ThreadPoolExecutor with {workers} workers")
        return ThreadPoolExecutor(max_workers=workers)
    raise InvalidArgument(
        f"unknown executor kind '{kind}', expected one of {', '.join(EXECUTOR_KINDS)}"
    )


def wait_tasks(tasks: Iterable[Future]) -> List[Any]:
    """Block until every task finishes and return their results in order.

    An exception raised inside a task is re-raised here.
    """
    results = []
    for task in tasks:
        results.append(task.result())
        logger.debug(f"Finished waiting for task {task}")
    return results
