"""Bounded fan-out over a thread pool."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import structlog

logger = structlog.get_logger()


def run_bounded(
    max_concurrency: int,
    total_units: int,
    unit: Callable[[int], None],
) -> None:
    """Run ``unit(i)`` once for every ``i`` in ``range(total_units)``.

    At most ``max_concurrency`` units are in flight at any instant. A new
    unit is only submitted after a slot frees up, so nothing queues beyond
    the bound. Returns once every unit has finished.

    Units are expected to handle and report their own failures. Anything that
    still escapes a unit is logged and does not stop the remaining units.

    Args:
        max_concurrency: Maximum number of units running at once (>= 1).
        total_units: Number of units to run (>= 0).
        unit: Work function receiving the unit index.

    Raises:
        ValueError: If either argument is out of range.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")
    if total_units < 0:
        raise ValueError("total_units must not be negative")

    slots = threading.BoundedSemaphore(max_concurrency)
    completed = 0
    completed_lock = threading.Lock()

    def _on_done(index: int, future: Future[None]) -> None:
        nonlocal completed
        with completed_lock:
            completed += 1
        slots.release()
        error = future.exception()
        if error is not None:
            logger.error("bounded_unit_failed", index=index, error=str(error))

    logger.debug("bounded_run_started", total=total_units, max_concurrency=max_concurrency)
    with ThreadPoolExecutor(
        max_workers=max_concurrency,
        thread_name_prefix="ktoolhu-worker",
    ) as pool:
        for index in range(total_units):
            slots.acquire()
            future = pool.submit(unit, index)
            future.add_done_callback(lambda f, i=index: _on_done(i, f))

    logger.debug("bounded_run_finished", completed=completed)
