"""Thread pool that keeps tree analysis off the event loop.

The pool is created on first use and sized from ``GTOLEAKS_WORKERS`` when set,
otherwise from the CPU count.  The web app shuts it down on exit.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any

__all__ = ["run_blocking", "shutdown_executor", "worker_count"]

logger = logging.getLogger(__name__)

WORKERS_ENV = "GTOLEAKS_WORKERS"
THREAD_PREFIX = "gto-analysis"

_executor: ThreadPoolExecutor | None = None
_lock = threading.Lock()


def worker_count() -> int:
    raw = os.getenv(WORKERS_ENV)
    if raw:
        try:
            return max(1, int(raw))
        except ValueError:
            logger.warning("invalid worker count, using default", extra={"value": raw})
    return max(1, min(32, os.cpu_count() or 1))


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=worker_count(), thread_name_prefix=THREAD_PREFIX)
        return _executor


async def run_blocking(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_get_executor(), partial(func, *args, **kwargs))


def shutdown_executor(*, wait: bool = True) -> None:
    """Stop the pool; the next :func:`run_blocking` call starts a fresh one."""

    global _executor
    with _lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)
