"""Reusable decorators for training utilities."""

import functools
import logging
import time
from typing import Callable


def measure_time(func: Callable) -> Callable:
    """Log execution time of ``func`` on the logger of the module defining it."""
    log = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        # log execution time even if the decorated function throws error
        finally:
            elapsed = time.perf_counter() - start
            log.info(f"{func.__name__} finished in {elapsed:.3f} s")

    return wrapper
