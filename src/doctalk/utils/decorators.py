"""Decorators for timing slow steps and loading models on first use."""

import functools
import logging
import time
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec("P")
R = TypeVar("R")


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log the wall time of each call on the logger of the decorated function's module."""
    log = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            log.info(f"{func.__qualname__} took {time.perf_counter() - started:.2f}s")
    return wrapper


def require_loaded(method: Callable[P, R]) -> Callable[P, R]:
    """Call `self.load()` first when `self.is_loaded` is false."""
    @functools.wraps(method)
    def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
        if not self.is_loaded:
            logging.getLogger(method.__module__).info(
                f"{type(self).__name__}: loading model on first use"
            )
            self.load()
        return method(self, *args, **kwargs)
    return wrapper
