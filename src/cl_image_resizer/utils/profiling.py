"""Stage timing for the resize pipeline."""

import inspect
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed(label: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator logging the elapsed time of a pipeline stage at DEBUG level.

    The elapsed time is logged whether the stage returns or raises.

    Usage:
        @timed("resized")
        def resize_image(raster, spec, filter_type):
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                start_time = time.perf_counter()
                try:
                    return await cast(Callable[P, Awaitable[R]], func)(*args, **kwargs)
                finally:
                    _log_elapsed(label, start_time)

            return cast(Callable[P, R], async_wrapper)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _log_elapsed(label, start_time)

        return wrapper

    return decorator


def _log_elapsed(label: str, start_time: float) -> None:
    elapsed_secs = time.perf_counter() - start_time
    logger.debug(f"{label} elapsed_secs={elapsed_secs:.3f}")
