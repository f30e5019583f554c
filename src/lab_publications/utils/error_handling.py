"""Error handling utilities."""
import logging
from functools import wraps
from typing import Any, Callable


def returns_on_error(default_factory: Callable[[], Any]) -> Callable:
    """
    Decorator that turns any exception into a logged default result.

    Used at boundaries whose contract is total, e.g. the importer which
    must hand back a (possibly empty) list for any input.

    Args:
        default_factory: Called to build the value returned on failure
    """
    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {func.__qualname__}: {str(e)}", exc_info=True)
                return default_factory()
        return wrapper
    return decorator
