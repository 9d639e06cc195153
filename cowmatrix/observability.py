"""
Observability utilities for cowmatrix.

This module provides:
- Logging configuration for the ``cowmatrix`` logger namespace
- A profiler timing the matrix operators by name and operand shape
"""

import logging
import time
import functools
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple, Union

from .config import PROFILING_ENABLED

PACKAGE_LOGGER_NAME = 'cowmatrix'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

# Handlers installed by configure_logging; replaced on every call
_installed_handlers = []


# ============================================================================
# Logging Configuration
# ============================================================================

def configure_logging(level: Union[str, int] = "INFO", log_file: Optional[str] = None):
    """
    Route the package's log records to the console and optionally a file.

    Calling this again replaces the handlers installed by the previous call,
    so reconfiguring never duplicates output. Handlers attached to the
    ``cowmatrix`` logger by other code are left in place.

    Args:
        level: Console level, as a name (``"DEBUG"``) or a logging constant
        log_file: Optional file path; the file receives every record at DEBUG

    Returns:
        The ``cowmatrix`` logger
    """
    log_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown logging level: {level!r}")

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    _installed_handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        package_logger.addHandler(handler)

    # The logger passes the lowest handler level; each handler filters further
    package_logger.setLevel(min(handler.level for handler in _installed_handlers))
    package_logger.propagate = False

    return package_logger


# ============================================================================
# Operator Profiling
# ============================================================================

def shape_signature(shapes: Iterable[Tuple[int, int]]) -> str:
    """Render operand shapes as e.g. ``"2x3, 3x4"``."""
    return ", ".join(f"{rows}x{columns}" for rows, columns in shapes)


@dataclass
class OperationStats:
    """Running timing statistics for one named operation."""
    count: int = 0
    total: float = 0.0
    minimum: float = float('inf')
    maximum: float = 0.0
    shapes: Counter = field(default_factory=Counter)

    def record(self, duration: float, signature: str):
        self.count += 1
        self.total += duration
        self.minimum = min(self.minimum, duration)
        self.maximum = max(self.maximum, duration)
        if signature:
            self.shapes[signature] += 1


class ExecutionProfiler:
    """
    Times matrix operations, keyed by operation name.

    Only running totals are kept, so memory stays constant per operation
    (plus one counter slot per distinct operand-shape combination) however
    many calls are profiled.

    Example:
        profiler = get_profiler()
        profiler.enable()

        c = a * b

        print(profiler.get_summary()["matrix.multiply"])
    """

    def __init__(self, enabled: bool = True):
        self.stats: Dict[str, OperationStats] = {}
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @contextmanager
    def profile(self, name: str, shapes: Iterable[Tuple[int, int]] = ()):
        """
        Context manager timing a code block under ``name``.

        Args:
            name: Name of the operation being profiled
            shapes: Operand shapes, counted per distinct combination
        """
        if not self._enabled:
            yield
            return

        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            stats = self.stats.setdefault(name, OperationStats())
            stats.record(duration, shape_signature(shapes))

    def profile_decorator(self, name: Optional[str] = None):
        """
        Decorator timing every call of a matrix operation.

        The shapes of the positional arguments that have a ``shape``
        attribute are recorded alongside the timing.

        Example:
            @profiler.profile_decorator("matrix.add")
            def add(lhs, rhs):
                ...
        """
        def decorator(func):
            profile_name = name or f"{func.__module__}.{func.__name__}"

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                if not self._enabled:
                    return func(*args, **kwargs)
                shapes = [arg.shape for arg in args if hasattr(arg, 'shape')]
                with self.profile(profile_name, shapes):
                    return func(*args, **kwargs)
            return wrapper
        return decorator

    def get_summary(self) -> Dict[str, Dict[str, object]]:
        """
        Get statistics for every profiled operation.

        Returns:
            Dictionary mapping operation names to ``count``, ``total``,
            ``mean``, ``min``, ``max`` (seconds) and ``shapes`` (call counts
            per operand-shape signature)
        """
        return {
            name: {
                'count': stats.count,
                'total': stats.total,
                'mean': stats.total / stats.count,
                'min': stats.minimum,
                'max': stats.maximum,
                'shapes': dict(stats.shapes),
            }
            for name, stats in self.stats.items()
            if stats.count
        }

    def reset(self):
        """Clear all profiling data."""
        self.stats.clear()

    def enable(self):
        """Enable profiling."""
        self._enabled = True

    def disable(self):
        """Disable profiling."""
        self._enabled = False


# Global profiler instance, used by the arithmetic operators
_global_profiler = ExecutionProfiler(enabled=PROFILING_ENABLED)

def get_profiler() -> ExecutionProfiler:
    """Get the global profiler instance."""
    return _global_profiler
