"""
Support code for underbar: errors, logging, configuration, timer schedulers
and performance measurement.

Nothing here touches collections directly; core.py builds on these pieces.
"""

import asyncio
import gc
import logging
import sys
import threading
import time
import tracemalloc
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from underbar.models import OperationMetrics, UnderbarSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'


# ---------- Errors ----------

class UnderbarError(Exception):
    """Base class for errors raised by underbar itself."""
    pass


class InvalidArgumentError(UnderbarError, TypeError):
    """Raised when a function is required but not callable, or a collection is missing."""
    pass


def require_callable(func: Any, name: str = "func") -> None:
    """Raise InvalidArgumentError unless func is callable."""
    if not callable(func):
        logger.debug(f"Rejected non-callable {name}: {func!r}")
        raise InvalidArgumentError(f"{name} must be callable, got {type(func).__name__}")


# ---------- Logging and configuration ----------

_settings = UnderbarSettings()


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach one stream handler to the package logger and set its level."""
    package_logger = logging.getLogger('underbar')
    package_logger.setLevel(level)
    if not any(getattr(h, '_underbar_handler', False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._underbar_handler = True
        package_logger.addHandler(handler)
    return package_logger


def configure(**overrides) -> UnderbarSettings:
    """Validate overrides on top of the active settings and apply them."""
    global _settings
    merged = {**_settings.model_dump(), **overrides}
    _settings = UnderbarSettings(**merged)
    setup_logging(_settings.log_level)
    logger.debug(f"Configured underbar: {_settings.model_dump()}")
    return _settings


def get_settings() -> UnderbarSettings:
    """Return the active settings."""
    return _settings


def reset_settings() -> UnderbarSettings:
    """Restore default settings without touching logging handlers."""
    global _settings
    _settings = UnderbarSettings()
    return _settings


# ---------- Schedulers ----------

class TimerHandle(Protocol):
    """Anything a scheduler hands back; only cancel() is relied on."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs callback(*args) once, no earlier than `seconds` from now."""

    def schedule(self, seconds: float, callback: Callable, *args) -> TimerHandle:
        ...


class ThreadScheduler:
    """Schedules callbacks on threading.Timer threads."""

    def __init__(self, daemon: Optional[bool] = None):
        self.daemon = daemon

    def schedule(self, seconds: float, callback: Callable, *args) -> threading.Timer:
        timer = threading.Timer(seconds, callback, args=args)
        timer.daemon = get_settings().timer_daemon if self.daemon is None else self.daemon
        timer.start()
        return timer


class AsyncioScheduler:
    """Schedules callbacks on the running event loop via call_later."""

    def schedule(self, seconds: float, callback: Callable, *args) -> asyncio.TimerHandle:
        # Raises RuntimeError when no loop is running
        loop = asyncio.get_running_loop()
        return loop.call_later(seconds, callback, *args)


def get_scheduler() -> Scheduler:
    """Return a scheduler for the configured delay backend."""
    if get_settings().delay_backend == "asyncio":
        return AsyncioScheduler()
    return ThreadScheduler()


# ---------- Performance measurement ----------

_performance_metrics: List[OperationMetrics] = []


def measure_performance(operation_name: str, func: Callable, *args, **kwargs) -> Tuple[Any, OperationMetrics]:
    """Call func(*args, **kwargs), recording wall time and peak memory.

    Returns (result, metrics). Exceptions from func are recorded and re-raised.
    """
    started_tracing = not tracemalloc.is_tracing()
    if started_tracing:
        tracemalloc.start()
    gc.collect()
    start_time = time.perf_counter()

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        metrics = _snapshot(operation_name, start_time, success=False, error=str(e))
        logger.debug(f"{operation_name} failed after {metrics.execution_time_ms:.3f}ms: {e}")
        raise
    else:
        metrics = _snapshot(
            operation_name,
            start_time,
            success=True,
            result_size=len(result) if hasattr(result, "__len__") else None,
        )
        return result, metrics
    finally:
        if started_tracing:
            tracemalloc.stop()


def _snapshot(operation_name: str, start_time: float, **fields) -> OperationMetrics:
    execution_time_ms = (time.perf_counter() - start_time) * 1000
    _, peak = tracemalloc.get_traced_memory()
    metrics = OperationMetrics(
        operation=operation_name,
        execution_time_ms=execution_time_ms,
        memory_usage_mb=peak / 1024 / 1024,
        **fields
    )
    _performance_metrics.append(metrics)
    return metrics


def get_performance_summary() -> Dict[str, Any]:
    """Aggregate every recorded measurement."""
    count = len(_performance_metrics)
    if count == 0:
        return {
            "total_operations": 0,
            "failed_operations": 0,
            "total_time_ms": 0.0,
            "avg_time_ms": 0.0,
            "peak_memory_mb": 0.0
        }

    total_time = sum(m.execution_time_ms for m in _performance_metrics)
    return {
        "total_operations": count,
        "failed_operations": sum(1 for m in _performance_metrics if not m.success),
        "total_time_ms": total_time,
        "avg_time_ms": total_time / count,
        "peak_memory_mb": max(m.memory_usage_mb for m in _performance_metrics)
    }


def clear_performance_metrics():
    """Drop all recorded measurements."""
    _performance_metrics.clear()
