"""Functional helpers for sequences, mappings and callables."""

from underbar.core import (
    MISSING,
    Memoized,
    Once,
    contains,
    defaults,
    delay,
    each,
    every,
    extend,
    filter_,
    first,
    identity,
    index_of,
    last,
    map_,
    memoize,
    once,
    pluck,
    reduce_,
    reject,
    some,
    strict_equal,
    uniq,
)
from underbar.models import OperationMetrics, UnderbarSettings
from underbar.utils import (
    AsyncioScheduler,
    InvalidArgumentError,
    ThreadScheduler,
    UnderbarError,
    configure,
    get_settings,
    measure_performance,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AsyncioScheduler",
    "InvalidArgumentError",
    "Memoized",
    "Once",
    "OperationMetrics",
    "ThreadScheduler",
    "UnderbarError",
    "UnderbarSettings",
    "configure",
    "contains",
    "defaults",
    "delay",
    "each",
    "every",
    "extend",
    "filter_",
    "first",
    "get_settings",
    "identity",
    "index_of",
    "last",
    "map_",
    "measure_performance",
    "memoize",
    "once",
    "pluck",
    "reduce_",
    "reject",
    "some",
    "strict_equal",
    "uniq",
]
