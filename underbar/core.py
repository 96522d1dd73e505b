"""
underbar.core - collection engine and function combinators

Every collection operation is built on two primitives: each() visits the
elements of a sequence or the entries of a mapping, and reduce_() folds
them. Everything is eager; results are plain lists, bools or values.

Names that would shadow builtins carry a trailing underscore (map_,
filter_, reduce_).
"""

import functools
import logging
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import Any, Callable, List, Optional

from underbar.utils import InvalidArgumentError, get_scheduler, require_callable

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for an omitted argument where None is a legitimate value."""

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()


def identity(value):
    """Return value unchanged."""
    return value


def strict_equal(a, b) -> bool:
    """Equality without cross-type coercion: 1, 1.0 and True never match."""
    return a is b or (type(a) is type(b) and a == b)


# --------- sequence access ----------

def first(sequence, n: Optional[int] = None):
    """First element (None if empty), or a list of the first n elements."""
    if sequence is None:
        raise InvalidArgumentError("first() requires a sequence, got None")
    if n is None:
        return sequence[0] if len(sequence) else None
    return list(sequence[:n])


def last(sequence, n: Optional[int] = None):
    """Last element (None if empty), or a list of the last n elements."""
    if sequence is None:
        raise InvalidArgumentError("last() requires a sequence, got None")
    length = len(sequence)
    if n is None:
        return sequence[length - 1] if length else None
    if n > length:
        return list(sequence)
    return list(sequence[length - n:])


# --------- traversal ----------

def each(collection, visitor: Callable) -> None:
    """
    Call visitor(value, index_or_key, collection) for every element.

    Sequences are visited by index in increasing order. Mappings, and plain
    objects through their attributes, are visited key by key. Other
    iterables are materialized into a list first and that list is what the
    visitor receives as its third argument.
    """
    require_callable(visitor, "visitor")
    if collection is None:
        raise InvalidArgumentError("each() requires a collection, got None")

    if isinstance(collection, Mapping):
        for key in list(collection):
            visitor(collection[key], key, collection)
    elif isinstance(collection, Sequence):
        for index in range(len(collection)):
            visitor(collection[index], index, collection)
    elif isinstance(collection, Iterable):
        materialized = list(collection)
        for index in range(len(materialized)):
            visitor(materialized[index], index, materialized)
    elif hasattr(collection, '__dict__'):
        attributes = vars(collection)
        for key in list(attributes):
            visitor(attributes[key], key, collection)
    else:
        raise InvalidArgumentError(
            f"each() cannot traverse {type(collection).__name__}"
        )


def index_of(sequence, target) -> int:
    """Index of the first element strictly equal to target, or -1."""
    result = -1

    def _visit(item, index, _):
        nonlocal result
        if result == -1 and strict_equal(item, target):
            result = index

    each(sequence, _visit)
    return result


# --------- selection ----------

def filter_(collection, predicate: Callable) -> List[Any]:
    """Elements for which predicate(value) is truthy, in traversal order."""
    require_callable(predicate, "predicate")
    results = []

    def _visit(value, *_):
        if predicate(value):
            results.append(value)

    each(collection, _visit)
    return results


def reject(collection, predicate: Callable) -> List[Any]:
    """Elements for which predicate(value) is falsy."""
    require_callable(predicate, "predicate")
    return filter_(collection, lambda value: not predicate(value))


def uniq(sequence) -> List[Any]:
    """
    Sorted, duplicate-free copy of sequence.

    Output follows sort order, not input order. The input is left as is;
    mixed incomparable elements raise TypeError from sorted().
    """
    if sequence is None:
        raise InvalidArgumentError("uniq() requires a sequence, got None")
    ordered = sorted(sequence)
    results = []
    for i, value in enumerate(ordered):
        if i == 0 or value != ordered[i - 1]:
            results.append(value)
    return results


# --------- transformation ----------

def map_(collection, transform: Callable) -> List[Any]:
    """transform(value) for every element, same length, traversal order."""
    require_callable(transform, "transform")
    results = []
    each(collection, lambda value, *_: results.append(transform(value)))
    return results


def _get(item, key):
    """Member access that yields None for anything absent."""
    if isinstance(item, Mapping):
        return item.get(key)
    if isinstance(item, Sequence):
        # Only plain non-negative ints index; bools and negatives are absent
        if type(key) is int and 0 <= key < len(item):
            return item[key]
        return None
    if isinstance(key, str):
        return getattr(item, key, None)
    return None


def pluck(collection, key) -> List[Any]:
    """Value of key on every item; None where the item lacks it."""
    return map_(collection, lambda item: _get(item, key))


# --------- reduction ----------

def reduce_(collection, iterator: Callable, seed=MISSING):
    """
    Fold collection into a single value with iterator(accumulator, item).

    Without a seed the first element becomes the accumulator and is never
    passed to iterator. With a seed (None included) every element is.
    An empty collection returns the seed, or None when there is none.
    """
    require_callable(iterator, "iterator")
    initialize = seed is MISSING
    accumulator = None if initialize else seed

    def _visit(value, *_):
        nonlocal accumulator, initialize
        if initialize:
            accumulator = value
            initialize = False
        else:
            accumulator = iterator(accumulator, value)

    each(collection, _visit)
    return accumulator


def contains(collection, target) -> bool:
    """True if any element is strictly equal to target."""
    return bool(reduce_(
        collection,
        lambda was_found, item: was_found or strict_equal(item, target),
        False,
    ))


def every(collection, predicate: Optional[Callable] = None) -> bool:
    """True if predicate holds for all elements (vacuously true when empty)."""
    predicate = predicate or identity
    require_callable(predicate, "predicate")
    # predicate is skipped once the accumulator turns falsy
    return bool(reduce_(
        collection,
        lambda accumulator, value: accumulator and predicate(value),
        True,
    ))


def some(collection, predicate: Optional[Callable] = None) -> bool:
    """True if predicate holds for at least one element."""
    predicate = predicate or identity
    require_callable(predicate, "predicate")
    return not every(collection, lambda value: not predicate(value))


# --------- merging ----------

def _own_items(source):
    if isinstance(source, Mapping):
        return list(source.items())
    if hasattr(source, '__dict__'):
        return list(vars(source).items())
    raise InvalidArgumentError(f"Cannot read keys from {type(source).__name__}")


def _has_key(target, key) -> bool:
    if isinstance(target, Mapping):
        return key in target
    return hasattr(target, key)


def _set_key(target, key, value) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    else:
        setattr(target, key, value)


def _require_target(target, name: str) -> None:
    if target is None:
        raise InvalidArgumentError(f"{name}() requires a target, got None")
    if isinstance(target, Mapping) and not isinstance(target, MutableMapping):
        raise InvalidArgumentError(
            f"{name}() requires a mutable target, got {type(target).__name__}"
        )


def extend(target, *sources):
    """Copy every key of each source onto target; later sources win."""
    _require_target(target, "extend")
    for source in sources:
        if source is None:
            continue
        for key, value in _own_items(source):
            _set_key(target, key, value)
    return target


def defaults(target, *sources):
    """Fill keys target lacks; earlier sources win, existing keys are kept."""
    _require_target(target, "defaults")
    for source in sources:
        if source is None:
            continue
        for key, value in _own_items(source):
            if not _has_key(target, key):
                _set_key(target, key, value)
    return target


# --------- function combinators ----------

class Once:
    """
    Callable that runs func on the first call only and then keeps returning
    that first result, whatever arguments later calls pass.
    """

    def __init__(self, func: Callable):
        require_callable(func)
        functools.update_wrapper(self, func)
        self.func = func
        self.called = False
        self.result = None

    def __call__(self, *args, **kwargs):
        if not self.called:
            self.result = self.func(*args, **kwargs)
            self.called = True
            logger.debug(f"once: ran {getattr(self.func, '__name__', self.func)!s}")
        return self.result

    def __get__(self, instance, owner=None):
        # Bound access shares this instance's state across all receivers
        if instance is None:
            return self
        return functools.partial(self, instance)


class Memoized:
    """
    Callable caching func's result per argument.

    Only single, hashable positional arguments are supported; the argument
    itself is the cache key. Other call shapes are undefined behaviour.
    Used as a method, the receiver is passed on to func and one cache is
    shared by every receiver.
    """

    def __init__(self, func: Callable):
        require_callable(func)
        functools.update_wrapper(self, func)
        self.func = func
        self.cache = {}

    def __call__(self, arg):
        return self._lookup(arg, (arg,))

    def __get__(self, instance, owner=None):
        # Receiver goes to func as self; the cache stays keyed on arg alone
        if instance is None:
            return self
        return functools.partial(self._call_bound, instance)

    def _call_bound(self, instance, arg):
        return self._lookup(arg, (instance, arg))

    def _lookup(self, key, args):
        if key in self.cache:
            logger.debug(f"memoize: hit for {key!r}")
            return self.cache[key]
        logger.debug(f"memoize: miss for {key!r}")
        result = self.cache[key] = self.func(*args)
        return result

    def cache_clear(self):
        self.cache.clear()


def once(func: Callable) -> Once:
    """Wrap func so it runs at most once."""
    return Once(func)


def memoize(func: Callable) -> Memoized:
    """Wrap a single-argument func with a per-argument result cache."""
    return Memoized(func)


def delay(func: Callable, wait: float, *args, scheduler=None):
    """
    Run func(*args) once, no sooner than `wait` milliseconds from now.

    Returns the scheduler's handle; call cancel() on it to drop the call.
    """
    require_callable(func)
    seconds = max(wait, 0) / 1000.0
    scheduler = scheduler or get_scheduler()
    logger.debug(f"delay: scheduling {getattr(func, '__name__', func)!s} in {seconds:.3f}s")
    return scheduler.schedule(seconds, func, *args)
