"""
Value and tag matchers used to query captured log entries.

A filter value is interpreted in this order:

1. ``None`` is a wildcard and matches anything.
2. A compiled regular expression is searched in the value.
3. Anything with a ``matches(value)`` method decides for itself.
4. Everything else is compared with ``==``.

``Equals``, ``Pattern`` and ``Predicate`` are the explicit forms of the
last three rules; plain values, compiled patterns and matcher objects can be
passed directly.
"""

import re
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union


class _Missing:
    """Marker for a tag key that is absent, as opposed to present with None."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Matcher:
    """Base class for filter values that decide matches themselves."""

    def matches(self, value: Any) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Equals(Matcher):
    """Match values equal to ``expected``."""

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return self.expected == value

    def __repr__(self) -> str:
        return f"Equals({self.expected!r})"


class Pattern(Matcher):
    """Match values whose string form contains a regular expression match."""

    def __init__(self, pattern: Union[str, re.Pattern], flags: int = 0):
        if isinstance(pattern, str):
            pattern = re.compile(pattern, flags)
        self.pattern = pattern

    def matches(self, value: Any) -> bool:
        if value is None:
            return False
        if not isinstance(value, (str, bytes)):
            value = str(value)
        try:
            return self.pattern.search(value) is not None
        except TypeError:
            # str pattern against bytes or the other way around
            return False

    def __repr__(self) -> str:
        return f"Pattern({self.pattern.pattern!r})"


class Predicate(Matcher):
    """Match values for which ``func`` returns a truthy result."""

    def __init__(self, func: Callable[[Any], Any], description: Optional[str] = None):
        self.func = func
        self.description = description or getattr(func, "__name__", repr(func))

    def matches(self, value: Any) -> bool:
        return bool(self.func(value))

    def __repr__(self) -> str:
        return f"Predicate({self.description})"


def anything() -> Predicate:
    """Match any value, including None."""
    return Predicate(lambda value: True, description="anything")


def instance_of(*types: type) -> Predicate:
    """Match values that are instances of any of ``types``."""
    names = ", ".join(t.__name__ for t in types)
    return Predicate(lambda value: isinstance(value, types), description=f"instance_of({names})")


def match_value(filter_value: Any, actual: Any) -> bool:
    """
    Check a single value against a filter value.

    Args:
        filter_value: None, compiled pattern, matcher or literal
        actual: Value taken from a log entry

    Returns:
        True if the value satisfies the filter
    """
    if filter_value is None:
        return True
    if isinstance(filter_value, re.Pattern):
        return Pattern(filter_value).matches(actual)
    matches = getattr(filter_value, "matches", None)
    if callable(matches) and not isinstance(filter_value, type):
        return bool(matches(actual))
    return filter_value == actual


def tag_key(key: Any) -> str:
    """Normalize a tag key so enum members and strings name the same tag."""
    if isinstance(key, Enum):
        key = key.value
    return str(key)


def stringify_keys(tags: Mapping[Any, Any]) -> dict:
    """Return a copy of ``tags`` with every top-level key normalized."""
    return {tag_key(key): value for key, value in tags.items()}


def match_tags(
    filter_tags: Optional[Mapping[Any, Any]], actual_tags: Optional[Mapping[Any, Any]]
) -> bool:
    """
    Check tags against a nested tag filter.

    Only the keys named in the filter are checked, at every nesting level.
    A key that is absent never matches; a key present with a None value is
    matched like any other value.

    Args:
        filter_tags: Mapping of tag names to filter values or nested filters
        actual_tags: Tags of a log entry

    Returns:
        True if every filter key matches
    """
    if filter_tags is None:
        return True
    if not isinstance(actual_tags, Mapping):
        return False

    actual = stringify_keys(actual_tags)
    for key, value_filter in filter_tags.items():
        tag_value = actual.get(tag_key(key), MISSING)
        if tag_value is MISSING:
            return False
        if isinstance(tag_value, Mapping):
            if not isinstance(value_filter, Mapping):
                return False
            if not match_tags(value_filter, tag_value):
                return False
        elif not match_value(value_filter, tag_value):
            return False
    return True
