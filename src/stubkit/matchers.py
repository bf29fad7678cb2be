"""Argument matchers — the predicates a stub uses to accept a call.

A raw value given to ``Mock.on`` becomes an exact matcher. Anything that
needs more than ``==`` (a nested field, a range, a type) goes through
``matched_by``.
"""

from __future__ import annotations

import inspect
import logging
import types
from typing import Any, Callable, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

Kind = tuple[type, ...]


class ArgMatcher:
    """Predicate over one positional argument."""

    def __init__(self, predicate: Callable[[Any], bool], description: str) -> None:
        self._predicate = predicate
        self.description = description

    def __call__(self, arg: Any) -> bool:
        return self._predicate(arg)

    def __repr__(self) -> str:
        return f"<ArgMatcher {self.description}>"


def exact(expected: Any) -> ArgMatcher:
    """Match an argument that is, or compares equal to, ``expected``.

    Values the runtime cannot compare never match: if ``==`` raises, or
    returns something without a truth value (array-likes), the result is False.
    """

    def _match(arg: Any) -> bool:
        if arg is expected:
            return True
        try:
            return bool(arg == expected)
        except Exception:
            logger.debug("Cannot compare %r with %r, treating as no match", arg, expected)
            return False

    return ArgMatcher(_match, f"== {expected!r}")


def matched_by(predicate: Callable[[Any], Any], of: Any = None) -> ArgMatcher:
    """Wrap a typed predicate so it can sit in a stub's argument list.

    The expected type is ``of`` or, failing that, the annotation on the
    predicate's first parameter. A value of another type is a non-match.
    Parameterized generics are checked by their origin (``list[str]`` accepts
    any list) and unions by their members. ``True``/``False`` are not accepted
    where ``int`` is expected unless ``bool`` is listed too.

        m.on("Send", matched_by(lambda msg: msg.body == "Hello", of=Message))
    """
    kind = _normalise_hint(of) if of is not None else _first_param_type(predicate)

    def _match(arg: Any) -> bool:
        if kind is not None:
            if not isinstance(arg, kind):
                return False
            if isinstance(arg, bool) and not _admits_bool(kind):
                return False
        return bool(predicate(arg))

    name = getattr(predicate, "__qualname__", repr(predicate))
    if kind is None:
        return ArgMatcher(_match, f"matched by {name}")
    return ArgMatcher(_match, f"{_kind_name(kind)} matched by {name}")


def anything() -> ArgMatcher:
    return ArgMatcher(lambda arg: True, "anything")


def as_matcher(value: Any) -> ArgMatcher:
    """Use ``value`` as-is if it is already a matcher, else match it exactly."""
    if isinstance(value, ArgMatcher):
        return value
    return exact(value)


def _first_param_type(predicate: Callable[..., Any]) -> Kind | None:
    try:
        params = list(inspect.signature(predicate).parameters.values())
    except (TypeError, ValueError):
        return None
    if not params:
        return None
    try:
        hints = get_type_hints(predicate)
    except Exception:
        logger.debug("Unresolvable annotations on %r, accepting any type", predicate)
        return None
    if params[0].name not in hints:
        return None
    return _normalise_hint(hints[params[0].name])


def _normalise_hint(hint: Any) -> Kind | None:
    """Reduce an annotation to a tuple usable with ``isinstance``.

    None means any value is accepted (``Any``, type variables, ``Literal``...).
    """
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        members = [_normalise_hint(arg) for arg in get_args(hint)]
        if any(member is None for member in members):
            return None
        return tuple(kind for member in members for kind in member)
    if origin is not None:
        hint = origin
    if isinstance(hint, type):
        return (hint,)
    return None


def _admits_bool(kind: Kind) -> bool:
    return bool in kind or int not in kind


def _kind_name(kind: Kind) -> str:
    return " | ".join(k.__name__ for k in kind)
