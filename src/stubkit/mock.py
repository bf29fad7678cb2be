"""Stub registry, call log and the ``Mock`` engine that owns them.

A test double holds a ``Mock`` and forwards each of its methods to it:

    class FakeGreeter:
        def __init__(self) -> None:
            self.mock = Mock()

        def greet(self, greeting: str, name: str) -> str:
            return self.mock.called("Greet", greeting, name).get(0)

Stubs are registered with ``on(...).then_return(...)`` and checked in
registration order; the first one whose matchers all accept the call wins.
Every call is logged whether or not a stub matched.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from stubkit.arguments import Arguments
from stubkit.matchers import ArgMatcher, as_matcher
from stubkit.reporting import Reporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stub:
    """Argument matchers plus the values to return when they all match."""

    matchers: tuple[ArgMatcher, ...]
    returns: tuple[Any, ...]

    def matches(self, args: tuple[Any, ...]) -> bool:
        if len(args) != len(self.matchers):
            return False
        return all(matcher(arg) for matcher, arg in zip(self.matchers, args))


@dataclass(frozen=True)
class Call:
    """One recorded invocation."""

    args: tuple[Any, ...]


class StubBuilder:
    """Returned by ``Mock.on``; ``then_return`` completes the stub."""

    def __init__(self, mock: Mock, method: str, matchers: list[ArgMatcher]) -> None:
        self._mock = mock
        self.method = method
        self.matchers = matchers

    def then_return(self, *values: Any) -> Stub:
        stub = Stub(matchers=tuple(self.matchers), returns=values)
        self._mock._add_stub(self.method, stub)
        return stub


class Mock:
    """Records calls for one test double and answers them from its stubs.

    Safe to drive from several threads: every operation holds one lock.
    """

    def __init__(self) -> None:
        self._stubs: dict[str, list[Stub]] = {}
        self._calls: dict[str, list[Call]] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # Registration and lookup                                             #
    # ------------------------------------------------------------------ #

    def on(self, method: str, *args: Any) -> StubBuilder:
        """Start a stub for ``method``.

        Raw values are matched exactly; ``ArgMatcher`` instances are used as-is.
        """
        return StubBuilder(self, method, [as_matcher(arg) for arg in args])

    def _add_stub(self, method: str, stub: Stub) -> None:
        with self._lock:
            self._stubs.setdefault(method, []).append(stub)
        logger.debug(
            "Stub registered: %s/%d -> %r", method, len(stub.matchers), stub.returns
        )

    def called(self, method: str, *args: Any) -> Arguments:
        """Record a call and return the values of the first matching stub.

        Returns an empty ``Arguments`` when no stub matches.
        """
        with self._lock:
            self._calls.setdefault(method, []).append(Call(args=args))
            for stub in self._stubs.get(method, ()):
                if stub.matches(args):
                    logger.debug("Call %s%r matched stub -> %r", method, args, stub.returns)
                    return Arguments(stub.returns, method=method)
        logger.debug("Call %s%r matched no stub", method, args)
        return Arguments((), method=method)

    # ------------------------------------------------------------------ #
    # Introspection                                                       #
    # ------------------------------------------------------------------ #

    def calls(self, method: str) -> tuple[Call, ...]:
        with self._lock:
            return tuple(self._calls.get(method, ()))

    def stubs(self, method: str) -> tuple[Stub, ...]:
        with self._lock:
            return tuple(self._stubs.get(method, ()))

    def call_count(self, method: str) -> int:
        return len(self.calls(method))

    # ------------------------------------------------------------------ #
    # Assertions — report through the reporter, never raise               #
    # ------------------------------------------------------------------ #

    def assert_called(self, reporter: Reporter, method: str, *args: Any) -> bool:
        """Report a failure unless some recorded call to ``method`` had ``args``."""
        calls = self.calls(method)
        if not calls:
            reporter.error(f"Method '{method}' was never called.")
            return False

        expected = Stub(matchers=tuple(as_matcher(a) for a in args), returns=())
        if any(expected.matches(call.args) for call in calls):
            return True

        reporter.error(
            f"Method '{method}' was called, but never with {args!r}.\n"
            f"Actual calls: {[call.args for call in calls]}"
        )
        return False

    def assert_not_called(self, reporter: Reporter, method: str) -> bool:
        calls = self.calls(method)
        if calls:
            reporter.error(
                f"Method '{method}' was called {len(calls)} time(s) but expected 0.\n"
                f"Arguments: {[call.args for call in calls]}"
            )
            return False
        return True

    def assert_number_of_calls(self, reporter: Reporter, method: str, expected: int) -> bool:
        """Report a failure unless ``method`` was called exactly ``expected`` times.

        A method that was never called has no log entry and always fails,
        even for ``expected == 0``. Use ``assert_not_called`` for that case.
        """
        with self._lock:
            recorded = method in self._calls
            actual = len(self._calls.get(method, ()))
        if not recorded:
            reporter.error(
                f"Method '{method}' expected {expected} call(s), but no calls were recorded."
            )
            return False
        if actual != expected:
            reporter.error(f"Method '{method}' expected {expected} call(s), got {actual}.")
            return False
        return True

    # ------------------------------------------------------------------ #
    # Debug                                                               #
    # ------------------------------------------------------------------ #

    def summary(self) -> str:
        with self._lock:
            snapshot = {m: list(calls) for m, calls in self._calls.items()}
            stub_counts = {m: len(stubs) for m, stubs in self._stubs.items()}
        if not snapshot:
            return "No calls recorded."
        lines = []
        for method, calls in snapshot.items():
            lines.append(
                f"{method}: {len(calls)} call(s), {stub_counts.get(method, 0)} stub(s)"
            )
            lines.extend(f"  {method}{call.args!r}" for call in calls)
        return "\n".join(lines)

    def print_summary(self) -> None:
        print("\n" + self.summary())
