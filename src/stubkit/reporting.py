from __future__ import annotations

from typing import Protocol


class Reporter(Protocol):
    """Anything that can record a non-fatal test failure."""

    def error(self, message: str) -> None: ...


class FailureCollector:
    """Reporter that keeps failures until the test is over.

    Args:
        fail_fast: Raise ``AssertionError`` on the first failure instead of
                   collecting it.
    """

    def __init__(self, fail_fast: bool = False) -> None:
        self.fail_fast = fail_fast
        self._failures: list[str] = []

    def error(self, message: str) -> None:
        self._failures.append(message)
        if self.fail_fast:
            raise AssertionError(message)

    @property
    def failures(self) -> list[str]:
        return list(self._failures)

    @property
    def failed(self) -> bool:
        return len(self._failures) > 0

    def clear(self) -> None:
        self._failures.clear()

    def summary(self, start: int = 0) -> str:
        """Describe the failures from index ``start`` on."""
        failures = self._failures[start:]
        lines = [f"{len(failures)} mock assertion(s) failed:"]
        lines.extend(f"  - {msg}" for msg in failures)
        return "\n".join(lines)

    def check(self) -> None:
        """Raise one ``AssertionError`` listing every collected failure."""
        if self._failures:
            raise AssertionError(self.summary())
