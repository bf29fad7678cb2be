"""pytest integration. Enable with ``pytest_plugins = ["stubkit.plugin"]``."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from stubkit.reporting import FailureCollector

REPORTER_ATTR = "_stubkit_reporter"
REPORTED_ATTR = "_stubkit_reported"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("stubkit")
    group.addoption(
        "--mock-fail-fast",
        action="store_true",
        default=False,
        help="Stop a test at its first failed mock assertion.",
    )


@pytest.fixture
def mock_reporter(request: pytest.FixtureRequest) -> FailureCollector:
    """Collects failed mock assertions; the test fails once its body is done.

    Failures recorded by fixtures during teardown fail the teardown phase.
    If the body fails for another reason, the messages are attached to that
    failure.

    Usage:

        def test_greeting(mock_reporter):
            greeter = FakeGreeter()
            ...
            greeter.mock.assert_called(mock_reporter, "Greet", "Hi", "Bob")
            greeter.mock.assert_number_of_calls(mock_reporter, "Greet", 1)
    """
    fail_fast = request.config.getoption("--mock-fail-fast", default=False)
    reporter = FailureCollector(fail_fast=fail_fast)
    setattr(request.node, REPORTER_ATTR, reporter)
    return reporter


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: pytest.CallInfo,  # noqa: ARG001
) -> Generator[None, None, None]:
    outcome = yield
    rep = outcome.get_result()
    if rep.when not in ("call", "teardown"):
        return
    reporter: FailureCollector | None = getattr(item, REPORTER_ATTR, None)
    if reporter is None:
        return
    # Failures already shown in the call phase are not repeated at teardown
    start = getattr(item, REPORTED_ATTR, 0)
    if len(reporter.failures) <= start:
        return
    setattr(item, REPORTED_ATTR, len(reporter.failures))
    text = reporter.summary(start=start)
    if rep.passed:
        rep.outcome = "failed"
        rep.longrepr = text
    else:
        rep.sections.append((f"mock assertions ({rep.when})", text))
