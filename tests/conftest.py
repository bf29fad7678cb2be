import pytest

from stubkit import FailureCollector
from tests.doubles import FakeGreeter


@pytest.fixture
def greeter() -> FakeGreeter:
    return FakeGreeter()


@pytest.fixture
def reporter() -> FailureCollector:
    """A collector the test inspects itself, unlike ``mock_reporter``."""
    return FailureCollector()
