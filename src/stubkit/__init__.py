from stubkit.arguments import Arguments, MissingReturnValueError
from stubkit.matchers import ArgMatcher, anything, as_matcher, exact, matched_by
from stubkit.mock import Call, Mock, Stub, StubBuilder
from stubkit.reporting import FailureCollector, Reporter

__all__ = [
    "ArgMatcher",
    "Arguments",
    "Call",
    "FailureCollector",
    "MissingReturnValueError",
    "Mock",
    "Reporter",
    "Stub",
    "StubBuilder",
    "anything",
    "as_matcher",
    "exact",
    "matched_by",
]
