from __future__ import annotations

import threading

import pytest

from stubkit import Call, MissingReturnValueError, Mock, anything, matched_by
from tests.doubles import Envelope, FakeGreeter, Letter


def test_stubbed_call_returns_registered_values(greeter: FakeGreeter):
    greeter.mock.on("Greet", "Hi", "Bob").then_return("Hi Bob!")

    assert greeter.greet("Hi", "Bob") == "Hi Bob!"
    assert greeter.mock.called("Greet", "Hi", "Bob") == ("Hi Bob!",)


def test_then_return_stores_stub():
    mock = Mock()
    stub = mock.on("Greet", "Hi", "Bob").then_return("Hi Bob!")

    assert mock.stubs("Greet") == (stub,)
    assert len(stub.matchers) == 2
    assert stub.returns == ("Hi Bob!",)


def test_unregistered_method_returns_empty_and_is_logged():
    mock = Mock()

    result = mock.called("Unknown", 1, "two")

    assert result == ()
    assert result.method == "Unknown"
    assert mock.calls("Unknown") == (Call(args=(1, "two")),)


def test_unmatched_call_surfaces_when_double_reads_result(greeter: FakeGreeter):
    greeter.mock.on("Greet", "Hi", "Bob").then_return("Hi Bob!")

    with pytest.raises(MissingReturnValueError, match="'Greet'"):
        greeter.greet("Hi", "Alice")
    assert greeter.mock.call_count("Greet") == 1


def test_distinct_stubs_resolve_independently():
    mock = Mock()
    mock.on("Add", 1, 2).then_return(3)
    mock.on("Add", 2, 2).then_return(4)

    assert mock.called("Add", 2, 2) == (4,)
    assert mock.called("Add", 1, 2) == (3,)


def test_first_registered_stub_wins():
    mock = Mock()
    mock.on("Greet", "Hi", anything()).then_return("first")
    mock.on("Greet", "Hi", "Bob").then_return("second")

    assert mock.called("Greet", "Hi", "Bob") == ("first",)


def test_arity_mismatch_skips_stub():
    mock = Mock()
    mock.on("Greet", "Hi").then_return("short")
    mock.on("Greet", "Hi", "Bob").then_return("long")

    assert mock.called("Greet", "Hi", "Bob") == ("long",)
    assert mock.called("Greet", "Hi", "Bob", "extra") == ()


def test_no_arg_stub(greeter: FakeGreeter):
    greeter.mock.on("Ping").then_return(None)

    assert greeter.ping() is None
    assert greeter.mock.calls("Ping") == (Call(args=()),)


def test_stub_returning_error(greeter: FakeGreeter):
    failure = RuntimeError("lookup failed")
    greeter.mock.on("Lookup", "k").then_return("", failure)

    value, err = greeter.lookup("k")

    assert value == ""
    assert err is failure


def test_stub_returning_value_and_no_error(greeter: FakeGreeter):
    greeter.mock.on("Lookup", "k").then_return("v", None)

    assert greeter.lookup("k") == ("v", None)


def test_method_names_are_case_sensitive():
    mock = Mock()
    mock.on("greet").then_return("lower")

    assert mock.called("Greet") == ()
    assert mock.called("greet") == ("lower",)


def test_predicate_on_nested_field(greeter: FakeGreeter):
    def says_hello(letter: Letter) -> bool:
        return letter.envelope.body == "Hello"

    greeter.mock.on("Send", matched_by(says_hello)).then_return(True)

    hello = Letter(Envelope("Hello"), "Bob")
    goodbye = Letter(Envelope("Goodbye"), "Bob")

    assert greeter.send(hello) is True
    assert greeter.mock.called("Send", goodbye) == ()
    assert greeter.mock.calls("Send") == (Call(args=(hello,)), Call(args=(goodbye,)))
    assert greeter.mock.calls("Send")[1].args[0] is goodbye


def test_predicate_type_mismatch_is_no_match():
    mock = Mock()
    mock.on("Send", matched_by(lambda letter: True, of=Letter)).then_return(True)

    assert mock.called("Send", 42) == ()


def test_mixed_matchers_and_raw_values():
    mock = Mock()
    mock.on("Put", "key", matched_by(lambda n: n > 0, of=int)).then_return("ok")

    assert mock.called("Put", "key", 5) == ("ok",)
    assert mock.called("Put", "key", -5) == ()
    assert mock.called("Put", "other", 5) == ()


def test_unhashable_and_incomparable_arguments():
    mock = Mock()
    mock.on("Store", [1, 2]).then_return("list")

    assert mock.called("Store", [1, 2]) == ("list",)
    assert mock.called("Store", {"a": 1}) == ()


def test_registration_does_not_touch_calls_and_lookup_does_not_touch_stubs():
    mock = Mock()
    mock.called("Greet", "Hi")
    mock.on("Greet", "Hi").then_return("hello")

    assert mock.calls("Greet") == (Call(args=("Hi",)),)

    before = mock.stubs("Greet")
    mock.called("Greet", "Hi")
    mock.called("Greet", "Yo")
    assert mock.stubs("Greet") == before


def test_calls_are_logged_in_order():
    mock = Mock()
    for i in range(3):
        mock.called("Tick", i)

    assert [c.args for c in mock.calls("Tick")] == [(0,), (1,), (2,)]


def test_instances_are_isolated():
    first, second = Mock(), Mock()
    first.on("Greet").then_return("one")
    first.called("Greet")

    assert second.called("Greet") == ()
    assert first.call_count("Greet") == 1
    assert second.call_count("Greet") == 1


def test_introspection_returns_snapshots():
    mock = Mock()
    mock.called("Greet")
    snapshot = mock.calls("Greet")
    mock.called("Greet")

    assert len(snapshot) == 1
    assert mock.call_count("Greet") == 2


def test_concurrent_calls_are_all_recorded():
    mock = Mock()
    mock.on("Tick", anything()).then_return("tock")
    results: list[tuple] = []
    results_lock = threading.Lock()

    def worker(n: int) -> None:
        for i in range(200):
            value = mock.called("Tick", (n, i))
            with results_lock:
                results.append(value)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert mock.call_count("Tick") == 8 * 200
    assert all(r == ("tock",) for r in results)
    assert len({c.args for c in mock.calls("Tick")}) == 8 * 200


def test_summary():
    mock = Mock()
    assert mock.summary() == "No calls recorded."

    mock.on("Greet", "Hi").then_return("hello")
    mock.called("Greet", "Hi")
    mock.called("Greet", "Yo")

    text = mock.summary()
    assert "Greet: 2 call(s), 1 stub(s)" in text
    assert "Greet('Yo',)" in text
