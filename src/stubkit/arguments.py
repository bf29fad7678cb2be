from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


class MissingReturnValueError(LookupError):
    def __init__(self, method: str, index: int, available: int) -> None:
        self.method = method
        self.index = index
        super().__init__(
            f"No return value at position {index} for '{method}' "
            f"({available} value(s) available).\n"
            f"Was the call stubbed? Register one with "
            f"mock.on({method!r}, ...).then_return(...)"
        )


class Arguments(tuple):
    """Return values produced by ``Mock.called``.

    An empty ``Arguments`` means no stub matched the call.
    """

    method: str

    def __new__(cls, values: tuple[Any, ...] = (), method: str = "") -> Arguments:
        obj = super().__new__(cls, values)
        obj.method = method
        return obj

    def get(self, index: int) -> Any:
        if not -len(self) <= index < len(self):
            raise MissingReturnValueError(self.method, index, len(self))
        return self[index]

    def error(self, index: int) -> BaseException | None:
        """The value at ``index``, which must be None or an exception."""
        value = self.get(index)
        if value is not None and not isinstance(value, BaseException):
            raise TypeError(
                f"Return value {index} of '{self.method}' is not an exception: "
                f"{value!r}"
            )
        return value

    def typed(self, index: int, kind: type[T]) -> T:
        value = self.get(index)
        if not isinstance(value, kind):
            raise TypeError(
                f"Return value {index} of '{self.method}' is "
                f"{type(value).__name__}, expected {kind.__name__}"
            )
        return value

    def __repr__(self) -> str:
        return f"Arguments({self.method!r}, {tuple(self)!r})"
