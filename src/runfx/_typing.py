from collections.abc import Awaitable, Callable, Generator
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:  # pragma: no cover - type check only
    from .effects import Effect


R = TypeVar("R")

type Operation[C, T] = Callable[[C, "RunFn"], T | Awaitable[T]]
type Procedure[T] = Generator["Effect[Any]", Any, T]


class RunFn(Protocol):
    """Anything that executes an effect, most commonly a `Runner`."""

    def __call__(self, effect: "Effect[R]", /) -> R | Awaitable[R]: ...


def describe_value(value: Any) -> str:
    """Short description of an arbitrary value for error messages."""
    text = repr(value)
    if len(text) > 60:
        text = text[:57] + "..."
    return f"{text} ({type(value).__name__})"


def describe_callable(func: Any) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        return repr(func)
    return name
