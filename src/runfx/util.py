import inspect
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:  # pragma: no cover - type check only
    from .effects import Effect


async def resolve[T](value: T | Awaitable[T]) -> T:
    """Await `value` if it is awaitable, otherwise return it unchanged.

    Effect operations may return either a plain value or an awaitable. This
    normalizes both into something that can be awaited.
    """
    if inspect.isawaitable(value):
        return await value
    return value


def pure[T](value: T) -> "Effect[T]":
    """Create an effect that ignores its context and returns `value`.

    Example:
        >>> import runfx as fx
        >>> fx.create_runner({})(fx.pure(42))
        42
    """
    # Imported here to avoid a circular import with .effects
    from .effects import create_effect

    def _pure(context: Any, run: Any) -> T:
        return value

    return create_effect(_pure)


def fail(exception: BaseException) -> "Effect[Never]":
    """Create an effect that raises `exception` when executed."""
    from .effects import create_effect

    def _fail(context: Any, run: Any) -> Never:
        raise exception

    return create_effect(_fail)
