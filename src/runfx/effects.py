import logging
import warnings
from collections.abc import Awaitable, Callable, Coroutine, Generator
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from ._typing import Operation, Procedure, RunFn, describe_callable, describe_value
from .util import resolve

logger = logging.getLogger(__name__)

R = TypeVar("R")  # Result type of an effect
C = TypeVar("C")  # Context type bound to a runner
P = ParamSpec("P")  # Procedure parameters specification

# Only create_effect holds this, so Effect instances cannot be forged.
_SEAL = object()


class NotAnEffectError(TypeError):
    """Exception raised when a value that is not an `Effect` is given to a runner."""

    __match_args__ = ("value",)

    def __init__(self, value: Any, message: str | None = None):
        """Initialize the exception with the offending value."""
        super().__init__(message or f"not an Effect: {describe_value(value)}")
        self.value = value


class InvalidProposalError(NotAnEffectError):
    """Exception raised when a sequenced procedure yields something other than an `Effect`."""

    __match_args__ = ("value", "step")

    def __init__(self, value: Any, step: int):
        super().__init__(
            value,
            f"expected an Effect to be proposed, got {describe_value(value)} at step {step}",
        )
        self.step = step


class Effect[R]:
    """A deferred operation that does nothing until it is executed by a runner.

    Effects are created with `create_effect` (or `sequence`) and are immutable.
    They cannot be instantiated or subclassed directly, so any `Effect`
    instance is known to have been built by this library.
    """

    __slots__ = ("_operation",)

    def __init__(self, operation: Operation[Any, R], *, _seal: object = None):
        if _seal is not _SEAL:
            raise TypeError("Effect cannot be instantiated directly, use create_effect()")
        object.__setattr__(self, "_operation", operation)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        raise TypeError(f"Effect cannot be subclassed (attempted by {cls.__name__})")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Effect is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Effect is immutable, cannot delete {name!r}")

    def execute(self, context: Any, run: RunFn) -> R | Awaitable[R]:
        """Invoke the wrapped operation with `context` and the run-function `run`.

        This is normally called by a `Runner`; calling it by hand bypasses the
        runner's type check but is otherwise equivalent.
        """
        return self._operation(context, run)

    def __repr__(self) -> str:
        """Return a string representation of the effect for debugging."""
        return f"Effect({describe_callable(self._operation)})"


def create_effect(operation: Operation[Any, R]) -> Effect[R]:
    """Wrap `operation` into an inert effect.

    Args:
        operation: A callable taking `(context, run)`. It is called once each
                   time the effect is executed, receiving the runner's context
                   and the runner itself, which it may use to execute nested
                   effects. It may return a plain value or an awaitable.

    Returns:
        An `Effect` that calls `operation` only when it is run.
    """
    return Effect(operation, _seal=_SEAL)


def is_effect(value: Any) -> bool:
    """Return True if `value` is an effect created by this library."""
    return isinstance(value, Effect)


class Runner[C]:
    """Run-function bound to a single context.

    Calling a runner with an effect executes the effect's operation with the
    bound context and with the runner itself as the nested run-function. The
    operation's result is returned as-is: the runner does not await it, wrap
    it, or catch anything it raises.

    Example:
        >>> run = create_runner({"greeting": "hello"})
        >>> run(create_effect(lambda context, run: context["greeting"]))
        'hello'
    """

    __slots__ = ("_context",)

    def __init__(self, context: C):
        self._context = context

    @property
    def context(self) -> C:
        """The context passed to every effect executed by this runner."""
        return self._context

    def __call__(self, effect: Effect[R]) -> R | Awaitable[R]:
        """Execute `effect` against the bound context.

        Raises:
            NotAnEffectError: If `effect` is not an `Effect`.
        """
        if not isinstance(effect, Effect):
            raise NotAnEffectError(effect)
        return effect.execute(self._context, self)

    async def run_async(self, effect: Effect[R]) -> R:
        """Execute `effect` and await its result if it is awaitable."""
        return await resolve(self(effect))

    def __repr__(self) -> str:
        return f"Runner(context={self._context!r})"


def create_runner(context: C) -> Runner[C]:
    """Create a run-function bound to `context`.

    Args:
        context: Application-defined value handed to every effect executed by
                 the runner, typically a mapping of capability objects such as
                 `{"console": console}`. It is passed through unchanged.

    Returns:
        A `Runner`, callable with an effect.
    """
    return Runner(context)


def sequence(
    procedure: Callable[P, Procedure[R]],
) -> Callable[P, Effect[R]]:
    """Turn a generator function into a function returning a single effect.

    The procedure yields effects and receives their results back from `yield`.
    When the returned effect is executed, it returns a coroutine that drives
    the procedure: each proposed effect is executed with the same run-function
    and awaited (if awaitable) before the procedure is resumed. A failure of a
    proposed effect is raised inside the procedure at the `yield`, where it can
    be caught. The coroutine resolves with the procedure's return value.

    Args:
        procedure: A generator function yielding `Effect` instances.

    Returns:
        A function with the same signature as `procedure` that builds an effect.
        The procedure itself is not called until the effect is executed, so the
        effect can be run any number of times.

    Example:
        >>> @sequence
        ... def greet(name: str):
        ...     greeting = yield create_effect(lambda context, run: context["greeting"])
        ...     return f"{greeting}, {name}!"
        >>>
        >>> import asyncio
        >>> asyncio.run(create_runner({"greeting": "Hello"})(greet("Alice")))
        'Hello, Alice!'
    """

    @wraps(procedure)
    def _sequenced(*args: P.args, **kwargs: P.kwargs) -> Effect[R]:
        @wraps(procedure)
        def _operation(context: Any, run: RunFn) -> Coroutine[Any, Any, R]:
            return _drive(procedure, args, kwargs, run)

        return create_effect(_operation)

    return _sequenced


async def _drive(
    procedure: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    run: RunFn,
) -> Any:
    name = describe_callable(procedure)
    steps = procedure(*args, **kwargs)
    if not isinstance(steps, Generator):
        warnings.warn(
            f"Sequenced procedure {name} returned {describe_value(steps)} instead of a "
            "generator; resolving it as the final value.",
            RuntimeWarning,
        )
        return await resolve(steps)

    value: Any = None
    error: Exception | None = None
    step = 0
    while True:
        try:
            if error is None:
                proposal = steps.send(value)
            else:
                proposal = steps.throw(error)
        except StopIteration as stop:
            logger.debug("%s completed after %d step(s)", name, step)
            return stop.value

        if not isinstance(proposal, Effect):
            logger.debug("%s proposed %s at step %d", name, describe_value(proposal), step)
            try:
                steps.close()
            finally:
                raise InvalidProposalError(proposal, step)

        logger.debug("%s proposed %r at step %d", name, proposal, step)
        value, error = None, None
        try:
            value = await resolve(run(proposal))
        except Exception as exc:
            logger.debug("%s: step %d failed with %r, raising it in the procedure", name, step, exc)
            error = exc
        step += 1
