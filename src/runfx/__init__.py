"""Deferred, composable side effects for Python.

Side-effecting operations are wrapped into inert effects that only run when
handed to a runner bound to a context. Code building effects stays free of
side effects and can be tested by running it against a fake context.

Example:

>>> import asyncio
>>> import runfx as fx
>>>
>>> # Describe a side effect without performing it
>>> def log(message: str):
...     return fx.create_effect(lambda context, run: context["console"].log(message))
>>>
>>> # Compose effects with plain control flow
>>> @fx.sequence
... def report(a: int, b: int):
...     total = a + b
...     yield log(f"The result is {total}")
...     return total
>>>
>>> # Run against a context providing the capabilities
>>> class Console:
...     def log(self, message: str) -> None:
...         print(message)
>>>
>>> run = fx.create_runner({"console": Console()})
>>> asyncio.run(run(report(30, 12)))
The result is 42
42
"""

import logging

from .__version__ import __version__
from .effects import (
    Effect,
    InvalidProposalError,
    NotAnEffectError,
    Runner,
    create_effect,
    create_runner,
    is_effect,
    sequence,
)
from .util import fail, pure, resolve

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Effect",
    "InvalidProposalError",
    "NotAnEffectError",
    "Runner",
    "__version__",
    "create_effect",
    "create_runner",
    "fail",
    "is_effect",
    "pure",
    "resolve",
    "sequence",
]
