"""Core asynchronous operations and the combinators that chain them."""

from __future__ import annotations

import abc
import asyncio
from collections import deque
from contextlib import aclosing
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    TypeVar,
    Union,
)

T = TypeVar("T")
E = TypeVar("E")

__all__ = [
    "Ok",
    "Err",
    "Result",
    "Op",
    "Sequential",
    "Map",
    "Then",
    "Passthrough",
    "map",
    "then",
    "passthrough",
]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The successful outcome of a fallible operation."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Return the held value."""
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """The failed outcome of a fallible operation."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise ValueError, since there is no success value."""
        raise ValueError(f"called unwrap on Err({self.error!r})")


Result = Union[Ok, Err]


async def _buffered(
    call: Callable[[Any], Awaitable[Any]], values: Iterable[Any], n: int
) -> AsyncIterator[Any]:
    """Yield the outcomes of ``call`` over ``values`` in order, at most ``n`` running at once."""
    pending: deque[asyncio.Future] = deque()
    try:
        for value in values:
            pending.append(asyncio.ensure_future(call(value)))
            if len(pending) >= n:
                yield await pending.popleft()
        while pending:
            yield await pending.popleft()
    finally:
        for task in pending:
            task.cancel()


def _check_concurrency(n: int) -> None:
    if n < 1:
        raise ValueError(f"concurrency must be at least 1, got {n}")


class Op(abc.ABC):
    """An asynchronous operation from one input to one output.

    Ops whose output is an :class:`Ok` or :class:`Err` are fallible and
    also support the ``try_*`` calls and the result combinators.
    """

    @abc.abstractmethod
    async def call(self, value: Any) -> Any:
        """Run the operation on ``value``."""

    async def batch_call(self, n: int, values: Iterable[Any]) -> list[Any]:
        """Run the operation over ``values``, ``n`` at a time, keeping input order."""
        _check_concurrency(n)
        async with aclosing(_buffered(self.call, values, n)) as results:
            return [result async for result in results]

    def map(self, f: Callable[[Any], Any]) -> Sequential:
        """Feed this op's output through the plain function ``f``."""
        return Sequential(self, Map(f))

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Sequential:
        """Feed this op's output through the asynchronous function ``f``."""
        return Sequential(self, Then(f))

    def chain(self, op: Op) -> Sequential:
        """Feed this op's output into ``op``."""
        return Sequential(self, op)

    def lookup(self, index: Any, n: int) -> Sequential:
        """Use this op's output as a query for the top ``n`` documents of ``index``."""
        from .agent_ops import Lookup

        return Sequential(self, Lookup(index, n))

    def prompt(self, prompt: Any) -> Sequential:
        """Use this op's output to prompt ``prompt`` and return its response."""
        from .agent_ops import Prompt

        return Sequential(self, Prompt(prompt))

    async def try_call(self, value: Any) -> Result:
        """Run the operation and return its Ok or Err outcome."""
        result = await self.call(value)
        if not isinstance(result, (Ok, Err)):
            raise TypeError(
                f"{type(self).__name__} returned {type(result).__name__}, expected Ok or Err"
            )
        return result

    async def try_batch_call(self, n: int, values: Iterable[Any]) -> Result:
        """Run over ``values``, ``n`` at a time; Ok of all outputs, or the first Err."""
        _check_concurrency(n)
        outputs = []
        async with aclosing(_buffered(self.try_call, values, n)) as results:
            async for result in results:
                if isinstance(result, Err):
                    return result
                outputs.append(result.value)
        return Ok(outputs)

    def map_ok(self, f: Callable[[Any], Any]) -> Op:
        """Transform the success value with ``f``, leaving errors as they are."""
        from .try_op import MapOk

        return MapOk(self, Map(f))

    def map_err(self, f: Callable[[Any], Any]) -> Op:
        """Transform the error value with ``f``, leaving successes as they are."""
        from .try_op import MapErr

        return MapErr(self, Map(f))

    def and_then(self, f: Callable[[Any], Awaitable[Result]]) -> Op:
        """On success, continue with the asynchronous fallible function ``f``."""
        from .try_op import AndThen

        return AndThen(self, Then(f))

    def or_else(self, f: Callable[[Any], Awaitable[Result]]) -> Op:
        """On failure, recover with the asynchronous fallible function ``f``."""
        from .try_op import OrElse

        return OrElse(self, Then(f))

    def chain_ok(self, op: Op) -> Op:
        """On success, feed the value into ``op`` and wrap its output in Ok."""
        from .try_op import TrySequential

        return TrySequential(self, op)


class Sequential(Op):
    """Runs ``prev`` and then ``op`` on its output."""

    def __init__(self, prev: Op, op: Op) -> None:
        self.prev = prev
        self.op = op

    async def call(self, value: Any) -> Any:
        return await self.op.call(await self.prev.call(value))


class Map(Op):
    """Applies a plain function."""

    def __init__(self, f: Callable[[Any], Any]) -> None:
        self.f = f

    async def call(self, value: Any) -> Any:
        return self.f(value)


class Then(Op):
    """Applies a function returning an awaitable and awaits it."""

    def __init__(self, f: Callable[[Any], Awaitable[Any]]) -> None:
        self.f = f

    async def call(self, value: Any) -> Any:
        return await self.f(value)


class Passthrough(Op):
    """Returns its input unchanged."""

    async def call(self, value: Any) -> Any:
        return value


def map(f: Callable[[Any], Any]) -> Map:  # noqa: A001
    """Create a standalone op from a plain function."""
    return Map(f)


def then(f: Callable[[Any], Awaitable[Any]]) -> Then:
    """Create a standalone op from an asynchronous function."""
    return Then(f)


def passthrough() -> Passthrough:
    """Create an op that returns its input unchanged."""
    return Passthrough()