"""Run several ops concurrently on the same input and collect their outputs."""

from __future__ import annotations

import asyncio
from functools import reduce
from typing import Any, Callable

from .op import Err, Ok, Op, Result

__all__ = ["Parallel", "parallel", "try_parallel"]


class Parallel(Op):
    """Runs ``op1`` and ``op2`` concurrently on the same input.

    :meth:`call` returns the pair of outputs. :meth:`try_call` treats both ops
    as fallible and returns Ok of the pair of success values, or the first Err
    that completes, cancelling whatever is still running.
    """

    def __init__(self, op1: Op, op2: Op) -> None:
        self.op1 = op1
        self.op2 = op2

    async def call(self, value: Any) -> tuple[Any, Any]:
        first, second = await asyncio.gather(self.op1.call(value), self.op2.call(value))
        return first, second

    async def try_call(self, value: Any) -> Result:
        tasks = [
            asyncio.ensure_future(self.op1.try_call(value)),
            asyncio.ensure_future(self.op2.try_call(value)),
        ]
        try:
            for finished in asyncio.as_completed(tasks):
                result = await finished
                if isinstance(result, Err):
                    return result
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
        first, second = (task.result() for task in tasks)
        return Ok((first.value, second.value))


def _nest(ops: tuple[Op, ...]) -> Parallel:
    if len(ops) < 2:
        raise ValueError(f"at least two ops are needed to run in parallel, got {len(ops)}")
    return reduce(lambda acc, op: Parallel(op, acc), reversed(ops[:-1]), ops[-1])


def _flattener(count: int) -> Callable[[Any], tuple[Any, ...]]:
    """Return a function turning ``(a, (b, (c, d)))`` into ``(a, b, c, d)``."""

    def flatten(nested: Any) -> tuple[Any, ...]:
        items = []
        for _ in range(count - 1):
            head, nested = nested
            items.append(head)
        items.append(nested)
        return tuple(items)

    return flatten


def parallel(*args: Op) -> Op:
    """Combine two or more ops into one returning a flat tuple of their outputs."""
    return _nest(args).map(_flattener(len(args)))


def try_parallel(*args: Op) -> Op:
    """Combine two or more fallible ops into one returning Ok of a flat tuple, or the first Err."""
    return _nest(args).map_ok(_flattener(len(args)))