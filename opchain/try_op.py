"""Combinators for fallible ops, whose outputs are Ok or Err values."""

from __future__ import annotations

from typing import Any

from .op import Err, Ok, Op, Result

__all__ = ["MapOk", "MapErr", "AndThen", "OrElse", "TrySequential"]


class _Combinator(Op):
    """Holds a fallible op ``prev`` and the op ``op`` that follows it."""

    def __init__(self, prev: Op, op: Op) -> None:
        self.prev = prev
        self.op = op


class MapOk(_Combinator):
    """Runs ``op`` on the success value of ``prev``; errors pass through."""

    async def call(self, value: Any) -> Result:
        result = await self.prev.try_call(value)
        if isinstance(result, Err):
            return result
        return Ok(await self.op.call(result.value))


class MapErr(_Combinator):
    """Runs ``op`` on the error value of ``prev``; successes pass through."""

    async def call(self, value: Any) -> Result:
        result = await self.prev.try_call(value)
        if isinstance(result, Ok):
            return result
        return Err(await self.op.call(result.error))


class AndThen(_Combinator):
    """On success of ``prev``, continues with the fallible op ``op``."""

    async def call(self, value: Any) -> Result:
        result = await self.prev.try_call(value)
        if isinstance(result, Err):
            return result
        return await self.op.try_call(result.value)


class OrElse(_Combinator):
    """On failure of ``prev``, recovers with the fallible op ``op``."""

    async def call(self, value: Any) -> Result:
        result = await self.prev.try_call(value)
        if isinstance(result, Ok):
            return result
        return await self.op.try_call(result.error)


class TrySequential(_Combinator):
    """On success of ``prev``, feeds the value into ``op`` and wraps its output in Ok."""

    async def call(self, value: Any) -> Result:
        result = await self.prev.try_call(value)
        if isinstance(result, Err):
            return result
        return Ok(await self.op.call(result.value))