"""Ops that consult a vector index, prompt a model or extract structured data."""

from __future__ import annotations

from typing import Any

from .op import Err, Ok, Op, Result

__all__ = ["Lookup", "Prompt", "Extract", "lookup", "prompt", "extract"]


class Lookup(Op):
    """Semantic search: returns Ok of the top ``n`` ``(score, id, document)`` hits.

    ``index`` must provide ``async top_n(query, n)``. A failure raised by the
    index is returned as Err holding the exception.
    """

    def __init__(self, index: Any, n: int) -> None:
        self.index = index
        self.n = n

    async def call(self, value: Any) -> Result:
        query = str(value)
        try:
            docs = await self.index.top_n(query, self.n)
        except Exception as exc:
            return Err(exc)
        return Ok(list(docs))


class Prompt(Op):
    """Prompts a model with the input and returns Ok of its response.

    ``model`` must provide ``async prompt(text)``. A failure raised by the
    model is returned as Err holding the exception.
    """

    def __init__(self, model: Any) -> None:
        self.model = model

    async def call(self, value: Any) -> Result:
        try:
            response = await self.model.prompt(str(value))
        except Exception as exc:
            return Err(exc)
        return Ok(response)


class Extract(Op):
    """Extracts structured data from the input text with an extractor.

    ``extractor`` must provide ``async extract(text)``. A failure raised by
    the extractor is returned as Err holding the exception.
    """

    def __init__(self, extractor: Any) -> None:
        self.extractor = extractor

    async def call(self, value: Any) -> Result:
        try:
            data = await self.extractor.extract(str(value))
        except Exception as exc:
            return Err(exc)
        return Ok(data)


def lookup(index: Any, n: int) -> Lookup:
    """Create an op returning the top ``n`` results of ``index`` closest to the input."""
    return Lookup(index, n)


def prompt(model: Any) -> Prompt:
    """Create an op prompting ``model`` with the input."""
    return Prompt(model)


def extract(extractor: Any) -> Extract:
    """Create an op extracting structured data from the input with ``extractor``."""
    return Extract(extractor)