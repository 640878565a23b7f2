"""Entry point for building pipelines of ops, plain or AI-backed."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, TypeVar

from .agent_ops import Extract, Lookup, Prompt
from .op import Map, Op, Then

E = TypeVar("E")

__all__ = ["ChainError", "PipelineBuilder", "new", "with_error"]

_MESSAGES = {
    "prompt": "Failed to prompt agent: {}",
    "lookup": "Failed to lookup documents: {}",
}


class ChainError(Exception):
    """A failure of a pipeline step: ``kind`` is ``"prompt"`` or ``"lookup"``."""

    def __init__(self, kind: str, source: BaseException | str) -> None:
        try:
            template = _MESSAGES[kind]
        except KeyError:
            raise ValueError(
                f"unknown chain error kind {kind!r}, expected one of {sorted(_MESSAGES)}"
            ) from None
        super().__init__(template.format(source))
        self.kind = kind
        self.source = source
        if isinstance(source, BaseException):
            self.__cause__ = source


class PipelineBuilder(Generic[E]):
    """Starts a pipeline; each method returns the first op of the chain."""

    def __init__(self, error_type: type = ChainError) -> None:
        self.error_type = error_type

    def map(self, f: Callable[[Any], Any]) -> Map:
        """Start the pipeline with the plain function ``f``."""
        return Map(f)

    def then(self, f: Callable[[Any], Awaitable[Any]]) -> Then:
        """Start the pipeline with the asynchronous function ``f``."""
        return Then(f)

    def chain(self, op: Op) -> Op:
        """Start the pipeline with an arbitrary op.

        Raises ``TypeError`` if ``op`` has no callable ``call`` method.
        """
        if not isinstance(op, Op) and not callable(getattr(op, "call", None)):
            raise TypeError(f"expected an op with a 'call' method, got {type(op).__name__}")
        return op

    def lookup(self, index: Any, n: int) -> Lookup:
        """Start the pipeline with a lookup of the top ``n`` documents of ``index``."""
        return Lookup(index, n)

    def prompt(self, agent: Any) -> Prompt:
        """Start the pipeline by prompting ``agent`` with the input."""
        return Prompt(agent)

    def extract(self, extractor: Any) -> Extract:
        """Start the pipeline by extracting structured data from the input."""
        return Extract(extractor)


def new() -> PipelineBuilder[ChainError]:
    """Create a pipeline builder whose error type is :class:`ChainError`."""
    return PipelineBuilder(ChainError)


def with_error(error_type: type) -> PipelineBuilder[Any]:
    """Create a pipeline builder with a caller-chosen error type."""
    return PipelineBuilder(error_type)