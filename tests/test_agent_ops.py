import pytest

from opchain.agent_ops import Extract, Lookup, Prompt, extract, lookup, prompt
from opchain.op import Err, Ok, map


class MockModel:
    async def prompt(self, text):
        return f"Mock response: {text}"


class MockIndex:
    def __init__(self):
        self.queries = []

    async def top_n(self, query, n):
        self.queries.append((query, n))
        return [(1.0, "doc1", {"foo": "bar"})]


class FailingIndex:
    async def top_n(self, query, n):
        raise RuntimeError("index offline")


class FailingModel:
    async def prompt(self, text):
        raise RuntimeError("model offline")


class MockExtractor:
    async def extract(self, text):
        return {"text": text}


@pytest.mark.asyncio
async def test_lookup():
    op = lookup(MockIndex(), 1)
    result = await op.call("query")
    assert result.unwrap() == [(1.0, "doc1", {"foo": "bar"})]


@pytest.mark.asyncio
async def test_lookup_passes_query_and_n():
    index = MockIndex()
    await Lookup(index, 3).call("What is a flurbo?")
    assert index.queries == [("What is a flurbo?", 3)]


@pytest.mark.asyncio
async def test_lookup_error_becomes_err():
    result = await lookup(FailingIndex(), 1).call("query")
    assert isinstance(result, Err)
    assert isinstance(result.error, RuntimeError)
    assert str(result.error) == "index offline"


@pytest.mark.asyncio
async def test_prompt():
    op = prompt(MockModel())
    result = await op.call("hello")
    assert result.unwrap() == "Mock response: hello"


@pytest.mark.asyncio
async def test_prompt_error_becomes_err():
    result = await Prompt(FailingModel()).call("hello")
    assert isinstance(result, Err)
    assert str(result.error) == "model offline"


@pytest.mark.asyncio
async def test_extract_returns_extractor_output():
    result = await extract(MockExtractor()).call("I love ice cream!")
    assert result == Ok({"text": "I love ice cream!"})


@pytest.mark.asyncio
async def test_extract_class_matches_factory():
    direct = await Extract(MockExtractor()).call("hello")
    built = await extract(MockExtractor()).call("hello")
    assert direct == built


@pytest.mark.asyncio
async def test_chained_prompt():
    chain = map(lambda q: f"User query: {q}").prompt(MockModel())
    result = await chain.call("What is a flurbo?")
    assert result.unwrap() == "Mock response: User query: What is a flurbo?"


@pytest.mark.asyncio
async def test_chained_lookup_with_map_ok():
    chain = map(lambda q: q).lookup(MockIndex(), 1).map_ok(
        lambda docs: f"Top documents:\n{docs[0][2]['foo']}"
    )
    result = await chain.try_call("What is a flurbo?")
    assert result.unwrap() == "Top documents:\nbar"