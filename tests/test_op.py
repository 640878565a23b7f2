import asyncio

import pytest

from opchain.op import (
    Err,
    Map,
    Ok,
    Passthrough,
    Sequential,
    Then,
    map,
    passthrough,
    then,
)


def _even_or_err(x):
    return Ok(x) if x % 2 == 0 else Err("x is odd")


@pytest.mark.asyncio
async def test_sequential_constructor():
    op1 = map(lambda x: x + 1)
    op2 = map(lambda x: x * 2)
    op3 = map(lambda x: x * 3)
    pipeline = Sequential(Sequential(op1, op2), op3)
    assert await pipeline.call(1) == 12


@pytest.mark.asyncio
async def test_sequential_chain():
    async def triple(x):
        return x * 3

    pipeline = map(lambda x: x + 1).map(lambda x: x * 2).then(triple)
    assert await pipeline.call(1) == 12


@pytest.mark.asyncio
async def test_map_with_tuple_and_format():
    pipeline = map(lambda pair: pair[0] + pair[1]).map(lambda z: f"Result: {z}!")
    assert await pipeline.call((1, 2)) == "Result: 3!"


@pytest.mark.asyncio
async def test_then_chain():
    async def username(email):
        return email.split("@")[0]

    async def greet(name):
        return f"Hello, {name}!"

    pipeline = then(username).then(greet)
    assert await pipeline.call("bob@example.com") == "Hello, bob!"


@pytest.mark.asyncio
async def test_chain_custom_op():
    class AddOne(Map):
        def __init__(self):
            super().__init__(lambda x: x + 1)

    pipeline = passthrough().chain(AddOne())
    assert await pipeline.call(1) == 2


@pytest.mark.asyncio
async def test_passthrough_returns_same_object():
    value = ["a", "b"]
    assert await Passthrough().call(value) is value


@pytest.mark.asyncio
async def test_then_class_awaits_result():
    async def double(x):
        return x * 2

    assert await Then(double).call(21) == 42


@pytest.mark.asyncio
async def test_batch_call_keeps_order():
    async def slow_identity(x):
        await asyncio.sleep(0.001 * (5 - x))
        return x

    op = then(slow_identity)
    values = [0, 1, 2, 3, 4]
    assert await op.batch_call(3, values) == values


@pytest.mark.asyncio
async def test_batch_call_limits_concurrency():
    in_flight = 0
    peak = 0

    async def track(x):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return x

    outputs = await then(track).batch_call(2, range(6))
    assert outputs == list(range(6))
    assert peak == 2


@pytest.mark.asyncio
async def test_batch_call_rejects_zero_concurrency():
    with pytest.raises(ValueError):
        await map(lambda x: x).batch_call(0, [1])


@pytest.mark.asyncio
async def test_try_call_ok():
    result = await map(_even_or_err).try_call(2)
    assert result.unwrap() == 2


@pytest.mark.asyncio
async def test_try_call_err():
    result = await map(_even_or_err).try_call(1)
    assert result == Err("x is odd")
    with pytest.raises(ValueError):
        result.unwrap()


@pytest.mark.asyncio
async def test_try_call_requires_result():
    with pytest.raises(TypeError):
        await map(lambda x: x).try_call(1)


@pytest.mark.asyncio
async def test_try_batch_call_ok():
    op = map(lambda x: Ok(x + 1) if x % 2 == 0 else Err("x is odd"))
    assert await op.try_batch_call(2, [2, 4]) == Ok([3, 5])


@pytest.mark.asyncio
async def test_try_batch_call_stops_at_first_error():
    seen = []

    def record(x):
        seen.append(x)
        return _even_or_err(x)

    result = await map(record).try_batch_call(1, [2, 3, 4])
    assert result == Err("x is odd")
    assert seen == [2, 3]


def test_result_flags():
    assert Ok(1).is_ok is True
    assert Err("x is odd").is_ok is False