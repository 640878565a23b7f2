# opchain

Composable asynchronous pipelines built from small operations ("ops").

An op takes one input and produces one output through an async `call`
method. Ops are chained one after another, run side by side on the same
input, or joined with result-aware combinators that only continue on
success. The input enters the first op and each op's output feeds the next.

opchain has no runtime dependencies beyond the standard library and needs
Python 3.10 or later.

## Installing

Install the package with your usual tool, for example with pip from a
checkout of the project. The `test` extra pulls in pytest and
pytest-asyncio for running the test suite.

## Sequential ops

```python
import asyncio

from opchain import pipeline

chain = (
    pipeline.new()
    .map(lambda pair: pair[0] + pair[1])
    .map(lambda total: f"Result: {total}!")
)

print(asyncio.run(chain.call((1, 2))))  # Result: 3!
```

`map` wraps a plain function; `then` wraps a function returning an
awaitable:

```python
from opchain.op import then

async def double(x):
    return x * 2

async def describe(x):
    return f"Got {x}"

chain = then(double).then(describe)
# await chain.call(21)  -> "Got 42"
```

Any op can be appended with `chain`. `Sequential`, `Map`, `Then` and
`Passthrough` from `opchain.op` can also be built directly; `passthrough()`
returns its input unchanged. To write an op of your own, subclass
`opchain.op.Op` and implement `async def call(self, value)`.

`batch_call(n, values)` runs an op over many inputs with at most `n` in
flight and returns the outputs in input order. `n` below 1 raises
`ValueError`.

## Parallel ops

`parallel` (in `opchain.parallel`) runs two or more ops concurrently on the
same input and returns their outputs as a flat tuple, in the order the ops
were given:

```python
from opchain.op import map, passthrough
from opchain.parallel import parallel

op = parallel(
    passthrough(),
    map(lambda x: x * 2),
    map(lambda x: f"{x} is the number!"),
    map(lambda x: x == 1),
)
# await op.call(1)  -> (1, 2, "1 is the number!", True)
```

`Parallel(op1, op2)` is the two-way building block; nesting it gives nested
pairs. Fewer than two ops raises `ValueError`.

## Result-aware ops

An op whose output is an `Ok` or `Err` value (both in `opchain.op`) is
fallible. `Ok(value).unwrap()` returns the value; `Err(error).unwrap()`
raises `ValueError`. Fallible ops can be continued with combinators that
look at which one was produced:

- `map_ok(f)` transforms a success value,
- `map_err(f)` transforms an error value,
- `and_then(f)` continues with an async function returning `Ok`/`Err`, only on success,
- `or_else(f)` recovers with an async function returning `Ok`/`Err`, only on error,
- `chain_ok(op)` feeds a success value into another op and wraps its output in `Ok`.

```python
from opchain.op import Err, Ok, map

def even(x):
    return Ok(x) if x % 2 == 0 else Err("x is odd")

op = map(even).map_err(lambda e: f"Error: {e}").map_err(len)
# await op.try_call(1)  -> Err(15)
```

`try_call` runs such an op and raises `TypeError` if the output is neither
`Ok` nor `Err`. `try_batch_call(n, values)` runs it over many inputs with at
most `n` in flight and returns `Ok` of all outputs or the first `Err`.
`try_parallel(...)` is the result-aware form of `parallel`: it returns `Ok`
of a flat tuple, or the first `Err` to complete, cancelling the branches
still running. The combinator classes (`MapOk`, `MapErr`, `AndThen`,
`OrElse`, `TrySequential`) live in `opchain.try_op`.

## AI ops

`opchain.agent_ops` provides ops for retrieval and prompting. Each converts
its input with `str()`, returns `Ok` of the result, and returns `Err` holding
the exception if the backing object raises:

- `lookup(index, n)` awaits `index.top_n(query, n)` and returns its results
  as a list, such as `(score, id, document)` tuples,
- `prompt(model)` awaits `model.prompt(text)` and returns the reply,
- `extract(extractor)` awaits `extractor.extract(text)` and returns the
  structured result.

`lookup` and `prompt` are also methods on every op, and the builder from
`pipeline.new()` offers `map`, `then`, `chain`, `lookup`, `prompt` and
`extract` to start a pipeline. `pipeline.with_error(error_type)` creates a
builder that records a caller-chosen `error_type`; `pipeline.new()` records
`ChainError`. `ChainError(kind, source)` takes `kind` `"prompt"` or
`"lookup"` and formats a message from `source`; any other kind raises
`ValueError`.

## What opchain does not do

opchain ships no model clients, embedding code or vector stores. The
`lookup`, `prompt` and `extract` ops work with objects you supply that have
the async methods named above. Nothing in the package raises `ChainError`
on its own; the agent ops report failures as `Err` values.

## OneOrMany

`opchain.one_or_many.OneOrMany` is a list that can never be empty:

```python
from opchain.one_or_many import EmptyListError, OneOrMany

items = OneOrMany.many(["hello", "word"])
items.push("sup")
assert len(items) == 3
assert items.first() == "hello"
assert items.rest() == ["word", "sup"]
assert list(items) == ["hello", "word", "sup"]

merged = OneOrMany.merge([items, OneOrMany.one("again")])
assert len(merged) == 4

try:
    OneOrMany.many([])
except EmptyListError:
    pass
```

`EmptyListError` is a subclass of `ValueError`.