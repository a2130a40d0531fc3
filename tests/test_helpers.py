import asyncio

import pytest

from helpers import gather_all


@pytest.mark.asyncio
async def test_gather_all_returns_results_by_name():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    results = await gather_all(slow=value("a", 0.02), fast=value("b", 0))
    assert results == {"slow": "a", "fast": "b"}


@pytest.mark.asyncio
async def test_gather_all_fails_fast_with_the_original_error():
    cancelled = asyncio.Event()

    async def boom():
        raise LookupError("missing")

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    with pytest.raises(LookupError, match="missing"):
        await gather_all(slow=slow(), boom=boom())
    assert cancelled.is_set()
