import pytest

from tickmatch.green_threads import bounded_concurrency_sum, run_async_workers


@pytest.mark.asyncio
async def test_async_workers_return_all_outputs():
    out = await run_async_workers(5)
    assert sorted(out) == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_async_workers_with_zero_count():
    assert await run_async_workers(0) == []


@pytest.mark.asyncio
async def test_bounded_concurrency_computes_expected_sum():
    assert await bounded_concurrency_sum(10, 3) == 45


@pytest.mark.asyncio
async def test_bounded_concurrency_with_single_slot():
    assert await bounded_concurrency_sum(10, 1) == 45


@pytest.mark.asyncio
async def test_bounded_concurrency_rejects_zero_slots():
    with pytest.raises(ValueError):
        await bounded_concurrency_sum(3, 0)