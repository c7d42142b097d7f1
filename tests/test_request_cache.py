import asyncio

import pytest

from raz_app.cache import RequestCache


def test_concurrent_gets_invoke_producer_once():
    cache = RequestCache()
    calls = []

    async def producer():
        calls.append(1)
        await asyncio.sleep(0)
        return {"Response": "True"}

    async def main():
        return await asyncio.gather(*(cache.get("batman", producer) for _ in range(10)))

    results = asyncio.run(main())

    assert len(calls) == 1
    assert all(result == {"Response": "True"} for result in results)


def test_settled_entry_is_reused():
    cache = RequestCache()
    calls = []

    async def producer():
        calls.append(1)
        return "value"

    async def main():
        first = await cache.get("k", producer)
        second = await cache.get("k", producer)
        return first, second

    assert asyncio.run(main()) == ("value", "value")
    assert len(calls) == 1
    assert cache.stats()["hits"] == 1
    assert cache.stats()["misses"] == 1


def test_distinct_keys_are_computed_independently():
    cache = RequestCache()
    calls = []

    def producer_for(key):
        async def producer():
            calls.append(key)
            return key.upper()
        return producer

    async def main():
        return await asyncio.gather(
            cache.get("batman", producer_for("batman")),
            cache.get("Batman", producer_for("Batman")),
        )

    assert asyncio.run(main()) == ["BATMAN", "BATMAN"]
    assert calls == ["batman", "Batman"]
    assert len(cache) == 2


def test_failed_entry_is_retained_by_default():
    cache = RequestCache()
    calls = []

    async def producer():
        calls.append(1)
        raise ConnectionError("network down")

    async def main():
        errors = []
        for _ in range(2):
            try:
                await cache.get("k", producer)
            except ConnectionError as e:
                errors.append(e)
        return errors

    errors = asyncio.run(main())

    assert len(calls) == 1
    assert len(errors) == 2
    assert errors[0] is errors[1]
    assert "k" in cache


def test_failed_entry_is_evicted_when_not_retained():
    cache = RequestCache(retain_failures=False)
    attempts = []

    async def producer():
        attempts.append(1)
        if len(attempts) == 1:
            raise ConnectionError("network down")
        return "recovered"

    async def main():
        with pytest.raises(ConnectionError):
            await cache.get("k", producer)
        # Let the done callback run
        await asyncio.sleep(0)
        return await cache.get("k", producer)

    assert asyncio.run(main()) == "recovered"
    assert len(attempts) == 2


def test_max_entries_evicts_least_recently_used():
    cache = RequestCache(max_entries=2)

    def constant(value):
        async def producer():
            return value
        return producer

    async def main():
        await cache.get("a", constant(1))
        await cache.get("b", constant(2))
        await cache.get("a", constant(1))  # refresh "a"
        await cache.get("c", constant(3))

    asyncio.run(main())

    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache
    assert len(cache) == 2


def test_cancelling_one_waiter_keeps_shared_computation():
    cache = RequestCache()
    calls = []

    async def main():
        gate = asyncio.Event()

        async def producer():
            calls.append(1)
            await gate.wait()
            return "value"

        first = cache.get("k", producer)
        second = cache.get("k", producer)
        first.cancel()
        gate.set()
        return await second

    assert asyncio.run(main()) == "value"
    assert len(calls) == 1


def test_invalid_max_entries_rejected():
    with pytest.raises(ValueError):
        RequestCache(max_entries=0)


def test_clear_resets_entries_and_stats():
    cache = RequestCache()

    async def producer():
        return 1

    async def main():
        await cache.get("k", producer)

    asyncio.run(main())
    cache.clear()

    assert len(cache) == 0
    assert cache.stats() == {
        'size': 0,
        'max_entries': None,
        'retain_failures': True,
        'hits': 0,
        'misses': 0,
        'hit_rate': 0.0,
    }
