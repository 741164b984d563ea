"""Tests for the single-slot process cache."""

from __future__ import annotations

import asyncio

import pytest

from tfvcbridge.process import ExecOptions, ProcessPool
from tests.utils import FakeSpawner


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def pool(spawner):
    return ProcessPool(spawner)


class TestAcquire:
    """Tests for claiming the cached process."""

    @pytest.mark.asyncio
    async def test_acquire_prespawns_next(self, pool, spawner):
        process = await pool.acquire("tf", ExecOptions(cwd="/a"))
        assert process is spawner.processes[0]
        # The replacement is already on its way
        assert len(spawner.calls) == 2
        assert pool.has_cached_process

        await pool.drain()
        assert len(spawner.processes) == 2
        assert not spawner.processes[1].killed

    @pytest.mark.asyncio
    async def test_warm_process_is_reused(self, pool, spawner):
        await pool.warm("tf", ExecOptions(cwd="/a"))
        assert len(spawner.calls) == 1

        process = await pool.acquire("tf", ExecOptions(cwd="/a"))
        assert process is spawner.processes[0]
        assert len(spawner.calls) == 2
        await pool.drain()

    @pytest.mark.asyncio
    async def test_warm_twice_spawns_once(self, pool, spawner):
        await pool.warm("tf", ExecOptions(cwd="/a"))
        await pool.warm("tf", ExecOptions(cwd="/a"))
        assert len(spawner.calls) == 1

    @pytest.mark.asyncio
    async def test_each_acquire_gets_its_own_process(self, pool, spawner):
        first = await pool.acquire("tf", ExecOptions())
        second = await pool.acquire("tf", ExecOptions())
        assert first is not second
        await pool.drain()
        assert not first.killed
        assert not second.killed

    @pytest.mark.asyncio
    async def test_different_cwd_replaces_cached_process(self, pool, spawner):
        await pool.warm("tf", ExecOptions(cwd="/a"))
        process = await pool.acquire("tf", ExecOptions(cwd="/b"))

        assert process is spawner.processes[1]
        assert spawner.processes[0].killed
        assert spawner.calls[1][1].cwd == "/b"
        await pool.drain()

    @pytest.mark.asyncio
    async def test_different_environment_replaces_cached_process(self, pool, spawner):
        await pool.warm("tf", ExecOptions(environment_overrides={"A": "1"}))
        await pool.acquire("tf", ExecOptions(environment_overrides={"A": "2"}))
        assert spawner.processes[0].killed
        await pool.drain()

    @pytest.mark.asyncio
    async def test_different_location_replaces_cached_process(self, pool, spawner):
        await pool.warm("tf", ExecOptions())
        await pool.acquire("tf.exe", ExecOptions())
        assert spawner.processes[0].killed
        assert spawner.calls[1][0] == "tf.exe"
        await pool.drain()


class TestFailures:
    """Tests for spawns that fail."""

    @pytest.mark.asyncio
    async def test_failed_spawn_raises_to_caller(self, pool, spawner):
        spawner.failures = [FileNotFoundError("tf"), FileNotFoundError("tf")]
        with pytest.raises(FileNotFoundError):
            await pool.acquire("tf", ExecOptions())
        await pool.drain()

    @pytest.mark.asyncio
    async def test_failed_slot_respawns(self, pool, spawner):
        spawner.failures = [OSError("boom"), OSError("boom")]
        with pytest.raises(OSError):
            await pool.acquire("tf", ExecOptions())
        await pool.drain()

        process = await pool.acquire("tf", ExecOptions())
        assert process is spawner.processes[0]
        assert len(spawner.calls) == 4
        await pool.drain()


class TestDispose:
    """Tests for dispose() and the ownership rule."""

    @pytest.mark.asyncio
    async def test_dispose_kills_cached_process(self, pool, spawner):
        await pool.warm("tf", ExecOptions())
        pool.dispose()

        assert spawner.processes[0].killed
        assert pool.generation == 1
        assert not pool.has_cached_process
        await pool.drain()

    @pytest.mark.asyncio
    async def test_dispose_is_idempotent(self, pool):
        pool.dispose()
        pool.dispose()
        assert pool.generation == 2
        await pool.drain()

    @pytest.mark.asyncio
    async def test_claimed_process_survives_dispose(self, pool, spawner):
        process = await pool.acquire("tf", ExecOptions())
        pool.dispose()
        await pool.drain()

        assert not process.killed
        # The pre-spawned replacement is killed when it arrives
        assert spawner.processes[1].killed

    @pytest.mark.asyncio
    async def test_in_flight_spawn_killed_on_arrival(self, pool, spawner):
        spawner.gate = asyncio.Event()
        warming = asyncio.ensure_future(pool.warm("tf", ExecOptions()))
        for _ in range(3):
            await asyncio.sleep(0)
        assert len(spawner.calls) == 1
        assert spawner.processes == []

        pool.dispose()
        spawner.gate.set()
        await warming
        await pool.drain()

        assert spawner.processes[0].killed
        assert not pool.has_cached_process

    @pytest.mark.asyncio
    async def test_usable_after_dispose(self, pool, spawner):
        await pool.warm("tf", ExecOptions())
        pool.dispose()
        process = await pool.acquire("tf", ExecOptions())
        assert process is spawner.processes[1]
        assert not process.killed
        await pool.drain()
