"""Unit tests for per-session locking"""

import asyncio

import pytest

from orchestration.session_locks import SessionLockManager


class TestSessionLockManager:
    """Test suite for SessionLockManager"""

    @pytest.fixture
    def locks(self):
        return SessionLockManager()

    @pytest.mark.asyncio
    async def test_same_session_is_serialized(self, locks):
        events = []

        async def work(name):
            async with locks.hold("s1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(work("a"), work("b"))

        assert events == ["a-start", "a-end", "b-start", "b-end"]

    @pytest.mark.asyncio
    async def test_different_sessions_do_not_block(self, locks):
        entered = asyncio.Event()

        async def first():
            async with locks.hold("s1"):
                await asyncio.wait_for(entered.wait(), timeout=1.0)

        async def second():
            async with locks.hold("s2"):
                entered.set()

        await asyncio.gather(first(), second())

    @pytest.mark.asyncio
    async def test_lock_state_and_cleanup(self, locks):
        async with locks.hold("s1"):
            assert locks.is_locked("s1")
            assert locks.active_sessions() == ["s1"]

        assert not locks.is_locked("s1")
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self, locks):
        with pytest.raises(RuntimeError):
            async with locks.hold("s1"):
                raise RuntimeError("boom")

        assert len(locks) == 0
        async with locks.hold("s1"):
            assert locks.is_locked("s1")

    @pytest.mark.asyncio
    async def test_waiters_keep_entry_alive(self, locks):
        release = asyncio.Event()

        async def holder():
            async with locks.hold("s1"):
                await release.wait()

        async def waiter():
            async with locks.hold("s1"):
                pass

        tasks = [asyncio.create_task(holder()), asyncio.create_task(waiter())]
        await asyncio.sleep(0)
        assert len(locks) == 1

        release.set()
        await asyncio.gather(*tasks)
        assert len(locks) == 0
