"""Per-session serialization using asyncio locks"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

logger = logging.getLogger(__name__)


class _SessionLock:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = asyncio.Lock()
        self.holders = 0


class SessionLockManager:
    """
    Fine-grained locking keyed by session id.

    Thread Safety:
    - One asyncio.Lock per session serializes messages of the same session
    - Different sessions never block each other
    - Locks are reference counted and dropped once no task holds or
      awaits them, so the lock table stays as small as the active set
    """

    def __init__(self):
        self._locks: Dict[str, _SessionLock] = {}

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        """
        Hold the session's lock for the duration of the block.

        Args:
            session_id: Session identifier
        """
        entry = self._locks.get(session_id)
        if entry is None:
            entry = _SessionLock()
            self._locks[session_id] = entry
        entry.holders += 1

        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0 and self._locks.get(session_id) is entry:
                del self._locks[session_id]

    def is_locked(self, session_id: str) -> bool:
        entry = self._locks.get(session_id)
        return entry is not None and entry.lock.locked()

    def active_sessions(self) -> List[str]:
        """List session ids that currently hold or await a lock"""
        return list(self._locks.keys())

    def __len__(self) -> int:
        return len(self._locks)
