"""Context Store - per-session conversation state.

Holds one ConversationContext per session id in memory. Sessions are
bounded by an LRU cap and an idle TTL so the map cannot grow without
limit for the lifetime of the process. Sessions pinned by an in-flight
message are never evicted or expired.
"""
import asyncio
import logging
from collections import Counter, OrderedDict
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from orchestration.types import (
    ConversationContext,
    Message,
    TaskRequest,
    TaskResponse,
    UserProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000
DEFAULT_TTL_MINUTES = 60


def build_context(session_id: str, seed: Optional[Mapping[str, Any]] = None) -> ConversationContext:
    """Create an empty context seeded from caller-supplied defaults

    Args:
        session_id: Session ID
        seed: Optional mapping with user_id, workspace, messages, user_profile

    Returns:
        ConversationContext: new, unregistered context
    """
    seed = seed or {}
    profile = seed.get("user_profile", seed.get("userProfile"))
    if isinstance(profile, Mapping):
        profile = UserProfile.from_mapping(profile)
    elif profile is not None and not isinstance(profile, UserProfile):
        profile = None

    messages = [m for m in (seed.get("messages") or []) if isinstance(m, Message)]

    return ConversationContext(
        session_id=session_id,
        user_id=str(seed.get("user_id", seed.get("userId")) or "anonymous"),
        workspace=seed.get("workspace"),
        messages=messages,
        user_profile=profile,
    )


class ContextStore:
    """In-memory context storage with LRU eviction and idle TTL

    Attributes:
        max_sessions: Maximum number of live sessions
        ttl: Idle time after which a session expires
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        ttl_minutes: float = DEFAULT_TTL_MINUTES,
        clock: Callable[[], datetime] = datetime.now
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self.ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock
        self._cache: "OrderedDict[str, ConversationContext]" = OrderedDict()
        self._last_access: Dict[str, datetime] = {}
        self._pins: Counter = Counter()
        self._lock = asyncio.Lock()
        self._stats = {"created": 0, "evictions": 0, "expirations": 0}
        logger.info(
            f"ContextStore initialized (max_sessions={max_sessions}, ttl={ttl_minutes}m)"
        )

    async def get_or_create(
        self,
        session_id: str,
        seed: Optional[Mapping[str, Any]] = None
    ) -> ConversationContext:
        """Return the session's context, creating it from ``seed`` if absent"""
        async with self._lock:
            now = self._clock()
            self._expire(now)

            context = self._cache.get(session_id)
            if context is not None:
                self._touch(session_id, now)
                logger.debug(f"Context loaded from cache: {session_id}")
                return context

            self._evict()

            context = build_context(session_id, seed)
            self._cache[session_id] = context
            self._touch(session_id, now)
            self._stats["created"] += 1
            logger.info(f"New context created: {session_id}")
            return context

    async def get(self, session_id: str) -> Optional[ConversationContext]:
        async with self._lock:
            self._expire(self._clock())
            return self._cache.get(session_id)

    async def append(self, context: ConversationContext, *messages: Message) -> None:
        """Append messages to the end of the session history, in order"""
        if not messages:
            return
        context.messages.extend(messages)
        context.updated_at = self._clock()
        async with self._lock:
            if self._cache.get(context.session_id) is context:
                self._touch(context.session_id, context.updated_at)
        logger.debug(
            f"Context appended: {context.session_id}, messages={len(context.messages)}"
        )

    async def track_task(self, context: ConversationContext, task: TaskRequest) -> None:
        """Record a task as in flight for the session"""
        context.current_tasks.append(task)
        context.updated_at = self._clock()

    async def complete_task(
        self,
        context: ConversationContext,
        task: TaskRequest,
        responses: Iterable[TaskResponse]
    ) -> None:
        """Move a task out of the in-flight list and store its responses"""
        context.current_tasks = [t for t in context.current_tasks if t.id != task.id]
        context.completed_tasks.extend(responses)
        context.updated_at = self._clock()

    async def clear(self, session_id: str) -> bool:
        """Drop a session's context

        Returns:
            bool: True if a context was removed
        """
        async with self._lock:
            removed = self._cache.pop(session_id, None) is not None
            self._last_access.pop(session_id, None)
        if removed:
            logger.info(f"Context cleared: {session_id}")
        return removed

    async def clear_all(self) -> int:
        async with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._last_access.clear()
        logger.info(f"Cleared {count} contexts")
        return count

    @contextmanager
    def pinned(self, session_id: str):
        """Keep a session out of eviction and expiry while the block runs"""
        self._pins[session_id] += 1
        try:
            yield
        finally:
            self._pins[session_id] -= 1
            if self._pins[session_id] <= 0:
                del self._pins[session_id]

    def is_pinned(self, session_id: str) -> bool:
        return self._pins[session_id] > 0

    def _touch(self, session_id: str, now: datetime) -> None:
        self._cache.move_to_end(session_id)
        self._last_access[session_id] = now

    def _evict(self) -> None:
        """Drop least recently used unpinned sessions until one slot is free"""
        while len(self._cache) >= self.max_sessions:
            victim = next((sid for sid in self._cache if not self.is_pinned(sid)), None)
            if victim is None:
                logger.warning(
                    f"All {len(self._cache)} contexts are in use, exceeding max_sessions"
                )
                return
            del self._cache[victim]
            self._last_access.pop(victim, None)
            self._stats["evictions"] += 1
            logger.info(
                f"Evicted least recently used context: {victim} "
                f"(size: {len(self._cache)}/{self.max_sessions})"
            )

    def _expire(self, now: datetime) -> None:
        # Oldest entries sit at the front of the OrderedDict
        for session_id in list(self._cache):
            if self.is_pinned(session_id):
                continue
            if now - self._last_access[session_id] <= self.ttl:
                break
            del self._cache[session_id]
            del self._last_access[session_id]
            self._stats["expirations"] += 1
            logger.info(f"Context expired: {session_id}")

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics"""
        return {
            "cached_sessions": len(self._cache),
            "max_sessions": self.max_sessions,
            "ttl_minutes": self.ttl.total_seconds() / 60,
            "pinned_sessions": len(self._pins),
            **self._stats,
            "sessions": [
                {
                    "session_id": sid,
                    "message_count": len(ctx.messages),
                    "updated_at": ctx.updated_at.isoformat(),
                }
                for sid, ctx in self._cache.items()
            ],
        }
