"""Shared fixtures and stub workers for the unit tests."""
import asyncio
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

# Make the backend packages importable without an install
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from orchestration.types import (  # noqa: E402
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskComplexity,
    TaskRequest,
    TaskResponse,
)
from orchestration.worker import BaseAgent  # noqa: E402


class StubWorker(BaseAgent):
    """Configurable worker for pipeline tests

    Args:
        agent_type: Identity of the worker
        result: Result payload returned on success
        delay: Seconds to sleep inside process_task
        error: Exception raised by process_task (if set)
        success: ``success`` flag of the returned TaskResponse
        healthy: Value returned by health_check (exceptions are raised)
        init_error: Exception raised by initialize (if set)
    """

    def __init__(
        self,
        agent_type: AgentType,
        result: Any = "R",
        delay: float = 0.0,
        error: Optional[Exception] = None,
        success: bool = True,
        healthy: Any = True,
        init_error: Optional[Exception] = None
    ):
        super().__init__(agent_type)
        self.result = result
        self.delay = delay
        self.error = error
        self.success = success
        self.healthy = healthy
        self.init_error = init_error
        self.calls: List[TaskRequest] = []
        self.shutdown_calls = 0
        self.capabilities = [
            AgentCapability(
                name=f"{agent_type.value}-stub",
                description="Stub capability",
                supported_complexity=tuple(TaskComplexity),
                estimated_duration=1,
            )
        ]

    async def initialize(self) -> None:
        if self.init_error is not None:
            raise self.init_error
        self.is_initialized = True

    async def process_task(self, task: TaskRequest, context: ConversationContext) -> TaskResponse:
        self.calls.append(task)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.create_task_response(
            task.id,
            self.result if self.success else None,
            self.success,
            None if self.success else "stub failure",
        )

    async def health_check(self) -> bool:
        if isinstance(self.healthy, Exception):
            raise self.healthy
        return self.healthy

    async def shutdown(self) -> None:
        self.shutdown_calls += 1
        await super().shutdown()


@pytest.fixture
def stub_worker():
    """Factory fixture creating initialized stub workers"""
    def _make(agent_type: AgentType, **kwargs) -> StubWorker:
        worker = StubWorker(agent_type, **kwargs)
        worker.is_initialized = True
        return worker
    return _make
