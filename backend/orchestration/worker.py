"""Worker Contract - Abstract Base for Specialist Agents

Every specialist (and the orchestrator itself) implements this interface,
so the registry and the task executor can treat all workers uniformly.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskRequest,
    TaskResponse,
)

logger = logging.getLogger(__name__)

AGENT_VERSION = "1.0.0"


class BaseAgent(ABC):
    """Abstract base class for workers

    Subclasses declare their capabilities at construction and implement
    the async lifecycle methods.
    """

    def __init__(self, agent_type: AgentType):
        self.agent_type = agent_type
        self.capabilities: List[AgentCapability] = []
        self.is_initialized = False

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare resources; raise to abort system startup"""
        pass

    @abstractmethod
    async def process_task(
        self,
        task: TaskRequest,
        context: ConversationContext
    ) -> TaskResponse:
        """Handle one task request

        Args:
            task: Shared task request (never mutated)
            context: Conversation context of the session

        Returns:
            TaskResponse produced by this worker
        """
        pass

    def get_capabilities(self) -> List[AgentCapability]:
        return list(self.capabilities)

    async def health_check(self) -> bool:
        return self.is_initialized

    async def shutdown(self) -> None:
        self.is_initialized = False
        logger.debug(f"{self.agent_type.value} shut down")

    def is_ready(self) -> bool:
        return self.is_initialized

    def validate_task(self, task: TaskRequest) -> bool:
        """Check whether any capability supports the task's complexity"""
        return any(
            task.complexity in capability.supported_complexity
            for capability in self.capabilities
        )

    def create_task_response(
        self,
        task_id: str,
        result: Any,
        success: bool,
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> TaskResponse:
        """Build a TaskResponse with the standard metadata block"""
        confidence = 0.9 if success else 0.1
        full_metadata = {
            "timestamp": datetime.now().isoformat(),
            "agent_version": AGENT_VERSION,
            "processing_time": 0,
            "confidence": confidence,
        }
        full_metadata.update(metadata or {})

        return TaskResponse(
            task_id=task_id,
            agent_type=self.agent_type,
            result=result,
            success=success,
            error=error,
            confidence=confidence,
            metadata=full_metadata,
        )
