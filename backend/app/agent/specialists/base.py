"""Base class for SAM specialist agents.

Specialists turn a shared TaskRequest into a result payload. Any error
raised by ``handle`` is reported as an unsuccessful TaskResponse; the
orchestration layer decides what a failure means for the response.
"""
import logging
import time
from abc import abstractmethod
from typing import Any, Dict, Iterable, Optional

from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentType,
    ConversationContext,
    TaskRequest,
    TaskResponse,
)
from orchestration.worker import BaseAgent

logger = logging.getLogger(__name__)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(k in lowered for k in keywords)


class SpecialistAgent(BaseAgent):
    """Specialist worker with an optional LLM collaborator

    Subclasses set ``display_name`` and ``system_prompt``, declare their
    capabilities in ``__init__`` and implement ``handle``.
    """

    display_name: str = "Specialist"
    system_prompt: str = "You are a specialist on SAM's sales team."

    def __init__(self, agent_type: AgentType, client: Optional[CompletionClient] = None):
        super().__init__(agent_type)
        self.client = client or CompletionClient()

    async def initialize(self) -> None:
        logger.info(f"Initializing {self.display_name} Agent...")
        await self.setup()
        self.is_initialized = True

    async def setup(self) -> None:
        """Load static resources; override when needed"""
        pass

    async def process_task(self, task: TaskRequest, context: ConversationContext) -> TaskResponse:
        start = time.perf_counter()
        try:
            result = await self.handle(task, context)
        except Exception as e:
            logger.error(f"{self.display_name} Agent error: {e}")
            return self.create_task_response(
                task.id, None, False, str(e),
                {"processing_time": _elapsed_ms(start)},
            )

        return self.create_task_response(
            task.id, result, True,
            metadata={"processing_time": _elapsed_ms(start)},
        )

    @abstractmethod
    async def handle(self, task: TaskRequest, context: ConversationContext) -> Any:
        """Produce the result payload for a task"""
        pass

    async def ask_llm(self, task: TaskRequest, instructions: str = "") -> str:
        return await self.client.complete(self.system_prompt, self.build_prompt(task, instructions))

    @staticmethod
    def build_prompt(task: TaskRequest, instructions: str = "") -> str:
        """Render the task request as a plain-text prompt"""
        lines = [task.message or task.description]
        if task.parameters:
            lines.append("")
            lines.append("Parameters:")
            lines.extend(f"- {key}: {value}" for key, value in task.parameters.items())

        profile = task.context.user_profile
        if profile is not None:
            lines.append("")
            lines.append("User profile:")
            for label, value in (
                ("company", profile.company),
                ("role", profile.role),
                ("target audience", profile.target_audience),
                ("offering", profile.product_offering),
            ):
                if value:
                    lines.append(f"- {label}: {value}")

        if instructions:
            lines.append("")
            lines.append(instructions)
        return "\n".join(lines)

    def payload(self, content: str, **extra: Any) -> Dict[str, Any]:
        """Standard result shape: text content plus specialist-specific data"""
        return {"content": content, "agent": self.display_name, **extra}


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
