"""Error taxonomy for the orchestrator-worker core."""
from typing import Optional


def _tag(agent_type) -> str:
    return getattr(agent_type, "value", agent_type)


class OrchestrationError(Exception):
    """Base class for all orchestration errors"""


class AgentNotFoundError(OrchestrationError):
    """Registry lookup miss"""

    def __init__(self, agent_type):
        self.agent_type = agent_type
        super().__init__(f"Specialist agent {_tag(agent_type)} not found")


class AgentInitializationError(OrchestrationError):
    """A worker failed to initialize; startup is aborted"""

    def __init__(self, agent_type, reason: Optional[str] = None):
        self.agent_type = agent_type
        message = f"Failed to initialize agent {_tag(agent_type)}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TaskExecutionError(OrchestrationError):
    """Error raised by (or on behalf of) a worker's process_task"""


class OrchestratorProcessingError(OrchestrationError):
    """Unexpected fault above the task-execution layer"""
