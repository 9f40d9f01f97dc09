"""Orchestrator-worker core of the SAM sales assistant

This package contains the message dispatch pipeline:
- classifier: keyword intent classification
- routing: classification → dispatch plan
- task_executor: primary + supporting worker execution
- response_synthesizer: merges worker results into one response
- orchestrator: the per-message pipeline
"""

from orchestration.agent_registry import WorkerRegistry
from orchestration.classifier import Classifier, KeywordIntentClassifier
from orchestration.context_store import ContextStore
from orchestration.errors import (
    AgentInitializationError,
    AgentNotFoundError,
    OrchestrationError,
    OrchestratorProcessingError,
    TaskExecutionError,
)
from orchestration.orchestrator import Orchestrator
from orchestration.rendering import render_markdown
from orchestration.response_synthesizer import ResponseSynthesizer, SynthesizedResponse
from orchestration.routing import route
from orchestration.task_executor import TaskExecutor
from orchestration.types import (
    AgentTrace,
    AgentType,
    ConversationContext,
    Message,
    MessageIntent,
    OperationMode,
    ProcessResult,
    TaskComplexity,
    TaskRequest,
    TaskResponse,
)
from orchestration.worker import BaseAgent

__version__ = "1.0.0"

__all__ = [
    # Pipeline
    "Orchestrator",
    "KeywordIntentClassifier",
    "Classifier",
    "route",
    "TaskExecutor",
    "ResponseSynthesizer",
    "SynthesizedResponse",
    "render_markdown",
    # State
    "WorkerRegistry",
    "ContextStore",
    "BaseAgent",
    # Types
    "AgentTrace",
    "AgentType",
    "ConversationContext",
    "Message",
    "MessageIntent",
    "OperationMode",
    "ProcessResult",
    "TaskComplexity",
    "TaskRequest",
    "TaskResponse",
    # Errors
    "OrchestrationError",
    "AgentNotFoundError",
    "AgentInitializationError",
    "TaskExecutionError",
    "OrchestratorProcessingError",
]
