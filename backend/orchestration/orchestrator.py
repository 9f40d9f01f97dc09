"""Orchestrator - main coordinator of the SAM multi-agent system.

Implements the orchestrator-worker pipeline:
User Message → Classifier → Routing → Task Execution → Synthesis → Response

Flow (per message, serialized per session):
1. Load or create the session context
2. Classify intent
3. Build the routing decision
4. Execute primary and supporting workers
5. Synthesize the response
6. Append user + response messages to the context
"""
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

from orchestration.agent_registry import WorkerRegistry
from orchestration.classifier import Classifier, KeywordIntentClassifier
from orchestration.context_store import ContextStore, build_context
from orchestration.errors import TaskExecutionError
from orchestration.response_synthesizer import ResponseSynthesizer
from orchestration.routing import route
from orchestration.session_locks import SessionLockManager
from orchestration.task_executor import ExecutionReport, TaskExecutor
from orchestration.types import (
    AgentCapability,
    AgentTrace,
    AgentType,
    ConversationContext,
    Message,
    OperationMode,
    ProcessResult,
    Sender,
    TaskComplexity,
    TaskRequest,
    TaskResponse,
)
from orchestration.worker import BaseAgent

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = (
    "I apologize, but I encountered an issue processing your request. Let me try to help "
    "you in a different way. Could you please rephrase your question?"
)

MODE_TEAMS: Mapping[OperationMode, Tuple[AgentType, ...]] = {
    OperationMode.OUTBOUND: (
        AgentType.LEAD_RESEARCH,
        AgentType.CAMPAIGN_MANAGEMENT,
        AgentType.CONTENT_CREATION,
    ),
    OperationMode.INBOUND: (
        AgentType.INBOX_TRIAGE,
        AgentType.SPAM_FILTER,
        AgentType.AUTO_RESPONSE,
    ),
}

_ALL = tuple(TaskComplexity)


class Orchestrator(BaseAgent):
    """Coordinates specialists for every incoming message

    Attributes:
        registry: Registered specialist workers
        classifier: Intent classifier (swappable)
        context_store: Per-session conversation contexts
        executor: Task execution engine
        synthesizer: Response synthesizer
        operation_mode: Active specialist team
    """

    name = "SAM"
    description = "Your AI Sales & Communications Expert"

    def __init__(
        self,
        registry: Optional[WorkerRegistry] = None,
        classifier: Optional[Classifier] = None,
        context_store: Optional[ContextStore] = None,
        synthesizer: Optional[ResponseSynthesizer] = None,
        worker_timeout: float = 30.0,
        max_parallel_tasks: int = 4,
        history_snapshot_size: int = 5,
        operation_mode: OperationMode = OperationMode.OUTBOUND
    ):
        super().__init__(AgentType.ORCHESTRATOR)
        self.registry = registry if registry is not None else WorkerRegistry()
        self.classifier = classifier or KeywordIntentClassifier()
        self.context_store = context_store if context_store is not None else ContextStore()
        self.synthesizer = synthesizer or ResponseSynthesizer()
        self.executor = TaskExecutor(
            self.registry,
            timeout_seconds=worker_timeout,
            max_parallel_tasks=max_parallel_tasks,
            snapshot_size=history_snapshot_size,
        )
        self.session_locks = SessionLockManager()
        self.operation_mode = operation_mode
        self.capabilities = [
            AgentCapability(
                name="intent-classification",
                description="Analyze user messages to determine intent and route to appropriate specialists",
                supported_complexity=_ALL,
                estimated_duration=2,
                required_parameters=("message", "context"),
                optional_parameters=("sessionHistory",),
            ),
            AgentCapability(
                name="task-orchestration",
                description="Coordinate multiple specialist agents for complex requests",
                supported_complexity=(
                    TaskComplexity.MODERATE, TaskComplexity.COMPLEX, TaskComplexity.EXPERT
                ),
                estimated_duration=10,
                required_parameters=("tasks", "context"),
                optional_parameters=("parallel",),
            ),
            AgentCapability(
                name="response-synthesis",
                description="Combine outputs from multiple agents into coherent response",
                supported_complexity=(
                    TaskComplexity.SIMPLE, TaskComplexity.MODERATE, TaskComplexity.COMPLEX
                ),
                estimated_duration=3,
                required_parameters=("agentOutputs",),
                optional_parameters=("userPreferences",),
            ),
        ]

    async def initialize(self) -> None:
        logger.info("Initializing SAM Orchestrator Agent...")
        self.is_initialized = True

    def register_specialists(self, specialists: Mapping[AgentType, BaseAgent]) -> None:
        self.registry.register(specialists)

    def set_operation_mode(self, mode: OperationMode) -> None:
        """Switch between the outbound and inbound specialist teams"""
        self.operation_mode = OperationMode(mode)
        team = ", ".join(t.value for t in MODE_TEAMS[self.operation_mode])
        logger.info(f"SAM switched to {self.operation_mode.value} mode (team: {team})")

    def active_team(self) -> List[AgentType]:
        """Specialists of the current mode that are actually registered"""
        return [t for t in MODE_TEAMS[self.operation_mode] if t in self.registry]

    async def process_message(
        self,
        message: str,
        seed_context: Optional[Mapping[str, Any]] = None,
        session_id: str = "default"
    ) -> ProcessResult:
        """Process one user message end to end

        Never raises: unexpected faults are converted into an apology
        message with a single error-handling trace entry.

        Args:
            message: Free-text user message
            seed_context: Defaults used when the session is created
            session_id: Session identifier

        Returns:
            ProcessResult: response message, session context and trace
        """
        start = time.perf_counter()
        trace: List[AgentTrace] = []

        try:
            # Pinned from queueing until done so the context cannot be evicted mid-flight
            with self.context_store.pinned(session_id):
                async with self.session_locks.hold(session_id):
                    return await self._process(message, seed_context, session_id, trace)
        except Exception as e:
            logger.error(f"Orchestrator processing error: {e}")
            return await self._error_result(message, seed_context, session_id, e, start)

    async def _process(
        self,
        message: str,
        seed_context: Optional[Mapping[str, Any]],
        session_id: str,
        trace: List[AgentTrace]
    ) -> ProcessResult:
        context = await self.context_store.get_or_create(session_id, seed_context)

        # 1. Classify intent
        step = time.perf_counter()
        classification = self.classifier.classify(message, context)
        trace.append(AgentTrace(
            agent_type=AgentType.ORCHESTRATOR,
            action="intent-classification",
            input={"message": message},
            output=classification,
            duration=_elapsed_ms(step),
            success=True,
        ))

        # 2. Route
        step = time.perf_counter()
        routing = route(classification)
        trace.append(AgentTrace(
            agent_type=AgentType.ORCHESTRATOR,
            action="routing-decision",
            input=classification,
            output=routing,
            duration=_elapsed_ms(step),
            success=True,
        ))

        # 3. Execute
        task = self.executor.build_task_request(classification, context, message)
        report = await self._execute(routing, task, context)
        trace.extend(report.traces)

        # 4. Synthesize
        step = time.perf_counter()
        synthesized = self.synthesizer.synthesize(message, classification, report.results)
        trace.append(AgentTrace(
            agent_type=AgentType.ORCHESTRATOR,
            action="response-synthesis",
            input={"results": len(report.results)},
            output=synthesized,
            duration=_elapsed_ms(step),
            success=True,
        ))

        # 5. Update context
        user_message = Message(
            content=message,
            sender=Sender.USER,
            intent=classification.intent,
            confidence=classification.confidence,
        )
        response = Message(
            content=synthesized.body,
            sender=Sender.ORCHESTRATOR,
            trace=tuple(trace),
            suggestions=synthesized.suggestions,
        )
        await self.context_store.append(context, user_message, response)

        logger.info(
            f"Processed message for session {session_id}: "
            f"intent={classification.intent.value}, results={len(report.results)}"
        )
        return ProcessResult(response=response, context=context, trace=trace)

    async def _execute(self, routing, task: TaskRequest, context: ConversationContext) -> ExecutionReport:
        await self.context_store.track_task(context, task)
        results: List[TaskResponse] = []
        try:
            report = await self.executor.execute(routing, task, context)
            results = report.results
            return report
        finally:
            await self.context_store.complete_task(context, task, results)

    async def _error_result(
        self,
        message: str,
        seed_context: Optional[Mapping[str, Any]],
        session_id: str,
        error: Exception,
        start: float
    ) -> ProcessResult:
        entry = AgentTrace(
            agent_type=AgentType.ORCHESTRATOR,
            action="error-handling",
            input={"message": message, "error": str(error)},
            output=None,
            duration=_elapsed_ms(start),
            success=False,
            error=str(error),
        )
        response = Message(
            content=APOLOGY_MESSAGE,
            sender=Sender.ORCHESTRATOR,
            trace=(entry,),
        )

        try:
            context = await self.context_store.get(session_id)
            if context is None:
                context = await self.context_store.get_or_create(session_id, seed_context)
        except Exception as store_error:
            logger.error(f"Context store unavailable for {session_id}: {store_error}")
            context = build_context(session_id, seed_context)

        return ProcessResult(response=response, context=context, trace=[entry])

    async def process_task(self, task: TaskRequest, context: ConversationContext) -> TaskResponse:
        raise TaskExecutionError("Orchestrator delegates tasks to specialists")

    async def health_check(self) -> bool:
        """Short-circuiting check: False as soon as one specialist is unhealthy"""
        for agent_type, agent in self.registry.items():
            try:
                healthy = await agent.health_check()
            except Exception as e:
                logger.error(f"Health check error for {agent_type.value}: {e}")
                return False
            if not healthy:
                logger.warning(f"Specialist {agent_type.value} failed health check")
                return False
        return self.is_initialized

    async def shutdown(self) -> None:
        await self.context_store.clear_all()
        self.registry.clear()
        self.is_initialized = False
        logger.info("Orchestrator agent shut down")

    def get_stats(self) -> Dict[str, Any]:
        return {
            "operation_mode": self.operation_mode.value,
            "registry": self.registry.get_statistics(),
            "context_store": self.context_store.get_stats(),
            "locked_sessions": self.session_locks.active_sessions(),
        }


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
