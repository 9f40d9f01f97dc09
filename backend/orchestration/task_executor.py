"""Task Execution Engine - runs a routing plan against the registry

The primary worker runs first. If the plan is parallel, supporting
workers then fan out concurrently (bounded by a semaphore) against the
same shared TaskRequest, and the call joins on all of them.

Every worker call is converted into a ``WorkerOutcome`` at a single seam
(``_invoke``), with a deadline; a timeout is treated exactly like an
error raised by the worker. Trace entries are built from outcomes.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from orchestration.agent_registry import WorkerRegistry
from orchestration.errors import AgentNotFoundError
from orchestration.types import (
    AgentTrace,
    AgentType,
    ConversationContext,
    IntentClassification,
    RoutingDecision,
    TaskContextSnapshot,
    TaskRequest,
    TaskResponse,
)
from orchestration.worker import BaseAgent

logger = logging.getLogger(__name__)

DEFAULT_WORKER_TIMEOUT = 30.0
DEFAULT_MAX_PARALLEL_TASKS = 4
DEFAULT_SNAPSHOT_SIZE = 5


@dataclass(frozen=True)
class WorkerOutcome:
    """Result value of one worker call: either a response or an error"""
    agent_type: AgentType
    duration: float
    response: Optional[TaskResponse] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.response is not None


@dataclass
class ExecutionReport:
    results: List[TaskResponse] = field(default_factory=list)
    traces: List[AgentTrace] = field(default_factory=list)


class TaskExecutor:
    """Executes routing decisions with partial-failure tolerance

    Attributes:
        registry: Worker registry consulted at dispatch time
        timeout_seconds: Deadline applied to every worker call
        max_parallel_tasks: Cap on concurrently running supporting workers
        snapshot_size: Number of recent messages copied into each request
    """

    def __init__(
        self,
        registry: WorkerRegistry,
        timeout_seconds: float = DEFAULT_WORKER_TIMEOUT,
        max_parallel_tasks: int = DEFAULT_MAX_PARALLEL_TASKS,
        snapshot_size: int = DEFAULT_SNAPSHOT_SIZE
    ):
        if max_parallel_tasks < 1:
            raise ValueError("max_parallel_tasks must be at least 1")

        self.registry = registry
        self.timeout_seconds = timeout_seconds
        self.max_parallel_tasks = max_parallel_tasks
        self.snapshot_size = snapshot_size

    def build_task_request(
        self,
        classification: IntentClassification,
        context: ConversationContext,
        message: str = ""
    ) -> TaskRequest:
        """Create the single request shared by all workers for a message"""
        return TaskRequest(
            type=classification.intent,
            description=(
                f"Handle {classification.intent.value} request with "
                f"{classification.complexity.value} complexity"
            ),
            parameters=dict(classification.parameters),
            complexity=classification.complexity,
            priority=1,
            message=message,
            context=TaskContextSnapshot(
                session_id=context.session_id,
                user_profile=context.user_profile,
                recent_messages=context.recent_messages(self.snapshot_size),
            ),
        )

    async def execute(
        self,
        routing: RoutingDecision,
        task: TaskRequest,
        context: ConversationContext
    ) -> ExecutionReport:
        """Run the plan

        Args:
            routing: Dispatch plan
            task: Shared task request
            context: Conversation context of the session

        Returns:
            ExecutionReport: responses (failed ones included, primary first)
            and the ordered trace entries
        """
        report = ExecutionReport()

        primary = self._resolve(routing.primary_agent)
        if primary is None:
            logger.warning(
                f"⚠️ Primary agent {routing.primary_agent.value} is not registered; "
                "no task executed"
            )
            return report

        outcome = await self._invoke(routing.primary_agent, primary, task, context)
        if not outcome.ok:
            logger.error(f"Task execution error ({routing.primary_agent.value}): {outcome.error}")
            report.traces.append(AgentTrace(
                agent_type=AgentType.ORCHESTRATOR,
                action="task-execution-error",
                input=task,
                output=None,
                duration=outcome.duration,
                success=False,
                error=f"{routing.primary_agent.value}: {outcome.error}",
            ))
            return report

        report.traces.append(self._trace("process-task", task, outcome))
        report.results.append(outcome.response)

        if routing.is_parallel and routing.supporting_agents:
            supporting = await self._run_supporting(routing, task, context, report.traces)
            report.results.extend(supporting)

        logger.info(
            f"✅ Executed {len(report.results)} task(s) for {task.id} "
            f"({len(report.traces)} trace entries)"
        )
        return report

    async def _run_supporting(
        self,
        routing: RoutingDecision,
        task: TaskRequest,
        context: ConversationContext,
        traces: List[AgentTrace]
    ) -> List[TaskResponse]:
        semaphore = asyncio.Semaphore(self.max_parallel_tasks)

        async def run_one(agent_type: AgentType) -> Optional[TaskResponse]:
            worker = self._resolve(agent_type)
            if worker is None:
                logger.debug(f"Supporting agent {agent_type.value} not registered, skipped")
                return None
            async with semaphore:
                outcome = await self._invoke(agent_type, worker, task, context)
            # Appended on completion, so traces follow completion order
            traces.append(self._trace("support-task", task, outcome))
            if not outcome.ok:
                logger.warning(f"Supporting agent {agent_type.value} failed: {outcome.error}")
            return outcome.response

        responses = await asyncio.gather(*(run_one(t) for t in routing.supporting_agents))
        return [r for r in responses if r is not None]

    def _resolve(self, agent_type: AgentType) -> Optional[BaseAgent]:
        try:
            return self.registry.get(agent_type)
        except AgentNotFoundError:
            return None

    async def _invoke(
        self,
        agent_type: AgentType,
        worker: BaseAgent,
        task: TaskRequest,
        context: ConversationContext
    ) -> WorkerOutcome:
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                worker.process_task(task, context),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            return WorkerOutcome(
                agent_type=agent_type,
                duration=_elapsed_ms(start),
                error=f"timed out after {self.timeout_seconds}s",
            )
        except Exception as e:
            return WorkerOutcome(
                agent_type=agent_type,
                duration=_elapsed_ms(start),
                error=str(e) or e.__class__.__name__,
            )

        return WorkerOutcome(agent_type=agent_type, duration=_elapsed_ms(start), response=response)

    @staticmethod
    def _trace(action: str, task: TaskRequest, outcome: WorkerOutcome) -> AgentTrace:
        if outcome.ok:
            return AgentTrace(
                agent_type=outcome.agent_type,
                action=action,
                input=task,
                output=outcome.response,
                duration=outcome.duration,
                success=outcome.response.success,
                error=outcome.response.error,
            )
        return AgentTrace(
            agent_type=outcome.agent_type,
            action=action,
            input=task,
            output=None,
            duration=outcome.duration,
            success=False,
            error=outcome.error,
        )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
