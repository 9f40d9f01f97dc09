"""Agent System - owns the orchestrator and the specialist workers.

The system is created by ``create_agent_system`` and owned by its caller
(the API lifespan, the CLI, or a test); there is no module-level instance.

Lifecycle:
1. initialize(): orchestrator first, then every specialist in order.
   All-or-nothing: on failure the specialists already initialized are
   shut down and nothing is registered.
2. process_message(): delegated to the orchestrator.
3. shutdown(): orchestrator, then specialists in registration order.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from app.agent.specialists import DEFAULT_SPECIALISTS, SpecialistFactory
from app.core.config import Settings, settings as default_settings
from orchestration.context_store import ContextStore
from orchestration.errors import (
    AgentInitializationError,
    AgentNotFoundError,
    OrchestratorProcessingError,
)
from orchestration.orchestrator import Orchestrator
from orchestration.types import AgentType, OperationMode, ProcessResult
from orchestration.worker import BaseAgent

logger = logging.getLogger(__name__)


class AgentSystem:
    """Factory-level registry of the orchestrator and its specialists

    Attributes:
        settings: Application settings
        specialist_factories: Ordered (agent type, factory) pairs
        orchestrator: Orchestrator, available after initialize()
        specialists: Initialized specialists in registration order
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        specialists: Optional[Sequence[Tuple[AgentType, SpecialistFactory]]] = None
    ):
        self.settings = settings or default_settings
        self.specialist_factories = list(specialists if specialists is not None else DEFAULT_SPECIALISTS)
        self.orchestrator: Optional[Orchestrator] = None
        self.specialists: Dict[AgentType, BaseAgent] = {}
        self.is_initialized = False

    def _build_orchestrator(self) -> Orchestrator:
        return Orchestrator(
            context_store=ContextStore(
                max_sessions=self.settings.context_max_sessions,
                ttl_minutes=self.settings.context_ttl_minutes,
            ),
            worker_timeout=self.settings.worker_timeout_seconds,
            max_parallel_tasks=self.settings.max_parallel_tasks,
            history_snapshot_size=self.settings.history_snapshot_size,
            operation_mode=OperationMode(self.settings.default_operation_mode),
        )

    async def initialize(self) -> None:
        """Build and initialize every worker

        Raises:
            AgentInitializationError: any worker failed to construct or initialize
        """
        if self.is_initialized:
            return

        logger.info("🚀 Initializing SAM agent system...")
        orchestrator = self._build_orchestrator()
        try:
            await orchestrator.initialize()
        except Exception as e:
            raise AgentInitializationError(AgentType.ORCHESTRATOR, str(e)) from e

        ready: List[Tuple[AgentType, BaseAgent]] = []
        for agent_type, factory in self.specialist_factories:
            try:
                agent = factory()
                await agent.initialize()
            except Exception as e:
                logger.error(f"❌ Failed to initialize {agent_type.value}: {e}")
                await self._shutdown_quietly([a for _, a in ready] + [orchestrator])
                raise AgentInitializationError(agent_type, str(e)) from e
            ready.append((agent_type, agent))

        self.specialists = dict(ready)
        orchestrator.register_specialists(self.specialists)
        self.orchestrator = orchestrator
        self.is_initialized = True
        logger.info(f"✅ Agent system ready ({len(self.specialists)} specialists)")

    @staticmethod
    async def _shutdown_quietly(agents: Sequence[BaseAgent]) -> None:
        for agent in agents:
            try:
                await agent.shutdown()
            except Exception as e:
                logger.warning(f"Shutdown of {agent.agent_type.value} failed: {e}")

    def get_orchestrator(self) -> Orchestrator:
        if self.orchestrator is None:
            raise OrchestratorProcessingError("Agent system not initialized")
        return self.orchestrator

    def get_specialist(self, agent_type: AgentType) -> BaseAgent:
        try:
            return self.specialists[agent_type]
        except KeyError:
            raise AgentNotFoundError(agent_type)

    async def process_message(
        self,
        message: str,
        seed_context: Optional[Mapping[str, Any]] = None,
        session_id: str = "default"
    ) -> ProcessResult:
        if not self.is_initialized or self.orchestrator is None:
            raise OrchestratorProcessingError("Agent system not initialized")
        return await self.orchestrator.process_message(message, seed_context, session_id)

    async def health_check(self) -> Dict[str, bool]:
        """Complete report: one entry for the orchestrator plus one per specialist"""
        report: Dict[str, bool] = {}
        if self.orchestrator is not None:
            report[AgentType.ORCHESTRATOR.value] = await self._probe(self.orchestrator)
        else:
            report[AgentType.ORCHESTRATOR.value] = False

        for agent_type, agent in self.specialists.items():
            report[agent_type.value] = await self._probe(agent)
        return report

    @staticmethod
    async def _probe(agent: BaseAgent) -> bool:
        try:
            return bool(await agent.health_check())
        except Exception as e:
            logger.error(f"Health check error for {agent.agent_type.value}: {e}")
            return False

    async def shutdown(self) -> None:
        if not self.is_initialized:
            return

        logger.info("Shutting down SAM agent system...")
        agents: List[BaseAgent] = [self.orchestrator] if self.orchestrator else []
        agents.extend(self.specialists.values())
        await self._shutdown_quietly(agents)

        self.specialists = {}
        self.orchestrator = None
        self.is_initialized = False
        logger.info("Agent system shut down")


async def create_agent_system(
    settings: Optional[Settings] = None,
    specialists: Optional[Sequence[Tuple[AgentType, SpecialistFactory]]] = None
) -> AgentSystem:
    """Create and initialize an agent system owned by the caller"""
    system = AgentSystem(settings=settings, specialists=specialists)
    await system.initialize()
    return system
