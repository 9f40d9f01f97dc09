"""Agent Registry - Catalog of Available Workers

Holds the mapping from worker identity to worker instance. The set is
replaced wholesale on ``register`` so concurrent readers always observe
either the old or the new complete set.
"""
import logging
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from orchestration.errors import AgentNotFoundError
from orchestration.types import AgentType
from orchestration.worker import BaseAgent

logger = logging.getLogger(__name__)


class WorkerRegistry:
    """Registry of all registered workers, keyed by AgentType"""

    def __init__(self, workers: Optional[Mapping[AgentType, BaseAgent]] = None):
        self._workers: Dict[AgentType, BaseAgent] = dict(workers or {})

    def register(self, workers: Mapping[AgentType, BaseAgent]) -> None:
        """Replace the current worker set (no partial merge)"""
        # Single reference swap: readers never see a half-built mapping
        self._workers = dict(workers)
        logger.info(f"📚 Registered {len(self._workers)} specialist agents")

    def get(self, agent_type: AgentType) -> BaseAgent:
        """Get worker by identity

        Raises:
            AgentNotFoundError: If no worker is registered for the tag
        """
        worker = self._workers.get(agent_type)
        if worker is None:
            raise AgentNotFoundError(agent_type.value)
        return worker

    def find(self, agent_type: AgentType) -> Optional[BaseAgent]:
        return self._workers.get(agent_type)

    def tags(self) -> List[AgentType]:
        return list(self._workers.keys())

    def items(self) -> List[Tuple[AgentType, BaseAgent]]:
        """Snapshot of (tag, worker) pairs in registration order"""
        return list(self._workers.items())

    def clear(self) -> None:
        self._workers = {}

    def __len__(self) -> int:
        return len(self._workers)

    def __contains__(self, agent_type: object) -> bool:
        return agent_type in self._workers

    def __iter__(self) -> Iterator[AgentType]:
        return iter(list(self._workers))

    def get_statistics(self) -> Dict:
        """Get registry statistics"""
        workers = self._workers
        return {
            "total_agents": len(workers),
            "agents": [tag.value for tag in workers],
            "capabilities": {
                tag.value: [c.name for c in worker.get_capabilities()]
                for tag, worker in workers.items()
            },
        }
