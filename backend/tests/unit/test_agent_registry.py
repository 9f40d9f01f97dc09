"""Unit tests for WorkerRegistry"""

import pytest

from orchestration.agent_registry import WorkerRegistry
from orchestration.errors import AgentNotFoundError
from orchestration.types import AgentType


class TestWorkerRegistry:
    """Test suite for WorkerRegistry"""

    def test_get_registered_worker(self, stub_worker):
        worker = stub_worker(AgentType.ANALYTICS)
        registry = WorkerRegistry({AgentType.ANALYTICS: worker})

        assert registry.get(AgentType.ANALYTICS) is worker
        assert AgentType.ANALYTICS in registry
        assert len(registry) == 1

    def test_get_unknown_raises(self):
        registry = WorkerRegistry()

        with pytest.raises(AgentNotFoundError) as exc_info:
            registry.get(AgentType.CONTENT_CREATION)

        assert "content-creation" in str(exc_info.value)
        assert registry.find(AgentType.CONTENT_CREATION) is None

    def test_register_replaces_whole_set(self, stub_worker):
        registry = WorkerRegistry({AgentType.ANALYTICS: stub_worker(AgentType.ANALYTICS)})
        replacement = stub_worker(AgentType.LEAD_RESEARCH)

        registry.register({AgentType.LEAD_RESEARCH: replacement})

        assert registry.tags() == [AgentType.LEAD_RESEARCH]
        assert registry.find(AgentType.ANALYTICS) is None

    def test_register_copies_mapping(self, stub_worker):
        workers = {AgentType.ANALYTICS: stub_worker(AgentType.ANALYTICS)}
        registry = WorkerRegistry()
        registry.register(workers)

        workers.clear()

        assert len(registry) == 1

    def test_snapshot_survives_replacement(self, stub_worker):
        registry = WorkerRegistry({AgentType.ANALYTICS: stub_worker(AgentType.ANALYTICS)})
        snapshot = registry.items()

        registry.register({})

        assert len(snapshot) == 1
        assert len(registry) == 0

    def test_clear(self, stub_worker):
        registry = WorkerRegistry({AgentType.ANALYTICS: stub_worker(AgentType.ANALYTICS)})
        registry.clear()

        assert len(registry) == 0
        assert list(registry) == []

    def test_statistics(self, stub_worker):
        registry = WorkerRegistry({AgentType.ANALYTICS: stub_worker(AgentType.ANALYTICS)})

        stats = registry.get_statistics()

        assert stats["total_agents"] == 1
        assert stats["agents"] == ["analytics"]
        assert stats["capabilities"] == {"analytics": ["analytics-stub"]}
