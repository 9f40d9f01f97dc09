"""Lead Research Agent - prospect research, data enrichment and lead scoring"""
import logging
from typing import Any, Dict, Optional

from app.agent.specialists.base import SpecialistAgent
from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskComplexity,
    TaskRequest,
)

logger = logging.getLogger(__name__)

DATA_PROVIDERS: Dict[str, Dict[str, Any]] = {
    "apollo": {
        "name": "Apollo.io",
        "strength": "B2B database and email finding",
        "coverage": "Global",
        "accuracy": 0.92,
    },
    "zoominfo": {
        "name": "ZoomInfo",
        "strength": "Company intelligence and technographics",
        "coverage": "US-focused",
        "accuracy": 0.95,
    },
    "clearbit": {
        "name": "Clearbit",
        "strength": "Real-time enrichment and company data",
        "coverage": "Global",
        "accuracy": 0.89,
    },
}

SEARCH_FIELDS = ("company", "location", "industry", "role")


class LeadResearchAgent(SpecialistAgent):
    """Builds prospect search plans from extracted criteria"""

    display_name = "Lead Research"
    system_prompt = (
        "You are SAM's lead research specialist. Turn the request into a concrete prospect "
        "search plan: sources, filters and enrichment steps. Be concise."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.LEAD_RESEARCH, client)
        self.providers: Dict[str, Dict[str, Any]] = {}
        self.capabilities = [
            AgentCapability(
                name="linkedin-research",
                description="Deep LinkedIn profile and company research with Sales Navigator",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=10,
                required_parameters=("linkedinUrl",),
                optional_parameters=("depth", "includeNetwork", "recentActivity"),
            ),
            AgentCapability(
                name="company-intelligence",
                description="Comprehensive company research including financials, news, and technology",
                supported_complexity=(TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=12,
                required_parameters=("companyName",),
                optional_parameters=("website", "industry", "includeCompetitors"),
            ),
            AgentCapability(
                name="data-enrichment",
                description="Multi-source data enrichment for contact and company information",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=6,
                required_parameters=("basicLeadData",),
                optional_parameters=("providers", "depth", "includeSocial"),
            ),
            AgentCapability(
                name="lead-scoring",
                description="Comprehensive lead scoring using multiple qualification frameworks",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=5,
                required_parameters=("leadProfile", "icpCriteria"),
                optional_parameters=("scoringModel", "weightings"),
            ),
        ]

    async def setup(self) -> None:
        self.providers = dict(DATA_PROVIDERS)
        logger.info(f"Configured {len(self.providers)} enrichment providers")

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        criteria = {key: task.parameters[key] for key in SEARCH_FIELDS if key in task.parameters}
        plan = await self.ask_llm(task, "Outline the search and enrichment plan.")

        return self.payload(
            plan,
            search_criteria=criteria,
            sources=["LinkedIn Sales Navigator", "Google Search"] + [
                p["name"] for p in self.providers.values()
            ],
        )

    async def shutdown(self) -> None:
        self.providers.clear()
        await super().shutdown()
