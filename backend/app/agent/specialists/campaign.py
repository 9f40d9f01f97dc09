"""Campaign-side specialists: campaign management, GTM strategy, MEDDIC qualification"""
import logging
from typing import Any, Dict, Optional, Tuple

from app.agent.specialists.base import SpecialistAgent, contains_any
from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskComplexity,
    TaskRequest,
)

logger = logging.getLogger(__name__)

_MODERATE_UP = (TaskComplexity.MODERATE, TaskComplexity.COMPLEX, TaskComplexity.EXPERT)

CAMPAIGN_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "linkedin-warm-connection": {
        "name": "LinkedIn Warm Connection Campaign",
        "channels": ["LinkedIn"],
        "phases": ["Connection Building", "Value Delivery", "Engagement"],
    },
    "enterprise-abm": {
        "name": "Enterprise Account-Based Campaign",
        "channels": ["LinkedIn", "Email"],
        "phases": ["Account Research", "Multi-threaded Outreach", "Executive Engagement"],
    },
}

SALES_METHODOLOGIES = ("MEDDIC", "Challenger Sale", "Sandler Selling System", "SPIN Selling")

# (criterion, weight)
MEDDIC_CRITERIA: Tuple[Tuple[str, float], ...] = (
    ("Metrics", 0.20),
    ("Economic Buyer", 0.25),
    ("Decision Criteria", 0.15),
    ("Decision Process", 0.15),
    ("Identify Pain", 0.15),
    ("Champion", 0.10),
)


class CampaignManagementAgent(SpecialistAgent):
    """Campaign ideation, setup and optimization planning"""

    display_name = "Campaign Management"
    system_prompt = (
        "You are SAM's campaign strategist. Propose multi-channel outreach campaigns with "
        "clear phases, messaging angles and success metrics."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.CAMPAIGN_MANAGEMENT, client)
        self.templates: Dict[str, Dict[str, Any]] = {}
        self.capabilities = [
            AgentCapability(
                name="campaign-ideation",
                description="Generate campaign ideas from the client profile",
                supported_complexity=_MODERATE_UP,
                estimated_duration=8,
                required_parameters=("clientProfile",),
                optional_parameters=("goals",),
            ),
            AgentCapability(
                name="campaign-setup",
                description="Set up campaign sequences across channels",
                supported_complexity=_MODERATE_UP,
                estimated_duration=10,
                required_parameters=("campaignPlan",),
            ),
            AgentCapability(
                name="optimization-planning",
                description="Plan optimizations from campaign results",
                supported_complexity=(TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=12,
                required_parameters=("results",),
                optional_parameters=("metric",),
            ),
        ]

    async def setup(self) -> None:
        self.templates = dict(CAMPAIGN_TEMPLATES)

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        query = task.message or task.description
        key = "enterprise-abm" if contains_any(query, ("enterprise", "account-based", "abm")) \
            else "linkedin-warm-connection"
        template = self.templates[key]
        plan = await self.ask_llm(
            task,
            f"Base the plan on the '{template['name']}' template "
            f"(phases: {', '.join(template['phases'])}).",
        )
        return self.payload(plan, template=template["name"], channels=list(template["channels"]))


class GTMStrategyAgent(SpecialistAgent):
    """Market analysis, positioning and launch planning"""

    display_name = "GTM Strategy"
    system_prompt = (
        "You are SAM's go-to-market strategist. Cover target market, positioning, channels "
        "and a launch sequence."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.GTM_STRATEGY, client)
        self.capabilities = [
            AgentCapability(
                name="market-analysis",
                description="Analyze target market size, segments and trends",
                supported_complexity=_MODERATE_UP,
                estimated_duration=12,
                required_parameters=("industry",),
                optional_parameters=("region",),
            ),
            AgentCapability(
                name="competitive-positioning",
                description="Position the offering against competitors",
                supported_complexity=(TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=10,
                required_parameters=("competitors",),
            ),
            AgentCapability(
                name="launch-planning",
                description="Plan a go-to-market launch sequence",
                supported_complexity=(TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=15,
                required_parameters=("product",),
                optional_parameters=("timeline",),
            ),
        ]

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        strategy = await self.ask_llm(task)
        return self.payload(strategy, industry=task.parameters.get("industry"))


class MEDDICQualificationAgent(SpecialistAgent):
    """Qualifies deals with MEDDIC and suggests discovery questions"""

    display_name = "MEDDIC Qualification"
    system_prompt = (
        "You are SAM's deal qualification specialist. Qualify opportunities with MEDDIC and "
        "propose discovery questions for the missing criteria."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.MEDDIC_QUALIFICATION, client)
        self.capabilities = [
            AgentCapability(
                name="meddic-qualification",
                description="Qualify opportunities against the MEDDIC framework",
                supported_complexity=_MODERATE_UP,
                estimated_duration=8,
                required_parameters=("opportunity",),
            ),
            AgentCapability(
                name="qualification-questions",
                description="Generate discovery questions per qualification criterion",
                supported_complexity=(TaskComplexity.SIMPLE, TaskComplexity.MODERATE),
                estimated_duration=4,
                optional_parameters=("criterion",),
            ),
            AgentCapability(
                name="sales-methodology-selection",
                description="Recommend a sales methodology for the deal",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=5,
            ),
        ]

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        criteria = ", ".join(f"{name} ({int(weight * 100)}%)" for name, weight in MEDDIC_CRITERIA)
        analysis = await self.ask_llm(task, f"Score against: {criteria}.")
        return self.payload(
            analysis,
            framework="MEDDIC",
            criteria=[name for name, _ in MEDDIC_CRITERIA],
            methodologies=list(SALES_METHODOLOGIES),
        )
