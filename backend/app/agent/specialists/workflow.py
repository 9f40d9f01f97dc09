"""Workflow Automation Agent - describes outreach automation workflows.

Only describes workflows; nothing is triggered or scheduled.
"""
from typing import Any, Dict, Optional

from app.agent.specialists.base import SpecialistAgent, contains_any
from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskComplexity,
    TaskRequest,
)

WORKFLOWS = {
    "linkedin_scraping": "Scrape LinkedIn search results into a lead list",
    "campaign_automation": "Run multi-step outreach sequences with follow-ups",
    "data_enrichment": "Enrich new leads with contact and company data",
}


class WorkflowAutomationAgent(SpecialistAgent):
    display_name = "Workflow Automation"
    system_prompt = (
        "You are SAM's automation specialist. Describe the workflow steps, triggers and "
        "safeguards for the requested automation."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.WORKFLOW_AUTOMATION, client)
        self.capabilities = [
            AgentCapability(
                name=name,
                description=description,
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=6,
            )
            for name, description in WORKFLOWS.items()
        ]

    def select_workflow(self, text: str) -> str:
        if contains_any(text, ("scrape", "linkedin", "sales navigator")):
            return "linkedin_scraping"
        if contains_any(text, ("enrich", "contact")):
            return "data_enrichment"
        return "campaign_automation"

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        workflow = self.select_workflow(task.message or task.description)
        description = await self.ask_llm(task, f"Workflow: {WORKFLOWS[workflow]}.")
        return self.payload(description, workflow=workflow)
