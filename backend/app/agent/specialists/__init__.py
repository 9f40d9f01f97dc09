"""SAM specialist agents

DEFAULT_SPECIALISTS lists the worker factories in initialization order.
"""
from typing import Callable, List, Tuple

from app.agent.specialists.base import SpecialistAgent
from app.agent.specialists.campaign import (
    CampaignManagementAgent,
    GTMStrategyAgent,
    MEDDICQualificationAgent,
)
from app.agent.specialists.inbox import AutoResponseAgent, InboxTriageAgent, SpamFilterAgent
from app.agent.specialists.knowledge_base import KnowledgeBaseAgent
from app.agent.specialists.lead_research import LeadResearchAgent
from app.agent.specialists.system import OnboardingAgent, PromptEngineerAgent
from app.agent.specialists.workflow import WorkflowAutomationAgent
from orchestration.types import AgentType
from orchestration.worker import BaseAgent

SpecialistFactory = Callable[[], BaseAgent]

DEFAULT_SPECIALISTS: List[Tuple[AgentType, SpecialistFactory]] = [
    (AgentType.LEAD_RESEARCH, LeadResearchAgent),
    (AgentType.CAMPAIGN_MANAGEMENT, CampaignManagementAgent),
    (AgentType.GTM_STRATEGY, GTMStrategyAgent),
    (AgentType.MEDDIC_QUALIFICATION, MEDDICQualificationAgent),
    (AgentType.WORKFLOW_AUTOMATION, WorkflowAutomationAgent),
    (AgentType.INBOX_TRIAGE, InboxTriageAgent),
    (AgentType.SPAM_FILTER, SpamFilterAgent),
    (AgentType.AUTO_RESPONSE, AutoResponseAgent),
    (AgentType.PROMPT_ENGINEER, PromptEngineerAgent),
    (AgentType.ONBOARDING, OnboardingAgent),
    (AgentType.KNOWLEDGE_BASE, KnowledgeBaseAgent),
]

__all__ = [
    "DEFAULT_SPECIALISTS",
    "SpecialistFactory",
    "SpecialistAgent",
    "LeadResearchAgent",
    "CampaignManagementAgent",
    "GTMStrategyAgent",
    "MEDDICQualificationAgent",
    "WorkflowAutomationAgent",
    "InboxTriageAgent",
    "SpamFilterAgent",
    "AutoResponseAgent",
    "PromptEngineerAgent",
    "OnboardingAgent",
    "KnowledgeBaseAgent",
]
