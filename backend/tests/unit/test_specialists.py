"""Unit tests for the SAM specialist agents"""

from unittest.mock import AsyncMock, Mock

import pytest

from app.agent.specialists import (
    InboxTriageAgent,
    KnowledgeBaseAgent,
    LeadResearchAgent,
    OnboardingAgent,
    SpamFilterAgent,
    WorkflowAutomationAgent,
)
from app.agent.specialists.knowledge_base import FALLBACK_BY_INTENT, word_similarity
from app.core.config import Settings
from app.llm.completion import CompletionClient
from orchestration.context_store import build_context
from orchestration.types import (
    MessageIntent,
    TaskComplexity,
    TaskContextSnapshot,
    TaskRequest,
    UserProfile,
)


def make_task(message, intent=MessageIntent.GENERAL_QUESTION, parameters=None, profile=None):
    return TaskRequest(
        type=intent,
        description=f"Handle {intent.value} request with simple complexity",
        parameters=parameters or {},
        complexity=TaskComplexity.SIMPLE,
        message=message,
        context=TaskContextSnapshot(session_id="s1", user_profile=profile, recent_messages=()),
    )


def fake_client(answer="plan"):
    client = Mock(spec=CompletionClient)
    client.complete = AsyncMock(return_value=answer)
    return client


@pytest.fixture
def offline_client():
    return CompletionClient(Settings(_env_file=None, llm_api_key=None))


class TestKnowledgeBaseAgent:
    """Test suite for KnowledgeBaseAgent"""

    @pytest.mark.asyncio
    async def test_greeting_uses_profile_name(self, offline_client):
        agent = KnowledgeBaseAgent(offline_client)
        await agent.initialize()
        context = build_context("s1", {"user_profile": {"name": "Ada"}})

        response = await agent.process_task(make_task("hello"), context)

        assert response.success is True
        assert response.result["content"].startswith("Hello Ada!")
        assert response.result["agent"] == "Knowledge Base"

    @pytest.mark.asyncio
    async def test_faq_match(self, offline_client):
        agent = KnowledgeBaseAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(
            make_task("What is SAM?", MessageIntent.KNOWLEDGE_QUERY), build_context("s1")
        )

        assert response.result["content"].startswith("SAM is your AI-powered sales assistant")

    @pytest.mark.asyncio
    async def test_best_practices(self, offline_client):
        agent = KnowledgeBaseAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(
            make_task("explain linkedin strategy", MessageIntent.KNOWLEDGE_QUERY),
            build_context("s1"),
        )

        assert response.result["content"].startswith("**LinkedIn Outreach Best Practices:**")

    @pytest.mark.asyncio
    async def test_other_intents_get_fallback(self, offline_client):
        agent = KnowledgeBaseAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(
            make_task("find leads", MessageIntent.LEAD_GENERATION), build_context("s1")
        )

        assert response.result["content"] == FALLBACK_BY_INTENT[MessageIntent.LEAD_GENERATION]

    @pytest.mark.asyncio
    async def test_health_follows_lifecycle(self, offline_client):
        agent = KnowledgeBaseAgent(offline_client)
        assert await agent.health_check() is False

        await agent.initialize()
        assert await agent.health_check() is True

        await agent.shutdown()
        assert await agent.health_check() is False
        assert agent.knowledge_store == {}

    def test_word_similarity(self):
        assert word_similarity("what is sam", "what is sam") == 1.0
        assert word_similarity("", "what is sam") == 0.0
        assert word_similarity("pricing", "what is sam") == 0.0


class TestLLMBackedSpecialists:
    """Test suite for specialists that consult the completion client"""

    @pytest.mark.asyncio
    async def test_lead_research_payload(self):
        client = fake_client("search plan")
        agent = LeadResearchAgent(client)
        await agent.initialize()
        task = make_task(
            "Looking for leads in sales navigator for CTOs",
            MessageIntent.LEAD_GENERATION,
            {"location": "sales navigator for CTOs"},
            UserProfile(company="Acme", target_audience="CTOs"),
        )

        response = await agent.process_task(task, build_context("s1"))

        assert response.success is True
        assert response.result["content"] == "search plan"
        assert response.result["search_criteria"] == {"location": "sales navigator for CTOs"}
        assert "Apollo.io" in response.result["sources"]
        prompt = client.complete.call_args.args[1]
        assert prompt.startswith("Looking for leads in sales navigator for CTOs")
        assert "- target audience: CTOs" in prompt

    @pytest.mark.asyncio
    async def test_llm_error_becomes_failed_response(self):
        client = fake_client()
        client.complete.side_effect = RuntimeError("quota exceeded")
        agent = LeadResearchAgent(client)
        await agent.initialize()

        response = await agent.process_task(make_task("leads"), build_context("s1"))

        assert response.success is False
        assert response.error == "quota exceeded"
        assert response.confidence == 0.1

    @pytest.mark.asyncio
    async def test_workflow_selection(self):
        agent = WorkflowAutomationAgent(fake_client("steps"))
        await agent.initialize()

        response = await agent.process_task(
            make_task("automate linkedin scraping"), build_context("s1")
        )

        assert response.result["workflow"] == "linkedin_scraping"
        assert agent.select_workflow("enrich my contacts") == "data_enrichment"
        assert agent.select_workflow("weekly sequence") == "campaign_automation"


class TestPlaybookSpecialists:
    """Test suite for keyword playbook specialists"""

    @pytest.mark.asyncio
    async def test_inbox_triage_route(self, offline_client):
        agent = InboxTriageAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(make_task("what is urgent today"), build_context("s1"))

        assert response.result["route"] == "priority_scoring"
        assert response.result["suggestions"][0] == "Show me my most urgent emails"

    @pytest.mark.asyncio
    async def test_introduction_when_nothing_matches(self, offline_client):
        agent = SpamFilterAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(make_task("good morning"), build_context("s1"))

        assert response.result["route"] == "introduction"
        assert response.result["content"].startswith("I'm your Spam Filter Specialist")

    def test_capabilities_follow_routes(self, offline_client):
        names = [c.name for c in InboxTriageAgent(offline_client).get_capabilities()]
        assert names == ["email_classification", "auto_response", "priority_scoring"]


class TestOnboardingAgent:
    """Test suite for OnboardingAgent"""

    @pytest.mark.asyncio
    async def test_starts_with_company_setup(self, offline_client):
        agent = OnboardingAgent(offline_client)
        await agent.initialize()

        response = await agent.process_task(make_task("let's start"), build_context("s1"))

        assert response.result["stage"] == "company-setup"
        assert "(step 1 of 6)" in response.result["content"]

    @pytest.mark.asyncio
    async def test_skips_completed_stages(self, offline_client):
        agent = OnboardingAgent(offline_client)
        await agent.initialize()
        context = build_context("s1", {
            "user_profile": {"company": "Acme", "product_offering": "CRM"},
        })

        assert agent.next_stage(context)[0] == "icp"
