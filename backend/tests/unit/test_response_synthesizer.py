"""Unit tests for response synthesis and rendering"""

import pytest

from orchestration.rendering import FOLLOW_UP_HEADER, render_markdown, render_message
from orchestration.response_synthesizer import (
    FALLBACK_RESPONSES,
    FOLLOW_UP_SUGGESTIONS,
    RESPONSE_WRAPPERS,
    ResponseSynthesizer,
    SynthesizedResponse,
    result_text,
)
from orchestration.types import (
    AgentType,
    IntentClassification,
    Message,
    MessageIntent,
    Sender,
    TaskComplexity,
    TaskResponse,
)


def classification_for(intent):
    return IntentClassification(
        intent=intent,
        confidence=0.5,
        parameters={},
        suggested_agents=(AgentType.KNOWLEDGE_BASE,),
        complexity=TaskComplexity.MODERATE,
        estimated_tokens=5,
    )


def response(result="R", success=True, agent=AgentType.KNOWLEDGE_BASE):
    return TaskResponse(
        task_id="task_1",
        agent_type=agent,
        result=result,
        success=success,
        confidence=0.9 if success else 0.1,
    )


class TestResponseSynthesizer:
    """Test suite for ResponseSynthesizer"""

    @pytest.fixture
    def synthesizer(self):
        return ResponseSynthesizer()

    def test_content_creation_wrapper(self, synthesizer):
        out = synthesizer.synthesize(
            "write an email", classification_for(MessageIntent.CONTENT_CREATION), [response("R")]
        )
        prefix, _ = RESPONSE_WRAPPERS[MessageIntent.CONTENT_CREATION]

        assert out.body == prefix + "R"
        assert out.body.startswith("I've created some content ideas for you.")
        assert out.suggestions == (
            "Generate video scripts",
            "Create follow-up sequences",
            "Develop A/B test variants",
        )
        assert out.used_fallback is False

    def test_rendered_content_creation(self, synthesizer):
        out = synthesizer.synthesize(
            "write an email", classification_for(MessageIntent.CONTENT_CREATION), [response("R")]
        )
        prefix, _ = RESPONSE_WRAPPERS[MessageIntent.CONTENT_CREATION]

        assert render_markdown(out) == (
            prefix + "R\n\n"
            "**What would you like to do next?**\n"
            "• Generate video scripts\n"
            "• Create follow-up sequences\n"
            "• Develop A/B test variants"
        )

    @pytest.mark.parametrize("intent", list(MessageIntent))
    def test_fallback_when_no_results(self, synthesizer, intent):
        out = synthesizer.synthesize("anything", classification_for(intent), [])

        assert out.body == FALLBACK_RESPONSES[intent]
        assert out.suggestions == ()
        assert out.used_fallback is True

    def test_failed_results_are_filtered(self, synthesizer):
        out = synthesizer.synthesize(
            "help",
            classification_for(MessageIntent.LEAD_GENERATION),
            [response(None, success=False)],
        )
        assert out.body == FALLBACK_RESPONSES[MessageIntent.LEAD_GENERATION]

    def test_first_successful_result_is_primary(self, synthesizer):
        out = synthesizer.synthesize(
            "analyze",
            classification_for(MessageIntent.PERFORMANCE_ANALYSIS),
            [response(None, success=False), response("first"), response("second")],
        )
        assert out.body.endswith("first")

    def test_wrapper_default_text_for_empty_result(self, synthesizer):
        out = synthesizer.synthesize(
            "automate", classification_for(MessageIntent.AUTOMATION_SETUP), [response(None)]
        )
        prefix, default = RESPONSE_WRAPPERS[MessageIntent.AUTOMATION_SETUP]
        assert out.body == prefix + default

    def test_knowledge_wrapper_echoes_message(self, synthesizer):
        out = synthesizer.synthesize(
            "what is SAM", classification_for(MessageIntent.KNOWLEDGE_QUERY), [response(None)]
        )
        assert 'I understand you\'re asking about: "what is SAM".' in out.body
        assert out.suggestions == FOLLOW_UP_SUGGESTIONS[MessageIntent.KNOWLEDGE_QUERY]

    def test_knowledge_wrapper_passes_result_through(self, synthesizer):
        out = synthesizer.synthesize(
            "hi", classification_for(MessageIntent.GENERAL_QUESTION), [response({"content": "Hello!"})]
        )
        assert out.body == "Hello!"


class TestRendering:
    """Test suite for presentation helpers"""

    def test_result_text_variants(self):
        assert result_text(None) == ""
        assert result_text("x") == "x"
        assert result_text({"content": "c", "message": "m"}) == "c"
        assert result_text({"message": "m"}) == "m"
        assert result_text(42) == "42"

    def test_body_only_without_suggestions(self):
        assert render_markdown(SynthesizedResponse(body="plain")) == "plain"

    def test_render_message(self):
        message = Message(content="Body", sender=Sender.ORCHESTRATOR, suggestions=("One",))
        assert render_message(message) == f"Body\n\n{FOLLOW_UP_HEADER}\n• One"
