"""Response Synthesizer - merge worker results into one response.

Output is structured (body + follow-up suggestions); turning it into
markdown or any other text format is left to ``orchestration.rendering``.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from orchestration.types import IntentClassification, MessageIntent, TaskResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesizedResponse:
    body: str
    suggestions: Tuple[str, ...] = ()
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": self.body,
            "suggestions": list(self.suggestions),
            "used_fallback": self.used_fallback,
        }


FALLBACK_RESPONSES: Mapping[MessageIntent, str] = {
    MessageIntent.LEAD_GENERATION: (
        "I'd be happy to help you find leads! Could you provide more details about your "
        "target audience, such as industry, company size, or specific roles you're targeting?"
    ),
    MessageIntent.CAMPAIGN_OPTIMIZATION: (
        "I can help optimize your campaigns. Could you share some details about your current "
        "performance metrics or specific areas you'd like to improve?"
    ),
    MessageIntent.CONTENT_CREATION: (
        "I'd love to help create compelling content for you. What type of content do you need? "
        "Email templates, LinkedIn messages, or something else?"
    ),
    MessageIntent.PERFORMANCE_ANALYSIS: (
        "I can analyze your campaign performance. Could you share what specific metrics or "
        "time period you'd like me to focus on?"
    ),
    MessageIntent.AUTOMATION_SETUP: (
        "I can help set up automation workflows. What specific process would you like to "
        "automate? Lead outreach, follow-ups, or something else?"
    ),
    MessageIntent.KNOWLEDGE_QUERY: (
        "I'm here to help! Could you provide more context about what you'd like to know?"
    ),
    MessageIntent.GENERAL_QUESTION: (
        "Thanks for reaching out! I'm SAM, your AI sales assistant. I can help with lead "
        "generation, campaign optimization, content creation, and performance analysis. "
        "What would you like to work on?"
    ),
}
DEFAULT_FALLBACK = FALLBACK_RESPONSES[MessageIntent.GENERAL_QUESTION]

# intent -> (introductory sentence, text used when the result is empty)
RESPONSE_WRAPPERS: Mapping[MessageIntent, Tuple[str, str]] = {
    MessageIntent.LEAD_GENERATION: (
        "Great! I've analyzed your lead generation request. Based on your criteria, I can help "
        "you find qualified prospects using LinkedIn Sales Navigator, Google Search, and other "
        "sources. Here's what I found:\n\n",
        "I'm ready to start searching for leads that match your target profile.",
    ),
    MessageIntent.CAMPAIGN_OPTIMIZATION: (
        "I've analyzed your campaign optimization needs. Here are my recommendations for "
        "improving your performance:\n\n",
        "Let me help you identify the key areas where we can boost your campaign effectiveness.",
    ),
    MessageIntent.CONTENT_CREATION: (
        "I've created some content ideas for you. Here's what I came up with:\n\n",
        "I'm ready to help you create compelling, personalized content that resonates with "
        "your audience.",
    ),
    MessageIntent.PERFORMANCE_ANALYSIS: (
        "Here's my analysis of your performance data:\n\n",
        "I can help you dive deep into your metrics and identify opportunities for improvement.",
    ),
    MessageIntent.AUTOMATION_SETUP: (
        "I've outlined an automation strategy for you:\n\n",
        "Let me help you set up automated workflows that will save you time and improve "
        "consistency.",
    ),
}

FOLLOW_UP_SUGGESTIONS: Mapping[MessageIntent, Tuple[str, ...]] = {
    MessageIntent.LEAD_GENERATION: (
        "Enrich the leads with contact information",
        "Create personalized outreach sequences",
        "Set up automated follow-ups",
    ),
    MessageIntent.CAMPAIGN_OPTIMIZATION: (
        "A/B test different subject lines",
        "Analyze competitor strategies",
        "Create new audience segments",
    ),
    MessageIntent.CONTENT_CREATION: (
        "Generate video scripts",
        "Create follow-up sequences",
        "Develop A/B test variants",
    ),
    MessageIntent.PERFORMANCE_ANALYSIS: (
        "Set up automated reporting",
        "Create optimization experiments",
        "Forecast future performance",
    ),
    MessageIntent.AUTOMATION_SETUP: (
        "Test the workflow",
        "Create backup sequences",
        "Set up performance monitoring",
    ),
    MessageIntent.KNOWLEDGE_QUERY: (
        "Learn about related topics",
        "See practical examples",
        "Get implementation guidance",
    ),
    MessageIntent.GENERAL_QUESTION: (
        "Train SAM on your offering",
        "Define your target audience",
        "Set up your first campaign",
    ),
}
DEFAULT_SUGGESTIONS = FOLLOW_UP_SUGGESTIONS[MessageIntent.GENERAL_QUESTION]


def result_text(result: Any) -> str:
    """Best-effort text view of an opaque worker result ("" if absent)"""
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    if isinstance(result, Mapping):
        for key in ("content", "message", "text"):
            value = result.get(key)
            if isinstance(value, str):
                return value
    return str(result)


class ResponseSynthesizer:
    """Compose the final response from successful task responses"""

    def synthesize(
        self,
        original_message: str,
        classification: IntentClassification,
        results: Sequence[TaskResponse]
    ) -> SynthesizedResponse:
        """Merge results into a structured response

        Args:
            original_message: Raw user message
            classification: Intent classification of the message
            results: Every task response produced (failed ones included)

        Returns:
            SynthesizedResponse: body plus follow-up suggestions
        """
        successful = [r for r in results if r.success]
        intent = classification.intent

        if not successful:
            logger.info(f"No successful results for {intent.value}; using fallback")
            return SynthesizedResponse(
                body=FALLBACK_RESPONSES.get(intent, DEFAULT_FALLBACK),
                used_fallback=True,
            )

        primary = successful[0]
        body = self._wrap(intent, primary, original_message)
        suggestions = self.follow_up_suggestions(intent, successful)

        return SynthesizedResponse(body=body, suggestions=suggestions)

    def follow_up_suggestions(
        self,
        intent: MessageIntent,
        results: List[TaskResponse]
    ) -> Tuple[str, ...]:
        return FOLLOW_UP_SUGGESTIONS.get(intent, DEFAULT_SUGGESTIONS)

    @staticmethod
    def _wrap(intent: MessageIntent, primary: TaskResponse, original_message: str) -> str:
        text = result_text(primary.result)
        wrapper = RESPONSE_WRAPPERS.get(intent)
        if wrapper is not None:
            prefix, default = wrapper
            return prefix + (text or default)

        # Knowledge-style wrapper for knowledge-query, general-question and anything unmapped
        return text or (
            f'I understand you\'re asking about: "{original_message}". Let me provide you '
            "with the most relevant information I have on this topic."
        )
