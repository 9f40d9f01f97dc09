"""Completion client shared by the specialist agents.

Wraps ``ChatOpenAI`` for any OpenAI-compatible endpoint. When no API key
is configured, or a call fails, a canned response is returned instead so
that specialists keep answering.
"""
import logging
from typing import Optional

from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage

from app.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

MOCK_MODEL = "mock"

# (keywords, canned response); first match wins
CANNED_RESPONSES = (
    (
        ("lead", "prospect"),
        "I'll help you find qualified leads. Based on your requirements, I can search LinkedIn "
        "Sales Navigator, enrich contact data, and build targeted prospect lists. What specific "
        "criteria should I use for your ideal customer profile?",
    ),
    (
        ("campaign",),
        "I'll create a multi-channel outreach campaign for you. This will include personalized "
        "email sequences, LinkedIn connection requests, and follow-up strategies. Let me analyze "
        "your target audience and craft compelling messages that resonate with their pain points.",
    ),
    (
        ("email", "message"),
        "I'll write personalized outreach messages for you. Here's a template that focuses on "
        "value proposition and includes personalization elements based on the prospect's "
        "background. Would you like me to create variations for A/B testing?",
    ),
    (
        ("analyze", "performance"),
        "Let me analyze your campaign performance. I'm reviewing open rates, response rates, and "
        "conversion metrics. Based on the data, I can identify optimization opportunities and "
        "suggest improvements to boost your results.",
    ),
)
DEFAULT_CANNED_RESPONSE = (
    "I'm SAM, your AI sales assistant. I can help you with lead generation, campaign creation, "
    "content writing, and performance analysis. What would you like to work on today?"
)


def canned_response(prompt: str) -> str:
    """Context-aware canned answer for a prompt"""
    lowered = prompt.lower()
    for keywords, response in CANNED_RESPONSES:
        if any(k in lowered for k in keywords):
            return response
    return DEFAULT_CANNED_RESPONSE


class CompletionClient:
    """Thin async wrapper around ChatOpenAI that fails open"""

    def __init__(self, config: Optional[Settings] = None, llm: Optional[ChatOpenAI] = None):
        self.config = config or default_settings
        self._llm = llm

    @property
    def enabled(self) -> bool:
        return self._llm is not None or self.config.llm_enabled

    @property
    def model_name(self) -> str:
        return self.config.llm_model if self.enabled else MOCK_MODEL

    def _get_llm(self) -> ChatOpenAI:
        if self._llm is None:
            self._llm = ChatOpenAI(
                base_url=self.config.llm_endpoint,
                model=self.config.llm_model,
                temperature=self.config.llm_temperature,
                max_tokens=self.config.llm_max_tokens,
                api_key=self.config.llm_api_key,
            )
        return self._llm

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Ask the model; answers with a canned response when unavailable

        Args:
            system_prompt: Role instructions for the specialist
            user_prompt: Request text

        Returns:
            Response text (never raises for backend failures)
        """
        if not self.enabled:
            logger.debug("No LLM API key configured, using canned response")
            return canned_response(user_prompt)

        try:
            response = await self._get_llm().ainvoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ])
            return response.content
        except Exception as e:
            logger.error(f"❌ LLM completion failed, falling back to canned response: {e}")
            return canned_response(user_prompt)
