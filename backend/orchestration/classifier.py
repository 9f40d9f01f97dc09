"""Intent Classifier - maps a user message to an intent

The orchestrator talks to the ``Classifier`` interface only, so the
scoring algorithm can be swapped without touching routing or execution.
The default implementation is a keyword scorer over a fixed taxonomy.
"""
import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Pattern, Tuple

from orchestration.types import (
    AgentType,
    ConversationContext,
    IntentClassification,
    MessageIntent,
    TaskComplexity,
)

logger = logging.getLogger(__name__)

CONFIDENCE_FLOOR = 0.30
CONFIDENCE_CAP = 0.95
DEFAULT_INTENT = MessageIntent.GENERAL_QUESTION


@dataclass(frozen=True)
class IntentPattern:
    intent: MessageIntent
    keywords: Tuple[str, ...]
    complexity: TaskComplexity


# Evaluation order is significant: ties below the cap go to the earlier entry.
INTENT_TAXONOMY: Tuple[IntentPattern, ...] = (
    IntentPattern(
        MessageIntent.LEAD_GENERATION,
        ("leads", "scrape", "prospects", "sales navigator", "linkedin", "contacts"),
        TaskComplexity.MODERATE,
    ),
    IntentPattern(
        MessageIntent.CAMPAIGN_OPTIMIZATION,
        ("optimize", "improve", "performance", "conversion", "open rate", "response rate"),
        TaskComplexity.COMPLEX,
    ),
    IntentPattern(
        MessageIntent.CONTENT_CREATION,
        ("write", "create", "email", "subject line", "template", "copy", "message"),
        TaskComplexity.MODERATE,
    ),
    IntentPattern(
        MessageIntent.PERFORMANCE_ANALYSIS,
        ("analyze", "metrics", "results", "data", "report", "roi", "analytics"),
        TaskComplexity.COMPLEX,
    ),
    IntentPattern(
        MessageIntent.AUTOMATION_SETUP,
        ("automate", "sequence", "workflow", "campaign", "setup", "configure"),
        TaskComplexity.EXPERT,
    ),
    IntentPattern(
        MessageIntent.KNOWLEDGE_QUERY,
        ("what is", "how to", "explain", "help", "question", "information"),
        TaskComplexity.SIMPLE,
    ),
    IntentPattern(
        MessageIntent.GENERAL_QUESTION,
        ("hello", "hi", "thanks", "yes", "no"),
        TaskComplexity.SIMPLE,
    ),
)

INTENT_AGENTS: Mapping[MessageIntent, Tuple[AgentType, ...]] = {
    MessageIntent.LEAD_GENERATION: (AgentType.LEAD_RESEARCH, AgentType.KNOWLEDGE_BASE),
    MessageIntent.CAMPAIGN_OPTIMIZATION: (
        AgentType.CAMPAIGN_STRATEGY, AgentType.ANALYTICS, AgentType.CONTENT_CREATION
    ),
    MessageIntent.CONTENT_CREATION: (AgentType.CONTENT_CREATION, AgentType.KNOWLEDGE_BASE),
    MessageIntent.PERFORMANCE_ANALYSIS: (AgentType.ANALYTICS, AgentType.CAMPAIGN_STRATEGY),
    MessageIntent.AUTOMATION_SETUP: (AgentType.OUTREACH_AUTOMATION, AgentType.CAMPAIGN_STRATEGY),
    MessageIntent.KNOWLEDGE_QUERY: (AgentType.KNOWLEDGE_BASE,),
    MessageIntent.GENERAL_QUESTION: (AgentType.KNOWLEDGE_BASE,),
}

# One capture group each; a key is set only when its pattern matches.
PARAMETER_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("company", re.compile(
        r"(?:company|companies?|business|firm)(?:\s+(?:called|named))?\s+([A-Za-z\s&.,-]+)",
        re.IGNORECASE,
    )),
    ("location", re.compile(r"(?:in|from|at|near)\s+([A-Za-z\s,]+)", re.IGNORECASE)),
    ("industry", re.compile(
        r"(?:industry|sector|field)(?:\s+of)?\s+([A-Za-z\s&.,-]+)", re.IGNORECASE
    )),
    ("role", re.compile(
        r"(?:role|title|position|job)\s+(?:of|as)?\s+([A-Za-z\s&.,-]+)", re.IGNORECASE
    )),
    ("metric", re.compile(
        r"(\d+(?:\.\d+)?%?)\s+(?:open rate|response rate|conversion|roi)", re.IGNORECASE
    )),
)

_COMPLEXITY_BY_INTENT: Dict[MessageIntent, TaskComplexity] = {
    pattern.intent: pattern.complexity for pattern in INTENT_TAXONOMY
}


class Classifier(ABC):
    """Interface for message → intent classification"""

    @abstractmethod
    def classify(
        self,
        message: str,
        context: Optional[ConversationContext] = None
    ) -> IntentClassification:
        pass


class KeywordIntentClassifier(Classifier):
    """Keyword-ratio classifier over a fixed, ordered intent taxonomy

    Each intent scores ``hits / len(keywords)`` (case-insensitive substring
    hits), capped at 0.95. The running best starts at the general-question
    floor of 0.30 and is replaced only by a strictly greater score, so a
    single hit against a five-keyword set (0.20) never beats the floor.
    """

    def __init__(self, taxonomy: Tuple[IntentPattern, ...] = INTENT_TAXONOMY):
        self.taxonomy = taxonomy

    def classify(
        self,
        message: str,
        context: Optional[ConversationContext] = None
    ) -> IntentClassification:
        intent, confidence = self.score(message)
        parameters = extract_parameters(message)
        suggested = suggested_agents(intent)

        logger.info(
            f"🎯 Classified as {intent.value} "
            f"(confidence={confidence:.2f}, params={list(parameters)})"
        )

        return IntentClassification(
            intent=intent,
            confidence=confidence,
            parameters=parameters,
            suggested_agents=suggested,
            complexity=_COMPLEXITY_BY_INTENT.get(intent, TaskComplexity.SIMPLE),
            estimated_tokens=math.ceil(len(message) / 4),
        )

    def score(self, message: str) -> Tuple[MessageIntent, float]:
        """Pick the best (intent, confidence) pair for a message"""
        message_lower = message.lower()
        best_intent, best_confidence = DEFAULT_INTENT, CONFIDENCE_FLOOR

        for pattern in self.taxonomy:
            if not pattern.keywords:
                continue
            matches = sum(1 for keyword in pattern.keywords if keyword.lower() in message_lower)
            ratio = matches / len(pattern.keywords)
            # Raw ratio against the capped best: a later intent above the cap still wins
            if ratio > best_confidence:
                best_intent, best_confidence = pattern.intent, min(ratio, CONFIDENCE_CAP)

        return best_intent, best_confidence


def extract_parameters(message: str) -> Dict[str, str]:
    """Run the extractor bank against the raw message"""
    parameters: Dict[str, str] = {}
    for key, pattern in PARAMETER_PATTERNS:
        match = pattern.search(message)
        if match:
            parameters[key] = match.group(1).strip()
    return parameters


def suggested_agents(intent: MessageIntent) -> Tuple[AgentType, ...]:
    return INTENT_AGENTS.get(intent, (AgentType.KNOWLEDGE_BASE,))
