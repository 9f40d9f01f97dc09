"""Routing Engine - classification → dispatch plan (pure)"""
from typing import Dict

from orchestration.types import (
    AgentType,
    IntentClassification,
    RoutingDecision,
    TaskComplexity,
)

# Estimated seconds per complexity level
BASE_DURATION: Dict[TaskComplexity, int] = {
    TaskComplexity.SIMPLE: 3,
    TaskComplexity.MODERATE: 8,
    TaskComplexity.COMPLEX: 15,
    TaskComplexity.EXPERT: 25,
}


def route(classification: IntentClassification) -> RoutingDecision:
    """Turn a classification into a concrete dispatch plan

    The first suggested agent leads; the rest support it. Supporting
    agents fan out in parallel unless the task is simple.
    """
    agents = classification.suggested_agents or (AgentType.KNOWLEDGE_BASE,)
    primary = agents[0]
    supporting = tuple(agents[1:])
    is_parallel = classification.complexity != TaskComplexity.SIMPLE and len(supporting) > 0

    return RoutingDecision(
        primary_agent=primary,
        supporting_agents=supporting,
        is_parallel=is_parallel,
        estimated_duration=BASE_DURATION[classification.complexity],
        required_capabilities=(classification.intent.value,),
    )
