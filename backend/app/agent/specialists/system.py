"""Platform specialists: prompt engineering and user onboarding"""
import logging
from typing import Any, Dict, List, Optional, Tuple

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

# (stage id, stage name, first question)
ONBOARDING_STAGES: Tuple[Tuple[str, str, str], ...] = (
    ("company-setup", "Company & Business Setup", "What's your company name?"),
    ("offering", "Product/Service Offering", "What do you sell, in one sentence?"),
    ("icp", "Ideal Customer Profile", "Which industries and roles are your best customers?"),
    ("pain-points", "Pain Points & Problems", "Which problems do you solve for them?"),
    ("competition", "Competitive Landscape", "Who do you usually compete against?"),
    ("messaging", "Messaging & CTAs", "What should prospects do after reading your message?"),
)


class PromptEngineerAgent(SpecialistAgent):
    """Improves the prompts used by SAM and its specialists"""

    display_name = "Prompt Engineer"
    system_prompt = (
        "You are SAM's prompt engineer. Improve prompts for clarity, persona consistency and "
        "measurable output quality."
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.PROMPT_ENGINEER, client)
        self.capabilities = [
            AgentCapability(
                name="prompt-optimization",
                description="Optimize prompts for better agent responses",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=6,
                required_parameters=("prompt",),
            ),
            AgentCapability(
                name="behavior-engineering",
                description="Tune agent persona and behavior",
                supported_complexity=(TaskComplexity.COMPLEX, TaskComplexity.EXPERT),
                estimated_duration=8,
            ),
            AgentCapability(
                name="prompt-testing",
                description="Design test cases for prompt changes",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=5,
            ),
        ]

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        text = task.message or task.description
        focus = "prompt-testing" if contains_any(text, ("test", "evaluate")) else "prompt-optimization"
        guidance = await self.ask_llm(task, f"Focus: {focus}.")
        return self.payload(guidance, focus=focus)


class OnboardingAgent(SpecialistAgent):
    """Guides new users through the onboarding questionnaire"""

    display_name = "Onboarding"
    system_prompt = "You are SAM's onboarding guide. Ask one question at a time."

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.ONBOARDING, client)
        self.stages: List[Tuple[str, str, str]] = []
        self.capabilities = [
            AgentCapability(
                name="guided-questionnaire",
                description="Walk the user through the onboarding stages",
                supported_complexity=(TaskComplexity.SIMPLE, TaskComplexity.MODERATE),
                estimated_duration=5,
            ),
            AgentCapability(
                name="profile-building",
                description="Build the client profile from onboarding answers",
                supported_complexity=(TaskComplexity.MODERATE, TaskComplexity.COMPLEX),
                estimated_duration=6,
                required_parameters=("answers",),
            ),
        ]

    async def setup(self) -> None:
        self.stages = list(ONBOARDING_STAGES)

    def next_stage(self, context: ConversationContext) -> Tuple[str, str, str]:
        """First stage whose profile field is still empty"""
        profile = context.user_profile
        if profile is None or not profile.company:
            return self.stages[0]
        if not profile.product_offering:
            return self.stages[1]
        if not profile.target_audience:
            return self.stages[2]
        return self.stages[3]

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        stage_id, stage_name, question = self.next_stage(context)
        content = (
            f"Let's continue your setup with **{stage_name}** "
            f"(step {[s[0] for s in self.stages].index(stage_id) + 1} of {len(self.stages)}).\n\n"
            f"{question}"
        )
        return self.payload(content, stage=stage_id)

    async def shutdown(self) -> None:
        self.stages = []
        await super().shutdown()
