"""Inbound team: inbox triage, spam filtering and auto-responses.

These specialists answer from static playbooks selected by keyword; the
first matching route wins, otherwise the agent introduces itself.
"""
from typing import Any, Dict, Optional, Sequence, Tuple

from app.agent.specialists.base import SpecialistAgent, contains_any
from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    TaskComplexity,
    TaskRequest,
)

# (route name, keywords, response)
Route = Tuple[str, Tuple[str, ...], str]

_SIMPLE_UP = (TaskComplexity.SIMPLE, TaskComplexity.MODERATE, TaskComplexity.COMPLEX)


class PlaybookAgent(SpecialistAgent):
    """Specialist answering from keyword-selected playbooks"""

    routes: Sequence[Route] = ()
    introduction: str = ""
    suggestions: Tuple[str, ...] = ()

    def __init__(self, agent_type: AgentType, client: Optional[CompletionClient] = None):
        super().__init__(agent_type, client)
        self.capabilities = [
            AgentCapability(
                name=name,
                description=f"{self.display_name}: {name.replace('_', ' ')}",
                supported_complexity=_SIMPLE_UP,
                estimated_duration=3,
            )
            for name, _, _ in self.routes
        ]

    def select(self, text: str) -> Tuple[str, str]:
        for name, keywords, response in self.routes:
            if contains_any(text, keywords):
                return name, response
        return "introduction", self.introduction

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        route, content = self.select(task.message or task.description)
        return self.payload(content, route=route, suggestions=list(self.suggestions))


class InboxTriageAgent(PlaybookAgent):
    display_name = "Inbox Triage"
    introduction = (
        "I'm your Inbox Triage Specialist. I can classify incoming email (sales inquiries, "
        "support requests, meeting requests, newsletters, spam), prioritize it from P1 urgent "
        "to P4 low, and draft responses from templates. What would you like me to help with "
        "in your inbox?"
    )
    routes = (
        (
            "email_classification",
            ("triage", "inbox", "emails"),
            "Let me analyze your inbox and organize it for efficient processing. I'll group "
            "messages into sales inquiries, support requests, meeting requests, updates and "
            "promotions, then flag everything that needs action.",
        ),
        (
            "auto_response",
            ("respond", "reply"),
            "I'll draft responses for the emails that need a reply, starting with qualified "
            "leads and time-sensitive requests. Each draft follows your tone and can be edited "
            "before sending.",
        ),
        (
            "priority_scoring",
            ("prioritize", "urgent"),
            "Here's how I prioritize: P1 for customer issues and time-sensitive deals, P2 for "
            "qualified leads and partner requests, P3 for information requests and follow-ups, "
            "P4 for FYIs, newsletters and promotions.",
        ),
    )
    suggestions = (
        "Show me my most urgent emails",
        "Help me clear my inbox quickly",
        "Draft responses to sales inquiries",
        "Set up auto-response rules",
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.INBOX_TRIAGE, client)


class SpamFilterAgent(PlaybookAgent):
    display_name = "Spam Filter"
    introduction = (
        "I'm your Spam Filter Specialist, protecting your inbox from unwanted and malicious "
        "emails with sender analysis (SPF/DKIM/DMARC), content filtering and behavioral "
        "analysis. What would you like me to help filter?"
    )
    routes = (
        (
            "spam_detection",
            ("spam", "filter", "junk"),
            "I'll analyze and filter spam from your inbox using multi-layer detection: sender "
            "reputation, content scoring, suspicious links and mass-mailing patterns.",
        ),
        (
            "content_analysis",
            ("phishing", "scam"),
            "I'll check suspicious messages for phishing indicators: spoofed senders, look-alike "
            "domains, credential requests and urgent payment demands.",
        ),
        (
            "whitelist_management",
            ("whitelist", "trusted"),
            "I'll keep your trusted senders list up to date so messages from customers and "
            "partners always reach your inbox.",
        ),
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.SPAM_FILTER, client)


class AutoResponseAgent(PlaybookAgent):
    display_name = "Auto-Response"
    introduction = (
        "I'm your Auto-Response Specialist. I generate intelligent automated responses for "
        "routine inquiries, out-of-office periods and frequently asked questions."
    )
    routes = (
        (
            "out_of_office",
            ("out of office", "vacation", "away"),
            "I'll set up an out-of-office reply that tells senders when you're back and who to "
            "contact for urgent matters.",
        ),
        (
            "faq_responses",
            ("faq", "frequently", "common question"),
            "I'll prepare answers for your most frequent questions and send them automatically "
            "when a matching inquiry arrives.",
        ),
        (
            "template_creation",
            ("template",),
            "I'll create reusable response templates with variables for name, company and "
            "topic so every reply stays personal.",
        ),
        (
            "auto_reply",
            ("auto", "respond", "reply"),
            "I'll generate contextual replies for routine emails, matching the sender's "
            "question and your preferred tone.",
        ),
    )

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.AUTO_RESPONSE, client)
