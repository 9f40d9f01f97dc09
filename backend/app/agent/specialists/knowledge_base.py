"""Knowledge Base Agent - company knowledge, best practices, templates and FAQ.

Answers from an in-memory knowledge store loaded at initialization.
Healthy only while initialized with a non-empty store.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from app.agent.specialists.base import SpecialistAgent, contains_any
from app.llm.completion import CompletionClient
from orchestration.types import (
    AgentCapability,
    AgentType,
    ConversationContext,
    MessageIntent,
    TaskComplexity,
    TaskRequest,
)

logger = logging.getLogger(__name__)

FAQ_MATCH_THRESHOLD = 0.6

DEFAULT_KNOWLEDGE: Dict[str, Any] = {
    "company-info": {
        "name": "Your Company",
        "industry": "B2B SaaS",
        "target_audience": "Mid-market B2B companies (50-500 employees)",
        "value_proposition": "AI-powered sales automation and outreach platform",
        "key_benefits": [
            "Automated lead generation and enrichment",
            "Personalized outreach at scale",
            "Multi-channel campaign management",
            "Performance analytics and optimization",
            "CRM integration and workflow automation",
        ],
    },
    "best-practices": {
        "email_outreach": [
            "Personalize subject lines with company or role-specific information",
            "Keep initial emails under 100 words",
            "Include clear value proposition in first 2 lines",
            "Use social proof and specific metrics when possible",
            "Include single, clear call-to-action",
            "Follow up 3-5 times with different angles",
        ],
        "linkedin_outreach": [
            "Send personalized connection requests with reason",
            "Wait 24-48 hours before first message",
            "Reference mutual connections or shared interests",
            "Ask questions to encourage engagement",
            "Share relevant content to add value",
            "Be patient with response times",
        ],
        "campaign_optimization": [
            "A/B test subject lines with 10% sample size",
            "Test send times across different time zones",
            "Segment audiences by industry and role",
            "Monitor unsubscribe rates and adjust frequency",
            "Track conversation rates, not just open rates",
            "Use video messages for higher engagement",
        ],
    },
    "templates": {
        "cold_email": {
            "subject": "{{company}} + {{yourCompany}} - Quick question",
            "body": (
                "Hi {{firstName}},\n\n"
                "I noticed {{company}} is {{specificDetail}}. We help similar {{industry}} "
                "companies {{valueProposition}}.\n\n"
                "Quick question: {{relevantQuestion}}?\n\n"
                "Worth a 15-minute conversation?\n\n"
                "Best,\n{{senderName}}"
            ),
        },
        "linkedin_connection": {
            "request": (
                "Hi {{firstName}}, I saw your post about {{recentPost}} - very insightful! "
                "I'd love to connect and share some ideas about {{relevantTopic}}."
            ),
            "follow_up": (
                "Thanks for connecting, {{firstName}}! I've been helping {{similarCompanies}} "
                "with {{specificBenefit}}. Would love to learn more about your current "
                "challenges at {{company}}."
            ),
        },
        "follow_up": {
            "email": (
                "Hi {{firstName}},\n\n"
                "Following up on my message about {{previousTopic}}.\n\n"
                "I realize you're busy, so I'll keep this brief: {{conciseBenefit}}.\n\n"
                "If this isn't a priority right now, no worries - I'll check back in "
                "{{timeframe}}.\n\n"
                "Best,\n{{senderName}}"
            ),
        },
    },
    "faq": {
        "what is sam": (
            "SAM is your AI-powered sales assistant that automates lead generation, outreach, "
            "and campaign optimization to help you scale your sales efforts more effectively."
        ),
        "how does automation work": (
            "SAM uses a multi-agent system to handle different aspects of your sales process - "
            "from finding leads and enriching data to creating personalized content and "
            "managing outreach sequences."
        ),
        "linkedin automation limits": (
            "LinkedIn allows approximately 100 connection requests per week and 300 messages "
            "per day for personal accounts. We use smart rotation and delays to maximize "
            "volume safely."
        ),
        "email deliverability": (
            "We recommend warming up new domains, using authenticated sending, maintaining "
            "clean lists, and monitoring engagement rates to ensure good deliverability."
        ),
        "roi expectations": (
            "Most clients see 3-5x ROI within 90 days through improved lead quality, "
            "increased response rates, and time savings from automation."
        ),
        "integration options": (
            "SAM integrates with popular CRMs like HubSpot, Salesforce, and Pipedrive, plus "
            "email platforms like Gmail, Outlook, and sales tools like LinkedIn Sales Navigator."
        ),
    },
}

HELP_TEXT = """I'd be happy to help! Here's what I can do for you:

**🎯 Lead Generation**: Find and qualify prospects using LinkedIn Sales Navigator, Google Search, and other sources
**📧 Content Creation**: Write personalized emails, LinkedIn messages, and outreach sequences
**📊 Campaign Optimization**: Analyze performance and provide improvement recommendations
**🤖 Automation Setup**: Configure multi-channel outreach workflows and follow-up sequences
**📈 Performance Analysis**: Deep dive into metrics, ROI, and conversion data

What specific area would you like to explore?"""

FALLBACK_BY_INTENT = {
    MessageIntent.LEAD_GENERATION: (
        "I can help you find qualified leads! To get started, I'll need to know more about "
        "your target audience - what industry, company size, and roles are you targeting?"
    ),
    MessageIntent.CAMPAIGN_OPTIMIZATION: (
        "Great! I can help optimize your campaigns. Could you share your current performance "
        "metrics or specific areas you'd like to improve?"
    ),
    MessageIntent.CONTENT_CREATION: (
        "I'd love to help create compelling content. What type do you need? Email templates, "
        "LinkedIn messages, or something else?"
    ),
}
DEFAULT_FALLBACK = (
    "I understand you need help with that. Could you provide more details so I can give you "
    "the most relevant assistance?"
)


def word_similarity(query: str, key: str) -> float:
    """Share of words in the longer text that overlap (substring-wise) with the other"""
    words1 = query.lower().split()
    words2 = key.lower().split()
    if not words1 or not words2:
        return 0.0

    matches = 0
    for w1 in words1:
        if any(w2 in w1 or w1 in w2 for w2 in words2):
            matches += 1
    return matches / max(len(words1), len(words2))


def _bullets(items) -> str:
    return "\n".join(f"• {item}" for item in items)


class KnowledgeBaseAgent(SpecialistAgent):
    """Answers knowledge queries and general questions from the knowledge store"""

    display_name = "Knowledge Base"

    def __init__(self, client: Optional[CompletionClient] = None):
        super().__init__(AgentType.KNOWLEDGE_BASE, client)
        self.knowledge_store: Dict[str, Any] = {}
        self.capabilities = [
            AgentCapability(
                name="company-info-retrieval",
                description="Retrieve company information, products, and services",
                supported_complexity=(TaskComplexity.SIMPLE, TaskComplexity.MODERATE),
                estimated_duration=2,
                required_parameters=("query",),
                optional_parameters=("category",),
            ),
            AgentCapability(
                name="best-practices-guidance",
                description="Provide sales and outreach best practices",
                supported_complexity=(TaskComplexity.SIMPLE, TaskComplexity.MODERATE),
                estimated_duration=3,
                required_parameters=("topic",),
                optional_parameters=("industry",),
            ),
            AgentCapability(
                name="template-retrieval",
                description="Find relevant email and message templates",
                supported_complexity=(TaskComplexity.SIMPLE,),
                estimated_duration=1,
                required_parameters=("templateType",),
                optional_parameters=("industry", "useCase"),
            ),
            AgentCapability(
                name="qa-assistance",
                description="Answer questions using the knowledge base",
                supported_complexity=(TaskComplexity.SIMPLE, TaskComplexity.MODERATE),
                estimated_duration=3,
                required_parameters=("question",),
            ),
        ]

    async def setup(self) -> None:
        self.knowledge_store = {key: value for key, value in DEFAULT_KNOWLEDGE.items()}
        logger.info(f"📚 Default knowledge loaded ({len(self.knowledge_store)} categories)")

    async def handle(self, task: TaskRequest, context: ConversationContext) -> Dict[str, Any]:
        query = task.message or task.description
        if task.type == MessageIntent.KNOWLEDGE_QUERY:
            content = self.answer_query(query, context)
        elif task.type == MessageIntent.GENERAL_QUESTION:
            content = self.answer_general(query, context)
        else:
            content = FALLBACK_BY_INTENT.get(task.type, DEFAULT_FALLBACK)
        return self.payload(content, knowledge_source="internal")

    def answer_query(self, query: str, context: ConversationContext) -> str:
        faq = self.knowledge_store.get("faq", {})
        match = self.find_faq(query)
        if match is not None:
            return faq[match]

        if contains_any(query, ("company", "business", "product", "service", "offer")):
            return self._company_info()
        if contains_any(query, ("best practice", "how to", "strategy", "optimize")):
            return self._best_practices(query)
        if contains_any(query, ("template", "example", "script", "message")):
            return self._templates(query)
        return self._general_guidance(context)

    def answer_general(self, query: str, context: ConversationContext) -> str:
        if contains_any(query, ("hello", "hi", "hey", "good morning", "good afternoon")):
            name = context.user_profile.name if context.user_profile and context.user_profile.name else "there"
            return (
                f"Hello {name}! I'm SAM, your AI sales assistant. I'm here to help you with "
                "lead generation, campaign optimization, content creation, and performance "
                "analysis. What would you like to work on today?"
            )
        if contains_any(query, ("help", "assist", "support", "guide")):
            return HELP_TEXT
        return (
            "I'd be happy to help you with that! Could you provide a bit more context about what "
            "specifically you'd like to know? I can assist with lead generation, campaign "
            "optimization, content creation, automation setup, and performance analysis."
        )

    def find_faq(self, query: str) -> Optional[str]:
        """Best matching FAQ key above the match threshold"""
        best: Tuple[Optional[str], float] = (None, 0.0)
        for key in self.knowledge_store.get("faq", {}):
            score = word_similarity(query, key)
            if score > best[1]:
                best = (key, score)
        key, score = best
        return key if score > FAQ_MATCH_THRESHOLD else None

    def _company_info(self) -> str:
        info = self.knowledge_store.get("company-info")
        if not info:
            return "I don't have specific company information stored yet. You can help me learn about your business!"
        return (
            "**Company Overview:**\n"
            f"• **Name**: {info['name']}\n"
            f"• **Industry**: {info['industry']}\n"
            f"• **Target Audience**: {info['target_audience']}\n"
            f"• **Value Proposition**: {info['value_proposition']}\n\n"
            "**Key Benefits:**\n"
            f"{_bullets(info['key_benefits'])}\n\n"
            "Would you like me to help you refine any of this information or create content based on it?"
        )

    def _best_practices(self, query: str) -> str:
        practices = self.knowledge_store["best-practices"]
        if contains_any(query, ("email", "outreach", "cold email")):
            text = f"**Email Outreach Best Practices:**\n{_bullets(practices['email_outreach'])}"
        elif contains_any(query, ("linkedin", "social", "connection")):
            text = f"**LinkedIn Outreach Best Practices:**\n{_bullets(practices['linkedin_outreach'])}"
        elif contains_any(query, ("campaign", "optimize", "performance")):
            text = (
                "**Campaign Optimization Best Practices:**\n"
                f"{_bullets(practices['campaign_optimization'])}"
            )
        else:
            text = "\n\n".join([
                f"**Email Outreach:**\n{_bullets(practices['email_outreach'][:3])}",
                f"**LinkedIn Outreach:**\n{_bullets(practices['linkedin_outreach'][:3])}",
                f"**Campaign Optimization:**\n{_bullets(practices['campaign_optimization'][:3])}",
            ])
        return text + "\n\nWould you like me to elaborate on any of these points or help you implement them?"

    def _templates(self, query: str) -> str:
        templates = self.knowledge_store["templates"]
        if contains_any(query, ("cold email", "email template", "first email")):
            cold = templates["cold_email"]
            return f"**Cold Email Template:**\n\n**Subject:** {cold['subject']}\n\n{cold['body']}"
        if contains_any(query, ("linkedin", "connection request", "linkedin message")):
            linkedin = templates["linkedin_connection"]
            return (
                "**LinkedIn Templates:**\n\n"
                f"**Connection Request:**\n{linkedin['request']}\n\n"
                f"**Follow-up Message:**\n{linkedin['follow_up']}"
            )
        if contains_any(query, ("follow up", "followup", "second email")):
            return f"**Follow-up Email Template:**\n\n{templates['follow_up']['email']}"
        return (
            "I have templates available for:\n"
            "• **Cold Email**: Initial outreach with value proposition\n"
            "• **LinkedIn Messages**: Connection requests and follow-ups\n"
            "• **Follow-up Emails**: Persistent but polite re-engagement\n\n"
            "Which type would you like to see?"
        )

    @staticmethod
    def _general_guidance(context: ConversationContext) -> str:
        base = (
            "Based on your query, here's what I recommend:\n\n"
            "• **Define your ideal customer profile** clearly\n"
            "• **Personalize your outreach messages** with specific company details\n"
            "• **Test and optimize** your approach based on response data\n"
            "• **Follow up consistently** with value-added content\n\n"
        )
        profile = context.user_profile
        if profile is not None and profile.target_audience:
            return base + (
                f"Since you're targeting {profile.target_audience}, I can help you create "
                "specific strategies for that market segment."
            )
        return base + "Would you like me to help you develop a specific strategy for any of these areas?"

    async def health_check(self) -> bool:
        return self.is_initialized and len(self.knowledge_store) > 0

    async def shutdown(self) -> None:
        self.knowledge_store.clear()
        await super().shutdown()
        logger.info("Knowledge Base Agent shut down")
