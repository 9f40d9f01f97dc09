"""Domain types for the SAM orchestrator-worker core.

Enums are closed sets; every worker identity, intent and complexity
level used anywhere in the pipeline is one of these values.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


class AgentType(str, Enum):
    """Worker identities resolved through the registry"""
    ORCHESTRATOR = "orchestrator"
    LEAD_RESEARCH = "lead-research"
    CAMPAIGN_MANAGEMENT = "campaign-management"
    CONTENT_CREATION = "content-creation"
    OUTREACH_AUTOMATION = "outreach-automation"
    ANALYTICS = "analytics"
    CAMPAIGN_STRATEGY = "campaign-strategy"
    KNOWLEDGE_BASE = "knowledge-base"
    GTM_STRATEGY = "gtm-strategy"
    MEDDIC_QUALIFICATION = "meddic-qualification"
    WORKFLOW_AUTOMATION = "workflow-automation"
    INBOX_TRIAGE = "inbox-triage"
    SPAM_FILTER = "spam-filter"
    AUTO_RESPONSE = "auto-response"
    PROMPT_ENGINEER = "prompt-engineer"
    ONBOARDING = "onboarding"


class MessageIntent(str, Enum):
    """Coarse category assigned to a user message"""
    LEAD_GENERATION = "lead-generation"
    CAMPAIGN_OPTIMIZATION = "campaign-optimization"
    CONTENT_CREATION = "content-creation"
    PERFORMANCE_ANALYSIS = "performance-analysis"
    AUTOMATION_SETUP = "automation-setup"
    KNOWLEDGE_QUERY = "knowledge-query"
    GENERAL_QUESTION = "general-question"


class TaskComplexity(str, Enum):
    """Task complexity levels"""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    EXPERT = "expert"


class Sender(str, Enum):
    USER = "user"
    ORCHESTRATOR = "orchestrator"


class OperationMode(str, Enum):
    """Which specialist team the orchestrator favours"""
    OUTBOUND = "outbound"
    INBOUND = "inbound"


def new_id(prefix: str) -> str:
    """Generate a prefixed unique identifier (msg_..., task_...)"""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class AgentTrace:
    """One audit entry of a single orchestration step.

    ``duration`` is measured in milliseconds.
    """
    agent_type: AgentType
    action: str
    input: Any
    output: Any
    duration: float
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_type": self.agent_type.value,
            "action": self.action,
            "duration": round(self.duration, 3),
            "success": self.success,
            "error": self.error,
        }


@dataclass(frozen=True)
class Message:
    """A chat message; immutable once appended to a context"""
    content: str
    sender: Union[Sender, AgentType]
    id: str = field(default_factory=lambda: new_id("msg"))
    timestamp: datetime = field(default_factory=datetime.now)
    intent: Optional[MessageIntent] = None
    confidence: Optional[float] = None
    trace: Tuple[AgentTrace, ...] = ()
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
            "intent": self.intent.value if self.intent else None,
            "confidence": self.confidence,
            "suggestions": list(self.suggestions),
        }


@dataclass
class UserProfile:
    name: str = ""
    company: str = ""
    role: str = ""
    target_audience: str = ""
    product_offering: str = ""
    campaign_goals: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserProfile":
        """Build a profile from a loosely-keyed mapping (camelCase accepted)"""
        return cls(
            name=str(data.get("name", "")),
            company=str(data.get("company", "")),
            role=str(data.get("role", "")),
            target_audience=str(data.get("target_audience", data.get("targetAudience", ""))),
            product_offering=str(data.get("product_offering", data.get("productOffering", ""))),
            campaign_goals=list(data.get("campaign_goals", data.get("campaignGoals", [])) or []),
        )


@dataclass(frozen=True)
class AgentCapability:
    """Static capability declared by a worker at construction"""
    name: str
    description: str
    supported_complexity: Tuple[TaskComplexity, ...]
    estimated_duration: int
    required_parameters: Tuple[str, ...] = ()
    optional_parameters: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IntentClassification:
    intent: MessageIntent
    confidence: float
    parameters: Dict[str, str]
    suggested_agents: Tuple[AgentType, ...]
    complexity: TaskComplexity
    estimated_tokens: int


@dataclass(frozen=True)
class RoutingDecision:
    primary_agent: AgentType
    supporting_agents: Tuple[AgentType, ...]
    is_parallel: bool
    estimated_duration: int
    required_capabilities: Tuple[str, ...]


@dataclass(frozen=True)
class TaskContextSnapshot:
    """Slim view of the conversation handed to workers"""
    session_id: str
    user_profile: Optional[UserProfile]
    recent_messages: Tuple[Message, ...]


@dataclass(frozen=True)
class TaskRequest:
    """One request per incoming message, shared by every worker call"""
    type: MessageIntent
    description: str
    parameters: Dict[str, str]
    complexity: TaskComplexity
    context: TaskContextSnapshot
    priority: int = 1
    message: str = ""
    id: str = field(default_factory=lambda: new_id("task"))


@dataclass(frozen=True)
class TaskResponse:
    """Result of exactly one worker invocation"""
    task_id: str
    agent_type: AgentType
    result: Any
    success: bool
    confidence: float
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConversationContext:
    """Per-session mutable state, owned by the orchestrator.

    ``messages`` is append-only; use ``ContextStore.append`` to add to it.
    """
    session_id: str
    user_id: str = "anonymous"
    workspace: Optional[str] = None
    messages: List[Message] = field(default_factory=list)
    user_profile: Optional[UserProfile] = None
    current_tasks: List[TaskRequest] = field(default_factory=list)
    completed_tasks: List[TaskResponse] = field(default_factory=list)
    knowledge_base: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def recent_messages(self, limit: int) -> Tuple[Message, ...]:
        if limit <= 0:
            return ()
        return tuple(self.messages[-limit:])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "workspace": self.workspace,
            "messages": [m.to_dict() for m in self.messages],
            "current_tasks": len(self.current_tasks),
            "completed_tasks": len(self.completed_tasks),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class ProcessResult:
    """Return value of ``Orchestrator.process_message``"""
    response: Message
    context: ConversationContext
    trace: List[AgentTrace]
