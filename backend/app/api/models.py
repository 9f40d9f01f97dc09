"""Pydantic models for API requests and responses."""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from orchestration.types import AgentTrace, ConversationContext, Message, OperationMode


class UserProfileModel(BaseModel):
    """Optional user profile sent with the first message of a session."""
    name: str = ""
    company: str = ""
    role: str = ""
    target_audience: str = ""
    product_offering: str = ""
    campaign_goals: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Chat request model."""
    message: str = Field(..., min_length=1, description="User message")
    session_id: str = Field(default="default", description="Session identifier")
    user_id: Optional[str] = Field(None, description="User identifier for new sessions")
    workspace: Optional[str] = Field(None, description="Workspace identifier for new sessions")
    user_profile: Optional[UserProfileModel] = Field(None, description="Profile for new sessions")

    def seed_context(self) -> Dict[str, Any]:
        """Defaults applied when the session does not exist yet."""
        seed: Dict[str, Any] = {}
        if self.user_id:
            seed["user_id"] = self.user_id
        if self.workspace:
            seed["workspace"] = self.workspace
        if self.user_profile is not None:
            seed["user_profile"] = self.user_profile.model_dump()
        return seed


class TraceEntry(BaseModel):
    """One orchestration step."""
    agent_type: str
    action: str
    duration: float = Field(..., description="Duration in milliseconds")
    success: bool
    error: Optional[str] = None

    @classmethod
    def from_trace(cls, trace: AgentTrace) -> "TraceEntry":
        return cls(**trace.to_dict())


class MessageModel(BaseModel):
    """Chat message model."""
    id: str
    content: str
    sender: str
    timestamp: str
    intent: Optional[str] = None
    confidence: Optional[float] = None
    suggestions: List[str] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: Message) -> "MessageModel":
        return cls(**message.to_dict())


class ChatResponse(BaseModel):
    """Chat response model."""
    response: MessageModel = Field(..., description="Orchestrator response")
    rendered: str = Field(..., description="Response body with follow-ups as markdown")
    session_id: str = Field(..., description="Session identifier")
    trace: List[TraceEntry] = Field(default_factory=list, description="Orchestration trace")


class SessionResponse(BaseModel):
    """Session inspection model."""
    session_id: str
    user_id: str
    workspace: Optional[str] = None
    message_count: int
    messages: List[MessageModel]
    current_tasks: int
    completed_tasks: int

    @classmethod
    def from_context(cls, context: ConversationContext) -> "SessionResponse":
        return cls(
            session_id=context.session_id,
            user_id=context.user_id,
            workspace=context.workspace,
            message_count=len(context.messages),
            messages=[MessageModel.from_message(m) for m in context.messages],
            current_tasks=len(context.current_tasks),
            completed_tasks=len(context.completed_tasks),
        )


class HealthResponse(BaseModel):
    """Health check model."""
    status: str = Field(..., description="'healthy' or 'degraded'")
    healthy: bool
    agents: Dict[str, bool] = Field(default_factory=dict)


class ModeRequest(BaseModel):
    """Operation mode switch request."""
    mode: OperationMode


class ModeResponse(BaseModel):
    """Operation mode switch response."""
    mode: OperationMode
    active_team: List[str]
