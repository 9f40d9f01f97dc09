"""API routes for the SAM orchestrator."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from app.agent.agent_system import AgentSystem
from app.api.models import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    MessageModel,
    ModeRequest,
    ModeResponse,
    SessionResponse,
    TraceEntry,
)
from orchestration.errors import OrchestratorProcessingError
from orchestration.rendering import render_message

logger = logging.getLogger(__name__)
router = APIRouter()


def get_agent_system(request: Request) -> AgentSystem:
    """Agent system owned by the application lifespan."""
    system = getattr(request.app.state, "agent_system", None)
    if system is None or not system.is_initialized:
        raise HTTPException(status_code=503, detail="Agent system not initialized")
    return system


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, system: AgentSystem = Depends(get_agent_system)):
    """Process a chat message.

    Args:
        request: Chat request with message and session info

    Returns:
        Orchestrator response, rendered markdown and the trace
    """
    try:
        result = await system.process_message(
            request.message,
            seed_context=request.seed_context(),
            session_id=request.session_id,
        )
    except OrchestratorProcessingError as e:
        logger.error(f"Error in chat endpoint: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return ChatResponse(
        response=MessageModel.from_message(result.response),
        rendered=render_message(result.response),
        session_id=result.context.session_id,
        trace=[TraceEntry.from_trace(t) for t in result.trace],
    )


@router.get("/health", response_model=HealthResponse)
async def health(system: AgentSystem = Depends(get_agent_system)):
    """Report the health of every agent."""
    agents = await system.health_check()
    healthy = all(agents.values())
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        healthy=healthy,
        agents=agents,
    )


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, system: AgentSystem = Depends(get_agent_system)):
    """Inspect a session's conversation context."""
    context = await system.get_orchestrator().context_store.get(session_id)
    if context is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return SessionResponse.from_context(context)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, system: AgentSystem = Depends(get_agent_system)):
    """Drop a session's conversation context."""
    cleared = await system.get_orchestrator().context_store.clear(session_id)
    if not cleared:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return {"message": f"Session {session_id} cleared"}


@router.post("/mode", response_model=ModeResponse)
async def set_mode(request: ModeRequest, system: AgentSystem = Depends(get_agent_system)):
    """Switch between the outbound and inbound specialist teams."""
    orchestrator = system.get_orchestrator()
    orchestrator.set_operation_mode(request.mode)
    return ModeResponse(
        mode=orchestrator.operation_mode,
        active_team=[t.value for t in orchestrator.active_team()],
    )
