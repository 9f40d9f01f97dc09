"""FastAPI application for the SAM orchestrator.

Run with:
    uvicorn app.main:app --app-dir backend
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence, Tuple

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.agent.agent_system import create_agent_system
from app.agent.specialists import SpecialistFactory
from app.api.routes import router
from app.core.config import Settings, settings as default_settings
from orchestration.types import AgentType

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    specialists: Optional[Sequence[Tuple[AgentType, SpecialistFactory]]] = None
) -> FastAPI:
    """Build the API application; the agent system lives for the app's lifespan."""
    config = settings or default_settings

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.agent_system = await create_agent_system(config, specialists)
        logger.info("🚀 SAM API started")
        try:
            yield
        finally:
            await app.state.agent_system.shutdown()
            logger.info("SAM API stopped")

    app = FastAPI(
        title="SAM Orchestrator API",
        description="Orchestrator-worker dispatch for the SAM sales assistant",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_reload,
    )
