"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class Settings(BaseSettings):
    """Application settings."""

    # =========================
    # LLM Configuration
    # =========================

    # OpenAI-compatible endpoint used by the specialists' completion client
    llm_endpoint: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4o-mini"

    # Without a key the completion client answers with canned responses
    llm_api_key: Optional[str] = None
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000

    @property
    def llm_enabled(self) -> bool:
        """Whether a real LLM backend is configured."""
        return bool(self.llm_api_key)

    # =========================
    # Orchestration
    # =========================
    worker_timeout_seconds: float = 30.0  # Deadline for every worker call
    max_parallel_tasks: int = 4  # Cap on concurrent supporting workers
    history_snapshot_size: int = 5  # Recent messages copied into each task

    # Operation mode: "outbound" (prospecting) or "inbound" (inbox handling)
    default_operation_mode: Literal["outbound", "inbound"] = "outbound"

    # Conversation context store
    context_max_sessions: int = 1000
    context_ttl_minutes: int = 60

    # =========================
    # API Configuration
    # =========================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert comma-separated CORS origins to list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
