"""Chat widgets configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Azure OpenAI completion capability
    azure_openai_api_key: str = ""
    azure_openai_endpoint: str = ""
    azure_openai_deployment_name: str = ""

    # Thread storage: "memory" (process-local) or "redis"
    thread_store_mode: Literal["memory", "redis"] = "memory"

    # Redis configuration (thread_store_mode="redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_ssl: bool = False
    redis_ttl_seconds: Optional[int] = Field(default=None, gt=0)
    redis_key_prefix: str = "chatwidgets"

    # Summarization policy
    auto_summarization_enabled: bool = True
    summarization_threshold: int = Field(default=15, ge=1)  # Summarize once turn count exceeds this
    recent_turns_to_keep: int = Field(default=10, ge=1)     # Trailing turns left unsummarized
    summary_max_output_tokens: int = Field(default=200, ge=1)

    # Raw turns sent to the model when a thread has no summaries yet
    max_context_turns: int = Field(default=10, ge=1)
    # Upper limit on raw turns sent after the last summary
    max_uncovered_turns: int = Field(default=24, ge=1)

    # Persona settings
    enable_persona: bool = False
    default_persona: Optional[str] = None
    max_persona_length: int = Field(default=2000, gt=0)
    reject_persona_control_characters: bool = True

    log_level: str = "INFO"

    @model_validator(mode="after")
    def check_uncovered_limit(self) -> "Settings":
        # Room for the kept tail plus the exchange that triggers the next summary
        if self.max_uncovered_turns < self.recent_turns_to_keep + 2:
            raise ValueError(
                f"max_uncovered_turns ({self.max_uncovered_turns}) must be at least "
                f"recent_turns_to_keep + 2 ({self.recent_turns_to_keep + 2})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
