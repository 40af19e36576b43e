"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("marketwire", description="Database name")
    user: str = Field("marketwire", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API (e.g., for Ollama)")
    max_payload_chars: int = Field(24000, description="Raw payload characters sent to extraction", ge=1000)


class IngestionConfig(BaseModel):
    """Fetch settings."""

    fetch_timeout: float = Field(30.0, description="HTTP timeout in seconds", gt=0)
    snippet_chars: int = Field(200, description="Characters of each response body written to the log", ge=0)
    user_agent: str = Field("marketwire/0.1 (news ingestion)", description="User-Agent for source requests")


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8000, description="Bind port")
    cron_secret_env: str = Field("CRON_SECRET", description="Environment variable holding the trigger secret")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
