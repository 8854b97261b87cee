"""Configuration management for the short link front end."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from shortlink.backend import BackendConfig


class Config(BaseSettings):
    """Application configuration."""

    # Backend settings
    backend_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the URL shortening backend"
    )

    backend_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Timeout in milliseconds for every backend request"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes"
    )

    # Front end settings
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Public base URL of this front end, used when the request carries no host"
    )

    top_limit: int = Field(
        default=10,
        ge=1,
        description="Number of rows shown in the most popular table"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def backend(self) -> BackendConfig:
        """Backend settings handed to the resolver and the backend client."""
        return BackendConfig(
            base_url=self.backend_url,
            timeout_ms=self.backend_timeout_ms,
        )


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
