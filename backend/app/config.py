"""
Application configuration.

This module defines the application settings as a Pydantic model populated
from environment variables (optionally loaded from backend/.env), and sets up
logging from those settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
import os
from dotenv import load_dotenv

# Load .env from backend directory (works regardless of cwd when running uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


def _env_list(name: str, default: List[str]) -> List[str]:
    """Read a comma-separated environment variable into a list."""
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    """
    Application configuration settings.

    Can be configured via environment variables or .env file.
    Environment variable names are uppercase (e.g., ANALYSIS_API_BASE_URL).

    Attributes:
        ANALYSIS_API_BASE_URL: Remote analysis backend; local engine when unset
        API_TIMEOUT: Remote request timeout in seconds
        MAX_INGREDIENT_TEXT_LENGTH: Maximum accepted ingredient text length
        TOP_INGREDIENTS_LIMIT: Number of ingredient stats kept in a result
        CORS_ORIGINS: Frontend origins allowed by CORS
        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
    """

    # Remote analysis backend (optional)
    ANALYSIS_API_BASE_URL: Optional[str] = Field(
        default_factory=lambda: os.getenv("ANALYSIS_API_BASE_URL") or None,
        description="Base URL of a remote analysis backend (unset = local engine)"
    )

    API_TIMEOUT: int = Field(
        default_factory=lambda: int(os.getenv("API_TIMEOUT", "10")),
        ge=1,
        le=60,
        description="Remote request timeout in seconds"
    )

    # Input limits
    MAX_INGREDIENT_TEXT_LENGTH: int = Field(
        default_factory=lambda: int(os.getenv("MAX_INGREDIENT_TEXT_LENGTH", "10000")),
        ge=100,
        le=100000,
        description="Maximum number of characters accepted in ingredient text"
    )

    TOP_INGREDIENTS_LIMIT: int = Field(
        default_factory=lambda: int(os.getenv("TOP_INGREDIENTS_LIMIT", "10")),
        ge=1,
        le=100,
        description="Number of ingredient statistics kept in an analysis result"
    )

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: _env_list(
            "CORS_ORIGINS",
            [
                "http://localhost:3000",
                "http://localhost:5173",
                "http://localhost:8080",
                "http://127.0.0.1:8080",
            ],
        ),
        description="Origins allowed to call the API"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG/INFO/WARNING/ERROR)"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator('ANALYSIS_API_BASE_URL')
    @classmethod
    def validate_url(cls, v):
        """Ensure the remote URL is properly formatted."""
        if v is None:
            return v
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip('/')  # Remove trailing slash


# Create global settings instance
settings = Settings()


# Configure logging based on settings
def configure_logging():
    """Configure application logging based on settings."""
    import logging

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
    if settings.ANALYSIS_API_BASE_URL:
        logger.info(f"Analysis mode: remote ({settings.ANALYSIS_API_BASE_URL})")
    else:
        logger.info("Analysis mode: local engine")


# Initialize logging on import
configure_logging()
