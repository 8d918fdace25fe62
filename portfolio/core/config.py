"""
Core configuration settings for the portfolio contact form.
"""

import json
import logging
from typing import Annotated, List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "Portfolio"
    ENVIRONMENT: str = "development"  # staging, production, development
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Messaging hand-off (deep link opened after a valid submission)
    # Final URL: {HANDOFF_BASE_URL}/{HANDOFF_RECIPIENT_ID}?text=<encoded message>
    HANDOFF_BASE_URL: str = "https://wa.me"
    HANDOFF_RECIPIENT_ID: str = "201110352997"

    # Direct contact details shown next to the form
    CONTACT_EMAIL: str = "ashrakat002@gmail.com"
    CONTACT_PHONE_DISPLAY: str = "+20 111 035 2997"

    # Seconds the success banner stays up before the form returns to idle
    SUCCESS_RESET_SECONDS: float = 5.0

    # Languages
    DEFAULT_LANGUAGE: str = "en"
    RTL_LANGUAGES: Annotated[List[str], NoDecode] = ["ar"]

    @property
    def handoff_endpoint(self) -> str:
        """Messaging endpoint for the configured recipient, without a query."""
        return f"{self.HANDOFF_BASE_URL}/{self.HANDOFF_RECIPIENT_ID}"

    @field_validator("HANDOFF_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("https://", "http://")):
            raise ValueError("HANDOFF_BASE_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("HANDOFF_RECIPIENT_ID")
    @classmethod
    def validate_recipient(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("HANDOFF_RECIPIENT_ID cannot be empty")
        return v

    @field_validator("SUCCESS_RESET_SECONDS")
    @classmethod
    def validate_reset_delay(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("SUCCESS_RESET_SECONDS must be positive")
        return v

    @field_validator("RTL_LANGUAGES", mode="before")
    @classmethod
    def assemble_rtl_languages(
        cls, v: Union[str, List[str]]
    ) -> Union[List[str], str]:
        """Parse RTL languages from environment variable."""
        if isinstance(v, str):
            if not v:
                return []
            if v.startswith("["):
                try:
                    data = json.loads(v)
                except json.JSONDecodeError as exc:  # pragma: no cover - guard rail
                    logger.warning("Failed to decode RTL_LANGUAGES JSON: %s", exc)
                    return []
                if isinstance(data, list):
                    return [str(i).strip().lower() for i in data]
                return data
            return [i.strip().lower() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return [str(i).strip().lower() for i in v]
        raise ValueError(v)

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")


settings = Settings()
