from dotenv import load_dotenv
from pathlib import Path
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from app.core.exceptions import ConfigError

# load .env from the project root
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")

    ENV: str = Field(
        default="production", validation_alias=AliasChoices("ENV", "NODE_ENV")
    )
    APP_NAME: str = "Mr. O Gym"
    SITE_URL: str = "https://mrogym.com"

    RESEND_API_KEY: str
    RESEND_BASE_URL: str = "https://api.resend.com"
    RESEND_USER_AGENT: str = "mrogym-contact/1.0"
    RESEND_TIMEOUT_SECONDS: float = 10.0

    MAIL_FROM: str = "Mr. O Gym <contacto@mrogym.com>"
    MAIL_REPLY_TO: str = "contacto@mrogym.com"

    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    @field_validator("RESEND_API_KEY")
    @classmethod
    def api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("RESEND_API_KEY must not be empty")
        return value.strip()

    @property
    def is_production(self) -> bool:
        return self.ENV.strip().lower() in ("production", "prod")

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


def load_settings() -> Settings:
    """
    Build the settings from the environment.

    Raises:
        ConfigError: when a required value (the provider API key) is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigError(f"invalid or missing configuration: {fields}") from e


settings = load_settings()
