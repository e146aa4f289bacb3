"""Settings loaded from environment variables and an optional .env file."""

import logging
import os
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    # Required
    openai_api_key: str

    # Optional with defaults
    openai_api_url: str = "https://api.openai.com"
    default_chat_model: str = "gpt-3.5-turbo"
    default_embedding_model: str = "text-embedding-ada-002"
    request_timeout: float | None = None
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = ""

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("OPENAI_API_KEY must not be empty")
        return v.strip()

    @field_validator("openai_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("request_timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v: object) -> object:
        # An empty REQUEST_TIMEOUT means "no timeout"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        numeric = getattr(logging, v.upper(), None)
        if not isinstance(numeric, int):
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    def resolved_log_file(self) -> str:
        """Path of the debug log file, or "" when file logging is off."""
        if self.log_file:
            return self.log_file
        if self.debug:
            return os.path.join(os.path.expanduser("~"), "openai-mcp-server.log")
        return ""


def _load_from_env() -> Settings:
    """Build Settings from environment variables (and a local .env file)."""
    dotenv_path = find_dotenv(filename=".env", usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path)
    env = {}
    for field_name in Settings.model_fields:
        env_key = field_name.upper()
        val = os.environ.get(env_key)
        if val is not None:
            env[field_name] = val
    return Settings(**env)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    return _load_from_env()
