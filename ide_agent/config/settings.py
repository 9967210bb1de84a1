"""
Configuration settings for the application.
"""

import os

from dotenv import load_dotenv

from ide_agent.exceptions import ConfigurationError

# Load environment variables from .env file
_ = load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.openai_api_key: str = self._get_env("OPENAI_API_KEY", "")
        self.openai_model: str = self._get_env("OPENAI_MODEL", "deepseek-chat")
        self.openai_api_base: str = self._get_env(
            "OPENAI_API_BASE", "https://api.deepseek.com/v1"
        )
        self.workspace_root: str = os.path.abspath(
            os.path.expanduser(self._get_env("IDE_AGENT_WORKSPACE_ROOT", os.getcwd()))
        )
        self.request_timeout: float = float(
            self._get_env("IDE_AGENT_REQUEST_TIMEOUT", "60")
        )
        self.max_retries: int = int(self._get_env("IDE_AGENT_MAX_RETRIES", "0"))
        self.temperature: float = float(self._get_env("IDE_AGENT_TEMPERATURE", "0.7"))
        self.max_tokens: int = int(self._get_env("IDE_AGENT_MAX_TOKENS", "2000"))

    def require_api_key(self) -> str:
        """Return the API key, raising if it is not configured."""
        return self.openai_api_key or self._get_required_env("OPENAI_API_KEY")

    def _get_required_env(self, key: str) -> str:
        """Get a required environment variable, raise error if missing."""
        value = os.getenv(key)
        if not value:
            raise ConfigurationError(f"Required environment variable {key} is not set")
        return value

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)


# Global settings instance
settings = Settings()
