"""Configuration management."""

import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PROVIDERS = ("gemini", "anthropic")

DEFAULT_VISUAL_STYLE = (
    "Cinematic, photorealistic 4K, natural lighting, shallow depth of field, "
    "consistent color grading across every scene"
)


class Config(BaseModel):
    """Application configuration."""

    # Provider selection
    provider: str = Field(
        default_factory=lambda: os.getenv("APA_PROVIDER", "gemini"),
        description="Generation backend: 'gemini' or 'anthropic'"
    )

    # API Keys
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="Google Gemini API key"
    )
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )

    # Model settings
    gemini_model: str = Field(
        default_factory=lambda: os.getenv("APA_GEMINI_MODEL", "gemini-2.5-flash"),
        description="Gemini model used for scene planning"
    )
    anthropic_model: str = Field(
        default_factory=lambda: os.getenv("APA_ANTHROPIC_MODEL", "claude-sonnet-4-20250514"),
        description="Claude model used for scene planning"
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("APA_REQUEST_TIMEOUT", "120")),
        description="Seconds to wait for a single generation call",
        gt=0,
    )

    # Prompt settings
    visual_style: str = Field(
        default_factory=lambda: os.getenv("APA_VISUAL_STYLE", DEFAULT_VISUAL_STYLE),
        description="Visual style every scene defaults to"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def api_key_for(self, provider: str) -> str:
        """Return the configured API key for a provider."""
        if provider == "gemini":
            return self.gemini_api_key
        if provider == "anthropic":
            return self.anthropic_api_key
        raise ValueError(
            f"Unknown provider '{provider}'. Expected one of: {', '.join(PROVIDERS)}"
        )


# Global config instance
config = Config()
