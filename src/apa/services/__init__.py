"""External service integrations."""

from typing import Optional

from ..config import PROVIDERS, config
from .anthropic import AnthropicClient
from .base import GatewayError, GatewayErrorKind, GenerationGateway
from .gemini import GeminiClient


def create_gateway(provider: Optional[str] = None, model: Optional[str] = None) -> GenerationGateway:
    """Create the generation gateway for a provider.

    Args:
        provider: 'gemini' or 'anthropic'. Defaults to config.provider.
        model: Model override for the gateway.

    Raises:
        ValueError: If the provider is unknown.
    """
    provider = provider or config.provider
    if provider == "gemini":
        return GeminiClient(model=model)
    if provider == "anthropic":
        return AnthropicClient(model=model)
    raise ValueError(
        f"Unknown provider '{provider}'. Expected one of: {', '.join(PROVIDERS)}"
    )


__all__ = [
    "AnthropicClient",
    "GeminiClient",
    "GatewayError",
    "GatewayErrorKind",
    "GenerationGateway",
    "create_gateway",
]
