"""Anthropic Claude API gateway."""

import logging
from typing import Optional

from anthropic import (
    AsyncAnthropic,
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
)

from ..config import config
from ..models import ScenePlanRequest
from .base import GatewayError, GatewayErrorKind, GenerationGateway

logger = logging.getLogger(__name__)


class AnthropicClient(GenerationGateway):
    """Generation gateway backed by Claude.

    Claude has no schema-constrained JSON mode here, so the JSON contract is
    carried by the prompt alone.
    """

    supports_structured_output = False

    def __init__(
        self,
        model: Optional[str] = None,
        max_tokens: int = 16000,
        temperature: float = 0.8,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the Anthropic gateway.

        Args:
            model: Model to use. Defaults to config.anthropic_model.
            max_tokens: Maximum tokens in the response.
            temperature: Sampling temperature (0.0-1.0).
            timeout: Seconds to wait for the response. Defaults to
                config.request_timeout.
        """
        self._model = model or config.anthropic_model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout = timeout or config.request_timeout

    @property
    def name(self) -> str:
        """Return the gateway's name."""
        return "anthropic"

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    async def generate(self, request: ScenePlanRequest, api_key: str) -> str:
        """Send the request to Claude once and return the response text.

        Raises:
            GatewayError: If the API request fails.
        """
        messages = [{"role": "user", "content": request.render_prompt()}]

        try:
            logger.debug(f"Sending request to Claude ({self._model})")
            # SDK retries are disabled: one attempt per plan call.
            async with AsyncAnthropic(
                api_key=api_key,
                max_retries=0,
                timeout=self._timeout,
            ) as client:
                response = await client.messages.create(
                    model=self._model,
                    max_tokens=self._max_tokens,
                    system=request.system_instruction,
                    messages=messages,
                    temperature=self._temperature,
                )

        except (AuthenticationError, PermissionDeniedError) as e:
            logger.error(f"Claude rejected the API key: {e}")
            raise GatewayError(GatewayErrorKind.CREDENTIAL, str(e)) from e

        except RateLimitError as e:
            logger.error(f"Rate limited: {e}")
            raise GatewayError(GatewayErrorKind.QUOTA, str(e)) from e

        except APITimeoutError as e:
            logger.error(f"Request timed out after {self._timeout}s")
            raise GatewayError(GatewayErrorKind.TIMEOUT, str(e)) from e

        except APIConnectionError as e:
            logger.error(f"Connection error: {e}")
            raise GatewayError(GatewayErrorKind.TRANSPORT, str(e)) from e

        except APIError as e:
            logger.error(f"API error: {e}")
            raise GatewayError(GatewayErrorKind.UNKNOWN, str(e)) from e

        # Extract text content from response
        text_parts = [block.text for block in response.content if hasattr(block, "text")]
        return "".join(text_parts).strip()
