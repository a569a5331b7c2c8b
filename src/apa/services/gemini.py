"""Google Gemini API gateway."""

import logging
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..config import config
from ..models import ScenePlanRequest
from .base import GatewayError, GatewayErrorKind, GenerationGateway

logger = logging.getLogger(__name__)

_CREDENTIAL_STATUS_CODES = {401, 403}
_CREDENTIAL_REASONS = {"API_KEY_INVALID", "API_KEY_EXPIRED", "API_KEY_SERVICE_BLOCKED"}


def _error_reasons(details: Any) -> set[str]:
    """Collect ``ErrorInfo.reason`` values from a Gemini error payload."""
    if not isinstance(details, dict):
        return set()
    body = details.get("error", details)
    if not isinstance(body, dict):
        return set()
    reasons = set()
    for item in body.get("details") or []:
        if isinstance(item, dict) and item.get("reason"):
            reasons.add(str(item["reason"]))
    return reasons


def classify_api_error(error: genai_errors.APIError) -> GatewayErrorKind:
    """Map a Gemini API error to a gateway error kind.

    Uses the HTTP status code and the structured ``ErrorInfo`` reasons from
    the response body.
    """
    if error.code in _CREDENTIAL_STATUS_CODES:
        return GatewayErrorKind.CREDENTIAL
    if _error_reasons(error.details) & _CREDENTIAL_REASONS:
        return GatewayErrorKind.CREDENTIAL
    if error.code == 429:
        return GatewayErrorKind.QUOTA
    if error.code in (408, 504):
        return GatewayErrorKind.TIMEOUT
    return GatewayErrorKind.UNKNOWN


class GeminiClient(GenerationGateway):
    """Generation gateway backed by Gemini with JSON output mode."""

    supports_structured_output = True

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: float = 0.8,
        timeout: Optional[float] = None,
        structured_output: bool = True,
    ) -> None:
        """Initialize the Gemini gateway.

        Args:
            model: Model to use. Defaults to config.gemini_model.
            temperature: Sampling temperature.
            timeout: Seconds to wait for the response. Defaults to
                config.request_timeout.
            structured_output: Constrain the response to the request's JSON
                schema.
        """
        self._model = model or config.gemini_model
        self._temperature = temperature
        self._timeout = timeout or config.request_timeout
        self._structured_output = structured_output

    @property
    def name(self) -> str:
        """Return the gateway's name."""
        return "gemini"

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    def _build_config(self, request: ScenePlanRequest) -> types.GenerateContentConfig:
        generate_config = types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            temperature=self._temperature,
        )
        if self._structured_output:
            generate_config.response_mime_type = "application/json"
            generate_config.response_json_schema = request.response_schema()
        return generate_config

    async def generate(self, request: ScenePlanRequest, api_key: str) -> str:
        """Send the request to Gemini once and return the response text.

        Raises:
            GatewayError: If the API request fails.
        """
        client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(self._timeout * 1000)),
        )

        try:
            logger.debug(f"Sending request to Gemini ({self._model})")
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=request.render_prompt(),
                config=self._build_config(request),
            )

        except genai_errors.APIError as e:
            kind = classify_api_error(e)
            logger.error(f"Gemini API error ({kind.value}): {e}")
            raise GatewayError(kind, str(e)) from e

        except httpx.TimeoutException as e:
            logger.error(f"Request timed out after {self._timeout}s")
            raise GatewayError(GatewayErrorKind.TIMEOUT, str(e) or "request timed out") from e

        except httpx.TransportError as e:
            logger.error(f"Connection error: {e}")
            raise GatewayError(GatewayErrorKind.TRANSPORT, str(e)) from e

        finally:
            await client.aio.aclose()

        return (response.text or "").strip()
