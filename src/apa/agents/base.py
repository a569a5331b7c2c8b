"""Base agent abstraction."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from ..errors import GenerationFailedError, InvalidCredentialError, MissingCredentialError
from ..models import ScenePlanRequest
from ..services import GatewayError, GatewayErrorKind, GenerationGateway, create_gateway

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for AI agents.

    Provides shared functionality for agents that call a generation gateway.
    Subclasses must implement the `run` method. Credentials are passed on
    every call and never stored on the agent.
    """

    def __init__(self, gateway: Optional[GenerationGateway] = None) -> None:
        """Initialize the agent.

        Args:
            gateway: GenerationGateway instance. Created from config if not
                provided.
        """
        self._gateway = gateway or create_gateway()
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the agent's name."""
        ...

    @property
    def gateway(self) -> GenerationGateway:
        """Return the gateway being used."""
        return self._gateway

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._gateway.model

    @abstractmethod
    async def run(self, input_data: InputT, api_key: str) -> OutputT:
        """Execute the agent's main task.

        Args:
            input_data: Input data for the agent.
            api_key: Credential for the generation backend.

        Returns:
            Structured output from the agent.
        """
        ...

    def _require_credential(self, api_key: Optional[str]) -> str:
        """Return the stripped API key.

        Raises:
            MissingCredentialError: If api_key is empty.
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError(
                f"No API key provided for {self._gateway.name}. "
                "Configure an API key before generating."
            )
        return api_key.strip()

    async def _generate(self, request: ScenePlanRequest, api_key: str) -> str:
        """Send a request through the gateway.

        Args:
            request: The request to send.
            api_key: Credential for the generation backend.

        Returns:
            The raw text response.

        Raises:
            MissingCredentialError: If api_key is empty. No call is made.
            InvalidCredentialError: If the backend rejected the credential.
            GenerationFailedError: If the call failed for any other reason.
        """
        api_key = self._require_credential(api_key)

        self._logger.debug(
            f"Calling {self._gateway.name} with prompt length: {len(request.render_prompt())}"
        )

        try:
            response = await self._gateway.generate(request, api_key)
        except GatewayError as e:
            if e.kind == GatewayErrorKind.CREDENTIAL:
                raise InvalidCredentialError(
                    f"The {self._gateway.name} API key is not valid: {e.message}"
                ) from e
            raise GenerationFailedError(
                f"Failed to generate scenes ({e.kind.value}): {e.message}"
            ) from e
        except asyncio.TimeoutError as e:
            raise GenerationFailedError(
                f"Failed to generate scenes (timeout): {self._gateway.name} did not respond in time"
            ) from e
        except Exception as e:
            self._logger.error(f"Unclassified gateway failure: {e!r}")
            raise GenerationFailedError(f"Failed to generate scenes: {e}") from e

        self._logger.debug(f"Received response of length: {len(response)}")
        return response
