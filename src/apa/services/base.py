"""Generation gateway abstraction."""

from abc import ABC, abstractmethod
from enum import Enum

from ..models import ScenePlanRequest


class GatewayErrorKind(str, Enum):
    """Classification of a failed generation call."""

    CREDENTIAL = "credential"
    QUOTA = "quota"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class GatewayError(Exception):
    """A generation call failed.

    Gateways classify the failure from the SDK's exception type or status
    code, never from the text of the error message.
    """

    def __init__(self, kind: GatewayErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class GenerationGateway(ABC):
    """A backend that turns a scene plan request into raw response text.

    Implementations make exactly one call per :meth:`generate` and raise
    :class:`GatewayError` on any failure, timeouts included.
    """

    #: Whether the backend can be constrained to JSON matching a schema.
    supports_structured_output: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the gateway's name."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """Return the model being used."""
        ...

    @abstractmethod
    async def generate(self, request: ScenePlanRequest, api_key: str) -> str:
        """Run the request and return the raw response text.

        Args:
            request: The scene plan request to send.
            api_key: Credential for this call.

        Returns:
            The model's raw text response.

        Raises:
            GatewayError: If the call fails for any reason.
        """
        ...
