"""Scene planner agent."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import config
from ..duration import format_duration, parse_duration, scene_count
from ..errors import InvalidConceptError
from ..models import SceneMap, ScenePlanRequest
from ..services import GenerationGateway
from ..validator import ScenePlanValidator
from .base import BaseAgent

logger = logging.getLogger(__name__)

# Cap on absent keys named in the gap warning.
MISSING_KEYS_SHOWN = 5


@dataclass
class PlanInput:
    """Input data for the scene planner."""

    idea: str
    duration: str
    style: Optional[str] = None


class ScenePlanner(BaseAgent[PlanInput, SceneMap]):
    """Agent that compiles a video idea and a duration into a scene map.

    The duration text is parsed into seconds, one scene is planned per
    8-second window, and a single request asks the backend for all scenes at
    once. Each scene must carry its own full character description because
    the video model renders every scene without seeing the others.
    """

    def __init__(
        self,
        gateway: Optional[GenerationGateway] = None,
        validator: Optional[ScenePlanValidator] = None,
        visual_style: Optional[str] = None,
    ) -> None:
        """Initialize the planner.

        Args:
            gateway: GenerationGateway instance. Created from config if not
                provided.
            validator: Response validator. A default one is used if not
                provided.
            visual_style: Default visual style. Defaults to config.visual_style.
        """
        super().__init__(gateway=gateway)
        self._validator = validator or ScenePlanValidator()
        self._visual_style = visual_style or config.visual_style

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScenePlanner"

    def build_request(self, input_data: PlanInput) -> ScenePlanRequest:
        """Build the request for an input without calling the backend.

        Raises:
            InvalidConceptError: If the idea is empty.
            InvalidDurationError: If the duration cannot be parsed.
        """
        idea = (input_data.idea or "").strip()
        if not idea:
            raise InvalidConceptError("Please provide a video idea.")

        seconds = parse_duration(input_data.duration)
        count = scene_count(seconds)

        self._logger.info(
            f"Planning {count} scene(s) for '{idea}' "
            f"(duration: {format_duration(seconds)})"
        )

        return ScenePlanRequest(
            concept=idea,
            scene_count=count,
            visual_style=input_data.style or self._visual_style,
        )

    async def run(self, input_data: PlanInput, api_key: str) -> SceneMap:
        """Generate the scene map for an input.

        Args:
            input_data: Idea, duration text and optional style.
            api_key: Credential for the generation backend.

        Returns:
            SceneMap keyed scene_1..scene_<n>.

        Raises:
            MissingCredentialError: If api_key is empty. Nothing else is tried.
            InvalidConceptError: If the idea is empty.
            InvalidDurationError: If the duration cannot be parsed.
            InvalidCredentialError: If the backend rejected api_key.
            GenerationFailedError: If the backend call failed.
            UnexpectedResponseError: If the response is not a scene map.
        """
        api_key = self._require_credential(api_key)
        request = self.build_request(input_data)

        response = await self._generate(request, api_key)
        scenes = self._validator.validate(response)

        if len(scenes) != request.scene_count:
            self._logger.warning(
                f"Requested {request.scene_count} scene(s), received {len(scenes)}"
            )
        missing_count = scenes.missing_count(request.scene_count)
        if missing_count:
            shown = scenes.missing_keys(request.scene_count, limit=MISSING_KEYS_SHOWN)
            more = f" and {missing_count - len(shown)} more" if missing_count > len(shown) else ""
            self._logger.warning(
                f"Response is missing {missing_count} scene(s): {', '.join(shown)}{more}"
            )

        self._logger.info(f"Generated {len(scenes)} scenes")
        return scenes

    async def plan(self, concept: str, duration: str, api_key: str) -> SceneMap:
        """Plan scenes for a concept and a duration expression.

        See :meth:`run` for the errors raised.
        """
        return await self.run(PlanInput(idea=concept, duration=duration), api_key)
