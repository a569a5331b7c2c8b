"""Validation of raw scene plan responses.

Validation is shallow on purpose: it checks that the response is a JSON
object with at least one ``scene_<n>`` key and leaves the contents of each
scene untouched. Use :meth:`apa.models.SceneMap.parsed` for a strict
per-scene check.
"""

import json
import logging
import re

from .errors import MalformedResponseError, MissingSceneKeysError, UnexpectedShapeError
from .models import SceneMap, scene_number

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*)\n\s*```$", re.DOTALL)


def _strip_code_fence(raw: str) -> str:
    """Remove one markdown code fence wrapping the whole response."""
    text = raw.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body").strip()
    return text


class ScenePlanValidator:
    """Checks a raw backend response and turns it into a :class:`SceneMap`."""

    def validate(self, raw: str) -> SceneMap:
        """Validate raw response text.

        Args:
            raw: Text returned by the generation backend.

        Returns:
            SceneMap holding every ``scene_<n>`` entry of the response.

        Raises:
            MalformedResponseError: If the text is not valid JSON.
            UnexpectedShapeError: If the JSON is not an object.
            MissingSceneKeysError: If the object has no ``scene_<n>`` key.
        """
        try:
            data = json.loads(_strip_code_fence(raw or ""))
        except json.JSONDecodeError as e:
            logger.debug(f"Raw response: {raw!r}")
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e
        except RecursionError as e:
            raise MalformedResponseError("Response JSON is nested too deeply to decode") from e

        if not isinstance(data, dict):
            raise UnexpectedShapeError(
                f"Expected a JSON object of scenes, got {type(data).__name__}"
            )

        scenes = {key: value for key, value in data.items() if scene_number(key) is not None}
        if not scenes:
            raise MissingSceneKeysError(
                f"Response has no scene_<n> keys (got: {', '.join(sorted(data)) or 'none'})"
            )

        ignored = sorted(set(data) - set(scenes))
        if ignored:
            logger.warning(f"Ignoring non-scene keys in response: {', '.join(ignored)}")

        return SceneMap(scenes=scenes)


def validate(raw: str) -> SceneMap:
    """Validate raw response text with a default validator."""
    return ScenePlanValidator().validate(raw)
