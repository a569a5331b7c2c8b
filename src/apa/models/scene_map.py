"""Scene map data model."""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field

from .scene import Scene

SCENE_KEY_PATTERN = r"^scene_[1-9][0-9]*$"
SCENE_KEY_RE = re.compile(r"^scene_([1-9][0-9]*)$")


def scene_key(index: int) -> str:
    """Return the key for the 1-based scene ``index``."""
    return f"scene_{index}"


def scene_number(key: str) -> Optional[int]:
    """Return the numeric suffix of a ``scene_<n>`` key, or None."""
    match = SCENE_KEY_RE.match(key)
    return int(match.group(1)) if match else None


class SceneMap(BaseModel):
    """Scenes returned by one planning call, keyed ``scene_<n>``.

    Scene bodies are kept exactly as the backend returned them.
    """

    scenes: Dict[str, Any] = Field(
        ...,
        description="Scene objects keyed by scene_<n>"
    )

    class Config:
        """Pydantic config."""
        frozen = True

    def __len__(self) -> int:
        return len(self.scenes)

    def __contains__(self, key: object) -> bool:
        return key in self.scenes

    def __getitem__(self, key: str) -> Any:
        return self.scenes[key]

    def keys(self) -> List[str]:
        """Return scene keys ordered by numeric suffix."""
        return sorted(self.scenes, key=lambda key: scene_number(key) or 0)

    def ordered(self) -> List[Tuple[str, Any]]:
        """Return ``(key, scene)`` pairs ordered by numeric suffix."""
        return [(key, self.scenes[key]) for key in self.keys()]

    def _numbers(self) -> List[int]:
        return [n for n in (scene_number(key) for key in self.scenes) if n is not None]

    def missing_count(self, expected: int) -> int:
        """Return how many of ``scene_1..scene_<expected>`` are absent."""
        present = sum(1 for n in self._numbers() if n <= expected)
        return expected - present

    def missing_keys(self, expected: int, limit: Optional[int] = None) -> List[str]:
        """Return the absent ``scene_1..scene_<expected>`` keys, in order.

        Stops after ``limit`` keys when given, so the cost follows the number
        of scenes present rather than ``expected``.
        """
        missing: List[str] = []
        for i in range(1, expected + 1):
            if limit is not None and len(missing) >= limit:
                break
            key = scene_key(i)
            if key not in self.scenes:
                missing.append(key)
        return missing

    def summary(self, key: str) -> str:
        """Return the display summary for a scene.

        Prefers the Vietnamese summary and falls back to the objective.
        """
        scene = self.scenes[key]
        if not isinstance(scene, dict):
            return ""
        return str(scene.get("objective_vi") or scene.get("objective") or "")

    def parsed(self, key: str) -> Scene:
        """Validate one scene against the full scene model.

        Raises:
            pydantic.ValidationError: If the scene does not match the model.
        """
        return Scene.model_validate(self.scenes[key])

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dict in scene order."""
        return {key: scene for key, scene in self.ordered()}

    def to_json(self, indent: int = 2) -> str:
        """Serialize the scenes to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Path) -> None:
        """Save scenes to ``path`` as YAML or JSON depending on the suffix."""
        with open(path, "w", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                yaml.safe_dump(
                    self.to_dict(),
                    f,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                )
            else:
                f.write(self.to_json())
                f.write("\n")

    @classmethod
    def from_file(cls, path: Path) -> "SceneMap":
        """Load a scene map saved with :meth:`save`."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        return cls(scenes=data)
