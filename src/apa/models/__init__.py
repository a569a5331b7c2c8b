"""Data models for scene planning."""

from .scene import Scene, Persona, FewShotExample, SceneOutput, SceneStructure
from .scene_map import SceneMap, SCENE_KEY_RE, scene_key, scene_number
from .request import ScenePlanRequest

__all__ = [
    "Scene",
    "Persona",
    "FewShotExample",
    "SceneOutput",
    "SceneStructure",
    "SceneMap",
    "SCENE_KEY_RE",
    "scene_key",
    "scene_number",
    "ScenePlanRequest",
]
