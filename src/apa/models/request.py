"""Scene plan request model."""

import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .scene import Scene
from .scene_map import SCENE_KEY_PATTERN, scene_key

SYSTEM_INSTRUCTION = """You are a prompt architect for text-to-video models.
You turn a single video idea into a sequence of scene instructions, one per
8-second clip, that a video model can render independently of each other.

Respond with a single JSON object only. Do not add commentary, explanations,
markdown or code fences before or after it."""


def _example_scene() -> Dict[str, Any]:
    return {
        "objective": "Introduce the main character and the setting",
        "objective_vi": "Giới thiệu nhân vật chính và bối cảnh",
        "persona": {
            "role": "Film director",
            "tone": "Warm and curious",
            "knowledge_level": "Expert cinematographer",
        },
        "task_instructions": ["Open on a wide establishing shot", "Push in slowly"],
        "constraints": ["8 seconds long", "No on-screen text"],
        "few_shot_examples": [
            {"input": "Opening shot", "expected_output": "Wide shot of the scene at dawn"},
        ],
        "output": {
            "type": "video",
            "structure": {
                "character_details": "Full description of every character present",
                "setting_details": "Location, time of day, lighting and weather",
                "key_action": "What the characters do during these 8 seconds",
                "camera_direction": "Shot size, lens and camera movement",
            },
        },
    }


class ScenePlanRequest(BaseModel):
    """Everything sent to the generation backend for one planning call."""

    concept: str = Field(..., description="The user's video idea")
    scene_count: int = Field(..., description="Number of scenes to generate", ge=1)
    visual_style: str = Field(..., description="Default visual style for every scene")

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def scene_keys(self) -> List[str]:
        """Return the keys the response must use, in order."""
        return [scene_key(i) for i in range(1, self.scene_count + 1)]

    @property
    def system_instruction(self) -> str:
        """Return the system instruction for the backend."""
        return SYSTEM_INSTRUCTION

    @property
    def scene_schema(self) -> Dict[str, Any]:
        """Return the JSON schema of a single scene."""
        return Scene.model_json_schema()

    def response_schema(self) -> Dict[str, Any]:
        """Return the JSON schema of the whole response object.

        Keys are described by pattern and counted by ``minProperties`` and
        ``maxProperties`` so the schema stays the same size for any count.
        Used by backends that support constrained JSON output.
        """
        scene_schema = Scene.model_json_schema()
        defs = scene_schema.pop("$defs", {})
        schema: Dict[str, Any] = {
            "type": "object",
            "propertyNames": {"pattern": SCENE_KEY_PATTERN},
            "additionalProperties": scene_schema,
            "minProperties": self.scene_count,
            "maxProperties": self.scene_count,
        }
        if defs:
            schema["$defs"] = defs
        return schema

    def render_prompt(self) -> str:
        """Build the prompt text for this request."""
        last_key = scene_key(self.scene_count)
        example = json.dumps({"scene_1": _example_scene()}, indent=2, ensure_ascii=False)

        prompt_parts = [
            "Create a scene-by-scene plan for the following video idea:",
            "",
            f"IDEA: {self.concept}",
            f"NUMBER OF SCENES: {self.scene_count} (each scene is one 8-second clip)",
            f"VISUAL STYLE: {self.visual_style}",
            "",
            "Rules:",
            f"1. Return exactly {self.scene_count} scenes keyed scene_1 to {last_key}, "
            "numbered consecutively with no gaps.",
            "2. Every scene is generated on its own, with no memory of the other scenes. "
            "Each scene's output.structure.character_details must repeat the full, "
            "self-contained description of every character (age, face, hair, clothing, "
            "distinguishing features). Never write 'same as before' or refer to another scene.",
            "3. Keep characters, wardrobe, props, locations and lighting continuous "
            "from one scene to the next so the clips cut together as one story.",
            "4. Apply the visual style to every scene unless the idea asks for another one.",
            "5. objective_vi is a one-sentence Vietnamese summary of the scene.",
            "6. Fill every field of the schema below for every scene.",
            "7. Respond with the JSON object only: no commentary, no markdown, no code fences.",
            "",
            "Scene schema (JSON Schema):",
            json.dumps(self.scene_schema, indent=2),
            "",
            "Example of the expected shape:",
            example,
        ]

        return "\n".join(prompt_parts)
