"""Scene data model.

These models describe the instruction object the generation backend must
produce for every scene. They define the response contract sent to the model;
returned scenes are only checked against them on request, see
:meth:`apa.models.SceneMap.parsed`.
"""

from typing import List
from pydantic import BaseModel, Field


class Persona(BaseModel):
    """Voice the downstream video model should adopt."""

    role: str = Field(..., description="Who is directing the shot")
    tone: str = Field(..., description="Emotional tone of the scene")
    knowledge_level: str = Field(..., description="Assumed expertise of the voice")


class FewShotExample(BaseModel):
    """Input / expected output pair illustrating the scene."""

    input: str = Field(..., description="Example input")
    expected_output: str = Field(..., description="Output expected for the input")


class SceneStructure(BaseModel):
    """Continuity block every scene must repeat in full."""

    character_details: str = Field(
        ...,
        description="Complete, self-contained description of every character in the scene"
    )
    setting_details: str = Field(..., description="Location, time of day, atmosphere")
    key_action: str = Field(..., description="What happens during the scene")
    camera_direction: str = Field(..., description="Shot type and camera movement")


class SceneOutput(BaseModel):
    """Output descriptor for a scene."""

    type: str = Field(default="video", description="Media type to generate")
    structure: SceneStructure = Field(..., description="Continuity structure block")


class Scene(BaseModel):
    """A single generated scene instruction."""

    objective: str = Field(..., description="What the scene must achieve")
    objective_vi: str = Field(..., description="Short Vietnamese summary of the scene")
    persona: Persona = Field(..., description="Persona for the scene")
    task_instructions: List[str] = Field(..., description="Ordered task instructions")
    constraints: List[str] = Field(..., description="Ordered constraints")
    few_shot_examples: List[FewShotExample] = Field(
        default_factory=list,
        description="Input / expected output pairs"
    )
    output: SceneOutput = Field(..., description="Output descriptor")
