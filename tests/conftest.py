"""Shared test fixtures for apa."""

import json
from typing import Optional

import pytest

from apa.models import ScenePlanRequest
from apa.services import GenerationGateway


def make_scene(index: int) -> dict:
    """Build a scene that matches the full scene schema."""
    return {
        "objective": f"Scene {index} objective",
        "objective_vi": f"Tóm tắt cảnh {index}",
        "persona": {
            "role": "Film director",
            "tone": "Curious",
            "knowledge_level": "Expert",
        },
        "task_instructions": ["Frame the cat", "Track its movement"],
        "constraints": ["8 seconds", "No text on screen"],
        "few_shot_examples": [{"input": "Cat walks", "expected_output": "Tracking shot"}],
        "output": {
            "type": "video",
            "structure": {
                "character_details": "An orange tabby cat with a white chest and green eyes",
                "setting_details": "A rainy city street at night",
                "key_action": f"The cat explores part {index} of the city",
                "camera_direction": "Low-angle tracking shot",
            },
        },
    }


def make_response(count: int) -> str:
    """Build a raw JSON response with ``count`` scenes."""
    return json.dumps({f"scene_{i}": make_scene(i) for i in range(1, count + 1)})


class StubGateway(GenerationGateway):
    """Gateway that records calls and replays a canned response or error."""

    def __init__(self, response: str = "", error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[ScenePlanRequest, str]] = []

    @property
    def name(self) -> str:
        return "stub"

    @property
    def model(self) -> str:
        return "stub-model"

    async def generate(self, request: ScenePlanRequest, api_key: str) -> str:
        self.calls.append((request, api_key))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_gateway():
    """Gateway returning three well-formed scenes."""
    return StubGateway(response=make_response(3))


@pytest.fixture(autouse=True)
def _clear_api_keys(monkeypatch):
    """Ensure tests never pick up real API keys."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("APA_PROVIDER", raising=False)
