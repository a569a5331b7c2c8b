"""AI agents for scene planning."""

from .base import BaseAgent
from .planner import PlanInput, ScenePlanner

__all__ = ["BaseAgent", "PlanInput", "ScenePlanner"]
