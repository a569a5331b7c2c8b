"""Auto Prompt Architect - turn a video idea and a duration into scene prompts."""

__version__ = "0.1.0"
