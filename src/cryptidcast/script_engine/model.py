from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Speaker(str, Enum):
    HUMAN = "Human"
    BIGFOOT = "Bigfoot"


class ScriptLine(BaseModel):
    """Single spoken line of the podcast exchange."""

    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str


class ScriptResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dialogue: Tuple[ScriptLine, ...] = Field(min_length=1)
    visual_prompt: str = Field(
        alias="visualPrompt",
        description="Scene description handed to the video model",
    )

    @field_validator("visual_prompt")
    @classmethod
    def _require_visual_prompt(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("visualPrompt must not be empty")
        return value

    def as_text(self) -> str:
        lines = [f"{line.speaker.value}: \"{line.text}\"" for line in self.dialogue]
        lines.append("")
        lines.append(f"VEO PROMPT: {self.visual_prompt}")
        return "\n".join(lines)
