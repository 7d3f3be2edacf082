"""
Request models for the prompt gateway.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..prompts import DEFAULT_SYSTEM_PROMPT


class BackendIdentifier(str, Enum):
    """Supported text-generation backends."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    GROQ = "groq"
    OLLAMA = "ollama"


class EnhancementRequest(BaseModel):
    """
    A single prompt enhancement request.

    ``backend`` is kept as a plain string so an unrecognised identifier
    reaches the dispatcher instead of failing validation here.
    """
    prompt_text: str = Field(..., description="Rough prompt to enhance")
    backend: str = Field(..., description="Backend identifier")
    model_id: str = Field(..., description="Model id passed verbatim to the backend")
    credential: Optional[str] = Field(default=None, description="API key, absent for ollama")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT)

    @field_validator("backend", mode="before")
    @classmethod
    def _backend_value(cls, value):
        if isinstance(value, BackendIdentifier):
            return value.value
        return value

    @field_validator("system_prompt")
    @classmethod
    def _default_system_prompt(cls, value: str) -> str:
        return value if value and value.strip() else DEFAULT_SYSTEM_PROMPT

    @model_validator(mode="after")
    def _drop_local_credential(self) -> "EnhancementRequest":
        # The local daemon takes no credential.
        if self.backend == BackendIdentifier.OLLAMA.value:
            self.credential = None
        return self
