"""
Response models for the prompt gateway.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ModelDescriptor(BaseModel):
    """A selectable model of one backend."""
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    description: str = ""

    @classmethod
    def from_ollama_tag(cls, data: Dict[str, Any]) -> "ModelDescriptor":
        """Create from an entry of the Ollama ``/api/tags`` listing."""
        name = data["name"]
        size = data.get("size") or 0
        return cls(
            id=name,
            display_name=name,
            description=f"{size / 1e9:.1f}GB",
        )


class CredentialCheckResult(BaseModel):
    """Outcome of a credential probe."""
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def accepted(cls) -> "CredentialCheckResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: str) -> "CredentialCheckResult":
        return cls(valid=False, reason=reason)
