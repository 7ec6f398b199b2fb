from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import RevisionStatus


class CreateRevisionRequest(BaseModel):
    """Body of a revision proposal: one entry in ``changes`` per field."""
    reference: Optional[str] = None
    reference_id: Optional[str] = None
    owner_id: UUID
    changes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('reference_id', mode='before')
    @classmethod
    def coerce_reference_id(cls, v: Union[str, int, None]) -> Optional[str]:
        # Plant ids arrive as numbers from some clients
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProfileSummary(BaseModel):
    """Owner details attached to full revision records."""
    id: UUID
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RevisionPublic(BaseModel):
    """Projection returned to untrusted callers. No actor or moderation data."""
    id: UUID
    field: str
    old_value: Any = None
    new_value: Any = None
    status: RevisionStatus
    reference: str
    reference_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RevisionFull(RevisionPublic):
    """Full record for trusted callers."""
    owner_id: UUID
    approved_on: Optional[datetime] = None
    rejected_on: Optional[datetime] = None
    owner: Optional[ProfileSummary] = None
