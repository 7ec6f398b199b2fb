from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class PlantResponse(BaseModel):
    id: int
    name: str
    scientific_name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    height: Optional[str] = None
    edibilities: Optional[List[str]] = None
    sun_preferences: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }
