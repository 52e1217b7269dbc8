from typing import Optional
from pydantic import BaseModel, Field


class ParticipantCreate(BaseModel):
    """Add a participant to the directory."""
    name: str = Field(..., min_length=1, max_length=100)
    contact_address: Optional[str] = None


class ParticipantResponse(BaseModel):
    id: str
    name: str
    contact_address: Optional[str] = None
    has_tab: bool = False

    model_config = {"from_attributes": True}
