"""User profile schemas."""
from typing import Optional
from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    nickname: str = Field(..., min_length=1, max_length=50)
    bio: Optional[str] = Field(None, max_length=1000)


class ProfileResponse(BaseModel):
    id: int
    nickname: str
    bio: str = ""
