from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class SubjectUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class SubjectRead(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
