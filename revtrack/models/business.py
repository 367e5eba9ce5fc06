from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Business(BaseModel):
    id: int | None = None
    uuid: str = ""
    name: str
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
