from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class ExampleOut(BaseModel):
    id: int
    name: str
    createdAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConnectionTestOk(BaseModel):
    message: str
    data: ExampleOut


class ConnectionTestFailed(BaseModel):
    error: str
    details: str
