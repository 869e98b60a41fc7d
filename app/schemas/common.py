"""Schemas shared by several routers."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by delete and confirmation routes."""

    message: str


class TotalResponse(BaseModel):
    total: int = Field(ge=0)
