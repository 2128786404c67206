"""
Request and response models for account records.

Accounts are opaque documents; only ``username`` is interpreted.
"""
from pydantic import BaseModel, ConfigDict, Field


class AccountCreate(BaseModel):
    """Payload for creating an account. Extra fields are stored as-is."""

    model_config = ConfigDict(extra="allow")

    username: str = Field(..., min_length=1, examples=["builderman"])


class Account(BaseModel):
    model_config = ConfigDict(extra="allow")

    username: str


class AccountDeleted(BaseModel):
    success: bool = True
    username: str
