"""Pydantic schemas for customers."""

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    """Schema for creating a new customer."""

    first_name: str = Field(..., min_length=1, description="Given name")
    last_name: str = Field(..., min_length=1, description="Family name; used for lookups")


class CustomerRead(BaseModel):
    """Schema for reading a customer."""

    id: int
    first_name: str
    last_name: str
