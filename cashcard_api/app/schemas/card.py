"""
Pydantic schemas for cash cards.

Clients only ever send an ``amount``.  Any ``id`` or ``owner`` field
present in a request body is ignored: the id is minted by the store
and the owner is always the authenticated caller.
"""

from pydantic import BaseModel, Field


class CardCreate(BaseModel):
    """Schema for creating a new card."""

    amount: float = Field(..., allow_inf_nan=False, description="Initial balance of the card; may be negative")


class CardUpdate(BaseModel):
    """Schema for replacing the amount of an existing card."""

    amount: float = Field(..., allow_inf_nan=False, description="New balance of the card")


class CardRead(BaseModel):
    """Schema for reading a card."""

    id: int
    amount: float
    owner: str
