"""Sweet schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sweetshop.models.sweet import MAX_QUANTITY


class SweetCreate(BaseModel):
    """Create a sweet."""

    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    price: float = Field(..., ge=0)
    quantity: int = Field(0, ge=0, le=MAX_QUANTITY)
    image: str | None = Field(None, max_length=500)


class SweetUpdate(BaseModel):
    """Update a sweet. Only fields that are sent (and not null) are changed."""

    name: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = Field(None, min_length=1, max_length=50)
    price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=0, le=MAX_QUANTITY)
    image: str | None = Field(None, max_length=500)


class SweetResponse(BaseModel):
    """Sweet response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    price: float
    quantity: int
    image: str
    created_at: datetime
    updated_at: datetime


class RestockRequest(BaseModel):
    """Restock request. The amount is checked by the inventory service."""

    quantity: Any = None


class StockChangeResponse(BaseModel):
    """Result of a purchase or restock."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    new_quantity: int = Field(..., alias="newQuantity")


class MessageResponse(BaseModel):
    """Generic confirmation."""

    success: bool = True
    message: str
