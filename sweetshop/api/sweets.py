"""Sweets API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from sweetshop.api.dependencies import get_current_user, get_inventory_service, require_admin
from sweetshop.models.user import User
from sweetshop.schemas.sweet import (
    MessageResponse,
    RestockRequest,
    StockChangeResponse,
    SweetCreate,
    SweetResponse,
    SweetUpdate,
)
from sweetshop.services.inventory import InventoryService

router = APIRouter(prefix="/api/v1/sweets", tags=["sweets"])


@router.get("", response_model=list[SweetResponse])
def list_sweets(
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """List all sweets."""
    return inventory.list_sweets()


# Must stay registered before /{sweet_id} so "search" is not read as an id
@router.get("/search", response_model=list[SweetResponse])
def search_sweets(
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
    q: str | None = None,
):
    """Search sweets by name or category (case-insensitive substring)."""
    return inventory.search(q)


@router.get("/{sweet_id}", response_model=SweetResponse)
def get_sweet(
    sweet_id: int,
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Get a specific sweet."""
    return inventory.get(sweet_id)


@router.post("", response_model=SweetResponse, status_code=status.HTTP_201_CREATED)
def create_sweet(
    sweet_data: SweetCreate,
    _admin: Annotated[User, Depends(require_admin)],
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Add a sweet to the inventory (admin only)."""
    return inventory.create(sweet_data)


@router.put("/{sweet_id}", response_model=SweetResponse)
def update_sweet(
    sweet_id: int,
    sweet_data: SweetUpdate,
    _admin: Annotated[User, Depends(require_admin)],
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Update a sweet (admin only)."""
    return inventory.update(sweet_id, sweet_data)


@router.delete("/{sweet_id}", response_model=MessageResponse)
def delete_sweet(
    sweet_id: int,
    _admin: Annotated[User, Depends(require_admin)],
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Delete a sweet (admin only)."""
    inventory.delete(sweet_id)
    return MessageResponse(message="Sweet deleted successfully")


@router.post("/{sweet_id}/purchase", response_model=StockChangeResponse)
def purchase_sweet(
    sweet_id: int,
    _user: Annotated[User, Depends(get_current_user)],
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Buy one unit of a sweet."""
    new_quantity = inventory.purchase(sweet_id)
    return StockChangeResponse(message="Purchased 1 sweet!", new_quantity=new_quantity)


@router.post("/{sweet_id}/restock", response_model=StockChangeResponse)
def restock_sweet(
    sweet_id: int,
    _admin: Annotated[User, Depends(require_admin)],
    inventory: Annotated[InventoryService, Depends(get_inventory_service)],
    restock: RestockRequest | None = None,
):
    """Add stock to a sweet (admin only)."""
    new_quantity = inventory.restock(sweet_id, restock.quantity if restock else None)
    return StockChangeResponse(
        message=f"Restocked, {new_quantity} in stock", new_quantity=new_quantity
    )
