"""Inventory service for sweets."""

import logging

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sweetshop.exceptions import (
    DuplicateItem,
    InvalidAmount,
    MissingQuery,
    NotFound,
    OutOfStock,
    StockLimitExceeded,
)
from sweetshop.models.sweet import DEFAULT_SWEET_IMAGE, MAX_QUANTITY, Sweet
from sweetshop.schemas.sweet import SweetCreate, SweetUpdate

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def parse_amount(value) -> int:
    """Return value as an int in 1..MAX_QUANTITY, or raise InvalidAmount."""
    if isinstance(value, bool) or value is None:
        raise InvalidAmount()
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise InvalidAmount() from e
    if not isinstance(value, (int, float)):
        raise InvalidAmount()
    if isinstance(value, float) and not value.is_integer():
        raise InvalidAmount()
    amount = int(value)
    if amount < 1 or amount > MAX_QUANTITY:
        raise InvalidAmount()
    return amount


class InventoryService:
    """CRUD, search and stock changes for sweets.

    Purchase and restock are single conditional UPDATE statements, so
    concurrent requests against the same sweet can never lose an update
    or drive the quantity below zero.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_sweets(self) -> list[Sweet]:
        return self.db.query(Sweet).order_by(Sweet.id).all()

    def search(self, query: str | None) -> list[Sweet]:
        """Case-insensitive substring match on name or category."""
        term = (query or "").strip()
        if not term:
            raise MissingQuery()

        pattern = f"%{escape_like(term)}%"
        return (
            self.db.query(Sweet)
            .filter(
                or_(
                    Sweet.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Sweet.category.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Sweet.id)
            .all()
        )

    def get(self, sweet_id: int) -> Sweet:
        sweet = self.db.get(Sweet, sweet_id)
        if not sweet:
            raise NotFound("Sweet not found")
        return sweet

    def _find_duplicate(self, name: str, category: str, exclude_id: int | None = None) -> Sweet | None:
        query = self.db.query(Sweet).filter(Sweet.name == name, Sweet.category == category)
        if exclude_id is not None:
            query = query.filter(Sweet.id != exclude_id)
        return query.first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateItem() from e

    def create(self, data: SweetCreate) -> Sweet:
        if self._find_duplicate(data.name, data.category):
            raise DuplicateItem()

        sweet = Sweet(
            name=data.name,
            category=data.category,
            price=data.price,
            quantity=data.quantity,
            image=data.image or DEFAULT_SWEET_IMAGE,
        )
        self.db.add(sweet)
        self._commit()
        self.db.refresh(sweet)
        logger.info(f"Created sweet {sweet.id} '{sweet.name}' ({sweet.category})")
        return sweet

    def update(self, sweet_id: int, data: SweetUpdate) -> Sweet:
        """Merge the supplied fields onto an existing sweet."""
        sweet = self.get(sweet_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        name = changes.get("name", sweet.name)
        category = changes.get("category", sweet.category)
        if self._find_duplicate(name, category, exclude_id=sweet.id):
            raise DuplicateItem()

        for field, value in changes.items():
            setattr(sweet, field, value)
        self._commit()
        self.db.refresh(sweet)
        return sweet

    def delete(self, sweet_id: int) -> None:
        sweet = self.get(sweet_id)
        self.db.delete(sweet)
        self.db.commit()
        logger.info(f"Deleted sweet {sweet_id}")

    def purchase(self, sweet_id: int) -> int:
        """Take one unit out of stock and return the new quantity."""
        result = self.db.execute(
            update(Sweet)
            .where(Sweet.id == sweet_id, Sweet.quantity > 0)
            .values(quantity=Sweet.quantity - 1)
            .returning(Sweet.quantity)
        )
        new_quantity = result.scalar_one_or_none()
        self.db.commit()

        if new_quantity is None:
            self.get(sweet_id)
            raise OutOfStock()

        logger.info(f"Purchased sweet {sweet_id}, {new_quantity} left")
        return new_quantity

    def restock(self, sweet_id: int, amount) -> int:
        """Add stock and return the new quantity."""
        amount = parse_amount(amount)
        result = self.db.execute(
            update(Sweet)
            .where(Sweet.id == sweet_id, Sweet.quantity <= MAX_QUANTITY - amount)
            .values(quantity=Sweet.quantity + amount)
            .returning(Sweet.quantity)
        )
        new_quantity = result.scalar_one_or_none()
        self.db.commit()

        if new_quantity is None:
            self.get(sweet_id)
            raise StockLimitExceeded()

        logger.info(f"Restocked sweet {sweet_id} by {amount}, now {new_quantity}")
        return new_quantity
