"""Sweet (inventory item) model."""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String, UniqueConstraint

from sweetshop.database import Base
from sweetshop.models.mixins import TimestampMixin

DEFAULT_SWEET_IMAGE = "https://placehold.co/600x400/1f2937/fbbf24?text=Sweet"

# Largest stock count a sweet can hold; keeps quantity inside a 32-bit INTEGER
MAX_QUANTITY = 2**31 - 1


class Sweet(Base, TimestampMixin):
    """A sweet stocked by the shop."""

    __tablename__ = "sweets"
    __table_args__ = (
        UniqueConstraint("name", "category", name="uq_sweets_name_category"),
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint(f"quantity <= {MAX_QUANTITY}", name="ck_sweets_quantity_max"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    image = Column(String(500), nullable=False, default=DEFAULT_SWEET_IMAGE)
