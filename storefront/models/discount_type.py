from typing import Optional

from sqlmodel import Field

from .base import BaseModelWithTimestamp


class DiscountType(BaseModelWithTimestamp, table=True):
    """Tipo de descuento; la jerarquía se guarda con un puntero al padre"""
    __tablename__ = "discount_types"

    name: str = Field(max_length=255)
    parent_id: Optional[int] = Field(default=None, foreign_key="discount_types.id", index=True)
