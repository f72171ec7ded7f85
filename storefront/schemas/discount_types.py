"""
Esquemas Pydantic para tipos de descuento
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DiscountTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    parent_id: Optional[int] = None


class DiscountTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    parent_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DiscountTypeNode(BaseModel):
    """Nodo del árbol de tipos de descuento"""
    id: int
    name: str
    parent_id: Optional[int] = None
    children: List["DiscountTypeNode"] = []


DiscountTypeNode.model_rebuild()
