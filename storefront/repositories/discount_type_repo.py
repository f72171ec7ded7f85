from typing import List

from sqlmodel import Session, select

from storefront.repositories.base import BaseRepository
from storefront.models.discount_type import DiscountType


class DiscountTypeRepository(BaseRepository[DiscountType]):
    """Repository for DiscountType model."""

    def __init__(self, session: Session):
        super().__init__(DiscountType, session)

    def list_all(self) -> List[DiscountType]:
        return list(self.session.exec(select(DiscountType).order_by(DiscountType.id)).all())

    def get_children(self, parent_id: int) -> List[DiscountType]:
        query = select(DiscountType).where(DiscountType.parent_id == parent_id).order_by(DiscountType.id)
        return list(self.session.exec(query).all())

    def has_children(self, parent_id: int) -> bool:
        query = select(DiscountType.id).where(DiscountType.parent_id == parent_id).limit(1)
        return self.session.exec(query).first() is not None
