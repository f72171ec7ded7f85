from storefront.repositories.base import BaseRepository
from storefront.repositories.user_repo import UserRepository
from storefront.repositories.reset_code_repo import ResetCodeRepository
from storefront.repositories.discount_type_repo import DiscountTypeRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ResetCodeRepository",
    "DiscountTypeRepository",
]
