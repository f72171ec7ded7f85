"""
Modelos SQLModel para la API Storefront
"""

# Modelos base
from .base import (
    BaseModel,
    TimestampMixin,
    BaseModelWithTimestamp,
    utcnow,
)

# Cuentas y restablecimiento de contraseña
from .user import User
from .reset_code import ResetCodePassword

# Catálogo
from .discount_type import DiscountType

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "BaseModelWithTimestamp",
    "utcnow",

    # Cuentas
    "User",
    "ResetCodePassword",

    # Catálogo
    "DiscountType",
]
