"""
Esquemas Pydantic para la API Storefront
"""
from .password_reset import (
    PASSWORD_MIN_LENGTH,
    ForgotPasswordRequest,
    CodeCheckRequest,
    ResetPasswordRequest,
    MessageResponse,
    CodeCheckResponse,
)
from .discount_types import (
    DiscountTypeCreate,
    DiscountTypeRead,
    DiscountTypeNode,
)

__all__ = [
    "PASSWORD_MIN_LENGTH",
    "ForgotPasswordRequest",
    "CodeCheckRequest",
    "ResetPasswordRequest",
    "MessageResponse",
    "CodeCheckResponse",
    "DiscountTypeCreate",
    "DiscountTypeRead",
    "DiscountTypeNode",
]
