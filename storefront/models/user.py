from sqlmodel import Field

from .base import BaseModelWithTimestamp


class User(BaseModelWithTimestamp, table=True):
    """Cuenta de usuario: identificador (email) y hash de contraseña"""
    __tablename__ = "users"

    name: str = Field(max_length=255)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
