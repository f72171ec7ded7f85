from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from .base import utcnow


class ResetCodePassword(SQLModel, table=True):
    """
    Código de un solo uso para restablecer la contraseña.

    ``email`` referencia a ``users.email`` solo a nivel de aplicación
    (no hay foreign key ni borrado en cascada).
    """
    __tablename__ = "reset_code_passwords"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255, index=True)
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
