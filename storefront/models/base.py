"""
Modelos base para la API Storefront
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    """Fecha actual en UTC sin tzinfo (formato de las columnas)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(SQLModel):
    """Modelo base con clave primaria entera"""
    id: Optional[int] = Field(default=None, primary_key=True)


class TimestampMixin(SQLModel):
    """Mixin para campos de timestamp comunes"""
    # UTC sin tzinfo, igual que las columnas DateTime() de la migración
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_type=DateTime)


class BaseModelWithTimestamp(BaseModel, TimestampMixin):
    """Modelo base que combina BaseModel con TimestampMixin"""
    pass
