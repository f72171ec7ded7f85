"""
Reloj inyectable para los servicios que dependen de la hora actual.

Todas las fechas se manejan como UTC "naive", igual que las columnas
``created_at`` de la base de datos.
"""
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Reloj real del sistema (UTC sin tzinfo)"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Normalizar una fecha a UTC sin tzinfo"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
