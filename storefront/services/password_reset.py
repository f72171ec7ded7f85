"""
Servicio de restablecimiento de contraseña por código.

Ciclo de vida de un código: emitido -> consumido | expirado. En ambos
casos terminales la fila de ``reset_code_passwords`` se elimina.

Un código vence cuando ``ahora - created_at`` supera la ventana de
expiración (una hora por defecto). Justo en el límite todavía es válido.
"""
from datetime import datetime, timedelta
import logging
import secrets
from typing import Optional

from sqlmodel import Session

from storefront.core.clock import Clock, SystemClock, as_naive_utc
from storefront.core.config import settings
from storefront.core.security import Hasher, default_hasher
from storefront.models.reset_code import ResetCodePassword
from storefront.models.user import User
from storefront.repositories.reset_code_repo import ResetCodeRepository
from storefront.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 10

# Mayúsculas y dígitos, sin 0/O ni 1/I
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


class PasswordResetError(ValueError):
    """Error base del flujo de restablecimiento"""


class CodeNotFoundError(PasswordResetError):
    """El código no existe (o ya fue consumido)"""


class ExpiredCodeError(PasswordResetError):
    """El código existe pero venció; se elimina al detectarlo"""


class OrphanedCodeError(PasswordResetError):
    """El código es válido pero no hay usuario con ese email"""


def normalize_email(email: str) -> str:
    return email.strip().lower()


def mask_email(email: str) -> str:
    """
    Versión del email apta para logs: ``juan@example.com`` -> ``j***@example.com``
    """
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


class PasswordResetService:
    def __init__(
        self,
        session: Session,
        *,
        clock: Optional[Clock] = None,
        hasher: Optional[Hasher] = None,
        ttl_minutes: Optional[int] = None,
        code_length: Optional[int] = None,
    ):
        self.session = session
        self.reset_codes = ResetCodeRepository(session)
        self.users = UserRepository(session)
        self.clock = clock or SystemClock()
        self.hasher = hasher or default_hasher
        if ttl_minutes is None:
            ttl_minutes = settings.password_reset_code_ttl_minutes
        self.expiry_window = timedelta(minutes=ttl_minutes)
        self.code_length = code_length or settings.password_reset_code_length

    def is_expired(self, record: ResetCodePassword, now: Optional[datetime] = None) -> bool:
        now = now or self.clock.now()
        return now - as_naive_utc(record.created_at) > self.expiry_window

    def generate_code(self) -> str:
        return "".join(secrets.choice(CODE_ALPHABET) for _ in range(self.code_length))

    def _new_unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self.generate_code()
            if not self.reset_codes.exists(code):
                return code
        raise RuntimeError("No se pudo generar un código de restablecimiento único")

    def _discard_expired(self, record: ResetCodePassword) -> None:
        code, email = record.code, record.email
        self.reset_codes.delete_by_code(code)
        self.session.commit()
        logger.info("Código de restablecimiento expirado eliminado", extra={"email": mask_email(email)})

    def issue_code(self, email: str) -> Optional[ResetCodePassword]:
        """
        Emitir un código nuevo para el email.

        Reemplaza cualquier código previo del mismo email. Si el email no
        pertenece a ningún usuario devuelve ``None`` sin guardar nada.
        """
        email = normalize_email(email)
        try:
            # Bloquea la fila del usuario: dos emisiones simultáneas para el
            # mismo email se serializan y queda un solo código vivo
            if self.users.find_by_email(email, for_update=True) is None:
                self.session.rollback()
                logger.info("Solicitud de restablecimiento para un email no registrado")
                return None

            self.reset_codes.delete_by_email(email)
            record = self.reset_codes.create(
                code=self._new_unique_code(),
                email=email,
                created_at=self.clock.now(),
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(record)
        return record

    def check_code(self, code: str) -> ResetCodePassword:
        """Validar un código sin consumirlo"""
        record = self.reset_codes.find_by_code(code)
        if record is None:
            raise CodeNotFoundError("Código inválido")
        if self.is_expired(record):
            self._discard_expired(record)
            raise ExpiredCodeError("Código expirado")
        return record

    def reset_password(self, code: str, new_password: str) -> User:
        """
        Consumir el código y reemplazar el hash de contraseña del usuario.

        Lectura, verificación de expiración, actualización del hash y
        borrado del código ocurren en una sola transacción. La fila del
        código se bloquea (``FOR UPDATE``) y el borrado verifica las filas
        afectadas, así dos requests con el mismo código no pueden
        actualizar la contraseña dos veces.
        """
        try:
            record = self.reset_codes.find_by_code(code, for_update=True)
            if record is None:
                raise CodeNotFoundError("Código inválido")

            if self.is_expired(record):
                self._discard_expired(record)
                raise ExpiredCodeError("Código expirado")

            email = record.email
            user = self.users.find_by_email(email)
            if user is None:
                logger.error(
                    "Código de restablecimiento sin usuario asociado",
                    extra={"email": mask_email(email)},
                )
                raise OrphanedCodeError("Usuario no encontrado")

            self.users.update_password_hash(user, self.hasher.hash(new_password))

            if not self.reset_codes.delete_by_code(code):
                # Otro request consumió el código entre la lectura y el borrado
                raise CodeNotFoundError("Código inválido")

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Contraseña restablecida", extra={"user_id": user.id})
        return user
