from typing import Protocol
import bcrypt
import logging

# Configurar logging
logger = logging.getLogger(__name__)

# bcrypt solo considera los primeros 72 bytes
BCRYPT_MAX_BYTES = 72
BCRYPT_ROUNDS = 12


class Hasher(Protocol):
    def hash(self, password: str) -> str:
        ...

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        ...


def _password_bytes(password: str) -> bytes:
    """
    Convertir la contraseña a bytes truncando a 72 bytes para bcrypt.
    """
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptHasher:
    """Hash de contraseñas con salt usando bcrypt directamente"""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
        except ValueError as e:
            # Hash con formato inválido almacenado en la base
            logger.error(f"Error al verificar contraseña: {e}")
            return False


default_hasher = BcryptHasher()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verificar contraseña plana contra hash"""
    return default_hasher.verify(plain_password, hashed_password)
