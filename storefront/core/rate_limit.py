"""
Rate limiting configuration for the API
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from storefront.core.config import settings


# Emisión y verificación de códigos de restablecimiento
AUTH_RATE_LIMIT = "5/minute"

# Very strict for password-related operations
PASSWORD_RATE_LIMIT = "3/minute"  # Only 3 attempts per minute


def get_client_ip(request: Request) -> str:
    """
    IP del cliente para el rate limit.

    Los headers X-Forwarded-For / X-Real-IP solo se respetan cuando la
    conexión viene de un proxy listado en ``settings.trusted_proxies``;
    en cualquier otro caso se usa la IP de la conexión.
    """
    remote = get_remote_address(request)
    if remote not in settings.trusted_proxies:
        return remote

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # El primer valor es el cliente original
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return remote


limiter = Limiter(key_func=get_client_ip)
