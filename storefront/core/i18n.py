"""
Mensajes localizados para las respuestas de la API.

Las claves siguen el formato ``grupo.clave`` (por ejemplo
``passwords.code_is_expire``). El idioma se toma del header
``Accept-Language`` y, si no hay coincidencia, de ``settings.default_locale``.
"""
from typing import Dict, Optional

from fastapi import Request

from storefront.core.config import settings


MESSAGES: Dict[str, Dict[str, str]] = {
    "es": {
        "passwords.sent": "Si el email está registrado, te enviamos un código para restablecer la contraseña",
        "passwords.code_is_valid": "El código es válido",
        "passwords.code_is_expire": "El código de restablecimiento expiró",
        "passwords.code_invalid": "El código de restablecimiento no es válido",
    },
    "en": {
        "passwords.sent": "If the email is registered, a password reset code has been sent",
        "passwords.code_is_valid": "The code is valid",
        "passwords.code_is_expire": "The password reset code has expired",
        "passwords.code_invalid": "The password reset code is invalid",
    },
}


def _supported(locale: Optional[str]) -> Optional[str]:
    if not locale:
        return None
    base = locale.strip().lower().replace("_", "-").split("-", 1)[0]
    return base if base in MESSAGES else None


def resolve_locale(request: Optional[Request] = None) -> str:
    """Elegir el idioma según el header Accept-Language"""
    if request is not None:
        header = request.headers.get("Accept-Language", "")
        # "en-US,en;q=0.9,es;q=0.8" -> se respeta el orden en que vienen
        for part in header.split(","):
            locale = _supported(part.split(";", 1)[0])
            if locale:
                return locale
    return _supported(settings.default_locale) or "es"


def translate(key: str, locale: Optional[str] = None) -> str:
    """Traducir una clave; si falta, se devuelve la propia clave"""
    catalog = MESSAGES.get(locale or resolve_locale(), {})
    if key in catalog:
        return catalog[key]
    return MESSAGES["es"].get(key, key)
