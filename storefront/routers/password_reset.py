"""
Router de restablecimiento de contraseña por código
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlmodel import Session

from storefront.core.config import settings
from storefront.core.database import get_session
from storefront.core.errors import internal_error_response
from storefront.core.i18n import resolve_locale, translate
from storefront.core.rate_limit import limiter, AUTH_RATE_LIMIT, PASSWORD_RATE_LIMIT
from storefront.schemas.password_reset import (
    CodeCheckRequest,
    CodeCheckResponse,
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
)
from storefront.services.email_service import EmailService
from storefront.services.password_reset import (
    CodeNotFoundError,
    ExpiredCodeError,
    OrphanedCodeError,
    PasswordResetService,
    mask_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/password", tags=["password reset"])

PASSWORD_RESET_SUCCESS_MESSAGE = "password has been successfully reset"


def get_password_reset_service(session: Session = Depends(get_session)) -> PasswordResetService:
    return PasswordResetService(session)


def _invalid_code_error(code: str, locale: str) -> RequestValidationError:
    """Mismo formato que el resto de los errores de validación"""
    return RequestValidationError([
        {
            "type": "exists",
            "loc": ("body", "code"),
            "msg": translate("passwords.code_invalid", locale),
            "input": code,
        }
    ])


def _expired_code_response(locale: str) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": translate("passwords.code_is_expire", locale)},
    )


@router.post("/email", response_model=MessageResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def send_reset_code(
    request: Request,
    payload: ForgotPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Enviar un código de restablecimiento al email

    La respuesta es la misma exista o no la cuenta.
    """
    record = service.issue_code(payload.email)
    if record is not None:
        sent = EmailService.send_password_reset_code(
            to_email=record.email,
            code=record.code,
            expires_in_minutes=settings.password_reset_code_ttl_minutes,
        )
        if not sent:
            logger.warning("Código de restablecimiento emitido sin envío de email", extra={"email": mask_email(record.email)})

    return MessageResponse(message=translate("passwords.sent", resolve_locale(request)))


@router.post("/code/check", response_model=CodeCheckResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def check_reset_code(
    request: Request,
    payload: CodeCheckRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """Verificar que un código exista y no haya expirado"""
    locale = resolve_locale(request)
    try:
        record = service.check_code(payload.code)
    except CodeNotFoundError:
        raise _invalid_code_error(payload.code, locale)
    except ExpiredCodeError:
        return _expired_code_response(locale)

    return CodeCheckResponse(code=record.code, message=translate("passwords.code_is_valid", locale))


@router.post("/reset", response_model=MessageResponse)
@limiter.limit(PASSWORD_RATE_LIMIT)
def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Restablecer la contraseña con un código

    **Rate Limited**: Máximo 3 intentos por minuto

    - **code**: Código recibido por email
    - **password**: Nueva contraseña (mínimo 6 caracteres)
    - **password_confirmation**: Debe coincidir con password
    """
    locale = resolve_locale(request)

    # El código debe existir antes de entrar al flujo
    if not service.reset_codes.exists(payload.code):
        raise _invalid_code_error(payload.code, locale)

    try:
        service.reset_password(payload.code, payload.password)
    except ExpiredCodeError:
        return _expired_code_response(locale)
    except CodeNotFoundError:
        raise _invalid_code_error(payload.code, locale)
    except OrphanedCodeError:
        # Mismo sobre que cualquier error no controlado
        return internal_error_response(request)

    return MessageResponse(message=PASSWORD_RESET_SUCCESS_MESSAGE)
