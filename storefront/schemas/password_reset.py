"""
Esquemas Pydantic para restablecimiento de contraseña
"""
from pydantic import BaseModel, EmailStr, Field, model_validator

PASSWORD_MIN_LENGTH = 6


class ForgotPasswordRequest(BaseModel):
    """Solicitud de código de restablecimiento"""
    email: EmailStr


class CodeCheckRequest(BaseModel):
    """Verificación de un código"""
    code: str = Field(min_length=1, max_length=64)


class ResetPasswordRequest(BaseModel):
    """Restablecer contraseña con un código"""
    code: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, description="Nueva contraseña (mínimo 6 caracteres)")
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("La confirmación de la contraseña no coincide")
        return self


class MessageResponse(BaseModel):
    message: str


class CodeCheckResponse(MessageResponse):
    code: str
