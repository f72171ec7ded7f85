#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[1]
sys.path.append(str(project_root))

from sqlmodel import Session

from storefront.core.config import settings
from storefront.core.database import engine
from storefront.services.email_service import EmailService
from storefront.services.password_reset import PasswordResetService


def main() -> int:
    parser = argparse.ArgumentParser(description="Emitir un código de restablecimiento de contraseña")
    parser.add_argument("--email", required=True, help="Email del usuario")
    parser.add_argument("--send", action="store_true", help="Enviar el código por email")
    args = parser.parse_args()

    with Session(engine) as session:
        record = PasswordResetService(session).issue_code(args.email)
        if record is None:
            print(f"❌ Usuario no encontrado: {args.email}")
            return 1
        code, email = record.code, record.email

    if args.send:
        sent = EmailService.send_password_reset_code(
            to_email=email,
            code=code,
            expires_in_minutes=settings.password_reset_code_ttl_minutes,
        )
        print("✅ Email enviado" if sent else "⚠️  No se pudo enviar el email")

    print(f"✅ Código para {email}: {code} (vence en {settings.password_reset_code_ttl_minutes} minutos)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
