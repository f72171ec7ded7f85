import logging
import smtplib
import ssl
from email.message import EmailMessage
import html
from typing import Optional

from storefront.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    @staticmethod
    def _from_header() -> Optional[str]:
        if settings.smtp_from:
            return settings.smtp_from
        if settings.smtp_from_email and settings.smtp_from_name:
            return f"{settings.smtp_from_name} <{settings.smtp_from_email}>"
        return settings.smtp_from_email

    @staticmethod
    def _render_code_template(*, title: str, intro: str, code: str, expiry_note: str, footer_note: str) -> str:
        title_esc = html.escape(title)
        intro_esc = html.escape(intro)
        code_esc = html.escape(code)
        expiry_esc = html.escape(expiry_note)
        footer_esc = html.escape(footer_note)
        app_name_esc = html.escape(settings.app_name)

        return f"""<!doctype html>
<html lang="es">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>{title_esc}</title>
  </head>
  <body style="margin:0; padding:24px 16px; background-color:#f4f4f5; font-family:Arial, Helvetica, sans-serif;">
    <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%">
      <tr>
        <td align="center">
          <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="560" style="width:560px; max-width:560px; background-color:#ffffff; border-radius:12px; padding:24px;">
            <tr>
              <td style="font-size:18px; font-weight:700; color:#111827;">{app_name_esc}</td>
            </tr>
            <tr>
              <td style="padding-top:12px; font-size:16px; font-weight:700; color:#111827;">{title_esc}</td>
            </tr>
            <tr>
              <td style="padding-top:8px; font-size:14px; line-height:20px; color:#374151;">{intro_esc}</td>
            </tr>
            <tr>
              <td align="center" style="padding:20px 0; font-size:28px; font-weight:700; letter-spacing:6px; color:#111827;">{code_esc}</td>
            </tr>
            <tr>
              <td style="font-size:12px; line-height:18px; color:#6b7280;">{expiry_esc}</td>
            </tr>
            <tr>
              <td style="padding-top:12px; font-size:12px; line-height:18px; color:#9ca3af;">{footer_esc}</td>
            </tr>
          </table>
        </td>
      </tr>
    </table>
  </body>
</html>"""

    @staticmethod
    def send_email(
        *,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: Optional[str] = None,
    ) -> bool:
        if settings.email_backend != "smtp":
            logger.debug("Envío de email deshabilitado (backend=%s)", settings.email_backend)
            return False
        from_header = EmailService._from_header()
        if not settings.smtp_host or not from_header:
            logger.error("SMTP mal configurado (host/from). Email no enviado a %s", to_email)
            return False

        msg = EmailMessage()
        msg["From"] = from_header
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.set_content(text_body)
        if html_body:
            msg.add_alternative(html_body, subtype="html")

        try:
            if settings.smtp_use_ssl:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context, timeout=10) as server:
                    if settings.smtp_username and settings.smtp_password:
                        server.login(settings.smtp_username, settings.smtp_password)
                    server.send_message(msg)
                    return True

            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
                server.ehlo()
                if settings.smtp_use_tls:
                    server.starttls(context=ssl.create_default_context())
                    server.ehlo()
                if settings.smtp_username and settings.smtp_password:
                    server.login(settings.smtp_username, settings.smtp_password)
                server.send_message(msg)
                return True
        except (smtplib.SMTPException, OSError):
            logger.exception("No se pudo enviar email a %s", to_email)
            return False

    @staticmethod
    def send_password_reset_code(*, to_email: str, code: str, expires_in_minutes: int) -> bool:
        subject = f"{settings.app_name} - Código para restablecer tu contraseña"
        expiry_note = f"El código vence en {expires_in_minutes} minutos y se puede usar una sola vez."
        footer_note = "Si no solicitaste este cambio, podés ignorar este email."
        text_body = (
            "Recibimos una solicitud para restablecer tu contraseña.\n\n"
            f"Tu código es: {code}\n\n"
            f"{expiry_note}\n"
            f"{footer_note}"
        )
        html_body = EmailService._render_code_template(
            title="Restablecer contraseña",
            intro="Recibimos una solicitud para restablecer tu contraseña. Usá este código:",
            code=code,
            expiry_note=expiry_note,
            footer_note=footer_note,
        )
        return EmailService.send_email(to_email=to_email, subject=subject, text_body=text_body, html_body=html_body)
