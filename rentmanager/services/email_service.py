"""
Email Service

Transactional email over SMTP (STARTTLS) plus the message templates used by
contract signing, file upload links, manager invitations and reminders.

Every sender returns a bool; delivery problems are logged, never raised.
"""
import logging
import smtplib
from datetime import datetime
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from rentmanager.core.config import settings
from rentmanager.core.dates import format_spanish_date

logger = logging.getLogger(__name__)


# ==================== Transport ====================

def _sender() -> str:
    return formataddr((settings.EMAIL_FROM_NAME, settings.EMAIL_FROM or settings.SMTP_USER))


def _deliver(to: str, msg) -> bool:
    if not settings.email_configured:
        logger.warning(f"[EMAIL] SMTP not configured. Would send to '{to}': {msg['Subject']}")
        return False

    recipients = [r.strip() for r in to.split(",") if r.strip()]
    try:
        with smtplib.SMTP(settings.SMTP_SERVER, settings.SMTP_PORT, timeout=10) as srv:
            srv.ehlo()
            srv.starttls()
            srv.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            srv.sendmail(settings.EMAIL_FROM or settings.SMTP_USER, recipients, msg.as_string())

        logger.info(f"[EMAIL] Sent to '{to}': {msg['Subject']}")
        return True
    except Exception as exc:
        logger.error(f"[EMAIL] Failed sending to '{to}': {exc}")
        return False


def send_email(to: str, subject: str, body_html: str, body_text: str = "") -> bool:
    """
    Dispatch an HTML email via SMTP.
    Returns True on success, False if SMTP is not configured or delivery failed.
    """
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = _sender()
    msg["To"] = to
    if body_text:
        msg.attach(MIMEText(body_text, "plain", "utf-8"))
    msg.attach(MIMEText(body_html, "html", "utf-8"))
    return _deliver(to, msg)


def send_email_with_attachment(
    to: str,
    subject: str,
    body_html: str,
    attachment: bytes,
    attachment_name: str,
    mime_subtype: str = "pdf",
) -> bool:
    """Send an HTML email with a single binary attachment."""
    msg = MIMEMultipart("mixed")
    msg["Subject"] = subject
    msg["From"] = _sender()
    msg["To"] = to
    msg.attach(MIMEText(body_html, "html", "utf-8"))

    part = MIMEApplication(attachment, _subtype=mime_subtype, Name=attachment_name)
    part["Content-Disposition"] = f'attachment; filename="{attachment_name}"'
    msg.attach(part)
    return _deliver(to, msg)


# ==================== Contract signing ====================

def send_signing_request_email(to_email: str, signer_name: str, signing_url: str, expires_at: datetime) -> bool:
    subject = "Contrato Listo para Firma"
    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Solicitud de Firma de Contrato</title></head>
<body style="font-family:Arial,sans-serif;max-width:600px;margin:0 auto;padding:20px;color:#333">
  <div style="background:#f8f9fa;padding:20px;text-align:center">
    <h2>Contrato Listo para su Firma</h2>
  </div>
  <div style="padding:20px">
    <p>Estimado(a) {signer_name},</p>
    <p>Un contrato está listo para su revisión y firma. Por favor haga clic en el botón a continuación para ver y firmar el documento:</p>
    <p><a href="{signing_url}"
          style="display:inline-block;background:#007bff;color:#fff;padding:10px 20px;text-decoration:none;border-radius:4px">
       Revisar y Firmar Contrato</a></p>
    <p>Esta solicitud de firma expirará el {format_spanish_date(expires_at)}.</p>
    <p>Si tiene alguna pregunta sobre este documento, por favor contáctenos directamente.</p>
    <p>Gracias,<br>Sistema de Administración de Propiedades</p>
  </div>
  <p style="font-size:12px;color:#6c757d">Este es un mensaje automático. Por favor no responda directamente a este correo.</p>
</body>
</html>"""
    return send_email(to_email, subject, html)


def send_signed_contract_email(to_email: str, signed_pdf: bytes, signed_at: datetime) -> bool:
    subject = "Contrato Firmado - Copia para sus Registros"
    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Contrato Firmado</title></head>
<body style="font-family:Arial,sans-serif;max-width:600px;margin:0 auto;padding:20px;color:#333">
  <div style="background:#f8f9fa;padding:20px;text-align:center">
    <h2>Contrato Firmado</h2>
  </div>
  <div style="padding:20px">
    <p>Estimado(a),</p>
    <p>Adjunto a este correo encontrará una copia del contrato firmado para sus registros.</p>
    <p>Este documento ha sido firmado digitalmente el {format_spanish_date(signed_at)} y tiene validez legal.</p>
    <p>Gracias por usar nuestro sistema de firma digital.</p>
    <p>Atentamente,<br>Sistema de Administración de Propiedades</p>
  </div>
  <p style="font-size:12px;color:#6c757d">Este es un mensaje automático. Por favor no responda directamente a este correo.</p>
</body>
</html>"""
    return send_email_with_attachment(to_email, subject, html, signed_pdf, "contrato_firmado.pdf")


# ==================== File upload ====================

def send_upload_link_email(to_email: str, name: str, upload_url: str, expiration_days: int = 7) -> bool:
    subject = "📁 Enlace para Subir Archivos - Rental Manager"
    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Enlace de Subida de Archivos</title></head>
<body style="font-family:Arial,sans-serif;line-height:1.6;color:#333;max-width:600px;margin:0 auto;padding:20px">
  <div style="background:#2563eb;color:#fff;padding:20px;text-align:center;border-radius:8px 8px 0 0">
    <h1>📁 Subir Archivos</h1>
    <p>Rental Manager</p>
  </div>
  <div style="background:#f8fafc;padding:30px;border-radius:0 0 8px 8px">
    <h2>Hola {name},</h2>
    <p>Se ha generado un enlace especial para que puedas subir archivos de forma segura.</p>
    <div style="text-align:center">
      <a href="{upload_url}"
         style="display:inline-block;background:#16a34a;color:#fff;padding:12px 24px;text-decoration:none;border-radius:6px;font-weight:bold;margin:20px 0">
        🔗 Subir Archivos</a>
    </div>
    <div style="background:#dbeafe;padding:15px;border-radius:6px;margin:20px 0">
      <strong>⚠️ Importante:</strong>
      <ul>
        <li>Este enlace expira en {expiration_days} días</li>
        <li>Tamaño máximo por archivo: {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB</li>
      </ul>
    </div>
    <p>Saludos,<br><strong>Equipo de Rental Manager</strong></p>
  </div>
  <p style="text-align:center;color:#6b7280;font-size:14px">Si no solicitaste este enlace, puedes ignorar este email.</p>
</body>
</html>"""
    return send_email(to_email, subject, html)


# ==================== Manager invitation ====================

def send_manager_invitation_email(to_email: str, name: str, temp_password: str, login_url: str,
                                  message: Optional[str] = "") -> bool:
    subject = "¡Has sido invitado como Administrador de Propiedades!"
    text = (
        f"Hola {name},\n\n"
        "Has sido invitado a registrarte como administrador de propiedades.\n\n"
        "Para iniciar sesión, utiliza los siguientes datos:\n"
        f"Email: {to_email}\n"
        f"Contraseña temporal: {temp_password}\n\n"
        f"URL de inicio de sesión: {login_url}\n\n"
        f"{message or ''}\n\n"
        "Deberás cambiar tu contraseña en el primer inicio de sesión.\n\n"
        "Gracias,\nEquipo de Administración"
    )
    html = "<html><body><pre style=\"font-family:Arial,sans-serif\">" + text + "</pre></body></html>"
    return send_email(to_email, subject, html, text)


# ==================== Reminders ====================

def send_annual_renewal_email(to_email: str, renter_name: str, address: str, end_date: datetime,
                              sender_name: str, optional_message: Optional[str] = "") -> bool:
    subject = f"Reminder: Your Lease for {address} is Ending Soon"
    html = (
        f"<!DOCTYPE html><html><head><title>{subject}</title></head><body>"
        f"<p>Dear {renter_name},</p>"
        f"<p>This is a friendly reminder that your lease agreement for the property at <strong>{address}</strong> "
        f"is scheduled to end on <strong>{end_date.strftime('%B')} {end_date.day}, {end_date.year}</strong>.</p>"
        "<p>We value you as a tenant and would like to invite you to discuss renewal options. "
        "Please contact us at your earliest convenience to explore continuing your stay.</p>"
    )
    if optional_message:
        html += f"<p><strong>Additional message from administration:</strong><br>{optional_message}</p>"
    html += f"<p>Sincerely,</p><p>{sender_name}</p></body></html>"
    return send_email(to_email, subject, html)


def send_anniversary_email(to_email: str, renter_name: str, address: str, sender_name: str) -> bool:
    subject = "🏡 Aniversario de Arrendamiento"
    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Aniversario de Arrendamiento</title></head>
<body style="font-family:Arial,sans-serif">
  <div style="padding:20px">
    <h2>🏡 ¡Feliz Aniversario de Arrendamiento, {renter_name}!</h2>
    <p>Hoy se cumple un año desde que inició su contrato de arrendamiento para la propiedad en:</p>
    <p style="font-weight:bold;color:#007BFF">{address}</p>
    <p>Le agradecemos su confianza y esperamos que su experiencia haya sido excelente.</p>
    <p>¿Desea renovar su contrato de arrendamiento?</p>
    <p>Por favor, comuníquese con nosotros para discutir las opciones de renovación.</p>
    <hr>
    <p>Atentamente,</p>
    <p><strong>{sender_name}</strong></p>
  </div>
</body>
</html>"""
    return send_email(to_email, subject, html)


def send_rent_invoice_email(to_email: str, *, renter_name: str, renter_nit: str, address: str,
                            property_type: str, start_date: Optional[datetime], end_date: Optional[datetime],
                            monthly_rent: float, unpaid_months: int, payment_terms: str,
                            sender_name: str) -> bool:
    """Monthly "cuenta de cobro" sent on the pricing due day."""
    def fmt(d: Optional[datetime]) -> str:
        return d.strftime("%d/%m/%Y") if d else ""

    rent = int(monthly_rent)
    invoice_number = int(start_date.strftime("%Y%m%d")) if start_date else 0
    overdue = ""
    if unpaid_months > 0:
        overdue = f"""
    <div>
      <h3>⚠️ Pagos Atrasados</h3>
      <p>El arrendatario tiene <strong>{unpaid_months} meses</strong> sin pagar.</p>
      <p>Monto total adeudado: <strong>{rent * unpaid_months} COP</strong></p>
      <p>Por favor, realice el pago lo antes posible para evitar sanciones.</p>
    </div>
    <hr>"""

    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Cuenta de Cobro</title></head>
<body>
    <hr>
    <h3>CUENTA DE COBRO ARRENDAMIENTO N° {invoice_number}</h3>
    <p>Fecha: {fmt(start_date)}</p>
    <h4>Informacion de arrendatario:</h4>
    <p>Nombre del Arrendatario: {renter_name}</p>
    <p>NIT/Cédula del Arrendatario: {renter_nit}</p>
    <p>Dirección del Inmueble Arrendado: {address}</p>
    <hr>
    <h3>Descripción del Arrendamiento:</h3>
    <table border="1">
        <tr><th>Tipo de Inmueble</th><th>Fecha Inicio</th><th>Fecha Final</th><th>Valor Mensual</th><th>Subtotal</th></tr>
        <tr><td>{property_type}</td><td>{fmt(start_date)}</td><td>{fmt(end_date)}</td><td>{rent}</td><td>{rent}</td></tr>
    </table>
    <h3>Total a Pagar: {rent}</h3>
    {overdue}
    <hr>
    <h4>Condiciones de Pago:</h4>
    <p>{payment_terms or "Pago antes del 5 de cada mes"}</p>
    <hr>
    <p>Atentamente,</p>
    <p>{sender_name}</p>
</body>
</html>"""
    return send_email(to_email, "Cuenta de Cobro Arrendamiento", html)
