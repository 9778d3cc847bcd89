"""
PDF Signing Service
Embeds a PKCS#7 signature into contract PDFs using pyHanko.

A self-signed certificate pair is generated under CERTS_DIR the first time it
is needed.
"""
import io
import logging
import os
from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from pyhanko.pdf_utils.incremental_writer import IncrementalPdfFileWriter
from pyhanko.sign import signers, timestamps

from rentmanager.core.config import settings

logger = logging.getLogger(__name__)

SIGNATURE_FIELD = "Signature1"
SIGNATURE_REASON = "Contract signing"


def ensure_certificates() -> tuple:
    """
    Return (certificate_path, private_key_path), generating a self-signed
    RSA 2048 pair valid for one year when either file is missing.
    """
    cert_path = settings.certificate_path
    key_path = settings.private_key_path
    if os.path.exists(cert_path) and os.path.exists(key_path):
        return cert_path, key_path

    logger.info(f"[SIGNING] Generating self-signed certificate in {settings.CERTS_DIR}")
    os.makedirs(settings.CERTS_DIR, exist_ok=True)

    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, "RMS PDF Signer"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Rental Management System"),
        x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "PDF Signing Department"),
    ])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=365))
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=True,
                key_encipherment=True,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .sign(key, hashes.SHA256())
    )

    with open(cert_path, "wb") as fh:
        fh.write(cert.public_bytes(serialization.Encoding.PEM))
    with open(key_path, "wb") as fh:
        fh.write(key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        ))

    return cert_path, key_path


def sign_pdf(pdf_bytes: bytes, signer_name: str, signing_id: str, signer_email: str) -> bytes:
    """
    Sign the document and return the signed bytes.

    Any failure is logged and the unsigned document is returned instead, so
    the caller can still record the signature.
    """
    signed_at = datetime.now(timezone.utc)
    try:
        cert_path, key_path = ensure_certificates()
        signer = signers.SimpleSigner.load(key_path, cert_path)

        metadata = signers.PdfSignatureMetadata(
            field_name=SIGNATURE_FIELD,
            reason=SIGNATURE_REASON,
            location=settings.SIGNATURE_LOCATION,
            name=signer_name.upper(),
            contact_info=(
                f"SignID: {signing_id} | SignedBy: {signer_email} | "
                f"TimeSigned: {signed_at.isoformat()}"
            ),
        )

        timestamper = None
        if settings.TSA_URL:
            timestamper = timestamps.HTTPTimeStamper(settings.TSA_URL)

        writer = IncrementalPdfFileWriter(io.BytesIO(pdf_bytes))
        output = signers.sign_pdf(writer, metadata, signer=signer, timestamper=timestamper)
        logger.info(f"[SIGNING] PDF signed for request {signing_id} by {signer_email}")
        return output.getvalue()
    except Exception as e:
        logger.warning(f"[SIGNING] Could not sign PDF for request {signing_id}: {e}")
        return pdf_bytes
