"""
Contract PDF generation.

Builds the urban housing lease ("contrato de arrendamiento de vivienda urbana")
with reportlab, plus a short fallback document used when a stored contract
file has gone missing.
"""
import io
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from rentmanager.core.config import settings
from rentmanager.core.dates import SPANISH_MONTHS, format_spanish_date

logger = logging.getLogger(__name__)

CONTRACT_TITLE = "CONTRATO DE ARRENDAMIENTO DE INMUEBLE PARA VIVIENDA URBANA"
CONTRACT_CITY = "Bogotá, D. C."
AVERAGE_DAYS_PER_MONTH = 30.44


# ==================== FILE LOCATIONS ====================

def _ensure_contracts_dir() -> str:
    os.makedirs(settings.CONTRACTS_DIR, exist_ok=True)
    return settings.CONTRACTS_DIR


def contract_path(contract_id: str) -> str:
    return os.path.join(_ensure_contracts_dir(), f"{contract_id}.pdf")


def signed_contract_path(contract_id: str) -> str:
    return os.path.join(_ensure_contracts_dir(), f"{contract_id}_signed.pdf")


def save_contract(contract_id: str, pdf_bytes: bytes) -> str:
    path = contract_path(contract_id)
    with open(path, "wb") as fh:
        fh.write(pdf_bytes)
    logger.info(f"[CONTRACT][PDF] Stored contract {contract_id} at {path}")
    return path


# ==================== SPANISH WORDING ====================

_UNITS = [
    "cero", "uno", "dos", "tres", "cuatro", "cinco", "seis", "siete", "ocho", "nueve",
    "diez", "once", "doce", "trece", "catorce", "quince", "dieciséis", "diecisiete",
    "dieciocho", "diecinueve", "veinte", "veintiuno", "veintidós", "veintitrés",
    "veinticuatro", "veinticinco", "veintiséis", "veintisiete", "veintiocho", "veintinueve",
]
_TENS = ["", "", "", "treinta", "cuarenta", "cincuenta", "sesenta", "setenta", "ochenta", "noventa"]
_HUNDREDS = [
    "", "ciento", "doscientos", "trescientos", "cuatrocientos", "quinientos",
    "seiscientos", "setecientos", "ochocientos", "novecientos",
]


def number_to_words(n: int) -> str:
    """Spanish words for 0..999 (lower case)."""
    if n < 0 or n > 999:
        return str(n)
    if n < 30:
        return _UNITS[n]
    if n < 100:
        tens, units = divmod(n, 10)
        return _TENS[tens] if units == 0 else f"{_TENS[tens]} y {_UNITS[units]}"
    if n == 100:
        return "cien"
    hundreds, rest = divmod(n, 100)
    if rest == 0:
        return _HUNDREDS[hundreds]
    return f"{_HUNDREDS[hundreds]} {number_to_words(rest)}"


def amount_in_words(amount: float) -> str:
    """
    Upper-case Spanish words for a peso amount, e.g. 1600000 -> UN MILLÓN SEISCIENTOS MIL.

    Amounts of ten million or more are returned as plain digits.
    """
    value = int(amount)
    if value == 0:
        return "CERO"
    if value > 9_999_999:
        return str(value)

    millions, remainder = divmod(value, 1_000_000)
    thousands, units = divmod(remainder, 1000)

    words = []
    if millions:
        words.append("UN MILLÓN" if millions == 1 else f"{number_to_words(millions).upper()} MILLONES")
    if thousands:
        words.append("MIL" if thousands == 1 else f"{number_to_words(thousands).upper()} MIL")
    if units:
        words.append(number_to_words(units).upper())
    return " ".join(words)


def format_money(amount: float) -> str:
    """$1,600,000.00"""
    return f"${amount:,.2f}"


def format_contract_start(value: datetime) -> str:
    """PRIMERO (1) DE MARZO DEL AÑO 2024"""
    day_words = "PRIMERO" if value.day == 1 else number_to_words(value.day).upper()
    return f"{day_words} ({value.day}) DE {SPANISH_MONTHS[value.month - 1].upper()} DEL AÑO {value.year}"


def duration_months(start_date: datetime, end_date: datetime) -> int:
    return int((end_date - start_date).days / AVERAGE_DAYS_PER_MONTH)


# ==================== CONTRACT DATA ====================

@dataclass
class ContractParty:
    full_name: str
    nit: str

    @property
    def label(self) -> str:
        return f"{self.full_name.upper()}, CC {self.nit}"


@dataclass
class ContractData:
    owner: ContractParty
    renter: ContractParty
    property_address: str
    start_date: datetime
    end_date: datetime
    monthly_rent: float
    cosigner: Optional[ContractParty] = None
    witness: Optional[ContractParty] = None
    requires_deposit: bool = False
    deposit_amount: float = 0
    deposit_text: str = ""
    additional_info: str = ""
    contract_duration: Optional[int] = None
    creation_date: Optional[datetime] = None


def _clauses(data: ContractData) -> list:
    months = data.contract_duration or duration_months(data.start_date, data.end_date)
    renter_name = data.renter.full_name.upper()
    cosigner_name = data.cosigner.full_name.upper() if data.cosigner else "NA"

    clauses = [
        ("PRIMERA. OBJETO",
         "Mediante el presente contrato el ARRENDADOR concede al ARRENDATARIO el goce del inmueble "
         "que adelante se identifica, de acuerdo con los términos y condiciones que se especifican "
         "en este documento."),
        ("SEGUNDA. DIRECCIÓN DEL INMUEBLE",
         f"El inmueble objeto de este contrato se encuentra ubicado en {data.property_address}."),
        ("TERCERA. DESTINACIÓN",
         "El ARRENDATARIO se compromete a destinar el inmueble exclusivamente para vivienda de él y "
         "de su núcleo familiar, y no podrá darle otro uso ni cederlo o subarrendarlo sin autorización "
         "escrita del ARRENDADOR."),
        ("CUARTA. PRECIO",
         f"El precio mensual del arrendamiento es la suma de {amount_in_words(data.monthly_rent)} "
         f"PESOS MONEDA LEGAL ({format_money(data.monthly_rent)}), incluida la administración, que "
         "el ARRENDATARIO pagará por anticipado dentro de los cinco primeros días de cada periodo "
         "mensual."),
        ("QUINTA. VIGENCIA",
         f"El término de duración del presente contrato es de {number_to_words(months).upper()} "
         f"({months}) MESES contados a partir del {format_contract_start(data.start_date)}."),
        ("SEXTA. PRÓRROGA",
         "Si ninguna de las partes da aviso escrito de terminación con una antelación no menor a tres "
         "meses al vencimiento del término, el contrato se entenderá prorrogado por un periodo igual."),
        ("SÉPTIMA. REAJUSTE",
         "Vencido cada periodo de doce meses el canon se reajustará en una proporción que no supere "
         "el cien por ciento del incremento del índice de precios al consumidor del año anterior."),
        ("OCTAVA. SERVICIOS PÚBLICOS",
         "El pago de los servicios públicos domiciliarios estará a cargo del ARRENDATARIO desde la "
         "fecha de entrega del inmueble hasta su restitución."),
        ("NOVENA. ENTREGA",
         "El ARRENDATARIO declara haber recibido el inmueble en buen estado, conforme al inventario "
         "que las partes firman por separado."),
        ("DÉCIMA. MEJORAS",
         "El ARRENDATARIO no podrá realizar mejoras sin autorización escrita del ARRENDADOR; las que "
         "realice quedarán a favor del inmueble sin derecho a reembolso."),
        ("DÉCIMA PRIMERA. REPARACIONES",
         "Las reparaciones locativas estarán a cargo del ARRENDATARIO y las necesarias a cargo del "
         "ARRENDADOR."),
        ("DÉCIMA SEGUNDA. RESTITUCIÓN",
         "Al terminar el contrato el ARRENDATARIO restituirá el inmueble en el mismo estado en que lo "
         "recibió, salvo el deterioro natural por el uso legítimo."),
        ("DÉCIMA TERCERA. INCUMPLIMIENTO",
         "El incumplimiento de cualquiera de las obligaciones del ARRENDATARIO dará derecho al "
         "ARRENDADOR para dar por terminado el contrato y exigir la restitución inmediata del inmueble."),
        ("DÉCIMA CUARTA. CLÁUSULA PENAL",
         "La parte que incumpla pagará a la otra, a título de pena, una suma equivalente a dos cánones "
         "mensuales vigentes al momento del incumplimiento."),
        ("DÉCIMA QUINTA. MÉRITO EJECUTIVO",
         "El presente contrato presta mérito ejecutivo para el cobro de los cánones adeudados, los "
         "servicios públicos y la cláusula penal."),
        ("DÉCIMA SEXTA. VISITAS",
         "El ARRENDATARIO permitirá la visita del ARRENDADOR o de quien éste designe, previo aviso, "
         "para verificar el estado del inmueble."),
        ("DÉCIMA SÉPTIMA. NOTIFICACIONES",
         "Las partes recibirán notificaciones en las direcciones y correos electrónicos registrados en "
         "el sistema de administración."),
        ("DÉCIMA OCTAVA. DEUDORES SOLIDARIOS",
         f"{cosigner_name} se obliga solidariamente con {renter_name} al cumplimiento de todas las "
         "obligaciones derivadas de este contrato, durante su vigencia y sus prórrogas."),
        ("DÉCIMA NOVENA. CESIÓN",
         "El ARRENDADOR podrá ceder el presente contrato, notificando por escrito al ARRENDATARIO."),
        ("VIGÉSIMA. GASTOS",
         "Los gastos que cause la elaboración del presente contrato serán asumidos por partes iguales."),
        ("VIGÉSIMA PRIMERA. ABANDONO",
         "En caso de abandono del inmueble el ARRENDADOR podrá ingresar a él en presencia de dos "
         "testigos para evitar su deterioro."),
        ("VIGÉSIMA SEGUNDA. FIRMA ELECTRÓNICA",
         "Las partes aceptan la firma electrónica de este documento con la misma validez de la firma "
         "manuscrita."),
        ("VIGÉSIMA TERCERA. DOMICILIO",
         f"Para todos los efectos legales las partes fijan como domicilio contractual la ciudad de "
         f"{CONTRACT_CITY}"),
    ]

    if data.requires_deposit:
        deposit = data.deposit_text or (
            f"El ARRENDATARIO entrega como depósito la suma de {amount_in_words(data.deposit_amount)} "
            f"PESOS MONEDA LEGAL ({format_money(data.deposit_amount)}), que será devuelta a la "
            "restitución del inmueble una vez descontadas las sumas pendientes."
        )
        clauses.append(("DEPÓSITO", deposit))

    if data.additional_info:
        clauses.append(("CLÁUSULAS ADICIONALES", data.additional_info))

    return clauses


# ==================== PDF BUILDERS ====================

def _styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ContractTitle",
            parent=styles["Heading1"],
            fontSize=12,
            alignment=TA_CENTER,
            spaceAfter=4,
        ),
        "subtitle": ParagraphStyle(
            "ContractSubtitle",
            parent=styles["Normal"],
            fontSize=11,
            alignment=TA_CENTER,
            spaceAfter=14,
        ),
        "heading": ParagraphStyle(
            "ContractHeading",
            parent=styles["Heading2"],
            fontSize=10,
            spaceBefore=10,
            spaceAfter=4,
        ),
        "body": ParagraphStyle(
            "ContractBody",
            parent=styles["BodyText"],
            fontSize=9,
            leading=12,
            alignment=TA_JUSTIFY,
            spaceAfter=6,
        ),
    }


def _info_table(rows):
    table = Table(rows, colWidths=[5.5 * cm, 11.5 * cm])
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    return table


def _signature_table(left: str, left_party: Optional[ContractParty], right: str, right_party: Optional[ContractParty]):
    def cell(party: Optional[ContractParty]):
        if party is None:
            return ["NA", "CC NA"]
        return [party.full_name.upper(), f"CC {party.nit}"]

    left_cells, right_cells = cell(left_party), cell(right_party)
    rows = [
        [left, right],
        ["", ""],
        ["_" * 30, "_" * 30],
        [left_cells[0], right_cells[0]],
        [left_cells[1], right_cells[1]],
    ]
    table = Table(rows, colWidths=[8.5 * cm, 8.5 * cm], rowHeights=[14, 30, 14, 14, 14])
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#374151")),
    ]))
    return table


def build_contract_pdf(data: ContractData) -> bytes:
    """Render the full lease contract and return the PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=CONTRACT_TITLE,
    )
    styles = _styles()
    created = data.creation_date or datetime.now(timezone.utc)

    story = [
        Paragraph(CONTRACT_TITLE, styles["title"]),
        Paragraph(data.property_address, styles["subtitle"]),
    ]

    info_rows = [
        ["LUGAR Y FECHA DEL CONTRATO:", f"{CONTRACT_CITY}, {format_spanish_date(created)}"],
        ["DIRECCION DEL INMUEBLE:", Paragraph(data.property_address, styles["body"])],
        ["ARRENDADOR:", data.owner.label],
        ["ARRENDATARIO:", data.renter.label],
        ["TESTIGO:", data.witness.label if data.witness else "NA"],
        ["CODEUDOR:", data.cosigner.label if data.cosigner else "NA"],
        ["CANON MENSUAL:", f"{format_money(data.monthly_rent)} INCLUÍDA LA ADMINISTRACIÓN"],
        ["FECHA INICIACION:", format_spanish_date(data.start_date)],
        ["FECHA TERMINACION:", format_spanish_date(data.end_date)],
    ]
    story.append(_info_table(info_rows))
    story.append(Spacer(1, 0.4 * cm))

    story.append(Paragraph("CONDICIONES GENERALES", styles["heading"]))
    for heading, text in _clauses(data):
        story.append(Paragraph(f"<b>{heading}.</b> {text}", styles["body"]))

    story.append(Spacer(1, 0.4 * cm))
    story.append(Paragraph(
        f"Para constancia se firma el presente documento en {CONTRACT_CITY}, el "
        f"{format_spanish_date(created)}.",
        styles["body"],
    ))
    story.append(Spacer(1, 0.8 * cm))
    story.append(_signature_table("ARRENDADOR", data.owner, "ARRENDATARIO", data.renter))
    story.append(Spacer(1, 0.8 * cm))
    story.append(_signature_table("TESTIGO", data.witness, "CODEUDOR SOLIDARIO", data.cosigner))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    logger.info(f"[CONTRACT][PDF] Generated contract for {data.renter.full_name} ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def build_simple_contract_pdf(contract_id: str, property_address: str, renter_name: str) -> bytes:
    """Minimal contract document used when the stored file cannot be found."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=CONTRACT_TITLE,
    )
    styles = _styles()
    story = [
        Paragraph(CONTRACT_TITLE, styles["title"]),
        Paragraph(property_address, styles["subtitle"]),
        _info_table([
            ["LUGAR Y FECHA DEL CONTRATO:", f"{CONTRACT_CITY}, {format_spanish_date(datetime.now(timezone.utc))}"],
            ["DIRECCION DEL INMUEBLE:", property_address],
            ["ARRENDATARIO:", renter_name],
            ["CONTRATO:", contract_id],
        ]),
        Spacer(1, 0.6 * cm),
        Paragraph(
            "Las condiciones generales de este contrato corresponden a las aceptadas por las partes "
            "en el documento original.",
            styles["body"],
        ),
    ]
    doc.build(story)
    logger.info(f"[CONTRACT][PDF] Generated fallback contract document for {contract_id}")
    return buffer.getvalue()
