"""
Flexible date parsing for request bodies and query strings.

Accepts RFC 3339 timestamps and a handful of plain date layouts; results are
always timezone aware (UTC when the input carries no offset).
"""
from datetime import datetime, timezone
from typing import Optional

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%d %B %Y",
)


def parse_flexible_datetime(value) -> Optional[datetime]:
    """
    Parse a date string in RFC 3339 or one of the supported date layouts.

    Returns None for empty values and raises ValueError when nothing matches.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)

    text = str(value).strip()
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            raise ValueError(f"could not parse time string '{text}' in any of the supported formats")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_query_date(value: str) -> datetime:
    """Strict variant used for query parameters: RFC 3339 or YYYY-MM-DD only."""
    text = value.strip()
    if len(text) == 10:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    elif "T" in text:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid date format: {value}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_rfc3339(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


SPANISH_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


def format_spanish_date(value: datetime) -> str:
    """6 de junio de 2022"""
    return f"{value.day} de {SPANISH_MONTHS[value.month - 1]} de {value.year}"
