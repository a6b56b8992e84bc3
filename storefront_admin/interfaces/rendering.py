"""
Thin rendering adapter: turns numbers, timestamps and statuses into display strings.

Used by the application layer to fill the display fields of the view models.
"""
import math
from datetime import datetime, tzinfo
from typing import Any, Optional

from storefront_admin.domain.coercion import to_datetime, to_number
from storefront_admin.domain.labels import MONTHS_SHORT, PLACEHOLDER, STATUS_TEXTS


def format_currency(amount: Any) -> str:
    """Rupiah without decimals, dot as thousands separator: Rp 1.500"""
    value = to_number(amount)
    # Halves round away from zero
    whole = math.floor(abs(value) + 0.5)
    sign = "-" if value < 0 and whole else ""
    grouped = f"{whole:,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_date(value: Any, tz: Optional[tzinfo] = None) -> str:
    moment: Optional[datetime] = to_datetime(value)
    if moment is None:
        return PLACEHOLDER
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    month = MONTHS_SHORT[moment.month - 1]
    return f"{moment.day} {month} {moment.year}, {moment.hour:02d}.{moment.minute:02d}"


def status_text(status: Any) -> str:
    if not status:
        return PLACEHOLDER
    return STATUS_TEXTS.get(status, str(status))


def status_class(status: Any) -> str:
    return f"status-{status or 'pending'}"


def short_id(doc_id: Any) -> str:
    return str(doc_id or "")[:8]


def or_placeholder(value: Any) -> str:
    return str(value) if value else PLACEHOLDER


