"""
Display helpers for amounts and dates
"""
from datetime import datetime
from typing import Optional, Union


def format_naira_from_kobo(amount: Optional[int]) -> str:
    """150000 -> '₦1,500.00'"""
    kobo = int(amount or 0)
    sign = "-" if kobo < 0 else ""
    naira, rest = divmod(abs(kobo), 100)
    return f"{sign}₦{naira:,}.{rest:02d}"


def _as_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_date(value: Union[str, datetime, None]) -> str:
    """'18/10/2026' (en-NG short date)"""
    dt = _as_datetime(value)
    return dt.strftime("%d/%m/%Y") if dt else ""


def format_date_time(value: Union[str, datetime, None]) -> str:
    """'Sunday, 18 October 2026 at 02:30 PM'"""
    dt = _as_datetime(value)
    return dt.strftime("%A, %d %B %Y at %I:%M %p") if dt else ""
