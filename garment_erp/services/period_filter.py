"""
Report Period Filter

Buckets date-stamped records into daily / weekly / monthly / yearly windows
relative to a reference date, and derives the efficiency metric shown on
production and worker reports.

Weeks are NOT ISO-8601 weeks. A date's week number is

    ceil((day_of_year + jan1_weekday) / 7)

where ``jan1_weekday`` counts Sunday as 0, so week 1 is the (possibly
partial) Sunday-to-Saturday week containing January 1st.
"""
import enum
import logging
import math
from datetime import date
from typing import Any, Optional

from garment_erp.schemas.common import to_date

logger = logging.getLogger(__name__)

# Placeholder per-record target used by the efficiency metric
PIECES_TARGET_PER_RECORD = 10


class Period(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def week_number(d: date) -> int:
    jan1 = date(d.year, 1, 1)
    jan1_weekday = (jan1.weekday() + 1) % 7  # Sunday = 0
    day_of_year = d.timetuple().tm_yday
    return math.ceil((day_of_year + jan1_weekday) / 7)


def in_period(record_date: Any, period: Period, reference: Optional[date] = None) -> bool:
    """
    True when ``record_date`` falls in the same ``period`` bucket as ``reference``
    (today when omitted). Absent or unparseable dates never match.
    """
    d = to_date(record_date)
    if d is None:
        if record_date not in (None, ""):
            logger.warning(f"Skipping record with unparseable date: {record_date!r}")
        else:
            logger.warning("Skipping record without a date")
        return False

    ref = to_date(reference) or date.today()
    period = Period(period)

    if period == Period.DAILY:
        return d == ref
    if period == Period.WEEKLY:
        return d.year == ref.year and week_number(d) == week_number(ref)
    if period == Period.MONTHLY:
        return d.year == ref.year and d.month == ref.month
    if period == Period.YEARLY:
        return d.year == ref.year
    return False


def efficiency(total_pieces: float, record_count: int) -> int:
    """Pieces as a percentage of a flat per-record target; 0 when nothing was produced."""
    if total_pieces <= 0:
        return 0
    target = max(1, record_count * PIECES_TARGET_PER_RECORD)
    return round_half_up(total_pieces / target * 100)
