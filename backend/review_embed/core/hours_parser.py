"""
Opening Hours Parser

Turns weekday hour lines as served by the place details endpoint
("Monday: 9:00 AM – 5:00 PM", "søndag: Stengt") into DaySchedule records.
"""

from typing import List, Optional, Sequence
import logging

from review_embed.core.config import settings
from review_embed.models.errors import HoursParseError
from review_embed.models.schemas import DaySchedule

logger = logging.getLogger(__name__)

DAY_DELIMITER = ": "
RANGE_SEPARATOR = " - "
# en dash, em dash
DASHES = ("–", "—")


def capitalize_day(day: str) -> str:
    """Upper-case the first character only; the rest is kept as-is."""
    return day[:1].upper() + day[1:]


def normalize_range(hours_text: str) -> str:
    """Replace localized range dashes with the canonical " - " separator."""
    for dash in DASHES:
        hours_text = hours_text.replace(dash, RANGE_SEPARATOR)
    return hours_text


def parse_hours_line(line: str, closed_token: Optional[str] = None) -> DaySchedule:
    """
    Parse a single "<Day>: <hours-or-closed-marker>" line.

    Only the first ": " separates the day from the hours, since the hours
    themselves contain colons.

    Raises:
        HoursParseError: if the line has no day delimiter or no usable range
    """
    token = (closed_token if closed_token is not None else settings.closed_token).strip().lower()

    day, delimiter, hours_text = line.partition(DAY_DELIMITER)
    if not delimiter:
        raise HoursParseError(line, "missing day delimiter")

    day_of_week = capitalize_day(day)
    if not day_of_week.strip():
        raise HoursParseError(line, "missing day name")

    if hours_text.strip().lower() == token:
        return DaySchedule(day_of_week=day_of_week, is_closed=True)

    opens, separator, closes = normalize_range(hours_text).partition(RANGE_SEPARATOR)
    opens, closes = opens.strip(), closes.strip()
    if not separator:
        raise HoursParseError(line, "missing range separator")
    if not opens or not closes:
        raise HoursParseError(line, "incomplete time range")

    return DaySchedule(day_of_week=day_of_week, opens=opens, closes=closes)


def parse_weekly_hours(weekday_text: Optional[Sequence[str]], closed_token: Optional[str] = None) -> List[DaySchedule]:
    """
    Parse weekday hour lines in input order.

    A line that cannot be parsed is logged and skipped; the remaining lines
    are still returned. None or an empty sequence yields an empty list.
    """
    schedules: List[DaySchedule] = []
    for line in weekday_text or []:
        try:
            schedules.append(parse_hours_line(line, closed_token))
        except HoursParseError as e:
            logger.warning(f"[HOURS] Skipping line: {e.message}")
    return schedules
