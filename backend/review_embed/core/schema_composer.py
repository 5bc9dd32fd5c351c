"""
Structured Data Composer

Builds the schema.org record (JSON-LD) for a place: aggregate rating, the
caller's optional business fields and the weekly opening hours.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from review_embed.core.config import settings
from review_embed.core.hours_parser import parse_weekly_hours
from review_embed.models.place import PlacePayload
from review_embed.models.schemas import DaySchedule, SchemaFields

SCHEMA_CONTEXT = "https://schema.org"

# (attribute on SchemaFields, key in the record), in output order
OPTIONAL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("url", "url"),
    ("address", "address"),
    ("telephone", "telephone"),
    ("price_range", "priceRange"),
)


def is_present(value: Any) -> bool:
    """None and empty values count as absent."""
    if value is None:
        return False
    if isinstance(value, (str, dict, list)):
        return len(value) > 0
    return True


def aggregate_rating(payload: PlacePayload) -> Dict[str, Any]:
    return {
        "@type": "AggregateRating",
        "ratingValue": payload.rating or 0,
        "reviewCount": payload.user_ratings_total or 0,
    }


def opening_hours_specification(schedules: Sequence[DaySchedule]) -> List[Dict[str, str]]:
    """One specification entry per open day; closed days are left out."""
    return [
        {
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": schedule.day_of_week,
            "opens": schedule.opens,
            "closes": schedule.closes,
        }
        for schedule in schedules
        if not schedule.is_closed
    ]


def compose_schema(
    payload: PlacePayload,
    fields: Optional[SchemaFields] = None,
    closed_token: Optional[str] = None,
    schedules: Optional[Sequence[DaySchedule]] = None,
) -> Dict[str, Any]:
    """
    Compose the structured-data record for a place.

    Optional fields only appear when present; the opening hours block only
    appears when at least one day is open. Already parsed `schedules` are used
    as given; otherwise the payload's weekday text is parsed here.
    """
    fields = fields or SchemaFields()

    record: Dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": fields.type or settings.schema_default_type,
    }

    for attribute, key in OPTIONAL_FIELDS:
        value = getattr(fields, attribute)
        if is_present(value):
            record[key] = value

    record["aggregateRating"] = aggregate_rating(payload)

    if schedules is None:
        schedules = parse_weekly_hours(payload.weekday_text, closed_token)
    specification = opening_hours_specification(schedules)
    if specification:
        record["openingHoursSpecification"] = specification

    return record
