"""Tests for the structured-data composer"""
import json

from review_embed.core.schema_composer import OPTIONAL_FIELDS, compose_schema, is_present
from review_embed.models.place import PlacePayload
from review_embed.models.schemas import SchemaFields


def _payload(**overrides):
    data = {
        "rating": 4.5,
        "user_ratings_total": 12,
        "reviews": [],
        "opening_hours": {
            "weekday_text": ["Monday: 9:00 AM – 5:00 PM", "Tuesday: Closed"],
        },
    }
    data.update(overrides)
    return PlacePayload.model_validate(data)


def test_always_present_keys():
    record = compose_schema(_payload(), SchemaFields(), closed_token="closed")
    assert record["@context"] == "https://schema.org"
    assert record["@type"] == "LocalBusiness"
    assert record["aggregateRating"] == {
        "@type": "AggregateRating",
        "ratingValue": 4.5,
        "reviewCount": 12,
    }


def test_caller_type_wins():
    record = compose_schema(_payload(), SchemaFields(type="Dentist"))
    assert record["@type"] == "Dentist"


def test_missing_rating_defaults_to_zero():
    record = compose_schema(PlacePayload(), SchemaFields())
    assert record["aggregateRating"]["ratingValue"] == 0
    assert record["aggregateRating"]["reviewCount"] == 0


def test_absent_optional_fields_are_absent_keys():
    """Membership, not value: no None or "" placeholders"""
    record = compose_schema(_payload(), SchemaFields(name="", url=None))
    for _, key in OPTIONAL_FIELDS:
        assert key not in record


def test_present_optional_fields_hold_exact_values():
    address = {"@type": "PostalAddress", "streetAddress": "Storgata 1", "addressLocality": "Oslo"}
    fields = SchemaFields(
        name="Tannlege Hansen",
        url="https://tannlege.example.no",
        address=address,
        telephone="+47 22 00 00 00",
        priceRange="$$",
    )
    record = compose_schema(_payload(), fields)
    assert record["name"] == "Tannlege Hansen"
    assert record["url"] == "https://tannlege.example.no"
    assert record["address"] == address
    assert record["telephone"] == "+47 22 00 00 00"
    assert record["priceRange"] == "$$"


def test_address_only_when_given():
    assert "address" not in compose_schema(_payload(), SchemaFields())
    record = compose_schema(_payload(), SchemaFields(address="Storgata 1, Oslo"))
    assert record["address"] == "Storgata 1, Oslo"


def test_hours_specification_lists_open_days_only():
    record = compose_schema(_payload(), SchemaFields(), closed_token="closed")
    assert record["openingHoursSpecification"] == [
        {
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": "Monday",
            "opens": "9:00 AM",
            "closes": "5:00 PM",
        }
    ]


def test_hours_specification_omitted_when_all_closed():
    payload = _payload(opening_hours={"weekday_text": ["Saturday: Stengt", "Sunday: stengt"]})
    record = compose_schema(payload, SchemaFields())
    assert "openingHoursSpecification" not in record


def test_hours_specification_omitted_without_opening_hours():
    record = compose_schema(_payload(opening_hours=None), SchemaFields())
    assert "openingHoursSpecification" not in record


def test_malformed_hours_line_does_not_break_schema():
    payload = _payload(opening_hours={"weekday_text": ["nonsense", "Friday: 08:00–15:30"]})
    record = compose_schema(payload, SchemaFields())
    assert [entry["dayOfWeek"] for entry in record["openingHoursSpecification"]] == ["Friday"]


def test_deterministic_and_serializable():
    fields = SchemaFields(name="Klinikk", telephone="123")
    first = compose_schema(_payload(), fields, closed_token="closed")
    second = compose_schema(_payload(), fields, closed_token="closed")
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_is_present():
    assert not is_present(None)
    assert not is_present("")
    assert not is_present({})
    assert is_present("x")
    assert is_present({"a": 1})
