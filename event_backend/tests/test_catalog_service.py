import pytest
from bson import ObjectId

from event_backend.errors import NotFound, ValidationError
from event_backend.events_service.models import build_event_fields, parse_dt, parse_price
from event_backend.events_service.service import CatalogService, build_query
from event_backend.tests.fakes import FakeCollection


@pytest.fixture
def catalog():
    return CatalogService(FakeCollection(), default_image_url="/placeholder.png")


def valid_fields(**overrides):
    fields = {"title": "T", "shortDescription": "S", "fullDescription": "F"}
    fields.update(overrides)
    return fields


def test_build_query_empty():
    assert build_query() == {}
    assert build_query(category="all") == {}


def test_build_query_search_and_category():
    query = build_query(search="a.b", category="music")
    assert query["category"] == "music"
    assert {"title": {"$regex": r"a\.b", "$options": "i"}} in query["$or"]


@pytest.mark.parametrize("value,expected", [
    (None, None),
    ("", None),
    ("12.5", 12.5),
    (" 7 ", 7.0),
    (0, 0.0),
    (3, 3.0),
])
def test_parse_price_accepts(value, expected):
    assert parse_price(value) == expected


@pytest.mark.parametrize("value", ["abc", "12abc", "NaN", "inf", True, [1], {"amount": 1}, 10 ** 400])
def test_parse_price_rejects(value):
    with pytest.raises(ValidationError):
        parse_price(value)


def test_parse_dt_variants():
    assert parse_dt("2025-05-01T10:00:00Z").isoformat() == "2025-05-01T10:00:00+00:00"
    assert parse_dt("2025-05-01").isoformat() == "2025-05-01T00:00:00+00:00"
    assert parse_dt("2025-05-01T10:00:00+02:00").utcoffset().total_seconds() == 7200
    assert parse_dt(None) is None


def test_parse_dt_accepts_extended_iso_forms():
    assert parse_dt("2025-05-01T10:00:00.1Z").microsecond == 100000
    assert parse_dt("20250501").isoformat() == "2025-05-01T00:00:00+00:00"
    assert parse_dt("2025-05-01T10:00Z").hour == 10


@pytest.mark.parametrize("value", ["tomorrow", "2025-13-01", 1714557600000])
def test_parse_dt_rejects(value):
    with pytest.raises(ValidationError):
        parse_dt(value)


def test_required_fields_checked_before_format():
    # Missing title wins over the malformed price
    with pytest.raises(ValidationError) as exc:
        build_event_fields({"price": "abc"}, require=True)
    assert exc.value.message == "All fields are required"


def test_text_fields_must_be_strings():
    with pytest.raises(ValidationError):
        build_event_fields(valid_fields(category=5), require=True)


def test_create_uses_default_image(catalog):
    event = catalog.create_event(valid_fields())
    assert event["imageUrl"] == "/placeholder.png"
    assert event["price"] is None
    assert event["date"] is None


def test_create_does_not_store_unknown_fields(catalog):
    event = catalog.create_event(valid_fields(role="admin", _id="abc"))
    assert "role" not in event
    assert ObjectId.is_valid(event["_id"])


def test_get_event_not_found(catalog):
    with pytest.raises(NotFound):
        catalog.get_event(str(ObjectId()))
    with pytest.raises(NotFound):
        catalog.get_event("zzz")


def test_list_categories_empty(catalog):
    assert catalog.list_categories() == []
