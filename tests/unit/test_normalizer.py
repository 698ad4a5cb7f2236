from datetime import datetime, timezone

from catalog_api.adapters.normalizer import (
    field_map,
    first_of,
    normalize_record,
    normalize_records,
    truncated,
)


def test_first_of_skips_missing_and_empty_values():
    pick = first_of("appId", "id")

    assert pick({"appId": "com.example", "id": 1}) == "com.example"
    assert pick({"appId": "", "id": 1}) == 1
    assert pick({"id": 1}) == 1
    assert pick({}) is None


def test_truncated_cuts_text_only():
    cut = truncated("description", limit=5)

    assert cut({"description": "abcdefgh"}) == "abcde"
    assert cut({"description": None}) is None


def test_normalize_record_tags_platform_and_keeps_missing_fields():
    fields = field_map(id=("appId", "id"), title="title", score="score")

    record = normalize_record({"id": 7, "title": "Seven", "platform": "android"}, fields, "ios")

    assert record == {"id": 7, "title": "Seven", "score": None, "platform": "ios"}


def test_normalize_record_serialises_datetimes():
    fields = field_map(date="at")
    at = datetime(2024, 5, 21, 10, 30, tzinfo=timezone.utc)

    record = normalize_record({"at": at}, fields, "android")

    assert record["date"] == "2024-05-21T10:30:00+00:00"


def test_normalize_records_applies_limit_after_retrieval():
    fields = field_map(id="id")
    raws = [{"id": i} for i in range(30)]

    records = normalize_records(raws, fields, "ios", limit=20)

    assert [r["id"] for r in records] == list(range(20))
