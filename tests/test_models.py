from ebbinghaus.word import WordEntry, load_catalog
from ebbinghaus.progress import ProgressRecord
from ebbinghaus.dates import add_days, current_date, parse_date

from dataclasses import FrozenInstanceError
from datetime import date, datetime
import json
import pytest

WORDS_JSON = """
[
  {"id": 1, "word": "abandon", "phonetic": "/əˈbændən/", "pos": "v.", "meaningZh": "放弃"},
  {"id": 2, "word": "benefit", "meaningZh": "好处"}
]
"""


class TestDates:
    def test_add_days_rollover(self):
        assert add_days("2024-01-30", 4) == "2024-02-03"
        assert add_days("2024-12-29", 7) == "2025-01-05"
        assert add_days("2024-02-28", 1) == "2024-02-29"
        assert add_days("2023-02-28", 1) == "2023-03-01"
        assert add_days("2024-01-10", 0) == "2024-01-10"
        assert add_days("2024-03-01", -1) == "2024-02-29"

    def test_add_days_keeps_input_kind(self):
        assert add_days(date(2024, 1, 30), 4) == date(2024, 2, 3)
        assert isinstance(add_days("2024-01-30", 4), str)
        assert isinstance(add_days(date(2024, 1, 30), 4), date)

    def test_current_date(self):
        today = current_date()

        assert today == date.today()
        assert not isinstance(today, datetime)

    def test_parse_date(self):
        assert parse_date("2024-01-09") == date(2024, 1, 9)
        assert parse_date(date(2024, 1, 9)) == date(2024, 1, 9)
        assert parse_date(datetime(2024, 1, 9, 23, 59)) == date(2024, 1, 9)

        with pytest.raises(ValueError):
            parse_date("2024-13-01")

    def test_iso_strings_order_like_dates(self):
        days = [date(2024, 1, 9), date(2024, 1, 10), date(2024, 2, 1), date(2025, 1, 1)]

        assert sorted(day.isoformat() for day in days) == [day.isoformat() for day in days]


class TestWordEntry:
    def test_WordEntry_dict_serialize(self):
        word = WordEntry(id=1, word="abandon", phonetic="/əˈbændən/", pos="v.", meaning_zh="放弃")

        word_dict = word.to_dict()
        assert word_dict == {
            "id": 1,
            "word": "abandon",
            "phonetic": "/əˈbændən/",
            "pos": "v.",
            "meaningZh": "放弃",
        }

        assert WordEntry.from_dict(word_dict) == word

    def test_WordEntry_json_serialize(self):
        word = WordEntry(id="w-2", word="benefit", meaning_zh="好处")

        word_json = word.to_json()
        assert "好处" in word_json

        assert WordEntry.from_json(word_json) == word

    def test_optional_fields(self):
        word = WordEntry.from_dict({"id": 7, "word": "candid", "meaningZh": "坦率的"})

        assert word.phonetic is None
        assert word.pos is None

        assert WordEntry.from_dict({"id": 7, "word": "candid", "pos": "", "meaningZh": "坦率的"}).pos is None

    def test_word_is_immutable(self):
        word = WordEntry(id=1, word="abandon", meaning_zh="放弃")

        with pytest.raises(FrozenInstanceError):
            word.word = "changed"

    def test_load_catalog_from_dicts(self):
        catalog = load_catalog(json.loads(WORDS_JSON))

        assert isinstance(catalog, tuple)
        assert [word.id for word in catalog] == [1, 2]
        assert catalog[0].phonetic == "/əˈbændən/"

    def test_load_catalog_from_json_string(self):
        assert load_catalog(WORDS_JSON) == load_catalog(json.loads(WORDS_JSON))

    def test_load_catalog_from_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(WORDS_JSON, encoding="utf-8")

        assert load_catalog(path) == load_catalog(str(path))
        assert [word.word for word in load_catalog(path)] == ["abandon", "benefit"]

    def test_load_catalog_keeps_entries(self):
        word = WordEntry(id=1, word="abandon", meaning_zh="放弃")

        catalog = load_catalog([word, {"id": 2, "word": "benefit", "meaningZh": "好处"}])

        assert catalog[0] is word
        assert catalog[1].meaning_zh == "好处"

    def test_load_catalog_rejects_duplicate_ids(self):
        with pytest.raises(ValueError, match="Duplicate word ids"):
            load_catalog(
                [
                    {"id": 1, "word": "abandon", "meaningZh": "放弃"},
                    {"id": 1, "word": "benefit", "meaningZh": "好处"},
                ]
            )

    def test_load_catalog_rejects_ids_equal_as_strings(self):
        with pytest.raises(ValueError, match="Duplicate word ids"):
            load_catalog(
                [
                    {"id": 1, "word": "abandon", "meaningZh": "放弃"},
                    {"id": "1", "word": "benefit", "meaningZh": "好处"},
                ]
            )


class TestProgressRecord:
    def test_defaults(self):
        record = ProgressRecord(id=1)

        assert record.stage_index == 0
        assert record.next_review_date == date.today()

    def test_date_string_is_parsed(self):
        record = ProgressRecord(id=1, stage_index=2, next_review_date="2024-01-10")

        assert record.next_review_date == date(2024, 1, 10)

    def test_is_due(self):
        record = ProgressRecord(id=1, next_review_date=date(2024, 1, 10))

        assert record.is_due(date(2024, 1, 10))
        assert record.is_due("2024-01-11")
        assert not record.is_due(date(2024, 1, 9))

    def test_ProgressRecord_dict_serialize(self):
        record = ProgressRecord(id=3, stage_index=4, next_review_date=date(2024, 1, 5))

        record_dict = record.to_dict()
        assert record_dict == {"id": 3, "stageIndex": 4, "nextReviewDate": "2024-01-05"}

        copied_record = ProgressRecord.from_dict(record_dict)
        assert copied_record == record
        assert copied_record.to_dict() == record_dict

    def test_ProgressRecord_json_serialize(self):
        record = ProgressRecord(id="abc", stage_index=6, next_review_date=date(2025, 1, 5))

        record_json = record.to_json()
        assert json.loads(record_json)["nextReviewDate"] == "2025-01-05"

        assert ProgressRecord.from_json(record_json) == record

    def test_class___eq___methods(self):
        record = ProgressRecord(id=1, stage_index=1, next_review_date=date(2024, 1, 11))

        assert record == ProgressRecord(id=1, stage_index=1, next_review_date="2024-01-11")
        assert record != ProgressRecord(id=1, stage_index=2, next_review_date="2024-01-11")

    def test_class_repr(self):
        record = ProgressRecord(id=1)

        assert str(record) == repr(record)
