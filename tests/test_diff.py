"""Tests for content hashing and field diffs."""

from __future__ import annotations

from ht_dashboard.services.diff import FieldDiff, diff_records, serialize_value
from ht_dashboard.services.hashing import compute_content_hash


class TestComputeContentHash:
    """Tests for compute_content_hash."""

    def test_same_record_same_digest(self):
        record = {"PlayerID": 1, "TSI": 1200, "LastMatch": {"Date": "2024-03-16 15:00:00"}}
        assert compute_content_hash(record) == compute_content_hash(dict(record))

    def test_digest_is_fixed_length_hex(self):
        digest = compute_content_hash({"a": 1})
        assert len(digest) == 64
        int(digest, 16)

    def test_value_change_changes_digest(self):
        assert compute_content_hash({"TSI": 1}) != compute_content_hash({"TSI": 2})

    def test_key_order_matters(self):
        """Equal records enumerated in a different order are not canonicalized."""
        assert compute_content_hash({"a": 1, "b": 2}) != compute_content_hash({"b": 2, "a": 1})


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_none(self):
        assert serialize_value(None) is None

    def test_string_passes_through(self):
        assert serialize_value("Pelle") == "Pelle"

    def test_numbers(self):
        assert serialize_value(7) == "7"
        assert serialize_value(7.5) == "7.5"
        assert serialize_value(7.0) == "7"

    def test_booleans(self):
        assert serialize_value(True) == "true"
        assert serialize_value(False) == "false"

    def test_nested_values_become_json(self):
        assert serialize_value({"Date": "2024-03-16", "Rating": 5}) == '{"Date":"2024-03-16","Rating":5}'
        assert serialize_value([1, 2]) == "[1,2]"


class TestDiffRecords:
    """Tests for diff_records."""

    def test_identical_records_have_no_diffs(self):
        record = {"TSI": 1000, "PlayerForm": 6}
        assert diff_records(record, dict(record)) == []

    def test_changed_field(self):
        diffs = diff_records({"TSI": 1000, "PlayerForm": 6}, {"TSI": 1100, "PlayerForm": 6})
        assert diffs == [FieldDiff(field_name="TSI", old_value="1000", new_value="1100")]

    def test_added_and_removed_fields(self):
        diffs = diff_records({"TSI": 1000, "Statement": "hi"}, {"TSI": 1000, "InjuryLevel": 1})
        assert diffs == [
            FieldDiff(field_name="Statement", old_value="hi", new_value=None),
            FieldDiff(field_name="InjuryLevel", old_value=None, new_value="1"),
        ]

    def test_old_keys_come_first(self):
        diffs = diff_records({"b": 1, "a": 1}, {"c": 1, "a": 2, "b": 2})
        assert [d.field_name for d in diffs] == ["b", "a", "c"]

    def test_nested_change_is_reported_as_json(self):
        diffs = diff_records(
            {"LastMatch": {"Date": "2024-03-09"}},
            {"LastMatch": {"Date": "2024-03-16"}},
        )
        assert diffs[0].old_value == '{"Date":"2024-03-09"}'
        assert diffs[0].new_value == '{"Date":"2024-03-16"}'

    def test_equal_serialized_forms_are_not_changes(self):
        """Comparison happens on the serialized forms."""
        assert diff_records({"TSI": 5}, {"TSI": 5.0}) == []

    def test_missing_side_treated_as_empty(self):
        assert diff_records(None, None) == []
        assert [d.field_name for d in diff_records(None, {"a": 1})] == ["a"]
