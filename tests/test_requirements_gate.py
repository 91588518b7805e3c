"""Tests for the minimum-data gate."""

from pipeline.requirements_gate import check_minimum_requirements


class TestMinimumRequirements:

    def test_met_has_no_message(self):
        result = check_minimum_requirements([1] * 5, [1] * 7)
        assert result.met is True
        assert result.photos_count == 5
        assert result.journals_count == 7
        assert result.message == ""

    def test_reports_both_shortfalls(self):
        result = check_minimum_requirements([1] * 3, [1] * 4)
        assert result.met is False
        assert result.message == "Need 2 more photos and 1 more journal entry"

    def test_reports_only_what_is_missing(self):
        result = check_minimum_requirements([1] * 5, [])
        assert result.message == "Need 5 more journal entries"

    def test_custom_thresholds(self):
        result = check_minimum_requirements([1], [1], min_photos=1, min_journals=2)
        assert result.met is False
        assert result.message == "Need 1 more journal entry"
