"""Tests for work-history date parsing and year requirements."""

from datetime import date

import pytest

from models.schemas.resume import WorkExperience
from services.experience_dates import (
    calculate_total_experience,
    entry_months,
    extract_area_requirements,
    extract_required_years,
    parse_date,
    years_since,
)

TODAY = date(2024, 6, 15)


class TestParseDate:
    @pytest.mark.parametrize("raw,expected", [
        ("2020-03-15", (2020, 3)),
        ("2020-03", (2020, 3)),
        ("2020-03-15T00:00:00Z", (2020, 3)),
        ("03/2020", (2020, 3)),
        ("03/15/2020", (2020, 3)),
        ("March 2020", (2020, 3)),
        ("Mar. 2020", (2020, 3)),
        ("Sept, 2021", (2021, 9)),
        ("2019", (2019, 1)),
    ])
    def test_formats(self, raw, expected):
        assert parse_date(raw) == expected

    def test_present(self):
        assert parse_date("Present", TODAY) == (2024, 6)
        assert parse_date("current", TODAY) == (2024, 6)

    @pytest.mark.parametrize("raw", ["", None, "garbage", "2020-13", "13/2020", "Smarch 2020"])
    def test_unparseable(self, raw):
        assert parse_date(raw) is None


class TestDurations:
    def test_entry_months(self):
        assert entry_months("2020-01", "2021-07") == 18

    def test_missing_end_is_ongoing(self):
        assert entry_months("2023-06", None, TODAY) == 12
        assert entry_months("2023-06", "", TODAY) == 12

    def test_unparseable_or_reversed(self):
        assert entry_months("soon", "2021-01") == 0
        assert entry_months("2022-01", "2021-01") == 0

    def test_total_experience(self):
        entries = [
            WorkExperience(start_date="2018-01-01", end_date="2021-07-01"),
            WorkExperience(start_date="2021-07-01", end_date=None),
            WorkExperience(start_date="", end_date="2020-01-01"),
        ]
        # 42 + 35 months
        assert calculate_total_experience(entries, TODAY) == pytest.approx(6.4)

    def test_years_since(self):
        assert years_since("2019-06-01", TODAY) == pytest.approx(5.0)
        assert years_since("unknown", TODAY) is None


class TestRequirements:
    def test_required_years(self):
        assert extract_required_years("5+ years of experience in software") == 5
        assert extract_required_years("3 yrs experience, ideally 7 years of experience") == 7
        assert extract_required_years("No experience needed") == 0

    def test_area_requirements(self):
        jd = (
            "- 5+ years with Python and Django\n"
            "- 3 years of React experience\n"
            "- Familiarity with Docker"
        )
        assert extract_area_requirements(jd) == {"python": 5.0, "django": 5.0, "react": 3.0}

    def test_highest_mention_wins(self):
        jd = "2 years of Python. 4 years of Python and AWS."
        assert extract_area_requirements(jd) == {"python": 4.0, "aws": 4.0}

    def test_no_requirements(self):
        assert extract_area_requirements("Great team, free snacks") == {}
