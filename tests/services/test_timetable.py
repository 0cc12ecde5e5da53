"""Tests for timetable day/time helpers and extracted-slot filtering."""

import pytest

from study_sns.services.timetable import (
    day_index,
    normalize_extracted,
    normalize_time,
    period_table,
    period_times,
    validate_day,
)


def test_period_times_follow_hourly_grid():
    periods = period_times("09:00")
    assert len(periods) == 12
    assert periods[0] == ("09:00", "09:50")
    assert periods[1] == ("10:00", "10:50")
    assert periods[11] == ("20:00", "20:50")


def test_period_times_respect_custom_start():
    assert period_times("8:30")[0] == ("08:30", "09:20")


def test_period_table_renders_one_line_per_period():
    lines = period_table("09:00").splitlines()
    assert len(lines) == 12
    assert lines[2] == "* Period 3: 11:00-11:50"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("9:05", "09:05"), ("09:05", "09:05"), (" 23:59 ", "23:59"), ("10:30:00", "10:30")],
)
def test_normalize_time(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize("raw", ["24:00", "9:5", "noon", "", "12:60"])
def test_normalize_time_rejects(raw):
    with pytest.raises(ValueError):
        normalize_time(raw)


def test_validate_day():
    assert validate_day("수") == "수"
    with pytest.raises(ValueError):
        validate_day("Mon")


def test_day_index_orders_monday_first():
    assert sorted(["금", "월", "수"], key=day_index) == ["월", "수", "금"]


def test_normalize_extracted_filters_and_pads():
    items = [
        {"title": " 자료구조 ", "day_of_week": "월", "start_time": "9:00", "end_time": "10:50",
         "location": " 공학관 301 "},
        {"title": "운영체제", "day_of_week": "Tue", "start_time": "10:00", "end_time": "11:00"},
        {"title": "", "day_of_week": "화", "start_time": "10:00", "end_time": "11:00"},
        {"title": "선형대수", "day_of_week": "목", "start_time": "25:00", "end_time": "26:00"},
        {"title": "영어", "day_of_week": "금", "start_time": "13:00", "end_time": "14:00",
         "confidence": 0.4, "location": ""},
        "not-a-dict",
    ]
    kept = normalize_extracted(items)
    assert kept == [
        {
            "title": "자료구조",
            "day_of_week": "월",
            "start_time": "09:00",
            "end_time": "10:50",
            "location": "공학관 301",
            "confidence": 1.0,
        },
        {
            "title": "영어",
            "day_of_week": "금",
            "start_time": "13:00",
            "end_time": "14:00",
            "location": None,
            "confidence": 0.4,
        },
    ]


def test_normalize_extracted_tolerates_non_list():
    assert normalize_extracted(None) == []
    assert normalize_extracted({"title": "x"}) == []
