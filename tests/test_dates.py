import logging
from datetime import date, datetime

import pytest

from jalali_dates.api.dates import (
    Conversion,
    convert_to_gregorian,
    convert_to_jalali,
    is_gregorian_format,
    is_jalali_format,
    normalize_gregorian,
    normalize_jalali_input,
    to_gregorian,
    to_jalali,
    to_jalali_display,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-20", "1403/01/01"),
        ("2024/03/20", "1403/01/01"),
        ("2024-03-20 10:15:00", "1403/01/01"),
        ("۲۰۲۴-۰۳-۲۰", "1403/01/01"),
        (date(1979, 2, 11), "1357/11/22"),
        (datetime(2025, 3, 20, 23, 59), "1403/12/30"),
    ],
)
def test_to_jalali_formats_gregorian_input(value, expected):
    assert to_jalali(value, "fa") == expected


def test_to_jalali_passes_through_for_other_locales():
    assert to_jalali("2024-03-20", "en") == "2024-03-20"
    assert to_jalali("anything at all", "de") == "anything at all"
    assert to_jalali(date(2024, 3, 20), "en") == "2024-03-20"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_input_gives_none(value):
    assert to_jalali(value, "fa") is None
    assert to_jalali_display(value, "fa") is None
    assert to_gregorian(value, "fa") is None
    assert normalize_gregorian(value) is None


def test_to_jalali_returns_unparseable_input_unchanged(caplog):
    caplog.set_level(logging.DEBUG, logger="jalali_dates.api.dates")
    assert to_jalali("garbage", "fa") == "garbage"
    assert "garbage" in caplog.text


def test_to_jalali_display_uses_persian_digits():
    assert to_jalali_display("2024-03-20", "fa") == "۱۴۰۳/۰۱/۰۱"
    assert to_jalali_display("garbage", "fa") == "garbage"
    assert to_jalali_display("2024-03-20", "en") == "2024-03-20"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1403/01/01", "2024-03-20"),
        ("1403-01-01", "2024-03-20"),
        ("۱۴۰۳/۰۱/۰۱", "2024-03-20"),
        ("۱۴۰۳-۱-۱", "2024-03-20"),
        (" 1403/12/30 08:00 ", "2025-03-20"),
        ("1357/11/22", "1979-02-11"),
    ],
)
def test_to_gregorian_accepts_messy_jalali_input(value, expected):
    assert to_gregorian(value, "fa") == expected


@pytest.mark.parametrize(
    "value",
    ["not-a-date", "1402/12/30", "1403/13/01", "1403/07/31", "0000/01/01", "14030101"],
)
def test_to_gregorian_returns_invalid_input_unchanged(value):
    assert to_gregorian(value, "fa") == value


def test_to_gregorian_passes_through_for_other_locales():
    assert to_gregorian("1403/01/01", "en") == "1403/01/01"


def test_to_gregorian_keeps_date_objects_gregorian():
    assert to_gregorian(date(2024, 3, 20), "fa") == "2024-03-20"


def test_round_trip_through_presentation_helpers():
    assert to_gregorian(to_jalali("2026-02-11", "fa"), "fa") == "2026-02-11"
    assert to_jalali(to_gregorian("1404/01/01", "fa"), "fa") == "1404/01/01"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-20 10:15:00", "2024-03-20"),
        ("2024-03-20T10:15:00+03:30", "2024-03-20"),
        (datetime(2024, 3, 20, 10, 15), "2024-03-20"),
        ("garbage value", "garbage"),
        ("20", "20"),
        ("10:15", "10:15"),
        ("5pm", "5pm"),
        ("March 20", "March"),
    ],
)
def test_normalize_gregorian(value, expected):
    assert normalize_gregorian(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1400/3/8", "1400/03/08"),
        (" 1400-3-8 12:00", "1400/03/08"),
        ("1400/03/08", "1400/03/08"),
        ("hello-world", "hello/world"),
    ],
)
def test_normalize_jalali_input(value, expected):
    assert normalize_jalali_input(value) == expected


def test_format_checks():
    assert is_jalali_format("1403/01/01")
    assert not is_jalali_format("1403-01-01")
    assert is_gregorian_format("2024-03-20")
    assert not is_gregorian_format("2024/03/20")
    assert not is_gregorian_format(None)


def test_conversion_result_tags_outcome():
    converted = Conversion("1403/01/01")
    skipped = Conversion.passthrough("not in YYYY/MM/DD shape")
    assert converted.converted
    assert converted.resolve("2024-03-20") == "1403/01/01"
    assert not skipped.converted
    assert skipped.resolve("garbage") == "garbage"


def test_endpoint_wrappers():
    assert convert_to_jalali("2024-03-20", "fa") == "1403/01/01"
    assert convert_to_jalali("2024-03-20", "fa", display="1") == "۱۴۰۳/۰۱/۰۱"
    assert convert_to_jalali("2024-03-20", "fa", display="0") == "1403/01/01"
    assert convert_to_gregorian("1403/01/01", "fa") == "2024-03-20"


@pytest.mark.parametrize("value", ["20", "5pm", "10:15", "March 2024", "20/03/2024"])
def test_partial_dates_are_not_completed_from_today(value):
    assert to_jalali(value, "fa") == value
    assert to_jalali_display(value, "fa") == value
