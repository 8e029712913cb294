import pytest

from jalali_dates.api.digits import to_latin_digits, to_persian_digits


def test_digits_convert_between_latin_and_persian():
    assert to_persian_digits("123") == "۱۲۳"
    assert to_latin_digits("۱۲۳") == "123"


def test_arabic_indic_digits_fold_to_latin():
    assert to_latin_digits("٢٠٢٤") == "2024"


@pytest.mark.parametrize("value", ["0123456789", "1403/01/01", "2024-03-20 10:15", ""])
def test_digit_mapping_is_reversible(value):
    assert to_latin_digits(to_persian_digits(value)) == value


def test_non_digit_characters_are_untouched():
    assert to_persian_digits("IR-12 abc/") == "IR-۱۲ abc/"
    assert to_latin_digits("تاریخ ۱۴۰۳") == "تاریخ 1403"


def test_none_passes_through():
    assert to_latin_digits(None) is None
    assert to_persian_digits(None) is None
