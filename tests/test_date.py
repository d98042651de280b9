import datetime
import time

import pytest

from basekit.date import (
    JULIAN_DAY_OF_1970_01_01,
    Date,
    YearMonthDay,
    get_julian_day_number,
    get_year_month_day,
)

SAMPLE_DATES = [
    (1900, 1, 1),
    (1900, 2, 28),
    (1900, 3, 1),
    (1970, 1, 1),
    (1999, 12, 31),
    (2000, 2, 29),
    (2000, 3, 1),
    (2024, 2, 29),
    (2100, 12, 31),
    (2500, 6, 15),
]


def test_epoch_julian_day():
    assert get_julian_day_number(1970, 1, 1) == 2440588
    assert JULIAN_DAY_OF_1970_01_01 == get_julian_day_number(1970, 1, 1)


@pytest.mark.parametrize("ymd", SAMPLE_DATES)
def test_round_trip(ymd):
    jdn = get_julian_day_number(*ymd)
    assert get_year_month_day(jdn) == YearMonthDay(*ymd)


@pytest.mark.parametrize("ymd", SAMPLE_DATES)
def test_day_difference_matches_calendar(ymd):
    reference = datetime.date(1970, 1, 1)
    other = datetime.date(*ymd)
    assert get_julian_day_number(*ymd) - JULIAN_DAY_OF_1970_01_01 == (other - reference).days


def test_consecutive_days_walk_the_calendar():
    start = datetime.date(1999, 12, 25)
    jdn = get_julian_day_number(1999, 12, 25)
    for offset in range(800):
        expected = start + datetime.timedelta(days=offset)
        assert get_year_month_day(jdn + offset) == (expected.year, expected.month, expected.day)


@pytest.mark.parametrize("ymd", SAMPLE_DATES)
def test_date_accessors(ymd):
    d = Date.from_ymd(*ymd)
    assert d.valid()
    assert (d.year(), d.month(), d.day()) == ymd
    assert d.year_month_day() == ymd
    assert d.to_iso_string() == datetime.date(*ymd).isoformat()


@pytest.mark.parametrize("ymd", SAMPLE_DATES)
def test_week_day_sunday_is_zero(ymd):
    assert Date.from_ymd(*ymd).week_day() == datetime.date(*ymd).isoweekday() % 7


def test_default_date_is_invalid():
    assert Date().valid() is False
    assert Date(0) == Date()


def test_iso_string_pads_year_with_spaces():
    assert Date.from_ymd(999, 1, 2).to_iso_string() == " 999-01-02"


def test_from_tm():
    t = time.gmtime(86400 * 10000)
    expected = datetime.date(1970, 1, 1) + datetime.timedelta(days=10000)
    assert Date.from_tm(t) == Date.from_ymd(expected.year, expected.month, expected.day)


def test_ordering():
    early = Date.from_ymd(2000, 1, 1)
    late = Date.from_ymd(2000, 1, 2)
    assert early < late
    assert late.julian_day_number - early.julian_day_number == 1
    assert Date.from_ymd(2000, 1, 1) == early