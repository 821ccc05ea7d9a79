import datetime

import pytest

from towerdef.timestamp import TimeStamp, days_in_year, is_leap_year


@pytest.mark.parametrize(
    "year, leap",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2400, True)],
)
def test_is_leap_year(year, leap):
    assert is_leap_year(year) is leap
    assert days_in_year(year) == (366 if leap else 365)


@pytest.mark.parametrize(
    "parts",
    [
        (0, 0, 0, 0, 1, 1, 2020),
        (99, 59, 59, 23, 31, 12, 2021),
        (12, 34, 56, 7, 29, 2, 2024),
        (50, 1, 2, 3, 15, 7, 1999),
    ],
)
def test_components_round_trip(parts):
    stamp = TimeStamp(*parts)
    assert stamp.valid
    got = (stamp.hundredths, stamp.second, stamp.minute, stamp.hour,
           stamp.day, stamp.month, stamp.year)
    assert got == parts


@pytest.mark.parametrize(
    "parts",
    [
        (0, 0, 0, 0, 30, 2, 2024),
        (0, 0, 0, 0, 29, 2, 2023),
        (0, 0, 0, 0, 1, 13, 2020),
        (0, 0, 0, 0, 1, 0, 2020),
        (0, 0, 0, 0, 0, 1, 2020),
        (0, 0, 0, 24, 1, 1, 2020),
        (0, 0, 60, 0, 1, 1, 2020),
        (0, 60, 0, 0, 1, 1, 2020),
        (100, 0, 0, 0, 1, 1, 2020),
        (0, 0, -1, 0, 1, 1, 2020),
    ],
)
def test_out_of_range_parts_are_invalid(parts):
    assert TimeStamp(*parts).valid is False


@pytest.mark.parametrize(
    "text, fmt, expected",
    [
        ("05-MAR-2021", "DD-MON-YYYY", (2021, 3, 5, 0, 0, 0, 0)),
        ("05-mar-2021", None, (2021, 3, 5, 0, 0, 0, 0)),
        ("05/03/2021", "DD/MM/YYYY", (2021, 3, 5, 0, 0, 0, 0)),
        ("05\\03\\2021", "DD/MM/YYYY", (2021, 3, 5, 0, 0, 0, 0)),
        ("2021-03-05", "YYYY-MM-DD", (2021, 3, 5, 0, 0, 0, 0)),
        ("2021-03-05 10:20", "YYYY-MM-DD HH:MM", (2021, 3, 5, 10, 20, 0, 0)),
        ("2021-03-05 10:20:30", "YYYY-MM-DD HH:MM:SS", (2021, 3, 5, 10, 20, 30, 0)),
        ("2021-03-05T10:20:30", "YYYY-MM-DDTHH:MM:SS", (2021, 3, 5, 10, 20, 30, 0)),
        ("05-MAR-2021 10:20:30", "DD-MON-YYYY hh:mm:ss", (2021, 3, 5, 10, 20, 30, 0)),
        ("05/03/2021 10:20:30.12", "DD/MM/YYYY hh:mm:ss.ss", (2021, 3, 5, 10, 20, 30, 12)),
        ("05-MAR-2021 10:20:30.12", "DD-MON-YYYY hh:mm:ss.ss", (2021, 3, 5, 10, 20, 30, 12)),
        ("20210305", "YYYYMMDD", (2021, 3, 5, 0, 0, 0, 0)),
        ("10:20", "HH:MM", (0, 1, 1, 10, 20, 0, 0)),
        ("10:20:30", "HH:MM:SS", (0, 1, 1, 10, 20, 30, 0)),
    ],
)
def test_parse_formats(text, fmt, expected):
    stamp = TimeStamp.parse(text, fmt)
    assert stamp.valid
    got = (stamp.year, stamp.month, stamp.day, stamp.hour,
           stamp.minute, stamp.second, stamp.hundredths)
    assert got == expected


def test_parse_two_digit_year_pivot():
    assert TimeStamp.parse("05/03/69", "DD/MM/YY").year == 2069
    assert TimeStamp.parse("05/03/70", "DD/MM/YY").year == 1970


def test_parse_milliseconds_drop_lowest_digit():
    stamp = TimeStamp.parse("2021-03-05 10:20:30.456", "YYYY-MM-DD HH:MM:SS.SSS")
    assert stamp.valid
    assert stamp.hundredths == 45


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("05-MAR-2021", "NOT A FORMAT"),
        ("05/MAR/2021", "DD-MON-YYYY"),
        ("2021/03/05", "YYYY-MM-DD"),
        ("31/02/2021", "DD/MM/YYYY"),
        ("2021-03-05 10-20", "YYYY-MM-DD HH:MM"),
        ("", "YYYY-MM-DD"),
    ],
)
def test_parse_rejects_mismatched_text(text, fmt):
    assert TimeStamp.parse(text, fmt).valid is False


@pytest.mark.parametrize(
    "date",
    [
        datetime.date(2007, 1, 1),
        datetime.date(2006, 12, 31),
        datetime.date(2000, 2, 29),
        datetime.date(1970, 1, 1),
        datetime.date(1900, 3, 1),
        datetime.date(1600, 1, 1),
        datetime.date(2024, 12, 31),
        datetime.date(2031, 7, 15),
        datetime.date(1, 1, 1),
    ],
)
def test_calendar_matches_stdlib(date):
    stamp = TimeStamp(0, 0, 0, 0, date.day, date.month, date.year)
    assert stamp.day_of_week == date.isoweekday() % 7
    assert stamp.day_of_year == date.timetuple().tm_yday
    assert int(stamp.strftime("%j")) == date.timetuple().tm_yday


def test_first_of_january_2007_is_monday():
    stamp = TimeStamp(0, 0, 0, 0, 1, 1, 2007)
    assert stamp.day_of_week == 1
    assert stamp.strftime("%A") == "Monday"
    assert stamp.strftime("%a") == stamp.strftime("%A")[:3]
    assert stamp.strftime("%w") == str(stamp.day_of_week)


def test_strftime_month_names():
    stamp = TimeStamp.parse("05-MAR-2021")
    assert stamp.strftime("%B") == "March"
    assert stamp.strftime("%b") == "Mar"


def test_strftime_round_trip():
    stamp = TimeStamp(0, 30, 20, 10, 5, 3, 2021)
    text = stamp.strftime("%Y-%m-%d %H:%M:%S")
    assert TimeStamp.parse(text, "YYYY-MM-DD HH:MM:SS") == stamp


def test_strftime_round_trip_with_hundredths():
    stamp = TimeStamp(42, 30, 20, 10, 5, 3, 2021)
    text = stamp.strftime("%d/%m/%Y %H:%M:%!")
    parsed = TimeStamp.parse(text, "DD/MM/YYYY hh:mm:ss.ss")
    assert parsed == stamp
    assert stamp.strftime("%£") == text[-2:]


def test_strftime_literals_and_short_year():
    stamp = TimeStamp(0, 0, 0, 0, 5, 3, 2021)
    assert stamp.strftime("%%") == "%"
    assert stamp.strftime("a%tb") == "a\tb"
    assert stamp.strftime("%y") == "21"
    assert stamp.strftime("done%") == "done"


def test_strftime_invalid():
    assert TimeStamp(0, 0, 0, 0, 1, 13, 2021).strftime("%Y") == "INVALID"


def test_ordering_and_hash():
    first = TimeStamp(0, 0, 0, 0, 1, 1, 2020)
    second = TimeStamp(0, 0, 0, 0, 2, 1, 2020)
    third = TimeStamp(0, 0, 0, 0, 1, 1, 2021)
    assert first < second < third
    assert third > first
    assert first <= TimeStamp(0, 0, 0, 0, 1, 1, 2020)
    assert sorted([third, first, second]) == [first, second, third]
    assert first == TimeStamp(0, 0, 0, 0, 1, 1, 2020)
    assert hash(first) == hash(TimeStamp(0, 0, 0, 0, 1, 1, 2020))
    assert first != second


def test_from_raw_round_trip():
    stamp = TimeStamp(7, 8, 9, 10, 11, 12, 2013)
    copy = TimeStamp.from_raw(stamp.year, stamp.offset, stamp.valid)
    assert copy == stamp
    assert copy.valid is True
    assert copy.month == 12 and copy.day == 11


def test_now_is_current_year():
    stamp = TimeStamp.now()
    assert stamp.valid
    assert stamp.year == datetime.datetime.now().year
    assert stamp.hundredths == 0