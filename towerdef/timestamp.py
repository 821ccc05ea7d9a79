"""Calendar timestamps kept as hundredths of a second from the start of a year."""

from __future__ import annotations

import re
import time
from functools import total_ordering
from typing import NamedTuple

_PER_SECOND = 100
_PER_MINUTE = _PER_SECOND * 60
_PER_HOUR = _PER_MINUTE * 60
_PER_DAY = _PER_HOUR * 24

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_MONTH_ABBREVIATIONS = {
    name: number
    for number, name in enumerate(
        ("JAN", "FEB", "MAR", "APR", "MAY", "JUN",
         "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"),
        start=1,
    )
}

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_SHORT_MONTH_NAMES = tuple(name[:3] for name in _MONTH_NAMES)
_DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
_SHORT_DAY_NAMES = tuple(name[:3] for name in _DAY_NAMES)

_DEFAULT_FORMAT = "DD-MON-YYYY"
_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def is_leap_year(year):
    """Return True if ``year`` is a Gregorian leap year."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_year(year):
    """Return the number of days in ``year``."""
    return 366 if is_leap_year(year) else 365


def _month_days(year):
    days = list(_MONTH_DAYS)
    if is_leap_year(year):
        days[1] = 29
    return days


def _scan_int(text, default):
    match = _INT.match(text)
    return int(match.group(1)) if match else default


def _scan_clock(text, count):
    """Read up to ``count`` colon separated integers, stopping at the first failure."""
    values = []
    pos = 0
    for index in range(count):
        if index:
            if text[pos:pos + 1] != ":":
                break
            pos += 1
        match = _INT.match(text, pos)
        if not match:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


class _Layout(NamedTuple):
    checks: tuple
    fields: dict


_SLASH = "/\\"


def _layout(checks, **fields):
    return _Layout(tuple(checks), fields)


_DASH_DATE = ((2, "-"), (6, "-"))
_SLASH_DATE = ((2, _SLASH), (5, _SLASH))
_ISO_DATE = ((4, "-"), (7, "-"))

_LAYOUTS = {
    "DD-MON-YYYY": _layout(_DASH_DATE, day=0, mon=3, yyyy=7),
    "DD-MON-YY": _layout(_DASH_DATE, day=0, mon=3, yy=7),
    "DD/MM/YYYY": _layout(_SLASH_DATE, day=0, mm=3, yyyy=6),
    "DD/MM/YY": _layout(_SLASH_DATE, day=0, mm=3, yy=6),
    "DD-MON-YYYY hh:mm:ss.ss": _layout(
        _DASH_DATE + ((11, " "), (14, ":"), (17, ":"), (20, ".")), day=0, mon=3, yyyy=7, frac=12),
    "DD-MON-YY hh:mm:ss.ss": _layout(
        _DASH_DATE + ((9, " "), (12, ":"), (15, ":"), (18, ".")), day=0, mon=3, yy=7, frac=10),
    "DD/MM/YYYY hh:mm:ss.ss": _layout(
        _SLASH_DATE + ((10, " "), (13, ":"), (16, ":"), (19, ".")), day=0, mm=3, yyyy=6, frac=11),
    "DD/MM/YY hh:mm:ss.ss": _layout(
        _SLASH_DATE + ((8, " "), (11, ":"), (14, ":"), (17, ".")), day=0, mm=3, yy=6, frac=9),
    "DD-MON-YYYY hh:mm:ss": _layout(
        _DASH_DATE + ((11, " "), (14, ":"), (17, ":")), day=0, mon=3, yyyy=7, hms=12),
    "DD-MON-YY hh:mm:ss": _layout(
        _DASH_DATE + ((9, " "), (12, ":"), (15, ":")), day=0, mon=3, yy=7, hms=10),
    "DD/MM/YYYY hh:mm:ss": _layout(
        _SLASH_DATE + ((10, " "), (13, ":"), (16, ":")), day=0, mm=3, yyyy=6, hms=11),
    "DD/MM/YY hh:mm:ss": _layout(
        _SLASH_DATE + ((8, " "), (11, ":"), (14, ":")), day=0, mm=3, yy=6, hms=9),
    "YYYY-MM-DD": _layout(_ISO_DATE, day=8, mm=5, yyyy=0),
    "YYYY-MM-DD HH:MM": _layout(
        _ISO_DATE + ((10, " "), (13, ":")), day=8, mm=5, yyyy=0, hm=11),
    "YYYY-MM-DD HH:MM:SS": _layout(
        _ISO_DATE + ((10, " "), (13, ":"), (16, ":")), day=8, mm=5, yyyy=0, hms=11),
    "YYYY-MM-DD HH:MM:SS.SSS": _layout(
        _ISO_DATE + ((10, " "), (13, ":"), (16, ":"), (19, ".")), day=8, mm=5, yyyy=0, frac=11),
    "YYYY-MM-DDTHH:MM": _layout(
        _ISO_DATE + ((10, "T"), (13, ":")), day=8, mm=5, yyyy=0, hm=11),
    "YYYY-MM-DDTHH:MM:SS": _layout(
        _ISO_DATE + ((10, "T"), (13, ":"), (16, ":")), day=8, mm=5, yyyy=0, hms=11),
    "YYYY-MM-DDTHH:MM:SS.SSS": _layout(
        _ISO_DATE + ((10, "T"), (13, ":"), (16, ":"), (19, ".")), day=8, mm=5, yyyy=0, frac=11),
    "HH:MM": _layout(((2, ":"),), hm=0),
    "HH:MM:SS": _layout(((2, ":"), (5, ":")), hms=0),
    "HH:MM:SS.SSS": _layout(((2, ":"), (5, ":"), (8, ".")), frac=0),
    "YYYYMMDD": _layout((), day=6, mm=4, yyyy=0),
}


@total_ordering
class TimeStamp:
    """A date and time with hundredth-of-a-second resolution.

    A stamp built from out-of-range parts, or parsed from text that does not
    fit its format, is kept but reports ``valid`` as False.
    """

    __slots__ = ("_year", "_offset", "_valid")

    def __init__(self, hundredths=0, second=0, minute=0, hour=0, day=1, month=1, year=0):
        self._year = year
        self._offset = 0
        self._valid = False
        if year < 0 or not 1 <= month <= 12:
            return
        month_days = _month_days(year)
        if not 1 <= day <= month_days[month - 1]:
            return
        if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59 and 0 <= hundredths <= 99):
            return
        self._offset = (
            hundredths
            + second * _PER_SECOND
            + minute * _PER_MINUTE
            + hour * _PER_HOUR
            + (day - 1 + sum(month_days[: month - 1])) * _PER_DAY
        )
        self._valid = True

    @classmethod
    def from_raw(cls, year, offset, valid=True):
        """Build a stamp straight from a year and an offset within it."""
        stamp = cls.__new__(cls)
        stamp._year = year
        stamp._offset = offset
        stamp._valid = valid
        return stamp

    @classmethod
    def parse(cls, text, fmt=None):
        """Parse ``text`` laid out as ``fmt`` (``DD-MON-YYYY`` when not given)."""
        layout = _LAYOUTS.get(_DEFAULT_FORMAT if fmt is None else fmt)
        if layout is None:
            return cls.from_raw(0, 0, False)
        padded = text + "\0" * 32
        if any(padded[index] not in allowed for index, allowed in layout.checks):
            return cls.from_raw(0, 0, False)

        fields = layout.fields

        def part(name, width):
            start = fields[name]
            return padded[start:start + width]

        hundredths = second = minute = hour = year = 0
        day = month = 1
        if "day" in fields:
            day = _scan_int(part("day", 2), day)
        if "mm" in fields:
            month = _scan_int(part("mm", 2), month)
        if "mon" in fields:
            month = _MONTH_ABBREVIATIONS.get(part("mon", 3).upper(), month)
        if "yy" in fields:
            short = _scan_int(part("yy", 2), year)
            year = short + (2000 if short < 70 else 1900)
        if "yyyy" in fields:
            year = _scan_int(part("yyyy", 4), year)
        if "hm" in fields:
            clock = _scan_clock(part("hm", 5), 2)
            hour, minute = (clock + [hour, minute][len(clock):])[:2]
        if "hms" in fields:
            clock = _scan_clock(part("hms", 8), 3)
            hour, minute, second = (clock + [hour, minute, second][len(clock):])[:3]
        if "frac" in fields:
            clock = _scan_clock(part("frac", 8), 3)
            hour, minute, second = (clock + [hour, minute, second][len(clock):])[:3]
            start = fields["frac"] + 9
            hundredths = _scan_int(padded[start:start + 2], hundredths)
        return cls(hundredths, second, minute, hour, day, month, year)

    @classmethod
    def now(cls):
        """Return the current local time, to the second."""
        now = time.localtime()
        return cls(0, now.tm_sec, now.tm_min, now.tm_hour, now.tm_mday, now.tm_mon, now.tm_year)

    @property
    def valid(self):
        return self._valid

    @property
    def offset(self):
        """Hundredths of a second since the start of the year."""
        return self._offset

    @property
    def year(self):
        return self._year

    @property
    def month(self):
        days = self._offset // _PER_DAY
        total = 0
        for number, length in enumerate(_month_days(self._year), start=1):
            total += length
            if days + 1 <= total:
                return number
        return 12

    @property
    def day(self):
        remaining = self._offset // _PER_DAY
        for length in _month_days(self._year):
            if length >= remaining + 1:
                return remaining + 1
            remaining -= length
        return remaining + 1

    @property
    def hour(self):
        return (self._offset % _PER_DAY) // _PER_HOUR

    @property
    def minute(self):
        return (self._offset % _PER_HOUR) // _PER_MINUTE

    @property
    def second(self):
        return (self._offset % _PER_MINUTE) // _PER_SECOND

    @property
    def hundredths(self):
        return self._offset % _PER_SECOND

    @property
    def day_of_year(self):
        """Day number within the year, 1 January being 1."""
        return self._offset // _PER_DAY + 1

    @property
    def day_of_week(self):
        """Day of the week, Sunday being 0."""
        # 1 January 2007 was a Monday.
        year = self._year
        if year < 2007:
            first = 1 - sum(1 + is_leap_year(y) for y in range(year, 2007))
        else:
            first = 1 + sum(365 + is_leap_year(y) for y in range(2007, year))
        return (first + (self.day_of_year - 1) % 7) % 7

    def strftime(self, fmt):
        """Format the stamp; an invalid stamp formats as ``INVALID``."""
        if not self._valid:
            return "INVALID"
        out = []
        chars = iter(fmt)
        for char in chars:
            if char != "%":
                out.append(char)
                continue
            code = next(chars, None)
            if code is None or code == "\0":
                break
            out.append(self._directive(code))
        return "".join(out)

    def _directive(self, code):
        if code == "a":
            return _SHORT_DAY_NAMES[self.day_of_week]
        if code == "A":
            return _DAY_NAMES[self.day_of_week]
        if code == "j":
            return f"{self.day_of_year:03d}"[:3]
        if code == "w":
            return str(self.day_of_week)[:1]
        if code == "b":
            return _SHORT_MONTH_NAMES[self.month - 1]
        if code == "B":
            return _MONTH_NAMES[self.month - 1]
        if code == "H":
            return f"{self.hour:02d}"[:2]
        if code == "I":
            return f"{self.hour % 12:02d}"[:2]
        if code == "m":
            return f"{self.month:02d}"[:2]
        if code == "M":
            return f"{self.minute:02d}"[:2]
        if code == "S":
            return f"{self.second:02d}"[:2]
        if code == "Y":
            return f"{self._year:04d}"[:4]
        if code == "y":
            return f"{self._year:04d}"[2:4]
        if code == "d":
            return f"{self.day:02d}"[:2]
        if code == "t":
            return "\t"
        if code == "%":
            return "%"
        if code == "!":
            return f"{self.second:02d}"[:2] + "." + f"{self.hundredths:02d}"[:2]
        if code == "£":
            return f"{self.hundredths:02d}"[:2]
        return ""

    def __eq__(self, other):
        if not isinstance(other, TimeStamp):
            return NotImplemented
        return (self._year, self._offset) == (other._year, other._offset)

    def __lt__(self, other):
        if not isinstance(other, TimeStamp):
            return NotImplemented
        return (self._year, self._offset) < (other._year, other._offset)

    def __hash__(self):
        return hash((self._year, self._offset))

    def __repr__(self):
        if not self._valid:
            return "TimeStamp(<invalid>)"
        return (
            f"TimeStamp({self._year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.hundredths:02d})"
        )