"""Calendar arithmetic on TimeStamp values: shifting by units and measuring gaps."""

from __future__ import annotations

from .timestamp import TimeStamp, days_in_year, is_leap_year

_PER_SECOND = 100
_PER_MINUTE = _PER_SECOND * 60
_PER_HOUR = _PER_MINUTE * 60
_PER_DAY = _PER_HOUR * 24

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _wrap(stamp, year, offset):
    return TimeStamp.from_raw(year, offset, stamp.valid)


def _shift_days(year, offset, count):
    day_of_year = offset // _PER_DAY + 1
    time_of_day = offset % _PER_DAY
    if count > 0:
        target = day_of_year + count
        if target <= days_in_year(year):
            return year, offset + count * _PER_DAY
        while target > days_in_year(year):
            target -= days_in_year(year)
            year += 1
        return year, (target - 1) * _PER_DAY + time_of_day
    count = -count
    target = day_of_year - count
    if target > 0:
        return year, offset - count * _PER_DAY
    while target <= 0:
        year -= 1
        target += days_in_year(year)
    return year, (target - 1) * _PER_DAY + time_of_day


def _hour_of(offset):
    return (offset % _PER_DAY) // _PER_HOUR


def _shift_hours(year, offset, count):
    if count > 0:
        whole_days, count = divmod(count, 24)
        year, offset = _shift_days(year, offset, whole_days)
        if count + _hour_of(offset) >= 24:
            year, offset = _shift_days(year, offset, 1)
            count -= 24
        return year, offset + count * _PER_HOUR
    count = -count
    whole_days, count = divmod(count, 24)
    year, offset = _shift_days(year, offset, -whole_days)
    if _hour_of(offset) - count < 0:
        year, offset = _shift_days(year, offset, -1)
        count -= 24
    return year, offset - count * _PER_HOUR


def _shift_unit(year, offset, count, unit, base, carry):
    """Shift by ``count`` units of ``unit`` hundredths, carrying into the next unit up."""
    current = (offset % (unit * base)) // unit
    if count > 0:
        total = count + current
        if total >= base:
            carried = total // base
            year, offset = carry(year, offset, carried)
            count -= carried * base
        return year, offset + count * unit
    count = -count
    remainder = current - count
    if remainder < 0:
        carried = -(remainder // base)
        year, offset = carry(year, offset, -carried)
        count -= carried * base
    return year, offset - count * unit


def _shift_minutes(year, offset, count):
    return _shift_unit(year, offset, count, _PER_MINUTE, 60, _shift_hours)


def _shift_seconds(year, offset, count):
    return _shift_unit(year, offset, count, _PER_SECOND, 60, _shift_minutes)


def _shift_hundredths(year, offset, count):
    return _shift_unit(year, offset, count, 1, 100, _shift_seconds)


def add_years(stamp, count):
    """Shift by whole years; 29 February lands on 1 March in a common year."""
    year = stamp.year + count
    month, day = stamp.month, stamp.day
    if month == 2 and day == 29 and not is_leap_year(year):
        month, day = 3, 1
    return TimeStamp(stamp.hundredths, stamp.second, stamp.minute, stamp.hour, day, month, year)


def add_months(stamp, count):
    """Shift by whole months, clamping the day to the last day of the month.

    Month lengths are taken from the starting year's calendar.
    """
    carry_years, month_index = divmod(stamp.month - 1 + count, 12)
    year = stamp.year + carry_years
    month_days = list(_MONTH_DAYS)
    if is_leap_year(stamp.year):
        month_days[1] = 29
    day = min(stamp.day, month_days[month_index])
    return TimeStamp(
        stamp.hundredths, stamp.second, stamp.minute, stamp.hour, day, month_index + 1, year
    )


def add_days(stamp, count):
    return _wrap(stamp, *_shift_days(stamp.year, stamp.offset, count))


def add_hours(stamp, count):
    return _wrap(stamp, *_shift_hours(stamp.year, stamp.offset, count))


def add_minutes(stamp, count):
    return _wrap(stamp, *_shift_minutes(stamp.year, stamp.offset, count))


def add_seconds(stamp, count):
    return _wrap(stamp, *_shift_seconds(stamp.year, stamp.offset, count))


def add_hundredths(stamp, count):
    return _wrap(stamp, *_shift_hundredths(stamp.year, stamp.offset, count))


def _years_between(earlier, later):
    return range(earlier + 1, later)


def diff_years(first, second):
    """Years from ``second`` to ``first`` as a fraction counted in days."""
    if first == second:
        return 0.0
    if first < second:
        return -diff_years(second, first)
    if first.year == second.year:
        return (first.day_of_year - second.day_of_year) / days_in_year(first.year)
    rest_of_start = days_in_year(second.year) - second.day_of_year
    whole = len(_years_between(second.year, first.year))
    span = 365
    if is_leap_year(second.year) and second.month < 3:
        span += 1
    if is_leap_year(first.year):
        if second.month == 2:
            if second.day == 29:
                span += 1
        elif second.month > 2:
            span += 1
    return (rest_of_start + first.day_of_year) / span + whole


def diff_months(first, second):
    """Whole months from ``second`` to ``first``."""
    if first == second:
        return 0
    if first < second:
        return -diff_months(second, first)
    cursor = second
    count = 0
    while cursor <= first:
        cursor = add_months(cursor, 1)
        count += 1
    return count - 1


def diff_days(first, second):
    """Calendar days from ``second`` to ``first``, ignoring the time of day."""
    if first == second:
        return 0
    if first < second:
        return -diff_days(second, first)
    if first.year == second.year:
        return first.day_of_year - second.day_of_year
    return (
        days_in_year(second.year)
        - second.day_of_year
        + sum(days_in_year(year) for year in _years_between(second.year, first.year))
        + first.day_of_year
    )


def diff_seconds(first, second):
    """Whole seconds from ``second`` to ``first``."""
    if first == second:
        return 0
    if first < second:
        return -diff_seconds(second, first)
    if first.year == second.year:
        return (first.offset - second.offset) // _PER_SECOND
    seconds_per_day = _PER_DAY // _PER_SECOND
    return (
        days_in_year(second.year) * seconds_per_day
        - second.offset // _PER_SECOND
        + sum(
            days_in_year(year) * seconds_per_day
            for year in _years_between(second.year, first.year)
        )
        + first.offset // _PER_SECOND
    )


def diff_hundredths(first, second):
    """Hundredths of a second from ``second`` to ``first``."""
    if first == second:
        return 0
    if first < second:
        return -diff_hundredths(second, first)
    if first.year == second.year:
        return first.offset - second.offset
    return (
        days_in_year(second.year) * _PER_DAY
        - second.offset
        + sum(days_in_year(year) * _PER_DAY for year in _years_between(second.year, first.year))
        + first.offset
    )