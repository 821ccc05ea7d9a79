"""Running SQL text against SQLite and reading the rows back as text."""

from __future__ import annotations

import re
import sqlite3

from .timestamp import TimeStamp

_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("JAN", "FEB", "MAR", "APR", "MAY", "JUN",
         "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"),
        start=1,
    )
}

_STORED_FORMATS = (
    "YYYY-MM-DD",
    "YYYY-MM-DD HH:MM",
    "YYYY-MM-DD HH:MM:SS",
    "YYYY-MM-DD HH:MM:SS.SSS",
    "YYYY-MM-DDTHH:MM",
    "YYYY-MM-DDTHH:MM:SS",
    "YYYY-MM-DDTHH:MM:SS.SSS",
    "HH:MM",
    "HH:MM:SS",
    "HH:MM:SS.SSS",
    "YYYYMMDD",
)


class DatabaseError(Exception):
    """A query could not be run."""


def _leading_int(text):
    match = _INT.match(text)
    return int(match.group(1)) if match else None


def _as_text(value):
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return str(value)


def _statements(query):
    start = 0
    for index, char in enumerate(query):
        if char == ";" and sqlite3.complete_statement(query[start:index + 1]):
            statement = query[start:index + 1]
            if statement.strip(" \t\r\n;"):
                yield statement
            start = index + 1
    tail = query[start:]
    if tail.strip():
        yield tail


class ResultSet:
    """Column names and text rows collected from a query."""

    def __init__(self, columns=(), rows=()):
        self.columns = tuple(columns)
        self.rows = tuple(tuple(row) for row in rows)

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def column_name(self, index):
        if not 0 <= index < len(self.columns):
            raise IndexError(f"no column {index}")
        return self.columns[index]

    def text(self, row, col):
        """Return a value as text; NULL reads as an empty string."""
        return self.rows[row][col]

    def integer(self, row, col):
        """Return a value as an integer; NULL reads as 0."""
        value = self.text(row, col)
        if value == "":
            return 0
        number = _leading_int(value)
        if number is None:
            raise ValueError(f"not an integer: {value!r}")
        return number

    def timestamp(self, row, col):
        """Return a value as a TimeStamp, or None for the text ``NULL``."""
        value = self.text(row, col)
        if value == "NULL":
            return None
        for fmt in _STORED_FORMATS:
            if len(fmt) == len(value):
                stamp = TimeStamp.parse(value, fmt)
                if stamp.valid:
                    return stamp
        raise ValueError(f"not a timestamp: {value!r}")

    def blob(self, row, col):
        return self.text(row, col)

    def __repr__(self):
        return f"ResultSet(columns={self.columns!r}, rows={len(self.rows)})"


def execute(connection, query):
    """Run every statement in ``query`` and gather all rows they return.

    Each statement is committed as it completes unless the connection was
    already inside a transaction. Raises DatabaseError on failure.
    """
    was_in_transaction = connection.in_transaction
    columns = ()
    rows = []
    for statement in _statements(query):
        try:
            cursor = connection.execute(statement)
            fetched = cursor.fetchall()
        except sqlite3.Error as error:
            if not was_in_transaction and connection.in_transaction:
                connection.rollback()
            raise DatabaseError(str(error)) from error
        if fetched and not columns:
            columns = tuple(description[0] for description in cursor.description)
        rows.extend(tuple(_as_text(value) for value in row) for row in fetched)
        if not was_in_transaction and connection.in_transaction:
            connection.commit()
    return ResultSet(columns, rows)


def parse_user_date(text):
    """Parse a ``DD-MON-YYYY`` date; raise ValueError if it is not valid."""
    stamp = TimeStamp.parse(text, "DD-MON-YYYY")
    if not stamp.valid:
        raise ValueError(f"not a DD-MON-YYYY date: {text!r}")
    return stamp


def decode_user_date(text):
    """Decode a ``DD-MON-YYYY`` date into ``(year, month, day)``.

    The day must be 1..31 and the year 1900..2500; raises ValueError otherwise.
    """
    padded = text + "\0" * 11
    if padded[2] != "-" or padded[6] != "-":
        raise ValueError(f"not a DD-MON-YYYY date: {text!r}")
    day = _leading_int(padded[0:2]) or 0
    year = _leading_int(padded[7:11]) or 0
    month = _MONTHS.get(padded[3:6].upper(), 0)
    if not (1 <= day <= 31 and 1 <= month <= 12 and 1900 <= year <= 2500):
        raise ValueError(f"date out of range: {text!r}")
    return year, month, day