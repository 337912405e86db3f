"""Partial timestamps used as slide start and end dates.

A token is textually ``[-]YYYY[-MM[-DDThh[:mm[:ss]]]]``. Years are plain
integers of any magnitude so cosmological dates (``-13800000000``) work the
same way as calendar ones. No calendar arithmetic is involved: ordering is
done field by field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from timeline_exhibit.errors import HierarchyViolation, InvalidDateComponent


_CANONICAL_RE = re.compile(
    r"^(-?)(\d+)(?:-(\d{2})(?:-(\d{2})(?:T(\d{2})(?::(\d{2})(?::(\d{2}))?)?)?)?)?$"
)
# Loose shape used for free-form values (resource properties).
_LOOSE_RE = re.compile(r"^(\d+)-?(\d*)-?(\d*)T?(\d*):?(\d*):?(.*)$")
_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{1,2})(?::(\d{1,2}))?)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class DateToken:
    """A normalized partial timestamp.

    Finer components are only set when every coarser one is. Components
    below the year are kept as text so values pulled from free-form strings
    keep their original shape.
    """
    negative: bool
    year: int
    month: str | None = None
    day: str | None = None
    hour: str | None = None
    minute: str | None = None
    second: str | None = None

    def __str__(self) -> str:
        text = f"{'-' if self.negative else ''}{self.year}"
        if self.month is None:
            return text
        text += f"-{self.month}"
        if self.day is None:
            return text
        text += f"-{self.day}"
        if self.hour is None:
            return text
        text += f"T{self.hour}"
        if self.minute is None:
            return text
        text += f":{self.minute}"
        if self.second is None:
            return text
        return text + f":{self.second}"

    @property
    def components(self) -> tuple[str | None, ...]:
        """Sub-year components, coarsest first."""
        return (self.month, self.day, self.hour, self.minute, self.second)

    @classmethod
    def parse(cls, text: str | None) -> DateToken | None:
        """Parse canonical token text, or return None if it is not canonical."""
        if not text:
            return None
        m = _CANONICAL_RE.match(text.strip())
        if not m:
            return None
        sign, year, *parts = m.groups()
        return cls(sign == "-", int(year), *parts)

    @classmethod
    def from_text(cls, text: str) -> DateToken:
        """Leniently read any date-ish string.

        The sign comes from a leading minus, the year from the leading digits
        (0 when there are none) and the remaining positions are taken as they
        appear, without padding. Used for effective dates read from resource
        properties, which are not guaranteed to be canonical.
        """
        text = (text or "").strip()
        negative = text.startswith("-")
        if negative:
            text = text[1:]
        m = _LOOSE_RE.match(text)
        if not m:
            year_match = re.match(r"^\d+", text)
            year = int(year_match.group()) if year_match else 0
            return cls(negative, year)
        year, *parts = m.groups()
        # Keep the hierarchy: stop at the first empty position.
        kept: list[str | None] = []
        for part in parts:
            if not part:
                break
            kept.append(part)
        kept += [None] * (5 - len(kept))
        return cls(negative, int(year), *kept)


def _is_empty(value) -> bool:
    return value is None or not str(value).strip()


def _integer(value, component: str, label: str) -> int:
    text = str(value).strip()
    # Spreadsheet decoders may hand over "5.0" for numeric cells.
    if text.endswith(".0"):
        text = text[:-2]
    if not _INTEGER_RE.match(text):
        raise InvalidDateComponent(component, str(value).strip(), label)
    return int(text)


def parse_partial_date(
    year=None,
    month=None,
    day=None,
    time=None,
    *,
    label: str = "start",
) -> DateToken | None:
    """Compose a token from hierarchical components.

    Args:
        year: Year, possibly negative, of any magnitude
        month: Month number
        day: Day number
        time: Time as ``h[h][:mm[:ss]]``
        label: "start" or "end", used in error messages

    Returns:
        The token, or None when every component is empty.

    Raises:
        HierarchyViolation: A component is set while its parent is empty
        InvalidDateComponent: A component is not a valid number or time
    """
    chain = [("year", year), ("month", month), ("day", day), ("time", time)]
    for (parent, parent_value), (component, value) in zip(chain, chain[1:]):
        if _is_empty(parent_value) and not _is_empty(value):
            raise HierarchyViolation(component, str(value).strip(), parent, label)

    if _is_empty(year):
        return None

    year_text = str(year).strip()
    year_number = _integer(year_text, "year", label)
    negative = year_text.startswith("-")

    month_text = day_text = hour = minute = second = None
    if not _is_empty(month):
        month_text = f"{_integer(month, 'month', label):02d}"
        if not _is_empty(day):
            day_text = f"{_integer(day, 'day', label):02d}"
            if not _is_empty(time):
                m = _TIME_RE.match(str(time).strip())
                if not m:
                    raise InvalidDateComponent("time", str(time).strip(), label)
                h, mi, s = m.groups()
                hour = f"{int(h):02d}"
                minute = f"{int(mi):02d}" if mi is not None else None
                second = f"{int(s):02d}" if s is not None else None

    return DateToken(
        negative=negative,
        year=abs(year_number),
        month=month_text,
        day=day_text,
        hour=hour,
        minute=minute,
        second=second,
    )


_TEXT_DATE_RE = re.compile(r"^([+-]?\d+)(?:-(\d{1,2})(?:-(\d{1,2})(?:T(.+))?)?)?$")


def parse_date_text(text: str | None, *, label: str = "start") -> DateToken | None:
    """Parse a hand-entered date such as ``1900-5-3`` or ``-500``.

    Canonical text is returned as is; other shapes are split and rebuilt
    through parse_partial_date so the padding is normalized.

    Raises:
        InvalidDateComponent: The text is not a partial date
    """
    if _is_empty(text):
        return None
    text = str(text).strip()
    token = DateToken.parse(text)
    if token is not None:
        return token
    m = _TEXT_DATE_RE.match(text)
    if not m:
        raise InvalidDateComponent("date", text, label)
    return parse_partial_date(*m.groups(), label=label)


def _compare_component(a: str, b: str) -> int:
    if a.isdigit() and b.isdigit():
        a_value, b_value = int(a), int(b)
        if a_value == b_value:
            return 0
        return -1 if a_value < b_value else 1
    if a == b:
        return 0
    return -1 if a < b else 1


def compare_tokens(a: DateToken, b: DateToken) -> int:
    """Order two tokens.

    Negative years come first, and among negative years the larger magnitude
    comes first. Only the year is mirrored for negative dates: inside any
    year January still precedes February. A missing component sorts before a
    present one; when both are missing at the same position the tokens are
    equal.

    Returns:
        -1, 0 or 1
    """
    if a.negative and not b.negative:
        return -1
    if not a.negative and b.negative:
        return 1

    direction = -1 if a.negative else 1
    if a.year != b.year:
        return -direction if a.year < b.year else direction

    for part_a, part_b in zip(a.components, b.components):
        if part_a is None and part_b is None:
            return 0
        if part_a is None:
            return -1
        if part_b is None:
            return 1
        result = _compare_component(part_a, part_b)
        if result:
            return result
    return 0


def compare_date_text(a: str, b: str) -> int:
    """Order two date strings, canonical or not."""
    return compare_tokens(DateToken.from_text(a), DateToken.from_text(b))
