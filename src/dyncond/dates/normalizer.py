from __future__ import annotations

import calendar
import locale
import logging
import math
import re
from contextlib import contextmanager
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from dyncond.features.loose import is_numeric

logger = logging.getLogger(__name__)

ENGLISH_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
ENGLISH_DAYS_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
ENGLISH_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
ENGLISH_MONTHS_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# unit -> (relativedelta keyword, multiplier)
_UNITS = {
    "sec": ("seconds", 1),
    "second": ("seconds", 1),
    "min": ("minutes", 1),
    "minute": ("minutes", 1),
    "hour": ("hours", 1),
    "day": ("days", 1),
    "week": ("weeks", 1),
    "fortnight": ("weeks", 2),
    "month": ("months", 1),
    "year": ("years", 1),
}

_RELATIVE_TERM = re.compile(
    r"\s*([+-]?\d+)\s*(seconds?|secs?|minutes?|mins?|hours?|days?|weeks?|fortnights?|months?|years?)\b"
)
_WEEKDAY_NAME = re.compile(
    r"^(?:(next|last|this)\s+)?(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$"
)
_DAY_FIRST = re.compile(r"^\d{1,2}[.-]\d{1,2}[.-]\d{2,4}\b")
_EPOCH = re.compile(r"^@(-?\d+)$")


@contextmanager
def forced_locale(name: str, category: int = locale.LC_TIME) -> Iterator[str]:
    """
    Switch the process locale for the duration of the block.
    The previous locale is restored on every exit path, including when
    switching itself fails.
    """
    previous = locale.setlocale(category)
    try:
        yield locale.setlocale(category, name)
    finally:
        locale.setlocale(category, previous)


def locale_name_table(name: str) -> Dict[str, str]:
    """Localized day/month names (full and abbreviated) mapped to English."""
    table: Dict[str, str] = {}
    try:
        with forced_locale(name):
            for i in range(7):
                table[calendar.day_name[i]] = ENGLISH_DAYS[i]
                table[calendar.day_abbr[i]] = ENGLISH_DAYS_ABBR[i]
            for i in range(1, 13):
                table[calendar.month_name[i]] = ENGLISH_MONTHS[i - 1]
                table[calendar.month_abbr[i]] = ENGLISH_MONTHS_ABBR[i - 1]
    except locale.Error as e:
        logger.warning("locale %s unavailable, names stay untranslated: %s", name, e)
        return {}
    return table


def _ordinal(v: Any, upper: int) -> Optional[int]:
    if not is_numeric(v):
        return None
    x = float(v)
    if not x.is_integer() or not 1 <= x <= upper:
        return None
    return int(x)


class DateNormalizer:
    """
    Turns human-readable dates into Unix timestamps, weekdays and months.

    `now` is a zero-argument callable returning the reference time; tests pin it.
    `translations` maps localized day/month names to English; when omitted and
    `source_locale` is given, the table is read from the C library's names for
    that locale.
    """

    def __init__(
        self,
        tz: tzinfo = timezone.utc,
        now: Optional[Callable[[], datetime]] = None,
        translations: Optional[Mapping[str, str]] = None,
        source_locale: Optional[str] = None,
    ) -> None:
        self.tz = tz
        self._now = now or (lambda: datetime.now(tz))

        if translations is None:
            translations = locale_name_table(source_locale) if source_locale else {}
        self._table = {
            k.lower(): v for k, v in translations.items() if k and k.lower() != v.lower()
        }
        self._pattern = None
        if self._table:
            names = sorted(self._table, key=len, reverse=True)
            self._pattern = re.compile(
                r"(?<!\w)(" + "|".join(re.escape(n) for n in names) + r")(?!\w)",
                re.IGNORECASE,
            )

    def now(self) -> datetime:
        n = self._now()
        if n.tzinfo is None:
            return n.replace(tzinfo=self.tz)
        return n.astimezone(self.tz)

    def untranslate(self, value: Any) -> Any:
        if not isinstance(value, str) or self._pattern is None:
            return value
        return self._pattern.sub(lambda m: self._table[m.group(0).lower()], value)

    def string_to_time(self, value: Any) -> Optional[int]:
        """Unix timestamp for value, or None when it cannot be read as a date."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if isinstance(value, (int, float)):
            return int(value)

        text = str(value).strip()
        if not text:
            return None

        m = _EPOCH.match(text)
        if m:
            return int(m.group(1))

        lowered = text.lower()
        now = self.now()
        midnight = datetime.combine(now.date(), time(0), tzinfo=self.tz)

        if lowered == "now":
            dt = now
        elif lowered in ("today", "midnight"):
            dt = midnight
        elif lowered == "tomorrow":
            dt = midnight + timedelta(days=1)
        elif lowered == "yesterday":
            dt = midnight - timedelta(days=1)
        else:
            dt = self._weekday_name(lowered, midnight)
            if dt is None:
                dt = self._relative(lowered, now)
            if dt is None:
                dt = self._parse(text, midnight)

        if dt is None:
            return None
        try:
            return int(dt.timestamp())
        except (ValueError, OverflowError, OSError):
            return None

    def weekday(self, value: Any) -> int:
        """ISO weekday, 1 (Monday) to 7 (Sunday)."""
        n = _ordinal(value, 7)
        if n is not None:
            return n
        return self._at(self.timestamp(value)).isoweekday()

    def month(self, value: Any) -> int:
        n = _ordinal(value, 12)
        if n is not None:
            return n
        return self._at(self.timestamp(value)).month

    def timestamp(self, value: Any) -> Optional[int]:
        return self.string_to_time(self.untranslate(value))

    def _at(self, ts: Optional[int]) -> datetime:
        # unreadable dates land on the epoch
        try:
            return datetime.fromtimestamp(ts if ts is not None else 0, tz=self.tz)
        except (OverflowError, OSError, ValueError):
            return datetime.fromtimestamp(0, tz=self.tz)

    def _weekday_name(self, text: str, midnight: datetime) -> Optional[datetime]:
        m = _WEEKDAY_NAME.match(text)
        if not m:
            return None
        which, name = m.group(1), m.group(2)
        target = [d.lower() for d in ENGLISH_DAYS].index(name)
        today = midnight.weekday()

        if which == "last":
            back = (today - target) % 7 or 7
            return midnight - timedelta(days=back)

        ahead = (target - today) % 7
        if which == "next" and ahead == 0:
            ahead = 7
        return midnight + timedelta(days=ahead)

    def _relative(self, text: str, now: datetime) -> Optional[datetime]:
        ago = text.endswith(" ago")
        if ago:
            text = text[:-4].rstrip()

        pos = 0
        delta = relativedelta()
        while pos < len(text):
            m = _RELATIVE_TERM.match(text, pos)
            if not m:
                return None
            unit = m.group(2)
            if unit.endswith("s") and unit[:-1] in _UNITS:
                unit = unit[:-1]
            kw, mult = _UNITS[unit]
            try:
                delta += relativedelta(**{kw: int(m.group(1)) * mult})
            except (ValueError, OverflowError):
                return None
            pos = m.end()

        if pos == 0:
            return None
        try:
            return now - delta if ago else now + delta
        except (ValueError, OverflowError) as e:
            logger.debug("offset %r out of range: %s", text, e)
            return None

    def _parse(self, text: str, midnight: datetime) -> Optional[datetime]:
        try:
            dt = date_parser.parse(
                text,
                default=midnight.replace(tzinfo=None),
                dayfirst=bool(_DAY_FIRST.match(text)),
            )
        except (ValueError, OverflowError) as e:
            logger.debug("could not parse date %r: %s", text, e)
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=self.tz)
        return dt
