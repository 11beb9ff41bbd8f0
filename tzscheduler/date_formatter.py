# tzscheduler/date_formatter.py
import logging
import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple

log = logging.getLogger(__name__)

# timeapi.io expects "yyyy-MM-dd HH:mm:ss" for the dateTime field
API_DATETIME_FMT = "%Y-%m-%d %H:%M:%S"

# Tried in order after ordinals, "at" and commas are stripped
_DATETIME_FMTS = [
    "%B %d %Y %I:%M %p",      # August 14 2024 11:06 PM
    "%B %d %Y %I:%M:%S %p",
    "%B %d %Y %H:%M",
    "%B %d %Y %I %p",         # August 14 2024 11 PM
    "%B %d %Y %H:%M:%S",
    "%b %d %Y %I:%M %p",      # Aug 14 2024 11:06 PM
    "%b %d %Y %H:%M",
    "%b %d %Y %I %p",
    "%A %B %d %Y %I:%M %p",   # Wednesday August 14 2024 11:06 PM
    "%a %b %d %Y %I:%M %p",
    "%d %B %Y %I:%M %p",      # 14 August 2024 11:06 PM
    "%d %B %Y %H:%M",
    "%d %B %Y %I %p",
    "%d %b %Y %I:%M %p",
    "%d %b %Y %H:%M",
    "%m/%d/%Y %I:%M %p",      # US
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I %p",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%d %I:%M %p",
    "%B %d %Y",
    "%m/%d/%Y",
]

_ZONE_RE = re.compile(
    r"\s*\b(?:GMT|UTC)(?:\s*(?P<sign>[+-])\s*(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?)?\s*$",
    re.I,
)
_ORDINAL_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.I)
_AT_RE = re.compile(r"\bat\b", re.I)
_MERIDIEM_RE = re.compile(r"(\d)\s*([ap])\.?m\.?(?!\w)", re.I)
_HAS_MERIDIEM_RE = re.compile(r"\b[AP]M\b")
# +0200 style offsets, which fromisoformat only reads from 3.11 on
_COMPACT_OFFSET_RE = re.compile(r"([+-]\d{2})(\d{2})$")

def _split_zone(text: str) -> Tuple[str, Optional[timezone]]:
    """Remove a trailing GMT/UTC designator and return it as a fixed offset."""
    m = _ZONE_RE.search(text)
    if not m:
        return text, None
    offset = timedelta(0)
    if m.group("sign"):
        offset = timedelta(hours=int(m.group("hours")), minutes=int(m.group("minutes") or 0))
        if m.group("sign") == "-":
            offset = -offset
    return text[: m.start()], timezone(offset)

def _normalise(text: str) -> str:
    text = _ORDINAL_RE.sub(r"\1", text)
    text = _AT_RE.sub(" ", text)
    text = _MERIDIEM_RE.sub(lambda m: f"{m.group(1)} {m.group(2).upper()}M", text)
    text = text.replace(",", " ")
    return " ".join(text.split())

def parse_datetime(raw: str) -> datetime:
    """
    Generic date/time parsing for user supplied strings.

    Accepts ISO 8601 (with or without offset, trailing 'Z' allowed), common
    written forms such as 'August 14th, 2024 at 11:06 PM GMT+2', and RFC 2822
    as emitted by JavaScript's Date.toUTCString(). The result is
    aware when the input names an offset, naive otherwise.
    Raises ValueError if no known layout matches.
    """
    s = str(raw or "").strip()
    if not s:
        raise ValueError("Empty date/time")

    iso = s[:-1] + "+00:00" if s[-1] in "Zz" else _COMPACT_OFFSET_RE.sub(r"\1:\2", s)
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    text, tz = _split_zone(s)
    text = _normalise(text)
    for fmt in _DATETIME_FMTS:
        try:
            dt = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return dt.replace(tzinfo=tz) if tz else dt

    # RFC 2822, e.g. "Wed, 14 Aug 2024 23:06:00 GMT". Its parser reads a
    # trailing AM/PM as a zone name, so inputs with one skip it.
    if not _HAS_MERIDIEM_RE.search(text):
        try:
            return parsedate_to_datetime(s)
        except (TypeError, ValueError):
            pass
    raise ValueError(f"Unrecognised date/time: {raw!r}")

def format_datetime_for_api(raw: str) -> str:
    """
    Normalise a free-form meeting time into the API's dateTime layout.

    The wall-clock time is kept as written and any offset is dropped; the
    zone travels as a separate parameter. Unparseable input is passed through
    so the API rejects it.
    """
    try:
        dt = parse_datetime(raw)
    except ValueError as e:
        log.debug("Passing unparsed meeting time through: %s", e)
        return str(raw or "").strip()
    return dt.strftime(API_DATETIME_FMT)

def readable_time(dt: datetime) -> str:
    # h:mm AM/PM, independent of the process locale
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {meridiem}"
