"""Date intrinsics: timestamps are UTC milliseconds since the Unix epoch."""

from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_COMPOSITE = {
    "T": "%H:%M:%S",
    "X": "%H:%M:%S",
    "R": "%H:%M",
    "D": "%m/%d/%y",
    "x": "%m/%d/%y",
    "F": "%Y-%m-%d",
    "r": "%I:%M:%S %p",
    "c": "%a %b %e %H:%M:%S %Y",
    "v": "%e-%b-%Y",
    "+": "%Y-%m-%dT%H:%M:%S%.f%:z",
}

_FORMAT_PIECE = re.compile(
    r"(?P<text>[^%]+)"
    r"|%(?P<pad>[-_0]?)(?P<spec>\.[369]?f|[369]f|:z|[A-Za-z%+])"
    r"|(?P<bad>%)",
    re.S,
)

_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(?:([Zz])|([+-])([0-9]{2}):([0-9]{2}))"
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _from_millis(ts: int) -> Optional[tuple[datetime, int]]:
    """Split a millisecond timestamp into a UTC datetime and nanoseconds."""
    seconds, millis = divmod(ts, 1000)
    try:
        return _EPOCH + timedelta(seconds=seconds), millis * 1_000_000
    except OverflowError:
        return None


def _numeric_fields(dt: datetime) -> dict[str, tuple[int, int, str]]:
    yday0 = dt.timetuple().tm_yday - 1
    sunday_based = (dt.weekday() + 1) % 7
    iso_year, iso_week, iso_day = dt.isocalendar()
    hour12 = dt.hour % 12 or 12
    return {
        "Y": (dt.year, 4, "0"),
        "C": (dt.year // 100, 2, "0"),
        "y": (dt.year % 100, 2, "0"),
        "G": (iso_year, 4, "0"),
        "g": (iso_year % 100, 2, "0"),
        "V": (iso_week, 2, "0"),
        "m": (dt.month, 2, "0"),
        "d": (dt.day, 2, "0"),
        "e": (dt.day, 2, " "),
        "H": (dt.hour, 2, "0"),
        "k": (dt.hour, 2, " "),
        "I": (hour12, 2, "0"),
        "l": (hour12, 2, " "),
        "M": (dt.minute, 2, "0"),
        "S": (dt.second, 2, "0"),
        "j": (yday0 + 1, 3, "0"),
        "u": (iso_day, 1, "0"),
        "w": (sunday_based, 1, "0"),
        "U": ((yday0 + 7 - sunday_based) // 7, 2, "0"),
        "W": ((yday0 + 7 - dt.weekday()) // 7, 2, "0"),
        "s": ((dt - _EPOCH) // timedelta(seconds=1), 1, "0"),
    }


def _text_field(dt: datetime, spec: str) -> Optional[str]:
    texts = {
        "a": _DAYS[dt.weekday()][:3],
        "A": _DAYS[dt.weekday()],
        "b": _MONTHS[dt.month - 1][:3],
        "h": _MONTHS[dt.month - 1][:3],
        "B": _MONTHS[dt.month - 1],
        "p": "AM" if dt.hour < 12 else "PM",
        "P": "am" if dt.hour < 12 else "pm",
        "Z": "UTC",
        "z": "+0000",
        ":z": "+00:00",
        "%": "%",
        "n": "\n",
        "t": "\t",
    }
    return texts.get(spec)


def _fraction(spec: str, nanos: int) -> Optional[str]:
    if spec == ".f":
        if nanos == 0:
            return ""
        if nanos % 1_000_000 == 0:
            return f".{nanos // 1_000_000:03d}"
        if nanos % 1000 == 0:
            return f".{nanos // 1000:06d}"
        return f".{nanos:09d}"
    digits = {
        "f": f"{nanos:09d}",
        "3f": f"{nanos // 1_000_000:03d}",
        "6f": f"{nanos // 1000:06d}",
        "9f": f"{nanos:09d}",
    }
    if spec.startswith("."):
        value = digits.get(spec[1:])
        return None if value is None else "." + value
    return digits.get(spec)


def _render(dt: datetime, nanos: int, fmt: str) -> str:
    numeric = _numeric_fields(dt)
    out: list[str] = []
    for match in _FORMAT_PIECE.finditer(fmt):
        if match["text"] is not None:
            out.append(match["text"])
            continue
        if match["bad"] is not None:
            raise ValueError(f"invalid date format: {fmt!r}")
        spec, pad = match["spec"], match["pad"]
        if spec in _COMPOSITE:
            out.append(_render(dt, nanos, _COMPOSITE[spec]))
        elif spec in numeric:
            value, width, fill = numeric[spec]
            if pad == "-":
                out.append(str(value))
            else:
                fill = {"_": " ", "0": "0"}.get(pad, fill)
                out.append(str(value).rjust(width, fill))
        else:
            text = _text_field(dt, spec)
            if text is None:
                text = _fraction(spec, nanos)
            if text is None:
                raise ValueError(f"invalid date format specifier %{spec} in {fmt!r}")
            out.append(text)
    return "".join(out)


def date_now(*args: Any) -> int:
    """Return the current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def date_get_part(*args: Any) -> int:
    """Return one calendar field of a timestamp, or 0 for bad arguments.

    Parts: year, month (0-based), day, hours, minutes, seconds, milli and
    weekday (0 is Sunday).
    """
    if len(args) != 2:
        return 0
    ts, part = args
    if not _is_int(ts) or not isinstance(part, str):
        return 0
    split = _from_millis(ts)
    if split is None:
        return 0
    dt, nanos = split
    parts = {
        "year": dt.year,
        "month": dt.month - 1,
        "day": dt.day,
        "hours": dt.hour,
        "minutes": dt.minute,
        "seconds": dt.second,
        "milli": nanos // 1_000_000,
        "weekday": (dt.weekday() + 1) % 7,
    }
    return parts.get(part, 0)


def date_format(*args: Any) -> str:
    """Format a timestamp in UTC with strftime-style specifiers.

    Returns an empty string for bad arguments; raises ValueError for an
    unknown specifier.
    """
    if len(args) != 2:
        return ""
    ts, fmt = args
    if not _is_int(ts) or not isinstance(fmt, str):
        return ""
    split = _from_millis(ts)
    if split is None:
        return ""
    dt, nanos = split
    return _render(dt, nanos, fmt)


def date_parse(*args: Any) -> int:
    """Parse an RFC 3339 date-time into milliseconds, or return 0 on failure."""
    if not args:
        return 0
    text = args[0]
    if not isinstance(text, str):
        return 0
    match = _RFC3339.fullmatch(text)
    if match is None:
        return 0
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, zulu, sign, off_hours, off_minutes = match.groups()[6:]
    if hour > 23 or minute > 59 or second > 60:
        return 0
    leap = second == 60
    try:
        moment = datetime(
            year, month, day, hour, minute, 59 if leap else second, tzinfo=timezone.utc
        )
    except ValueError:
        return 0
    offset = 0
    if zulu is None:
        oh, om = int(off_hours), int(off_minutes)
        if oh > 23 or om > 59:
            return 0
        offset = (oh * 60 + om) * 60 * (1 if sign == "+" else -1)
    nanos = int(fraction[:9].ljust(9, "0")) if fraction else 0
    seconds = (moment - _EPOCH) // timedelta(seconds=1) - offset + (1 if leap else 0)
    return seconds * 1000 + nanos // 1_000_000


_INTRINSICS: dict[str, Callable[..., Any]] = {
    "__date_now": date_now,
    "__date_get_part": date_get_part,
    "__date_format": date_format,
    "__date_parse": date_parse,
}


def register_date_intrinsics(register: Callable[[str, Callable[..., Any]], Any]) -> None:
    """Hand every date intrinsic to ``register(name, function)``."""
    for name, func in _INTRINSICS.items():
        register(name, func)