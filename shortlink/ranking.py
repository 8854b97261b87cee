"""Usage ranking over rows returned by the listing endpoints."""

import math
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union


class Range(str, Enum):
    """Time window used to scope hit counters."""

    TODAY = "today"
    LAST_7_DAYS = "last-7-days"
    ALL_TIME = "all-time"

    @property
    def wire(self) -> str:
        """Value sent as the ``range`` query parameter to the backend."""
        return _WIRE_VALUES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Union[str, "Range", None]) -> "Range":
        """Parse a canonical or legacy range name.

        Raises:
            ValueError: If the value names no known range
        """
        if isinstance(value, Range):
            return value
        key = (value or "").strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"Unknown range '{value}'")


_WIRE_VALUES = {
    Range.TODAY: "today",
    Range.LAST_7_DAYS: "7d",
    Range.ALL_TIME: "all",
}

_LABELS = {
    Range.TODAY: "Today",
    Range.LAST_7_DAYS: "Last 7d",
    Range.ALL_TIME: "All time",
}

_ALIASES = {
    "today": Range.TODAY,
    "last-7-days": Range.LAST_7_DAYS,
    "7d": Range.LAST_7_DAYS,
    "all-time": Range.ALL_TIME,
    "all": Range.ALL_TIME,
    "total": Range.ALL_TIME,
}

# Candidate field names per metric, current convention first, legacy after.
METRIC_FIELDS: Dict[Range, Sequence[str]] = {
    Range.TODAY: ("hitsToday", "hits_in_range"),
    Range.LAST_7_DAYS: ("hitsIn7d", "hits_in_range"),
    Range.ALL_TIME: ("hitsTotal", "hits_total"),
}

DESTINATION_FIELDS: Sequence[str] = ("url", "targetUrl", "originalUrl")


def first_present(row: Mapping[str, Any], fields: Iterable[str]) -> Optional[Any]:
    """Return the value of the first field that is present and not None."""
    for field in fields:
        value = row.get(field)
        if value is not None:
            return value
    return None


def _as_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    # NaN and infinities would break the sort order
    return number if math.isfinite(number) else 0


def metric(row: Mapping[str, Any], range_: Union[Range, str]) -> Union[int, float]:
    """Hit count of ``row`` for ``range_``, 0 when no candidate field is present."""
    value = first_present(row, METRIC_FIELDS[Range.parse(range_)])
    if value is None:
        return 0
    return _as_number(value)


def total_hits(row: Mapping[str, Any]) -> Union[int, float]:
    return metric(row, Range.ALL_TIME)


def destination_of(row: Mapping[str, Any]) -> Optional[str]:
    value = first_present(row, DESTINATION_FIELDS)
    return str(value) if value else None


def rank(rows: Sequence[Mapping[str, Any]], range_: Union[Range, str]) -> List[Mapping[str, Any]]:
    """Order rows by descending metric for ``range_``.

    Ties keep their input order and the input sequence is not modified.
    """
    selected = Range.parse(range_)
    # sorted() is stable, including with reverse=True
    return sorted(rows, key=lambda row: metric(row, selected), reverse=True)


def top_n(rows: Sequence[Mapping[str, Any]], range_: Union[Range, str], limit: int) -> List[Mapping[str, Any]]:
    """Rank first, then keep at most ``limit`` rows."""
    ranked = rank(rows, range_)
    if limit is None or limit < 0:
        return ranked
    return ranked[:limit]


def filter_by_destination(rows: Sequence[Mapping[str, Any]], query: Optional[str]) -> List[Mapping[str, Any]]:
    """Case-insensitive substring search on the destination URL."""
    if not query:
        return list(rows)

    needle = query.lower()
    matches = []
    for row in rows:
        destination = destination_of(row)
        if destination and needle in destination.lower():
            matches.append(row)
    return matches
