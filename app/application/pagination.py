import re
from typing import Optional, Tuple

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """
    Lenient query-string parsing: "3", " 3", "3abc" -> 3.
    Absent, malformed, zero or negative values fall back to `default`.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default


def page_bounds(page: int, limit: int) -> Tuple[int, int]:
    offset = (page - 1) * limit
    return offset, offset + limit


def normalize_search(search: Optional[str]) -> Optional[str]:
    """Trimmed search term, or None when there is nothing to filter by."""
    if search is None:
        return None
    term = search.strip()
    return term or None
