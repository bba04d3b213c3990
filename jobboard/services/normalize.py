import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

ET_MAP = {
    "full time": "full-time",
    "full-time": "full-time",
    "fulltime": "full-time",
    "part time": "part-time",
    "part-time": "part-time",
    "parttime": "part-time",
    "contract": "contract",
    "contractor": "contract",
    "freelance": "freelance",
    "freelancer": "freelance",
    "intern": "internship",
    "internship": "internship",
    "temporary": "temporary",
    "temp": "temporary",
}

def norm_employment_type(raw: Optional[str]) -> Optional[str]:
    """Normalize employment type string; None when unrecognized."""
    if not raw:
        return None
    s = str(raw).strip().lower().replace("_", " ")
    s = re.split(r"[·|,/]", s)[0].strip()  # first token
    if not s:
        return None
    if s in ET_MAP:
        return ET_MAP[s]
    for k, v in ET_MAP.items():
        if k in s:
            return v
    return None

def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a timestamp into a naive UTC datetime (what the store keeps).
    Supports datetime, ISO strings (with or without 'Z'), yyyy-mm-dd,
    epoch seconds and epoch milliseconds.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        n = float(value)
        if n >= 1e12:  # ms
            n = n / 1000.0
        dt = datetime.fromtimestamp(n, tz=timezone.utc)
    else:
        s = str(value).strip()
        try:
            return parse_datetime(float(s))
        except ValueError:
            pass
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            try:
                dt = datetime.strptime(s, "%Y-%m-%d")
            except ValueError:
                return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt

def _amount(token: str) -> Optional[int]:
    m = re.fullmatch(r"(\d+(?:\.\d+)?)(k|K)?", token)
    if not m:
        return None
    val = float(m.group(1))
    if m.group(2):  # has k
        val *= 1000
    return int(val)

def parse_salary_range(raw: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """
    Extract (minimum, maximum) from a composite salary string.
    Handles "$60k–$75k", "139000 - 150000", "£45,000", "90k", "100000".
    A single number is used as both ends.
    """
    if not raw:
        return None, None
    s = str(raw).replace(",", "")
    s = re.sub(r"[^0-9kK\.\-\–]", " ", s)
    nums = []
    for p in re.split(r"[\-\–\s]+", s):
        if not p:
            continue
        val = _amount(p)
        if val is not None:
            nums.append(val)
    if not nums:
        return None, None
    return min(nums), max(nums)

def coerce_int(value: Any) -> Optional[int]:
    """Best-effort int; None for blanks, bools and garbage."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    s = str(value).strip().replace(",", "")
    if not s:
        return None
    try:
        return int(float(s))
    except ValueError:
        return None
