"""Display formatting shared with API clients: weights, durations and plain numbers."""
import math
import re
from typing import Optional, Union

Number = Union[int, float, str]

MISSING = "—"

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(num):
        return None
    return num


def format_number(value: Optional[Number], decimals: int = 2) -> str:
    """Render a number without trailing zeros, e.g. 80.50 -> "80.5"."""
    num = _to_float(value)
    if num is None:
        return MISSING
    if num % 1 == 0:
        return str(int(num))
    return _TRAILING_ZEROS.sub("", f"{num:.{decimals}f}")


def format_weight(weight: Optional[Number]) -> str:
    """
    80.00 -> "80", 80.50 -> "80.5", 80.25 -> "80.25".
    """
    return format_number(weight, decimals=2)


def format_duration(seconds: Optional[int]) -> str:
    """1800 -> "30 min", 90 -> "1:30"."""
    if not seconds:
        return MISSING
    seconds = int(seconds)
    mins, secs = divmod(seconds, 60)
    if secs > 0:
        return f"{mins}:{secs:02d}"
    return f"{mins} min"
