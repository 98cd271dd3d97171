"""Display helpers for alert and summary text."""

import math
import re
from datetime import datetime


def group_digits_indian(value: int) -> str:
    """Group an integer the en-IN way: 1234567 -> 12,34,567."""
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(amount: float, symbol: str = "₹") -> str:
    return f"{symbol}{group_digits_indian(round_half_up(amount))}"


def safe_filename_stem(name: str) -> str:
    """Replace every non-alphanumeric character with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
