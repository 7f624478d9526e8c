import math
from decimal import ROUND_HALF_UP, Decimal


def round_yen(value: float) -> int:
    """Round to whole yen, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ceil_to_10(value: float) -> int:
    return int(math.ceil(value / 10) * 10)
