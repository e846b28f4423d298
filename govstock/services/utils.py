# govstock/services/utils.py
import math


def is_blank(x) -> bool:
    """True for empty cells: None, NaN and whitespace-only strings."""
    if x is None:
        return True
    if isinstance(x, float) and math.isnan(x):
        return True
    return isinstance(x, str) and not x.strip()

def as_str(x: object, default: str = "") -> str:
    """Normalize any cell value to a clean string."""
    if is_blank(x):
        return default
    if isinstance(x, float) and x.is_integer():
        # openpyxl hands back 2024.0 for whole numbers typed as floats
        return str(int(x))
    return str(x).strip()
