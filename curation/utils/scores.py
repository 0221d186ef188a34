"""
Numeric helpers shared by the heuristic filter and the recommendation model.
"""

import math
from typing import Any, Optional

SIGMOID_INPUT_LIMIT = 20.0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def sigmoid(x: float) -> float:
    """Logistic function with the input clamped to [-20, 20] to avoid overflow."""
    z = clamp(x, -SIGMOID_INPUT_LIMIT, SIGMOID_INPUT_LIMIT)
    return 1.0 / (1.0 + math.exp(-z))


def parse_count(value: Any) -> Optional[int]:
    """
    Parse a view/like count. Returns None when the count is unknown
    (missing, blank, or not numeric) so callers never confuse it with zero.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None
