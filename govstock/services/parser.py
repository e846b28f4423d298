# govstock/services/parser.py
"""
Parsing of raw model replies. Model text is untrusted: nothing in here
raises past the caller, a malformed reply degrades only its own field.
"""
import json
import logging
import os
import re
from typing import List, Optional

from pydantic import ValidationError

from govstock.exceptions import ParseFailure
from govstock.models import StockImpact

logger = logging.getLogger(__name__)

LIKELIHOOD_MIN, LIKELIHOOD_MAX = 1, 99

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.I)
_FENCE_CLOSE = re.compile(r"\s*```$")


def parse_likelihood(text: Optional[str]) -> Optional[int]:
    """Keep only the digits of the reply. No digits -> None."""
    digits = re.sub(r"[^0-9]", "", text or "")
    if not digits:
        logger.warning("Likelihood reply had no digits: %r", (text or "")[:200])
        return None
    try:
        value = int(digits)
    except ValueError:
        # more digits than int() will convert
        logger.warning("Likelihood reply too long to parse: %d digits", len(digits))
        return None
    if os.getenv("LIKELIHOOD_CLAMP", "0") == "1":
        return clamp_likelihood(value)
    return value

def clamp_likelihood(value: Optional[int], low: int = LIKELIHOOD_MIN, high: int = LIKELIHOOD_MAX) -> Optional[int]:
    if value is None:
        return None
    return max(low, min(high, value))


def _json_array(text: str) -> list:
    cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text.strip())).strip()
    start, end = cleaned.find("["), cleaned.rfind("]")
    if start == -1 or end <= start:
        raise ParseFailure("no JSON array in reply")
    try:
        data = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        raise ParseFailure(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ParseFailure("reply is not a JSON array")
    return data

def parse_stocks(text: Optional[str]) -> List[StockImpact]:
    """
    Decode the stocks reply into StockImpacts.

    Surrounding prose and markdown fences are tolerated. Anything that is
    not a JSON array yields []; entries that are not {symbol, impact}
    objects are skipped one by one.
    """
    try:
        items = _json_array(text or "")
    except ParseFailure as e:
        logger.warning("Stock parse error: %s; reply=%r", e, (text or "")[:200])
        return []

    stocks: List[StockImpact] = []
    for item in items:
        try:
            stocks.append(StockImpact.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed stock entry %r: %s", item, e.errors()[0]["msg"])
    return stocks
