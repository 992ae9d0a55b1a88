"""
Utility functions for hand history parsing.
Amount normalization and card validation shared by every section parser.
"""

import re
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .errors import InvalidCardFormat

logger = logging.getLogger(__name__)

CARD_PATTERN = re.compile(r'^[2-9TJQKA][hdcs]$')


def clean_amount(s: str) -> Optional[Decimal]:
    """
    Clean and normalize a monetary amount.

    Handles:
    - Currency symbols: "$100", "€100", "£100"
    - Comma as thousands separator: "1,234.56" -> Decimal("1234.56")
    - Parentheses from summary lines: "(1234)" -> Decimal("1234")
    """
    if not s:
        return None

    s = re.sub(r'[$€£]', '', s).strip().strip('()').replace(',', '')
    if not s:
        return None

    try:
        return Decimal(s)
    except InvalidOperation:
        logger.debug(f"Could not parse amount: {s}")
        return None


def validate_card(token: str) -> str:
    """Return the token unchanged if it is a card like "As" or "Td"."""
    if not CARD_PATTERN.match(token):
        raise InvalidCardFormat(token)
    return token


def parse_cards(card_string: str) -> List[str]:
    """
    Split a bracket body into validated cards.

    "Ah Kd" -> ["Ah", "Kd"]; "[Ah Kd]" -> ["Ah", "Kd"]. Raises InvalidCardFormat
    for any token that is not a card.
    """
    if not card_string:
        return []
    return [validate_card(token) for token in card_string.strip('[]').split()]


def format_amount(amount: Decimal) -> str:
    """Render an amount without a trailing exponent or needless zeros."""
    normalized = amount.normalize()
    if normalized == normalized.to_integral():
        return str(normalized.quantize(Decimal(1)))
    return str(normalized)
