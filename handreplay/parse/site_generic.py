"""
Hand delimitation for multi-hand transcript files.
A PokerStars export holds many hands back to back; each one starts with a room header.
"""

import re
import logging
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)

HAND_START = re.compile(
    r'^(?:PokerStars\s+(?:Hand|Game|Zoom\s+Hand)\s*#|Hand\s*#\d+)',
    re.MULTILINE | re.IGNORECASE,
)

# Anything shorter cannot hold a header and a table line
MIN_HAND_LENGTH = 30


def find_hand_boundaries(text: str) -> Iterator[Tuple[int, int, str]]:
    """
    Find hand boundaries by their header lines.

    Yields:
        Tuples of (start_offset, end_offset, hand_text)
    """
    matches = list(HAND_START.finditer(text))

    if not matches:
        logger.warning("No hand boundaries found in text")
        return

    for i, match in enumerate(matches):
        start_idx = match.start()
        end_idx = matches[i + 1].start() if i < len(matches) - 1 else len(text)

        hand_text = text[start_idx:end_idx].strip()
        if len(hand_text) > MIN_HAND_LENGTH:
            yield (start_idx, end_idx, hand_text)
        else:
            logger.debug(f"Skipping short section at offset {start_idx}")


def split_hands(text: str) -> List[str]:
    """Cut a transcript file into the text of each hand, in file order."""
    # Exports often start with a byte order mark
    return [hand_text for _, _, hand_text in find_hand_boundaries(text.lstrip('\ufeff'))]
