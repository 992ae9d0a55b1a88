"""
Line grammar for PokerStars hand histories.

Each line shape the parser understands is one LineKind with one compiled
pattern. classify() tries them in table order and returns the first match,
so a line is matched exactly once. All-in shapes sit before the plain
shapes they extend; chat lines sit first because their body is free text.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from .utils import clean_amount


def amount_pattern(name: str) -> str:
    """Amount as written in the transcript: optional currency sign, thousands commas."""
    return rf'[$€£]?(?P<{name}>\d[\d,]*(?:\.\d+)?)'


_PLAYER = r'(?P<player>.+?)'
_AMOUNT = amount_pattern('amount')
_TO = amount_pattern('to')


class LineKind(str, Enum):
    """Every action-section line shape."""
    # Chat and table traffic: consumed, no action
    NOISE = "noise"

    # Tier 1: all-in variants
    RAISE_ALL_IN = "raise_all_in"
    CALL_ALL_IN = "call_all_in"
    BET_ALL_IN = "bet_all_in"

    # Tier 2: player state, no chips move
    MUCK = "muck"
    TIMEOUT = "timeout"
    DISCONNECT = "disconnect"
    RECONNECT = "reconnect"
    SIT_OUT = "sitout"
    RETURN = "return"

    # Tier 3: standard actions
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    UNCALLED = "uncalled"
    COLLECTED = "collected"


class PostKind(str, Enum):
    """Forced bet shapes posted before the hole cards."""
    SMALL_BLIND = "small_blind"
    BIG_BLIND = "big_blind"
    SMALL_AND_BIG = "small_and_big"
    DEAD_BLIND = "dead_blind"
    ANTE = "ante"


GRAMMAR: List[Tuple[LineKind, Pattern]] = [
    (LineKind.NOISE, re.compile(r'^.+? said, "')),
    (LineKind.NOISE, re.compile(r'^.+? (?:joins|leaves) the table')),
    (LineKind.NOISE, re.compile(r"^.+?: doesn't show hand")),

    (LineKind.RAISE_ALL_IN, re.compile(rf'^{_PLAYER}: raises {_AMOUNT} to {_TO} and is all-in$')),
    (LineKind.CALL_ALL_IN, re.compile(rf'^{_PLAYER}: calls {_AMOUNT} and is all-in$')),
    (LineKind.BET_ALL_IN, re.compile(rf'^{_PLAYER}: bets {_AMOUNT} and is all-in$')),

    (LineKind.MUCK, re.compile(rf'^{_PLAYER}: mucks hand')),
    (LineKind.TIMEOUT, re.compile(rf'^{_PLAYER} has timed out')),
    (LineKind.DISCONNECT, re.compile(rf'^{_PLAYER} is disconnected')),
    (LineKind.RECONNECT, re.compile(rf'^{_PLAYER} is connected')),
    (LineKind.SIT_OUT, re.compile(rf'^{_PLAYER}: sits out')),
    (LineKind.SIT_OUT, re.compile(rf'^{_PLAYER}:? is sitting out')),
    (LineKind.RETURN, re.compile(rf'^{_PLAYER} has returned')),
    (LineKind.RETURN, re.compile(rf'^{_PLAYER} will be allowed to play after the button')),

    (LineKind.FOLD, re.compile(rf'^{_PLAYER}: folds(?: \[[^\]]*\])?$')),
    (LineKind.CHECK, re.compile(rf'^{_PLAYER}: checks$')),
    (LineKind.CALL, re.compile(rf'^{_PLAYER}: calls {_AMOUNT}$')),
    (LineKind.BET, re.compile(rf'^{_PLAYER}: bets {_AMOUNT}$')),
    (LineKind.RAISE, re.compile(rf'^{_PLAYER}: raises {_AMOUNT} to {_TO}$')),
    (LineKind.UNCALLED, re.compile(rf'^Uncalled bet \({_AMOUNT}\) returned to (?P<player>.+)$')),
    (LineKind.COLLECTED, re.compile(
        rf'^{_PLAYER} collected {_AMOUNT} from (?:(?:main|side) )?pot(?:-\d+)?$'
    )),
]

POST_GRAMMAR: List[Tuple[PostKind, Pattern]] = [
    (PostKind.SMALL_BLIND, re.compile(rf'^{_PLAYER}: posts small blind {_AMOUNT}')),
    (PostKind.BIG_BLIND, re.compile(rf'^{_PLAYER}: posts big blind {_AMOUNT}')),
    (PostKind.SMALL_AND_BIG, re.compile(rf'^{_PLAYER}: posts small & big blinds {_AMOUNT}')),
    (PostKind.DEAD_BLIND, re.compile(rf'^{_PLAYER}: posts dead blind {_AMOUNT}')),
    (PostKind.ANTE, re.compile(rf'^{_PLAYER}: posts the ante {_AMOUNT}')),
]

STREET_MARKER = re.compile(r'^\*\*\* ?(?:FLOP|TURN|RIVER|SHOW ?DOWN|SUMMARY) ?\*\*\*')


@dataclass(frozen=True)
class LineMatch:
    kind: LineKind
    player: Optional[str] = None
    amount: Optional[Decimal] = None


def is_street_boundary(line: str) -> bool:
    return bool(STREET_MARKER.match(line))


def classify(line: str) -> Optional[LineMatch]:
    """Match a line against the grammar; None if no shape fits."""
    for kind, pattern in GRAMMAR:
        m = pattern.match(line)
        if not m:
            continue
        groups = m.groupdict()
        # Raises report the total they raise to
        raw_amount = groups.get('to') or groups.get('amount')
        return LineMatch(
            kind=kind,
            player=groups.get('player'),
            amount=clean_amount(raw_amount) if raw_amount else None,
        )
    return None


def classify_post(line: str) -> Optional[Tuple[PostKind, str, Decimal]]:
    for kind, pattern in POST_GRAMMAR:
        m = pattern.match(line)
        if m:
            return kind, m.group('player'), clean_amount(m.group('amount'))
    return None
