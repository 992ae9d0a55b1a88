"""
PokerStars hand history parsing module.
Turns transcript text into structured Hand records for replay.
"""

from .schemas import (
    Hand, TableInfo, Player, Action, Pot, ActionType, Street,
    ParseResult, ParseSuccess, ParseFailure, ParserError,
)
from .errors import (
    HandHistoryError, EmptyHandHistory, InvalidHeader,
    InvalidTableInfo, InvalidCardFormat, UnexpectedEndOfInput,
)
from .config import ParserConfig, load_config, save_config
from .interfaces import HandParser
from .site_pokerstars import PokerStarsParser, parse_hand, parse_result_json
from .site_generic import find_hand_boundaries, split_hands
from .runner import ParserRunner, parse_file, parse_directory, write_jsonl

__all__ = [
    'Hand',
    'TableInfo',
    'Player',
    'Action',
    'Pot',
    'ActionType',
    'Street',
    'ParseResult',
    'ParseSuccess',
    'ParseFailure',
    'ParserError',
    'HandHistoryError',
    'EmptyHandHistory',
    'InvalidHeader',
    'InvalidTableInfo',
    'InvalidCardFormat',
    'UnexpectedEndOfInput',
    'ParserConfig',
    'load_config',
    'save_config',
    'HandParser',
    'PokerStarsParser',
    'parse_hand',
    'parse_result_json',
    'find_hand_boundaries',
    'split_hands',
    'ParserRunner',
    'parse_file',
    'parse_directory',
    'write_jsonl',
]
