"""
PokerStars hand history parser.
Reads one hand section by section through a LineCursor and assembles the Hand record.
"""

import re
import logging
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import TypeAdapter

from .actions import STATE_KINDS, apply_line, parse_street_actions
from .config import ParserConfig
from .context import ParseContext
from .cursor import LineCursor
from .errors import EmptyHandHistory, HandHistoryError, InvalidHeader, InvalidTableInfo
from .grammar import LineKind, PostKind, amount_pattern, classify, classify_post
from .pots import PotReconstructor, extract_collected_actions
from .schemas import (
    Action, Hand, ParseFailure, ParseResult, ParserError, ParseSuccess,
    Player, TableInfo,
)
from .utils import clean_amount, parse_cards, validate_card

logger = logging.getLogger(__name__)

HAND_ID = re.compile(r'Hand #(\d+)')
TOURNAMENT_ID = re.compile(r'Tournament #(\d+)')
# Blind level like "$1/$2" or "(300/600)"; the lookarounds keep it off the date
STAKES = re.compile(r'(?<![\d./])\$?(\d[\d,]*(?:\.\d+)?)/\$?(\d[\d,]*(?:\.\d+)?)(?![\d./])')
DATE = re.compile(r'(\d{4})/(\d{2})/(\d{2}) (\d{1,2}):(\d{2}):(\d{2})')

TABLE_NAME = re.compile(r"Table '([^']+)'")
MAX_SEATS = re.compile(r'(\d+)-max')
BUTTON = re.compile(r'Seat #(\d+) is the button')
SEAT = re.compile(rf"^Seat (?P<seat>\d+): (?P<name>.+?) \({amount_pattern('amount')} in chips")

DEALT = re.compile(r'^Dealt to (?P<player>.+?) \[(?P<cards>[^\]]+)\]')
FLOP = re.compile(r'^\*\*\* ?FLOP ?\*\*\*(?: \[(?P<cards>[^\]]*)\])?')
TURN = re.compile(r'^\*\*\* ?TURN ?\*\*\*')
RIVER = re.compile(r'^\*\*\* ?RIVER ?\*\*\*')
SHOWDOWN = re.compile(r'^\*\*\* ?SHOW ?DOWN ?\*\*\*')
NEW_CARD = re.compile(r'\[([^\]]+)\] \[([^\]]+)\]')
SHOW = re.compile(r'^(?P<player>.+?): shows \[(?P<cards>[^\]]+)\]')

_result_adapter = TypeAdapter(ParseResult)


class PokerStarsParser:
    """
    Parser for PokerStars hand histories.

    Holds configuration only; every parse() call gets its own ParseContext,
    so one instance can be reused for any number of hands.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    def detect(self, text: str) -> bool:
        """Detect if this is a PokerStars hand history."""
        return bool(re.search(r'PokerStars\s+(Hand|Zoom Hand|Game)', text[:1000], re.IGNORECASE))

    def parse(self, text: str) -> ParseResult:
        """
        Parse one hand.

        Never raises: fatal problems come back as a ParseFailure carrying the
        line index reached and that line's text.
        """
        cursor = LineCursor.from_text(text or '')

        try:
            if len(cursor) == 0:
                raise EmptyHandHistory()
            ctx = ParseContext(cursor, self.config)
            hand = self._parse_hand(ctx)
            return ParseSuccess(hand=hand, warnings=ctx.warnings)
        except HandHistoryError as e:
            logger.warning(f"Failed to parse hand at line {cursor.position}: {e}")
            return self._failure(str(e), cursor)
        except Exception as e:
            logger.exception(f"Unexpected error parsing hand at line {cursor.position}")
            return self._failure(f"Unknown parsing error: {e}", cursor)

    @staticmethod
    def _failure(message: str, cursor: LineCursor) -> ParseFailure:
        return ParseFailure(error=ParserError(
            message=message,
            line=cursor.position,
            context=cursor.current_line(),
        ))

    def _parse_hand(self, ctx: ParseContext) -> Hand:
        header = self.parse_header(ctx)
        table = self.parse_table(ctx)
        self.parse_players(ctx)
        blinds, antes, extras = self.parse_blinds_and_antes(ctx)
        hole_cards = self.parse_hole_cards(ctx)

        actions: List[Action] = sorted(blinds + antes + extras, key=lambda a: a.index)
        board: List[str] = []

        actions.extend(parse_street_actions(ctx, 'preflop'))

        streets = (('flop', self.parse_flop), ('turn', self.parse_turn), ('river', self.parse_river))
        for street, read_cards in streets:
            cards = read_cards(ctx)
            if cards is None:
                break
            board.extend(cards)
            actions.extend(parse_street_actions(ctx, street))

        actions.extend(self.parse_showdown(ctx))

        collected = extract_collected_actions(ctx.cursor.lines)
        reconstructor = PotReconstructor(ctx)
        pots = reconstructor.reconstruct(collected)
        actions.extend(self._unlogged_collections(ctx, actions, collected))

        return Hand(
            id=header['id'],
            tournament_id=header['tournament_id'],
            stakes=header['stakes'],
            date=header['date'],
            table=table,
            players=self._players(ctx, hole_cards),
            actions=actions,
            board=board,
            pots=pots,
            total_pot=reconstructor.total_pot,
            rake=reconstructor.rake,
        )

    # Header and table

    def parse_header(self, ctx: ParseContext) -> Dict:
        line = ctx.cursor.peek()

        hand_id = HAND_ID.search(line)
        if not hand_id:
            raise InvalidHeader("Hand ID not found")

        tournament = TOURNAMENT_ID.search(line)

        stakes = STAKES.search(line)
        if stakes:
            sb, bb = (g.replace(',', '') for g in stakes.groups())
            label = f"${sb}/${bb}"
        else:
            label = self.config.unknown_stakes_label

        date = DATE.search(line)
        if not date:
            raise InvalidHeader("Date not found or in an invalid format")
        try:
            timestamp = datetime(*(int(part) for part in date.groups()))
        except ValueError:
            raise InvalidHeader("Date not found or in an invalid format")

        ctx.cursor.advance()

        return {
            'id': hand_id.group(1),
            'tournament_id': tournament.group(1) if tournament else None,
            'stakes': label,
            'date': timestamp,
        }

    def parse_table(self, ctx: ParseContext) -> TableInfo:
        # Example: Table 'Alpha' 6-max Seat #3 is the button
        line = ctx.cursor.peek()

        name = TABLE_NAME.search(line)
        if not name:
            raise InvalidTableInfo()
        max_seats = MAX_SEATS.search(line)
        button = BUTTON.search(line)

        ctx.cursor.advance()

        return TableInfo(
            name=name.group(1),
            max_seats=int(max_seats.group(1)) if max_seats else self.config.default_max_seats,
            button_seat=int(button.group(1)) if button else self.config.default_button_seat,
        )

    def parse_players(self, ctx: ParseContext) -> None:
        """Seat lines: "Seat 1: Alice (1500 in chips)"."""
        cursor = ctx.cursor

        while not cursor.at_end() and cursor.peek().startswith('Seat'):
            line = cursor.peek()
            m = SEAT.match(line)
            if m:
                ctx.seat_player(int(m.group('seat')), m.group('name'), clean_amount(m.group('amount')))
            else:
                logger.debug(f"Skipping seat line: {line}")
            cursor.advance()

        logger.debug(f"Seated {len(ctx.seats)} players")

    # Forced bets and hole cards

    def parse_blinds_and_antes(self, ctx: ParseContext) -> Tuple[List[Action], List[Action], List[Action]]:
        """
        Consecutive posting lines before the deal.

        Player-state lines that PokerStars interleaves with the posts (a new
        player waiting for the button, someone sitting out) are kept as extra
        preflop actions; chat and table traffic is skipped.
        """
        cursor = ctx.cursor
        blinds: List[Action] = []
        antes: List[Action] = []
        extras: List[Action] = []

        while not cursor.at_end():
            line = cursor.peek()

            if 'posts' in line:
                post = classify_post(line)
                if post is None:
                    logger.debug(f"Unrecognized post line: {line}")
                else:
                    kind, player, amount = post
                    if not ctx.is_seated(player):
                        ctx.warn(f"ignored post by unseated player {player!r}", cursor.position)
                    elif kind is PostKind.ANTE:
                        ctx.commit(player, amount, live=False)
                        antes.append(ctx.create_action('ante', player, amount, 'preflop'))
                    else:
                        ctx.commit(player, amount)
                        blinds.append(ctx.create_action('blind', player, amount, 'preflop'))
                cursor.advance()
                continue

            match = classify(line)
            if match is None or (match.kind is not LineKind.NOISE and match.kind not in STATE_KINDS):
                break
            action = apply_line(ctx, match, 'preflop')
            if action is not None:
                extras.append(action)
            cursor.advance()

        return blinds, antes, extras

    def parse_hole_cards(self, ctx: ParseContext) -> Dict[str, Tuple[str, str]]:
        cursor = ctx.cursor
        hole_cards: Dict[str, Tuple[str, str]] = {}

        if not cursor.at_end() and 'HOLE CARDS' in cursor.peek():
            cursor.advance()

        while not cursor.at_end() and cursor.peek().startswith('Dealt to'):
            m = DEALT.match(cursor.peek())
            if m:
                cards = parse_cards(m.group('cards'))
                if len(cards) == 2:
                    hole_cards[m.group('player')] = (cards[0], cards[1])
            cursor.advance()

        return hole_cards

    # Board

    def parse_flop(self, ctx: ParseContext) -> Optional[List[str]]:
        """Flop cards, or None when the hand ends before the flop."""
        cursor = ctx.cursor
        if cursor.at_end():
            return None
        m = FLOP.match(cursor.peek())
        if not m:
            return None

        cursor.advance()
        cards = parse_cards(m.group('cards') or '')
        if not cards:
            ctx.warn("flop marker without cards", cursor.position - 1)
        return cards

    def parse_turn(self, ctx: ParseContext) -> Optional[List[str]]:
        return self._street_card(ctx, TURN, 'turn')

    def parse_river(self, ctx: ParseContext) -> Optional[List[str]]:
        return self._street_card(ctx, RIVER, 'river')

    @staticmethod
    def _street_card(ctx: ParseContext, marker, street: str) -> Optional[List[str]]:
        """
        The new card sits in the second bracket: [Ah Kd 2c] [7s].

        None when the marker is absent. A marker without the new card still
        opens the street, so its actions are read; the card list is empty.
        """
        cursor = ctx.cursor
        if cursor.at_end() or not marker.match(cursor.peek()):
            return None

        m = NEW_CARD.search(cursor.peek())
        if not m:
            ctx.warn(f"{street} marker without a new card", cursor.position)
        cursor.advance()
        return [validate_card(m.group(2).strip())] if m else []

    # Showdown

    def parse_showdown(self, ctx: ParseContext) -> List[Action]:
        cursor = ctx.cursor
        shows: List[Action] = []

        if cursor.at_end() or not SHOWDOWN.match(cursor.peek()):
            return shows
        cursor.advance()

        while not cursor.at_end() and 'SUMMARY' not in cursor.peek():
            m = SHOW.match(cursor.peek())
            if m and ctx.is_seated(m.group('player')):
                cards = parse_cards(m.group('cards'))
                shows.append(ctx.create_action('show', m.group('player'), None, 'showdown', cards=cards))
            cursor.advance()

        return shows

    # Assembly

    @staticmethod
    def _unlogged_collections(ctx: ParseContext, actions: List[Action], collected) -> List[Action]:
        """Pot collections not already read as street actions, as showdown actions."""
        logged = Counter((a.player, a.amount) for a in actions if a.type == 'collected')
        extra: List[Action] = []

        for entry in collected:
            key = (entry.player, entry.amount)
            if logged[key]:
                logged[key] -= 1
                continue
            if not ctx.is_seated(entry.player):
                ctx.warn(f"ignored collection by unseated player {entry.player!r}")
                continue
            ctx.refund(entry.player, entry.amount)
            extra.append(ctx.create_action('collected', entry.player, entry.amount, 'showdown'))

        return extra

    @staticmethod
    def _players(ctx: ParseContext, hole_cards: Dict[str, Tuple[str, str]]) -> List[Player]:
        return [
            Player(
                seat=seat,
                name=name,
                chips=ctx.starting_chips[name],
                current_chips=ctx.chips[name],
                cards=hole_cards.get(name),
                is_hero=name in hole_cards,
                is_all_in=name in ctx.all_in,
                all_in_amount=ctx.all_in.get(name),
            )
            for name, seat in ctx.seats.items()
        ]


def parse_hand(text: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse a single PokerStars hand history."""
    return PokerStarsParser(config).parse(text)


def parse_result_json(data: str) -> ParseResult:
    """Load a ParseResult back from its JSON form, picking the variant by status."""
    return _result_adapter.validate_json(data)
