"""
Per-call parse state.

A ParseContext is created for every parse() call and threaded through each
section parser, so nothing carries over between hands and a parser instance
can be shared.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Set

from .config import ParserConfig
from .cursor import LineCursor
from .schemas import Action, ActionType, Street

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


class ParseContext:
    """Cursor plus the chip, all-in and activity state accumulated while reading."""

    def __init__(self, cursor: LineCursor, config: ParserConfig):
        self.cursor = cursor
        self.config = config

        self.seats: Dict[str, int] = {}             # player -> seat, in seat-line order
        self.starting_chips: Dict[str, Decimal] = {}
        self.chips: Dict[str, Decimal] = {}
        self.all_in: Dict[str, Decimal] = {}
        self.active: Set[str] = set()
        self.street_committed: Dict[str, Decimal] = {}

        self.total_contributions = ZERO
        self.total_returned = ZERO
        self.warnings: List[str] = []
        self._next_index = 0

    # Players

    def seat_player(self, seat: int, name: str, chips: Decimal) -> None:
        self.seats[name] = seat
        self.starting_chips[name] = chips
        self.chips[name] = chips
        self.active.add(name)

    def is_seated(self, name: str) -> bool:
        return name in self.seats

    def player_names(self) -> List[str]:
        return list(self.seats)

    # Chip tracking

    def start_street(self) -> None:
        self.street_committed.clear()

    def commit(self, player: str, amount: Decimal, live: bool = True) -> None:
        """Chips moved from a stack into the pot. Antes are not live."""
        self.chips[player] = max(ZERO, self.chips.get(player, ZERO) - amount)
        self.total_contributions += amount
        if live:
            self.street_committed[player] = self.street_committed.get(player, ZERO) + amount

    def commit_to(self, player: str, to_amount: Decimal) -> None:
        """A raise to a street total: only the difference leaves the stack."""
        already = self.street_committed.get(player, ZERO)
        self.commit(player, max(ZERO, to_amount - already))
        self.street_committed[player] = max(already, to_amount)

    def refund(self, player: str, amount: Decimal) -> None:
        """Chips moved back to a stack (uncalled bet or pot collection)."""
        self.chips[player] = self.chips.get(player, ZERO) + amount

    def return_uncalled(self, player: str, amount: Decimal) -> None:
        self.refund(player, amount)
        self.total_returned += amount
        if player in self.street_committed:
            self.street_committed[player] = max(ZERO, self.street_committed[player] - amount)

    def mark_all_in(self, player: str, amount: Decimal, raise_to: bool = False) -> None:
        self.all_in[player] = amount
        self.active.discard(player)
        if raise_to:
            self.commit_to(player, amount)
        else:
            self.commit(player, amount)

    def fold(self, player: str) -> None:
        self.active.discard(player)

    def ranked_all_ins(self) -> List[str]:
        """All-in players ordered by all-in amount, smallest first."""
        return sorted(self.all_in, key=lambda name: self.all_in[name])

    def active_players(self) -> List[str]:
        """Players still contesting, in seat order."""
        return [name for name in self.seats if name in self.active]

    # Action log

    def create_action(
        self,
        type: ActionType,
        player: Optional[str] = None,
        amount: Optional[Decimal] = None,
        street: Street = 'preflop',
        **extra,
    ) -> Action:
        action = Action(
            index=self._next_index,
            street=street,
            type=type,
            player=player,
            amount=amount,
            **extra,
        )
        self._next_index += 1
        return action

    # Diagnostics

    def warn(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        logger.warning(message)
        self.warnings.append(message)
