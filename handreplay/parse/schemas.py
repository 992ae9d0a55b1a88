"""
Pydantic schemas for poker hand history parsing.
Defines the hand record returned to replay consumers and the tagged parse result.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Type definitions
ActionType = Literal[
    "blind", "ante",
    "fold", "check", "call", "bet", "raise",
    "show", "uncalled", "collected", "muck",
    "timeout", "disconnect", "reconnect", "sitout", "return",
]

Street = Literal["preflop", "flop", "turn", "river", "showdown"]

PotType = Literal["main", "side", "single"]


class TableInfo(BaseModel):
    """Table configuration from the line following the header."""
    model_config = ConfigDict(frozen=True)

    name: str
    max_seats: int = 9
    button_seat: int = 1


class Player(BaseModel):
    """Represents a player seated for this hand."""
    model_config = ConfigDict(frozen=True)

    seat: int
    name: str
    chips: Decimal                          # Starting stack
    current_chips: Decimal                  # Tracked stack once the hand is over
    cards: Optional[Tuple[str, str]] = None
    is_hero: bool = False
    is_all_in: bool = False
    all_in_amount: Optional[Decimal] = None


class Action(BaseModel):
    """A single event of the hand, in emission order."""
    model_config = ConfigDict(frozen=True)

    index: int
    street: Street
    type: ActionType
    player: Optional[str] = None
    amount: Optional[Decimal] = None
    cards: Optional[Tuple[str, ...]] = None
    reason: Optional[str] = None
    is_all_in: bool = False


class Pot(BaseModel):
    """Main pot, side pot or the single pot of a hand."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    players: Tuple[str, ...] = ()           # Winners, in collection order
    is_side: bool = False
    side_pot_level: int = 0                 # 0 is the main pot
    eligible_players: Tuple[str, ...] = ()
    is_split: bool = False
    odd_chip_winner: Optional[str] = None


class CollectedAction(BaseModel):
    """A pot collection line ("X collected N from side pot-2")."""
    model_config = ConfigDict(frozen=True)

    player: str
    amount: Decimal
    type: PotType
    side_pot_level: Optional[int] = None


class PotCalculation(BaseModel):
    """Pot structure estimated from all-in amounts and contributions."""
    total_pot: Decimal
    main_pot: Optional[Decimal] = None
    side_pots: List[Tuple[int, Decimal]] = []   # (level, amount)


class Hand(BaseModel):
    """Complete hand history record."""
    model_config = ConfigDict(frozen=True)

    # Metadata
    id: str
    tournament_id: Optional[str] = None
    stakes: str
    date: datetime

    # Table and seats
    table: TableInfo
    players: Tuple[Player, ...] = ()

    # Play
    actions: Tuple[Action, ...] = ()
    board: Tuple[str, ...] = ()

    # Result
    pots: Tuple[Pot, ...] = ()
    total_pot: Optional[Decimal] = None
    rake: Optional[Decimal] = None

    def player(self, name: str) -> Optional[Player]:
        for p in self.players:
            if p.name == name:
                return p
        return None


class ParserError(BaseModel):
    """Why a parse failed and where."""
    message: str
    line: Optional[int] = None          # 0-based index of the line reached
    context: Optional[str] = None       # Text of that line, when there is one


class ParseSuccess(BaseModel):
    status: Literal["ok"] = "ok"
    hand: Hand
    warnings: List[str] = []            # Non-fatal diagnostics

    @property
    def success(self) -> bool:
        return True


class ParseFailure(BaseModel):
    status: Literal["error"] = "error"
    error: ParserError

    @property
    def success(self) -> bool:
        return False


ParseResult = Annotated[Union[ParseSuccess, ParseFailure], Field(discriminator="status")]
