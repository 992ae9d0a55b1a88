"""
Pot reconstruction.

Transcripts only state pots implicitly: collection lines are scattered through
the hand and the summary gives the amounts. This module rebuilds the main and
side pots, decides who was eligible for each, attaches winners, and flags
splits. Nothing here is fatal; inconsistencies become warnings.
"""

import re
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from .context import ParseContext, ZERO
from .grammar import amount_pattern
from .schemas import CollectedAction, Pot, PotCalculation
from .utils import clean_amount, format_amount

logger = logging.getLogger(__name__)

_AMOUNT = amount_pattern('amount')

COLLECTED_MAIN = re.compile(rf'^(?P<player>.+?) collected {_AMOUNT} from main pot$')
COLLECTED_SIDE = re.compile(rf'^(?P<player>.+?) collected {_AMOUNT} from side pot(?:-(?P<level>\d+))?$')
COLLECTED_POT = re.compile(rf'^(?P<player>.+?) collected {_AMOUNT} from pot$')

TOTAL_POT = re.compile(rf'Total pot {_AMOUNT}')
MAIN_POT = re.compile(rf'Main pot {_AMOUNT}')
SIDE_POT = re.compile(rf'Side pot(?:-(?P<level>\d+))? {_AMOUNT}')
RAKE = re.compile(rf'\|\s*Rake {_AMOUNT}')

SEAT_RESULT = re.compile(
    rf'^Seat (?P<seat>\d+): (?P<rest>.+?) (?:won|collected) \({_AMOUNT}\)'
)


def extract_collected_actions(lines: Iterable[str]) -> List[CollectedAction]:
    """Every "collected ... from (main|side|) pot" line of the hand, in order."""
    collected: List[CollectedAction] = []

    for line in lines:
        entry = None
        m = COLLECTED_MAIN.match(line)
        if m:
            entry = CollectedAction(player=m.group('player'), amount=clean_amount(m.group('amount')),
                                    type='main')
        else:
            m = COLLECTED_SIDE.match(line)
            if m:
                level = int(m.group('level')) if m.group('level') else None
                entry = CollectedAction(player=m.group('player'), amount=clean_amount(m.group('amount')),
                                        type='side', side_pot_level=level)
            else:
                m = COLLECTED_POT.match(line)
                if m:
                    entry = CollectedAction(player=m.group('player'),
                                            amount=clean_amount(m.group('amount')), type='single')

        if entry is not None and entry not in collected:
            collected.append(entry)

    return collected


def calculate_pot_structure(
    all_in_amounts: Sequence[Decimal],
    total_contributions: Decimal,
    active_count: int,
) -> PotCalculation:
    """
    Estimate main and side pots from all-in tiers.

    Each tier holds the step between consecutive distinct all-in amounts times
    the players still contributing at that tier. Whatever is left over belongs
    to a last side pot for the players who were never all-in.
    """
    calculation = PotCalculation(total_pot=total_contributions)
    if not all_in_amounts:
        return calculation

    tiers = sorted(set(all_in_amounts))
    total_players = len(all_in_amounts) + active_count
    side_pots = []
    previous = ZERO

    for i, amount in enumerate(tiers):
        pot_amount = (amount - previous) * (total_players - i)
        if i == 0:
            calculation.main_pot = pot_amount
        else:
            side_pots.append((i, pot_amount))
        previous = amount

    if active_count:
        remaining = total_contributions - (calculation.main_pot or ZERO) - sum(a for _, a in side_pots)
        if remaining > 0:
            side_pots.append((len(tiers), remaining))

    calculation.side_pots = side_pots
    return calculation


class PotReconstructor:
    """Builds the pots of one hand from a ParseContext positioned after the showdown."""

    def __init__(self, ctx: ParseContext):
        self.ctx = ctx
        self.epsilon = Decimal(str(ctx.config.epsilon))
        self.total_pot: Optional[Decimal] = None
        self.rake: Optional[Decimal] = None

    # Eligibility

    def eligible_players(self, level: int) -> List[str]:
        """
        Main pot (level 0): every all-in player plus every active player.
        Side pot level k: all-in players ranked k or higher by all-in amount
        (rank 0 is the smallest) plus the active players. Levels past the
        last all-in rank have nobody eligible.
        """
        ranked = self.ctx.ranked_all_ins()
        active = set(self.ctx.active_players())

        if level == 0:
            eligible = set(ranked) | active
        elif level <= len(ranked):
            eligible = set(ranked[level:]) | active
        else:
            eligible = set()

        return [name for name in self.ctx.player_names() if name in eligible]

    # Summary parsing

    def reconstruct(self, collected: List[CollectedAction]) -> List[Pot]:
        cursor = self.ctx.cursor

        while not cursor.at_end() and 'SUMMARY' not in cursor.peek():
            cursor.advance()
        if cursor.at_end():
            logger.debug("No SUMMARY section, no pots")
            return []
        cursor.advance()

        pots = self._parse_pot_line()
        if pots is None:
            pots = self._estimated_pots()

        pots = self._enhance(pots, collected)
        pots = self._backfill_seat_results(pots)
        return [pot.model_copy(update={'is_split': len(pot.players) > 1}) for pot in pots]

    def _parse_pot_line(self) -> Optional[List[Pot]]:
        cursor = self.ctx.cursor
        start = cursor.position

        while not cursor.at_end():
            line = cursor.peek()
            total = TOTAL_POT.search(line)
            if total:
                break
            cursor.advance()
        else:
            # Leave the seat lines for the backfill scan
            cursor.restore(start)
            return None

        self.total_pot = clean_amount(total.group('amount'))
        rake = RAKE.search(line)
        if rake:
            self.rake = clean_amount(rake.group('amount'))

        main = MAIN_POT.search(line)
        if not main:
            return self._positive([Pot(amount=self.total_pot, eligible_players=self.eligible_players(0))])

        pots = [Pot(amount=clean_amount(main.group('amount')), side_pot_level=0,
                    eligible_players=self.eligible_players(0))]
        for position, side in enumerate(SIDE_POT.finditer(line), start=1):
            level = int(side.group('level')) if side.group('level') else position
            pots.append(Pot(
                amount=clean_amount(side.group('amount')),
                is_side=True,
                side_pot_level=level,
                eligible_players=self.eligible_players(level),
            ))
        return self._positive(pots)

    def _estimated_pots(self) -> List[Pot]:
        """Pots from the all-in estimate, used when the summary has no "Total pot" line."""
        ctx = self.ctx
        contributed = ctx.total_contributions - ctx.total_returned
        estimate = calculate_pot_structure(list(ctx.all_in.values()), contributed,
                                           len(ctx.active_players()))
        ctx.warn("summary has no 'Total pot' line, pots estimated from all-in amounts")

        if estimate.main_pot is None:
            return self._positive([Pot(amount=contributed, eligible_players=self.eligible_players(0))])

        pots = [Pot(amount=estimate.main_pot, eligible_players=self.eligible_players(0))]
        for level, amount in estimate.side_pots:
            pots.append(Pot(amount=amount, is_side=True, side_pot_level=level,
                            eligible_players=self.eligible_players(level)))
        return self._positive(pots)

    def _positive(self, pots: List[Pot]) -> List[Pot]:
        kept = [pot for pot in pots if pot.amount is not None and pot.amount > 0]
        if len(kept) != len(pots):
            self.ctx.warn(f"dropped {len(pots) - len(kept)} pot(s) without a positive amount")
        return kept

    # Validation and enhancement

    @staticmethod
    def relevant_collections(pot: Pot, collected: List[CollectedAction]) -> List[CollectedAction]:
        if pot.is_side:
            return [
                c for c in collected
                if c.type == 'side' and (c.side_pot_level is None or c.side_pot_level == pot.side_pot_level)
            ]
        return [c for c in collected if c.type in ('main', 'single')]

    @staticmethod
    def splits_evenly(amount: Decimal, ways: int) -> bool:
        """True if amount divides into `ways` shares at the precision it is written in."""
        exponent = min(amount.as_tuple().exponent, 0)
        unit = Decimal(1).scaleb(exponent)
        share = amount / ways
        return share == share.quantize(unit)

    def _enhance(self, pots: List[Pot], collected: List[CollectedAction]) -> List[Pot]:
        enhanced = []
        for pot in pots:
            relevant = self.relevant_collections(pot, collected)
            update = {'players': tuple(c.player for c in relevant)}

            if len(relevant) > 1:
                update['is_split'] = True
                if not self.splits_evenly(pot.amount, len(relevant)):
                    # Heuristic: largest collector takes the odd chip
                    biggest = max(relevant, key=lambda c: c.amount)
                    update['odd_chip_winner'] = biggest.player

            self._check_collected(pot, relevant, len(pots))
            enhanced.append(pot.model_copy(update=update))

        self._check_total(enhanced)
        return enhanced

    def _check_collected(self, pot: Pot, relevant: List[CollectedAction], pot_count: int) -> None:
        if not self.ctx.config.warn_on_pot_mismatch or not relevant:
            return
        rake = self.rake or ZERO
        expected = pot.amount - (rake if not pot.is_side or pot_count == 1 else ZERO)
        collected = sum((c.amount for c in relevant), ZERO)
        if abs(collected - expected) > self.epsilon:
            label = f"side pot {pot.side_pot_level}" if pot.is_side else "main pot"
            self.ctx.warn(
                f"{label} mismatch: expected {format_amount(expected)} "
                f"({format_amount(pot.amount)} - {format_amount(rake)} rake), "
                f"collected {format_amount(collected)}"
            )

    def _check_total(self, pots: List[Pot]) -> None:
        if not self.ctx.config.warn_on_pot_mismatch or self.total_pot is None or not pots:
            return
        summed = sum((pot.amount for pot in pots), ZERO)
        if abs(summed - self.total_pot) > self.epsilon:
            self.ctx.warn(
                f"pots add up to {format_amount(summed)}, total pot is {format_amount(self.total_pot)}"
            )

    # Seat result lines

    def _seat_player(self, seat: int, rest: str) -> Optional[str]:
        for name, player_seat in self.ctx.seats.items():
            if player_seat == seat:
                return name
        token = rest.split(' ')[0]
        return token if self.ctx.is_seated(token) else None

    def _backfill_seat_results(self, pots: List[Pot]) -> List[Pot]:
        """
        Add winners named only by summary seat lines ("Seat 2: Bob won (40)").

        Reads an immutable view of the remaining lines, so the cursor does
        not move. A name is added to the first pot of the same amount that
        does not already list it and for which the player is eligible.
        """
        saved = self.ctx.cursor.position
        pots = list(pots)

        for line in self.ctx.cursor.remaining():
            m = SEAT_RESULT.match(line)
            if not m:
                continue
            winner = self._seat_player(int(m.group('seat')), m.group('rest'))
            amount = clean_amount(m.group('amount'))
            if winner is None or amount is None:
                continue

            for i, pot in enumerate(pots):
                if abs(pot.amount - amount) > self.epsilon or winner in pot.players:
                    continue
                if pot.eligible_players and winner not in pot.eligible_players:
                    continue
                pots[i] = pot.model_copy(update={'players': pot.players + (winner,)})
                break

        self.ctx.cursor.restore(saved)
        return pots
