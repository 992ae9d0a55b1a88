"""
Street action engine.
Consumes the action lines of one street, keeping chip, all-in and activity state current.
"""

import logging
from typing import Callable, Dict, List

from .context import ParseContext
from .grammar import LineKind, LineMatch, classify, is_street_boundary
from .schemas import Action, Street

logger = logging.getLogger(__name__)

Handler = Callable[[ParseContext, LineMatch, Street], Action]


_ALL_IN_TYPES = {
    LineKind.RAISE_ALL_IN: 'raise',
    LineKind.CALL_ALL_IN: 'call',
    LineKind.BET_ALL_IN: 'bet',
}


def _all_in(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    ctx.mark_all_in(m.player, m.amount, raise_to=m.kind is LineKind.RAISE_ALL_IN)
    return ctx.create_action(_ALL_IN_TYPES[m.kind], m.player, m.amount, street, is_all_in=True)


def _state(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    reason = None
    if m.kind is LineKind.TIMEOUT:
        reason = ctx.config.timeout_reason
    elif m.kind is LineKind.DISCONNECT:
        reason = ctx.config.disconnect_reason
    return ctx.create_action(m.kind.value, m.player, None, street, reason=reason)


def _fold(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    ctx.fold(m.player)
    return ctx.create_action('fold', m.player, None, street)


def _check(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    return ctx.create_action('check', m.player, None, street)


def _wager(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    if m.kind is LineKind.RAISE:
        ctx.commit_to(m.player, m.amount)
    else:
        ctx.commit(m.player, m.amount)
    return ctx.create_action(m.kind.value, m.player, m.amount, street)


def _uncalled(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    ctx.return_uncalled(m.player, m.amount)
    return ctx.create_action('uncalled', m.player, m.amount, street)


def _collected(ctx: ParseContext, m: LineMatch, street: Street) -> Action:
    ctx.refund(m.player, m.amount)
    return ctx.create_action('collected', m.player, m.amount, street)


HANDLERS: Dict[LineKind, Handler] = {
    LineKind.RAISE_ALL_IN: _all_in,
    LineKind.CALL_ALL_IN: _all_in,
    LineKind.BET_ALL_IN: _all_in,
    LineKind.MUCK: _state,
    LineKind.TIMEOUT: _state,
    LineKind.DISCONNECT: _state,
    LineKind.RECONNECT: _state,
    LineKind.SIT_OUT: _state,
    LineKind.RETURN: _state,
    LineKind.FOLD: _fold,
    LineKind.CHECK: _check,
    LineKind.CALL: _wager,
    LineKind.BET: _wager,
    LineKind.RAISE: _wager,
    LineKind.UNCALLED: _uncalled,
    LineKind.COLLECTED: _collected,
}

STATE_KINDS = frozenset({
    LineKind.MUCK, LineKind.TIMEOUT, LineKind.DISCONNECT,
    LineKind.RECONNECT, LineKind.SIT_OUT, LineKind.RETURN,
})


def apply_line(ctx: ParseContext, m: LineMatch, street: Street):
    """
    Turn one classified line into an action.

    Returns None for noise lines and for lines naming a player who has no
    seat; the latter leave a diagnostic so the action log only names seated
    players.
    """
    if m.kind is LineKind.NOISE:
        return None
    if not ctx.is_seated(m.player):
        ctx.warn(f"ignored {m.kind.value} by unseated player {m.player!r}", ctx.cursor.position)
        return None
    return HANDLERS[m.kind](ctx, m, street)


def parse_street_actions(ctx: ParseContext, street: Street) -> List[Action]:
    """
    Consume action lines until the next section marker.

    An unrecognized line ends the street early without failing the hand;
    the line is left unconsumed and a diagnostic is recorded.
    """
    cursor = ctx.cursor
    actions: List[Action] = []
    if street != 'preflop':
        # Posted blinds count toward the preflop round
        ctx.start_street()

    while not cursor.at_end():
        line = cursor.peek()
        if is_street_boundary(line):
            break

        match = classify(line)
        if match is None:
            ctx.warn(f"unrecognized {street} line, stopped reading {street} actions: {line!r}",
                     cursor.position)
            break

        action = apply_line(ctx, match, street)
        if action is not None:
            actions.append(action)
        cursor.advance()

    logger.debug(f"{street}: {len(actions)} actions")
    return actions
