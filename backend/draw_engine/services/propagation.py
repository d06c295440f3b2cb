"""
Winner propagation: copy decided results into the slots that depend on them.

Two mappings:
- knockout: game i of a round feeds game i // 2 of the next round, team A
  when i is even, team B when odd.
- qualifiers: game i of the last qualification round feeds the main-draw
  slot reserved for qualifier ordinal i + 1.

Every call rewrites dependent slots from the current results, so an
undecided or cleared game empties its target again (or restores the
QUALIFIER placeholder). A slot where a pair enters the round directly
always gets that pair back. Running it twice changes nothing the second time.
"""
import logging
from typing import Optional, Tuple

from draw_engine.models.game import Game
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.score import TeamSide
from draw_engine.utils.game_slots import get_team, set_team

logger = logging.getLogger(__name__)


def next_slot(game_index: int) -> Tuple[int, TeamSide]:
    """(next game index, side) fed by game_index."""
    side = TeamSide.TEAM_A if game_index % 2 == 0 else TeamSide.TEAM_B
    return game_index // 2, side


def _write(target: Game, side: TeamSide, pair: Optional[PlayerPair]) -> bool:
    if target.team(side) is pair:
        return False
    target.set_team(side, pair)
    return True


def propagate_knockout_round(current: Round, nxt: Round) -> int:
    """
    Push winners of current into nxt.

    Returns the number of slots that changed.

    Guarantees:
        - Idempotent
        - An empty or cleared current round empties nxt as well
        - Never raises on partial results
    """
    if len(nxt.games) * 2 != len(current.games):
        logger.debug(
            "%s -> %s is not a halving step, nothing to propagate",
            current.stage.value,
            nxt.stage.value,
        )
        return 0

    changed = 0
    for i, game in enumerate(current.games):
        target_index, side = next_slot(i)
        # slot i of nxt is fed by game i unless a pair enters there directly
        winner = nxt.entries.get(i, game.winner)
        if _write(nxt.games[target_index], side, winner):
            changed += 1
    if changed:
        logger.debug("Propagated %s -> %s (%d slots changed)", current.stage.value, nxt.stage.value, changed)
    return changed


def propagate_qualifiers(last_qualif_round: Round, main_first_round: Round) -> int:
    """
    Fill the main draw's QUALIFIER slots from the last qualification round.

    The slot of each ordinal is looked up once and remembered on the main-draw
    round, so a corrected qualification result replaces the earlier winner in
    place, and a cleared one puts QUALIFIER(ordinal) back.

    Returns the number of slots that changed.
    """
    changed = 0
    for i, game in enumerate(last_qualif_round.games):
        ordinal = i + 1
        slot = main_first_round.find_qualifier_slot(ordinal)
        if slot is None:
            logger.debug("No slot reserved for qualifier %d in %s", ordinal, main_first_round.stage.value)
            continue

        current = get_team(main_first_round, slot)
        winner = game.winner
        if winner is not None:
            if current is winner:
                continue
            set_team(main_first_round, slot, winner)
            changed += 1
            logger.debug("Qualifier %d -> %s", ordinal, winner.name)
        elif current is None or not (current.is_qualifier and current.qualifier_index == ordinal):
            set_team(main_first_round, slot, PlayerPair.qualifier(ordinal))
            changed += 1
    return changed
