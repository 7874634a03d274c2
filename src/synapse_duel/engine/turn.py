"""Turn-start processor - damage over time, status decay and win check."""

from dataclasses import replace
from typing import TYPE_CHECKING

from ..models.enums import DuelStatus, Side, StatusEffectType
from .rules import DEFAULT_RULES, DuelRules
from .types import DuelState, Vfx

if TYPE_CHECKING:
    from .logging import DuelLogger

INFLAMED_VFX = Vfx(type="status", color="#f87171")


def check_winner(state: DuelState) -> DuelState:
    """Move an ongoing duel to victory/defeat if a side is at or below 0 HP.

    The player's defeat is checked first.
    """
    if not state.is_ongoing:
        return state
    if state.player_hp <= 0:
        return replace(state, status=DuelStatus.DEFEAT, message="You have been defeated!")
    if state.opponent_hp <= 0:
        return replace(state, status=DuelStatus.VICTORY, message="Victory!")
    return state


class TurnStartProcessor:
    """Applies start-of-turn effects for one side."""

    def __init__(self, rules: DuelRules = DEFAULT_RULES, logger: "DuelLogger | None" = None) -> None:
        self.rules = rules
        self.logger = logger

    def process(self, state: DuelState, is_player: bool) -> DuelState:
        """Process the start of a side's turn.

        Turn-start flow:
        1. Every Inflamed instance deals its damage
        2. All of the side's effect durations drop by 1, expired ones are removed
        3. The side's combo immunity counts down
        4. Win condition is re-checked

        Args:
            state: Current duel state
            is_player: Which side's turn is starting

        Returns:
            New duel state (unchanged if the duel is not ongoing)
        """
        if not state.is_ongoing:
            return state

        side = Side.of(is_player)
        effects = state.effects(side)

        inflamed = sum(1 for e in effects if e.type == StatusEffectType.INFLAMED)
        damage = inflamed * self.rules.inflamed_damage

        ticked = tuple(replace(e, duration=e.duration - 1) for e in effects if e.duration > 1)

        ui = replace(state.ui, **{f"{side.value}_damage": damage if damage > 0 else None})
        message = state.message
        if damage > 0:
            ui = replace(ui, **{f"{side.value}_vfx": INFLAMED_VFX})
            who = "You" if is_player else state.opponent_name
            message = f"{who} took {damage} damage from Inflamed!"

        new_state = replace(state, ui=ui, message=message)
        new_state = new_state.with_side(
            side,
            hp=state.hp(side) - damage,
            effects=ticked,
            immune_turns=max(0, state.immune_turns(side) - 1),
        )
        new_state = check_winner(new_state)

        if self.logger:
            self.logger.log_turn_start(side, state, new_state)
            if new_state.is_over:
                self.logger.log_duel_ended(new_state)

        return new_state

