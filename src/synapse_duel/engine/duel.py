"""Duel engine - the state machine composing setup, combat, turn processing and policy."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..models.cards import ChallengeProfile, PlayerProfile
from ..models.combos import DEFAULT_COMBOS, Combo
from ..models.enums import DuelStatus, Side
from .actions import (
    Action,
    AttackAnimationComplete,
    EndDuel,
    Initialize,
    OpponentTurn,
    PassTurn,
    PlayCard,
    ProcessStartOfTurn,
)
from .combat import CombatResolver
from .policy import OpponentPolicy
from .rules import DEFAULT_RULES, DuelRules
from .setup import DuelSetup
from .turn import TurnStartProcessor
from .types import DuelState, UiSignals

if TYPE_CHECKING:
    from .logging import DuelLogger

logger = logging.getLogger(__name__)


@dataclass
class DuelResult:
    """Terminal outcome of a duel, handed to post-duel collaborators."""

    victory: bool
    status: DuelStatus
    player_hp: int
    opponent_hp: int
    message: str | None = None
    stake: int | None = None
    challenge: ChallengeProfile | None = None
    opponent: PlayerProfile | None = None

    @classmethod
    def from_state(cls, state: DuelState) -> "DuelResult":
        """Build the result from a terminal state."""
        return cls(
            victory=state.status == DuelStatus.VICTORY,
            status=state.status,
            player_hp=max(0, state.player_hp),
            opponent_hp=max(0, state.opponent_hp),
            message=state.message,
            stake=state.stake,
            challenge=state.challenge,
            opponent=state.opponent,
        )


class DuelEngine:
    """Main duel engine - a pure reducer over DuelState.

    ``apply`` never mutates its input and never raises for game-rule violations:
    refused or unknown actions return the state unchanged.
    """

    def __init__(
        self,
        rules: DuelRules | None = None,
        combos: tuple[Combo, ...] = DEFAULT_COMBOS,
        logger: "DuelLogger | None" = None,
    ) -> None:
        self.rules = rules or DEFAULT_RULES
        self.logger = logger
        self.setup = DuelSetup(self.rules)
        self.combat = CombatResolver(self.rules, combos, logger=logger)
        self.turn_processor = TurnStartProcessor(self.rules, logger=logger)
        self.policy = OpponentPolicy(self.rules)

    def apply(self, state: DuelState, action: Action) -> DuelState:
        """Apply one action and return the next state.

        Args:
            state: Current duel state
            action: Action to apply

        Returns:
            The next state, or ``state`` itself if the action was refused
        """
        match action:
            case Initialize():
                return self._initialize(state, action)
            case ProcessStartOfTurn(is_player=is_player):
                return self.turn_processor.process(state, is_player)
            case PlayCard(card=card, is_player=is_player):
                return self.combat.play_card(state, card, is_player)
            case OpponentTurn():
                return self._opponent_turn(state)
            case PassTurn(is_player=is_player):
                return self._pass(state, Side.of(is_player))
            case AttackAnimationComplete(was_player_attack=was_player_attack):
                return self._attack_animation_complete(state, was_player_attack)
            case EndDuel(victory=victory):
                return self._end_duel(state, victory)
            case _:
                logger.debug("Ignoring unknown action %r", action)
                return state

    def _initialize(self, state: DuelState, action: Initialize) -> DuelState:
        new_state = self.setup.initialize(state, action)
        if self.logger and new_state is not state:
            self.logger.log_duel_started(new_state)
        return new_state

    def _opponent_turn(self, state: DuelState) -> DuelState:
        """Play the policy's card for the opponent, or pass if nothing is playable."""
        if not state.is_ongoing:
            return state
        card = self.policy.choose_card(state, Side.OPPONENT)
        if card is None:
            return self._pass(state, Side.OPPONENT)
        return self.combat.play_card(state, card, is_player=False)

    def _pass(self, state: DuelState, side: Side) -> DuelState:
        """Refund stamina to a passing side.

        Control is handed over by the following ATTACK_ANIMATION_COMPLETE, as after a play.
        """
        if not state.is_ongoing:
            return state
        refund = self.rules.pass_stamina_refund
        if side is Side.PLAYER:
            message = "You pass."
        elif not state.opponent_hand:
            message = f"{state.opponent_name} has no cards and passes."
        else:
            message = f"{state.opponent_name} is out of stamina and passes."
        new_state = replace(state, message=message, ui=replace(state.ui, passed_side=side))
        new_state = new_state.with_side(side, stamina=state.stamina(side) + refund)
        if self.logger:
            self.logger.log_pass(side, refund)
        return new_state

    def _attack_animation_complete(self, state: DuelState, was_player_attack: bool) -> DuelState:
        """Flip turn control and clear every transient UI signal.

        A stunned side loses the turn it would receive; control stays with the attacker.
        On a finished duel only the UI signals are cleared.
        """
        if not state.is_ongoing:
            return replace(state, ui=UiSignals(), active_combo=None)

        attacker = Side.of(was_player_attack)
        next_side = attacker.other
        stunned = state.stunned
        skipped: Side | None = None
        if next_side in stunned:
            stunned = stunned - {next_side}
            skipped = next_side
            next_side = attacker

        if skipped is Side.OPPONENT:
            message = f"{state.opponent_name} is stunned and misses a turn!"
        elif skipped is Side.PLAYER:
            message = "You are stunned and miss a turn!"
        else:
            message = "Your turn!" if next_side is Side.PLAYER else "Opponent's turn."

        if self.logger:
            self.logger.log_turn_changed(next_side, skipped=skipped)

        return replace(
            state,
            turn=next_side,
            stunned=stunned,
            message=message,
            active_combo=None,
            ui=UiSignals(),
        )

    def _end_duel(self, state: DuelState, victory: bool) -> DuelState:
        """Force a terminal result."""
        if not state.is_ongoing:
            return state
        new_state = replace(
            state,
            status=DuelStatus.VICTORY if victory else DuelStatus.DEFEAT,
            message="Victory!" if victory else "Defeat!",
        )
        if self.logger:
            self.logger.log_duel_ended(new_state)
        return new_state


_default_engine = DuelEngine()


def apply(state: DuelState, action: Action) -> DuelState:
    """Apply an action with the standard rules and combos."""
    return _default_engine.apply(state, action)


class DuelSession:
    """Single owner of a duel's latest state.

    Feeds actions through the engine and notifies ``on_finish`` exactly once when the
    duel first reaches victory or defeat (rating updates, payouts, etc. hook in here).
    """

    def __init__(
        self,
        engine: DuelEngine | None = None,
        on_finish: Callable[[DuelResult], None] | None = None,
        state: DuelState | None = None,
    ) -> None:
        self.engine = engine or _default_engine
        self.on_finish = on_finish
        self._state = state or DuelState()
        self._finished = self._state.is_over

    @property
    def state(self) -> DuelState:
        """Latest duel state."""
        return self._state

    @property
    def result(self) -> DuelResult | None:
        """Terminal result, or None while the duel is running."""
        if not self._state.is_over:
            return None
        return DuelResult.from_state(self._state)

    def dispatch(self, action: Action) -> bool:
        """Apply an action.

        Returns:
            True if the state changed (the action was accepted)
        """
        previous = self._state
        self._state = self.engine.apply(previous, action)

        if self._state.is_over and not self._finished:
            self._finished = True
            if self.on_finish is not None:
                self.on_finish(DuelResult.from_state(self._state))

        return self._state != previous
