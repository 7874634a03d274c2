"""Duel setup - seeds a pending duel and applies mastery bonuses."""

import logging
from collections.abc import Mapping

from ..models.cards import Card, MasteryAbility, MasteryRecord
from ..models.enums import DuelStatus, MasteryLevel, Side
from .actions import Initialize
from .rules import DEFAULT_RULES, DuelRules
from .types import DuelState

logger = logging.getLogger(__name__)


class DuelSetup:
    """Builds the ongoing state of a new duel from an INITIALIZE action."""

    def __init__(self, rules: DuelRules = DEFAULT_RULES) -> None:
        self.rules = rules

    def initialize(self, state: DuelState, action: Initialize) -> DuelState:
        """Seed HP, stamina and hands, apply mastery bonuses and start the duel.

        Only a pending duel can be initialized. A second INITIALIZE is logged and
        ignored, so an ongoing duel is never reset by a stray action.
        """
        if state.status != DuelStatus.PENDING:
            logger.warning("Ignoring INITIALIZE on a duel that is already %s", state.status.value)
            return state

        rules = self.rules
        player_hp = action.player_hp if action.player_hp is not None else rules.starting_hp
        opponent_hp = action.opponent_hp if action.opponent_hp is not None else rules.starting_hp

        hand = tuple(self._apply_mastery_bonus(card, action.mastery) for card in action.hand)
        player_hp_bonus = sum(self._duel_start_hp_bonus(card, action.mastery) for card in hand)

        return DuelState(
            player_hp=player_hp + player_hp_bonus,
            opponent_hp=opponent_hp,
            max_player_hp=player_hp + player_hp_bonus,
            max_opponent_hp=opponent_hp,
            turn=Side.PLAYER,
            hand=hand,
            opponent_hand=tuple(action.opponent_hand),
            status=DuelStatus.ONGOING,
            message="Your turn!",
            player_stamina=rules.starting_stamina,
            opponent_stamina=rules.starting_stamina,
            challenge=action.challenge,
            opponent=action.opponent,
            stake=action.stake,
        )

    def _apply_mastery_bonus(self, card: Card, mastery: Mapping[str, MasteryRecord]) -> Card:
        """Give boosted-tier cards their flat attack/defense bonus."""
        record = mastery.get(card.id)
        if record is None or record.level not in self.rules.boosted_levels:
            return card
        return card.with_bonus(self.rules.mastery_attack_bonus, self.rules.mastery_defense_bonus)

    def _duel_start_hp_bonus(self, card: Card, mastery: Mapping[str, MasteryRecord]) -> int:
        """Max HP granted by a card's duel-start passives."""
        record = mastery.get(card.id)
        if record is None or record.level not in self.rules.passive_levels:
            return 0

        abilities: list[MasteryAbility | None] = [card.expert_ability]
        if record.level == MasteryLevel.MASTER:
            abilities.append(card.master_ability)

        bonus = 0
        for ability in abilities:
            if ability is None or not ability.is_duel_start_passive:
                continue
            gained = ability.max_hp_bonus if ability.max_hp_bonus is not None else self.rules.passive_max_hp_bonus
            logger.debug("Passive %s on %s grants +%d max HP", ability.name, card.id, gained)
            bonus += gained
        return bonus
