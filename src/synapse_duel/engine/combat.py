"""Combat resolver - applies the effect of playing one card."""

import logging
import math
from dataclasses import replace
from enum import Enum
from typing import TYPE_CHECKING

from ..models.cards import Card
from ..models.combos import DEFAULT_COMBOS, Combo, DoubleDamage, Heal, Immune, Stun, find_combo
from ..models.enums import EffectTarget, ScreenEffect, Side, StatusEffectType
from .rules import DEFAULT_RULES, DuelRules
from .turn import check_winner
from .types import DuelState, StatusEffect, Vfx

if TYPE_CHECKING:
    from .logging import DuelLogger

logger = logging.getLogger(__name__)

HEAL_VFX = Vfx(type="heal", color="#4ade80")


class PlayRejection(str, Enum):
    """Why a card play was refused. Values are user-facing messages."""

    NOT_ONGOING = "The duel is not in progress."
    NOT_IN_HAND = "That protocol is not in hand."
    INSUFFICIENT_STAMINA = "Not enough Stamina!"
    FATIGUED = "Fatigued: Cannot play high-cost protocols."


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def remove_first(cards: tuple[Card, ...], card_id: str) -> tuple[Card, ...]:
    """Remove the first card with ``card_id``, keeping the order of the rest."""
    for index, card in enumerate(cards):
        if card.id == card_id:
            return cards[:index] + cards[index + 1 :]
    return cards


class CombatResolver:
    """Resolves card plays: costs, modifiers, combos, damage and status effects."""

    def __init__(
        self,
        rules: DuelRules = DEFAULT_RULES,
        combos: tuple[Combo, ...] = DEFAULT_COMBOS,
        logger: "DuelLogger | None" = None,
    ) -> None:
        self.rules = rules
        self.combos = combos
        self.logger = logger

    def effective_cost(self, state: DuelState, side: Side, card: Card) -> int:
        """Stamina cost after the Energized discount (floored at 0)."""
        cost = card.cost
        if state.has_effect(side, StatusEffectType.ENERGIZED):
            cost = max(0, cost - self.rules.energized_discount)
        return cost

    def held_card(self, state: DuelState, side: Side, card_id: str) -> Card | None:
        """The hand copy of a card, which carries mastery bonuses applied at setup."""
        for card in state.hand_of(side):
            if card.id == card_id:
                return card
        return None

    def check_play(self, state: DuelState, card: Card, is_player: bool) -> PlayRejection | None:
        """Check whether a side may play a card.

        Costs are read from the copy of the card held in hand, not from ``card``.

        Returns:
            The rejection reason, or None if the play is allowed
        """
        side = Side.of(is_player)
        if not state.is_ongoing:
            return PlayRejection.NOT_ONGOING
        held = self.held_card(state, side, card.id)
        if held is None:
            return PlayRejection.NOT_IN_HAND
        if self.effective_cost(state, side, held) > state.stamina(side):
            return PlayRejection.INSUFFICIENT_STAMINA
        if state.has_effect(side, StatusEffectType.FATIGUED) and held.cost > self.rules.fatigue_cost_threshold:
            return PlayRejection.FATIGUED
        return None

    def play_card(self, state: DuelState, card: Card, is_player: bool) -> DuelState:
        """Play a card for one side.

        Flow:
        1. Cost and fatigue checks (rejections return ``state`` unchanged)
        2. Base damage from attack, Focused multiplier
        3. Combo check against the category this side primed, or arm the card's category
        4. Calm mitigation on the defender
        5. Spend stamina, shift bio-rhythm, apply damage/heal, consume one-shot buffs,
           apply the card's status effect, remove the card from hand
        6. Set UI signals and check for a winner

        Args:
            state: Current duel state
            card: Card being played
            is_player: True if the player plays it, False for the opponent

        Returns:
            New duel state
        """
        side = Side.of(is_player)
        defender = side.other

        rejection = self.check_play(state, card, is_player)
        if rejection is not None:
            logger.debug("Rejected %s play of %s: %s", side.value, card.id, rejection.name)
            if self.logger:
                self.logger.log_play_rejected(side, card.id, card.name, rejection.value)
            return state

        # Resolve against the hand copy; only the id of the passed card is trusted
        card = self.held_card(state, side, card.id) or card
        rules = self.rules
        cost = self.effective_cost(state, side, card)
        energized = state.find_effect(side, StatusEffectType.ENERGIZED)
        focused = state.find_effect(side, StatusEffectType.FOCUSED)

        damage = card.attack
        if focused:
            damage = round_half_up(damage * rules.focused_multiplier)

        # Combo: fire against the category this side armed, otherwise arm this card's category
        combo = None
        if state.primed_by is side:
            combo = find_combo(state.primed_category, card.categories, self.combos)
        primed = state.primed_category
        primed_by = state.primed_by
        heal = 0
        stunned = state.stunned
        immune_turns = {s: state.immune_turns(s) for s in Side}
        if combo is not None:
            primed = None
            primed_by = None
            match combo.effect:
                case DoubleDamage():
                    damage *= rules.combo_damage_multiplier
                case Heal(amount=amount):
                    heal = amount
                case Stun():
                    stunned = stunned | {defender}
                case Immune(turns=turns):
                    immune_turns[side] = turns
        elif card.primes_category is not None:
            primed = card.primes_category
            primed_by = side

        if state.has_effect(defender, StatusEffectType.CALM):
            damage = round_half_up(damage * rules.calm_multiplier)

        # Consume one-shot buffs
        consumed = {e.id for e in (energized, focused) if e is not None}
        effects = {
            side: tuple(e for e in state.effects(side) if e.id not in consumed),
            defender: state.effects(defender),
        }

        next_effect_id = state.next_effect_id
        effect_spec = card.applies_status_effect
        if effect_spec is not None:
            target = side if effect_spec.target == EffectTarget.SELF else defender
            if effect_spec.type.is_negative and immune_turns[target] > 0:
                logger.debug("%s is immune, %s not applied", target.value, effect_spec.type.value)
            else:
                new_effect = StatusEffect(
                    id=f"{target.value}-{next_effect_id}",
                    type=effect_spec.type,
                    duration=effect_spec.duration,
                    value=effect_spec.value,
                )
                effects[target] = effects[target] + (new_effect,)
                next_effect_id += 1

        attacker_hp = state.hp(side)
        if heal:
            attacker_hp = max(attacker_hp, min(state.max_hp(side), attacker_hp + heal))

        ui = replace(
            state.ui,
            attacking_card_id=f"{side.value}-{card.id}",
            screen_effect=ScreenEffect.SHAKE,
            passed_side=None,
            **{f"{defender.value}_damage": damage},
        )
        if heal:
            ui = replace(ui, **{f"{side.value}_vfx": HEAL_VFX})

        new_state = replace(
            state,
            bio_rhythm=rules.clamp_bio_rhythm(state.bio_rhythm + (card.bio_rhythm_impact or 0)),
            primed_category=primed,
            primed_by=primed_by,
            active_combo=combo,
            stunned=stunned,
            next_effect_id=next_effect_id,
            message=f"{combo.name} Combo!" if combo else state.message,
            ui=ui,
        )
        new_state = new_state.with_side(
            side,
            hp=attacker_hp,
            stamina=state.stamina(side) - cost,
            effects=effects[side],
            hand=remove_first(state.hand_of(side), card.id),
            immune_turns=immune_turns[side],
        )
        new_state = new_state.with_side(
            defender,
            hp=state.hp(defender) - damage,
            effects=effects[defender],
            immune_turns=immune_turns[defender],
        )
        new_state = check_winner(new_state)

        if self.logger:
            if combo is not None:
                self.logger.log_combo(side, combo.name, combo.description)
            self.logger.log_card_played(side, card.id, card.name, damage, state, new_state)
            if new_state.is_over:
                self.logger.log_duel_ended(new_state)

        return new_state
