"""Opponent policy - picks the card the non-player side plays."""

from ..models.cards import Card
from ..models.enums import Side, StatusEffectType
from .rules import DEFAULT_RULES, DuelRules
from .types import DuelState


class OpponentPolicy:
    """Greedy heuristic: play the strongest affordable card.

    Deterministic - ties between equal-attack cards go to the one earliest in hand.
    """

    def __init__(self, rules: DuelRules = DEFAULT_RULES) -> None:
        self.rules = rules

    def playable_cards(self, state: DuelState, side: Side = Side.OPPONENT) -> list[Card]:
        """Cards the side can pay for and is not locked out of by Fatigued."""
        stamina = state.stamina(side)
        if state.has_effect(side, StatusEffectType.ENERGIZED):
            stamina += self.rules.energized_discount
        fatigued = state.has_effect(side, StatusEffectType.FATIGUED)

        playable: list[Card] = []
        for card in state.hand_of(side):
            if fatigued and card.cost > self.rules.fatigue_cost_threshold:
                continue
            if card.cost <= stamina:
                playable.append(card)
        return playable

    def choose_card(self, state: DuelState, side: Side = Side.OPPONENT) -> Card | None:
        """Pick the highest-attack playable card, or None to pass."""
        playable = self.playable_cards(state, side)
        if not playable:
            return None
        # sorted() is stable, so equal attacks keep hand order
        return sorted(playable, key=lambda card: card.attack, reverse=True)[0]
