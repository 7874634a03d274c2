"""Shared fixtures for duel engine tests."""

from collections.abc import Callable, Sequence

import pytest

from synapse_duel.engine import DuelEngine, DuelState, Initialize, StatusEffect
from synapse_duel.models import Card, Category, GameStats, MasteryRecord, Side, StatusEffectType


@pytest.fixture
def card_factory() -> Callable[..., Card]:
    """Build cards with sensible defaults (10/5 Movement card costing 2)."""

    def _make(
        card_id: str,
        attack: int = 10,
        defense: int = 5,
        categories: Sequence[Category] = (Category.MOVEMENT,),
        cost: int | None = 2,
        **kwargs,
    ) -> Card:
        return Card(
            id=card_id,
            name=card_id.replace("_", " ").title(),
            categories=tuple(categories),
            game_stats=GameStats(attack=attack, defense=defense),
            stamina_cost=cost,
            **kwargs,
        )

    return _make


@pytest.fixture
def engine() -> DuelEngine:
    """Engine with the standard rules and combos."""
    return DuelEngine()


@pytest.fixture
def start_duel(engine: DuelEngine) -> Callable[..., DuelState]:
    """Initialize a fresh duel."""

    def _start(
        hand: Sequence[Card],
        opponent_hand: Sequence[Card] = (),
        mastery: dict[str, MasteryRecord] | None = None,
        **kwargs,
    ) -> DuelState:
        action = Initialize(
            hand=tuple(hand),
            opponent_hand=tuple(opponent_hand),
            mastery=mastery or {},
            **kwargs,
        )
        return engine.apply(DuelState(), action)

    return _start


def with_effects(state: DuelState, side: Side, *types: StatusEffectType, duration: int = 2) -> DuelState:
    """Give a side status effects (test helper)."""
    effects = tuple(
        StatusEffect(id=f"{side.value}-t{i}", type=effect_type, duration=duration)
        for i, effect_type in enumerate(types)
    )
    return state.with_side(side, effects=state.effects(side) + effects)


@pytest.fixture
def add_effects() -> Callable[..., DuelState]:
    """Attach status effects to a side of a state."""
    return with_effects

