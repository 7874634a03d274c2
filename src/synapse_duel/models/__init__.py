"""Duel input models - cards, profiles, combos and enums."""

from .cards import (
    Card,
    ChallengeProfile,
    GameStats,
    MasteryAbility,
    MasteryRecord,
    PlayerProfile,
    StatusEffectSpec,
)
from .combos import DEFAULT_COMBOS, Combo, ComboEffect, DoubleDamage, Heal, Immune, Stun, find_combo
from .enums import (
    AbilityTrigger,
    Category,
    DuelStatus,
    EffectTarget,
    MasteryLevel,
    ScreenEffect,
    Side,
    StatusEffectType,
    SynergyGrade,
)

__all__ = [
    # Enums
    "AbilityTrigger",
    "Category",
    "DuelStatus",
    "EffectTarget",
    "MasteryLevel",
    "ScreenEffect",
    "Side",
    "StatusEffectType",
    "SynergyGrade",
    # Cards and profiles
    "Card",
    "ChallengeProfile",
    "GameStats",
    "MasteryAbility",
    "MasteryRecord",
    "PlayerProfile",
    "StatusEffectSpec",
    # Combos
    "Combo",
    "ComboEffect",
    "DEFAULT_COMBOS",
    "DoubleDamage",
    "Heal",
    "Immune",
    "Stun",
    "find_combo",
]
