"""Enums for duel models."""

from enum import Enum


class Category(str, Enum):
    """Protocol categories - used for combos and synergy scoring."""

    FASTING = "Fasting"
    COLD_EXPOSURE = "Cold Exposure"
    BREATHWORK = "Breathwork"
    MOVEMENT = "Movement"
    SLEEP = "Sleep"
    MINDFULNESS = "Mindfulness"
    NUTRITION = "Nutrition"
    STRESS_MANAGEMENT = "Stress Management"
    LIGHT = "Light"
    SOUND = "Sound"
    LONGEVITY = "Longevity"
    COGNITIVE = "Cognitive"
    ENERGY = "Energy"


class StatusEffectType(str, Enum):
    """Timed status effects a side can carry."""

    FOCUSED = "Focused"  # Next card deals x1.3 damage (single use)
    CALM = "Calm"  # Incoming damage halved
    ENERGIZED = "Energized"  # Next card costs 2 less (single use)
    INFLAMED = "Inflamed"  # Damage over time at start of turn
    FATIGUED = "Fatigued"  # Cannot play high-cost cards

    @property
    def is_negative(self) -> bool:
        """True for debuffs (blocked by immunity)."""
        return self in (StatusEffectType.INFLAMED, StatusEffectType.FATIGUED)


class EffectTarget(str, Enum):
    """Who a card's status effect lands on."""

    SELF = "self"  # The side that played the card
    OPPONENT = "opponent"  # The other side


class Side(str, Enum):
    """One of the two duelling sides."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        """The opposing side."""
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER

    @classmethod
    def of(cls, is_player: bool) -> "Side":
        """Side for an ``is_player`` flag."""
        return cls.PLAYER if is_player else cls.OPPONENT


class DuelStatus(str, Enum):
    """Status of a duel."""

    PENDING = "pending"  # Not yet initialized
    ONGOING = "ongoing"  # Turns being played
    VICTORY = "victory"  # Opponent HP reached 0 (or opponent forfeited)
    DEFEAT = "defeat"  # Player HP reached 0 (or player forfeited)

    @property
    def is_terminal(self) -> bool:
        """True for victory/defeat."""
        return self in (DuelStatus.VICTORY, DuelStatus.DEFEAT)


class MasteryLevel(str, Enum):
    """Per-card progression level of a player."""

    NOVICE = "Novice"
    ADEPT = "Adept"
    EXPERT = "Expert"
    MASTER = "Master"
    GRANDMASTER = "Grandmaster"


class AbilityTrigger(str, Enum):
    """When a mastery ability fires."""

    DUEL_START = "duel_start"  # One-time effect applied at initialization


class ScreenEffect(str, Enum):
    """Screen-wide effects the presentation layer may render."""

    SHAKE = "shake"


class SynergyGrade(str, Enum):
    """Letter grade for a stack's synergy."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    NOT_APPLICABLE = "N/A"
