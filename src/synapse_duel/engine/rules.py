"""Numeric rules of the duel - passed explicitly to the engine."""

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import MasteryLevel


class DuelRules(BaseModel):
    """Tunable constants of a duel.

    Defaults reproduce the standard Synapse Arena game. The engine never reads
    these from the environment; callers pass an instance (e.g. ``get_settings().rules``).
    """

    model_config = ConfigDict(frozen=True)

    # Setup
    starting_hp: int = Field(default=100, ge=1)
    starting_stamina: int = Field(default=10, ge=0)
    mastery_attack_bonus: int = 5
    mastery_defense_bonus: int = 5
    boosted_levels: frozenset[MasteryLevel] = frozenset(
        {MasteryLevel.ADEPT, MasteryLevel.EXPERT, MasteryLevel.MASTER}
    )
    passive_levels: frozenset[MasteryLevel] = frozenset({MasteryLevel.EXPERT, MasteryLevel.MASTER})
    passive_max_hp_bonus: int = 10

    # Costs
    energized_discount: int = 2
    fatigue_cost_threshold: int = 5
    pass_stamina_refund: int = 2

    # Damage modifiers
    focused_multiplier: float = 1.3
    calm_multiplier: float = 0.5
    combo_damage_multiplier: int = 2

    # Status effects
    inflamed_damage: int = 10

    # Bio-rhythm bounds
    bio_rhythm_min: int = -100
    bio_rhythm_max: int = 100

    def clamp_bio_rhythm(self, value: int) -> int:
        """Clamp a bio-rhythm value to the allowed range."""
        return max(self.bio_rhythm_min, min(self.bio_rhythm_max, value))


DEFAULT_RULES = DuelRules()
