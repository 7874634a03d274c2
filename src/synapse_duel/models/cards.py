"""Card and profile models - read-only inputs consumed by the duel engine."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import AbilityTrigger, Category, EffectTarget, MasteryLevel, StatusEffectType

DUEL_START_PASSIVE_PHRASE = "Passive: At the start of the duel"


class CatalogModel(BaseModel):
    """Base for catalog models: immutable, accepts camelCase keys from the catalog export."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GameStats(CatalogModel):
    """Derived combat stats of a card."""

    attack: int = Field(default=0, description="Damage dealt when played")
    defense: int = Field(default=0, description="Defensive rating (used for scoring)")


class StatusEffectSpec(CatalogModel):
    """Status effect a card applies when played."""

    type: StatusEffectType
    duration: int = Field(ge=1, description="Number of start-of-turn ticks before removal")
    value: int | None = None
    target: EffectTarget = EffectTarget.OPPONENT


class MasteryAbility(CatalogModel):
    """Ability unlocked at Expert/Master mastery."""

    name: str
    description: str = ""
    trigger: AbilityTrigger | None = None
    max_hp_bonus: int | None = Field(default=None, alias="maxHpBonus")

    @property
    def is_duel_start_passive(self) -> bool:
        """Check if the ability fires once at duel start."""
        if self.trigger == AbilityTrigger.DUEL_START:
            return True
        return DUEL_START_PASSIVE_PHRASE in self.description


class Card(CatalogModel):
    """A protocol card as resolved from the catalog."""

    id: str
    name: str = ""
    categories: tuple[Category, ...] = ()
    game_stats: GameStats | None = Field(default=None, alias="gameStats")
    stamina_cost: int | None = Field(default=None, ge=0, alias="staminaCost")
    bio_rhythm_impact: int | None = Field(default=None, alias="bioRhythmImpact")
    applies_status_effect: StatusEffectSpec | None = Field(default=None, alias="appliesStatusEffect")
    primes_category: Category | None = Field(default=None, alias="primesCategory")
    expert_ability: MasteryAbility | None = Field(default=None, alias="expertAbility")
    master_ability: MasteryAbility | None = Field(default=None, alias="masterAbility")

    # Catalog display fields (used by stack vitals only)
    duration: str = ""
    bio_score: int | None = Field(default=None, alias="bioScore")

    @property
    def attack(self) -> int:
        """Attack stat, 0 if the card has no stats."""
        return self.game_stats.attack if self.game_stats else 0

    @property
    def defense(self) -> int:
        """Defense stat, 0 if the card has no stats."""
        return self.game_stats.defense if self.game_stats else 0

    @property
    def cost(self) -> int:
        """Nominal stamina cost, 0 if free."""
        return self.stamina_cost or 0

    def with_bonus(self, attack: int, defense: int) -> "Card":
        """Return a copy with attack/defense raised by the given amounts."""
        stats = GameStats(attack=self.attack + attack, defense=self.defense + defense)
        return self.model_copy(update={"game_stats": stats})


class MasteryRecord(CatalogModel):
    """A player's progression on one card."""

    protocol_id: str = Field(alias="protocolId")
    level: MasteryLevel = MasteryLevel.NOVICE
    streak: int = 0
    xp: int = 0
    mastery_points: int = Field(default=0, alias="masteryPoints")


class ChallengeProfile(CatalogModel):
    """A static PvE challenge opponent."""

    id: str
    name: str
    description: str = ""
    hp: int = 100
    attack: int = 0
    image_url: str | None = Field(default=None, alias="imageUrl")


class PlayerProfile(CatalogModel):
    """A live PvP opponent."""

    user_id: str = Field(alias="userId")
    display_name: str = Field(alias="displayName")
    level: int = 1
    pvp_rating: int | None = Field(default=None, alias="pvpRating")
    wager: int | None = None
