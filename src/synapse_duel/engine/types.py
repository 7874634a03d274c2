"""Type definitions for the duel engine."""

from dataclasses import dataclass, field, replace

from ..models.cards import Card, ChallengeProfile, PlayerProfile
from ..models.combos import Combo
from ..models.enums import Category, DuelStatus, ScreenEffect, Side, StatusEffectType


@dataclass(frozen=True)
class StatusEffect:
    """A timed modifier owned by one side."""

    id: str
    type: StatusEffectType
    duration: int  # Remaining start-of-turn ticks
    value: int | None = None


@dataclass(frozen=True)
class Vfx:
    """Visual effect marker for one side."""

    type: str
    color: str | None = None


@dataclass(frozen=True)
class UiSignals:
    """Transient signals for the presentation layer.

    Not authoritative game state. Produced by the action just applied and cleared
    by ATTACK_ANIMATION_COMPLETE.
    """

    attacking_card_id: str | None = None
    player_damage: int | None = None
    opponent_damage: int | None = None
    screen_effect: ScreenEffect | None = None
    player_vfx: Vfx | None = None
    opponent_vfx: Vfx | None = None
    passed_side: Side | None = None

    def damage(self, side: Side) -> int | None:
        """Damage taken by a side in the last action."""
        return self.player_damage if side is Side.PLAYER else self.opponent_damage


@dataclass(frozen=True)
class DuelState:
    """Complete state of one duel.

    Immutable: every transition returns a new value built with ``dataclasses.replace``.
    HP may go below zero; display code clamps, the defeat check is ``hp <= 0``.
    """

    player_hp: int = 100
    opponent_hp: int = 100
    max_player_hp: int = 100
    max_opponent_hp: int = 100
    turn: Side = Side.PLAYER
    hand: tuple[Card, ...] = ()
    opponent_hand: tuple[Card, ...] = ()
    status: DuelStatus = DuelStatus.PENDING
    message: str | None = None
    player_stamina: int = 10
    opponent_stamina: int = 10
    bio_rhythm: int = 0
    player_status_effects: tuple[StatusEffect, ...] = ()
    opponent_status_effects: tuple[StatusEffect, ...] = ()
    primed_category: Category | None = None
    primed_by: Side | None = None  # Only this side can fire the armed category
    active_combo: Combo | None = None
    ui: UiSignals = field(default_factory=UiSignals)

    # Opponent descriptor (display only)
    challenge: ChallengeProfile | None = None
    opponent: PlayerProfile | None = None
    stake: int | None = None

    # Combo side effects waiting to resolve
    stunned: frozenset[Side] = frozenset()  # Next turn is skipped
    player_immune_turns: int = 0  # Own turn starts left shielded from debuffs
    opponent_immune_turns: int = 0

    next_effect_id: int = 1

    @property
    def is_ongoing(self) -> bool:
        """Check if the duel accepts game actions."""
        return self.status == DuelStatus.ONGOING

    @property
    def is_over(self) -> bool:
        """Check if the duel reached victory or defeat."""
        return self.status.is_terminal

    @property
    def opponent_name(self) -> str:
        """Display name of the opponent."""
        if self.opponent is not None:
            return self.opponent.display_name
        if self.challenge is not None:
            return self.challenge.name
        return "Opponent"

    def hp(self, side: Side) -> int:
        """Current HP of a side."""
        return self.player_hp if side is Side.PLAYER else self.opponent_hp

    def max_hp(self, side: Side) -> int:
        """Max HP of a side."""
        return self.max_player_hp if side is Side.PLAYER else self.max_opponent_hp

    def stamina(self, side: Side) -> int:
        """Current stamina of a side."""
        return self.player_stamina if side is Side.PLAYER else self.opponent_stamina

    def immune_turns(self, side: Side) -> int:
        """Turn starts a side stays shielded from negative status effects."""
        return self.player_immune_turns if side is Side.PLAYER else self.opponent_immune_turns

    def is_immune(self, side: Side) -> bool:
        """Check if a side is shielded from negative status effects."""
        return self.immune_turns(side) > 0

    def effects(self, side: Side) -> tuple[StatusEffect, ...]:
        """Status effects owned by a side."""
        return self.player_status_effects if side is Side.PLAYER else self.opponent_status_effects

    def hand_of(self, side: Side) -> tuple[Card, ...]:
        """Cards in a side's hand."""
        return self.hand if side is Side.PLAYER else self.opponent_hand

    def find_effect(self, side: Side, effect_type: StatusEffectType) -> StatusEffect | None:
        """First status effect of a type held by a side."""
        for effect in self.effects(side):
            if effect.type == effect_type:
                return effect
        return None

    def has_effect(self, side: Side, effect_type: StatusEffectType) -> bool:
        """Check if a side holds a status effect of a type."""
        return self.find_effect(side, effect_type) is not None

    def with_side(
        self,
        side: Side,
        *,
        hp: int | None = None,
        max_hp: int | None = None,
        stamina: int | None = None,
        effects: tuple[StatusEffect, ...] | None = None,
        hand: tuple[Card, ...] | None = None,
        immune_turns: int | None = None,
    ) -> "DuelState":
        """Return a copy with per-side fields replaced for ``side``."""
        prefix = side.value
        changes: dict[str, object] = {}
        if hp is not None:
            changes[f"{prefix}_hp"] = hp
        if max_hp is not None:
            changes[f"max_{prefix}_hp"] = max_hp
        if stamina is not None:
            changes[f"{prefix}_stamina"] = stamina
        if effects is not None:
            changes[f"{prefix}_status_effects"] = effects
        if hand is not None:
            changes["hand" if side is Side.PLAYER else "opponent_hand"] = hand
        if immune_turns is not None:
            changes[f"{prefix}_immune_turns"] = immune_turns
        return replace(self, **changes)
