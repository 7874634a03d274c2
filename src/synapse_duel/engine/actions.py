"""Actions accepted by the duel state machine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

from ..models.cards import Card, ChallengeProfile, MasteryRecord, PlayerProfile


@dataclass(frozen=True)
class Initialize:
    """Seed a pending duel and move it to ongoing.

    ``mastery`` maps card id to the player's mastery record and is consulted only here.
    HP overrides default to the rules' starting HP.
    """

    hand: tuple[Card, ...]
    opponent_hand: tuple[Card, ...] = ()
    mastery: Mapping[str, MasteryRecord] = field(default_factory=dict)
    challenge: ChallengeProfile | None = None
    opponent: PlayerProfile | None = None
    stake: int | None = None
    player_hp: int | None = None
    opponent_hp: int | None = None


@dataclass(frozen=True)
class ProcessStartOfTurn:
    """Tick status effects for one side at the start of its turn."""

    is_player: bool


@dataclass(frozen=True)
class PlayCard:
    """Play a card from a side's hand."""

    card: Card
    is_player: bool


@dataclass(frozen=True)
class OpponentTurn:
    """Let the opponent policy choose and play a card, or pass."""


@dataclass(frozen=True)
class PassTurn:
    """A side passes and regains some stamina."""

    is_player: bool


@dataclass(frozen=True)
class AttackAnimationComplete:
    """The presentation layer finished showing an attack; hand over control."""

    was_player_attack: bool


@dataclass(frozen=True)
class EndDuel:
    """Force a terminal result (forfeit)."""

    victory: bool


Action = Union[
    Initialize,
    ProcessStartOfTurn,
    PlayCard,
    OpponentTurn,
    PassTurn,
    AttackAnimationComplete,
    EndDuel,
]
