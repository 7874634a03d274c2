"""Duel engine module - a pure state machine over DuelState."""

from .actions import (
    Action,
    AttackAnimationComplete,
    EndDuel,
    Initialize,
    OpponentTurn,
    PassTurn,
    PlayCard,
    ProcessStartOfTurn,
)
from .combat import CombatResolver, PlayRejection
from .duel import DuelEngine, DuelResult, DuelSession, apply
from .logging import DuelLog, DuelLogger, LogEntry, LogEventType, StateSnapshot
from .policy import OpponentPolicy
from .rules import DEFAULT_RULES, DuelRules
from .setup import DuelSetup
from .turn import TurnStartProcessor, check_winner
from .types import DuelState, StatusEffect, UiSignals, Vfx

__all__ = [
    # Actions
    "Action",
    "AttackAnimationComplete",
    "EndDuel",
    "Initialize",
    "OpponentTurn",
    "PassTurn",
    "PlayCard",
    "ProcessStartOfTurn",
    # State
    "DuelState",
    "StatusEffect",
    "UiSignals",
    "Vfx",
    # Rules
    "DEFAULT_RULES",
    "DuelRules",
    # Components
    "CombatResolver",
    "PlayRejection",
    "DuelSetup",
    "OpponentPolicy",
    "TurnStartProcessor",
    "check_winner",
    "DuelEngine",
    "DuelResult",
    "DuelSession",
    "apply",
    # Logging
    "DuelLogger",
    "DuelLog",
    "LogEntry",
    "LogEventType",
    "StateSnapshot",
]
