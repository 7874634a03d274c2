"""Duel logging system for tracking and verifying engine output.

Provides structured logging of duel events including:
- Duel start and end
- Start-of-turn status ticks
- Card plays (accepted and rejected) with before/after state
- Combo activations, passes and turn changes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models.enums import DuelStatus, Side, StatusEffectType
from .types import DuelState


class LogEventType(str, Enum):
    """Types of log events."""

    # Duel lifecycle
    DUEL_STARTED = "duel_started"
    DUEL_ENDED = "duel_ended"

    # Turn lifecycle
    TURN_START = "turn_start"
    TURN_CHANGED = "turn_changed"
    TURN_SKIPPED = "turn_skipped"  # Stunned side lost its turn

    # Status effects
    STATUS_TICK = "status_tick"

    # Card plays
    CARD_PLAYED = "card_played"
    PLAY_REJECTED = "play_rejected"
    COMBO_TRIGGERED = "combo_triggered"
    PASSED = "passed"


@dataclass
class StateSnapshot:
    """Snapshot of both sides of a duel at a point in time."""

    player_hp: int
    opponent_hp: int
    player_stamina: int
    opponent_stamina: int
    bio_rhythm: int
    player_effects: dict[StatusEffectType, int]  # type -> remaining duration
    opponent_effects: dict[StatusEffectType, int]
    status: DuelStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "player_hp": self.player_hp,
            "opponent_hp": self.opponent_hp,
            "player_stamina": self.player_stamina,
            "opponent_stamina": self.opponent_stamina,
            "bio_rhythm": self.bio_rhythm,
            "player_effects": {k.value: v for k, v in self.player_effects.items()},
            "opponent_effects": {k.value: v for k, v in self.opponent_effects.items()},
            "status": self.status.value,
        }


@dataclass
class LogEntry:
    """A single log entry representing a duel event."""

    event_type: LogEventType
    timestamp_order: int = 0  # Order within the duel for deterministic sorting

    # Event-specific data
    side: Side | None = None
    card_id: str | None = None
    card_name: str | None = None
    combo_name: str | None = None
    reason: str | None = None
    value: int | None = None
    description: str | None = None

    # State before/after for state-changing events
    state_before: StateSnapshot | None = None
    state_after: StateSnapshot | None = None

    # Terminal status for DUEL_ENDED
    status: DuelStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "timestamp_order": self.timestamp_order,
        }

        if self.side is not None:
            result["side"] = self.side.value
        if self.card_id is not None:
            result["card_id"] = self.card_id
        if self.card_name is not None:
            result["card_name"] = self.card_name
        if self.combo_name is not None:
            result["combo_name"] = self.combo_name
        if self.reason is not None:
            result["reason"] = self.reason
        if self.value is not None:
            result["value"] = self.value
        if self.description is not None:
            result["description"] = self.description
        if self.state_before is not None:
            result["state_before"] = self.state_before.to_dict()
        if self.state_after is not None:
            result["state_after"] = self.state_after.to_dict()
        if self.status is not None:
            result["status"] = self.status.value

        return result


@dataclass
class DuelLog:
    """Complete log of one duel."""

    duel_id: str
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "duel_id": self.duel_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_side(self, side: Side) -> list[LogEntry]:
        """Get all entries concerning one side."""
        return [e for e in self.entries if e.side == side]

    def format_readable(self) -> str:
        """Format the log in a human-readable format."""
        lines: list[str] = [f"=== Duel Log ({self.duel_id}) ==="]
        lines.extend(self._format_entry(entry) for entry in self.entries)
        return "\n".join(lines)

    def _format_entry(self, entry: LogEntry) -> str:
        """Format a single log entry."""
        who = entry.side.value.capitalize() if entry.side else "?"
        match entry.event_type:
            case LogEventType.DUEL_STARTED:
                return f"  Duel begins ({entry.description or ''})"

            case LogEventType.DUEL_ENDED:
                return f"  *** {entry.status.value.upper() if entry.status else '?'} ***"

            case LogEventType.TURN_START:
                return f"\n--- {who} turn ---"

            case LogEventType.TURN_CHANGED:
                return f"  Control passes to {who}"

            case LogEventType.TURN_SKIPPED:
                return f"  {who} is stunned and skips the turn"

            case LogEventType.STATUS_TICK:
                hp_change = ""
                if entry.state_before and entry.state_after and entry.side:
                    before = self._hp(entry.state_before, entry.side)
                    after = self._hp(entry.state_after, entry.side)
                    if before != after:
                        hp_change = f" [HP: {before} → {after}]"
                return f"    {who} status tick: {entry.value or 0} damage{hp_change}"

            case LogEventType.CARD_PLAYED:
                return f"    {who} plays '{entry.card_name or entry.card_id}' for {entry.value} damage"

            case LogEventType.PLAY_REJECTED:
                return f"    ✗ {who} cannot play '{entry.card_name or entry.card_id}' ({entry.reason})"

            case LogEventType.COMBO_TRIGGERED:
                return f"    → {entry.combo_name} Combo! ({entry.description})"

            case LogEventType.PASSED:
                return f"    {who} passes (+{entry.value} stamina)"

            case _:
                return f"    {entry.event_type.value}: {entry.description or ''}"

    @staticmethod
    def _hp(snapshot: StateSnapshot, side: Side) -> int:
        return snapshot.player_hp if side is Side.PLAYER else snapshot.opponent_hp


class DuelLogger:
    """Logger for tracking duel events.

    Usage:
        logger = DuelLogger(duel_id="arena-1")
        engine = DuelEngine(logger=logger)
        state = engine.apply(state, action)
        ...

        # Get the complete log
        log = logger.get_log()
        print(log.format_readable())
    """

    def __init__(self, duel_id: str = "duel") -> None:
        """Initialize the logger for a duel."""
        self.duel_id = duel_id
        self._log = DuelLog(duel_id=duel_id)
        self._order_counter = 0

    def _next_order(self) -> int:
        """Get the next timestamp order value."""
        self._order_counter += 1
        return self._order_counter

    def _append(self, entry: LogEntry) -> None:
        entry.timestamp_order = self._next_order()
        self._log.entries.append(entry)

    def get_log(self) -> DuelLog:
        """Get the complete duel log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    @staticmethod
    def snapshot_state(state: DuelState) -> StateSnapshot:
        """Create a snapshot from a DuelState."""
        return StateSnapshot(
            player_hp=state.player_hp,
            opponent_hp=state.opponent_hp,
            player_stamina=state.player_stamina,
            opponent_stamina=state.opponent_stamina,
            bio_rhythm=state.bio_rhythm,
            player_effects={e.type: e.duration for e in state.player_status_effects},
            opponent_effects={e.type: e.duration for e in state.opponent_status_effects},
            status=state.status,
        )

    def log_duel_started(self, state: DuelState) -> None:
        """Log duel initialization."""
        self._append(
            LogEntry(
                event_type=LogEventType.DUEL_STARTED,
                description=f"vs {state.opponent_name}",
                state_after=self.snapshot_state(state),
            )
        )

    def log_turn_start(self, side: Side, before: DuelState, after: DuelState) -> None:
        """Log start-of-turn processing for a side."""
        self._append(LogEntry(event_type=LogEventType.TURN_START, side=side))
        self._append(
            LogEntry(
                event_type=LogEventType.STATUS_TICK,
                side=side,
                value=after.ui.damage(side),
                state_before=self.snapshot_state(before),
                state_after=self.snapshot_state(after),
            )
        )

    def log_card_played(
        self,
        side: Side,
        card_id: str,
        card_name: str,
        damage: int,
        before: DuelState,
        after: DuelState,
    ) -> None:
        """Log an accepted card play with before/after state."""
        self._append(
            LogEntry(
                event_type=LogEventType.CARD_PLAYED,
                side=side,
                card_id=card_id,
                card_name=card_name,
                value=damage,
                state_before=self.snapshot_state(before),
                state_after=self.snapshot_state(after),
            )
        )

    def log_play_rejected(self, side: Side, card_id: str, card_name: str, reason: str) -> None:
        """Log a refused card play."""
        self._append(
            LogEntry(
                event_type=LogEventType.PLAY_REJECTED,
                side=side,
                card_id=card_id,
                card_name=card_name,
                reason=reason,
            )
        )

    def log_combo(self, side: Side, combo_name: str, description: str) -> None:
        """Log a combo activation."""
        self._append(
            LogEntry(
                event_type=LogEventType.COMBO_TRIGGERED,
                side=side,
                combo_name=combo_name,
                description=description,
            )
        )

    def log_pass(self, side: Side, refund: int) -> None:
        """Log a pass."""
        self._append(LogEntry(event_type=LogEventType.PASSED, side=side, value=refund))

    def log_turn_changed(self, side: Side, skipped: Side | None = None) -> None:
        """Log control moving to ``side``; ``skipped`` is a stunned side that lost its turn."""
        if skipped is not None:
            self._append(LogEntry(event_type=LogEventType.TURN_SKIPPED, side=skipped))
        self._append(LogEntry(event_type=LogEventType.TURN_CHANGED, side=side))

    def log_duel_ended(self, state: DuelState) -> None:
        """Log the terminal result."""
        self._append(
            LogEntry(
                event_type=LogEventType.DUEL_ENDED,
                status=state.status,
                description=state.message,
                state_after=self.snapshot_state(state),
            )
        )
