"""Card catalog loading and validation.

The catalog is produced elsewhere (content tooling, admin exports) and arrives as
JSON with camelCase keys. Loading validates it into immutable models before any
duel starts, so the engine only ever sees well-formed cards.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from .models.cards import Card, MasteryRecord
from .models.combos import Combo


class CatalogError(Exception):
    """Raised when catalog data cannot be loaded."""


@dataclass
class ValidationError:
    """A single validation error."""

    field: str
    message: str
    value: str | None = None


@dataclass
class ValidationResult:
    """Result of validation."""

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, field: str, message: str, value: str | None = None) -> None:
        """Add a validation error."""
        self.errors.append(ValidationError(field=field, message=message, value=value))
        self.valid = False

    def merge(self, other: "ValidationResult") -> None:
        """Merge another validation result into this one."""
        if not other.valid:
            self.valid = False
            self.errors.extend(other.errors)


_CARDS = TypeAdapter(list[Card])
_COMBOS = TypeAdapter(list[Combo])


class CatalogLoader:
    """Parse catalog data into validated models."""

    def load_cards(self, data: Iterable[Mapping[str, Any]]) -> dict[str, Card]:
        """Load card definitions.

        Args:
            data: Card dicts as exported by the catalog

        Returns:
            Mapping of card id to Card, in input order

        Raises:
            CatalogError: If any card is malformed
        """
        try:
            cards = _CARDS.validate_python(list(data))
        except PydanticValidationError as e:
            raise CatalogError(f"Invalid card data: {e}") from e
        return {card.id: card for card in cards}

    def load_cards_file(self, path: str | Path) -> dict[str, Card]:
        """Load card definitions from a JSON file holding a list of cards."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e
        if not isinstance(raw, list):
            raise CatalogError(f"Catalog {path} must contain a JSON list of cards")
        return self.load_cards(raw)

    def load_combos(self, data: Iterable[Mapping[str, Any]]) -> tuple[Combo, ...]:
        """Load combo rules.

        Raises:
            CatalogError: If any combo is malformed or has an unknown effect kind
        """
        try:
            return tuple(_COMBOS.validate_python(list(data)))
        except PydanticValidationError as e:
            raise CatalogError(f"Invalid combo data: {e}") from e

    def load_mastery(self, data: Mapping[str, Mapping[str, Any]]) -> dict[str, MasteryRecord]:
        """Load a player's mastery table keyed by card id.

        Raises:
            CatalogError: If any record is malformed
        """
        try:
            return {
                card_id: MasteryRecord.model_validate({"protocolId": card_id, **record})
                for card_id, record in data.items()
            }
        except PydanticValidationError as e:
            raise CatalogError(f"Invalid mastery data: {e}") from e

    @staticmethod
    def build_hand(catalog: Mapping[str, Card], card_ids: Sequence[str]) -> tuple[Card, ...]:
        """Resolve card ids to cards, in order.

        Raises:
            CatalogError: If an id is not in the catalog
        """
        missing = [card_id for card_id in card_ids if card_id not in catalog]
        if missing:
            raise CatalogError(f"Unknown card ids: {', '.join(missing)}")
        return tuple(catalog[card_id] for card_id in card_ids)


class CatalogValidator:
    """Validate a loaded catalog for consistency."""

    def validate(self, cards: Sequence[Card], combos: Sequence[Combo]) -> ValidationResult:
        """Validate cards and combos together.

        Args:
            cards: Card definitions
            combos: Combo rules

        Returns:
            ValidationResult with any errors found
        """
        result = ValidationResult(valid=True)
        result.merge(self._validate_cards(cards))
        result.merge(self._validate_combos(combos))

        # Primed categories should be able to fire something
        prime_categories = {combo.prime_category for combo in combos}
        for card in cards:
            if card.primes_category is not None and card.primes_category not in prime_categories:
                result.add_error(
                    f"cards[{card.id}].primes_category",
                    "Card primes a category that no combo uses",
                    card.primes_category.value,
                )

        return result

    def _validate_cards(self, cards: Sequence[Card]) -> ValidationResult:
        result = ValidationResult(valid=True)
        seen: set[str] = set()
        for card in cards:
            if card.id in seen:
                result.add_error(f"cards[{card.id}].id", "Duplicate card id", card.id)
            seen.add(card.id)
            if not card.categories:
                result.add_error(f"cards[{card.id}].categories", "Card must have at least one category")
        return result

    def _validate_combos(self, combos: Sequence[Combo]) -> ValidationResult:
        result = ValidationResult(valid=True)
        pairs: set[tuple[str, str]] = set()
        for combo in combos:
            if combo.prime_category == combo.trigger_category:
                result.add_error(
                    f"combos[{combo.name}]",
                    "Prime and trigger category must differ",
                    combo.prime_category.value,
                )
            pair = (combo.prime_category.value, combo.trigger_category.value)
            if pair in pairs:
                result.add_error(f"combos[{combo.name}]", "Duplicate combo category pair", " -> ".join(pair))
            pairs.add(pair)
        return result
