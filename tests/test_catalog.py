"""Tests for catalog loading and validation."""

import json

import pytest

from synapse_duel.catalog import CatalogError, CatalogLoader, CatalogValidator
from synapse_duel.models import (
    DEFAULT_COMBOS,
    Category,
    Combo,
    DoubleDamage,
    EffectTarget,
    Heal,
    Immune,
    MasteryLevel,
    StatusEffectType,
    Stun,
)

CARD_DATA = [
    {
        "id": "cold_plunge",
        "name": "Cold Plunge",
        "categories": ["Cold Exposure"],
        "gameStats": {"attack": 14, "defense": 6},
        "staminaCost": 3,
        "bioRhythmImpact": 25,
        "primesCategory": "Cold Exposure",
        "appliesStatusEffect": {"type": "Fatigued", "duration": 2, "target": "opponent"},
        "duration": "2-5 minutes",
        "bioScore": 82,
    },
    {
        "id": "box_breathing",
        "name": "Box Breathing",
        "categories": ["Breathwork", "Mindfulness"],
        "gameStats": {"attack": 6, "defense": 12},
        "staminaCost": 1,
        "appliesStatusEffect": {"type": "Calm", "duration": 2, "target": "self"},
        "expertAbility": {
            "name": "Steady Lungs",
            "description": "Passive: At the start of the duel, gain 10 max HP.",
        },
    },
]

COMBO_DATA = [
    {"name": "Circadian Sync", "primeCategory": "Light", "triggerCategory": "Movement", "effect": "double_damage"},
    {
        "name": "Metabolic Flexibility",
        "primeCategory": "Fasting",
        "triggerCategory": "Nutrition",
        "effect": "heal",
        "effectValue": 25,
        "effectDescription": "Heals you after a refeed.",
    },
    {"name": "Thermic Shock", "primeCategory": "Cold Exposure", "triggerCategory": "Longevity", "effect": "stun"},
    {"name": "Resilience Shield", "primeCategory": "Breathwork", "triggerCategory": "Mindfulness", "effect": "immune"},
]


@pytest.fixture
def loader() -> CatalogLoader:
    """Catalog loader."""
    return CatalogLoader()


class TestCatalogLoader:
    """Tests for CatalogLoader."""

    def test_load_cards(self, loader):
        """camelCase catalog cards become Card models."""
        cards = loader.load_cards(CARD_DATA)
        assert list(cards) == ["cold_plunge", "box_breathing"]

        plunge = cards["cold_plunge"]
        assert plunge.categories == (Category.COLD_EXPOSURE,)
        assert plunge.attack == 14
        assert plunge.cost == 3
        assert plunge.primes_category == Category.COLD_EXPOSURE
        assert plunge.applies_status_effect.type == StatusEffectType.FATIGUED
        assert plunge.bio_score == 82

        breathing = cards["box_breathing"]
        assert breathing.applies_status_effect.target == EffectTarget.SELF
        assert breathing.expert_ability.is_duel_start_passive

    def test_invalid_card(self, loader):
        """Unknown categories are rejected."""
        with pytest.raises(CatalogError, match="Invalid card data"):
            loader.load_cards([{"id": "x", "categories": ["Astrology"]}])

    def test_negative_cost_rejected(self, loader):
        """Stamina costs cannot be negative."""
        with pytest.raises(CatalogError):
            loader.load_cards([{"id": "x", "staminaCost": -1}])

    def test_load_cards_file(self, loader, tmp_path):
        """Cards load from a JSON file."""
        path = tmp_path / "cards.json"
        path.write_text(json.dumps(CARD_DATA), encoding="utf-8")
        assert set(loader.load_cards_file(path)) == {"cold_plunge", "box_breathing"}

    def test_load_cards_file_errors(self, loader, tmp_path):
        """Missing files, bad JSON and non-list payloads raise CatalogError."""
        with pytest.raises(CatalogError, match="Cannot read catalog"):
            loader.load_cards_file(tmp_path / "missing.json")

        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Cannot read catalog"):
            loader.load_cards_file(broken)

        wrong = tmp_path / "wrong.json"
        wrong.write_text('{"cards": []}', encoding="utf-8")
        with pytest.raises(CatalogError, match="JSON list"):
            loader.load_cards_file(wrong)

    def test_load_combos(self, loader):
        """The flat effect form expands into effect models."""
        combos = loader.load_combos(COMBO_DATA)
        assert isinstance(combos[0].effect, DoubleDamage)
        assert combos[1].effect == Heal(amount=25)
        assert combos[1].description == "Heals you after a refeed."
        assert isinstance(combos[2].effect, Stun)
        assert combos[3].effect == Immune(turns=1)

    def test_nested_combo_effect(self, loader):
        """Combos also accept the nested effect form."""
        combos = loader.load_combos(
            [{"name": "Zen", "primeCategory": "Sound", "triggerCategory": "Cognitive", "effect": {"kind": "heal"}}]
        )
        assert combos[0].effect == Heal(amount=30)

    def test_unknown_combo_effect(self, loader):
        """Unknown effect kinds are rejected."""
        data = [{"name": "X", "primeCategory": "Light", "triggerCategory": "Sleep", "effect": "teleport"}]
        with pytest.raises(CatalogError, match="Invalid combo data"):
            loader.load_combos(data)

    def test_load_mastery(self, loader):
        """Mastery records are keyed by card id."""
        mastery = loader.load_mastery({"cold_plunge": {"level": "Expert", "streak": 4, "masteryPoints": 120}})
        record = mastery["cold_plunge"]
        assert record.protocol_id == "cold_plunge"
        assert record.level == MasteryLevel.EXPERT
        assert record.mastery_points == 120

    def test_load_mastery_invalid_level(self, loader):
        """Unknown levels are rejected."""
        with pytest.raises(CatalogError, match="Invalid mastery data"):
            loader.load_mastery({"cold_plunge": {"level": "Legend"}})

    def test_build_hand(self, loader):
        """Hands resolve ids in order, duplicates allowed."""
        cards = loader.load_cards(CARD_DATA)
        hand = CatalogLoader.build_hand(cards, ["box_breathing", "cold_plunge", "box_breathing"])
        assert [card.id for card in hand] == ["box_breathing", "cold_plunge", "box_breathing"]

    def test_build_hand_unknown_id(self, loader):
        """Unknown ids raise CatalogError."""
        cards = loader.load_cards(CARD_DATA)
        with pytest.raises(CatalogError, match="ghost"):
            CatalogLoader.build_hand(cards, ["cold_plunge", "ghost"])


class TestCatalogValidator:
    """Tests for CatalogValidator."""

    def test_valid_catalog(self, loader):
        """The sample catalog validates cleanly."""
        cards = list(loader.load_cards(CARD_DATA).values())
        result = CatalogValidator().validate(cards, DEFAULT_COMBOS)
        assert result.valid
        assert result.errors == []

    def test_duplicate_card_ids(self, card_factory):
        """Card ids must be unique."""
        result = CatalogValidator().validate([card_factory("a"), card_factory("a")], DEFAULT_COMBOS)
        assert not result.valid
        assert any("Duplicate card id" in error.message for error in result.errors)

    def test_card_without_categories(self, card_factory):
        """Cards need at least one category."""
        result = CatalogValidator().validate([card_factory("a", categories=[])], DEFAULT_COMBOS)
        assert not result.valid

    def test_combo_same_categories(self):
        """A combo cannot prime and trigger the same category."""
        combo = Combo(name="Loop", prime_category=Category.SLEEP, trigger_category=Category.SLEEP, effect=Stun())
        result = CatalogValidator().validate([], [combo])
        assert not result.valid
        assert result.errors[0].field == "combos[Loop]"

    def test_duplicate_combo_pair(self):
        """Two combos cannot share a category pair."""
        combos = list(DEFAULT_COMBOS) + [
            Combo(name="Dawn Run", prime_category=Category.LIGHT, trigger_category=Category.MOVEMENT, effect=Stun())
        ]
        result = CatalogValidator().validate([], combos)
        assert not result.valid
        assert result.errors[0].value == "Light -> Movement"

    def test_orphan_primed_category(self, card_factory):
        """Priming a category no combo starts from is reported."""
        card = card_factory("a", primes_category=Category.SOUND)
        result = CatalogValidator().validate([card], DEFAULT_COMBOS)
        assert not result.valid
        assert result.errors[0].field == "cards[a].primes_category"
