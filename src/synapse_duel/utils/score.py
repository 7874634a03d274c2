"""Stack scoring - aggregate strength and synergy of a hand of cards."""

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.cards import Card
from ..models.combos import DEFAULT_COMBOS, Combo
from ..models.enums import Category, SynergyGrade

REPETITION_BONUS = 5  # Per card, for each category appearing more than once
COMBO_POTENTIAL_BONUS = 50  # Per combo whose two categories are both present

DIVERSITY_POINTS = 10
OVERSPECIALISATION_LIMIT = 3
OVERSPECIALISATION_PENALTY = 10

PAIR_BONUSES: tuple[tuple[Category, Category, int], ...] = (
    (Category.LIGHT, Category.SLEEP, 20),  # Circadian rhythm
    (Category.FASTING, Category.NUTRITION, 15),  # Refeeding
    (Category.MOVEMENT, Category.COLD_EXPOSURE, 15),  # Recovery
    (Category.BREATHWORK, Category.MINDFULNESS, 20),  # Mental stack
    (Category.ENERGY, Category.SLEEP, 25),  # Energy cycle
)

GRADE_THRESHOLDS: tuple[tuple[float, SynergyGrade], ...] = (
    (28, SynergyGrade.S),
    (22, SynergyGrade.A),
    (15, SynergyGrade.B),
)

_RANGE_MINUTES = re.compile(r"(\d+)-(\d+)\s*minutes?")
_SINGLE_MINUTES = re.compile(r"(\d+)\s*minutes?")


@dataclass
class StackVitals:
    """Summary of a stack of cards for pre-duel display."""

    total_bio_score: int
    arena_attack: int
    arena_defense: int
    dominant_category: str  # Category value, "Mixed" or "N/A"
    synergy_score: SynergyGrade
    total_time_minutes: float
    total_stamina_cost: int
    net_bio_rhythm_impact: int
    synergy_insight: str


def _category_counts(cards: Sequence[Card]) -> Counter[Category]:
    counts: Counter[Category] = Counter()
    for card in cards:
        counts.update(card.categories)
    return counts


def calculate_stack_score(hand: Sequence[Card], combos: Sequence[Combo] = DEFAULT_COMBOS) -> int:
    """Calculate the potential strength of a hand.

    Score = sum of attack + defense
          + count * 5 for every category held by more than one card
          + 50 for every combo whose prime and trigger categories both appear in the hand

    The combo bonus rewards potential synergy; it does not require the cards to be
    played in combo order.

    Args:
        hand: Cards to score
        combos: Known combo rules

    Returns:
        Integer score (0 for an empty hand)
    """
    if not hand:
        return 0

    base_score = sum(card.attack + card.defense for card in hand)

    repetition_bonus = sum(count * REPETITION_BONUS for count in _category_counts(hand).values() if count > 1)

    categories = {category for card in hand for category in card.categories}
    combo_bonus = sum(
        COMBO_POTENTIAL_BONUS
        for combo in combos
        if combo.prime_category in categories and combo.trigger_category in categories
    )

    return base_score + repetition_bonus + combo_bonus


def calculate_synergy_score(cards: Sequence[Card]) -> SynergyGrade:
    """Grade how well a stack's categories complement each other.

    Points: +10 per distinct category, -10 per card above 3 in the most common
    category, plus fixed bonuses for known complementary pairs. The grade is
    taken from points per card.

    Args:
        cards: Stack to grade

    Returns:
        S, A, B or C (C for fewer than two cards)
    """
    if len(cards) < 2:
        return SynergyGrade.C

    counts = _category_counts(cards)
    score = len(counts) * DIVERSITY_POINTS

    most_common = max(counts.values(), default=0)
    if most_common > OVERSPECIALISATION_LIMIT:
        score -= (most_common - OVERSPECIALISATION_LIMIT) * OVERSPECIALISATION_PENALTY

    for first, second, bonus in PAIR_BONUSES:
        if first in counts and second in counts:
            score += bonus

    per_card = score / len(cards)
    for threshold, grade in GRADE_THRESHOLDS:
        if per_card >= threshold:
            return grade
    return SynergyGrade.C


def parse_duration_minutes(duration: str) -> float:
    """Parse a catalog duration like "10-20 minutes" (midpoint) or "5 minutes".

    Non-numeric durations ("Varies", "Daily", ...) count as 0.
    """
    if not duration:
        return 0
    text = duration.lower()

    match = _RANGE_MINUTES.search(text)
    if match:
        return (int(match.group(1)) + int(match.group(2))) / 2

    match = _SINGLE_MINUTES.search(text)
    if match:
        return int(match.group(1))

    return 0


def _synergy_insight(cards: Sequence[Card], grade: SynergyGrade, net_bio_rhythm: int) -> str:
    if len(cards) < 2:
        return "Add more protocols to analyze synergy."

    match grade:
        case SynergyGrade.S:
            return "Exceptional synergy. This stack offers a comprehensive and balanced approach to your wellness."
        case SynergyGrade.A:
            if net_bio_rhythm > 30:
                return "Excellent synergy, strongly focused on activation and energy."
            if net_bio_rhythm < -30:
                return "Excellent synergy, strongly focused on recovery and calm."
            return "Excellent synergy with a good balance between activating and calming protocols."
        case SynergyGrade.B:
            categories = _category_counts(cards)
            recovery = {Category.SLEEP, Category.STRESS_MANAGEMENT, Category.MINDFULNESS}
            if not recovery & categories.keys():
                return "Good synergy, but could be improved by adding protocols for recovery and stress management."
            return "A solid stack with good foundational synergy. Consider diversifying categories for a higher score."
        case _:
            return (
                "This collection of protocols has low synergy. "
                "Try combining protocols that support each other, like 'Energy' and 'Sleep'."
            )


def calculate_stack_vitals(cards: Sequence[Card]) -> StackVitals:
    """Summarize a stack for display.

    Args:
        cards: Stack to summarize

    Returns:
        StackVitals (N/A grade and zero totals for an empty stack)
    """
    if not cards:
        return StackVitals(
            total_bio_score=0,
            arena_attack=0,
            arena_defense=0,
            dominant_category="N/A",
            synergy_score=SynergyGrade.NOT_APPLICABLE,
            total_time_minutes=0,
            total_stamina_cost=0,
            net_bio_rhythm_impact=0,
            synergy_insight="Your stack is empty. Add protocols to see your vitals.",
        )

    counts = _category_counts(cards)
    # most_common() keeps first-seen order among ties
    dominant = counts.most_common(1)[0][0].value if counts else "Mixed"

    grade = calculate_synergy_score(cards)
    net_bio_rhythm = sum(card.bio_rhythm_impact or 0 for card in cards)

    return StackVitals(
        total_bio_score=sum(card.bio_score or 0 for card in cards),
        arena_attack=sum(card.attack for card in cards),
        arena_defense=sum(card.defense for card in cards),
        dominant_category=dominant,
        synergy_score=grade,
        total_time_minutes=sum(parse_duration_minutes(card.duration) for card in cards),
        total_stamina_cost=sum(card.cost for card in cards),
        net_bio_rhythm_impact=net_bio_rhythm,
        synergy_insight=_synergy_insight(cards, grade, net_bio_rhythm),
    )
