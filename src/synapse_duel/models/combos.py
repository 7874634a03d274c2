"""Combo rules - a primed category followed by a trigger category produces a bonus."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import Category


class ComboEffectModel(BaseModel):
    """Base for combo effect variants."""

    model_config = ConfigDict(frozen=True)


class DoubleDamage(ComboEffectModel):
    """Doubles the triggering card's damage (before defender mitigation)."""

    kind: Literal["double_damage"] = "double_damage"


class Heal(ComboEffectModel):
    """Restores HP to the side that triggered the combo."""

    kind: Literal["heal"] = "heal"
    amount: int = Field(default=30, ge=0)


class Stun(ComboEffectModel):
    """The other side skips its next turn."""

    kind: Literal["stun"] = "stun"


class Immune(ComboEffectModel):
    """The triggering side ignores negative status effects during the enemy's next turn."""

    kind: Literal["immune"] = "immune"
    turns: int = Field(default=1, ge=1)


ComboEffect = Annotated[Union[DoubleDamage, Heal, Stun, Immune], Field(discriminator="kind")]

# Payload field that the catalog's flat "effectValue" maps to
_EFFECT_VALUE_FIELDS = {"heal": "amount", "immune": "turns"}


class Combo(BaseModel):
    """A static combo rule."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    prime_category: Category = Field(alias="primeCategory")
    trigger_category: Category = Field(alias="triggerCategory")
    effect: ComboEffect
    description: str = Field(default="", alias="effectDescription")

    @model_validator(mode="before")
    @classmethod
    def _expand_flat_effect(cls, data: Any) -> Any:
        """Accept the catalog's flat form, e.g. ``effect: "heal", effectValue: 30``."""
        if not isinstance(data, dict) or not isinstance(data.get("effect"), str):
            return data
        data = dict(data)
        kind = data.pop("effect")
        value = data.pop("effectValue", None)
        effect: dict[str, Any] = {"kind": kind}
        if value is not None and kind in _EFFECT_VALUE_FIELDS:
            effect[_EFFECT_VALUE_FIELDS[kind]] = value
        data["effect"] = effect
        return data


DEFAULT_COMBOS: tuple[Combo, ...] = (
    Combo(
        name="Circadian Sync",
        prime_category=Category.LIGHT,
        trigger_category=Category.MOVEMENT,
        effect=DoubleDamage(),
        description="Doubles the damage of the triggering Movement protocol.",
    ),
    Combo(
        name="Resilience Shield",
        prime_category=Category.BREATHWORK,
        trigger_category=Category.MINDFULNESS,
        effect=Immune(turns=1),
        description="Become immune to all negative status effects for your opponent's next turn.",
    ),
    Combo(
        name="Metabolic Flexibility",
        prime_category=Category.FASTING,
        trigger_category=Category.NUTRITION,
        effect=Heal(amount=30),
        description="Heals you for 30 HP when you consume a Nutrition protocol after Fasting.",
    ),
    Combo(
        name="Thermic Shock",
        prime_category=Category.COLD_EXPOSURE,
        trigger_category=Category.LONGEVITY,
        effect=Stun(),
        description="The opponent is Stunned and misses their next turn.",
    ),
)


def find_combo(
    primed: Category | None,
    categories: tuple[Category, ...],
    combos: tuple[Combo, ...] = DEFAULT_COMBOS,
) -> Combo | None:
    """Find the combo fired by playing a card with ``categories`` while ``primed`` is armed.

    A combo fires when its prime category is the armed one and its trigger category
    is among the played card's categories. The trigger card does not need to carry
    the primed category itself.
    """
    if primed is None:
        return None
    for combo in combos:
        if combo.prime_category == primed and combo.trigger_category in categories:
            return combo
    return None
