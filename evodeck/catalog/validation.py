"""
Catalog Validation - Checks card data and deck configurations.

Validates that:
1. Required fields are present and ids are unique
2. Every effect has a usable value table
3. Levels are consistent (base_level within [0, max_level])
4. Deck configurations only reference known cards
"""

from __future__ import annotations
from dataclasses import dataclass

from .card_catalog import CardCatalog, CardDefinition
from .deck_config import DeckConfiguration
from .effect_dsl import EffectKind, EffectSpec


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(catalog: CardCatalog, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate every definition in a catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    for card in catalog.definitions:
        if card.id in seen:
            errors.append(f"Duplicate card id '{card.id}'")
        seen.add(card.id)

        card_errors, card_warnings = _validate_card(card, catalog.max_level(card))
        errors.extend(card_errors)
        warnings.extend(card_warnings)

    if len(catalog) == 0:
        warnings.append("No cards defined - catalog is empty")

    if raise_on_error and errors:
        raise CatalogValidationError(errors)

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


def _validate_card(card: CardDefinition, max_level: int) -> tuple[list[str], list[str]]:
    """Validate a single card definition."""
    errors = []
    warnings = []
    if not card.id:
        errors.append("Card has empty ID")
    if not card.name:
        errors.append(f"Card '{card.id}' has empty name")
    if max_level < 0:
        errors.append(f"Card '{card.id}' has negative max_level {max_level}")
    elif not 0 <= card.base_level <= max_level:
        errors.append(
            f"Card '{card.id}' base_level {card.base_level} outside 0..{max_level}"
        )
    if not card.effects:
        warnings.append(f"Card '{card.id}' has no effects")

    for position, effect in enumerate(card.effects):
        effect_errors, effect_warnings = _validate_effect(effect, max_level)
        errors.extend(f"Card '{card.id}' effect {position}: {e}" for e in effect_errors)
        warnings.extend(f"Card '{card.id}' effect {position}: {w}" for w in effect_warnings)

    return errors, warnings


def _validate_effect(effect: EffectSpec, max_level: int) -> tuple[list[str], list[str]]:
    """Validate one effect's value table."""
    errors = []
    warnings = []

    if not isinstance(effect.kind, EffectKind):
        errors.append(f"unknown effect kind {effect.kind!r}")
    if not effect.values_by_level:
        errors.append("no values")
    for value in effect.values_by_level:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"non-numeric value {value!r}")
        elif value < 0:
            errors.append(f"negative value {value}")
    if effect.values_by_level and len(effect.values_by_level) < max_level + 1:
        warnings.append(
            f"{len(effect.values_by_level)} value(s) for {max_level + 1} level(s); "
            "higher levels reuse the last value"
        )
    if effect.description_template and "{value}" not in effect.description_template:
        if effect.kind != EffectKind.SHUFFLE_DISCARD_INTO_DECK:
            warnings.append("description template has no {value} placeholder")

    return errors, warnings


def validate_deck_configuration(
    config: DeckConfiguration,
    catalog: CardCatalog,
    expected_size: int | None = None,
) -> ValidationResult:
    """
    Validate a deck configuration against a catalog.

    Size is only checked when expected_size is given; the engine itself
    plays any size.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    for entry in config.entries:
        if entry.card_id not in catalog:
            errors.append(f"Unknown card id '{entry.card_id}'")
        if entry.card_id in seen:
            errors.append(f"Card '{entry.card_id}' listed more than once")
        seen.add(entry.card_id)
        if entry.count <= 0:
            errors.append(f"Card '{entry.card_id}' has non-positive count {entry.count}")

    total = config.total_cards
    if expected_size is not None and total != expected_size:
        errors.append(f"Deck has {total} cards, expected exactly {expected_size}")
    if total == 0:
        warnings.append("Deck is empty")

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
