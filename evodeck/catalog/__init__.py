"""Card catalog - definitions, leveled effects, deck configurations."""

from .effect_dsl import (
    EffectKind,
    EffectSpec,
    ResolvedEffect,
    MULTIPLIED_KINDS,
    ZERO_MEANINGFUL_KINDS,
    parse_effect_kind,
)
from .card_catalog import (
    CardCatalog,
    CardCategory,
    CardDefinition,
    UnknownCardDefinition,
    DEFAULT_MAX_LEVEL,
    render_description,
    render_card_text,
)
from .deck_config import DeckConfiguration, DeckEntry
from .validation import (
    validate_catalog,
    validate_deck_configuration,
    CatalogValidationError,
    ValidationResult,
)

__all__ = [
    "EffectKind",
    "EffectSpec",
    "ResolvedEffect",
    "MULTIPLIED_KINDS",
    "ZERO_MEANINGFUL_KINDS",
    "parse_effect_kind",
    "CardCatalog",
    "CardCategory",
    "CardDefinition",
    "UnknownCardDefinition",
    "DEFAULT_MAX_LEVEL",
    "render_description",
    "render_card_text",
    "DeckConfiguration",
    "DeckEntry",
    "validate_catalog",
    "validate_deck_configuration",
    "CatalogValidationError",
    "ValidationResult",
]
