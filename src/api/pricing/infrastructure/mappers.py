"""Row-to-domain mapping shared by the rule set repositories."""

from __future__ import annotations

from pricing.domain.entities import RuleSet
from pricing.domain.value_objects import (
    RuleSetId,
    RuleSetKind,
    UnitRef,
    ValidityWindow,
)
from pricing.infrastructure.models import PriceBookModel, RateCardModel, UnitModel


def rule_set_from_model(
    model: RateCardModel | PriceBookModel, kind: RuleSetKind
) -> RuleSet:
    """Reconstitute a RuleSet header (no candidates) from its row."""
    return RuleSet(
        id=RuleSetId(value=model.id),
        tenant_id=model.tenant_id,
        kind=kind,
        name=model.name,
        currency=model.currency,
        is_active=model.is_active,
        is_default=model.is_default,
        updated_at=model.updated_at,
    )


def unit_ref_from_model(model: UnitModel) -> UnitRef:
    return UnitRef(id=model.id, label=model.label)


def window_from_columns(valid_from, valid_to) -> ValidityWindow:
    return ValidityWindow(valid_from=valid_from, valid_to=valid_to)
