"""Unit tests for rule normalization"""

import pytest
from datetime import date
from decimal import Decimal
from pydantic import ValidationError
from revolving_calc.domain.models import Band, LegacyColumn, Range
from revolving_calc.domain.normalizer import (
    normalize_legacy_document,
    normalize_tier_documents,
    tier_from_document,
)
from revolving_calc.schemas import LegacyDocument, TierDocument


def doc(**fields) -> TierDocument:
    fields.setdefault("bands", [{"months": 1, "amount": 25}])
    return TierDocument.model_validate(fields)


def test_tier_from_document_copies_fields():
    """Test a complete document maps onto a Tier"""
    tier = tier_from_document(
        doc(
            id="low",
            range={"max": 1250},
            bands=[{"months": 12, "amount": 25}, {"months": "final", "amount": 25}],
            legal_lines=["Line one", "line two."],
            apr_nominal=0.1265,
            apr_representative=0.135,
            open_fee_monthly=0.0004,
            valid_date="2025-05-27",
        ),
        slot=0,
    )

    assert tier.id == "low"
    assert tier.range == Range(min=None, max=Decimal(1250))
    assert tier.bands == (Band(12, Decimal(25)), Band("final", Decimal(25)))
    assert tier.legal == "Line one line two."
    assert tier.meta.apr_nominal == Decimal("0.1265")
    assert tier.meta.apr_representative == Decimal("0.135")
    assert tier.meta.open_fee_monthly == Decimal("0.0004")
    assert tier.meta.valid_date == date(2025, 5, 27)


def test_tier_from_document_slot_defaults():
    """Test id and labels fall back to the file slot"""
    tier = tier_from_document(doc(), slot=1)

    assert tier.id == "B"
    assert tier.label["fr"] == "1 250–5 000 €"
    assert tier.label["en"] == "€1,250–€5,000"
    assert tier.label["nl"] == "€1.250–€5.000"
    assert tier.label["de"] == "1.250–5.000 €"


def test_tier_from_document_keeps_document_label():
    tier = tier_from_document(doc(label={"fr": "Petit"}), slot=0)
    assert tier.label == {"fr": "Petit"}


def test_range_from_separate_fields_defaults_min_to_zero():
    """Test top-level min/max build the range, min defaulting to 0"""
    assert tier_from_document(doc(max=1250), slot=0).range == Range(min=Decimal(0), max=Decimal(1250))
    assert tier_from_document(doc(min=5001), slot=2).range == Range(min=Decimal(5001), max=None)


def test_range_object_keeps_missing_bounds_unbounded():
    assert tier_from_document(doc(range={"min": 5001}), slot=2).range == Range(min=Decimal(5001), max=None)


def test_legal_lines_string_and_override():
    """Test string legal_lines pass through, and the override empties them"""
    assert tier_from_document(doc(legal_lines="Texte [[légal]]"), slot=0).legal == "Texte [[légal]]"
    assert tier_from_document(doc(legal_lines="Texte"), slot=0, use_i18n_legal=True).legal == ""
    assert tier_from_document(doc(), slot=0).legal == ""


def test_normalize_sorts_by_lower_bound():
    """Test tiers come out ascending by lower bound, unbounded lower first"""
    rule_set = normalize_tier_documents(
        [
            doc(id="C", range={"min": 5001}),
            doc(id="A", range={"max": 1250}),
            doc(id="B", range={"min": 1250, "max": 5000}),
        ]
    )

    assert rule_set.source == "per_tier"
    assert [t.id for t in rule_set.tiers] == ["A", "B", "C"]


def test_normalize_partial_documents():
    """Test failed slots are left out and keep their neighbours' slot defaults"""
    rule_set = normalize_tier_documents([None, doc(range={"min": 1250, "max": 5000}), doc(range={"min": 5001})])

    assert [t.id for t in rule_set.tiers] == ["B", "C"]


def test_normalize_no_documents_returns_none():
    assert normalize_tier_documents([None, None, None]) is None
    assert normalize_tier_documents([]) is None


def test_normalize_legacy_document_verbatim():
    """Test legacy tabs keep their order, labels and legal text untouched"""
    legacy = LegacyDocument.model_validate(
        {
            "tabs": [
                {
                    "id": "hi",
                    "range": {"min": 1250.01},
                    "columns": [{"purchase": 5000, "rle": [[10, 100], [2, 75.5]]}],
                    "legal": "Offre [[historique]].",
                },
                {"range": {"max": 1250}, "legal_lines": ["Ligne 1", "ligne 2"]},
            ]
        }
    )
    rule_set = normalize_legacy_document(legacy)

    assert rule_set.source == "legacy"
    high, low = rule_set.tiers
    assert high.id == "hi"
    assert high.range == Range(min=Decimal("1250.01"), max=None)
    assert high.columns == (
        LegacyColumn(purchase=Decimal(5000), rle=((10, Decimal(100)), (2, Decimal("75.5")))),
    )
    assert high.legal == "Offre [[historique]]."
    assert high.label == {}
    assert low.id == ""
    assert low.legal == "Ligne 1 ligne 2"


def test_final_band_must_be_last():
    """Test a document with a final band in the middle is rejected"""
    with pytest.raises(ValidationError):
        doc(bands=[{"months": "final", "amount": 25}, {"months": 3, "amount": 25}])


def test_final_band_is_case_insensitive():
    assert doc(bands=[{"months": 1, "amount": 5}, {"months": "FINAL", "amount": 5}]).bands[-1].months == "final"


def test_non_positive_months_rejected():
    with pytest.raises(ValidationError):
        doc(bands=[{"months": 0, "amount": 25}])


def test_legacy_document_requires_tabs():
    with pytest.raises(ValidationError):
        LegacyDocument.model_validate({"rules": []})


def test_numeric_ids_are_kept_as_text():
    """Test a numeric id in either document shape keeps the tier instead of failing validation"""
    tier = tier_from_document(doc(id=7), slot=0)
    legacy = LegacyDocument.model_validate({"tabs": [{"id": 3, "range": {"max": 1250}}]})

    assert tier.id == "7"
    assert normalize_legacy_document(legacy).tiers[0].id == "3"
