"""Rule normalization - turns either rule document shape into a canonical RuleSet"""

from decimal import Decimal
from typing import List, Sequence
from revolving_calc.domain.i18n import SUPPORTED_LANGUAGES, get_translations
from revolving_calc.domain.models import Band, LegacyColumn, Range, RuleSet, Tier, TierMeta
from revolving_calc.schemas import BandSchema, LegacyDocument, TierDocument, join_legal_lines

SLOT_IDS = ("A", "B", "C")


def _bands(bands: List[BandSchema]) -> tuple:
    return tuple(Band(months=band.months, amount=band.amount) for band in bands)


def _slot_id(slot: int) -> str:
    return SLOT_IDS[slot] if slot < len(SLOT_IDS) else f"T{slot + 1}"


def tier_from_document(document: TierDocument, slot: int, use_i18n_legal: bool = False) -> Tier:
    """
    Build a Tier from one per-tier document.

    Args:
        document: Validated per-tier document
        slot: Position of the file the document came from (0 = A, 1 = B, 2 = C)
        use_i18n_legal: Drop the document's legal_lines so localized text is synthesized
    """
    if document.range is not None:
        tier_range = Range(min=document.range.min, max=document.range.max)
    else:
        # Separate fields: lower defaults to 0, upper stays unbounded
        tier_range = Range(min=document.min if document.min is not None else Decimal(0), max=document.max)

    label = document.label or {lang: get_translations(lang).tab_label(slot) for lang in SUPPORTED_LANGUAGES}

    return Tier(
        id=document.id or _slot_id(slot),
        range=tier_range,
        label=dict(label),
        bands=_bands(document.bands),
        legal="" if use_i18n_legal else join_legal_lines(document.legal_lines),
        meta=TierMeta(
            apr_nominal=document.apr_nominal,
            apr_representative=document.apr_representative,
            open_fee_monthly=document.open_fee_monthly,
            valid_date=document.valid_date,
        ),
    )


def normalize_tier_documents(
    documents: Sequence[TierDocument | None],
    use_i18n_legal: bool = False,
) -> RuleSet | None:
    """
    Normalize the per-tier documents that loaded into a RuleSet.

    Slots whose fetch failed are None and are simply left out, so the result
    holds 1 to 3 tiers sorted ascending by lower bound. Returns None when no
    document loaded, which is the caller's cue to fall back to the legacy file.
    """
    tiers = [
        tier_from_document(document, slot, use_i18n_legal)
        for slot, document in enumerate(documents)
        if document is not None
    ]
    if not tiers:
        return None

    tiers.sort(key=lambda t: t.range.sort_key)
    return RuleSet(tiers=tuple(tiers), source="per_tier")


def normalize_legacy_document(document: LegacyDocument) -> RuleSet:
    """
    Use the legacy `tabs` as the RuleSet as they are.

    No sorting, no label derivation: the legacy file is already in canonical
    shape.
    """
    tiers = []
    for tab in document.tabs:
        legal = tab.legal if tab.legal is not None else join_legal_lines(tab.legal_lines)
        tiers.append(
            Tier(
                id=tab.id or "",
                range=Range(min=tab.range.min, max=tab.range.max),
                label=dict(tab.label),
                bands=_bands(tab.bands),
                columns=tuple(
                    LegacyColumn(purchase=col.purchase, rle=tuple(tuple(pair) for pair in col.rle))
                    for col in tab.columns
                ),
                legal=legal,
                meta=TierMeta(
                    apr_nominal=tab.meta.apr_nominal,
                    apr_representative=tab.meta.apr_representative,
                    open_fee_monthly=tab.meta.open_fee_monthly,
                    valid_date=tab.meta.valid_date,
                ),
            )
        )
    return RuleSet(tiers=tuple(tiers), source="legacy")
