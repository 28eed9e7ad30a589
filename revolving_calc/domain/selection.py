"""Range selection - picks the tier whose range contains the purchase total"""

from decimal import Decimal
from revolving_calc.domain.i18n import get_translations
from revolving_calc.domain.models import RuleSet, Tier, TierSelection


def tier_label(tier: Tier, index: int, language: str) -> str:
    """Tier label in the given language, or the positional label when missing"""
    label = tier.label.get(language)
    if label:
        return label
    return get_translations(language).tab_label(index)


def select_tier(rule_set: RuleSet, total: Decimal, language: str = "fr") -> TierSelection | None:
    """
    Return the first tier whose inclusive [min, max] range contains the total.

    Tiers are scanned in rule set order. None means "no matching tier", which
    the presentation layer shows as the ceiling-exceeded message; it is not a
    load failure.
    """
    for index, tier in enumerate(rule_set.tiers):
        if tier.range.contains(total):
            return TierSelection(index=index, tier=tier, label=tier_label(tier, index, language))
    return None
