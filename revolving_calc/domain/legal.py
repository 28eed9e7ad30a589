"""Legal disclaimer - pass-through JSON legal text or a localized synthesized sentence"""

import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from revolving_calc.domain.i18n import get_translations
from revolving_calc.domain.models import Tier
from revolving_calc.utils.date_utils import format_date_dmy, resolve_valid_date
from revolving_calc.utils.number_format import format_int_currency, format_percent, to_decimal

EMPHASIS_PATTERN = re.compile(r"\[\[(.*?)\]\]")
EMPHASIS_REPLACEMENT = r'<span style="font-weight: bold; font-size: 16px; line-height: 19px">\1</span>'


def format_legal_text(text: str | None) -> str:
    """Wrap each [[...]] chip in a bold span; the only markup the legal text knows"""
    if not text:
        return ""
    return EMPHASIS_PATTERN.sub(EMPHASIS_REPLACEMENT, text)


def build_legal_text(
    tier: Tier,
    language: str = "fr",
    use_i18n_legal: bool = False,
    today: date | None = None,
) -> str:
    """
    Build the legal paragraph for a tier.

    Rules:
    - JSON legal text is kept when present, unless use_i18n_legal forces the
      localized template
    - Template by range: both bounds -> "between", upper only -> "single",
      lower only -> "min" (shown as lower + 1 so it does not repeat the upper
      bound of the previous tier), no bounds -> empty string

    Args:
        tier: Selected tier
        language: fr, en, nl or de (anything else uses fr)
        use_i18n_legal: Ignore tier.legal and always synthesize
        today: Date used when the tier has no valid_date (default: today)
    """
    if not use_i18n_legal and tier.legal:
        return format_legal_text(tier.legal)

    t = get_translations(language)
    meta = tier.meta
    values = {
        "apr_rep": format_percent(meta.apr_representative, language),
        "apr_nom": format_percent(meta.apr_nominal, language),
        "fee_monthly": format_percent(meta.open_fee_monthly, language),
        "date": format_date_dmy(resolve_valid_date(meta.valid_date, today), t.date_sep),
    }
    lower, upper = tier.range.min, tier.range.max

    if lower is not None and upper is not None:
        text = t.legal_templates["between"].format(
            min=format_int_currency(lower, language),
            max=format_int_currency(upper, language),
            **values,
        )
    elif upper is not None:
        text = t.legal_templates["single"].format(amount=format_int_currency(upper, language), **values)
    elif lower is not None:
        display_min = to_decimal(lower).quantize(Decimal(1), rounding=ROUND_HALF_UP) + 1
        text = t.legal_templates["min"].format(min=format_int_currency(display_min, language), **values)
    else:
        return ""

    return format_legal_text(text)
