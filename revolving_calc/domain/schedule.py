"""Schedule expansion - turns a tier's compact steps into month-by-month amounts"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, Tuple
from revolving_calc.domain.models import Band, LegacyColumn, ScheduleEntry, Tier
from revolving_calc.utils.number_format import to_decimal

CENT = Decimal("0.01")
DEFAULT_FALLBACK_AMOUNT = Decimal(25)


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def expand_bands(bands: Sequence[Band]) -> List[Decimal]:
    """
    Expand bands into one amount per month.

    The "final" band is skipped here; build_schedule() tops the schedule up
    from it once the total is known.

    Example:
        [Band(3, 25), Band(1, 12.5)] -> [25, 25, 25, 12.5]
    """
    amounts = []
    for band in bands:
        if band.is_final:
            continue
        amounts.extend([band.amount] * band.months)
    return amounts


def expand_rle(rle: Sequence[Tuple[int, Decimal]]) -> List[Decimal]:
    """
    Expand legacy run-length pairs.

    Example:
        [(3, 25), (1, 12.5)] -> [25, 25, 25, 12.5]
    """
    amounts = []
    for count, amount in rle:
        amounts.extend([amount] * count)
    return amounts


def pick_column(columns: Sequence[LegacyColumn]) -> LegacyColumn | None:
    """
    Choose the legacy column with the smallest non-negative purchase threshold.

    Falls back to the highest threshold when none is non-negative. The purchase
    total is intentionally not taken into account: existing legacy data relies
    on this choice.
    """
    if not columns:
        return None
    ordered = sorted(columns, key=lambda c: c.purchase)
    for column in ordered:
        if column.purchase >= 0:
            return column
    return ordered[-1]


def final_step_amount(bands: Sequence[Band]) -> Decimal:
    """Amount of the nearest numeric band before the final one (25 when missing)"""
    for band in reversed(bands[:-1]):
        if not band.is_final:
            return band.amount if band.amount > 0 else DEFAULT_FALLBACK_AMOUNT
    return DEFAULT_FALLBACK_AMOUNT


def top_up(amounts: List[Decimal], bands: Sequence[Band], total: Decimal) -> List[Decimal]:
    """
    Extend a schedule ending in a "final" band until it repays the total.

    Repeats the last numeric step amount while at least one more full step
    fits in the remaining balance, then appends the remainder rounded to
    cents. Nothing is appended when the explicit bands already cover the total.

    Example:
        bands 2 x 100 then final, total 325 -> [100, 100, 100, 25]
    """
    paid = sum(amounts, Decimal(0))
    if total <= paid:
        return amounts

    step = final_step_amount(bands)
    extended = list(amounts)
    rest = _cents(total - paid)
    while rest - step >= CENT:
        extended.append(step)
        rest = _cents(rest - step)
    if rest >= CENT:
        extended.append(rest)
    return extended


def build_schedule(tier: Tier, total) -> List[ScheduleEntry]:
    """
    Build the repayment schedule of a tier for a purchase total.

    Bands are preferred; legacy RLE columns are used only when the tier has
    no bands. Month numbers are 1-based and follow list order.

    Args:
        tier: Selected tier
        total: Purchase total in EUR, the amount the schedule must repay

    Returns:
        List of ScheduleEntry, empty when the tier carries no schedule
    """
    total = to_decimal(total)

    if tier.bands:
        amounts = expand_bands(tier.bands)
        if tier.has_final_band:
            amounts = top_up(amounts, tier.bands, total)
    else:
        column = pick_column(tier.columns)
        amounts = expand_rle(column.rle) if column is not None else []

    return [ScheduleEntry(month=i + 1, amount=amount) for i, amount in enumerate(amounts)]
