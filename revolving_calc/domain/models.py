"""Domain models - immutable dataclasses representing rule sets and schedules"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Tuple

FINAL_MONTHS = "final"


@dataclass(frozen=True)
class Range:
    """Inclusive amount range; None means unbounded on that side"""

    min: Decimal | None = None
    max: Decimal | None = None

    def contains(self, total: Decimal) -> bool:
        if self.min is not None and total < self.min:
            return False
        if self.max is not None and total > self.max:
            return False
        return True

    @property
    def sort_key(self) -> Decimal:
        # Unbounded lower sorts as 0
        return self.min if self.min is not None else Decimal(0)

    def to_dict(self) -> Dict[str, float | None]:
        return {
            "min": float(self.min) if self.min is not None else None,
            "max": float(self.max) if self.max is not None else None,
        }


@dataclass(frozen=True)
class Band:
    """Schedule step: `months` repetitions of `amount`, or the final sentinel"""

    months: int | str
    amount: Decimal

    @property
    def is_final(self) -> bool:
        return self.months == FINAL_MONTHS


@dataclass(frozen=True)
class LegacyColumn:
    """Legacy schedule column keyed by purchase threshold"""

    purchase: Decimal
    rle: Tuple[Tuple[int, Decimal], ...] = ()


@dataclass(frozen=True)
class TierMeta:
    """Rate metadata, all rates as fractions (0.1349 = 13.49%)"""

    apr_nominal: Decimal | None = None
    apr_representative: Decimal | None = None
    open_fee_monthly: Decimal | None = None
    valid_date: date | None = None


@dataclass(frozen=True)
class Tier:
    """One amount-range-specific rule set (a.k.a. tab)"""

    id: str
    range: Range
    label: Dict[str, str] = field(default_factory=dict)
    bands: Tuple[Band, ...] = ()
    columns: Tuple[LegacyColumn, ...] = ()
    legal: str = ""
    meta: TierMeta = field(default_factory=TierMeta)

    @property
    def has_final_band(self) -> bool:
        return bool(self.bands) and self.bands[-1].is_final


@dataclass(frozen=True)
class RuleSet:
    """Normalized, ordered tiers resolved once per widget session"""

    tiers: Tuple[Tier, ...]
    source: str  # "per_tier" or "legacy"


@dataclass(frozen=True)
class ScheduleEntry:
    """Single month in a repayment schedule"""

    month: int
    amount: Decimal


@dataclass(frozen=True)
class TierSelection:
    """Tier chosen for a total, with its position in the rule set"""

    index: int
    tier: Tier
    label: str

    def record(self) -> Dict[str, object]:
        """Payload the presentation layer may persist or display"""
        return {"id": self.tier.id, "label": self.label, "range": self.tier.range.to_dict()}


class ScheduleStatus(str, Enum):
    OK = "ok"
    EMPTY_CART = "empty_cart"
    CEILING_EXCEEDED = "ceiling_exceeded"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ScheduleView:
    """Everything the presentation layer needs for one schedule request"""

    status: ScheduleStatus
    message: str = ""
    total: Decimal | None = None
    selection: TierSelection | None = None
    entries: List[ScheduleEntry] = field(default_factory=list)
    legal_text: str = ""
    teaser: str = ""
    overview: str = ""
    applied_range: str = ""
    date_stamp: str = ""
    title: str = ""
    banner: str = ""
    column_titles: Tuple[str, ...] = ()
    button_label: str = ""
