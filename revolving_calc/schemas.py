"""Pydantic schemas validating the two accepted rule document shapes"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RangeSchema(BaseModel):
    """Amount range; a missing or null bound is unbounded"""

    min: Optional[Decimal] = None
    max: Optional[Decimal] = None


class BandSchema(BaseModel):
    """Schedule step in the per-tier format"""

    months: Union[int, Literal["final"]]
    amount: Decimal = Field(default=Decimal(0), ge=0)

    @field_validator("months", mode="before")
    @classmethod
    def lowercase_final(cls, value):
        if isinstance(value, str) and value.strip().lower() == "final":
            return "final"
        return value

    @field_validator("months")
    @classmethod
    def positive_months(cls, value):
        if isinstance(value, int) and value <= 0:
            raise ValueError("months must be a positive integer or 'final'")
        return value


def _check_final_is_last(bands: List[BandSchema]) -> None:
    finals = [i for i, band in enumerate(bands) if band.months == "final"]
    if finals and finals != [len(bands) - 1]:
        raise ValueError("a 'final' band may only appear once, as the last band")


def _id_as_text(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def join_legal_lines(legal_lines: Union[str, List[str], None]) -> str:
    if isinstance(legal_lines, list):
        return " ".join(legal_lines)
    return legal_lines or ""


class TierDocument(BaseModel):
    """
    One per-tier rules file (revolving_bands_*.json).

    The range comes either from a `range` object or from top-level
    `min`/`max` fields.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    range: Optional[RangeSchema] = None
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None
    label: Optional[Dict[str, str]] = None
    bands: List[BandSchema] = []
    legal_lines: Union[str, List[str], None] = None
    apr_nominal: Optional[Decimal] = None
    apr_representative: Optional[Decimal] = None
    open_fee_monthly: Optional[Decimal] = None
    valid_date: Optional[date] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value):
        return _id_as_text(value)

    @model_validator(mode="after")
    def final_band_last(self):
        _check_final_is_last(self.bands)
        return self


class LegacyColumnSchema(BaseModel):
    """RLE schedule column of the legacy format"""

    purchase: Decimal
    rle: List[Tuple[int, Decimal]] = []


class MetaSchema(BaseModel):
    apr_nominal: Optional[Decimal] = None
    apr_representative: Optional[Decimal] = None
    open_fee_monthly: Optional[Decimal] = None
    valid_date: Optional[date] = None


class LegacyTabSchema(BaseModel):
    """Tab of the legacy combined file, already in canonical shape"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    range: RangeSchema = RangeSchema()
    label: Dict[str, str] = {}
    bands: List[BandSchema] = []
    columns: List[LegacyColumnSchema] = []
    legal: Optional[str] = None
    legal_lines: Union[str, List[str], None] = None
    meta: MetaSchema = MetaSchema()

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value):
        return _id_as_text(value)

    @model_validator(mode="after")
    def final_band_last(self):
        _check_final_is_last(self.bands)
        return self


class LegacyDocument(BaseModel):
    """Legacy combined rules file (revolvingRates.json)"""

    tabs: List[LegacyTabSchema]
