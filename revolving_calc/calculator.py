"""Revolving credit calculator - one widget session from rule loading to schedule"""

import asyncio
import logging
import math
import time
import uuid
from datetime import date
from decimal import Decimal, InvalidOperation

from revolving_calc.config import settings
from revolving_calc.domain.exceptions import RuleLoadError, RulesAPIError
from revolving_calc.domain.i18n import get_translations, normalize_language
from revolving_calc.domain.legal import build_legal_text
from revolving_calc.domain.models import RuleSet, ScheduleStatus, ScheduleView
from revolving_calc.domain.normalizer import normalize_legacy_document, normalize_tier_documents
from revolving_calc.domain.schedule import build_schedule
from revolving_calc.domain.selection import select_tier
from revolving_calc.infrastructure.clients.rules import RulesClient
from revolving_calc.infrastructure.observability.logging import log_rules_resolved, log_schedule
from revolving_calc.infrastructure.observability.metrics import (
    legacy_fetch_failures_counter,
    record_schedule,
    rules_resolved_counter,
)
from revolving_calc.utils.date_utils import format_date_dmy
from revolving_calc.utils.number_format import format_number


def parse_total(total) -> Decimal | None:
    """Purchase total as Decimal, or None when missing, non-finite, zero or negative"""
    if total is None or isinstance(total, bool):
        return None
    if isinstance(total, float) and not math.isfinite(total):
        return None
    try:
        value = Decimal(str(total))
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


async def load_rule_set(client: RulesClient, use_i18n_legal: bool = False) -> RuleSet:
    """
    Resolve the rule set: per-tier files first, legacy file only if none loaded.

    Flow:
    1. Fetch the three per-tier files concurrently, tolerating individual failures
    2. If at least one loaded, normalize those (partial sets are never completed)
    3. Otherwise fetch the legacy combined file and use its tabs as they are

    Raises:
        RuleLoadError: No per-tier file loaded and the legacy file failed
    """
    start_time = time.time()

    documents = await client.get_tier_documents()
    rule_set = normalize_tier_documents(documents, use_i18n_legal=use_i18n_legal)

    if rule_set is None:
        try:
            legacy = await client.get_legacy_document()
        except RulesAPIError as e:
            legacy_fetch_failures_counter.inc()
            logging.error(f"Legacy rules error: {e}")
            raise RuleLoadError("No rules available: per-tier and legacy files failed") from e
        rule_set = normalize_legacy_document(legacy)

    rules_resolved_counter.labels(source=rule_set.source).inc()
    log_rules_resolved(rule_set.source, len(rule_set.tiers), (time.time() - start_time) * 1000)
    return rule_set


class RevolvingCalculator:
    """
    One widget session.

    The rule set is loaded on the first schedule request and reused for the
    rest of the session. A failed load is not kept, so the next request tries
    again. Tier selection and expansion run fresh on every request because the
    total may change between opens.
    """

    def __init__(
        self,
        client: RulesClient | None = None,
        language: str | None = None,
        use_i18n_legal: bool | None = None,
    ):
        self.client = client or RulesClient()
        self.language = normalize_language(language or settings.language)
        self.use_i18n_legal = settings.use_i18n_legal if use_i18n_legal is None else use_i18n_legal
        self.session_id = str(uuid.uuid4())
        self.t = get_translations(self.language)
        self._rule_set: RuleSet | None = None
        self._loading: asyncio.Future | None = None

    async def get_rule_set(self) -> RuleSet:
        """Resolved rule set; overlapping requests share a single in-flight load"""
        if self._rule_set is not None:
            return self._rule_set
        if self._loading is None:
            self._loading = asyncio.ensure_future(load_rule_set(self.client, self.use_i18n_legal))
        loading = self._loading
        try:
            self._rule_set = await loading
        finally:
            if self._loading is loading:
                self._loading = None
        return self._rule_set

    def _chrome(self) -> dict:
        return {
            "title": self.t.schedule_title,
            "banner": self.t.header_banner,
            "column_titles": (self.t.col_months, self.t.col_to_repay),
            "button_label": self.t.see_schedule_btn,
        }

    def _empty(self, status: ScheduleStatus, message: str, total: Decimal | None = None) -> ScheduleView:
        return ScheduleView(status=status, message=message, total=total, **self._chrome())

    async def get_schedule(self, total, today: date | None = None) -> ScheduleView:
        """
        Compute the schedule view for a purchase total.

        Returns:
            ScheduleView with status ok, or empty_cart / unavailable /
            ceiling_exceeded and the localized message for that case
        """
        start_time = time.time()
        view = await self._build_view(total, today or date.today())

        tier_id = view.selection.tier.id if view.selection else None
        record_schedule(view.status.value, tier_id)
        log_schedule(
            self.session_id,
            view.status.value,
            tier_id,
            len(view.entries),
            (time.time() - start_time) * 1000,
        )
        return view

    async def _build_view(self, total, today: date) -> ScheduleView:
        amount = parse_total(total)
        if amount is None:
            return self._empty(ScheduleStatus.EMPTY_CART, self.t.empty_cart)

        try:
            rule_set = await self.get_rule_set()
        except RuleLoadError as e:
            logging.error(f"Rules load error: {e}", extra={"session_id": self.session_id})
            return self._empty(ScheduleStatus.UNAVAILABLE, self.t.unavailable, amount)

        selection = select_tier(rule_set, amount, self.language)
        if selection is None:
            return self._empty(ScheduleStatus.CEILING_EXCEEDED, self.t.too_high, amount)

        entries = build_schedule(selection.tier, amount)
        first = entries[0].amount if entries else Decimal(0)

        return ScheduleView(
            status=ScheduleStatus.OK,
            total=amount,
            selection=selection,
            entries=entries,
            legal_text=build_legal_text(selection.tier, self.language, self.use_i18n_legal, today),
            teaser=self.t.teaser.format(amount=f"{format_number(first, self.language)}€"),
            overview=self.t.overview.format(total=format_number(amount, self.language)),
            applied_range=self.t.applied_range.format(label=selection.label),
            date_stamp=f"{self.t.date_label}: {format_date_dmy(today)}",
            **self._chrome(),
        )
