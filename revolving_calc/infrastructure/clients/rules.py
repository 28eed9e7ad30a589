"""Rules HTTP client for fetching per-tier and legacy rule documents"""

import asyncio
import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from revolving_calc.config import settings
from revolving_calc.domain.exceptions import RulesAPIError
from revolving_calc.infrastructure.observability.metrics import (
    rules_fetch_latency_histogram,
    tier_fetch_failures_counter,
)
from revolving_calc.schemas import LegacyDocument, TierDocument

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


class RulesClient:
    """Client for the static rule files served next to the widget"""

    def __init__(
        self,
        tier_urls: List[str] | None = None,
        legacy_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.tier_urls = tier_urls if tier_urls is not None else settings.tier_rules_urls
        self.legacy_url = legacy_url or settings.legacy_rules_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _get_json(self, client: httpx.AsyncClient, url: str) -> Any:
        """
        GET a rules file and decode its JSON body.

        Raises:
            RulesAPIError: On timeout, network errors, HTTP errors, a bad URL, or invalid JSON
        """
        try:
            with rules_fetch_latency_histogram.time():
                response = await client.get(url, headers=NO_STORE_HEADERS)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise RulesAPIError(f"Rules fetch timeout after {self.timeout}s: {url}") from e
        except httpx.HTTPStatusError as e:
            raise RulesAPIError(f"Rules fetch error {e.response.status_code}: {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RulesAPIError(f"Rules fetch failed: {url}: {e}") from e
        except ValueError as e:
            raise RulesAPIError(f"Invalid JSON in rules file {url}: {e}") from e

    async def get_tier_document(self, client: httpx.AsyncClient, url: str) -> TierDocument:
        """
        Fetch and validate one per-tier rules file.

        Raises:
            RulesAPIError: On transport errors or a body that is not a valid tier document
        """
        data = await self._get_json(client, url)
        try:
            return TierDocument.model_validate(data)
        except ValidationError as e:
            raise RulesAPIError(f"Invalid tier rules in {url}: {e.error_count()} error(s)") from e

    async def get_tier_documents(self) -> List[Optional[TierDocument]]:
        """
        Fetch all per-tier files concurrently and wait for every one to settle.

        A failed file never affects the others: its slot is None, the failure
        is logged and counted. The result keeps the order of tier_urls.
        """
        async with self._client() as client:
            results = await asyncio.gather(
                *(self.get_tier_document(client, url) for url in self.tier_urls),
                return_exceptions=True,
            )

        documents: List[Optional[TierDocument]] = []
        for url, result in zip(self.tier_urls, results):
            if isinstance(result, RulesAPIError):
                tier_fetch_failures_counter.inc()
                logging.warning(f"Tier rules unavailable: {result}", extra={"url": url})
                documents.append(None)
            elif isinstance(result, BaseException):
                raise result
            else:
                documents.append(result)
        return documents

    async def get_legacy_document(self) -> LegacyDocument:
        """
        Fetch the legacy combined rules file.

        Raises:
            RulesAPIError: On transport errors or a body without a valid `tabs` list
        """
        async with self._client() as client:
            data = await self._get_json(client, self.legacy_url)
        try:
            return LegacyDocument.model_validate(data)
        except ValidationError as e:
            raise RulesAPIError(f"Invalid legacy rules in {self.legacy_url}: {e.error_count()} error(s)") from e
