"""Pytest fixtures for testing"""

import json
import pytest
from decimal import Decimal
from typing import Callable, Dict, List
import httpx
from revolving_calc.domain.models import Band, Range, RuleSet, Tier, TierMeta
from revolving_calc.infrastructure.clients.rules import RulesClient

BASE_URL = "http://rules.test/assets/"
TIER_URLS = [
    BASE_URL + "revolving_bands_1250.json",
    BASE_URL + "revolving_bands_1250_5000.json",
    BASE_URL + "revolving_bands_5000_plus.json",
]
LEGACY_URL = BASE_URL + "revolvingRates.json"


@pytest.fixture
def tier_documents() -> Dict[str, dict]:
    """Per-tier rule files keyed by URL, as a merchant would publish them"""
    return {
        TIER_URLS[0]: {
            "id": "A",
            "range": {"max": 1250},
            "bands": [{"months": 12, "amount": 25}, {"months": "final", "amount": 25}],
            "legal_lines": ["Offre [[A]]", "jusqu'à 1 250 €."],
            "apr_nominal": 0.1265,
            "apr_representative": 0.135,
            "open_fee_monthly": 0.0004,
            "valid_date": "2025-05-27",
        },
        TIER_URLS[1]: {
            "id": "B",
            "range": {"min": 1250, "max": 5000},
            "bands": [{"months": 6, "amount": 60}, {"months": "final", "amount": 45}],
            "apr_nominal": 0.1149,
            "apr_representative": 0.1199,
            "open_fee_monthly": 0.0004,
        },
        TIER_URLS[2]: {
            "id": "C",
            "range": {"min": 5001},
            "bands": [{"months": 24, "amount": 150}, {"months": "final", "amount": 150}],
            "apr_nominal": 0.0999,
            "apr_representative": 0.1049,
            "open_fee_monthly": 0.0004,
        },
    }


@pytest.fixture
def legacy_document() -> dict:
    """Legacy combined rules file with RLE columns"""
    return {
        "tabs": [
            {
                "id": "L2",
                "range": {"min": 1250.01},
                "columns": [{"purchase": 5000, "rle": [[10, 100], [2, 75.5]]}],
                "legal": "Offre [[historique]].",
            },
            {
                "id": "L1",
                "range": {"max": 1250},
                "label": {"fr": "Petit montant"},
                "columns": [
                    {"purchase": 1250, "rle": [[3, 25], [1, 12.5]]},
                    {"purchase": 500, "rle": [[2, 50]]},
                ],
            },
        ]
    }


@pytest.fixture
def make_client() -> Callable[..., RulesClient]:
    """
    Build a RulesClient served by an in-memory transport.

    `responses` maps URL -> JSON-able body, raw bytes, an int status code, or
    an exception instance to raise. Unknown URLs answer 404. Requested URLs are
    appended to client.requested.
    """

    def factory(responses: Dict[str, object]) -> RulesClient:
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            body = responses.get(url, 404)
            if isinstance(body, Exception):
                raise body
            if isinstance(body, int):
                return httpx.Response(body)
            if isinstance(body, bytes):
                return httpx.Response(200, content=body)
            return httpx.Response(200, content=json.dumps(body).encode())

        client = RulesClient(
            tier_urls=TIER_URLS,
            legacy_url=LEGACY_URL,
            transport=httpx.MockTransport(handler),
        )
        client.requested = requested
        return client

    return factory


def make_tier(
    tier_id: str = "A",
    min=None,
    max=None,
    bands=(),
    legal: str = "",
    **meta,
) -> Tier:
    """Tier built directly from plain numbers"""
    return Tier(
        id=tier_id,
        range=Range(
            min=Decimal(str(min)) if min is not None else None,
            max=Decimal(str(max)) if max is not None else None,
        ),
        bands=tuple(
            Band(months=months, amount=Decimal(str(amount))) for months, amount in bands
        ),
        legal=legal,
        meta=TierMeta(**{k: Decimal(str(v)) if isinstance(v, (int, float)) else v for k, v in meta.items()}),
    )


@pytest.fixture
def three_tiers() -> RuleSet:
    """Tiers ≤1250, 1250–5000 and ≥5001"""
    return RuleSet(
        tiers=(
            make_tier("A", max=1250),
            make_tier("B", min=1250, max=5000),
            make_tier("C", min=5001),
        ),
        source="per_tier",
    )


@pytest.fixture
def tier_factory() -> Callable[..., Tier]:
    return make_tier


@pytest.fixture
def tier_urls() -> List[str]:
    return list(TIER_URLS)


@pytest.fixture
def legacy_url() -> str:
    return LEGACY_URL
