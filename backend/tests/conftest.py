"""
Pytest configuration and shared fixtures for Catalog Hub tests.

Provides mock clients, stores, services, and sample 4over payloads.
Version: 1.0.0
"""
import itertools
from types import SimpleNamespace
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi import HTTPException

from catalog_hub.schemas.catalog import LocalCatalogEntry, Variant
from catalog_hub.schemas.fourover import PriceTier, RemoteProduct
from catalog_hub.schemas.markup import CategoryMarkup, MarkupConfig, ProductMarkup


BUSINESS_CARDS = "08a9625a-4152-40cf-9007-b2bbb349efec"
POSTCARDS = "5c7a1ed4-9a10-4e6c-b3f0-52b0a1f2c001"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from catalog_hub.core.config import Settings
    return Settings(
        fourover_public_key="test-public-key",
        fourover_private_key="test-private-key",
        fourover_base_url="https://api.fourover.test",
        fourover_timeout_seconds=5.0,
        fourover_max_attempts=3,
        fourover_retry_delays=[1.0, 2.0],
        sync_item_delay_seconds=0.2,
        sync_page_delay_seconds=0.1,
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-supabase-key",
    )


@pytest.fixture
def no_sleep():
    """Stand-in for asyncio.sleep that records delays without waiting."""
    return AsyncMock(return_value=None)


# ---------------------------------------------------------------------------
# Local catalog store (in-memory fake)
# ---------------------------------------------------------------------------

class FakeCatalogStore:
    """Dict-backed catalog keyed by handle, mirroring CatalogStore's contract."""

    def __init__(self) -> None:
        self.entries: Dict[str, LocalCatalogEntry] = {}
        self.failing_handles: set[str] = set()
        self.create_calls = 0
        self.update_calls = 0
        self._ids = itertools.count(1)

    def _check(self, handle: str) -> None:
        if handle in self.failing_handles:
            raise HTTPException(status_code=500, detail=f"Supabase insert into catalog_product failed: {handle}")

    async def get_by_handle(self, handle: str) -> Optional[LocalCatalogEntry]:
        return self.entries.get(handle)

    async def create_entry(self, entry: LocalCatalogEntry) -> LocalCatalogEntry:
        self._check(entry.handle)
        if entry.handle in self.entries:
            raise HTTPException(status_code=409, detail=f"duplicate handle {entry.handle}")
        self.create_calls += 1
        created = entry.model_copy(update={"id": f"prod_{next(self._ids)}"})
        self.entries[entry.handle] = created
        return created

    async def update_entry(
        self, handle: str, metadata: Dict[str, Any], variants: Optional[List[Variant]] = None
    ) -> Optional[LocalCatalogEntry]:
        self._check(handle)
        existing = self.entries.get(handle)
        if existing is None:
            return None
        self.update_calls += 1
        changes: Dict[str, Any] = {"metadata": metadata}
        if variants is not None:
            changes["variants"] = variants
        updated = existing.model_copy(update=changes)
        self.entries[handle] = updated
        return updated


@pytest.fixture
def catalog_store():
    return FakeCatalogStore()


# ---------------------------------------------------------------------------
# Supabase (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_supabase_client():
    """Mocked SupabaseClient with a chainable table query."""
    client = MagicMock()
    mock_table = MagicMock()
    for method in ("select", "insert", "upsert", "update", "delete", "eq", "limit"):
        getattr(mock_table, method).return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])
    client.client.table.return_value = mock_table
    return client


class FakeQuery:
    """Chainable query over one FakeTable; applied on execute()."""

    def __init__(self, table: "FakeTable", op: str, payload: Any = None, **options: Any) -> None:
        self._table = table
        self._op = op
        self._payload = payload
        self._options = options
        self._filters: List[tuple] = []

    def eq(self, key: str, value: Any) -> "FakeQuery":
        self._filters.append((key, value))
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(k) == v for k, v in self._filters)

    def execute(self) -> SimpleNamespace:
        rows = self._table.rows
        if self._op == "select":
            return SimpleNamespace(data=[dict(r) for r in rows if self._matches(r)])
        if self._op == "update":
            hit = [r for r in rows if self._matches(r)]
            for r in hit:
                r.update(self._payload)
            return SimpleNamespace(data=[dict(r) for r in hit])
        if self._op == "upsert":
            key = self._options["on_conflict"]
            written = []
            for new in self._payload:
                existing = next((r for r in rows if r.get(key) == new[key]), None)
                if existing is None:
                    rows.append(dict(new))
                    written.append(dict(new))
                elif not self._options.get("ignore_duplicates"):
                    existing.update(new)
                    written.append(dict(existing))
            return SimpleNamespace(data=written)
        rows.extend(dict(r) for r in self._payload)
        return SimpleNamespace(data=[dict(r) for r in self._payload])


class FakeTable:
    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.upserts: List[List[Dict[str, Any]]] = []

    def select(self, columns: str = "*") -> FakeQuery:
        return FakeQuery(self, "select")

    def insert(self, rows: List[Dict[str, Any]]) -> FakeQuery:
        return FakeQuery(self, "insert", rows)

    def update(self, payload: Dict[str, Any]) -> FakeQuery:
        return FakeQuery(self, "update", payload)

    def upsert(self, rows: List[Dict[str, Any]], on_conflict: str = "", ignore_duplicates: bool = False) -> FakeQuery:
        self.upserts.append([dict(r) for r in rows])
        return FakeQuery(self, "upsert", rows, on_conflict=on_conflict, ignore_duplicates=ignore_duplicates)


class FakeSupabase:
    """In-memory stand-in for SupabaseClient with per-table row storage."""

    def __init__(self) -> None:
        self.tables: Dict[str, FakeTable] = {}

    @property
    def client(self) -> "FakeSupabase":
        return self

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable())


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


# ---------------------------------------------------------------------------
# Markup config
# ---------------------------------------------------------------------------

@pytest.fixture
def markup_config():
    """Config with one override at every tier, plus a disabled category."""
    return MarkupConfig(
        default_markup=0.40,
        category_markups={
            BUSINESS_CARDS: CategoryMarkup(name="Business Cards", markup=0.50, enabled=True),
            POSTCARDS: CategoryMarkup(name="Postcards", markup=0.65, enabled=False),
        },
        product_markups={
            "BC-14PT-GLOSS": ProductMarkup(markup=0.25),
        },
    )


@pytest.fixture
def mock_markup_store(markup_config):
    store = MagicMock()
    store.get_markup_config = AsyncMock(return_value=markup_config)
    store.update_markup_config = AsyncMock(return_value=markup_config)
    return store


# ---------------------------------------------------------------------------
# 4over client (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_fourover_client():
    client = MagicMock()
    client.list_category_products = AsyncMock(return_value=[])
    client.get_base_prices = AsyncMock(return_value=[])
    client.get_option_groups = AsyncMock(return_value=[])
    client.list_categories_page = AsyncMock()
    return client


# ---------------------------------------------------------------------------
# Sample 4over data
# ---------------------------------------------------------------------------

def make_tier(runsize: str, colorspec: str, cost: str, uuid: Optional[str] = None) -> PriceTier:
    return PriceTier(
        base_price_uuid=uuid or f"bp-{runsize}-{colorspec}",
        runsize=runsize,
        colorspec=colorspec,
        product_baseprice=Decimal(cost),
    )


def make_product(code: str, uuid: Optional[str] = None, description: Optional[str] = None) -> RemoteProduct:
    return RemoteProduct(
        product_uuid=uuid or f"uuid-{code.lower()}",
        product_code=code,
        product_description=description or f"{code} description",
    )


@pytest.fixture
def sample_price_tiers():
    return [
        make_tier("250", "4/0", "12.345"),
        make_tier("500", "4/0", "15.10"),
        make_tier("1000", "4/4", "22.00"),
    ]


@pytest.fixture
def sample_remote_product(sample_price_tiers):
    return make_product(
        "BC-14PT-GLOSS", uuid="f4b18ba9-835d-4425-aebd-3b76431db03c",
        description="14PT Gloss Business Cards",
    ).with_pricing(BUSINESS_CARDS, sample_price_tiers)


@pytest.fixture
def sample_products_payload():
    """Raw /categories/{id}/products response."""
    return {
        "entities": [
            {
                "product_uuid": "f4b18ba9-835d-4425-aebd-3b76431db03c",
                "product_code": "BC-14PT-GLOSS",
                "product_description": "14PT Gloss Business Cards",
                "product_type": "business cards",
            },
            {
                "product_uuid": "0b6c1e77-2c7f-4f45-8f7b-6e0f6c2c9a11",
                "product_code": "BC-16PT MATTE",
                "product_description": "16PT Matte Business Cards",
            },
        ],
        "totalResults": 2,
        "maximumPages": 0,
        "currentPage": 0,
    }


@pytest.fixture
def sample_base_prices_payload():
    """Raw /products/{id}/baseprices response."""
    return {
        "entities": [
            {
                "base_price_uuid": "7e2a-250",
                "runsize": "250",
                "colorspec": "4/0",
                "product_baseprice": "12.345",
                "can_group_ship": True,
            },
            {
                "base_price_uuid": "7e2a-500",
                "runsize": "500",
                "colorspec": "4/4",
                "product_baseprice": "18.90",
            },
        ],
        "totalResults": 2,
        "maximumPages": 0,
    }
