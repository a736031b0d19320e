"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from sui_coin_merger.config import AppConfig, ChainConfig, MergeConfig
from sui_coin_merger.keys import SuiKeypair

TEST_SEED = bytes(range(32))


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_merge_config() -> MergeConfig:
    return MergeConfig(
        batch_size=500,
        page_limit=50,
        object_cap=5000,
        inter_batch_delay_ms=1000,
        gas_budget=50_000_000,
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_merge_config: MergeConfig
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        merge=sample_merge_config,
        key_env_var="TEST_MERGE_KEY",
    )


@pytest.fixture()
def keypair() -> SuiKeypair:
    return SuiKeypair(TEST_SEED)


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    merge:
      batch_size: 200
      page_limit: 25
      object_cap: 1000
      inter_batch_delay_ms: 500
      gas_budget: 20000000
      suppress_listing_errors: false
      continue_on_error: false
    key_env_var: MY_KEY
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Fake on-chain data
# ---------------------------------------------------------------------------


def make_object_ids(count: int, prefix: str = "0xc") -> list[str]:
    return [f"{prefix}{i:04d}" for i in range(count)]


def paged_coins(object_ids: list[str], page_size: int = 50):
    """Build a ``get_coins`` side effect serving ``object_ids`` page by page."""

    async def get_coins(
        owner: str, coin_type: str, cursor: str | None, limit: int
    ) -> dict[str, Any]:
        start = int(cursor) if cursor else 0
        end = start + page_size
        has_next = end < len(object_ids)
        return {
            "data": [{"coinObjectId": oid} for oid in object_ids[start:end]],
            "hasNextPage": has_next,
            "nextCursor": str(end) if has_next else None,
        }

    return get_coins


@pytest.fixture()
def chain_client() -> AsyncMock:
    """Chain client mock whose transactions always succeed."""
    client = AsyncMock()
    client.get_all_balances.return_value = []
    client.get_coins.side_effect = paged_coins([])
    client.build_merge_transaction.return_value = "dHhieXRlcw=="  # b"txbytes"

    digests = iter(f"DIGEST{i}" for i in range(1, 1000))

    async def execute(tx_bytes: str, signatures: list[str], **kwargs: Any) -> dict:
        return {
            "digest": next(digests),
            "effects": {"status": {"status": "success"}},
            "events": [],
        }

    client.execute_transaction_block.side_effect = execute
    return client


@pytest.fixture()
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def object_ids_factory():
    return make_object_ids


@pytest.fixture()
def pages_factory():
    return paged_coins
