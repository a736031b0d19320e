"""Merge orchestration — iterates the signer's coin types."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..chains.sui import SuiClient
from ..config import AppConfig
from ..interfaces.chain import ChainClient
from ..keys import SuiKeypair
from ..models import CoinBalance, MergeSummary, RunReport
from .coin_service import CoinService
from .merger import CoinMerger, Sleep

logger = logging.getLogger(__name__)


class MergeRunner:
    """Runs coin merges for every coin type held by the signer."""

    def __init__(
        self,
        config: AppConfig,
        keypair: SuiKeypair,
        chain_client: ChainClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._keypair = keypair
        self._client: ChainClient = chain_client or SuiClient(config.chain)
        self._coins = CoinService(self._client, config.merge)
        self._merger = CoinMerger(
            self._client, keypair, self._coins, config.merge, sleep=sleep
        )

    @property
    def address(self) -> str:
        return self._keypair.address

    async def list_balances(self) -> list[CoinBalance]:
        return await self._coins.get_balances(self.address)

    async def run(
        self,
        coin_types: Sequence[str] | None = None,
        batch_size: int | None = None,
    ) -> RunReport:
        """Merge coins for the given coin types, or every owned coin type.

        With ``continue_on_error`` a failing coin type is recorded in the
        report and the run moves on; otherwise the error propagates.
        """
        if batch_size is not None and batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        address = self.address
        if coin_types:
            targets = list(dict.fromkeys(coin_types))
        else:
            targets = await self._coins.get_owned_coin_types(address)

        if not targets:
            logger.info("No owned tokens found for address %s", address)
            return RunReport(address=address)

        logger.info("Found %d owned tokens for address %s", len(targets), address)

        summaries: list[MergeSummary] = []
        failures: list[tuple[str, str]] = []
        for coin_type in targets:
            logger.info("Token type: %s", coin_type)
            try:
                summary = await self._merger.merge_coin_type(coin_type, batch_size)
            except Exception as e:
                if not self._config.merge.continue_on_error:
                    raise
                failures.append((coin_type, str(e)))
                continue
            summaries.append(summary)

        merged = sum(s.transactions for s in summaries)
        logger.info(
            "Merge run finished: %d coin types, %d transactions, %d failures",
            len(targets),
            merged,
            len(failures),
        )
        return RunReport(
            address=address, summaries=tuple(summaries), failures=tuple(failures)
        )
