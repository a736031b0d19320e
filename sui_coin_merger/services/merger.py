"""Batch merging of coin objects into fewer, larger coins."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ..chains.sui import MAX_GAS_PAYMENT_OBJECTS, is_sui_coin_type
from ..config import MergeConfig
from ..interfaces.chain import ChainClient
from ..keys import SuiKeypair
from ..models import BatchResult, MergeSummary
from .coin_service import CoinService

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def partition_batches(object_ids: Sequence[str], batch_size: int) -> list[list[str]]:
    """Split ids into contiguous batches of at most ``batch_size``, in order."""
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [
        list(object_ids[i : i + batch_size])
        for i in range(0, len(object_ids), batch_size)
    ]


class CoinMerger:
    """Merge all coins of a type, one transaction per batch."""

    def __init__(
        self,
        chain_client: ChainClient,
        keypair: SuiKeypair,
        coin_service: CoinService,
        config: MergeConfig,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = chain_client
        self._keypair = keypair
        self._coins = coin_service
        self._batch_size = config.batch_size
        self._gas_budget = config.gas_budget
        self._delay_seconds = config.inter_batch_delay_ms / 1000
        self._sleep = sleep

    async def _submit_batch(self, address: str, coin_type: str, batch: list[str]) -> str:
        """Build, sign and execute one merge transaction; return its digest."""
        tx_bytes = await self._client.build_merge_transaction(
            address, coin_type, batch[0], batch[1:], self._gas_budget
        )
        signature = self._keypair.sign_transaction(tx_bytes)
        result = await self._client.execute_transaction_block(
            tx_bytes, [signature], show_effects=True, show_events=True
        )

        digest = result.get("digest", "")
        status = result.get("effects", {}).get("status", {})
        if status and status.get("status") != "success":
            raise RuntimeError(
                f"Merge transaction {digest} failed: {status.get('error', 'unknown error')}"
            )
        return digest

    async def merge_coin_type(
        self, coin_type: str, batch_size: int | None = None
    ) -> MergeSummary:
        """Merge every coin object of ``coin_type`` owned by the signer.

        Each batch folds all of its coins into its first coin. Batches of a
        single coin are skipped. Native SUI batches are capped at the gas
        payment object limit. Errors are logged and re-raised.
        """
        size = self._batch_size if batch_size is None else batch_size
        if size <= 0:
            raise ValueError(f"batch_size must be positive, got {size}")
        if is_sui_coin_type(coin_type) and size > MAX_GAS_PAYMENT_OBJECTS:
            logger.info(
                "Capping SUI batches at %d coins (gas payment limit)",
                MAX_GAS_PAYMENT_OBJECTS,
            )
            size = MAX_GAS_PAYMENT_OBJECTS

        address = self._keypair.address
        try:
            object_ids = await self._coins.get_coin_object_ids(address, coin_type)
            if len(object_ids) <= 1:
                logger.info("No coins need to be merged for %s", coin_type)
                return MergeSummary(
                    coin_type=coin_type, objects_found=len(object_ids), skipped=True
                )

            logger.info("Found %d objects for token %s", len(object_ids), coin_type)

            results: list[BatchResult] = []
            for index, batch in enumerate(partition_batches(object_ids, size), start=1):
                if len(batch) < 2:
                    logger.info("Skipping batch %d with a single coin, nothing to merge", index)
                    continue

                if results:
                    await self._sleep(self._delay_seconds)

                digest = await self._submit_batch(address, coin_type, batch)
                results.append(BatchResult(index=index, size=len(batch), digest=digest))
                logger.info("Batch %d merged successfully: %s", index, digest)

            logger.info("All coin objects merged for %s", coin_type)
            return MergeSummary(
                coin_type=coin_type,
                objects_found=len(object_ids),
                batches=tuple(results),
            )
        except Exception as e:
            logger.error("Error merging coins of %s: %s", coin_type, e)
            raise
