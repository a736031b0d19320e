"""Coin listing — owned coin types and paginated coin object ids."""
from __future__ import annotations

import logging
from typing import Any

from ..config import MergeConfig
from ..interfaces.chain import ChainClient
from ..models import CoinBalance

logger = logging.getLogger(__name__)


def _parse_balance(raw: dict[str, Any]) -> CoinBalance:
    return CoinBalance(
        coin_type=raw["coinType"],
        coin_object_count=int(raw.get("coinObjectCount", 0)),
        total_balance=int(raw.get("totalBalance", 0)),
    )


class CoinService:
    """List coin types and coin objects owned by an address.

    Listing failures are logged and turned into empty results unless
    ``suppress_listing_errors`` is disabled, in which case they propagate.
    An empty result therefore does not prove the address holds nothing.
    """

    def __init__(self, chain_client: ChainClient, config: MergeConfig) -> None:
        self._client = chain_client
        self._page_limit = config.page_limit
        self._object_cap = config.object_cap
        self._suppress_errors = config.suppress_listing_errors

    async def get_balances(self, address: str) -> list[CoinBalance]:
        """Get per-coin-type balances held by an address."""
        try:
            raw = await self._client.get_all_balances(address)
            return [_parse_balance(item) for item in raw]
        except Exception as e:
            logger.error("Error fetching tokens for address %s: %s", address, e)
            if not self._suppress_errors:
                raise
            return []

    async def get_owned_coin_types(self, address: str) -> list[str]:
        """Get the distinct coin types held by an address, in server order."""
        balances = await self.get_balances(address)
        return list(dict.fromkeys(b.coin_type for b in balances))

    async def get_coin_object_ids(self, address: str, coin_type: str) -> list[str]:
        """Get coin object ids of one type, stopping at the object cap."""
        object_ids: list[str] = []
        cursor: str | None = None

        try:
            while True:
                page = await self._client.get_coins(
                    address, coin_type, cursor, self._page_limit
                )
                object_ids.extend(coin["coinObjectId"] for coin in page.get("data", []))

                if len(object_ids) >= self._object_cap:
                    logger.info(
                        "Fetched %d coins, stopping at the cap of %d",
                        len(object_ids),
                        self._object_cap,
                    )
                    return object_ids[: self._object_cap]

                cursor = page.get("nextCursor")
                if not page.get("hasNextPage", False) or not cursor:
                    return object_ids
        except Exception as e:
            logger.error(
                "Error fetching coin object IDs of %s for address %s: %s",
                coin_type,
                address,
                e,
            )
            if not self._suppress_errors:
                raise
            return []
