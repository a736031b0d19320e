"""SUI RPC client with fallback support."""
import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import ChainConfig

logger = logging.getLogger(__name__)

SUI_FRAMEWORK_ADDRESS = "0x2"

# Protocol limit on gas payment objects; pay-all-sui pays gas with every input coin
MAX_GAS_PAYMENT_OBJECTS = 256


class RpcError(RuntimeError):
    """The node answered with a JSON-RPC error object."""


def is_sui_coin_type(coin_type: str) -> bool:
    """True for the native gas coin type, in short or long address form."""
    parts = coin_type.split("::")
    if len(parts) != 3 or parts[1:] != ["sui", "SUI"]:
        return False
    try:
        return int(parts[0], 16) == 2
    except ValueError:
        return False


class SuiClient:
    """SUI blockchain RPC client with automatic endpoint fallback."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints.

        Only transport failures move on to the next endpoint. An error reply
        from a node raises :class:`RpcError` without trying other endpoints.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json()
                        if "error" in result:
                            raise RpcError(f"RPC Error: {result['error']}")

                        if rpc_index != self.current_rpc_index:
                            logger.info("Switched to RPC endpoint: %s", rpc_url)
                            self.current_rpc_index = rpc_index

                        return result.get("result", {})
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed (%s): %s", rpc_url, method, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

        raise RuntimeError(f"All RPC endpoints failed. Last error: {last_error}")

    async def get_all_balances(self, owner: str) -> list[dict[str, Any]]:
        """Get the balance of every coin type owned by an address."""
        result = await self.rpc_call("suix_getAllBalances", [owner])
        return list(result or [])

    async def get_coins(
        self, owner: str, coin_type: str, cursor: str | None, limit: int
    ) -> dict[str, Any]:
        """Get one page of coin objects of a type owned by an address."""
        return await self.rpc_call(
            "suix_getCoins", [owner, coin_type, cursor, limit]
        )

    async def build_merge_transaction(
        self,
        signer: str,
        coin_type: str,
        primary_coin: str,
        coins_to_merge: list[str],
        gas_budget: int,
    ) -> str:
        """Build a transaction folding ``coins_to_merge`` into ``primary_coin``.

        Native SUI coins go through ``unsafe_payAllSui`` back to the signer so
        the merged coins can also pay for gas. Other coin types use
        ``0x2::pay::join_vec`` with a node-selected gas coin. Returns the
        base64 transaction bytes.
        """
        if is_sui_coin_type(coin_type):
            result = await self.rpc_call(
                "unsafe_payAllSui",
                [signer, [primary_coin, *coins_to_merge], signer, str(gas_budget)],
            )
        else:
            result = await self.rpc_call(
                "unsafe_moveCall",
                [
                    signer,
                    SUI_FRAMEWORK_ADDRESS,
                    "pay",
                    "join_vec",
                    [coin_type],
                    [primary_coin, list(coins_to_merge)],
                    None,
                    str(gas_budget),
                ],
            )
        tx_bytes = result.get("txBytes")
        if not tx_bytes:
            raise RuntimeError("Transaction builder returned no txBytes")
        return tx_bytes

    async def execute_transaction_block(
        self,
        tx_bytes: str,
        signatures: list[str],
        show_effects: bool = True,
        show_events: bool = True,
    ) -> dict[str, Any]:
        """Submit a signed transaction and wait for local execution."""
        return await self.rpc_call(
            "sui_executeTransactionBlock",
            [
                tx_bytes,
                signatures,
                {"showEffects": show_effects, "showEvents": show_events},
                "WaitForLocalExecution",
            ],
        )
