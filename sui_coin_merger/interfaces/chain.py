"""Chain client protocol — blockchain RPC abstraction."""
from typing import Any, Protocol


class ChainClient(Protocol):
    """Abstract interface for blockchain RPC interactions."""

    async def get_all_balances(self, owner: str) -> list[dict[str, Any]]: ...

    async def get_coins(
        self, owner: str, coin_type: str, cursor: str | None, limit: int
    ) -> dict[str, Any]: ...

    async def build_merge_transaction(
        self,
        signer: str,
        coin_type: str,
        primary_coin: str,
        coins_to_merge: list[str],
        gas_budget: int,
    ) -> str: ...

    async def execute_transaction_block(
        self,
        tx_bytes: str,
        signatures: list[str],
        show_effects: bool = True,
        show_events: bool = True,
    ) -> dict[str, Any]: ...
