"""SUI chain client."""
from .client import MAX_GAS_PAYMENT_OBJECTS, RpcError, SuiClient, is_sui_coin_type

__all__ = ["MAX_GAS_PAYMENT_OBJECTS", "RpcError", "SuiClient", "is_sui_coin_type"]
