"""Service modules"""
from .coin_service import CoinService
from .merger import CoinMerger, partition_batches
from .runner import MergeRunner

__all__ = ["CoinService", "CoinMerger", "MergeRunner", "partition_batches"]
