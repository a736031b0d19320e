"""Protocol interfaces for the coin merger."""
from .chain import ChainClient

__all__ = ["ChainClient"]
