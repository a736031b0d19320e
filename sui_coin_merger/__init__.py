"""Consolidate fragmented Sui coin objects into fewer, larger coins."""

__version__ = "0.1.0"
