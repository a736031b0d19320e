"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://fullnode.mainnet.sui.io:443"
DEFAULT_KEY_ENV_VAR = "MERGE_COIN_PRIVATE_KEY"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = (DEFAULT_RPC_URL,)
    rpc_timeout: int = 30


@dataclass(frozen=True)
class MergeConfig:
    """Batching, paging and submission settings for a merge run."""

    batch_size: int = 500
    page_limit: int = 50
    object_cap: int = 5000
    inter_batch_delay_ms: int = 1000
    gas_budget: int = 100_000_000
    suppress_listing_errors: bool = True
    continue_on_error: bool = True


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)
    key_env_var: str = DEFAULT_KEY_ENV_VAR


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    endpoints = raw.get("rpc_endpoints")
    if endpoints is None:
        endpoints = [DEFAULT_RPC_URL]
    elif isinstance(endpoints, str):
        endpoints = [endpoints]
    return ChainConfig(
        rpc_endpoints=tuple(e for e in endpoints if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_merge(raw: dict[str, Any]) -> MergeConfig:
    defaults = MergeConfig()
    return MergeConfig(
        batch_size=int(raw.get("batch_size", defaults.batch_size)),
        page_limit=int(raw.get("page_limit", defaults.page_limit)),
        object_cap=int(raw.get("object_cap", defaults.object_cap)),
        inter_batch_delay_ms=int(
            raw.get("inter_batch_delay_ms", defaults.inter_batch_delay_ms)
        ),
        gas_budget=int(raw.get("gas_budget", defaults.gas_budget)),
        suppress_listing_errors=_as_bool(
            raw.get("suppress_listing_errors"), defaults.suppress_listing_errors
        ),
        continue_on_error=_as_bool(
            raw.get("continue_on_error"), defaults.continue_on_error
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file). A missing default
            file means built-in defaults; a missing explicit path is an error.
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if default_path.exists():
            config_path = default_path
        else:
            logger.info("No config.yaml found, using built-in defaults")

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain") or {}),
        merge=_build_merge(raw.get("merge") or {}),
        key_env_var=raw.get("key_env_var") or DEFAULT_KEY_ENV_VAR,
    )

    _validate(cfg)
    if config_path is not None:
        logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")

    merge = cfg.merge
    for name in ("batch_size", "page_limit", "object_cap", "gas_budget"):
        if getattr(merge, name) <= 0:
            raise ValueError(f"{name} must be positive, got {getattr(merge, name)}")
    if merge.inter_batch_delay_ms < 0:
        raise ValueError("inter_batch_delay_ms must not be negative")
    if not cfg.key_env_var:
        raise ValueError("key_env_var must name an environment variable")
