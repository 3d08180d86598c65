"""
Runtime configuration read from the environment (and a local .env file).

Every setting has a default so the service starts with no configuration at
all; invalid values fail fast with a ValueError naming the variable.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from market_pulse.application.services.update_scheduler import DEFAULT_INTERVALS
from market_pulse.domain.entities.market_data import AssetClass

DELIVERY_MODES = ("push", "pull")


def _int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _interval(env: Mapping[str, str], asset_class: AssetClass) -> float:
    name = f"{asset_class.value.upper()}_INTERVAL_SECONDS"
    raw = env.get(name, "").strip()
    if not raw:
        return DEFAULT_INTERVALS[asset_class]
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3001
    delivery_mode: str = "push"
    intervals: dict[AssetClass, float] = field(default_factory=lambda: dict(DEFAULT_INTERVALS))
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    random_seed: Optional[int] = None
    service_name: str = "Market Pulse API"

    def __post_init__(self) -> None:
        if self.delivery_mode not in DELIVERY_MODES:
            raise ValueError(
                f"DELIVERY_MODE must be one of {DELIVERY_MODES}, got {self.delivery_mode!r}"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"PORT must be between 1 and 65535, got {self.port}")

    @property
    def push(self) -> bool:
        return self.delivery_mode == "push"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to os.environ after load_dotenv())."""
        if env is None:
            load_dotenv()
            env = os.environ

        origins = tuple(
            origin.strip()
            for origin in env.get("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        )
        return cls(
            host=env.get("HOST", "0.0.0.0").strip() or "0.0.0.0",
            port=_int(env, "PORT", 3001),
            delivery_mode=env.get("DELIVERY_MODE", "push").strip().lower() or "push",
            intervals={
                asset_class: _interval(env, asset_class) for asset_class in DEFAULT_INTERVALS
            },
            cors_origins=origins or ("*",),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            random_seed=_int(env, "MARKET_RANDOM_SEED", None),
        )
