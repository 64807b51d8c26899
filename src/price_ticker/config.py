"""
Price ticker configuration management.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

MIN_REFRESH_SECONDS = 5


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to default when missing or malformed."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class TickerConfig:
    """Configuration for the price ticker bot."""

    # API token (required)
    discord_token: str = field(default_factory=lambda: os.getenv("DISCORD_TOKEN", ""))

    # Status endpoint
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))
    host: str = field(default_factory=lambda: os.getenv("STATUS_HOST", "0.0.0.0"))

    # Initial pool selection (changeable at runtime with !setpool)
    network: str = field(default_factory=lambda: os.getenv("TICKER_NETWORK", "bsc"))
    pool_address: str = field(
        default_factory=lambda: os.getenv(
            "TICKER_POOL_ADDRESS", "0xaead6bd31dd66eb3a6216aaf271d0e661585b0b1"
        )
    )
    tracked_side: str = field(default_factory=lambda: os.getenv("TICKER_TRACKED_SIDE", "base"))
    symbol: str = field(default_factory=lambda: os.getenv("TICKER_SYMBOL", "ASTER"))
    refresh_seconds: int = field(default_factory=lambda: _env_int("TICKER_REFRESH_SECONDS", 30))

    # Upstream providers
    geckoterminal_api: str = field(
        default_factory=lambda: os.getenv(
            "GECKOTERMINAL_API", "https://api.geckoterminal.com/api/v2"
        )
    )
    exchange_rate_api: str = field(
        default_factory=lambda: os.getenv(
            "EXCHANGE_RATE_API", "https://api.exchangerate-api.com/v4/latest/USD"
        )
    )
    http_timeout: float = field(default_factory=lambda: _env_float("HTTP_TIMEOUT_SECONDS", 10.0))

    log_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("LOG_DIR", str(Path.home() / "logs" / "price_ticker"))
        ).expanduser()
    )

    def __post_init__(self):
        """Normalize pool selection values."""
        self.tracked_side = "quote" if self.tracked_side.strip().lower() == "quote" else "base"
        self.symbol = self.symbol.strip().upper() or "TOKEN"
        self.geckoterminal_api = self.geckoterminal_api.rstrip("/")
        if self.refresh_seconds < MIN_REFRESH_SECONDS:
            self.refresh_seconds = MIN_REFRESH_SECONDS

    @property
    def refresh_interval_ms(self) -> int:
        return self.refresh_seconds * 1000

    def validate(self) -> tuple[bool, str]:
        """Validate ranges. The token is checked separately by validate_discord_token()."""
        if not (0 < self.port < 65536):
            return False, f"PORT out of range: {self.port}"
        if self.http_timeout <= 0:
            return False, "HTTP_TIMEOUT_SECONDS must be positive"
        return True, "Configuration valid"


def load_config() -> TickerConfig:
    """Load configuration from environment variables."""
    return TickerConfig()
