"""
Async HTTP client for the upstream price providers.

Two lookups per refresh cycle:
    1. GeckoTerminal pool attributes -> token price in USD
    2. exchangerate-api USD table    -> USD to PHP rate

Transport errors surface as aiohttp.ClientError / asyncio.TimeoutError,
unusable payloads as PriceFetchError. Nothing here retries.
"""

import logging
import math
from typing import Any, Optional

import aiohttp

logger = logging.getLogger(__name__)

TARGET_CURRENCY = "PHP"


class PriceFetchError(Exception):
    """Raised when an upstream response cannot be turned into a price."""


def parse_price(value: Any, label: str) -> float:
    """Parse a decimal string or number, rejecting missing and NaN values."""
    if value is None:
        raise PriceFetchError(f"{label} missing from response")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise PriceFetchError(f"{label} is not numeric: {value!r}")
    if math.isnan(price):
        raise PriceFetchError(f"{label} is not a number")
    return price


class PriceClient:
    """Thin wrapper around an aiohttp session for the two price lookups."""

    def __init__(
        self,
        geckoterminal_api: str,
        exchange_rate_api: str,
        timeout: float = 10.0,
    ):
        """
        Args:
            geckoterminal_api: Base URL of the GeckoTerminal v2 API
            exchange_rate_api: URL returning the USD rate table
            timeout: Total timeout in seconds for each request
        """
        self.geckoterminal_api = geckoterminal_api.rstrip("/")
        self.exchange_rate_api = exchange_rate_api
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def pool_url(self, network: str, pool_address: str) -> str:
        return f"{self.geckoterminal_api}/networks/{network}/pools/{pool_address}"

    async def _get_json(self, url: str) -> Any:
        await self.start()
        async with self._session.get(url) as response:
            response.raise_for_status()
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                # JSONDecodeError and UnicodeDecodeError, e.g. an HTML maintenance page
                raise PriceFetchError(f"Response from {url} is not JSON: {e}")

    async def fetch_pool_price_usd(self, network: str, pool_address: str, price_field: str) -> float:
        """
        Fetch the USD price of one side of a pool.

        Args:
            network: GeckoTerminal network id (e.g. "bsc")
            pool_address: Pool contract address
            price_field: "base_token_price_usd" or "quote_token_price_usd"

        Returns:
            The token price in USD
        """
        payload = await self._get_json(self.pool_url(network, pool_address))
        try:
            attributes = payload["data"]["attributes"]
            raw = attributes.get(price_field)
        except (KeyError, TypeError, AttributeError):
            raise PriceFetchError("Unexpected pool response shape")
        return parse_price(raw, price_field)

    async def fetch_usd_rate(self, currency: str = TARGET_CURRENCY) -> float:
        """Fetch how many units of `currency` one USD buys."""
        payload = await self._get_json(self.exchange_rate_api)
        try:
            raw = payload["rates"].get(currency)
        except (KeyError, TypeError, AttributeError):
            raise PriceFetchError("Unexpected exchange rate response shape")
        return parse_price(raw, f"USD/{currency} rate")
